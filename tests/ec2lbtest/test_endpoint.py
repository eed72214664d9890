from unittest import mock

import pytest
from tenacity import wait_none

from ec2lb.cli import main
from ec2lb.endpoint import (
    find_load_balancer_dns_name,
    parameter_name,
    wait_for_load_balancer_dns_name,
)

from .helpers import has_aws_creds


def _ssm_client(parameters: list[dict]) -> mock.MagicMock:
    client = mock.MagicMock()
    client.get_parameters.return_value = {"Parameters": parameters}
    return client


def test_parameter_name():
    assert parameter_name("MyEc2Stack") == "/MyEc2Stack/LoadBalancerDnsName"


def test_find_load_balancer_dns_name():
    client = _ssm_client(
        [{"Name": "/MyEc2Stack/LoadBalancerDnsName", "Value": "lb-1.elb.amazonaws.com"}]
    )
    with mock.patch("ec2lb.endpoint.boto3.client", return_value=client) as factory:
        assert (
            find_load_balancer_dns_name("MyEc2Stack", "us-east-1")
            == "lb-1.elb.amazonaws.com"
        )
    factory.assert_called_once_with("ssm", region_name="us-east-1")
    client.get_parameters.assert_called_once_with(
        Names=["/MyEc2Stack/LoadBalancerDnsName"]
    )


def test_find_load_balancer_dns_name_missing():
    with mock.patch("ec2lb.endpoint.boto3.client", return_value=_ssm_client([])):
        with pytest.raises(ValueError, match="/MyEc2Stack/LoadBalancerDnsName"):
            find_load_balancer_dns_name("MyEc2Stack", "us-east-1")


def test_cli_prints_endpoint(capsys, monkeypatch):
    monkeypatch.setenv("EC2LB_REGION", "us-east-1")
    with mock.patch(
        "ec2lb.cli.find_load_balancer_dns_name",
        return_value="lb-1.elb.amazonaws.com",
    ):
        main()
    out = capsys.readouterr().out
    assert "lb-1.elb.amazonaws.com" in out


def test_cli_missing_parameter_exits(monkeypatch):
    monkeypatch.setenv("EC2LB_REGION", "us-east-1")
    with mock.patch(
        "ec2lb.cli.find_load_balancer_dns_name",
        side_effect=ValueError("Could not find it"),
    ):
        with pytest.raises(SystemExit):
            main()


@pytest.mark.skipif(not has_aws_creds(), reason="No AWS credentials found")
def test_find_missing_stack_live():
    with pytest.raises(ValueError):
        find_load_balancer_dns_name("Ec2LbNoSuchStack", "us-east-1")


def test_wait_for_load_balancer_dns_name_retries_until_published():
    client = mock.MagicMock()
    client.get_parameters.side_effect = [
        {"Parameters": []},
        {"Parameters": [{"Value": "lb-1.elb.amazonaws.com"}]},
    ]
    waiter = wait_for_load_balancer_dns_name.retry_with(wait=wait_none())
    with mock.patch("ec2lb.endpoint.boto3.client", return_value=client):
        assert waiter("MyEc2Stack", "us-east-1") == "lb-1.elb.amazonaws.com"
    assert client.get_parameters.call_count == 2
