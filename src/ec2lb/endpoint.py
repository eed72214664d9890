"""Read back the load balancer DNS name published by the stack."""

from logging import getLogger

import boto3
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_fixed

logger = getLogger(__name__)


def parameter_name(stack_name: str) -> str:
    return f"/{stack_name}/LoadBalancerDnsName"


def find_load_balancer_dns_name(stack_name: str, region: str) -> str:
    ssm_client = boto3.client("ssm", region_name=region)

    name = parameter_name(stack_name)
    logger.debug(f"Looking up {name} in {region}")
    response = ssm_client.get_parameters(Names=[name])

    if not response["Parameters"]:
        raise ValueError(f"Could not find {name} in SSM Parameter Store")

    return response["Parameters"][0]["Value"]


@retry(
    stop=stop_after_attempt(20),
    wait=wait_fixed(30),
    retry=retry_if_exception_type(ValueError),
    reraise=True,
)
def wait_for_load_balancer_dns_name(stack_name: str, region: str) -> str:
    """Like find_load_balancer_dns_name, but waits for a deployment in progress."""
    return find_load_balancer_dns_name(stack_name, region)
