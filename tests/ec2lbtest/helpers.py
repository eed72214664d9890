import aws_cdk as cdk
import boto3
from aws_cdk.assertions import Template
from botocore.exceptions import BotoCoreError, ClientError

from ec2lb.schema import Ec2LbStackConfig
from ec2lbinfra.ec2lb_stack import MyEc2Stack


def has_aws_creds():
    try:
        boto3.client("sts").get_caller_identity()
        return True
    except (BotoCoreError, ClientError):
        return False


def synth_template(config: Ec2LbStackConfig, stack_id: str = "MyEc2Stack") -> Template:
    app = cdk.App()
    stack = MyEc2Stack(
        app,
        stack_id,
        config=config,
        env=cdk.Environment(region=config.region),
    )
    return Template.from_stack(stack)
