"""CDK application entry point for the load-balanced EC2 infrastructure.

This module initializes and configures the AWS CDK application that
deploys the load-balanced EC2 stack into the configured region.
"""
import aws_cdk as cdk
from ec2lb._unpack_tags import tags_as_dict
from ec2lb.schema import Ec2LbStackConfig
from ec2lbinfra.ec2lb_stack import MyEc2Stack

config = Ec2LbStackConfig.from_settings()

app = cdk.App()

core_stack = MyEc2Stack(
    app,
    config.stack_name,
    config=config,
    env=cdk.Environment(region=config.region),
    tags=tags_as_dict({"Project": "ec2lbinfra"}, config.extra_tags),
)

app.synth()
