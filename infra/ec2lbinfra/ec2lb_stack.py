"""Module for defining the load-balanced EC2 infrastructure using AWS CDK.

This module contains the CDK stack definition for a public VPC spanning two
availability zones, an internet-facing Application Load Balancer, and one
web instance per zone registered in a single target group.

The load balancer DNS name is published to SSM Parameter Store under
/<stack-name>/LoadBalancerDnsName for consumers to read.
"""

from logging import getLogger
from typing import Optional

import aws_cdk as cdk
import aws_cdk.aws_ec2 as ec2
import aws_cdk.aws_elasticloadbalancingv2 as elbv2
import aws_cdk.aws_elasticloadbalancingv2_targets as elbv2_targets
import aws_cdk.aws_ssm as ssm
from constructs import Construct

from ec2lb.bootstrap import HTTP_PORT, node_http_responder_steps, render_commands
from ec2lb.endpoint import parameter_name
from ec2lb.schema import Ec2LbStackConfig

SSH_PORT = 22

logger = getLogger(__name__)


class MyEc2Stack(cdk.Stack):
    """CDK Stack for two web instances behind a public load balancer.

    Both instances accept SSH and HTTP from any IPv4 address.
    """

    def __init__(
        self,
        scope: Construct,
        id: str,
        config: Optional[Ec2LbStackConfig] = None,
        **kwargs,
    ) -> None:
        """Initialize the load-balanced EC2 stack.

        Args:
            scope: The parent construct.
            id: The construct ID.
            config: Stack configuration, read from the environment when omitted.
            **kwargs: Additional keyword arguments passed to the parent Stack.
        """
        super().__init__(scope, id, **kwargs)

        self.config = config or Ec2LbStackConfig.from_settings()

        # One public subnet per AZ
        self.vpc = ec2.Vpc(
            self,
            "MyVpc",
            ip_addresses=ec2.IpAddresses.cidr(self.config.vpc_cidr),
            max_azs=self.config.max_azs,
            nat_gateways=0,
            subnet_configuration=[
                ec2.SubnetConfiguration(
                    name="Public",
                    subnet_type=ec2.SubnetType.PUBLIC,
                    cidr_mask=self.config.subnet_cidr_mask,
                ),
            ],
        )

        subnet_1 = self.vpc.public_subnets[0]
        subnet_2 = self.vpc.public_subnets[1]

        self.load_balancer_security_group = ec2.SecurityGroup(
            self,
            "LoadBalancerSecurityGroup",
            vpc=self.vpc,
            description="Security group for the public load balancer",
            allow_all_outbound=True,
        )

        self.load_balancer = elbv2.ApplicationLoadBalancer(
            self,
            "MyLoadBalancer",
            vpc=self.vpc,
            internet_facing=True,
            vpc_subnets=ec2.SubnetSelection(subnets=[subnet_1, subnet_2]),
            security_group=self.load_balancer_security_group,
        )

        if self.config.key_pair_name:
            self.key_pair = ec2.KeyPair.from_key_pair_name(
                self, "KeyPair", self.config.key_pair_name
            )
        else:
            self.key_pair = None

        self.instances = [
            self.create_instance("MyInstance1", self.vpc, subnet_1),
            self.create_instance("MyInstance2", self.vpc, subnet_2),
        ]

        self.target_group = elbv2.ApplicationTargetGroup(
            self,
            "MyTargetGroup",
            port=HTTP_PORT,
            protocol=elbv2.ApplicationProtocol.HTTP,
            target_type=elbv2.TargetType.INSTANCE,
            vpc=self.vpc,
        )
        for instance in self.instances:
            self.target_group.add_target(elbv2_targets.InstanceTarget(instance))

        self.listener = self.load_balancer.add_listener(
            "Listener",
            port=HTTP_PORT,
            default_target_groups=[self.target_group],
        )

        self.dns_name_parameter = ssm.StringParameter(
            self,
            "LoadBalancerDnsName",
            parameter_name=parameter_name(self.stack_name),
            string_value=self.load_balancer.load_balancer_dns_name,
        )

        cdk.CfnOutput(
            self,
            "MyEc2LoadBalancerDnsName",
            value=self.load_balancer.load_balancer_dns_name,
            description="Public DNS name of the load balancer",
        )

    def create_instance(
        self, id: str, vpc: ec2.IVpc, subnet: ec2.ISubnet
    ) -> ec2.Instance:
        """Create one web instance placed in the given subnet.

        Args:
            id: The construct ID of the instance.
            vpc: The VPC the instance lives in.
            subnet: The only subnet the instance may be placed in.
        """
        logger.debug(f"Adding instance {id} ({self.config.instance_type})")

        instance = ec2.Instance(
            self,
            id,
            instance_type=ec2.InstanceType(self.config.instance_type),
            machine_image=self._machine_image(),
            vpc=vpc,
            vpc_subnets=ec2.SubnetSelection(subnets=[subnet]),
            key_pair=self.key_pair,
            user_data=ec2.UserData.for_linux(),
        )

        instance.connections.allow_from_any_ipv4(
            ec2.Port.tcp(SSH_PORT), "Allow SSH access from anywhere"
        )
        instance.connections.allow_from_any_ipv4(
            ec2.Port.tcp(HTTP_PORT), "Allow HTTP access from anywhere"
        )

        steps = node_http_responder_steps(
            setup_url=self.config.nodesource_setup_url,
            server_path=self.config.server_path,
            port=HTTP_PORT,
        )
        instance.user_data.add_commands(*render_commands(steps))

        return instance

    def _machine_image(self) -> ec2.IMachineImage:
        if self.config.machine_image == "amazon-linux-2023":
            return ec2.MachineImage.latest_amazon_linux2023()
        return ec2.MachineImage.latest_amazon_linux2()
