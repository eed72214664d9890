"""
Schema definitions for the load-balanced EC2 stack.

This module provides the configuration classes used when synthesizing the
stack. Every literal the stack needs (region, key pair, machine image
generation, address plan) is a field here with a documented default.
"""

import os
from typing import Literal, Optional, Tuple

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

from ._unpack_tags import unpack_tags

env_prefix = "EC2LB_"

DEFAULT_REGION = "us-east-1"
DEFAULT_NODESOURCE_SETUP_URL = "https://rpm.nodesource.com/setup_14.x"

MachineImageName = Literal["amazon-linux-2", "amazon-linux-2023"]


class _Ec2LbSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", extra="ignore", env_prefix=env_prefix
    )
    stack_name: Optional[str] = None
    region: Optional[str] = None
    key_pair_name: Optional[str] = None
    vpc_cidr: Optional[str] = None
    max_azs: Optional[int] = None
    subnet_cidr_mask: Optional[int] = None
    instance_type: Optional[str] = None
    machine_image: Optional[MachineImageName] = None
    nodesource_setup_url: Optional[str] = None
    server_path: Optional[str] = None
    extra_tags_str: Optional[str] = None  # in the format "key1=value1;key2=value2"


class Ec2LbStackConfig(BaseModel, frozen=True):
    """
    Configuration for the load-balanced EC2 stack.

    Attributes:
        stack_name: Stack identity, also the namespace of the published
            parameter (defaults to MyEc2Stack)
        region: AWS region to deploy into (defaults to us-east-1)
        key_pair_name: Name of an existing EC2 key pair for SSH access
            (optional, instances are launched without a key pair otherwise)
        vpc_cidr: Address block of the VPC (defaults to 10.0.0.0/16)
        max_azs: Number of availability zones, one public subnet each
            (defaults to 2)
        subnet_cidr_mask: Prefix length of each public subnet (defaults to 24)
        instance_type: EC2 instance type (defaults to t3.micro)
        machine_image: Amazon Linux generation (defaults to amazon-linux-2)
        nodesource_setup_url: NodeSource repository setup script run at boot
        server_path: Where the HTTP responder script is written on the instance
        extra_tags: tuple of 2-tuples of additional stack tags
    """

    stack_name: str = "MyEc2Stack"
    region: str = DEFAULT_REGION
    key_pair_name: Optional[str] = None
    vpc_cidr: str = "10.0.0.0/16"
    max_azs: int = 2
    subnet_cidr_mask: int = 24
    instance_type: str = "t3.micro"
    machine_image: MachineImageName = "amazon-linux-2"
    nodesource_setup_url: str = DEFAULT_NODESOURCE_SETUP_URL
    server_path: str = "/home/ec2-user/server.js"
    extra_tags: Tuple[Tuple[str, str], ...] = ()

    @classmethod
    def from_settings(cls, **kwargs):
        """Create an instance from environment settings with optional overrides."""
        settings = _Ec2LbSettings()

        params = settings.model_dump(exclude={"extra_tags_str"}, exclude_none=True)
        extra_tags = unpack_tags(settings.extra_tags_str)
        if extra_tags:
            params["extra_tags"] = extra_tags

        # Override with any provided kwargs
        params.update(kwargs)

        if params.get("region") is None:
            params["region"] = os.getenv("AWS_REGION") or DEFAULT_REGION

        return cls(**params)
