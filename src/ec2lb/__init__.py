from ec2lb.bootstrap import BootstrapStep, node_http_responder_steps, render_commands
from ec2lb.endpoint import (
    find_load_balancer_dns_name,
    parameter_name,
    wait_for_load_balancer_dns_name,
)
from ec2lb.schema import Ec2LbStackConfig

__all__ = [
    "BootstrapStep",
    "Ec2LbStackConfig",
    "find_load_balancer_dns_name",
    "node_http_responder_steps",
    "parameter_name",
    "render_commands",
    "wait_for_load_balancer_dns_name",
]
