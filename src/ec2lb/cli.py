from rich import box, print
from rich.table import Table

from .endpoint import find_load_balancer_dns_name, parameter_name
from .schema import Ec2LbStackConfig


def main() -> None:
    """Print the published load balancer endpoint of the configured stack."""
    config = Ec2LbStackConfig.from_settings()
    try:
        dns_name = find_load_balancer_dns_name(config.stack_name, config.region)
    except ValueError as e:
        print(f"\n[red]{e}. Has {config.stack_name} been deployed?[/red]\n")
        raise SystemExit(1)

    table = Table(
        box=box.SQUARE,
        show_lines=False,
        title_style="bold",
        title_justify="left",
    )
    table.add_column("Parameter")
    table.add_column("Value")
    table.add_row(parameter_name(config.stack_name), dns_name)
    table.add_row("URL", f"http://{dns_name}/")
    print(table)


if __name__ == "__main__":
    main()
