"""Boot-time provisioning steps for the web instances.

The user data of each instance is an ordered list of discrete steps rather
than one opaque script, so every step can be checked on its own.
"""

from typing import Iterable, List, Tuple

from pydantic import BaseModel

from .schema import DEFAULT_NODESOURCE_SETUP_URL

HTTP_PORT = 80

SERVER_SCRIPT_TEMPLATE = """const http = require('http');
const server = http.createServer((req, res) => {{
  res.writeHead(200, {{'Content-Type': 'text/plain'}});
  const ip = req.connection.remoteAddress;
  res.end(`Hello, your IP address is: ${{ip}}`);
}});
server.listen({port}, '0.0.0.0', () => {{
  console.log('Server running at http://0.0.0.0:{port}/');
}});"""


class BootstrapStep(BaseModel, frozen=True):
    """A single shell command run once at first boot."""

    name: str
    command: str


def server_script(port: int = HTTP_PORT) -> str:
    return SERVER_SCRIPT_TEMPLATE.format(port=port)


def node_http_responder_steps(
    setup_url: str = DEFAULT_NODESOURCE_SETUP_URL,
    server_path: str = "/home/ec2-user/server.js",
    port: int = HTTP_PORT,
) -> Tuple[BootstrapStep, ...]:
    """Steps that install Node.js and start a minimal HTTP responder.

    Args:
        setup_url: NodeSource setup script that registers the yum repository.
        server_path: File the responder script is written to.
        port: Port the responder listens on.
    """
    # quoted heredoc delimiter, so the shell leaves ${ip} alone
    write_server = f"cat > {server_path} <<'EOF'\n{server_script(port)}\nEOF"
    return (
        BootstrapStep(name="install-curl", command="yum install -y curl"),
        BootstrapStep(
            name="add-nodesource-repo",
            command=f"curl --silent --location {setup_url} | sudo bash -",
        ),
        BootstrapStep(name="install-nodejs", command="yum install -y nodejs"),
        BootstrapStep(name="write-server", command=write_server),
        BootstrapStep(name="start-server", command=f"node {server_path} &"),
    )


def render_commands(steps: Iterable[BootstrapStep]) -> List[str]:
    return [step.command for step in steps]
