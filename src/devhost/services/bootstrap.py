"""Host bootstrap sequence: vhost, hosts entry, servers, database, browser."""

import re
from pathlib import Path
from typing import List

from devhost.constants import LOOPBACK_ADDRESS, WEB_SERVER_PROCESS_BASELINE
from devhost.errors import CommandError, DevhostError
from devhost.errors_catalog import actionable_error
from devhost.models import DatabaseCredentials, HostSettings

VHOST_TEMPLATE = """
<VirtualHost *:80>
    DocumentRoot "{document_root}"
    ServerName {host_name}
    <Directory "{document_root}">
        AllowOverride All
        Require all granted
    </Directory>
</VirtualHost>
"""


def derive_host_name(project_root: Path) -> str:
    raw_name = Path(project_root).name
    host_name = re.sub(r"[^a-z0-9-]+", "-", raw_name.strip().lower()).strip("-")
    if not host_name:
        raise DevhostError(actionable_error("invalid_host_name", name=raw_name))
    return host_name


class BootstrapService:
    """Makes a local project reachable at ``http://<host_name>/``.

    Steps run in a fixed order and each one is skipped when its effect is
    already present, so running twice leaves the system unchanged.
    """

    def __init__(self, system, settings: HostSettings, logger, console):
        self.system = system
        self.settings = settings
        self.logger = logger
        self.console = console

    def database_name(self, host_name: str) -> str:
        return f"{self.settings.database_prefix}{host_name}"

    def bootstrap(self, host_name: str, credentials: DatabaseCredentials, document_root: Path):
        self.register_virtual_host(host_name, Path(document_root))
        self.register_hostname(host_name)
        self.start_web_server()
        self.start_database_server()
        self.create_database(host_name, credentials)
        self.open_browser(host_name)

    def plan(self, host_name: str, credentials: DatabaseCredentials, document_root: Path) -> List[str]:
        return [
            f"Register virtual host {host_name} -> {document_root} in {self.settings.vhosts_file}",
            f"Register {LOOPBACK_ADDRESS} {host_name} in {self.settings.hosts_file}",
            f"Start {self.settings.web_server_process} if it is not running",
            f"Start database server with: {' '.join(self.settings.database_start_command)}",
            f"Create database {self.database_name(host_name)} as "
            f"{credentials.username}@{credentials.host} if missing",
            f"Open http://{host_name}/",
        ]

    def register_virtual_host(self, host_name: str, document_root: Path):
        self.console.print("Adding virtual host...", end=" ")
        existing = self.system.read_text(self.settings.vhosts_file)
        declaration = re.compile(
            rf"^[ \t]*ServerName[ \t]+{re.escape(host_name)}[ \t]*$", re.MULTILINE
        )
        if declaration.search(existing):
            self.console.print("[dim]already present[/dim]")
            self.logger.debug("Virtual host %s already in %s", host_name, self.settings.vhosts_file)
            return

        block = VHOST_TEMPLATE.format(document_root=document_root, host_name=host_name)
        self.system.append_privileged(self.settings.vhosts_file, block)
        self.system.restart_web_server()
        self.console.print("[green]OK[/green]")
        self.logger.info("Added virtual host %s -> %s", host_name, document_root)

    def register_hostname(self, host_name: str):
        self.console.print("Adding host name...", end=" ")
        existing = self.system.read_text(self.settings.hosts_file)
        entry = re.compile(
            rf"^[ \t]*{re.escape(LOOPBACK_ADDRESS)}(?:[ \t]+[^\s#]\S*)*?"
            rf"[ \t]+{re.escape(host_name)}(?=[ \t#]|$)",
            re.MULTILINE,
        )
        if entry.search(existing):
            self.console.print("[dim]already present[/dim]")
            return

        prefix = "" if not existing or existing.endswith("\n") else "\n"
        self.system.append_privileged(
            self.settings.hosts_file, f"{prefix}{LOOPBACK_ADDRESS} {host_name}\n"
        )
        self.system.flush_dns_cache()
        self.console.print("[green]OK[/green]")
        self.logger.info("Added %s %s to %s", LOOPBACK_ADDRESS, host_name, self.settings.hosts_file)

    def start_web_server(self):
        self.console.print("Starting web server...", end=" ")
        running = self.system.count_processes(self.settings.web_server_process)
        if running > WEB_SERVER_PROCESS_BASELINE:
            self.console.print("[dim]already running[/dim]")
            self.logger.debug("%s processes running: %s", self.settings.web_server_process, running)
            return

        self.system.start_web_server()
        self.console.print("[green]OK[/green]")

    def start_database_server(self):
        self.console.print("Starting database server...", end=" ")
        try:
            result = self.system.start_database()
        except CommandError as exc:
            self._report_database_start(str(exc))
            return

        output = "\n".join(part for part in (result.stdout, result.stderr) if part).strip()
        if self.settings.database_start_success_marker in output:
            self.console.print("[green]OK[/green]")
            return
        self._report_database_start(output)

    def _report_database_start(self, output: str):
        self.console.print("[yellow]not confirmed[/yellow]")
        self.console.print(output, markup=False, highlight=False)
        self.logger.warning("Database server start not confirmed: %s", output or "<no output>")

    def create_database(self, host_name: str, credentials: DatabaseCredentials):
        name = self.database_name(host_name)
        self.console.print(f"Creating database {name}...", end=" ")
        exists = self.system.database_exists(name, credentials)
        if exists:
            self.console.print("[dim]already exists[/dim]")
            return

        if exists is None:
            self.logger.warning(
                "Could not query databases as %s@%s; assuming %s is missing.",
                credentials.username,
                credentials.host,
                name,
            )
        self.system.create_database(name, credentials)
        self.console.print("[green]OK[/green]")
        self.logger.info("Created database %s", name)

    def open_browser(self, host_name: str):
        url = f"http://{host_name}/"
        self.console.print(f"Opening {url}...", end=" ")
        self.system.open_url(url)
        self.console.print("[green]OK[/green]")
