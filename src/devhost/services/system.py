"""Operating system side effects used by the bootstrap sequence."""

import os
import subprocess
import sys
from pathlib import Path
from typing import Callable, List, Optional

from devhost.models import DatabaseCredentials, HostSettings


class SystemService:
    """Encapsulates every command and file mutation devhost performs.

    The bootstrap sequence only talks to the system through this class, so
    tests can swap it for an in-memory fake.
    """

    def __init__(self, settings: HostSettings, run_cmd: Callable, logger):
        self.settings = settings
        self.run_cmd = run_cmd
        self.logger = logger

    def _privileged(self, cmd: List[str]) -> List[str]:
        if not self.settings.use_sudo or sys.platform == "win32" or os.geteuid() == 0:
            return list(cmd)
        return ["sudo"] + list(cmd)

    def read_text(self, path: str) -> str:
        try:
            return Path(path).read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            return ""

    def append_privileged(self, path: str, text: str):
        self.logger.debug("Appending %s bytes to %s", len(text), path)
        self.run_cmd(
            self._privileged(["tee", "-a", path]),
            check=True,
            capture_output=True,
            input_text=text,
        )

    def restart_web_server(self):
        self.run_cmd(self._privileged(self.settings.web_server_restart_command), check=True)

    def start_web_server(self):
        self.run_cmd(self._privileged(self.settings.web_server_start_command), check=True)

    def flush_dns_cache(self):
        for command in self.settings.dns_flush_commands:
            self.run_cmd(self._privileged(command), check=True, capture_output=True)

    def count_processes(self, name: str) -> int:
        result = self.run_cmd(["ps", "-A", "-o", "comm="], check=True, capture_output=True)
        return sum(
            1
            for line in (result.stdout or "").splitlines()
            if line.strip() and os.path.basename(line.strip()) == name
        )

    def start_database(self) -> subprocess.CompletedProcess:
        return self.run_cmd(self.settings.database_start_command, check=False, capture_output=True)

    def database_exists(self, name: str, credentials: DatabaseCredentials) -> Optional[bool]:
        """Return whether the database is listed, or None when the query failed."""
        escaped = name.replace("\\", "\\\\").replace("_", "\\_").replace("'", "\\'")
        result = self.run_cmd(
            self._client_command(credentials, f"SHOW DATABASES LIKE '{escaped}'"),
            check=False,
            capture_output=True,
            env=self._client_env(credentials),
        )
        if result.returncode != 0:
            return None
        return name in (result.stdout or "").split()

    def create_database(self, name: str, credentials: DatabaseCredentials):
        quoted = name.replace("`", "``")
        self.run_cmd(
            self._client_command(credentials, f"CREATE DATABASE `{quoted}`"),
            check=True,
            capture_output=True,
            env=self._client_env(credentials),
        )

    def open_url(self, url: str):
        self.run_cmd(self.settings.browser_command + [url], check=True)

    def _client_command(self, credentials: DatabaseCredentials, sql: str) -> List[str]:
        cmd = [self.settings.database_client, "-u", credentials.username]
        host, _, target = credentials.host.partition(":")
        cmd += ["-h", host or "localhost"]
        if target.isdigit():
            cmd += ["-P", target]
        elif target:
            cmd += ["-S", target]
        return cmd + ["-N", "-B", "-e", sql]

    @staticmethod
    def _client_env(credentials: DatabaseCredentials):
        if not credentials.password:
            return None
        return {"MYSQL_PWD": credentials.password}
