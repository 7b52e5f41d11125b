"""Configuration loader for devhost."""

import shlex
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from devhost.constants import (
    DATABASE_START_SUCCESS_MARKER,
    DEFAULT_DATABASE_PREFIX,
    PLATFORM_DEFAULTS,
)
from devhost.errors import DevhostError
from devhost.models import HostSettings


class ConfigLoader:
    """Loads YAML configuration files for CLI defaults and system settings."""

    SUPPORTED_KEYS = {
        "max_depth",
        "document_roots",
        "vhosts_file",
        "hosts_file",
        "web_server_process",
        "web_server_start_command",
        "web_server_restart_command",
        "dns_flush_commands",
        "database_start_command",
        "database_start_success_marker",
        "database_client",
        "database_prefix",
        "browser_command",
        "use_sudo",
        "verbose",
        "log_file",
        "dry_run",
        "packages_dir",
        "command_timeout",
    }

    BOOL_KEYS = {"use_sudo", "verbose", "dry_run"}

    STRING_KEYS = {
        "vhosts_file",
        "hosts_file",
        "web_server_process",
        "database_start_success_marker",
        "database_client",
        "database_prefix",
        "log_file",
        "packages_dir",
    }

    COMMAND_KEYS = {
        "web_server_start_command",
        "web_server_restart_command",
        "database_start_command",
        "browser_command",
    }

    def load(self, config_path: Optional[str]) -> Dict[str, Any]:
        if not config_path:
            return {}

        path = Path(config_path)
        if not path.exists():
            raise DevhostError(f"Config file not found: {config_path}")

        try:
            parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (yaml.YAMLError, OSError) as exc:
            raise DevhostError(f"Invalid config file '{config_path}': {exc}") from exc

        if parsed is None:
            return {}
        if not isinstance(parsed, dict):
            raise DevhostError("Config file must contain a YAML mapping at the root.")

        unknown = sorted(set(parsed.keys()) - self.SUPPORTED_KEYS)
        if unknown:
            unknown_list = ", ".join(unknown)
            raise DevhostError(f"Unknown configuration keys: {unknown_list}")

        if "max_depth" in parsed:
            max_depth = parsed["max_depth"]
            if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 1:
                raise DevhostError("Config key 'max_depth' must be a positive integer.")

        if "command_timeout" in parsed:
            timeout = parsed["command_timeout"]
            if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
                raise DevhostError(
                    "Config key 'command_timeout' must be a positive number of seconds."
                )

        for key in sorted(self.BOOL_KEYS & set(parsed)):
            if not isinstance(parsed[key], bool):
                raise DevhostError(f"Config key '{key}' must be true or false.")

        for key in sorted(self.STRING_KEYS & set(parsed)):
            value = parsed[key]
            if not isinstance(value, str) or (not value and key != "database_prefix"):
                raise DevhostError(f"Config key '{key}' must be a non-empty string.")

        if "document_roots" in parsed:
            roots = parsed["document_roots"]
            if isinstance(roots, str):
                parsed["document_roots"] = [roots]
            elif not isinstance(roots, list) or not all(isinstance(r, str) for r in roots):
                raise DevhostError("Config key 'document_roots' must be a list of directory names.")

        for key in self.COMMAND_KEYS & set(parsed):
            parsed[key] = self._as_command(key, parsed[key])
        if "dns_flush_commands" in parsed:
            commands = parsed["dns_flush_commands"]
            if not isinstance(commands, list):
                raise DevhostError("Config key 'dns_flush_commands' must be a list of commands.")
            parsed["dns_flush_commands"] = [
                self._as_command("dns_flush_commands", command) for command in commands
            ]

        return parsed

    def build_host_settings(
        self,
        config: Dict[str, Any],
        platform: Optional[str] = None,
    ) -> HostSettings:
        platform = platform or sys.platform
        defaults = PLATFORM_DEFAULTS["darwin" if platform == "darwin" else "linux"]

        def pick(key, default=None):
            if key in config:
                return config[key]
            return defaults.get(key, default)

        return HostSettings(
            vhosts_file=str(pick("vhosts_file")),
            hosts_file=str(pick("hosts_file")),
            web_server_process=str(pick("web_server_process")),
            web_server_start_command=list(pick("web_server_start_command")),
            web_server_restart_command=list(pick("web_server_restart_command")),
            dns_flush_commands=tuple(list(cmd) for cmd in pick("dns_flush_commands")),
            database_start_command=list(pick("database_start_command")),
            database_start_success_marker=str(
                pick("database_start_success_marker", DATABASE_START_SUCCESS_MARKER)
            ),
            database_client=str(pick("database_client")),
            database_prefix=str(pick("database_prefix", DEFAULT_DATABASE_PREFIX)),
            browser_command=list(pick("browser_command")),
            use_sudo=bool(pick("use_sudo", True)),
        )

    @staticmethod
    def _as_command(key: str, value: Any) -> List[str]:
        if isinstance(value, str):
            command = shlex.split(value)
        elif isinstance(value, list) and all(isinstance(part, str) for part in value):
            command = list(value)
        else:
            raise DevhostError(f"Config key '{key}' must be a command string or list of strings.")

        if not command:
            raise DevhostError(f"Config key '{key}' must not be empty.")
        return command
