"""Shared domain models for devhost."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Tuple


class ProjectType(Enum):
    UNKNOWN = "unknown"
    WORDPRESS = "wordpress"
    PORTAL = "portal"


@dataclass(frozen=True)
class DatabaseCredentials:
    """Database login recovered from a site configuration file."""

    username: str
    password: str = field(repr=False)
    host: str


@dataclass(frozen=True)
class DetectionResult:
    project_root: Path
    document_root: Path
    project_type: ProjectType


@dataclass(frozen=True)
class HostSettings:
    """System paths and commands the bootstrap sequence operates on."""

    vhosts_file: str
    hosts_file: str
    web_server_process: str
    web_server_start_command: List[str]
    web_server_restart_command: List[str]
    dns_flush_commands: Tuple[List[str], ...]
    database_start_command: List[str]
    database_start_success_marker: str
    database_client: str
    database_prefix: str
    browser_command: List[str]
    use_sudo: bool = True
