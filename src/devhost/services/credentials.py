"""Database credential extraction from site configuration files."""

import re
from pathlib import Path
from typing import Callable, Dict, Pattern

from devhost.errors import MalformedConfigurationError, UnknownProjectTypeError
from devhost.errors_catalog import actionable_error
from devhost.models import DatabaseCredentials, ProjectType

_QUOTED_VALUE = r"(?P<quote>['\"])(?P<value>.*?)(?P=quote)"


def _wp_define(constant: str) -> Pattern:
    return re.compile(
        rf"define\(\s*(?P<kq>['\"]){constant}(?P=kq)\s*,\s*{_QUOTED_VALUE}\s*\)"
    )


def _php_assignment(variable: str) -> Pattern:
    return re.compile(rf"\${variable}\s*=\s*{_QUOTED_VALUE}\s*;")


CONFIG_FILES: Dict[ProjectType, str] = {
    ProjectType.WORDPRESS: "wp-config.php",
    ProjectType.PORTAL: "config.php",
}

WORDPRESS_PATTERNS: Dict[str, Pattern] = {
    "username": _wp_define("DB_USER"),
    "password": _wp_define("DB_PASSWORD"),
    "host": _wp_define("DB_HOST"),
}

PORTAL_PATTERNS: Dict[str, Pattern] = {
    "username": _php_assignment(r"db_?user"),
    "password": _php_assignment(r"db_?pass(?:word)?"),
    "host": _php_assignment(r"db_?host"),
}


def _read_config(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise MalformedConfigurationError(
            actionable_error("config_file_unreadable", path=path, reason=exc)
        ) from exc


def _extract_single(text: str, pattern: Pattern, field: str, path: Path) -> str:
    matches = [match.group("value") for match in pattern.finditer(text)]
    if len(matches) != 1:
        raise MalformedConfigurationError(
            actionable_error("malformed_configuration", path=path, field=field, count=len(matches))
        )
    return matches[0]


def _extract_with(patterns: Dict[str, Pattern], path: Path) -> DatabaseCredentials:
    text = _read_config(path)
    return DatabaseCredentials(
        username=_extract_single(text, patterns["username"], "username", path),
        password=_extract_single(text, patterns["password"], "password", path),
        host=_extract_single(text, patterns["host"], "host", path),
    )


def extract_wordpress(document_root: Path) -> DatabaseCredentials:
    return _extract_with(WORDPRESS_PATTERNS, document_root / CONFIG_FILES[ProjectType.WORDPRESS])


def extract_portal(document_root: Path) -> DatabaseCredentials:
    return _extract_with(PORTAL_PATTERNS, document_root / CONFIG_FILES[ProjectType.PORTAL])


EXTRACTORS: Dict[ProjectType, Callable[[Path], DatabaseCredentials]] = {
    ProjectType.WORDPRESS: extract_wordpress,
    ProjectType.PORTAL: extract_portal,
}


def extract(project_type: ProjectType, document_root: Path) -> DatabaseCredentials:
    """Recover the database login of a detected project.

    Every credential must be declared exactly once; there are no defaults.
    """
    extractor = EXTRACTORS.get(project_type)
    if extractor is None:
        raise UnknownProjectTypeError(actionable_error("unknown_project_type", path=document_root))
    return extractor(Path(document_root))
