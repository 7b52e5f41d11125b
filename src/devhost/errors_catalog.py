"""Actionable error catalog for devhost."""

from typing import Dict

_ERROR_MESSAGES: Dict[str, Dict[str, str]] = {
    "project_root_not_found": {
        "what": "No project root found within {max_depth} directories of {start}.",
        "next": "Run devhost inside a git checkout or raise `max_depth` in the config file.",
    },
    "unknown_project_type": {
        "what": "Unknown project type in {path}.",
        "next": "Run devhost from a WordPress or portal (api.php, dl.php, i.php) project.",
    },
    "config_file_unreadable": {
        "what": "Could not read configuration file {path}: {reason}",
        "next": "Check that the file exists and is readable by the current user.",
    },
    "malformed_configuration": {
        "what": "Malformed configuration in {path}: expected exactly one {field} entry, found {count}.",
        "next": "Fix the {field} declaration in {path} and retry.",
    },
    "invalid_host_name": {
        "what": "Cannot derive a host name from directory '{name}'.",
        "next": "Rename the project directory using letters, digits or hyphens.",
    },
    "packages_dir_not_found": {
        "what": "Packages directory not found: {path}",
        "next": "Install dependencies first or pass `--path` to point at the packages directory.",
    },
}


def actionable_error(code: str, **kwargs) -> str:
    if code not in _ERROR_MESSAGES:
        raise KeyError(f"Unknown error catalog key: {code}")

    template = _ERROR_MESSAGES[code]
    what = template["what"].format(**kwargs)
    next_step = template["next"].format(**kwargs)
    return f"{what} Suggested action: {next_step}"
