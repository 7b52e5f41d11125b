import logging
import os

import click
from rich.logging import RichHandler

from .constants import DEFAULT_CONFIG_FILE, DEFAULT_PACKAGES_DIR
from .core import DevHost
from .errors import DevhostError
from .services.config_loader import ConfigLoader
from .services.package_scanner import PackageScanner


def _resolve_option(cli_value, config, key, default=None):
    if cli_value is not None:
        return cli_value
    if key in config:
        return config[key]
    return default


def _load_config(config):
    resolved_config = config
    if resolved_config is None:
        default_config_path = os.path.join(os.getcwd(), DEFAULT_CONFIG_FILE)
        if os.path.exists(default_config_path):
            resolved_config = default_config_path

    try:
        return ConfigLoader().load(resolved_config)
    except DevhostError as exc:
        raise click.ClickException(str(exc)) from exc


def _configure_logging(verbose, log_file):
    logger = logging.getLogger("devhost")
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
        logger.addHandler(file_handler)
    return logger


logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True, show_level=False, show_path=False)],
)

config_option = click.option(
    "--config",
    required=False,
    type=click.Path(),
    help=f"Path to a YAML configuration file. Defaults to {DEFAULT_CONFIG_FILE} if present.",
)
verbose_option = click.option("--verbose", is_flag=True, default=None, help="Enable verbose logging")
log_file_option = click.option("--log-file", type=click.Path(), help="Path to log file")


@click.command()
@config_option
@verbose_option
@log_file_option
@click.option(
    "--dry-run",
    is_flag=True,
    default=None,
    help="Detect the project and print the planned actions without changing the system.",
)
def main(config, verbose, log_file, dry_run):
    """Serve the web project in the current directory at http://<project>/."""
    config_values = _load_config(config)

    verbose = bool(_resolve_option(verbose, config_values, "verbose", default=False))
    log_file = _resolve_option(log_file, config_values, "log_file")
    dry_run = bool(_resolve_option(dry_run, config_values, "dry_run", default=False))
    _configure_logging(verbose, log_file)

    try:
        devhost = DevHost(config=config_values, dry_run=dry_run)
    except DevhostError as exc:
        raise click.ClickException(str(exc)) from exc

    raise SystemExit(devhost.run())


@click.command()
@config_option
@verbose_option
@log_file_option
@click.option(
    "--path",
    "packages_dir",
    required=False,
    type=click.Path(),
    help=f"Dependency directory to scan (default: {DEFAULT_PACKAGES_DIR}).",
)
def mains(config, verbose, log_file, packages_dir):
    """Print `name: main` for every installed package that declares a main entry."""
    config_values = _load_config(config)

    verbose = bool(_resolve_option(verbose, config_values, "verbose", default=False))
    log_file = _resolve_option(log_file, config_values, "log_file")
    packages_dir = _resolve_option(
        packages_dir, config_values, "packages_dir", default=DEFAULT_PACKAGES_DIR
    )
    logger = _configure_logging(verbose, log_file)

    try:
        entries = PackageScanner(logger=logger).scan(packages_dir)
    except DevhostError as exc:
        raise click.ClickException(str(exc)) from exc

    for name, main_entry in entries:
        click.echo(f"{name}: {main_entry}")


if __name__ == "__main__":
    main()
