import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.console import Console

from .constants import DEFAULT_DOCUMENT_ROOTS, DEFAULT_MAX_DEPTH
from .errors import DevhostError, UnknownProjectTypeError
from .errors_catalog import actionable_error
from .models import ProjectType
from .services import credentials as credentials_service
from .services.bootstrap import BootstrapService, derive_host_name
from .services.command_runner import CommandRunner
from .services.config_loader import ConfigLoader
from .services.detection import ProjectDetector
from .services.system import SystemService

console = Console()
logger = logging.getLogger("devhost")


class DevHost:
    """Detects the project in the working tree and serves it locally."""

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        start_dir: Optional[str] = None,
        dry_run: bool = False,
        system_service=None,
    ):
        self.config = config or {}
        self.start_dir = Path(start_dir or os.getcwd())
        self.dry_run = dry_run

        self.settings = ConfigLoader().build_host_settings(self.config)
        self.command_runner = CommandRunner(
            logger=logger,
            default_timeout=self.config.get("command_timeout"),
        )
        self.detector = ProjectDetector(
            logger=logger,
            max_depth=self.config.get("max_depth", DEFAULT_MAX_DEPTH),
            document_roots=self.config.get("document_roots", DEFAULT_DOCUMENT_ROOTS),
        )
        self.system_service = system_service or SystemService(
            settings=self.settings,
            run_cmd=self._run_cmd,
            logger=logger,
        )
        self.bootstrap_service = BootstrapService(
            system=self.system_service,
            settings=self.settings,
            logger=logger,
            console=console,
        )

    def _run_cmd(self, cmd: List[str], check: bool = True, capture_output: bool = False, **kwargs):
        return self.command_runner.run(cmd, check=check, capture_output=capture_output, **kwargs)

    def run(self) -> int:
        try:
            detection = self.detector.detect(self.start_dir)
            if detection.project_type is ProjectType.UNKNOWN:
                raise UnknownProjectTypeError(
                    actionable_error("unknown_project_type", path=detection.document_root)
                )

            console.print(f"[bold blue]Project type: {detection.project_type.value}[/bold blue]")
            creds = credentials_service.extract(detection.project_type, detection.document_root)
            host_name = derive_host_name(detection.project_root)
            logger.info(
                "Serving %s as http://%s/ with database user %s@%s",
                detection.document_root,
                host_name,
                creds.username,
                creds.host,
            )

            if self.dry_run:
                console.print("[bold]Dry run. Planned actions:[/bold]")
                for index, action in enumerate(
                    self.bootstrap_service.plan(host_name, creds, detection.document_root),
                    start=1,
                ):
                    console.print(f"  {index}. {action}", markup=False)
                return 0

            self.bootstrap_service.bootstrap(host_name, creds, detection.document_root)
            console.print(f"[green]Project available at http://{host_name}/[/green]")
            return 0

        except KeyboardInterrupt:
            console.print("[bold red]Operation cancelled by user.[/bold red]")
            logger.info("Operation cancelled by user")
            return 1
        except DevhostError as exc:
            console.print(f"[bold red]Error:[/bold red] {exc}")
            logger.error(str(exc))
            return 1
        except Exception as exc:
            console.print(f"[bold red]Unexpected error:[/bold red] {exc}")
            logger.exception("Unexpected error")
            return 1
