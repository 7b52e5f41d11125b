"""Project root and project type detection."""

import os
from pathlib import Path
from typing import Iterable, Optional, Sequence, Tuple

from devhost.constants import DEFAULT_DOCUMENT_ROOTS, DEFAULT_MAX_DEPTH, VCS_MARKER
from devhost.errors import ProjectRootNotFoundError
from devhost.errors_catalog import actionable_error
from devhost.models import DetectionResult, ProjectType


class ProjectDetector:
    """Finds the project root and classifies the site it holds.

    Detection only inspects the filesystem; it never changes the process
    working directory.
    """

    # Checked in order, first match wins.
    MARKERS: Sequence[Tuple[ProjectType, Tuple[str, ...]]] = (
        (ProjectType.WORDPRESS, ("wp-config.php",)),
        (ProjectType.PORTAL, ("api.php", "dl.php", "i.php")),
    )

    def __init__(
        self,
        logger,
        max_depth: int = DEFAULT_MAX_DEPTH,
        document_roots: Iterable[str] = DEFAULT_DOCUMENT_ROOTS,
    ):
        self.logger = logger
        self.max_depth = max_depth
        self.document_roots = tuple(document_roots)

    def find_project_root(self, start: Optional[Path] = None) -> Path:
        start_dir = Path(start if start is not None else os.getcwd()).resolve()
        current = start_dir

        for _ in range(self.max_depth):
            if (current / VCS_MARKER).exists():
                self.logger.debug("Project root: %s", current)
                return current
            if current.parent == current:
                break
            current = current.parent

        raise ProjectRootNotFoundError(
            actionable_error("project_root_not_found", max_depth=self.max_depth, start=start_dir)
        )

    def resolve_document_root(self, project_root: Path) -> Path:
        for name in self.document_roots:
            candidate = project_root / name
            if candidate.is_dir():
                self.logger.debug("Using nested document root: %s", candidate)
                return candidate
        return project_root

    def detect_type(self, document_root: Path) -> ProjectType:
        for project_type, markers in self.MARKERS:
            if all((document_root / marker).is_file() for marker in markers):
                return project_type
        return ProjectType.UNKNOWN

    def detect(self, start: Optional[Path] = None) -> DetectionResult:
        project_root = self.find_project_root(start)
        document_root = self.resolve_document_root(project_root)
        project_type = self.detect_type(document_root)
        self.logger.info("Detected %s project at %s", project_type.value, document_root)
        return DetectionResult(
            project_root=project_root,
            document_root=document_root,
            project_type=project_type,
        )
