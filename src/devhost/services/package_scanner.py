"""Lists the main entry points of installed dependency packages."""

import json
from pathlib import Path
from typing import Iterator, List, Tuple

from devhost.constants import PACKAGE_MANIFEST
from devhost.errors import DevhostError
from devhost.errors_catalog import actionable_error


class PackageScanner:
    def __init__(self, logger):
        self.logger = logger

    def scan(self, packages_dir: Path) -> List[Tuple[str, str]]:
        root = Path(packages_dir)
        if not root.is_dir():
            raise DevhostError(actionable_error("packages_dir_not_found", path=root))

        entries = []
        for manifest_path in self._manifest_paths(root):
            manifest = self._load_manifest(manifest_path)
            if manifest is None:
                continue

            main = manifest.get("main")
            if not isinstance(main, str) or not main:
                continue

            name = manifest.get("name")
            if not isinstance(name, str) or not name:
                name = manifest_path.parent.relative_to(root).as_posix()
            entries.append((name, main))
        return entries

    def _manifest_paths(self, root: Path) -> Iterator[Path]:
        for child in sorted(root.iterdir()):
            if not child.is_dir() or child.name.startswith("."):
                continue
            if child.name.startswith("@"):
                for scoped in sorted(child.iterdir()):
                    if (scoped / PACKAGE_MANIFEST).is_file():
                        yield scoped / PACKAGE_MANIFEST
            elif (child / PACKAGE_MANIFEST).is_file():
                yield child / PACKAGE_MANIFEST

    def _load_manifest(self, path: Path):
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            self.logger.warning("Skipping unreadable manifest %s: %s", path, exc)
            return None

        if not isinstance(data, dict):
            self.logger.warning("Skipping manifest %s: not a JSON object", path)
            return None
        return data
