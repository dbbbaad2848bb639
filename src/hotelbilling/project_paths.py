from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

PROJECT_MARKER = "pyproject.toml"


def find_project_root(start: Path | None = None) -> Path:
    cursor = (start or Path.cwd()).resolve()
    root = next((p for p in (cursor, *cursor.parents) if (p / PROJECT_MARKER).is_file()), None)
    if root is None:
        raise RuntimeError(f"No {PROJECT_MARKER} found in {cursor} or any parent directory.")
    return root


@dataclass(frozen=True, slots=True)
class ProjectPaths:
    root: Path
    data_dir: Path
    rules_dir: Path

    @classmethod
    def detect(cls, start: Path | None = None) -> "ProjectPaths":
        """Locate the billing data under the project root.

        ``HOTELBILLING_DATA_DIR`` and ``HOTELBILLING_RULES_DIR`` override the
        defaults (``data`` and ``<data>/rules``); relative values are taken from
        the project root.
        """
        root = find_project_root(start)
        # joining onto root leaves absolute overrides untouched
        data_dir = root / os.getenv("HOTELBILLING_DATA_DIR", "data")
        rules_dir = root / os.getenv("HOTELBILLING_RULES_DIR", str(data_dir / "rules"))
        return cls(root=root, data_dir=data_dir, rules_dir=rules_dir)
