from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

SUMMARY_FILENAME = "summary.json"


@dataclass(frozen=True)
class OutputPaths:
    root: Path
    tables: Path
    summary: Path

    @property
    def summary_file(self) -> Path:
        return self.summary / SUMMARY_FILENAME


def build_output_paths(out_dir: Path, create: bool = True) -> OutputPaths:
    """Run directory layout: derived tables under ``tables/``, the run summary under ``summary/``."""
    paths = OutputPaths(
        root=out_dir,
        tables=out_dir / "tables",
        summary=out_dir / "summary",
    )
    if create:
        for directory in (paths.tables, paths.summary):
            directory.mkdir(parents=True, exist_ok=True)
    return paths
