"""Input discovery on the local filesystem."""

from __future__ import annotations

from pathlib import Path


def discover_files(folder: Path, pattern: str) -> list[Path]:
    """Files directly under *folder* matching *pattern*, sorted by name."""
    if not folder.is_dir():
        return []
    return sorted(p for p in folder.glob(pattern) if p.is_file())


def discover_diagrams(folder: Path) -> list[Path]:
    """PlantUML description files (``*.puml``) in *folder*."""
    return discover_files(folder, "*.puml")


def discover_pdfs(folder: Path) -> list[Path]:
    """Reference PDFs in *folder* (non-recursive); missing folder is empty."""
    return discover_files(folder, "*.pdf")
