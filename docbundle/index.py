"""Markdown index page and diagram gallery."""

from __future__ import annotations

import os
from pathlib import Path

from .models import ConvertedDocument, RenderedDiagram, Workspace
from .utils import (
    DIAGRAM_GALLERY_NAME,
    INDEX_FILE_NAME,
    NARRATIVE_HTML,
    NARRATIVE_PDF,
)

NO_DOCUMENTS_LINE = "_No PDF reference documents were found._"
NO_DIAGRAMS_LINE = "_No PlantUML diagrams were rendered._"


def _relpath(target: Path, start: Path) -> str:
    return Path(os.path.relpath(target, start)).as_posix()


def render_index(
    workspace: Workspace,
    documents: list[ConvertedDocument],
    diagrams: list[RenderedDiagram],
) -> str:
    """Return the index page text; links are relative to the documents dir."""
    base = workspace.documents_dir
    lines = [
        "# Documentation Index",
        "",
        "## Project Overview",
        "",
        f"- [README (HTML)]({NARRATIVE_HTML})",
        f"- [README (PDF)]({NARRATIVE_PDF})",
        "",
        "## Converted Reference Documents",
        "",
    ]
    if documents:
        for doc in documents:
            lines.append(f"- [{doc.display_name}]({_relpath(doc.markdown_path, base)})")
    else:
        lines.append(NO_DOCUMENTS_LINE)

    lines += ["", "## Diagrams", ""]
    if diagrams:
        for diagram in diagrams:
            lines += [
                f"### {diagram.name}",
                "",
                f"![{diagram.name}]({_relpath(diagram.svg_path, base)})",
                "",
            ]
    else:
        lines += [NO_DIAGRAMS_LINE, ""]
    return "\n".join(lines)


def write_index(
    workspace: Workspace,
    documents: list[ConvertedDocument],
    diagrams: list[RenderedDiagram],
) -> Path:
    path = workspace.documents_dir / INDEX_FILE_NAME
    path.write_text(render_index(workspace, documents, diagrams), encoding="utf-8")
    return path


def write_diagram_gallery(
    workspace: Workspace,
    diagrams: list[RenderedDiagram],
) -> Path | None:
    """Write ``plantuml_diagrams.md``; nothing is written without diagrams."""
    if not diagrams:
        return None
    lines = ["# Generated PlantUML Diagrams", ""]
    for diagram in diagrams:
        rel = _relpath(diagram.svg_path, workspace.documents_dir)
        lines += [f"## {diagram.name}", "", f"![{diagram.name}]({rel})", ""]
    path = workspace.documents_dir / DIAGRAM_GALLERY_NAME
    path.write_text("\n".join(lines), encoding="utf-8")
    return path
