"""API reference (Doxygen) and diagram (PlantUML) generation."""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import StageError
from .models import RenderedDiagram, Workspace
from .sources import discover_diagrams
from .utils import DIAGRAM_FORMATS, run_tool

log = logging.getLogger(__name__)


def generate_api_reference(doxyfile: Path, workspace: Workspace, *, cwd: Path) -> None:
    """Run doxygen with *doxyfile*, redirecting its output into the workspace.

    The config is fed on stdin with an ``OUTPUT_DIRECTORY`` override appended
    so relative paths inside the Doxyfile still resolve against *cwd*.
    """
    try:
        config = doxyfile.read_text(encoding="utf-8")
    except OSError as exc:
        raise StageError("api-reference", f"cannot read {doxyfile}: {exc}") from exc

    config += f'\nOUTPUT_DIRECTORY = "{workspace.api_dir}"\n'
    log.info("Generating API documentation with Doxygen...")
    run_tool(["doxygen", "-"], stage="api-reference", cwd=cwd, input_text=config)


def render_diagrams(source_dir: Path, workspace: Workspace) -> list[RenderedDiagram]:
    """Render every ``*.puml`` in *source_dir* to SVG and PDF.

    Returns one record per SVG present in the diagram directory afterwards,
    sorted by name. With no description files nothing is rendered.
    """
    sources = discover_diagrams(source_dir)
    if not sources:
        log.info("No PlantUML diagrams found under %s", source_dir)
        return []

    log.info("Rendering %s PlantUML diagrams to SVG and PDF...", len(sources))
    for fmt in DIAGRAM_FORMATS:
        run_tool(
            ["plantuml", f"-t{fmt}", "-o", workspace.diagrams_dir, *sources],
            stage="diagrams",
            cwd=source_dir,
        )

    rendered = [
        RenderedDiagram(
            name=svg.stem,
            svg_path=svg,
            pdf_path=svg.with_suffix(".pdf"),
        )
        for svg in sorted(workspace.diagrams_dir.glob("*.svg"))
    ]
    log.info("Diagrams: %s rendered", len(rendered))
    return rendered
