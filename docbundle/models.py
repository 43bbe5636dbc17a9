"""Shared data models for the pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .utils import (
    DIAGRAM_SOURCE_DIR,
    DOXYFILE,
    NARRATIVE_FILE,
    OUTPUT_ROOT,
    REFERENCE_DOC_DIR,
)


@dataclass
class PipelineConfig:
    """Fixed input/output layout for one run, resolved against *root*."""

    root: Path
    output_dir: Optional[Path] = None
    clean: bool = True

    def __post_init__(self) -> None:
        self.root = Path(self.root).resolve()
        if self.output_dir is None:
            self.output_dir = self.root / OUTPUT_ROOT
        self.output_dir = Path(self.output_dir).resolve()

    @property
    def doxyfile(self) -> Path:
        return self.root / DOXYFILE

    @property
    def diagram_source_dir(self) -> Path:
        return self.root / DIAGRAM_SOURCE_DIR

    @property
    def narrative(self) -> Path:
        return self.root / NARRATIVE_FILE

    @property
    def reference_dir(self) -> Path:
        return self.root / REFERENCE_DOC_DIR

    @property
    def inputs(self) -> tuple[Path, ...]:
        """Input paths the output root must never contain."""
        return (
            self.doxyfile,
            self.diagram_source_dir,
            self.narrative,
            self.reference_dir,
        )

    def is_inside_output(self, path: Path) -> bool:
        path = Path(path).resolve()
        return path == self.output_dir or self.output_dir in path.parents


@dataclass
class Workspace:
    """Output directory tree written by a single run."""

    root: Path
    diagrams_dir: Path
    documents_dir: Path
    pdf_documents_dir: Path
    api_dir: Path


@dataclass
class RenderedDiagram:
    """A diagram whose vector image exists in the diagram output directory."""

    name: str
    svg_path: Path
    pdf_path: Path


@dataclass
class ConvertedDocument:
    """A reference PDF fully converted to Markdown plus page figures."""

    display_name: str
    safe_name: str
    markdown_path: Path
    figures_dir: Path
    num_pages: int = 0
    conversion_time_s: float = 0.0


@dataclass
class SkippedDocument:
    display_name: str
    reason: str


@dataclass
class PipelineResult:
    """Everything a run produced, in recording order."""

    workspace: Workspace
    diagrams: list[RenderedDiagram] = field(default_factory=list)
    documents: list[ConvertedDocument] = field(default_factory=list)
    skipped: list[SkippedDocument] = field(default_factory=list)
    index_path: Optional[Path] = None
    elapsed_s: float = 0.0
