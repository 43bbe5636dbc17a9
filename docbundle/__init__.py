"""Documentation bundle pipeline: Doxygen, PlantUML, Pandoc and poppler.

Public API -- all symbols that tests and external code import live here.
Internally the code is split across focused submodules; this file
re-exports the stable public surface so ``from docbundle import X`` works.
"""

from .cli import main, run_pipeline
from .conversion import (
    append_figures,
    convert_narrative,
    convert_reference_documents,
    convert_reference_pdf,
)
from .errors import MissingToolError, PipelineError, StageError, WorkspaceError
from .index import render_index, write_diagram_gallery, write_index
from .models import (
    ConvertedDocument,
    PipelineConfig,
    PipelineResult,
    RenderedDiagram,
    SkippedDocument,
    Workspace,
)
from .rendering import generate_api_reference, render_diagrams
from .sources import discover_diagrams, discover_pdfs
from .utils import REQUIRED_TOOLS, run_tool, safe_name, verify_tools
from .workspace import ensure_workspace, workspace_for

__all__ = [
    # Models
    "PipelineConfig",
    "Workspace",
    "RenderedDiagram",
    "ConvertedDocument",
    "SkippedDocument",
    "PipelineResult",
    # Errors
    "PipelineError",
    "MissingToolError",
    "WorkspaceError",
    "StageError",
    # Utils
    "REQUIRED_TOOLS",
    "verify_tools",
    "run_tool",
    "safe_name",
    # Workspace
    "ensure_workspace",
    "workspace_for",
    # Sources
    "discover_diagrams",
    "discover_pdfs",
    # Stages
    "generate_api_reference",
    "render_diagrams",
    "convert_narrative",
    "convert_reference_pdf",
    "convert_reference_documents",
    "append_figures",
    # Index
    "render_index",
    "write_index",
    "write_diagram_gallery",
    # Entry points
    "run_pipeline",
    "main",
]
