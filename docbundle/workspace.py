"""Output workspace creation (and clearing)."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Iterable

from .errors import WorkspaceError
from .models import Workspace
from .utils import (
    API_DIR_NAME,
    DIAGRAM_DIR_NAME,
    DOCUMENT_DIR_NAME,
    PDF_DOCUMENT_DIR_NAME,
)

log = logging.getLogger(__name__)


def workspace_for(output_dir: Path) -> Workspace:
    """Describe the workspace rooted at *output_dir* without touching disk."""
    documents_dir = output_dir / DOCUMENT_DIR_NAME
    return Workspace(
        root=output_dir,
        diagrams_dir=output_dir / DIAGRAM_DIR_NAME,
        documents_dir=documents_dir,
        pdf_documents_dir=documents_dir / PDF_DOCUMENT_DIR_NAME,
        api_dir=output_dir / API_DIR_NAME,
    )


def ensure_workspace(
    output_dir: Path,
    *,
    clean: bool = True,
    project_root: Path | None = None,
    protected: Iterable[Path] = (),
) -> Workspace:
    """Create the output tree, first removing it entirely when *clean*.

    Refuses to clear a directory that is, or contains, *project_root* or
    any of the *protected* input paths.
    """
    output_dir = Path(output_dir).resolve()
    if clean and output_dir.exists():
        guarded = list(protected)
        if project_root is not None:
            guarded.insert(0, project_root)
        for path in guarded:
            path = Path(path).resolve()
            if output_dir == path or output_dir in path.parents:
                raise WorkspaceError(
                    f"refusing to clear {output_dir}: it contains {path}"
                )
        log.info("Clearing previous output under %s", output_dir)
        try:
            shutil.rmtree(output_dir)
        except OSError as exc:
            raise WorkspaceError(f"cannot clear {output_dir}: {exc}") from exc

    ws = workspace_for(output_dir)
    try:
        for directory in (ws.diagrams_dir, ws.pdf_documents_dir, ws.api_dir):
            directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise WorkspaceError(f"cannot create {output_dir}: {exc}") from exc
    return ws
