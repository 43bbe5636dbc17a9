"""Cross-cutting helpers: constants, tool lookup, process invocation."""

from __future__ import annotations

import logging
import re
import shutil
import subprocess
from pathlib import Path
from typing import Iterable, Optional, Sequence

from .errors import MissingToolError, StageError

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

REQUIRED_TOOLS = (
    "doxygen",
    "plantuml",
    "pandoc",
    "wkhtmltopdf",
    "pdftohtml",
    "pdftoppm",
)

# Inputs, relative to the project root
DOXYFILE = Path("docs") / "Doxyfile"
DIAGRAM_SOURCE_DIR = Path("diagrams")
NARRATIVE_FILE = Path("README.md")
REFERENCE_DOC_DIR = Path("docs")

# Outputs
OUTPUT_ROOT = Path("docs") / "generated"
DIAGRAM_DIR_NAME = "plantuml"
DOCUMENT_DIR_NAME = "markdown"
PDF_DOCUMENT_DIR_NAME = "pdfs"
API_DIR_NAME = "api"

NARRATIVE_HTML = "README.html"
NARRATIVE_PDF = "README.pdf"
INDEX_FILE_NAME = "index.md"
DIAGRAM_GALLERY_NAME = "plantuml_diagrams.md"

DIAGRAM_FORMATS = ("svg", "pdf")
PDF_ENGINE = "wkhtmltopdf"
MARKDOWN_DIALECT = "gfm"
PAGE_IMAGE_PREFIX = "page"
FIGURES_HEADING = "## Extracted Figures"


# ---------------------------------------------------------------------------
# Tool helpers
# ---------------------------------------------------------------------------


def verify_tools(tools: Iterable[str] = REQUIRED_TOOLS) -> None:
    """Raise ``MissingToolError`` for the first tool not found on ``PATH``."""
    for tool in tools:
        location = shutil.which(tool)
        if location is None:
            raise MissingToolError(tool)
        log.debug("Found %s at %s", tool, location)


def run_tool(
    args: Sequence[str],
    *,
    stage: str,
    cwd: Optional[Path] = None,
    input_text: Optional[str] = None,
    check: bool = True,
    quiet: bool = False,
) -> subprocess.CompletedProcess:
    """Run one external tool to completion.

    With ``check`` a non-zero exit status raises ``StageError`` carrying the
    tool's return code; a tool that cannot be started raises ``StageError``
    regardless of ``check``. ``quiet`` discards the tool's stdout/stderr.
    """
    cmd = [str(a) for a in args]
    log.debug("%s: running %s", stage, " ".join(cmd))
    output = subprocess.DEVNULL if quiet else None
    try:
        completed = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd is not None else None,
            input=input_text,
            text=True,
            stdout=output,
            stderr=output,
            check=False,
        )
    except OSError as exc:
        raise StageError(stage, f"cannot run '{cmd[0]}': {exc}") from exc
    if check and completed.returncode != 0:
        raise StageError(
            stage,
            f"'{cmd[0]}' exited with status {completed.returncode}",
            returncode=completed.returncode,
        )
    return completed


# ---------------------------------------------------------------------------
# Naming helpers
# ---------------------------------------------------------------------------

_TRAILING_INT_RE = re.compile(r"(\d+)$")


def safe_name(display_name: str) -> str:
    """Filesystem-safe base name: spaces become underscores."""
    return display_name.replace(" ", "_")


def page_number(path: Path) -> int:
    """Page index encoded in a rasterized image name (``page-07.png`` -> 7)."""
    m = _TRAILING_INT_RE.search(path.stem)
    return int(m.group(1)) if m else 0
