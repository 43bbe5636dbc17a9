"""Pandoc / poppler conversions: narrative document and reference PDFs."""

from __future__ import annotations

import logging
import tempfile
import time
from pathlib import Path
from typing import Optional

from .errors import StageError
from .models import ConvertedDocument, SkippedDocument, Workspace
from .sources import discover_pdfs
from .utils import (
    FIGURES_HEADING,
    MARKDOWN_DIALECT,
    NARRATIVE_HTML,
    NARRATIVE_PDF,
    PAGE_IMAGE_PREFIX,
    PDF_ENGINE,
    page_number,
    run_tool,
    safe_name,
)

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Narrative document
# ---------------------------------------------------------------------------


def convert_narrative(narrative: Path, workspace: Workspace) -> tuple[Path, Path]:
    """Convert the top-level Markdown document to HTML and PDF.

    Returns (html_path, pdf_path) inside the documents directory.
    """
    if not narrative.is_file():
        raise StageError("narrative", f"{narrative} does not exist")

    html_path = workspace.documents_dir / NARRATIVE_HTML
    pdf_path = workspace.documents_dir / NARRATIVE_PDF

    log.info("Converting %s to HTML and PDF...", narrative.name)
    run_tool(["pandoc", narrative, "-o", html_path], stage="narrative")
    run_tool(
        ["pandoc", narrative, "-o", pdf_path, f"--pdf-engine={PDF_ENGINE}"],
        stage="narrative",
    )
    return html_path, pdf_path


# ---------------------------------------------------------------------------
# Reference PDFs
# ---------------------------------------------------------------------------


def _page_images(figures_dir: Path) -> list[Path]:
    images = figures_dir.glob(f"{PAGE_IMAGE_PREFIX}*.png")
    return sorted(images, key=lambda p: (page_number(p), p.name))


def append_figures(
    markdown_path: Path,
    display_name: str,
    safe: str,
    images: list[Path],
) -> None:
    """Append an "Extracted Figures" section referencing each page image."""
    lines = ["", FIGURES_HEADING]
    for page_index, image in enumerate(images, start=1):
        lines.append(
            f"![{display_name} page {page_index}]({safe}_figures/{image.name})"
        )
    with open(markdown_path, "a", encoding="utf-8") as fh:
        fh.write("\n".join(lines) + "\n")


def convert_reference_pdf(
    pdf_path: Path,
    workspace: Workspace,
) -> Optional[ConvertedDocument]:
    """Convert one PDF to Markdown with per-page figures.

    Returns ``None`` when pdftohtml produced no HTML; the document is then
    skipped. Failures of the later tools raise ``StageError``. The temporary
    extraction directory is removed on every path.
    """
    display_name = pdf_path.stem
    safe = safe_name(display_name)
    markdown_path = workspace.pdf_documents_dir / f"{safe}.md"
    figures_dir = workspace.pdf_documents_dir / f"{safe}_figures"
    t0 = time.perf_counter()

    log.info("  Processing %s", pdf_path.name)
    with tempfile.TemporaryDirectory(prefix="docbundle-") as tmp:
        html_path = Path(tmp) / f"{safe}.html"
        completed = run_tool(
            ["pdftohtml", "-c", "-noframes", pdf_path, html_path],
            stage="reference-docs",
            check=False,
            quiet=True,
        )
        if not html_path.is_file():
            log.error(
                "    Failed to convert %s to HTML (pdftohtml status %s)",
                pdf_path.name,
                completed.returncode,
            )
            return None

        run_tool(
            [
                "pandoc",
                html_path,
                "-f",
                "html",
                "-t",
                MARKDOWN_DIALECT,
                "-o",
                markdown_path,
            ],
            stage="reference-docs",
        )

    figures_dir.mkdir(parents=True, exist_ok=True)
    run_tool(
        ["pdftoppm", "-png", pdf_path, figures_dir / PAGE_IMAGE_PREFIX],
        stage="reference-docs",
        quiet=True,
    )

    images = _page_images(figures_dir)
    if images:
        append_figures(markdown_path, display_name, safe, images)

    return ConvertedDocument(
        display_name=display_name,
        safe_name=safe,
        markdown_path=markdown_path,
        figures_dir=figures_dir,
        num_pages=len(images),
        conversion_time_s=round(time.perf_counter() - t0, 2),
    )


def convert_reference_documents(
    folder: Path,
    workspace: Workspace,
) -> tuple[list[ConvertedDocument], list[SkippedDocument]]:
    """Convert every PDF in *folder* in discovery order.

    Returns (converted, skipped). A document that yields no HTML is skipped
    and the batch continues.
    """
    from tqdm import tqdm

    pdf_files = discover_pdfs(folder)
    if not pdf_files:
        log.info("No PDF reference documents found under %s", folder)
        return [], []

    log.info("Converting %s PDF documents to Markdown...", len(pdf_files))
    converted: list[ConvertedDocument] = []
    skipped: list[SkippedDocument] = []
    for pdf_path in tqdm(pdf_files, desc="Converting PDFs"):
        document = convert_reference_pdf(pdf_path, workspace)
        if document is None:
            skipped.append(
                SkippedDocument(
                    display_name=pdf_path.stem,
                    reason="pdftohtml produced no HTML output",
                )
            )
            continue
        log.info(
            "    Converted %s: pages=%s in %ss",
            document.display_name,
            document.num_pages,
            document.conversion_time_s,
        )
        converted.append(document)

    log.info(
        "Reference documents: %s converted, %s skipped",
        len(converted),
        len(skipped),
    )
    return converted, skipped
