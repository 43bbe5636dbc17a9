"""CLI entrypoint for the documentation bundle pipeline.

Usage:
    python -m docbundle
    python -m docbundle --root path/to/project
    python -m docbundle --keep-output --verbose
    python -m docbundle --detailed-logging --log-file build/docs.log

Stages run in order: tool check -> workspace -> Doxygen -> PlantUML ->
README -> reference PDFs -> index.
"""

from __future__ import annotations

import argparse
import logging
from logging.handlers import RotatingFileHandler
import sys
import time
from pathlib import Path

from .errors import PipelineError, WorkspaceError
from .models import PipelineConfig, PipelineResult

log = logging.getLogger(__name__)


def _setup_logging(
    *,
    verbose: bool,
    detailed_logging: bool,
    log_file: Path | None,
) -> None:
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    root_level = logging.DEBUG if verbose else logging.INFO
    root_logger.setLevel(root_level)

    console_fmt = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    detailed_fmt = (
        "%(asctime)s | %(levelname)-8s | %(name)s | "
        "%(filename)s:%(lineno)d | %(message)s"
    )
    formatter = logging.Formatter(
        detailed_fmt if detailed_logging else console_fmt,
        "%Y-%m-%d %H:%M:%S",
    )

    # StreamHandler writes to stderr
    console_handler = logging.StreamHandler()
    console_handler.setLevel(root_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(detailed_fmt, "%Y-%m-%d %H:%M:%S"))
        root_logger.addHandler(file_handler)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Doxygen + PlantUML + Pandoc documentation bundle generator"
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=Path.cwd(),
        help="Project root holding README.md, diagrams/ and docs/ (default: cwd)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Output root (default: <root>/docs/generated)",
    )
    parser.add_argument(
        "--keep-output",
        action="store_true",
        help="Do not clear the output root before generating",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--detailed-logging",
        action="store_true",
        help="Enable detailed log format (file/line)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Optional log file path (kept outside the output root)",
    )
    return parser.parse_args(argv)


def run_pipeline(config: PipelineConfig) -> PipelineResult:
    """Run every stage in order; raises ``PipelineError`` on fatal failures."""
    from .conversion import convert_narrative, convert_reference_documents
    from .index import write_diagram_gallery, write_index
    from .rendering import generate_api_reference, render_diagrams
    from .utils import verify_tools
    from .workspace import ensure_workspace

    overall_t0 = time.perf_counter()

    # --- Step 1: Required tools ---
    verify_tools()

    # --- Step 2: Workspace ---
    workspace = ensure_workspace(
        config.output_dir,
        clean=config.clean,
        project_root=config.root,
        protected=config.inputs,
    )
    result = PipelineResult(workspace=workspace)

    # --- Step 3: API reference ---
    step_t0 = time.perf_counter()
    generate_api_reference(config.doxyfile, workspace, cwd=config.root)
    log.info("API reference completed in %.2fs", time.perf_counter() - step_t0)

    # --- Step 4: Diagrams ---
    step_t0 = time.perf_counter()
    result.diagrams = render_diagrams(config.diagram_source_dir, workspace)
    log.info("Diagram stage completed in %.2fs", time.perf_counter() - step_t0)

    # --- Step 5: Narrative ---
    step_t0 = time.perf_counter()
    convert_narrative(config.narrative, workspace)
    log.info("Narrative stage completed in %.2fs", time.perf_counter() - step_t0)

    # --- Step 6: Reference PDFs ---
    step_t0 = time.perf_counter()
    result.documents, result.skipped = convert_reference_documents(
        config.reference_dir, workspace
    )
    log.info("Reference stage completed in %.2fs", time.perf_counter() - step_t0)

    # --- Step 7: Index ---
    write_diagram_gallery(workspace, result.diagrams)
    result.index_path = write_index(workspace, result.documents, result.diagrams)

    result.elapsed_s = time.perf_counter() - overall_t0
    return result


def main(argv: list[str] | None = None) -> None:
    """Run the full pipeline and exit with its status."""
    args = parse_args(argv)
    config = PipelineConfig(
        root=args.root,
        output_dir=args.output_dir,
        clean=not args.keep_output,
    )

    # The log file must stay outside the output root: nothing may be written
    # there before the tool check, and clearing would delete it.
    log_file_rejected = args.log_file is not None and config.is_inside_output(
        args.log_file
    )
    _setup_logging(
        verbose=args.verbose,
        detailed_logging=args.detailed_logging,
        log_file=None if log_file_rejected else args.log_file,
    )
    if log_file_rejected:
        log.error(
            "Error: log file %s must be outside the output root %s",
            args.log_file,
            config.output_dir,
        )
        sys.exit(WorkspaceError.exit_code)
    log.debug("Configuration: %s", config)

    try:
        result = run_pipeline(config)
    except PipelineError as exc:
        log.error("Error: %s", exc)
        sys.exit(exc.exit_code)

    # --- Summary ---
    total_conv = sum(d.conversion_time_s for d in result.documents)
    log.info("=" * 60)
    log.info("DOCUMENTATION COMPLETE")
    log.info(f"  Diagrams rendered:   {len(result.diagrams)}")
    log.info(f"  Documents converted: {len(result.documents)}")
    log.info(f"  Documents skipped:   {len(result.skipped)}")
    log.info(f"  Index:               {result.index_path}")
    log.info(f"  Total conv time:     {total_conv:.1f}s")
    log.info(f"  Total runtime:       {result.elapsed_s:.1f}s")
    if result.skipped:
        log.warning("Skipped documents:")
        for doc in result.skipped:
            log.warning(f"  - {doc.display_name}: {doc.reason}")
    log.info("Documentation generated under %s", result.workspace.root)
    sys.exit(0)
