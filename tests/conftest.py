"""Shared fixtures for the docbundle test suite.

External tools are never executed: ``shutil.which`` and ``subprocess.run``
are replaced by ``FakeTools``, which reproduces the side effects each tool
has on disk (files written under its output arguments).
"""

from __future__ import annotations

import logging
import re
import shutil
import subprocess
import sys
from pathlib import Path

import pytest

logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stderr,
    force=True,
)

_OUTPUT_DIR_RE = re.compile(r'^OUTPUT_DIRECTORY\s*=\s*"(.*)"\s*$', re.MULTILINE)


class FakeTools:
    """Stand-in for doxygen, plantuml, pandoc, pdftohtml and pdftoppm."""

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.missing: set[str] = set()
        self.failures: dict[str, int] = {}
        self.broken_pdfs: set[str] = set()
        self.pages: dict[str, int] = {}
        self.extraction_dirs: list[Path] = []

    # -- shutil.which ------------------------------------------------------

    def which(self, name, *args, **kwargs):
        if name in self.missing:
            return None
        return f"/usr/bin/{name}"

    # -- subprocess.run ----------------------------------------------------

    def run(self, cmd, cwd=None, input=None, **kwargs):
        cmd = [str(c) for c in cmd]
        self.calls.append(cmd)
        tool = cmd[0]
        if tool in self.failures:
            return subprocess.CompletedProcess(cmd, self.failures[tool])
        handler = getattr(self, "_" + tool)
        returncode = handler(cmd, input)
        return subprocess.CompletedProcess(cmd, returncode)

    def tool_calls(self, tool: str) -> list[list[str]]:
        return [c for c in self.calls if c[0] == tool]

    def _doxygen(self, cmd, config):
        out = Path(_OUTPUT_DIR_RE.search(config).group(1))
        (out / "html").mkdir(parents=True, exist_ok=True)
        (out / "html" / "index.html").write_text("<html>api</html>")
        return 0

    def _plantuml(self, cmd, _input):
        fmt = cmd[1][2:]
        out = Path(cmd[3])
        out.mkdir(parents=True, exist_ok=True)
        for src in cmd[4:]:
            (out / f"{Path(src).stem}.{fmt}").write_text(f"{fmt}:{Path(src).name}")
        return 0

    def _pandoc(self, cmd, _input):
        src = Path(cmd[1])
        out = Path(cmd[cmd.index("-o") + 1])
        if "-t" in cmd:
            out.write_text(f"# {src.stem}\n\nconverted text\n", encoding="utf-8")
        else:
            out.write_text(f"{out.suffix}:{src.name}", encoding="utf-8")
        return 0

    def _pdftohtml(self, cmd, _input):
        pdf = Path(cmd[3])
        html = Path(cmd[4])
        self.extraction_dirs.append(html.parent)
        if pdf.stem in self.broken_pdfs:
            return 1
        html.write_text(f"<html><body>{pdf.stem}</body></html>", encoding="utf-8")
        return 0

    def _pdftoppm(self, cmd, _input):
        pdf = Path(cmd[2])
        prefix = Path(cmd[3])
        count = self.pages.get(pdf.stem, 2)
        width = len(str(count))
        for page in range(1, count + 1):
            image = prefix.parent / f"{prefix.name}-{page:0{width}d}.png"
            image.write_bytes(b"\x89PNG" + pdf.stem.encode())
        return 0


@pytest.fixture
def fake_tools(monkeypatch) -> FakeTools:
    tools = FakeTools()
    monkeypatch.setattr(shutil, "which", tools.which)
    monkeypatch.setattr(subprocess, "run", tools.run)
    return tools


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A minimal project tree: README, Doxyfile, sources, no diagrams/PDFs."""
    root = tmp_path / "project"
    (root / "docs").mkdir(parents=True)
    (root / "diagrams").mkdir()
    (root / "src").mkdir()
    (root / "src" / "lib.rs").write_text("/// Entry point\npub fn run() {}\n")
    (root / "docs" / "Doxyfile").write_text('PROJECT_NAME = "demo"\nINPUT = src\n')
    (root / "README.md").write_text("# Demo\n\nNarrative text.\n")
    return root


