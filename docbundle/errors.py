"""Exceptions raised by pipeline stages.

Every fatal condition is a ``PipelineError``; the CLI maps it onto the
process exit status via ``exit_code``.
"""

from __future__ import annotations


class PipelineError(Exception):
    """Base class for errors that abort the whole run."""

    exit_code = 1


class MissingToolError(PipelineError):
    """A required external executable is not on ``PATH``."""

    def __init__(self, tool: str) -> None:
        super().__init__(f"required tool '{tool}' is not installed")
        self.tool = tool


class WorkspaceError(PipelineError):
    """The output tree could not be (re)created safely."""


class StageError(PipelineError):
    """An external tool invoked by a stage failed."""

    def __init__(self, stage: str, message: str, *, returncode: int = 1) -> None:
        super().__init__(f"{stage}: {message}")
        self.stage = stage
        self.returncode = returncode
        self.exit_code = returncode if returncode > 0 else 1
