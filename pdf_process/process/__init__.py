"""Process orchestration for the poppler command-line tools.

Responsibilities:
    - Argument vectors built from typed options, validated before spawning
    - Child processes with concurrent stdin write and stdout/stderr drain
    - Deadlines and cancel events that kill and reap the child
    - Scoped temporary files and directories per invocation
    - Classification of failed runs into the error taxonomy
"""

from pdf_process.process.arguments import (
    ToolInvocation,
    build_info_args,
    build_render_args,
    build_text_args,
)
from pdf_process.process.classifier import classify_failure
from pdf_process.process.resources import render_workspace, staged_source
from pdf_process.process.runner import ProcessOutcome, run_process

__all__ = [
    "ProcessOutcome",
    "ToolInvocation",
    "build_info_args",
    "build_render_args",
    "build_text_args",
    "classify_failure",
    "render_workspace",
    "run_process",
    "staged_source",
]
