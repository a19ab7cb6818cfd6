"""Load xUnit v2+ reports into the display model."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO

from dtvisual.core.projector import project
from dtvisual.logging import get_logger
from dtvisual.parsers.xunit import XUnitParser

if TYPE_CHECKING:
    from dtvisual.core.models import TestRun

logger = get_logger(__name__)


def load(stream: BinaryIO, *, allow_empty: bool | None = None) -> TestRun:
    """Return a TestRun constructed from the report in stream.

    Args:
        stream: Binary stream holding an xUnit v2+ XML document.
        allow_empty: Treat empty input as a run without assemblies.
            Defaults to ``Settings.allow_empty_input``.

    Raises:
        DecodeError: If the document cannot be decoded.
    """
    result = XUnitParser.parse_stream(stream, allow_empty=allow_empty)
    test_run = project(result)
    logger.info(
        "test_run_loaded",
        computer=test_run.computer,
        assemblies=len(test_run.assemblies),
    )
    return test_run


def load_file(file_path: Path | str, *, allow_empty: bool | None = None) -> TestRun:
    """Return a TestRun constructed from the report stored at file_path."""
    with Path(file_path).open("rb") as f:
        return load(f, allow_empty=allow_empty)
