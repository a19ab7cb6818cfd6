"""xUnit v2+ XML parser for .NET test reports.

This module decodes the XML written by ``dotnet test`` with the xUnit
logger into a literal structural mirror of the format described at
https://xunit.net/docs/format-xml-v2:

    assemblies
    └── assembly
        ├── errors/error
        └── collection
            └── test
                ├── failure
                ├── traits/trait
                └── warnings/warning

Nothing is interpreted here. Sequences keep document order because the
projector's grouping depends on it.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO

from dtvisual.config import get_settings
from dtvisual.core.exceptions import DecodeError
from dtvisual.logging import get_logger

logger = get_logger(__name__)

ROOT_TAG = "assemblies"


@dataclass
class XUnitFailure:
    """Information about a test failure."""

    exception_type: str = ""
    message: str = ""
    stack_trace: str = ""


@dataclass
class XUnitTrait:
    """A single trait name/value pair."""

    name: str = ""
    value: str = ""

    @property
    def key(self) -> str:
        """Composite key used to group tests by trait."""
        return f"{self.name} - {self.value}"


@dataclass
class XUnitError:
    """An environment failure outside the scope of a single test.

    For example, an exception thrown while disposing of a fixture object.
    """

    name: str = ""
    type: str = ""
    failure: XUnitFailure = field(default_factory=XUnitFailure)


@dataclass
class XUnitTest:
    """A single executed test."""

    id: str = ""
    method: str = ""
    name: str = ""
    result: str = ""
    source_file: str = ""
    source_line: str = ""
    time: float = 0.0
    time_rtf: str = ""
    type: str = ""
    failure: XUnitFailure = field(default_factory=XUnitFailure)
    output: str = ""
    reason: str = ""
    traits: list[XUnitTrait] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


@dataclass
class XUnitCollection:
    """The run of a single test collection."""

    id: str = ""
    name: str = ""
    failed_count: int = 0
    not_run_count: int = 0
    passed_count: int = 0
    skipped_count: int = 0
    time: str = ""
    time_rtf: str = ""
    total_count: int = 0
    tests: list[XUnitTest] = field(default_factory=list)


@dataclass
class XUnitAssembly:
    """The run of a single test assembly, including environmental information."""

    config_file: str = ""
    environment: str = ""
    error_count: int = 0
    failed_count: int = 0
    finish_rtf: str = ""
    id: str = ""
    full_name: str = ""
    not_run_count: int = 0
    passed_count: int = 0
    run_date: str = ""
    run_time: str = ""
    skipped_count: int = 0
    start_rtf: str = ""
    target_framework: str = ""
    test_framework: str = ""
    time: float = 0.0
    time_rtf: str = ""
    total: int = 0
    collections: list[XUnitCollection] = field(default_factory=list)
    errors: list[XUnitError] = field(default_factory=list)

    @property
    def has_tests(self) -> bool:
        """True if at least one collection holds a test."""
        return any(collection.tests for collection in self.collections)


@dataclass
class XUnitResult:
    """The top-level ``assemblies`` element of a report."""

    computer: str = ""
    finish_rtf: str = ""
    id: str = ""
    schema_version: str = ""
    start_rtf: str = ""
    timestamp: str = ""
    user: str = ""
    assemblies: list[XUnitAssembly] = field(default_factory=list)


class XUnitParser:
    """Parser for xUnit v2+ XML reports."""

    @staticmethod
    def parse_bytes(data: bytes, allow_empty: bool | None = None) -> XUnitResult:
        """Parse an xUnit XML document from bytes.

        Args:
            data: The complete document.
            allow_empty: Decode empty input to an empty result instead of
                failing. Defaults to ``Settings.allow_empty_input``.

        Returns:
            XUnitResult mirroring the document.

        Raises:
            DecodeError: If the document is not well-formed XML, its root is
                not ``assemblies``, or a numeric attribute is not a number.
        """
        if allow_empty is None:
            allow_empty = get_settings().allow_empty_input

        if not data.strip():
            if allow_empty:
                logger.debug("xunit_empty_input")
                return XUnitResult()
            logger.warning("xunit_decode_failed", reason="empty input")
            raise DecodeError("no element found: line 1, column 0", position=(1, 0))

        try:
            root = ET.fromstring(data)  # noqa: S314 - trusted test report data
        except (ET.ParseError, LookupError, ValueError) as e:
            # Unknown or unsupported encodings in the XML declaration surface
            # as LookupError or ValueError rather than ParseError.
            position = getattr(e, "position", None)
            logger.warning("xunit_decode_failed", reason=str(e), position=position)
            raise DecodeError(str(e), position=position) from e

        result = XUnitParser._parse_root(root)
        logger.debug("xunit_decoded", assemblies=len(result.assemblies))
        return result

    @staticmethod
    def parse_string(xml_content: str, allow_empty: bool | None = None) -> XUnitResult:
        """Parse an xUnit XML document from a string."""
        return XUnitParser.parse_bytes(xml_content.encode("utf-8"), allow_empty=allow_empty)

    @staticmethod
    def parse_stream(stream: BinaryIO, allow_empty: bool | None = None) -> XUnitResult:
        """Read stream to the end and parse it as an xUnit XML document."""
        return XUnitParser.parse_bytes(stream.read(), allow_empty=allow_empty)

    @staticmethod
    def parse_file(file_path: Path | str, allow_empty: bool | None = None) -> XUnitResult:
        """Parse an xUnit XML document from a file."""
        return XUnitParser.parse_bytes(Path(file_path).read_bytes(), allow_empty=allow_empty)

    @staticmethod
    def _parse_root(root: ET.Element) -> XUnitResult:
        """Parse the ``assemblies`` root element."""
        if _local_name(root.tag) != ROOT_TAG:
            message = f"expected element type <{ROOT_TAG}> but have <{_local_name(root.tag)}>"
            logger.warning("xunit_decode_failed", reason=message)
            raise DecodeError(message)

        return XUnitResult(
            computer=root.get("computer", ""),
            finish_rtf=root.get("finish-rtf", ""),
            id=root.get("id", ""),
            schema_version=root.get("schema-version", ""),
            start_rtf=root.get("start-rtf", ""),
            timestamp=root.get("timestamp", ""),
            user=root.get("user", ""),
            assemblies=[XUnitParser._parse_assembly(a) for a in root.findall("{*}assembly")],
        )

    @staticmethod
    def _parse_assembly(assembly: ET.Element) -> XUnitAssembly:
        """Parse an ``assembly`` element."""
        return XUnitAssembly(
            config_file=assembly.get("config-file", ""),
            environment=assembly.get("environment", ""),
            error_count=_int_attr(assembly, "errors"),
            failed_count=_int_attr(assembly, "failed"),
            finish_rtf=assembly.get("finish-rtf", ""),
            id=assembly.get("id", ""),
            full_name=assembly.get("name", ""),
            not_run_count=_int_attr(assembly, "not-run"),
            passed_count=_int_attr(assembly, "passed"),
            run_date=assembly.get("run-date", ""),
            run_time=assembly.get("run-time", ""),
            skipped_count=_int_attr(assembly, "skipped"),
            start_rtf=assembly.get("start-rtf", ""),
            target_framework=assembly.get("target-framework", ""),
            test_framework=assembly.get("test-framework", ""),
            time=_float_attr(assembly, "time"),
            time_rtf=assembly.get("time-rtf", ""),
            total=_int_attr(assembly, "total"),
            collections=[
                XUnitParser._parse_collection(c) for c in assembly.findall("{*}collection")
            ],
            errors=[XUnitParser._parse_error(e) for e in assembly.findall("{*}errors/{*}error")],
        )

    @staticmethod
    def _parse_collection(collection: ET.Element) -> XUnitCollection:
        """Parse a ``collection`` element."""
        return XUnitCollection(
            id=collection.get("id", ""),
            name=collection.get("name", ""),
            failed_count=_int_attr(collection, "failed"),
            not_run_count=_int_attr(collection, "not-run"),
            passed_count=_int_attr(collection, "passed"),
            skipped_count=_int_attr(collection, "skipped"),
            time=collection.get("time", ""),
            time_rtf=collection.get("time-rtf", ""),
            total_count=_int_attr(collection, "total"),
            tests=[XUnitParser._parse_test(t) for t in collection.findall("{*}test")],
        )

    @staticmethod
    def _parse_test(test: ET.Element) -> XUnitTest:
        """Parse a ``test`` element."""
        return XUnitTest(
            id=test.get("id", ""),
            method=test.get("method", ""),
            name=test.get("name", ""),
            result=test.get("result", ""),
            source_file=test.get("source-file", ""),
            source_line=test.get("source-line", ""),
            time=_float_attr(test, "time"),
            time_rtf=test.get("time-rtf", ""),
            type=test.get("type", ""),
            failure=XUnitParser._parse_failure(_last_child(test, "failure")),
            output=_child_text(test, "output"),
            reason=_child_text(test, "reason"),
            traits=[
                XUnitTrait(name=t.get("name", ""), value=t.get("value", ""))
                for t in test.findall("{*}traits/{*}trait")
            ],
            warnings=[_text(w) for w in test.findall("{*}warnings/{*}warning")],
        )

    @staticmethod
    def _parse_failure(failure: ET.Element | None) -> XUnitFailure:
        """Parse a ``failure`` element; a missing one yields an empty failure."""
        if failure is None:
            return XUnitFailure()

        return XUnitFailure(
            exception_type=failure.get("exception-type", ""),
            message=_child_text(failure, "message"),
            stack_trace=_child_text(failure, "stack-trace"),
        )

    @staticmethod
    def _parse_error(error: ET.Element) -> XUnitError:
        """Parse an ``errors/error`` element."""
        return XUnitError(
            name=error.get("name", ""),
            type=error.get("type", ""),
            failure=XUnitParser._parse_failure(_last_child(error, "failure")),
        )


def _text(element: ET.Element) -> str:
    """Character data directly inside element, skipping nested elements."""
    return (element.text or "") + "".join(child.tail or "" for child in element)


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _last_child(element: ET.Element, tag: str) -> ET.Element | None:
    """Last child with the given local name; repeated elements overwrite earlier ones."""
    matches = element.findall("{*}" + tag)
    return matches[-1] if matches else None


def _child_text(element: ET.Element, tag: str) -> str:
    child = _last_child(element, tag)
    return _text(child) if child is not None else ""


def _int_attr(element: ET.Element, name: str) -> int:
    raw = element.get(name, "")
    if not raw:
        return 0
    try:
        return int(raw.strip())
    except ValueError as e:
        raise _bad_number(element, name, raw) from e


def _float_attr(element: ET.Element, name: str) -> float:
    raw = element.get(name, "")
    if not raw:
        return 0.0
    try:
        return float(raw.strip())
    except ValueError as e:
        raise _bad_number(element, name, raw) from e


def _bad_number(element: ET.Element, name: str, raw: str) -> DecodeError:
    tag = _local_name(element.tag)
    message = f'invalid numeric value "{raw}" for attribute "{name}" of <{tag}>'
    logger.warning("xunit_decode_failed", reason=message)
    return DecodeError(message)
