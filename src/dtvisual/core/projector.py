"""Projection of decoded xUnit results into the display model.

Tests are grouped per assembly, first by trait key (``"<name> - <value>"``,
with ``""`` for tests without traits) and then by the nested types encoded
in their names with ``+``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dtvisual.core.models import Assembly, TestCase, TestGroup, TestRun
from dtvisual.logging import get_logger
from dtvisual.utils.collections import contains

if TYPE_CHECKING:
    from collections.abc import Iterator

    from dtvisual.parsers.xunit import XUnitAssembly, XUnitResult, XUnitTest

logger = get_logger(__name__)

NO_TRAIT_KEY = ""


class ReportProjector:
    """Builds a TestRun from a decoded xUnit result."""

    def project(self, result: XUnitResult) -> TestRun:
        """Convert a decoded result into a TestRun.

        Args:
            result: Decoded xUnit document.

        Returns:
            A freshly built TestRun; nothing is shared with earlier calls.
        """
        return TestRun(
            computer=result.computer,
            user=result.user,
            start_time_rtf=result.start_rtf,
            end_time_rtf=result.finish_rtf,
            timestamp=result.timestamp,
            assemblies=[self.project_assembly(assembly) for assembly in result.assemblies],
        )

    def project_assembly(self, assembly: XUnitAssembly) -> Assembly:
        """Convert a single decoded assembly."""
        name = assembly_name(assembly.full_name)
        groups = self.group_tests(assembly)
        logger.debug("assembly_projected", assembly=name, groups=len(groups))

        return Assembly(
            name=name,
            error_count=assembly.error_count,
            passed_count=assembly.passed_count,
            failed_count=assembly.failed_count,
            not_run_count=assembly.not_run_count,
            total_count=assembly.total,
            run_date=assembly.run_date,
            run_time=assembly.run_time,
            time=assembly.time_rtf,
            groups=groups,
        )

    def group_tests(self, assembly: XUnitAssembly) -> list[TestGroup]:
        """Group the tests of an assembly per trait, then per nested type."""
        if not assembly.has_tests:
            return []

        roots = []
        for key in unique_trait_keys(assembly):
            root = TestGroup(name=key)
            roots.append(root)

            for tc in tests_with_trait(assembly, key):
                if tc.has_display_name or not tc.is_nested:
                    root.tests.append(tc)
                else:
                    _place_nested(root, tc)

        return roots


def _place_nested(root: TestGroup, tc: TestCase) -> None:
    """Walk the nested names of tc down from root and attach it at the end."""
    group = root
    for name in tc.nested_names:
        group = group.child(name)
    group.tests.append(tc)


def assembly_name(full_name: str) -> str:
    """Return the last path segment of an assembly name.

    ``/`` is tried first, then ``\\``; a name without either is returned
    unchanged.
    """
    separator = "/" if "/" in full_name else "\\"
    return full_name[full_name.rfind(separator) + 1 :]


def unique_trait_keys(assembly: XUnitAssembly) -> list[str]:
    """Return the trait keys of an assembly in first-seen order.

    The list always starts with the key for tests without traits.
    """
    keys = [NO_TRAIT_KEY]

    for test in _iter_tests(assembly):
        for trait in test.traits:
            if not contains(keys, trait.key):
                keys.append(trait.key)

    return keys


def tests_with_trait(assembly: XUnitAssembly, key: str) -> list[TestCase]:
    """Return the tests of an assembly that belong to a trait key.

    A test is listed once per matching trait.
    """
    matches = []

    for test in _iter_tests(assembly):
        if key == NO_TRAIT_KEY and not test.traits:
            matches.append(TestCase(name=test.name, result=test.result))
        else:
            for trait in test.traits:
                if trait.key == key:
                    matches.append(TestCase(name=test.name, result=test.result))

    return matches


def _iter_tests(assembly: XUnitAssembly) -> Iterator[XUnitTest]:
    for collection in assembly.collections:
        yield from collection.tests


def project(result: XUnitResult) -> TestRun:
    """Convert a decoded xUnit result into a TestRun."""
    return ReportProjector().project(result)
