"""Display model for xUnit test runs.

A ``TestRun`` holds one ``Assembly`` per tested binary. Each assembly owns a
forest of ``TestGroup`` trees: one root per trait key (the empty key first,
for tests without traits), and below it one level per nested type encoded
in the test names with ``+``.

    TestRun
    └── Assembly "Tests.dll"
        ├── TestGroup ""
        │   ├── TestCase "NS.Plain.Test"
        │   └── TestGroup "Outer"
        │       └── TestGroup "Inner"
        │           └── TestCase "NS.Outer+Inner.Test"
        └── TestGroup "Category - Fast"
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterator

NESTED_TYPE_MARKER = "+"


@dataclass
class TestCase:
    """A single test and its status."""

    __test__ = False  # Not a pytest test class

    name: str
    result: str = ""

    @property
    def has_display_name(self) -> bool:
        """True if the name contains spaces and no plus signs."""
        return " " in self.name and NESTED_TYPE_MARKER not in self.name

    @property
    def is_nested(self) -> bool:
        """True if the name contains one or more plus signs."""
        return NESTED_TYPE_MARKER in self.name

    @property
    def nested_names(self) -> list[str]:
        """Group label for each nesting level encoded in the name.

        ``NS.Outer+Inner+Leaf.Method`` yields ``["Outer", "Inner", "Leaf"]``:
        the namespace is stripped from the first part, the method from the
        last part, and parts in between are kept as they are.
        """
        parts = self.name.split(NESTED_TYPE_MARKER)

        names = [parts[0].rsplit(".", 1)[-1]]
        names.extend(parts[1:-1])
        names.append(parts[-1].split(".", 1)[0])
        return names

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"name": self.name, "result": self.result}


@dataclass
class TestGroup:
    """A named node holding test cases and child groups."""

    __test__ = False  # Not a pytest test class

    name: str
    tests: list[TestCase] = field(default_factory=list)
    groups: list[TestGroup] = field(default_factory=list)

    def find(self, name: str) -> TestGroup | None:
        """Return the child group with the given name, if any."""
        for group in self.groups:
            if group.name == name:
                return group
        return None

    def child(self, name: str) -> TestGroup:
        """Return the child group with the given name, creating it if missing."""
        group = self.find(name)
        if group is None:
            group = TestGroup(name=name)
            self.groups.append(group)
        return group

    def iter_tests(self) -> Iterator[TestCase]:
        """Yield every test case in this subtree, depth first."""
        yield from self.tests
        for group in self.groups:
            yield from group.iter_tests()

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "name": self.name,
            "tests": [tc.to_dict() for tc in self.tests],
            "groups": [g.to_dict() for g in self.groups],
        }


@dataclass
class Assembly:
    """The run of a single test assembly."""

    name: str
    error_count: int = 0
    passed_count: int = 0
    failed_count: int = 0
    not_run_count: int = 0
    total_count: int = 0
    run_date: str = ""
    run_time: str = ""
    time: str = ""
    groups: list[TestGroup] = field(default_factory=list)

    def group(self, trait_key: str) -> TestGroup | None:
        """Return the root group for a trait key, if any."""
        for group in self.groups:
            if group.name == trait_key:
                return group
        return None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "name": self.name,
            "error_count": self.error_count,
            "passed_count": self.passed_count,
            "failed_count": self.failed_count,
            "not_run_count": self.not_run_count,
            "total_count": self.total_count,
            "run_date": self.run_date,
            "run_time": self.run_time,
            "time": self.time,
            "groups": [g.to_dict() for g in self.groups],
        }


@dataclass
class TestRun:
    """Container for a complete xUnit test run."""

    __test__ = False  # Not a pytest test class

    computer: str = ""
    user: str = ""
    start_time_rtf: str = ""
    end_time_rtf: str = ""
    timestamp: str = ""
    assemblies: list[Assembly] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "computer": self.computer,
            "user": self.user,
            "start_time_rtf": self.start_time_rtf,
            "end_time_rtf": self.end_time_rtf,
            "timestamp": self.timestamp,
            "assemblies": [a.to_dict() for a in self.assemblies],
        }
