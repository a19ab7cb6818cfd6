"""Parsers for .NET test report formats."""

from dtvisual.parsers.xunit import (
    XUnitAssembly,
    XUnitCollection,
    XUnitError,
    XUnitFailure,
    XUnitParser,
    XUnitResult,
    XUnitTest,
    XUnitTrait,
)

__all__ = [
    "XUnitAssembly",
    "XUnitCollection",
    "XUnitError",
    "XUnitFailure",
    "XUnitParser",
    "XUnitResult",
    "XUnitTest",
    "XUnitTrait",
]
