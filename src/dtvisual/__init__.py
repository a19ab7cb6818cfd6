"""dtvisual - hierarchical models of .NET xUnit test runs."""

__version__ = "0.1.0"

from dtvisual.core.exceptions import DecodeError
from dtvisual.core.models import Assembly, TestCase, TestGroup, TestRun
from dtvisual.loader import load, load_file

__all__ = [
    "Assembly",
    "DecodeError",
    "TestCase",
    "TestGroup",
    "TestRun",
    "load",
    "load_file",
]
