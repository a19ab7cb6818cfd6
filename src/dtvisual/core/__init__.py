"""Core model and projection for xUnit test runs."""

from dtvisual.core.exceptions import DecodeError
from dtvisual.core.models import Assembly, TestCase, TestGroup, TestRun
from dtvisual.core.projector import ReportProjector, project

__all__ = [
    "Assembly",
    "DecodeError",
    "ReportProjector",
    "TestCase",
    "TestGroup",
    "TestRun",
    "project",
]
