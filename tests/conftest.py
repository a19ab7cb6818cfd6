"""Pytest configuration and fixtures."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
import structlog

from dtvisual.config import get_settings

if TYPE_CHECKING:
    from collections.abc import Generator


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--run-fuzz",
        action="store_true",
        default=False,
        help="Run fuzz tests (slower, uses hypothesis)",
    )


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers",
        "fuzz: marks tests as fuzz tests (slower, uses hypothesis)",
    )


def pytest_collection_modifyitems(config, items):
    """Skip fuzz tests unless explicitly enabled."""
    if config.getoption("--run-fuzz"):
        return

    skip_fuzz = pytest.mark.skip(reason="need --run-fuzz option to run")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip_fuzz)


@pytest.fixture(autouse=True)
def reset_state() -> Generator[None, None, None]:
    """Drop cached settings and logging configuration around each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    structlog.reset_defaults()


@pytest.fixture
def minimal_xml() -> bytes:
    """One assembly holding one trait-less, non-nested test."""
    return b"""<?xml version="1.0" encoding="utf-8"?>
<assemblies timestamp="11/02/2023 13:25:41" computer="BUILD-01" user="ci">
  <assembly name="/build/bin/Tests.dll" total="1" passed="1" failed="0" skipped="0">
    <collection name="Test collection for Tests.Calculator" total="1">
      <test name="Tests.Calculator.Adds" type="Tests.Calculator" method="Adds" result="Pass" />
    </collection>
  </assembly>
</assemblies>
"""


@pytest.fixture
def sample_xml() -> bytes:
    """A report exercising traits, nested classes, failures and errors."""
    return b"""<?xml version="1.0" encoding="utf-8"?>
<assemblies schema-version="3" id="run-1" computer="BUILD-01" user="ci"
            timestamp="11/02/2023 13:25:41" start-rtf="2023-11-02T13:25:40.1Z"
            finish-rtf="2023-11-02T13:25:43.9Z">
  <assembly name="C:\\build\\bin\\Shop.Tests.dll" config-file="Shop.Tests.dll.config"
            environment="64-bit .NET 8.0.0 [collection-per-class, parallel (8 threads)]"
            test-framework="xUnit.net 2.6.1" target-framework=".NETCoreApp,Version=v8.0"
            run-date="2023-11-02" run-time="13:25:40" time="1.523" time-rtf="00:00:01.5230000"
            total="5" passed="3" failed="1" skipped="1" not-run="0" errors="1" id="asm-1">
    <errors>
      <error type="fixture-cleanup" name="Shop.Tests.DatabaseFixture">
        <failure exception-type="System.InvalidOperationException">
          <message>Connection already closed</message>
          <stack-trace>at Shop.Tests.DatabaseFixture.Dispose()</stack-trace>
        </failure>
      </error>
    </errors>
    <collection name="Test collection for Shop.Tests.CartTests" id="col-1" total="3"
                passed="2" failed="1" skipped="0" not-run="0" time="0.812">
      <test name="Shop.Tests.CartTests+Add.IncreasesCount" type="Shop.Tests.CartTests+Add"
            method="IncreasesCount" time="0.004" result="Pass" id="t-1"
            source-file="CartTests.cs" source-line="12">
        <traits>
          <trait name="Category" value="Fast" />
        </traits>
      </test>
      <test name="Shop.Tests.CartTests+Remove.DecreasesCount" type="Shop.Tests.CartTests+Remove"
            method="DecreasesCount" time="0.120" result="Fail" id="t-2">
        <failure exception-type="Xunit.Sdk.EqualException">
          <message>Assert.Equal() Failure: Expected 0, Actual 1</message>
          <stack-trace>at Shop.Tests.CartTests.Remove.DecreasesCount() in CartTests.cs:line 30</stack-trace>
        </failure>
        <output>Removing item 42</output>
        <traits>
          <trait name="Category" value="Fast" />
        </traits>
      </test>
      <test name="Cart can be emptied" type="Shop.Tests.CartTests" method="Empties"
            time="0.002" result="Pass" id="t-3" />
    </collection>
    <collection name="Test collection for Shop.Tests.CheckoutTests" id="col-2" total="2">
      <test name="Shop.Tests.CheckoutTests.PaysWithCard" type="Shop.Tests.CheckoutTests"
            method="PaysWithCard" time="0.701" result="Pass" id="t-4">
        <traits>
          <trait name="Category" value="Slow" />
        </traits>
        <warnings>
          <warning>Test took longer than expected</warning>
        </warnings>
      </test>
      <test name="Shop.Tests.CheckoutTests.PaysWithVoucher" type="Shop.Tests.CheckoutTests"
            method="PaysWithVoucher" time="0" result="Skip" id="t-5">
        <reason>Voucher service unavailable</reason>
      </test>
    </collection>
  </assembly>
</assemblies>
"""
