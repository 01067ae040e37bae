"""
Shared test fixtures and configuration.
"""

import textwrap
from datetime import date
from pathlib import Path

import pytest

from xtask.adapters.mock import MockAdapter
from xtask.core.models.config import XtaskConfig


@pytest.fixture
def today() -> date:
    """A fixed date so copyright ranges are stable."""
    return date(2024, 6, 1)


@pytest.fixture
def config() -> XtaskConfig:
    """Default configuration."""
    return XtaskConfig()


@pytest.fixture
def mock_adapter() -> MockAdapter:
    return MockAdapter()


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """A minimal workspace: xtask.yml and a README template with one include."""
    (tmp_path / "xtask.yml").write_text(
        textwrap.dedent("""\
            toolchains:
              stable: "1.73"
              nightly: nightly-2023-10-14
            codegen:
              start_year: 2022
              copyright_holder: Test Authors
        """)
    )
    (tmp_path / "README.tmpl.md").write_text('# Demo\n\n{{ include "intro.md" }}\n')
    (tmp_path / "intro.md").write_text("An example workspace.\n")
    return tmp_path
