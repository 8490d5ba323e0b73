from __future__ import annotations

from pathlib import Path

import pytest

from envweave.environ import MappingEnvironment

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def store() -> MappingEnvironment:
    return MappingEnvironment({})
