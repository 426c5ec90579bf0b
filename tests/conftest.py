# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Add project root and this directory to sys.path so "starlogic" and the
# shared helpers import without installing.
TESTS_DIR = Path(__file__).resolve().parent
ROOT = TESTS_DIR.parent
for path in (ROOT, TESTS_DIR):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from starlogic.board import Board  # noqa: E402
from helpers import SAMPLE_REGIONS, tags_from_strings  # noqa: E402


@pytest.fixture
def sample_tags():
    return tags_from_strings(SAMPLE_REGIONS)


@pytest.fixture
def sample_board(sample_tags):
    return Board(10, 10, sample_tags)


@pytest.fixture
def sample_task(sample_tags):
    """The sample puzzle as a web-task string with 1-based region ids."""
    return ",".join(str(tag + 1) for row in sample_tags for tag in row)
