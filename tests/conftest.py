"""
Pytest configuration and fixtures
"""
import sys
from pathlib import Path

import pytest

# Add project root to Python path
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from tests.fakes import FakeRobotEvents  # noqa: E402


@pytest.fixture
def fake():
    """Empty fake RobotEvents API; tests load the payloads they need."""
    return FakeRobotEvents()
