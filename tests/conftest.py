# pytest configuration for life360_api tests
import sys
from pathlib import Path

import pytest

# Ensure the package root is in sys.path for proper imports
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from tests.utils.fakes import FakeIdentityProvider, FakeTransport  # noqa: E402


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def provider(transport):
    return FakeIdentityProvider(transport)
