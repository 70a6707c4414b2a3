"""
Unit Test Layer Configuration

Usage:
    pytest tests/unit -v                 # All unit tests
    pytest tests/unit -m unit -v         # By marker
"""
import os
import sys

import pytest

# Add project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))


def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )


class FakeStub:
    """Stand-in for a generated *ServiceStub"""

    def __init__(self, channel):
        self.channel = channel


@pytest.fixture
def fake_stubs():
    """Resolve every service to FakeStub instead of importing generated code"""
    from unittest.mock import patch

    with patch('zitadel_client.client._load_stub_factory', return_value=FakeStub) as loader:
        yield loader
