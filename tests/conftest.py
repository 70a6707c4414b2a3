"""
Root conftest.py - Global configuration for all test layers.

Test Layers:
    - unit/       : Unit tests (no network, stubs faked)
"""
import os
import sys

import pytest

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)


# =============================================================================
# Shared fixtures
# =============================================================================

@pytest.fixture
def tls_endpoint():
    from zitadel_client import Endpoint
    return Endpoint.new("example.com")


@pytest.fixture
def plaintext_endpoint():
    from zitadel_client import Endpoint, with_insecure
    return Endpoint.new("localhost", with_insecure("8080"))
