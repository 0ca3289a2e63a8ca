"""Shared fixtures for sentinel-verify tests."""

import sys
from pathlib import Path

import pytest
from cryptography.hazmat.primitives.asymmetric import ed25519

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent))

from helpers.anchor_factory import AnchorSigner  # noqa: E402


@pytest.fixture
def signer():
    """A fresh ACTIVE signing key."""
    return AnchorSigner(ed25519.Ed25519PrivateKey.generate(), key_id="a1b2c3d4e5f60718-active")


@pytest.fixture
def signer2():
    """A second independent key, used for lifecycle tests."""
    return AnchorSigner(ed25519.Ed25519PrivateKey.generate(), key_id="ffee0011deadbeef-second")
