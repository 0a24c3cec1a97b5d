"""
Shared pytest fixtures for the nemwallet test suite.
"""

import os
import sys

import pytest

# Ensure the project root is importable before pip install (run_wallet.py)
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from nemwallet_core.crypto_utils import PrivateKey  # noqa: E402
from nemwallet_core.endpoint import NodeEndpoint  # noqa: E402
from nemwallet_core.wallet_account import WalletAccount  # noqa: E402

# secp256k1 private key 1; its public key is the curve generator G.
GENERATOR_KEY = 1
# Uncompressed P2PKH address of G with version byte 0x00.
GENERATOR_ADDRESS_V0 = "1EHNa6Q4Jz2uvNExL497mE43ikXhwF6kZm"


@pytest.fixture
def account():
    """Fresh account without remote harvesting material."""
    return WalletAccount.create()


@pytest.fixture
def generator_key():
    return PrivateKey(GENERATOR_KEY)


@pytest.fixture
def endpoint():
    return NodeEndpoint("http", "10.0.0.5", 7890)
