"""
nemwallet - wallet accounts with remote harvesting support.

Key features:
- secp256k1 key pairs and Base58Check account addresses
- WalletAccount with a lazily generated remote harvesting key
- Field-based serialization with explicit optional fields
- TOML / environment configuration and structured logging
"""

__version__ = "1.0.0"
__all__ = [
    "crypto_utils",
    "address",
    "serialization",
    "endpoint",
    "wallet_account",
    "config",
    "logging_config",
]
