"""Wallet Crypto — pluggable cipher suites and an erasable secret store.

Security Note (Threat Model):
    Secret values are zeroed in the store's own buffers on erase, but
    Python ``str`` copies handed out by ``SecretStore.get()`` are immutable
    and live until garbage collected. This is an accepted limitation.
"""

from .version import __version__
from .exceptions import (
    WalletCryptoError,
    InvalidIdentifierError,
    UnknownCipherError,
    SerializationError,
    DeserializationError,
    MissingPasswordError,
    MalformedCiphertextError,
    ChecksumMismatchError,
    AuthenticationFailure,
)
from .cryptor import Cryptor
from .ciphers import Sha256Xor, ScryptChacha20Poly1305
from .registry import CryptoType, CipherRegistry, validate_identifier
from .config import CryptoConfig
from .secrets_store import SecretStore, SECRET_SEED, SECRET_LAST_SEED
from .sealing import seal_secrets, unseal_secrets

__all__ = [
    "__version__",
    "WalletCryptoError",
    "InvalidIdentifierError",
    "UnknownCipherError",
    "SerializationError",
    "DeserializationError",
    "MissingPasswordError",
    "MalformedCiphertextError",
    "ChecksumMismatchError",
    "AuthenticationFailure",
    "Cryptor",
    "Sha256Xor",
    "ScryptChacha20Poly1305",
    "CryptoType",
    "CipherRegistry",
    "validate_identifier",
    "CryptoConfig",
    "SecretStore",
    "SECRET_SEED",
    "SECRET_LAST_SEED",
    "seal_secrets",
    "unseal_secrets",
]
