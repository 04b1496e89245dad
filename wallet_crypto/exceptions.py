"""
Wallet Crypto Errors.

Every error raised by this package derives from ``WalletCryptoError``.
Backend exceptions (orjson, binascii, cryptography) are translated at the
boundary and chained, so the original cause stays available as
``__cause__``.
"""
from typing import Any


class WalletCryptoError(Exception):
    """Base error for wallet crypto operations."""


class InvalidIdentifierError(WalletCryptoError, ValueError):
    """Raised when a cipher-suite name is not a known crypto type."""

    def __init__(self, identifier: Any):
        self.identifier = identifier
        super().__init__(f"Unknown crypto type: {identifier!r}")


class UnknownCipherError(WalletCryptoError, LookupError):
    """Raised when a valid crypto type has no cipher registered for it."""

    def __init__(self, crypto_type: Any):
        self.crypto_type = crypto_type
        super().__init__(
            f"Can not find crypto {crypto_type!s} in crypto table"
        )


class SerializationError(WalletCryptoError, ValueError):
    """Raised when secrets can not be encoded."""


class DeserializationError(WalletCryptoError, ValueError):
    """Raised when serialized secrets are malformed."""


class MissingPasswordError(WalletCryptoError, ValueError):
    """Raised when encrypt or decrypt is called with an empty password."""

    def __init__(self, message: str = "Missing password"):
        super().__init__(message)


class MalformedCiphertextError(WalletCryptoError, ValueError):
    """Raised when ciphertext is structurally invalid (encoding, length, header)."""


class AuthenticationFailure(WalletCryptoError):
    """Decryption ran but the integrity check failed.

    Means a wrong password or tampered ciphertext. The wrapped error is kept
    in ``err`` and, when raised with ``raise ... from err``, in ``__cause__``.
    """

    def __init__(self, err: BaseException):
        self.err = err
        super().__init__(err)

    def __str__(self) -> str:
        return str(self.err)


class ChecksumMismatchError(WalletCryptoError, ValueError):
    """Decrypted data does not match its checksum; wrapped by AuthenticationFailure."""
