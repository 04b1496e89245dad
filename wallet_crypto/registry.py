"""
Cipher Registry — maps crypto type names to cipher suites.

Supported suites are listed once in ``CryptoType``. A registry is an
immutable table from ``CryptoType`` to a shared ``Cryptor`` instance, built
once (usually through ``CipherRegistry.default()``) and passed to whoever
needs it. To support a new cipher suite, add it to ``CryptoType`` and
register an instance in ``CipherRegistry.default``.
"""
import logging
from enum import Enum
from types import MappingProxyType
from typing import Any, Optional, TYPE_CHECKING
from collections.abc import Iterator, Mapping

from .cryptor import Cryptor
from .ciphers import DEFAULT_SHA256_XOR, Password, ScryptChacha20Poly1305
from .exceptions import InvalidIdentifierError, UnknownCipherError

if TYPE_CHECKING:
    from .config import CryptoConfig

logger = logging.getLogger("wallet.crypto")


class CryptoType(str, Enum):
    """Names of the supported wallet cipher suites."""

    SHA256_XOR = "sha256-xor"
    SCRYPT_CHACHA20POLY1305 = "scrypt-chacha20poly1305"

    def __str__(self) -> str:
        return self.value


def validate_identifier(raw: Any) -> CryptoType:
    """Convert a raw name into a ``CryptoType``.

    Only exact matches are accepted: no trimming, no case folding and no
    fallback to a default suite.

    Raises:
        InvalidIdentifierError: If ``raw`` is not a known crypto type name.
    """
    if isinstance(raw, CryptoType):
        return raw
    if not isinstance(raw, str):
        raise InvalidIdentifierError(raw)
    try:
        return CryptoType(raw)
    except ValueError:
        raise InvalidIdentifierError(raw) from None


class CipherRegistry:
    """Read-only table of cipher suites keyed by ``CryptoType``.

    Cipher instances are stateless and shared by every caller; the registry
    itself never changes after construction.
    """

    def __init__(self, table: Mapping[Any, Cryptor]):
        crypto_table: dict[CryptoType, Cryptor] = {}
        for name, cryptor in table.items():
            crypto_type = validate_identifier(name)
            if not isinstance(cryptor, Cryptor):
                raise TypeError(
                    f"Cipher registered for {crypto_type} must provide "
                    f"encrypt() and decrypt(), got {type(cryptor).__name__}"
                )
            crypto_table[crypto_type] = cryptor
        self._table = MappingProxyType(crypto_table)
        logger.debug(
            "Cipher registry built with %d suite(s): %s",
            len(self._table), [str(t) for t in self._table],
        )

    @classmethod
    def default(cls, config: Optional["CryptoConfig"] = None) -> "CipherRegistry":
        """Build a registry holding every supported cipher suite.

        Args:
            config: Optional configuration with the scrypt cost parameters.

        Returns:
            Registry with one instance per ``CryptoType``.
        """
        if config is None:
            scrypt = ScryptChacha20Poly1305()
        else:
            scrypt = ScryptChacha20Poly1305(
                n=config.scrypt_n,
                r=config.scrypt_r,
                p=config.scrypt_p,
                key_len=config.scrypt_key_len,
            )
        return cls({
            CryptoType.SHA256_XOR: DEFAULT_SHA256_XOR,
            CryptoType.SCRYPT_CHACHA20POLY1305: scrypt,
        })

    def __repr__(self) -> str:
        return f"<CipherRegistry {[str(t) for t in self._table]}>"

    def __contains__(self, crypto_type: object) -> bool:
        return crypto_type in self._table

    def __len__(self) -> int:
        return len(self._table)

    def __iter__(self) -> Iterator[CryptoType]:
        return iter(self._table)

    def crypto_types(self) -> list[CryptoType]:
        """Return the registered crypto types."""
        return list(self._table)

    def resolve(self, crypto_type: CryptoType) -> Cryptor:
        """Return the cipher registered for a validated crypto type.

        Raises:
            UnknownCipherError: If no cipher is registered for ``crypto_type``.
        """
        try:
            return self._table[crypto_type]
        except KeyError:
            raise UnknownCipherError(crypto_type) from None

    def get_crypto(self, raw: Any) -> Cryptor:
        """Validate a raw crypto type name and resolve its cipher.

        Raises:
            InvalidIdentifierError: If ``raw`` is not a known crypto type.
            UnknownCipherError: If the crypto type has no registered cipher.
        """
        return self.resolve(validate_identifier(raw))

    def encrypt(self, crypto_type: Any, data: bytes, password: Password) -> bytes:
        """Encrypt ``data`` with the cipher registered for ``crypto_type``."""
        return self.get_crypto(crypto_type).encrypt(data, password)

    def decrypt(self, crypto_type: Any, data: bytes, password: Password) -> bytes:
        """Decrypt ``data`` with the cipher registered for ``crypto_type``.

        Errors raised by the cipher, including ``AuthenticationFailure``,
        propagate unchanged.
        """
        return self.get_crypto(crypto_type).decrypt(data, password)
