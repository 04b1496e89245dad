"""
Secret Store — named wallet secrets held in erasable memory.

Values are kept as UTF-8 ``bytearray`` buffers so ``erase()`` can zero
them before they are dropped. Python ``str`` objects handed in by callers
or returned by ``get()`` are immutable and can not be wiped; keep their
lifetime short.

Security Note:
    Never log secret values. Only log secret names and counts.
"""
import logging
from typing import Any, Optional
from collections.abc import Iterator, Mapping

import orjson

from .exceptions import DeserializationError, SerializationError

logger = logging.getLogger("wallet.crypto")

# Reserved names used by wallets; the store treats them as ordinary keys.
SECRET_SEED = "seed"
SECRET_LAST_SEED = "lastSeed"


def wipe(buf: bytearray) -> None:
    """Overwrite a buffer with zeros in place."""
    buf[:] = b"\x00" * len(buf)


class SecretStore:
    """In-memory mapping of secret name to secret value.

    Usable as a context manager; secrets are erased when the block exits,
    whether normally or through an exception::

        with SecretStore.from_bytes(plaintext) as secrets:
            seed, ok = secrets.get(SECRET_SEED)

    Not thread-safe: callers sharing one store must serialize access.
    """

    def __init__(self, initial: Optional[Mapping[str, str]] = None) -> None:
        self._secrets: dict[str, bytearray] = {}
        if initial:
            for key, value in initial.items():
                self.set(key, value)

    @classmethod
    def from_bytes(cls, data: bytes) -> "SecretStore":
        """Create a store populated from ``serialize()`` output.

        Raises:
            DeserializationError: If data is malformed.
        """
        store = cls()
        store.deserialize(data)
        return store

    def __repr__(self) -> str:
        return f"<SecretStore keys={sorted(self._secrets)}>"

    # --- Magic Methods ---

    def __len__(self) -> int:
        return len(self._secrets)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._secrets))

    def __contains__(self, key: object) -> bool:
        return key in self._secrets

    def __enter__(self) -> "SecretStore":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.erase()

    # --- Properties ---

    @property
    def empty(self) -> bool:
        return not self._secrets

    def keys(self) -> list[str]:
        """Return the secret names currently stored."""
        return list(self._secrets)

    # --- Public API ---

    def get(self, key: str) -> tuple[str, bool]:
        """Return ``(value, found)``; a missing key gives ``("", False)``."""
        buf = self._secrets.get(key)
        if buf is None:
            return "", False
        return buf.decode("utf-8"), True

    def set(self, key: str, value: str) -> None:
        """Insert or overwrite a secret. The previous value buffer is zeroed."""
        new = bytearray(value.encode("utf-8"))
        old = self._secrets.get(key)
        self._secrets[key] = new
        if old is not None:
            wipe(old)

    def serialize(self) -> bytes:
        """Encode all secrets as a JSON object.

        Raises:
            SerializationError: If the encoder fails.
        """
        try:
            return orjson.dumps(
                {key: buf.decode("utf-8") for key, buf in self._secrets.items()}
            )
        except (orjson.JSONEncodeError, UnicodeDecodeError) as err:
            raise SerializationError(f"Can not serialize secrets: {err}") from err

    def deserialize(self, data: bytes) -> None:
        """Merge secrets from ``serialize()`` output into the store.

        The whole payload is validated before anything is applied, so on
        error the store is left unchanged.

        Raises:
            DeserializationError: If data is not a JSON object of strings.
        """
        try:
            decoded = orjson.loads(data)
        except (orjson.JSONDecodeError, TypeError) as err:
            raise DeserializationError(
                f"Can not deserialize secrets: {err}"
            ) from err
        if not isinstance(decoded, dict):
            raise DeserializationError(
                f"Serialized secrets must be an object, got {type(decoded).__name__}"
            )
        for key, value in decoded.items():
            if not isinstance(value, str):
                raise DeserializationError(
                    f"Secret {key!r} must be a string, got {type(value).__name__}"
                )
        for key, value in decoded.items():
            self.set(key, value)

    def erase(self) -> None:
        """Zero every value, then remove every key.

        Each value is overwritten before its key is removed. Safe to call
        repeatedly and on an empty store.
        """
        count = len(self._secrets)
        for key in list(self._secrets):
            wipe(self._secrets[key])
            del self._secrets[key]
        if count:
            logger.debug("Erased %d secret(s)", count)
