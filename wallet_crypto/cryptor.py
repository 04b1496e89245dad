"""Cipher capability interface shared by every cipher suite."""
from typing import Protocol, runtime_checkable


@runtime_checkable
class Cryptor(Protocol):
    """Encrypts and decrypts bytes under a password.

    Implementations hold no per-call state, so one instance can be shared
    and called from several threads at once. ``decrypt`` must raise
    :class:`~wallet_crypto.exceptions.AuthenticationFailure` when the
    password is wrong or the ciphertext was tampered with.
    """

    def encrypt(self, data: bytes, password: bytes) -> bytes:
        ...

    def decrypt(self, data: bytes, password: bytes) -> bytes:
        ...
