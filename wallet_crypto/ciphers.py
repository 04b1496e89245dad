"""
Wallet Cipher Suites — password based encryption of serialized secrets.

Two suites are provided:
- ``sha256-xor``: SHA256 keystream XOR with a plaintext checksum
  (legacy wallets).
- ``scrypt-chacha20poly1305``: scrypt key derivation and
  ChaCha20-Poly1305 AEAD.

Both produce base64 text so ciphertexts can be stored inside JSON wallet
files as-is.

Security Note:
    Never log passwords, plaintext or ciphertext values.
    Salts and nonces are random per call; instances keep no call state.
"""
import os
import struct
import base64
import binascii
from typing import Any, Union

import orjson
from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes, constant_time
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt
from cryptography.hazmat.primitives.ciphers.aead import ChaCha20Poly1305

from .exceptions import (
    AuthenticationFailure,
    ChecksumMismatchError,
    MalformedCiphertextError,
    MissingPasswordError,
)

BytesLike = Union[bytes, bytearray, memoryview]
Password = Union[str, BytesLike]


def password_bytes(password: Password) -> bytes:
    """Return the password as bytes, encoding ``str`` as UTF-8.

    Raises:
        MissingPasswordError: If the password is empty.
    """
    if isinstance(password, str):
        password = password.encode("utf-8")
    password = bytes(password)
    if not password:
        raise MissingPasswordError()
    return password


def _b64decode(data: Union[str, BytesLike]) -> bytes:
    if isinstance(data, (bytearray, memoryview)):
        data = bytes(data)
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError, TypeError) as err:
        raise MalformedCiphertextError(
            f"Ciphertext is not valid base64: {err}"
        ) from err


def _sha256(*parts: bytes) -> bytes:
    digest = hashes.Hash(hashes.SHA256())
    for part in parts:
        digest.update(part)
    return digest.finalize()


# ---------------------------------------------------------------------------
# sha256-xor
# ---------------------------------------------------------------------------

class Sha256Xor:
    """SHA256 keystream cipher with an embedded plaintext checksum.

    Format (before base64): [checksum 32B][nonce 32B][encrypted blocks]

    The plaintext is prefixed with its length (uint32 BE) and zero padded
    to a multiple of 32 bytes. Block ``i`` is XORed with
    ``SHA256(SHA256(nonce + password) + uint64_be(i))``. A checksum mismatch
    after decryption means the password is wrong or the data was modified.
    """

    BLOCK_SIZE = 32
    NONCE_SIZE = 32
    CHECKSUM_SIZE = 32
    LENGTH_SIZE = 4

    def _xor_blocks(self, payload: bytes, nonce: bytes, password: bytes) -> bytes:
        stream_key = _sha256(nonce, password)
        out = bytearray(len(payload))
        for index, offset in enumerate(range(0, len(payload), self.BLOCK_SIZE)):
            pad = _sha256(stream_key, struct.pack("!Q", index))
            block = payload[offset:offset + self.BLOCK_SIZE]
            for i, byte in enumerate(block):
                out[offset + i] = byte ^ pad[i]
        return bytes(out)

    def encrypt(self, data: BytesLike, password: Password) -> bytes:
        """Encrypt data with password.

        Returns:
            base64 encoded ciphertext.

        Raises:
            MissingPasswordError: If the password is empty.
            ValueError: If data is larger than 4GiB.
        """
        password = password_bytes(password)
        data = bytes(data)
        if len(data) > 0xFFFFFFFF:
            raise ValueError("sha256-xor can not encrypt more than 4GiB")
        payload = struct.pack("!I", len(data)) + data
        payload += b"\x00" * (-len(payload) % self.BLOCK_SIZE)
        checksum = _sha256(payload)
        nonce = os.urandom(self.NONCE_SIZE)
        encrypted = self._xor_blocks(payload, nonce, password)
        return base64.b64encode(checksum + nonce + encrypted)

    def decrypt(self, data: Union[str, BytesLike], password: Password) -> bytes:
        """Decrypt base64 ciphertext produced by ``encrypt``.

        Raises:
            MissingPasswordError: If the password is empty.
            MalformedCiphertextError: If the data can not be a sha256-xor ciphertext.
            AuthenticationFailure: On wrong password or modified data.
        """
        password = password_bytes(password)
        raw = _b64decode(data)
        header = self.CHECKSUM_SIZE + self.NONCE_SIZE
        body_len = len(raw) - header
        if body_len < self.BLOCK_SIZE or body_len % self.BLOCK_SIZE:
            raise MalformedCiphertextError(
                f"Invalid sha256-xor ciphertext length: {len(raw)} bytes"
            )
        checksum = raw[:self.CHECKSUM_SIZE]
        nonce = raw[self.CHECKSUM_SIZE:header]
        payload = self._xor_blocks(raw[header:], nonce, password)
        if not constant_time.bytes_eq(_sha256(payload), checksum):
            err = ChecksumMismatchError("Invalid password or corrupted data")
            raise AuthenticationFailure(err) from err
        length = struct.unpack("!I", payload[:self.LENGTH_SIZE])[0]
        if length > len(payload) - self.LENGTH_SIZE:
            raise MalformedCiphertextError(
                f"Length prefix {length} exceeds decrypted payload"
            )
        return payload[self.LENGTH_SIZE:self.LENGTH_SIZE + length]


# ---------------------------------------------------------------------------
# scrypt-chacha20poly1305
# ---------------------------------------------------------------------------

DEFAULT_SCRYPT_N = 1 << 15
DEFAULT_SCRYPT_R = 8
DEFAULT_SCRYPT_P = 1
MAX_SCRYPT_N = 1 << 20
MAX_SCRYPT_P = 16
MAX_SCRYPT_MEM = 1 << 30  # 128 * r * n bytes


def validate_scrypt_params(n: int, r: int, p: int, key_len: int) -> None:
    """Check scrypt cost parameters.

    Raises:
        ValueError: If a parameter is out of range.
    """
    for name, value in (("n", n), ("r", r), ("p", p), ("keyLen", key_len)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"scrypt {name} must be an integer, got {value!r}")
    if n < 2 or n & (n - 1):
        raise ValueError(f"scrypt n must be a power of two greater than 1, got {n}")
    if n > MAX_SCRYPT_N:
        raise ValueError(f"scrypt n must not exceed {MAX_SCRYPT_N}, got {n}")
    if r < 1 or p < 1 or p > MAX_SCRYPT_P:
        raise ValueError(f"Invalid scrypt r/p: r={r} p={p}")
    if 128 * r * n > MAX_SCRYPT_MEM:
        raise ValueError(
            f"scrypt n={n} r={r} needs more than {MAX_SCRYPT_MEM} bytes of memory"
        )
    if key_len != ScryptChacha20Poly1305.KEY_LENGTH:
        raise ValueError(
            f"keyLen must be {ScryptChacha20Poly1305.KEY_LENGTH}, got {key_len}"
        )


class ScryptChacha20Poly1305:
    """scrypt derived key with ChaCha20-Poly1305 authenticated encryption.

    Format (before base64):
        [header length 2B uint16 BE][header JSON][ciphertext + tag 16B]

    The header records the scrypt parameters, salt and nonce, and is
    authenticated as associated data. Decryption always uses the header
    parameters, not the instance ones.
    """

    SALT_SIZE = 32
    NONCE_SIZE = 12
    TAG_SIZE = 16
    KEY_LENGTH = 32
    HEADER_LEN_SIZE = 2

    def __init__(
        self,
        n: int = DEFAULT_SCRYPT_N,
        r: int = DEFAULT_SCRYPT_R,
        p: int = DEFAULT_SCRYPT_P,
        key_len: int = KEY_LENGTH,
    ):
        validate_scrypt_params(n, r, p, key_len)
        self._n = n
        self._r = r
        self._p = p
        self._key_len = key_len

    @property
    def n(self) -> int:
        return self._n

    @property
    def r(self) -> int:
        return self._r

    @property
    def p(self) -> int:
        return self._p

    @property
    def key_len(self) -> int:
        return self._key_len

    def __repr__(self) -> str:
        return (
            f"<ScryptChacha20Poly1305 n={self._n} r={self._r} "
            f"p={self._p} keyLen={self._key_len}>"
        )

    @staticmethod
    def _derive_key(password: bytes, salt: bytes, n: int, r: int, p: int, key_len: int) -> bytes:
        kdf = Scrypt(salt=salt, length=key_len, n=n, r=r, p=p)
        return kdf.derive(password)

    def encrypt(self, data: BytesLike, password: Password) -> bytes:
        """Encrypt data with password.

        Returns:
            base64 encoded header and ciphertext.

        Raises:
            MissingPasswordError: If the password is empty.
        """
        password = password_bytes(password)
        salt = os.urandom(self.SALT_SIZE)
        nonce = os.urandom(self.NONCE_SIZE)
        header = orjson.dumps({
            "n": self._n,
            "r": self._r,
            "p": self._p,
            "keyLen": self._key_len,
            "salt": base64.b64encode(salt).decode("ascii"),
            "nonce": base64.b64encode(nonce).decode("ascii"),
        })
        key = self._derive_key(password, salt, self._n, self._r, self._p, self._key_len)
        ct = ChaCha20Poly1305(key).encrypt(nonce, bytes(data), header)
        return base64.b64encode(
            struct.pack("!H", len(header)) + header + ct
        )

    def _parse_header(self, header: bytes) -> dict[str, Any]:
        try:
            meta = orjson.loads(header)
        except orjson.JSONDecodeError as err:
            raise MalformedCiphertextError(
                f"Invalid ciphertext header: {err}"
            ) from err
        if not isinstance(meta, dict):
            raise MalformedCiphertextError("Ciphertext header must be an object")
        try:
            validate_scrypt_params(meta["n"], meta["r"], meta["p"], meta["keyLen"])
            salt = _b64decode(meta["salt"])
            nonce = _b64decode(meta["nonce"])
        except MalformedCiphertextError:
            raise
        except KeyError as err:
            raise MalformedCiphertextError(
                f"Ciphertext header is missing {err}"
            ) from err
        except (ValueError, TypeError) as err:
            raise MalformedCiphertextError(
                f"Invalid ciphertext header: {err}"
            ) from err
        if len(nonce) != self.NONCE_SIZE:
            raise MalformedCiphertextError(
                f"Invalid nonce size: {len(nonce)} bytes"
            )
        meta["salt"] = salt
        meta["nonce"] = nonce
        return meta

    def decrypt(self, data: Union[str, BytesLike], password: Password) -> bytes:
        """Decrypt base64 ciphertext produced by ``encrypt``.

        Raises:
            MissingPasswordError: If the password is empty.
            MalformedCiphertextError: If encoding, header or length is invalid.
            AuthenticationFailure: On wrong password or modified data.
        """
        password = password_bytes(password)
        raw = _b64decode(data)
        if len(raw) < self.HEADER_LEN_SIZE:
            raise MalformedCiphertextError("Ciphertext too short")
        header_len = struct.unpack("!H", raw[:self.HEADER_LEN_SIZE])[0]
        header_end = self.HEADER_LEN_SIZE + header_len
        ct = raw[header_end:]
        if header_len == 0 or len(ct) < self.TAG_SIZE:
            raise MalformedCiphertextError(
                f"Ciphertext too short: {len(raw)} bytes"
            )
        header = raw[self.HEADER_LEN_SIZE:header_end]
        meta = self._parse_header(header)
        try:
            key = self._derive_key(
                password, meta["salt"], meta["n"], meta["r"], meta["p"], meta["keyLen"],
            )
        except MemoryError as err:
            raise MalformedCiphertextError(
                f"Ciphertext header scrypt parameters are too costly: {err}"
            ) from err
        try:
            return ChaCha20Poly1305(key).decrypt(meta["nonce"], ct, header)
        except InvalidTag as err:
            raise AuthenticationFailure(err) from err


DEFAULT_SHA256_XOR = Sha256Xor()
DEFAULT_SCRYPT_CHACHA20POLY1305 = ScryptChacha20Poly1305()
