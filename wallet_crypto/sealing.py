"""
Sealing helpers — encrypt a SecretStore under a password and back.

    registry = CipherRegistry.default()
    sealed = seal_secrets(registry, store, "scrypt-chacha20poly1305", password)
    store = unseal_secrets(registry, sealed, "scrypt-chacha20poly1305", password)

The serialized plaintext is copied into a bytearray that is zeroed before
returning. The immutable ``bytes`` produced by ``SecretStore.serialize()``
and by the cipher can not be wiped and live until garbage collected (see
the threat-model note in the package docstring).

``AuthenticationFailure`` from the cipher propagates unchanged so callers
can ask for the password again.
"""
import logging
from typing import Any

from .ciphers import Password
from .registry import CipherRegistry, validate_identifier
from .secrets_store import SecretStore, wipe

logger = logging.getLogger("wallet.crypto")


def seal_secrets(
    registry: CipherRegistry,
    store: SecretStore,
    crypto_type: Any,
    password: Password,
) -> bytes:
    """Serialize and encrypt all secrets of ``store``.

    Args:
        registry: Cipher registry holding the suite.
        store: Secrets to protect.
        crypto_type: ``CryptoType`` or crypto type name.
        password: Password as str (UTF-8) or bytes.

    Returns:
        Ciphertext bytes.

    Raises:
        InvalidIdentifierError: If crypto_type is unknown.
        UnknownCipherError: If the registry has no cipher for crypto_type.
        SerializationError: If the store can not be serialized.
    """
    crypto_type = validate_identifier(crypto_type)
    cryptor = registry.resolve(crypto_type)
    plaintext = bytearray(store.serialize())
    try:
        sealed = cryptor.encrypt(plaintext, password)
    finally:
        wipe(plaintext)
    logger.debug("Sealed %d secret(s) with %s", len(store), crypto_type)
    return sealed


def unseal_secrets(
    registry: CipherRegistry,
    data: bytes,
    crypto_type: Any,
    password: Password,
) -> SecretStore:
    """Decrypt and deserialize secrets sealed by ``seal_secrets``.

    Returns:
        A new SecretStore; the caller owns it and must erase it.

    Raises:
        InvalidIdentifierError: If crypto_type is unknown.
        UnknownCipherError: If the registry has no cipher for crypto_type.
        AuthenticationFailure: On wrong password or modified ciphertext.
        MalformedCiphertextError: If data is not a valid ciphertext.
        DeserializationError: If the decrypted payload is malformed.
    """
    crypto_type = validate_identifier(crypto_type)
    cryptor = registry.resolve(crypto_type)
    plaintext = bytearray(cryptor.decrypt(data, password))
    try:
        store = SecretStore.from_bytes(plaintext)
    finally:
        wipe(plaintext)
    logger.debug("Unsealed %d secret(s) with %s", len(store), crypto_type)
    return store
