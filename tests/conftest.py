import pytest

from wallet_crypto import CipherRegistry, CryptoConfig, SecretStore


@pytest.fixture
def fast_config():
    """Config with a cheap scrypt cost so tests stay quick."""
    return CryptoConfig(scrypt_n=1 << 10, scrypt_r=8, scrypt_p=1)


@pytest.fixture
def registry(fast_config):
    """Registry holding every supported suite."""
    return CipherRegistry.default(fast_config)


@pytest.fixture
def store():
    """Create a fresh SecretStore, erased after the test."""
    with SecretStore() as secrets:
        yield secrets
