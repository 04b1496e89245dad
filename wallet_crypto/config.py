"""
Wallet Crypto Configuration — validated cipher settings.

Reads settings from environment variables:
    WALLET_CRYPTO_TYPE = <crypto type name>  (default: scrypt-chacha20poly1305)
    WALLET_SCRYPT_N = <power of two>         (default: 32768)
    WALLET_SCRYPT_R = <int>                  (default: 8)
    WALLET_SCRYPT_P = <int>                  (default: 1)

Security Note:
    Passwords are never part of the configuration.
"""
import os
import logging

from pydantic import BaseModel, Field, field_validator, model_validator

from .ciphers import (
    DEFAULT_SCRYPT_N,
    DEFAULT_SCRYPT_R,
    DEFAULT_SCRYPT_P,
    ScryptChacha20Poly1305,
    validate_scrypt_params,
)
from .registry import CryptoType, validate_identifier

logger = logging.getLogger("wallet.crypto")


class CryptoConfig(BaseModel):
    """Validated wallet crypto configuration."""

    crypto_type: str = Field(default=CryptoType.SCRYPT_CHACHA20POLY1305.value)
    scrypt_n: int = Field(default=DEFAULT_SCRYPT_N)
    scrypt_r: int = Field(default=DEFAULT_SCRYPT_R, ge=1)
    scrypt_p: int = Field(default=DEFAULT_SCRYPT_P, ge=1)
    scrypt_key_len: int = Field(default=ScryptChacha20Poly1305.KEY_LENGTH)

    @field_validator("crypto_type")
    @classmethod
    def validate_crypto_type(cls, v: str) -> str:
        """Validate the crypto type is a supported suite."""
        return validate_identifier(v).value

    @model_validator(mode="after")
    def validate_scrypt(self) -> "CryptoConfig":
        """Ensure the scrypt parameters are usable."""
        validate_scrypt_params(
            self.scrypt_n, self.scrypt_r, self.scrypt_p, self.scrypt_key_len,
        )
        return self

    @property
    def default_crypto_type(self) -> CryptoType:
        return CryptoType(self.crypto_type)

    @classmethod
    def from_env(cls) -> "CryptoConfig":
        """Create CryptoConfig by loading values from environment.

        Returns:
            Populated CryptoConfig instance.
        """
        values: dict[str, str] = {}
        for field, env in (
            ("crypto_type", "WALLET_CRYPTO_TYPE"),
            ("scrypt_n", "WALLET_SCRYPT_N"),
            ("scrypt_r", "WALLET_SCRYPT_R"),
            ("scrypt_p", "WALLET_SCRYPT_P"),
        ):
            raw = os.environ.get(env)
            if raw is not None:
                values[field] = raw
        config = cls(**values)
        logger.debug(
            "Crypto config loaded: crypto_type=%s scrypt n=%d r=%d p=%d",
            config.crypto_type, config.scrypt_n, config.scrypt_r, config.scrypt_p,
        )
        return config
