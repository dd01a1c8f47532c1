import hmac
import logging

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    secret_key: SecretStr = SecretStr("")

    # Anything other than sha1 / nobi.Signer breaks compatibility with
    # previously issued tokens.
    digest_method: str = "sha1"
    salt: str = "nobi.Signer"

    default_max_age: int = 86400

    log_level: str = "INFO"

    model_config = {"env_prefix": "NOBSIGN_", "env_file": ".env", "extra": "ignore"}

    @field_validator("digest_method")
    @classmethod
    def validate_digest_method(cls, v: str) -> str:
        v = v.lower()
        try:
            hmac.new(b"", b"", v).digest()
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Unsupported digest method: {v}") from exc
        return v

    @field_validator("default_max_age")
    @classmethod
    def validate_default_max_age(cls, v: int) -> int:
        if v < 0:
            raise ValueError("default_max_age must not be negative")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError(f"Invalid log level: {v}")
        return v


settings = Settings()
