from pydantic import SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings

from keeperauth.errors import ConfigurationError


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    auth_secret: SecretStr  # Key material for signing session tokens (required)
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = []

    model_config = {
        "env_file": [".env"],
        "env_prefix": "KEEPER_",
        "extra": "ignore",
    }

    @field_validator("auth_secret")
    @classmethod
    def _secret_not_blank(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("must not be blank")
        return value


def load_config() -> Config:
    """Load configuration, turning a missing or blank secret into a fatal ConfigurationError."""
    try:
        return Config()
    except ValidationError as e:
        fields = sorted({".".join(str(part) for part in err["loc"]) for err in e.errors()})
        raise ConfigurationError(f"Invalid configuration: {', '.join(fields)}") from None
