from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """
    Hook registry configuration loaded from multiple sources.

    Priority (highest to lowest):
    1. Environment variables (HOOKMGR_ prefix)
    2. .env file
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="HOOKMGR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Resolve handlers when they are registered instead of on first apply
    EAGER_RESOLVE: bool = False

    MAX_HOOK_NAME_LENGTH: int = Field(default=255)

    @field_validator("MAX_HOOK_NAME_LENGTH")
    @classmethod
    def validate_positive(cls, v: int, info) -> int:
        """Ensure the length limit is a positive integer."""
        if v <= 0:
            raise ValueError(f"{info.field_name} must be a positive integer, got {v}")
        return v


config = Config()
