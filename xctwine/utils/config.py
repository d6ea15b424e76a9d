"""Application settings.

Pydantic-based configuration, overridable through environment variables or a
``.env`` file in the working directory.

Environment Variables:
- XCTWINE_DEFAULT_FORMAT: Key format used when ``--format`` is omitted (default: camel)
- XCTWINE_INPUT_EXTENSION: Required input file extension (default: xcstrings)
- XCTWINE_OUTPUT_EXTENSION: Required output file extension (default: swift)
- XCTWINE_LOG_LEVEL: Logging level (default: WARNING)
- XCTWINE_JSON_LOGS: Emit JSON log lines (default: false)
- XCTWINE_DEV_MODE: Colourful console log output (default: true)
"""

from functools import lru_cache

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from xctwine.core.formatting import KeyFormat
from xctwine.exceptions import ConfigurationError, wrap_exception


class Settings(BaseSettings):
    """XCTwine configuration.

    Example:
        >>> settings = Settings()
        >>> settings.default_format
        <KeyFormat.CAMEL: 'camel'>
    """

    model_config = SettingsConfigDict(
        env_prefix="XCTWINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Generation
    default_format: KeyFormat = Field(
        default=KeyFormat.CAMEL,
        description="Key format applied when none is given on the command line",
    )

    input_extension: str = Field(
        default="xcstrings",
        min_length=1,
        description="Extension required for the input string catalogue",
    )

    output_extension: str = Field(
        default="swift",
        min_length=1,
        description="Extension required for the generated source file",
    )

    # Logging
    log_level: str = Field(default="WARNING", description="Logging level")

    json_logs: bool = Field(default=False, description="Emit JSON log lines")

    dev_mode: bool = Field(default=True, description="Development-friendly log output")

    @field_validator("input_extension", "output_extension")
    @classmethod
    def normalize_extension(cls, v: str) -> str:
        """Strip a leading dot and lower-case the extension."""
        v = v.strip().lstrip(".").lower()
        if not v:
            raise ValueError("extension must not be empty")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v_upper


@lru_cache
def get_settings() -> Settings:
    """Get the cached settings instance.

    Raises:
        ConfigurationError: If an XCTWINE_ variable holds an invalid value
    """
    try:
        return Settings()
    except ValidationError as e:
        first = e.errors()[0]
        setting = "XCTWINE_" + "_".join(str(part) for part in first["loc"]).upper()
        raise wrap_exception(
            e,
            f"Invalid value for {setting}: {first['msg']}",
            exception_class=ConfigurationError,
            setting=setting,
        ) from e


def reload_settings() -> Settings:
    """Drop the cached settings and read them again."""
    get_settings.cache_clear()
    return get_settings()
