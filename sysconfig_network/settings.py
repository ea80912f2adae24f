"""Settings for the sysconfig network configuration tool."""

from typing import Optional, ClassVar
from typing import Literal
from typing import Any

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables with error handling
try:
    load_dotenv()
except FileNotFoundError:
    # Expected when .env doesn't exist
    pass
except Exception as e:
    # Log unexpected errors but don't fail
    import warnings

    warnings.warn(f"Failed to load .env file: {e}")


class Settings(BaseSettings):
    """Configuration settings for sysconfig-network.

    Uses Pydantic BaseSettings to load and validate configuration from environment variables.
    Provides default values for every setting so the tool runs unconfigured on a RedHat host.
    """

    # Target filesystem layout
    NETWORK_SCRIPTS_DIR: str = Field(
        default="/etc/sysconfig/network-scripts",
        json_schema_extra={
            "env": "NETWORK_SCRIPTS_DIR",
            "description": "Directory holding the ifcfg-* and route-* files",
            "example": "/etc/sysconfig/network-scripts",
        },
    )
    SYSCONFIG_NETWORK_FILE: str = Field(
        default="/etc/sysconfig/network",
        json_schema_extra={
            "env": "SYSCONFIG_NETWORK_FILE",
            "description": "Path of the global network configuration file",
            "example": "/etc/sysconfig/network",
        },
    )
    ROOT_DIR: str = Field(
        default="/",
        json_schema_extra={
            "env": "ROOT_DIR",
            "description": "Prefix under which managed files are written when applying",
            "example": "/mnt/sysimage",
        },
    )

    # Service configuration
    SERVICE_NAME: str = Field(
        default="network",
        min_length=1,
        json_schema_extra={
            "env": "SERVICE_NAME",
            "description": "Name of the OS service restarted when a file changes",
            "example": "network",
        },
    )
    OS_FAMILY: Optional[str] = Field(
        default=None,
        json_schema_extra={
            "env": "OS_FAMILY",
            "description": "Override the detected operating system family",
            "example": "RedHat",
        },
    )

    # Configuration store
    DATA_FILES: list[str] = Field(
        default=["/etc/sysconfig-network/common.yaml"],
        json_schema_extra={
            "env": "DATA_FILES",
            "description": "YAML data files forming the lookup hierarchy, highest priority first",
            "example": '["/etc/sysconfig-network/node.yaml", "/etc/sysconfig-network/common.yaml"]',
        },
    )

    # Managed file metadata
    FILE_MODE: str = Field(
        default="0644",
        json_schema_extra={
            "env": "FILE_MODE",
            "description": "Octal permission bits for managed files",
            "example": "0644",
        },
    )
    FILE_OWNER: str = Field(
        default="root",
        json_schema_extra={
            "env": "FILE_OWNER",
            "description": "Owner of managed files",
            "example": "root",
        },
    )
    FILE_GROUP: str = Field(
        default="root",
        json_schema_extra={
            "env": "FILE_GROUP",
            "description": "Group of managed files",
            "example": "root",
        },
    )
    MANAGE_OWNERSHIP: bool = Field(
        default=True,
        json_schema_extra={
            "env": "MANAGE_OWNERSHIP",
            "description": "Enforce owner and group of managed files (requires root)",
            "example": True,
        },
    )

    # Logging Configuration
    LOGGING_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        json_schema_extra={
            "env": "LOGGING_LEVEL",
            "description": "Logging level for the application",
            "example": "INFO",
        },
    )

    # Accept lower/any-case input from env (e.g., "debug") and normalize
    @field_validator("LOGGING_LEVEL", mode="before")
    @classmethod
    def _normalize_logging_level(cls, v):  # type: ignore[no-untyped-def]
        return v.upper() if isinstance(v, str) else v

    LOGGER_NAME: str = Field(
        default="",
        json_schema_extra={
            "env": "LOGGER_NAME",
            "description": "Name for the logger",
            "example": "sysconfig-network",
        },
    )

    LOG_TO_FILE: bool = Field(
        default=False,
        json_schema_extra={
            "env": "LOG_TO_FILE",
            "description": "Also write logs to sysconfig-network.log",
            "example": False,
        },
    )

    model_config: ClassVar[SettingsConfigDict] = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        # Enable runtime assignment so tests can patch settings fields
        "validate_assignment": True,
        "frozen": False,
    }


def validate_config(cfg: Settings) -> None:
    """Validate configuration settings.

    Performs validation to ensure values are within acceptable ranges.

    Args:
        cfg: Settings instance to validate.

    Raises:
        ValueError: If configuration is invalid.
    """
    try:
        mode = int(cfg.FILE_MODE, 8)
    except ValueError as e:
        raise ValueError(
            f"FILE_MODE must be an octal permission string, got {cfg.FILE_MODE}"
        ) from e
    if not 0 <= mode <= 0o7777:
        raise ValueError(f"FILE_MODE out of range, got {cfg.FILE_MODE}")

    valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    if cfg.LOGGING_LEVEL.upper() not in valid_log_levels:
        raise ValueError(
            f"LOGGING_LEVEL must be one of {valid_log_levels}, got {cfg.LOGGING_LEVEL}"
        )


# Create config instance without validation (validation happens in main.py)
settings = Settings()


def get_setting(name: str) -> Any:
    """Return setting value, honoring runtime test patches.

    unittest.mock.patch may set attributes directly on the instance which can
    bypass pydantic's internal field store. Prefer a direct __dict__ lookup
    first, then fall back to normal attribute access.
    """
    if name in settings.__dict__:
        return settings.__dict__[name]
    return getattr(settings, name)
