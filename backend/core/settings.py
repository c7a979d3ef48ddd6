"""
Centralized application settings using Pydantic BaseSettings.

This module provides type-safe access to environment variables with validation.
All settings are loaded once at application startup.
"""

from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings

# ============================================================================
# Application Constants
# ============================================================================

# Prefix used for prompt keys and command status messages
MODULE_NAME = "namedCharacter"

# Prompt injection keys
DATA_PROMPT_KEY = f"{MODULE_NAME}_data_yaml"
RULES_PROMPT_KEY = f"{MODULE_NAME}_rules_yaml"

# Prompt priorities (lower is injected first)
DATA_PROMPT_PRIORITY = 1
RULES_PROMPT_PRIORITY = 0

# Minimum width of a canonical record identifier
ID_WIDTH = 4

# Record categories: order here is the serialization order
CATEGORY_DEFINITIONS = [
    {
        "name": "characters",
        "header": "# Named Character",
        "noun": "named character",
        "tags": ["namedcharacter", "clothing", "opinion"],
    },
    {
        "name": "locations",
        "header": "# Location",
        "noun": "location",
        "tags": ["location", "currentlocation"],
    },
]


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults and are validated on startup.
    """

    # Database
    database_url: str = "sqlite+aiosqlite:///./npc_memory.db"

    # Debug configuration
    debug_logging: bool = False

    # Default rules document
    default_rules_url: str = "http://localhost:8000/static/defaultrules.json"
    rules_fetch_timeout: float = 10.0

    # Debounce delay (seconds) for chat metadata and persona note saves
    metadata_save_delay: float = 1.0

    # Replace every block of a tag with the last block's status line
    npc_collapse_tag_status: bool = False

    # YAML output line width (large enough that nothing is folded)
    yaml_line_width: int = 1 << 20

    @field_validator("debug_logging", "npc_collapse_tag_status", mode="before")
    @classmethod
    def validate_bool_flags(cls, v: Optional[str]) -> bool:
        """Parse boolean flags from string values."""
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            return v.lower() == "true"
        return False

    @field_validator("metadata_save_delay")
    @classmethod
    def validate_save_delay(cls, v: float) -> float:
        """Negative delays make no sense for a debounce."""
        return max(v, 0.0)

    @property
    def backend_dir(self) -> Path:
        """
        Get the backend directory.

        Returns:
            Path to the backend directory
        """
        return Path(__file__).parent.parent

    @property
    def static_dir(self) -> Path:
        """
        Get the directory holding bundled static resources.

        Returns:
            Path to backend/static
        """
        return self.backend_dir / "static"

    class Config:
        """Pydantic configuration."""

        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        # Allow extra fields for forward compatibility
        extra = "ignore"


# Singleton instance - load settings once at module import
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Returns:
        Settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """
    Reset the settings singleton (useful for testing).
    """
    global _settings
    _settings = None
