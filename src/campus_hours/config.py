"""Engine configuration loaded from environment variables.

For local development, create a .env file in the project root.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class CampusHoursConfig(BaseSettings):
    """Campus hours configuration loaded from environment variables."""

    # Time
    campus_timezone: str = Field(
        default="America/Los_Angeles",
        description="IANA zone every window and status instant is expressed in",
    )
    lookahead_days: int = Field(
        default=14,
        ge=1,
        description="Days the resolver scans forward for the next opening",
    )

    # Schedule data
    static_hours_path: str | None = Field(
        default=None,
        description="JSON file replacing the built-in static hours table",
    )
    main_row_label: str = Field(
        default="Hours",
        description="Label given to a location block's main row",
    )
    emit_meal_switch: bool = Field(
        default=False,
        description="Report back-to-back windows as a mealSwitch transition",
    )

    # Sources (fetched by the host process, never by the engine)
    dining_hours_url: str = Field(
        default="https://menu.dining.ucla.edu/Hours",
        description="Dining hours page (tabular markup)",
    )
    library_hours_url: str = Field(
        default="https://calendar.library.ucla.edu/hours",
        description="Library weekly hours page (location-block markup)",
    )
    fetch_timeout_seconds: float = Field(
        default=20.0,
        description="Per-request HTTP timeout",
    )
    fetch_max_attempts: int = Field(
        default=3,
        ge=1,
        description="Attempts per URL before giving up on transient errors",
    )

    # Logging
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format (for production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    model_config = {
        "env_prefix": "",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


_config: CampusHoursConfig | None = None


def get_config() -> CampusHoursConfig:
    """Get the configuration singleton.

    Returns:
        CampusHoursConfig: Configuration built from the environment on first call.
    """
    global _config
    if _config is None:
        _config = CampusHoursConfig()
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() re-reads the environment."""
    global _config
    _config = None
