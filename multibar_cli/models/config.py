"""
Pydantic models for application configuration.
Provides validation for the display tuning knobs and download settings.
"""

from pydantic import BaseModel, Field, field_validator


class DisplayConfig(BaseModel):
    """Tuning knobs for the multi-bar progress display."""

    class Config:
        """Pydantic model configuration."""

        validate_assignment = True

    name_column_width: int = 35
    tick_interval: float = 0.1  # seconds between periodic redraws
    log_queue_capacity: int = 100
    min_bar_width: int = 10
    fallback_width: int = 80

    @field_validator("name_column_width")
    @classmethod
    def validate_name_column_width(cls, v: int) -> int:
        """The name column must at least hold a character and the '..' suffix."""
        if v < 4:
            raise ValueError("Name column width must be at least 4.")
        return v

    @field_validator("tick_interval")
    @classmethod
    def validate_tick_interval(cls, v: float) -> float:
        if v < 0.01 or v > 5:
            raise ValueError("Tick interval must be between 0.01 and 5 seconds.")
        return v

    @field_validator("log_queue_capacity", "min_bar_width", "fallback_width")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Value must be a positive integer.")
        return v

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns the keys expected in the [display] section of the INI file."""
        return set(cls.model_fields)


class DownloadConfig(BaseModel):
    """A validated configuration model for the application."""

    class Config:
        """Pydantic model configuration."""

        validate_assignment = True
        str_strip_whitespace = True

    output_dir: str = "."
    max_workers: int = 4
    max_attempts: int = 3

    display: DisplayConfig = Field(default_factory=DisplayConfig)

    # Internal fields not loaded from INI file
    source_urls: list[str] = Field(default_factory=list, repr=False)

    @field_validator("max_workers")
    @classmethod
    def validate_workers(cls, v: int) -> int:
        """Ensures a reasonable number of workers."""
        if v < 1 or v > 32:
            raise ValueError("Max workers must be between 1 and 32.")
        return v

    @field_validator("max_attempts")
    @classmethod
    def validate_attempts(cls, v: int) -> int:
        if v < 1 or v > 10:
            raise ValueError("Max attempts must be between 1 and 10.")
        return v

    @field_validator("output_dir")
    @classmethod
    def validate_output_dir(cls, v: str) -> str:
        if not v:
            raise ValueError("Output directory cannot be empty.")
        return v

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns the keys expected in the [download] section of the INI file."""
        internal_fields = {"source_urls", "display"}
        return {key for key in cls.model_fields if key not in internal_fields}
