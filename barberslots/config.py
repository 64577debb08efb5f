"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import List

import pendulum
import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.clock import parse_clock_time
from .domain.exceptions import FormatError
from .domain.models import WorkingPeriod


class DefaultsConfig(BaseModel):
    """Default settings for slot generation."""
    duration_minutes: int = 60
    slot_interval_minutes: int = 30
    opening_time: str = "09:00"
    closing_time: str = "20:00"

    @field_validator("duration_minutes", "slot_interval_minutes")
    @classmethod
    def validate_positive(cls, value: int) -> int:
        """Ensure minute values are positive."""
        if value <= 0:
            raise ValueError("minute values must be greater than zero")
        return value

    @field_validator("opening_time", "closing_time")
    @classmethod
    def validate_clock_time(cls, value: str) -> str:
        """Validate the value is a HH:MM clock time."""
        try:
            parse_clock_time(value)
        except FormatError as exc:
            raise ValueError(str(exc)) from exc
        return value

    @model_validator(mode="after")
    def validate_hours_order(self) -> "DefaultsConfig":
        """Ensure the default business hours open before they close."""
        if parse_clock_time(self.closing_time) <= parse_clock_time(self.opening_time):
            raise ValueError("closing_time must be later than opening_time")
        return self

    def get_default_period(self) -> WorkingPeriod:
        """Get the default business hours as a working period."""
        return WorkingPeriod(
            start_time=self.opening_time,
            end_time=self.closing_time,
            is_active=True
        )


class BarberProfile(BaseModel):
    """Barber known to the CLI by a short name."""
    name: str  # Used as alias
    barber_id: str


class AppConfig(BaseModel):
    """Application configuration."""
    api_url: str = "http://localhost:4000/graphql"
    timezone: str = "Europe/Berlin"
    log_level: str = "WARNING"
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    barbers: List[BarberProfile] = Field(default_factory=list)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the timezone is a known IANA name."""
        try:
            pendulum.timezone(value)
        except (KeyError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalise and validate the logging level name."""
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @field_validator("barbers")
    @classmethod
    def validate_barbers(cls, value: List[BarberProfile]) -> List[BarberProfile]:
        """Ensure barber aliases and ids are unique."""
        seen_names: set[str] = set()
        seen_ids: set[str] = set()
        for barber in value:
            name_key = barber.name.lower()
            if name_key in seen_names:
                raise ValueError(f"Duplicate barber name detected: {barber.name}")
            if barber.barber_id in seen_ids:
                raise ValueError(f"Duplicate barber id detected: {barber.barber_id}")
            seen_names.add(name_key)
            seen_ids.add(barber.barber_id)
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        return cls(**data)

    def find_barber_by_name(self, name: str) -> BarberProfile | None:
        """Find a barber by their name (alias)."""
        for barber in self.barbers:
            if barber.name.lower() == name.lower():
                return barber
        return None

    def resolve_barber(self, identifier: str) -> str:
        """
        Resolve a barber name (alias) or id to a barber id.

        Unknown identifiers are assumed to already be barber ids.
        """
        barber = self.find_barber_by_name(identifier)
        if barber:
            return barber.barber_id
        return identifier


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
