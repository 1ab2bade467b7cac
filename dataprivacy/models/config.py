"""Configuration data models for the data privacy exporter."""

import os
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


ENV_PREFIX = "DATAPRIVACY_"

UNKNOWN_STATUS_POLICIES = ("fallback", "raise")


def _get_env_var(key: str, default: Any, var_type: type = str) -> Any:
    """Get environment variable with type conversion and default fallback."""
    env_key = f"{ENV_PREFIX}{key.upper()}"
    value = os.getenv(env_key)

    if value is None:
        return default

    try:
        if var_type == bool:
            return value.lower() in ('true', '1', 'yes', 'on')
        elif var_type == int:
            return int(value)
        elif var_type == list:
            # Try to parse as JSON array, fallback to comma-separated
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                return [item.strip() for item in value.split(',') if item.strip()]
        else:
            return value
    except (ValueError, json.JSONDecodeError) as e:
        raise ValueError(f"Invalid value for {env_key}: {value}. Error: {e}")


@dataclass
class ExporterConfiguration:
    """Exporter settings with environment variable support."""
    language: str = field(default_factory=lambda: _get_env_var("language", "en"))
    fallback_language: str = field(default_factory=lambda: _get_env_var("fallback_language", "en"))
    lang_dir: Optional[str] = field(default_factory=lambda: _get_env_var("lang_dir", None))
    label_class_prefix: str = field(default_factory=lambda: _get_env_var("label_class_prefix", "label-"))
    unknown_status_policy: str = field(default_factory=lambda: _get_env_var("unknown_status_policy", "fallback"))
    wwwroot: str = field(default_factory=lambda: _get_env_var("wwwroot", "http://localhost"))
    fullname_format: str = field(default_factory=lambda: _get_env_var("fullname_format", "{firstname} {lastname}"))
    identity_fields: List[str] = field(default_factory=lambda: _get_env_var("identity_fields", ["email"], list))
    log_level: str = field(default_factory=lambda: _get_env_var("log_level", "INFO"))

    IDENTITY_FIELD_CHOICES = ("email", "idnumber", "phone1", "phone2", "department", "institution")

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_configuration()

    def _validate_configuration(self) -> None:
        """Validate configuration values."""
        errors = []

        if not self.language:
            errors.append("language must not be empty")

        if not self.fallback_language:
            errors.append("fallback_language must not be empty")

        if self.unknown_status_policy not in UNKNOWN_STATUS_POLICIES:
            errors.append(
                f"unknown_status_policy must be one of: {', '.join(UNKNOWN_STATUS_POLICIES)}"
            )

        if not self.wwwroot.startswith(('http://', 'https://')):
            errors.append("wwwroot must be a valid HTTP/HTTPS URL")

        try:
            self.fullname_format.format(firstname="", lastname="")
        except (KeyError, IndexError, ValueError):
            errors.append("fullname_format may only reference {firstname} and {lastname}")

        invalid_fields = [name for name in self.identity_fields if name not in self.IDENTITY_FIELD_CHOICES]
        if invalid_fields:
            errors.append(f"unsupported identity fields: {', '.join(invalid_fields)}")

        if self.log_level.upper() not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            errors.append(f"invalid log_level: {self.log_level}")

        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

    @property
    def strict_status(self) -> bool:
        """Whether unknown request statuses raise instead of falling back."""
        return self.unknown_status_policy == "raise"

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'language': self.language,
            'fallback_language': self.fallback_language,
            'lang_dir': self.lang_dir,
            'label_class_prefix': self.label_class_prefix,
            'unknown_status_policy': self.unknown_status_policy,
            'wwwroot': self.wwwroot,
            'fullname_format': self.fullname_format,
            'identity_fields': list(self.identity_fields),
            'log_level': self.log_level,
        }
