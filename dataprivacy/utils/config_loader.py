"""Configuration loading and input file utilities."""

import json
import os
import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional

from dataprivacy.models.config import ExporterConfiguration


CONFIG_FILE_NAME = "exporter.yaml"


class ConfigLoader:
    """Handles loading and saving of the exporter configuration file."""

    def __init__(self, config_dir: Optional[Path] = None):
        """Initialize config loader with optional custom config directory."""
        if config_dir is None:
            config_dir = Path(os.getenv("DATAPRIVACY_CONFIG_DIR", Path.cwd() / ".dataprivacy"))
        self.config_dir = Path(config_dir)

    @property
    def config_file(self) -> Path:
        return self.config_dir / CONFIG_FILE_NAME

    def load_exporter_config(self, **overrides: Any) -> ExporterConfiguration:
        """Load exporter configuration from file, falling back to defaults.

        Values from the file override environment defaults; keyword overrides
        win over both.
        """
        config_data: Dict[str, Any] = {}

        if self.config_file.exists():
            with open(self.config_file, 'r') as f:
                config_data = yaml.safe_load(f) or {}
            if not isinstance(config_data, dict):
                raise ValueError(f"{self.config_file} must contain a mapping")

        config_data.update({key: value for key, value in overrides.items() if value is not None})
        return ExporterConfiguration(**config_data)

    def save_exporter_config(self, config: ExporterConfiguration) -> Path:
        """Save exporter configuration to file."""
        self.config_dir.mkdir(parents=True, exist_ok=True)

        with open(self.config_file, 'w') as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False, indent=2)

        return self.config_file

    def validate_configuration(self) -> Dict[str, Any]:
        """Validate the configuration file and return validation results."""
        results = {
            "valid": True,
            "errors": [],
            "warnings": []
        }

        if not self.config_file.exists():
            results["warnings"].append(f"{self.config_file} not found, using defaults")

        try:
            self.load_exporter_config()
        except (ValueError, TypeError, yaml.YAMLError) as e:
            results["valid"] = False
            results["errors"].append(f"Exporter config error: {e}")

        return results


def load_records(path: Path) -> List[Dict[str, Any]]:
    """Load a list of records from a JSON or YAML file.

    A single mapping is treated as a one-record list.
    """
    path = Path(path)

    with open(path, 'r', encoding='utf-8') as f:
        if path.suffix.lower() == ".json":
            data = json.load(f)
        else:
            data = yaml.safe_load(f)

    if data is None:
        return []
    if isinstance(data, dict):
        return [data]
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise ValueError(f"{path} must contain a mapping or a list of mappings")
    return data
