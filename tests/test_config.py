"""Tests for exporter configuration and the config loader."""

import json

import pytest
import yaml

from dataprivacy.models.config import ExporterConfiguration
from dataprivacy.utils.config_loader import ConfigLoader, load_records


class TestExporterConfiguration:
    """Test cases for ExporterConfiguration."""

    def test_defaults(self):
        config = ExporterConfiguration()

        assert config.language == "en"
        assert config.label_class_prefix == "label-"
        assert config.unknown_status_policy == "fallback"
        assert config.identity_fields == ["email"]
        assert not config.strict_status

    def test_environment_variables(self, monkeypatch):
        monkeypatch.setenv("DATAPRIVACY_LANGUAGE", "de")
        monkeypatch.setenv("DATAPRIVACY_UNKNOWN_STATUS_POLICY", "raise")
        monkeypatch.setenv("DATAPRIVACY_IDENTITY_FIELDS", "email, idnumber")

        config = ExporterConfiguration()

        assert config.language == "de"
        assert config.strict_status
        assert config.identity_fields == ["email", "idnumber"]

    def test_json_list_environment_variable(self, monkeypatch):
        monkeypatch.setenv("DATAPRIVACY_IDENTITY_FIELDS", '["phone1"]')

        assert ExporterConfiguration().identity_fields == ["phone1"]

    @pytest.mark.parametrize("overrides,message", [
        ({"unknown_status_policy": "ignore"}, "unknown_status_policy"),
        ({"wwwroot": "ftp://example.com"}, "wwwroot"),
        ({"fullname_format": "{middlename}"}, "fullname_format"),
        ({"identity_fields": ["password"]}, "unsupported identity fields"),
        ({"log_level": "LOUD"}, "invalid log_level"),
        ({"language": ""}, "language must not be empty"),
    ])
    def test_validation(self, overrides, message):
        with pytest.raises(ValueError, match=message):
            ExporterConfiguration(**overrides)

    def test_to_dict(self):
        assert ExporterConfiguration(language="de").to_dict()["language"] == "de"


class TestConfigLoader:
    """Test cases for ConfigLoader."""

    def test_defaults_without_file(self, tmp_path):
        loader = ConfigLoader(tmp_path / "cfg")

        config = loader.load_exporter_config()

        assert config.language == "en"
        assert not (tmp_path / "cfg").exists()

    def test_save_and_load(self, tmp_path):
        loader = ConfigLoader(tmp_path)
        path = loader.save_exporter_config(ExporterConfiguration(language="de", label_class_prefix="badge-"))

        assert path == tmp_path / "exporter.yaml"
        config = loader.load_exporter_config()
        assert config.language == "de"
        assert config.label_class_prefix == "badge-"

    def test_overrides_win(self, tmp_path):
        (tmp_path / "exporter.yaml").write_text("language: de\n")
        loader = ConfigLoader(tmp_path)

        assert loader.load_exporter_config(language="en").language == "en"
        assert loader.load_exporter_config(language=None).language == "de"

    def test_config_dir_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("DATAPRIVACY_CONFIG_DIR", str(tmp_path))

        assert ConfigLoader().config_file == tmp_path / "exporter.yaml"

    def test_validate_configuration(self, tmp_path):
        loader = ConfigLoader(tmp_path)

        results = loader.validate_configuration()
        assert results["valid"]
        assert results["warnings"]

        (tmp_path / "exporter.yaml").write_text("unknown_status_policy: ignore\n")
        results = loader.validate_configuration()
        assert not results["valid"]
        assert "unknown_status_policy" in results["errors"][0]

    def test_unknown_key_is_invalid(self, tmp_path):
        (tmp_path / "exporter.yaml").write_text("colour: blue\n")

        assert not ConfigLoader(tmp_path).validate_configuration()["valid"]


class TestLoadRecords:
    """Test cases for load_records."""

    def test_json_list(self, tmp_path):
        path = tmp_path / "users.json"
        path.write_text(json.dumps([{"id": 1}, {"id": 2}]))

        assert load_records(path) == [{"id": 1}, {"id": 2}]

    def test_yaml_single_mapping(self, tmp_path):
        path = tmp_path / "request.yaml"
        path.write_text(yaml.dump({"id": 1, "userid": 2}))

        assert load_records(path) == [{"id": 1, "userid": 2}]

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert load_records(path) == []

    def test_rejects_scalars(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("- 1\n- 2\n")

        with pytest.raises(ValueError):
            load_records(path)
