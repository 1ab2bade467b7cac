"""Tests for the YAML-backed string manager."""

import logging

import pytest

from dataprivacy.i18n import BUNDLED_LANG_DIR, StringManager
from dataprivacy.models.config import ExporterConfiguration


class TestStringManager:
    """Test cases for StringManager."""

    @pytest.fixture
    def manager(self, config):
        return StringManager(config)

    def test_bundled_english_strings(self, manager):
        assert manager.get_string("requesttypeexport") == "Export request"
        assert manager.get_string("statusawaitingapproval", "dataprivacy") == "Awaiting approval"

    def test_language_override(self, manager):
        assert manager.get_string("statuscomplete", language="de") == "Abgeschlossen"

    def test_falls_back_to_fallback_language(self, manager):
        assert not manager.string_exists("statusunknown", language="de")
        assert manager.get_string("statusunknown", language="de") == "Unknown"

    def test_regional_variant_falls_back_to_parent(self, manager):
        assert manager.get_string("statusrejected", language="de_ch") == "Abgelehnt"

    def test_missing_string(self, manager, caplog):
        with caplog.at_level(logging.WARNING, logger="dataprivacy"):
            assert manager.get_string("nosuchstring") == "[[nosuchstring]]"

        assert "Missing string 'nosuchstring'" in caplog.text

    def test_unknown_component(self, manager):
        assert manager.get_string("statuspending", component="other") == "[[statuspending]]"

    def test_available_languages(self, manager):
        assert {"en", "de"} <= set(manager.available_languages())

    def test_extra_lang_dir_overrides_bundled(self, tmp_path):
        (tmp_path / "en.yaml").write_text(
            "dataprivacy:\n  statuspending: Waiting\n", encoding="utf-8"
        )
        (tmp_path / "fr.yaml").write_text(
            "dataprivacy:\n  statuspending: En attente\n", encoding="utf-8"
        )
        manager = StringManager(ExporterConfiguration(lang_dir=str(tmp_path)))

        assert manager.get_string("statuspending") == "Waiting"
        assert manager.get_string("statuscomplete") == "Complete"
        assert manager.get_string("statuspending", language="fr") == "En attente"
        assert manager.get_string("statuscomplete", language="fr") == "Complete"

    def test_reset_cache(self, tmp_path):
        pack = tmp_path / "en.yaml"
        pack.write_text("dataprivacy:\n  greeting: Hello\n", encoding="utf-8")
        manager = StringManager(lang_dirs=[tmp_path])

        assert manager.get_string("greeting") == "Hello"

        pack.write_text("dataprivacy:\n  greeting: Hi\n", encoding="utf-8")
        assert manager.get_string("greeting") == "Hello"

        manager.reset_cache()
        assert manager.get_string("greeting") == "Hi"

    def test_bundled_packs_define_every_label(self):
        manager = StringManager(lang_dirs=[BUNDLED_LANG_DIR])
        identifiers = [
            "requesttypeexport", "requesttypeexportshort",
            "requesttypedelete", "requesttypedeleteshort",
            "requesttypeothers", "requesttypeothersshort",
            "statuspending", "statuspreprocessing", "statusawaitingapproval",
            "statusapproved", "statusprocessing", "statuscomplete",
            "statuscancelled", "statusrejected", "statusunknown",
        ]

        for identifier in identifiers:
            assert manager.string_exists(identifier, language="en"), identifier
