"""Localized string lookup backed by YAML language packs."""

import logging
import threading
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from dataprivacy.core.interfaces import LabelService
from dataprivacy.models.config import ExporterConfiguration


logger = logging.getLogger(__name__)

BUNDLED_LANG_DIR = Path(__file__).parent / "lang"


class StringManager(LabelService):
    """Resolves string identifiers against per-language YAML packs.

    A pack is a mapping of component name to ``{identifier: text}``. Packs are
    read from the bundled ``lang`` directory and, when configured, an extra
    directory whose entries override the bundled ones. Lookups fall back to
    the fallback language, then to ``[[identifier]]``.
    """

    def __init__(self, config: Optional[ExporterConfiguration] = None,
                 lang_dirs: Optional[List[Path]] = None):
        self.config = config or ExporterConfiguration()

        if lang_dirs is None:
            lang_dirs = [BUNDLED_LANG_DIR]
            if self.config.lang_dir:
                lang_dirs.append(Path(self.config.lang_dir))
        self.lang_dirs = [Path(d) for d in lang_dirs]

        self._packs: Dict[str, Dict[str, Dict[str, str]]] = {}
        self._lock = threading.Lock()

    def get_string(self, identifier: str, component: str = "dataprivacy",
                   language: Optional[str] = None) -> str:
        """Return the localized string for identifier in component."""
        language = language or self.config.language

        for lang in self._candidate_languages(language):
            strings = self._load_pack(lang).get(component, {})
            if identifier in strings:
                return strings[identifier]

        logger.warning(f"Missing string '{identifier}' in component '{component}' for language '{language}'")
        return f"[[{identifier}]]"

    def string_exists(self, identifier: str, component: str = "dataprivacy",
                      language: Optional[str] = None) -> bool:
        """Check if a string is defined without falling back."""
        language = language or self.config.language
        return identifier in self._load_pack(language).get(component, {})

    def available_languages(self) -> List[str]:
        """List language codes with a pack in any language directory."""
        languages = set()
        for lang_dir in self.lang_dirs:
            if lang_dir.is_dir():
                languages.update(path.stem for path in lang_dir.glob("*.yaml"))
        return sorted(languages)

    def reset_cache(self) -> None:
        """Drop loaded packs so they are re-read on next lookup."""
        with self._lock:
            self._packs.clear()

    def _candidate_languages(self, language: str) -> List[str]:
        candidates = [language]
        # Regional variants fall back to their parent language
        if "_" in language:
            candidates.append(language.split("_", 1)[0])
        if self.config.fallback_language not in candidates:
            candidates.append(self.config.fallback_language)
        return candidates

    def _load_pack(self, language: str) -> Dict[str, Dict[str, str]]:
        with self._lock:
            if language in self._packs:
                return self._packs[language]

            pack: Dict[str, Dict[str, str]] = {}
            for lang_dir in self.lang_dirs:
                pack_file = lang_dir / f"{language}.yaml"
                if not pack_file.exists():
                    continue

                with open(pack_file, 'r', encoding='utf-8') as f:
                    data = yaml.safe_load(f) or {}

                for component, strings in data.items():
                    pack.setdefault(component, {}).update(
                        {str(key): str(value) for key, value in (strings or {}).items()}
                    )
                logger.debug(f"Loaded language pack {pack_file}")

            self._packs[language] = pack
            return pack
