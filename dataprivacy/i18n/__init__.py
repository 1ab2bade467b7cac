"""Localization support."""

from .strings import StringManager, BUNDLED_LANG_DIR

__all__ = ["StringManager", "BUNDLED_LANG_DIR"]
