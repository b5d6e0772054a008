"""Localization bundle assembly for app packages"""

import json
import logging
from typing import Any, Dict

from appingest.core.packages.archive import PackageArchive
from appingest.core.packages.models import DiagnosticStage, IngestionDiagnostic, LocalizationBundle

logger = logging.getLogger(__name__)


def language_code(path: str) -> str:
    """Language code of an i18n entry: lower-cased filename up to the first '.'"""
    filename = path.rsplit("/", 1)[-1]
    return filename.split(".", 1)[0].lower()


class LocalizationCollector:
    """Best-effort collector for i18n/<language>.json files

    Entries mapping to the same language code are merged in archive
    enumeration order; later keys override earlier ones.
    """

    def __init__(self, directory: str = "i18n/"):
        self.directory = directory if directory.endswith("/") else f"{directory}/"

    def collect(self, archive: PackageArchive) -> LocalizationBundle:
        languages: Dict[str, Dict[str, Any]] = {}
        diagnostics = []

        for entry in archive.files():
            if not entry.path.startswith(self.directory) or not entry.path.endswith(".json"):
                continue

            lang = language_code(entry.path)
            if not lang:
                diagnostics.append(self._skip(entry.path, "file name has no language code"))
                continue

            try:
                content = json.loads(entry.text())
            except (UnicodeDecodeError, json.JSONDecodeError) as e:
                diagnostics.append(self._skip(entry.path, f"invalid JSON: {e}"))
                continue

            if not isinstance(content, dict):
                diagnostics.append(
                    self._skip(entry.path, f"expected a JSON object, got {type(content).__name__}")
                )
                continue

            languages.setdefault(lang, {}).update(content)

        if languages:
            logger.info(f"Collected translations for languages: {', '.join(sorted(languages))}")

        return LocalizationBundle(languages=languages, diagnostics=diagnostics)

    @staticmethod
    def _skip(path: str, reason: str) -> IngestionDiagnostic:
        logger.debug(f"Skipping localization file {path}: {reason}")
        return IngestionDiagnostic(stage=DiagnosticStage.LOCALIZATION, path=path, message=reason)
