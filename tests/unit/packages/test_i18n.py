"""Tests for LocalizationCollector"""

import json

import pytest

from appingest.core.packages.archive import open_archive
from appingest.core.packages.i18n import LocalizationCollector, language_code
from appingest.core.packages.models import DiagnosticStage


@pytest.mark.parametrize(
    "path,expected",
    [
        ("i18n/en.json", "en"),
        ("i18n/EN.json", "en"),
        ("i18n/pt-BR.json", "pt-br"),
        ("i18n/de.extra.json", "de"),
        ("i18n/nested/fr.json", "fr"),
    ],
)
def test_language_code(path, expected):
    assert language_code(path) == expected


class TestLocalizationCollector:
    """Collection and merging of i18n bundles"""

    def setup_method(self):
        self.collector = LocalizationCollector()

    def test_merges_same_language_code(self, make_zip):
        archive = open_archive(make_zip([
            ("i18n/en.json", json.dumps({"a": "1"})),
            ("i18n/EN.json", json.dumps({"b": "2"})),
        ]))

        bundle = self.collector.collect(archive)

        assert bundle.languages == {"en": {"a": "1", "b": "2"}}
        assert bundle.diagnostics == []

    def test_later_entries_override_earlier_keys(self, make_zip):
        archive = open_archive(make_zip([
            ("i18n/en.json", json.dumps({"greeting": "Hello", "farewell": "Bye"})),
            ("i18n/En.json", json.dumps({"greeting": "Hi"})),
        ]))

        bundle = self.collector.collect(archive)

        assert bundle.languages["en"] == {"greeting": "Hi", "farewell": "Bye"}

    def test_merge_order_follows_enumeration_order(self, make_zip):
        archive = open_archive(make_zip([
            ("i18n/EN.json", json.dumps({"greeting": "Hi"})),
            ("i18n/en.json", json.dumps({"greeting": "Hello"})),
        ]))

        bundle = self.collector.collect(archive)

        assert bundle.languages["en"] == {"greeting": "Hello"}

    def test_invalid_json_is_skipped_with_diagnostic(self, make_zip):
        archive = open_archive(make_zip([
            ("i18n/en.json", json.dumps({"a": "1"})),
            ("i18n/de.json", "{not json"),
            ("i18n/fr.json", json.dumps(["not", "an", "object"])),
        ]))

        bundle = self.collector.collect(archive)

        assert bundle.languages == {"en": {"a": "1"}}
        assert [d.path for d in bundle.diagnostics] == ["i18n/de.json", "i18n/fr.json"]
        assert all(d.stage == DiagnosticStage.LOCALIZATION for d in bundle.diagnostics)

    def test_ignores_entries_outside_directory(self, make_zip):
        archive = open_archive(make_zip([
            ("en.json", json.dumps({"root": "x"})),
            ("lang/en.json", json.dumps({"other": "x"})),
            ("i18n/", None),
            ("i18n/README.md", "docs"),
            ("i18n/es.json", json.dumps({"hola": "Hola"})),
        ]))

        bundle = self.collector.collect(archive)

        assert bundle.languages == {"es": {"hola": "Hola"}}

    def test_empty_language_code_is_skipped(self, make_zip):
        archive = open_archive(make_zip([("i18n/.json", json.dumps({"a": "1"}))]))

        bundle = self.collector.collect(archive)

        assert bundle.languages == {}
        assert len(bundle.diagnostics) == 1

    def test_custom_directory(self, make_zip):
        archive = open_archive(make_zip([
            ("locales/it.json", json.dumps({"ciao": "Ciao"})),
            ("i18n/en.json", json.dumps({"hello": "Hello"})),
        ]))

        bundle = LocalizationCollector("locales").collect(archive)

        assert bundle.languages == {"it": {"ciao": "Ciao"}}
