import json
import os

import pytest

from metatags.internal.i18n import Translator, deep_merge, key_parts


@pytest.fixture
def locales_dir(tmp_path):
    path = tmp_path / "locales"
    path.mkdir()
    (path / "en.json").write_text(
        json.dumps(
            {
                "meta_tags": {
                    "base": {"title": "Devpost", "description": "Hackathons"},
                    "software": {"title": "%{name} | Devpost"},
                }
            }
        ),
        encoding="utf-8",
    )
    (path / "es.json").write_text(
        json.dumps({"meta_tags": {"base": {"title": "Devpost en español"}}}),
        encoding="utf-8",
    )
    return path


def bump_mtime(path, seconds=10):
    stat = path.stat()
    os.utime(path, (stat.st_atime + seconds, stat.st_mtime + seconds))


class TestKeyParts:
    def test_scope_and_key(self):
        assert key_parts("title", "meta_tags.article") == ["meta_tags", "article", "title"]

    def test_empty_segments_are_dropped(self):
        assert key_parts("title", "meta_tags..article.") == ["meta_tags", "article", "title"]

    def test_no_scope(self):
        assert key_parts("meta_tags.base.title") == ["meta_tags", "base", "title"]


class TestDeepMerge:
    def test_nested_merge(self):
        base = {"a": {"b": 1, "c": 2}}
        deep_merge(base, {"a": {"c": 3, "d": 4}, "e": 5})

        assert base == {"a": {"b": 1, "c": 3, "d": 4}, "e": 5}

    def test_merged_dicts_are_copied(self):
        source = {"a": {"b": 1}}
        merged = deep_merge({}, source)
        merged["a"]["b"] = 2

        assert source["a"]["b"] == 1


class TestTranslate:
    """Lookup, fallback and interpolation."""

    def test_stored_translation(self):
        translator = Translator()
        translator.store("en", {"meta_tags": {"base": {"title": "Devpost"}}})

        assert translator.translate("title", scope="meta_tags.base") == "Devpost"

    def test_store_merges(self):
        translator = Translator()
        translator.store("en", {"meta_tags": {"base": {"title": "Devpost"}}})
        translator.store("en", {"meta_tags": {"base": {"description": "Hackathons"}}})

        assert translator.translate("title", scope="meta_tags.base") == "Devpost"
        assert translator.translate("description", scope="meta_tags.base") == "Hackathons"

    def test_interpolation(self):
        translator = Translator()
        translator.store("en", {"greeting": "Hello %{name}, welcome to %{site}"})

        assert (
            translator.translate("greeting", name="Ada", site="Devpost")
            == "Hello Ada, welcome to Devpost"
        )

    def test_missing_interpolation_value_left_verbatim(self):
        translator = Translator()
        translator.store("en", {"greeting": "Hello %{name}"})

        assert translator.translate("greeting") == "Hello %{name}"

    def test_non_string_values_are_stringified(self):
        translator = Translator()
        translator.store("en", {"count": "%{n} projects"})

        assert translator.translate("count", n=3) == "3 projects"

    def test_none_value_renders_empty(self):
        translator = Translator()
        translator.store("en", {"title": "%{subtitle}Devpost"})

        assert translator.translate("title", subtitle=None) == "Devpost"

    def test_double_percent_is_literal(self):
        translator = Translator()
        translator.store("en", {"progress": "100%% of %{name}"})

        assert translator.translate("progress", name="x") == "100% of x"

    def test_escaped_placeholder_is_not_interpolated(self):
        """``%%{name}`` keeps the placeholder text after one percent sign."""
        translator = Translator()
        translator.store("en", {"hint": "Use %%{name} in titles"})

        assert translator.translate("hint", name="x") == "Use %{name} in titles"

    def test_locale_falls_back_to_default(self):
        translator = Translator(default_locale="en")
        translator.store("en", {"title": "Devpost"})

        assert translator.translate("title", locale="de") == "Devpost"

    def test_missing_returns_marker(self):
        translator = Translator()

        assert (
            translator.translate("title", scope="meta_tags.article", locale="fr")
            == "translation missing: fr.meta_tags.article.title"
        )

    def test_missing_returns_default(self):
        translator = Translator()

        assert translator.translate("title", default="Welcome %{name}", name="Ada") == "Welcome Ada"

    def test_subtree_is_not_a_translation(self):
        """A key pointing at a nested object counts as missing."""
        translator = Translator()
        translator.store("en", {"meta_tags": {"base": {"title": "Devpost"}}})

        assert translator.translate("base", scope="meta_tags").startswith("translation missing")

    def test_clear(self):
        translator = Translator()
        translator.store("en", {"title": "Devpost"})
        translator.clear()

        assert translator.available_locales() == []


class TestCatalogFiles:
    """Catalogs are read from <locale>.json files."""

    def test_loads_files(self, locales_dir):
        translator = Translator(locales_dir)

        assert translator.available_locales() == ["en", "es"]
        assert translator.translate("title", scope="meta_tags.base", locale="es") == "Devpost en español"
        assert (
            translator.translate("title", scope="meta_tags.software", name="Widget")
            == "Widget | Devpost"
        )

    def test_stored_strings_take_precedence(self, locales_dir):
        translator = Translator(locales_dir)
        translator.store("en", {"meta_tags": {"base": {"title": "Overridden"}}})

        assert translator.translate("title", scope="meta_tags.base") == "Overridden"
        assert translator.translate("description", scope="meta_tags.base") == "Hackathons"

    def test_missing_directory_is_empty(self, tmp_path):
        translator = Translator(tmp_path / "nowhere")

        assert translator.available_locales() == []

    def test_malformed_file_is_skipped(self, locales_dir):
        (locales_dir / "fr.json").write_text("{not json", encoding="utf-8")
        (locales_dir / "de.json").write_text("[1, 2]", encoding="utf-8")
        translator = Translator(locales_dir)

        assert translator.available_locales() == ["en", "es"]

    def test_reloads_changed_files(self, locales_dir):
        translator = Translator(locales_dir, reload=True)
        assert translator.translate("title", scope="meta_tags.base") == "Devpost"

        en = locales_dir / "en.json"
        en.write_text(json.dumps({"meta_tags": {"base": {"title": "Devpost 2"}}}), encoding="utf-8")
        bump_mtime(en)

        assert translator.translate("title", scope="meta_tags.base") == "Devpost 2"

    def test_picks_up_new_files(self, locales_dir):
        translator = Translator(locales_dir, reload=True)
        assert translator.available_locales() == ["en", "es"]

        (locales_dir / "fr.json").write_text(
            json.dumps({"meta_tags": {"base": {"title": "Devpost FR"}}}), encoding="utf-8"
        )

        assert translator.translate("title", scope="meta_tags.base", locale="fr") == "Devpost FR"

    def test_no_reload_when_disabled(self, locales_dir):
        translator = Translator(locales_dir, reload=False)
        assert translator.translate("title", scope="meta_tags.base") == "Devpost"

        en = locales_dir / "en.json"
        en.write_text(json.dumps({"meta_tags": {"base": {"title": "Devpost 2"}}}), encoding="utf-8")
        bump_mtime(en)

        assert translator.translate("title", scope="meta_tags.base") == "Devpost"
