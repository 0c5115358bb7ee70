"""Tests for settings module (defaults + JSON settings store)."""
import json
from dataclasses import replace

import settings


def test_defaults_when_file_missing():
    s = settings.load_settings()
    assert s == settings.default_settings()


def test_file_overrides_defaults(settings_file):
    settings_file.write_text(json.dumps({
        "maximumTitleLength": 20,
        "websiteBlacklist": "a.com",
        "useNewScraper": True,
        "unknownKey": 1,
    }))
    s = settings.load_settings()
    assert s.maximum_title_length == 20
    assert s.website_blacklist == "a.com"
    assert s.use_new_scraper is True


def test_wrong_types_are_ignored(settings_file):
    settings_file.write_text(json.dumps({"maximumTitleLength": "long", "enhanceDefaultPaste": "yes"}))
    s = settings.load_settings()
    d = settings.default_settings()
    assert s.maximum_title_length == d.maximum_title_length
    assert s.enhance_default_paste == d.enhance_default_paste


def test_malformed_file_falls_back(settings_file):
    settings_file.write_text("{not json")
    assert settings.load_settings() == settings.default_settings()


def test_save_and_reload(settings_file):
    s = settings.default_settings()
    settings.save_settings(replace(s, link_preview_api_key="k" * 32, maximum_title_length=7))
    data = json.loads(settings_file.read_text())
    assert data["linkPreviewApiKey"] == "k" * 32
    assert data["maximumTitleLength"] == 7
    again = settings.load_settings()
    assert again.maximum_title_length == 7


def test_edits_apply_on_next_load(settings_file):
    settings_file.write_text(json.dumps({"websiteBlacklist": "one.com"}))
    assert settings.load_settings().website_blacklist == "one.com"
    settings_file.write_text(json.dumps({"websiteBlacklist": "two.com"}))
    assert settings.load_settings().website_blacklist == "two.com"
