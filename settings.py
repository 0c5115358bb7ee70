"""
Settings store: defaults from config (env), overridden by a JSON file.
Keys in the file are camelCase (maximumTitleLength, websiteBlacklist, ...).
The core reads settings once per operation, so edits apply to the next action.
"""
import json
import logging
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path

import config

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    maximum_title_length: int
    should_preserve_selection_as_title: bool
    enhance_default_paste: bool
    enhance_drop_events: bool
    website_blacklist: str
    use_better_paste_id: bool
    use_new_scraper: bool
    link_preview_api_key: str
    link_regex: str


def default_settings() -> Settings:
    return Settings(
        maximum_title_length=config.MAXIMUM_TITLE_LENGTH,
        should_preserve_selection_as_title=config.PRESERVE_SELECTION_AS_TITLE,
        enhance_default_paste=config.ENHANCE_DEFAULT_PASTE,
        enhance_drop_events=config.ENHANCE_DROP_EVENTS,
        website_blacklist=config.WEBSITE_BLACKLIST,
        use_better_paste_id=config.USE_BETTER_PASTE_ID,
        use_new_scraper=config.USE_NEW_SCRAPER,
        link_preview_api_key=config.LINKPREVIEW_API_KEY,
        link_regex=config.LINK_REGEX,
    )


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(p.capitalize() for p in rest)


_KEYS = {_camel(f.name): f for f in fields(Settings)}


def _path() -> Path | None:
    if not config.SETTINGS_FILE:
        return None
    return Path(config.SETTINGS_FILE)


def _coerce(value, current):
    """Coerce a JSON value to the type of the default; None if it does not fit."""
    if isinstance(current, bool):
        return value if isinstance(value, bool) else None
    if isinstance(current, int):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        return max(int(value), 0)
    return value if isinstance(value, str) else None


def load_settings() -> Settings:
    """Defaults merged with the settings file. Malformed files fall back to defaults."""
    settings = default_settings()
    p = _path()
    if not p or not p.exists():
        return settings
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except Exception as e:
        log.warning("Could not load settings from %s: %s", p, e)
        return settings
    if not isinstance(data, dict):
        log.warning("Ignoring settings file %s: expected an object", p)
        return settings
    updates = {}
    for key, value in data.items():
        field = _KEYS.get(key)
        if field is None:
            continue
        coerced = _coerce(value, getattr(settings, field.name))
        if coerced is None:
            log.warning("Ignoring setting %s: unexpected value %r", key, value)
            continue
        updates[field.name] = coerced
    return replace(settings, **updates)


def save_settings(settings: Settings) -> None:
    """Persist settings to the settings file (camelCase keys)."""
    p = _path()
    if not p:
        return
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        data = {_camel(k): v for k, v in asdict(settings).items()}
        p.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    except Exception as e:
        log.warning("Could not save settings to %s: %s", p, e)
