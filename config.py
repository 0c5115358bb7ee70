"""
Configuration from environment. Call load_dotenv() before importing this module.
These values are the defaults; the settings file (settings.py) overrides them per operation.
"""
import os


def _env_bool(key: str, default: str) -> bool:
    return (os.getenv(key, default) or "").strip().lower() in ("1", "true", "yes")


# Settings store: JSON file written by save_settings(). Empty = defaults only.
SETTINGS_FILE = (os.getenv("AUTO_LINK_SETTINGS_FILE", "data/settings.json") or "").strip()

# Maximum title length (0 = no limit).
MAXIMUM_TITLE_LENGTH = int(os.getenv("MAXIMUM_TITLE_LENGTH", "0") or "0")

# When true: pasting a URL over selected text links the selection, no fetch.
PRESERVE_SELECTION_AS_TITLE = _env_bool("PRESERVE_SELECTION_AS_TITLE", "true")

# Intercept default paste / drop events carrying a URL.
ENHANCE_DEFAULT_PASTE = _env_bool("ENHANCE_DEFAULT_PASTE", "true")
ENHANCE_DROP_EVENTS = _env_bool("ENHANCE_DROP_EVENTS", "true")

# Comma or newline separated substrings; matching URLs skip title fetching.
WEBSITE_BLACKLIST = os.getenv("WEBSITE_BLACKLIST", "") or ""

# Pad the "Fetching Title" placeholder with zero-width characters.
USE_BETTER_PASTE_ID = _env_bool("USE_BETTER_PASTE_ID", "false")

# true: lightweight HTTP scraper, false: browser-rendering scraper.
USE_NEW_SCRAPER = _env_bool("USE_NEW_SCRAPER", "false")

# LinkPreview (https://www.linkpreview.net) key; must be 32 chars to be used.
LINKPREVIEW_API_KEY = (os.getenv("LINKPREVIEW_API_KEY") or "").strip()
LINKPREVIEW_ENDPOINT = "https://api.linkpreview.net/"

# Markdown link pattern; group 2 is the URL.
LINK_REGEX = r"^\[([^\[\]]*)\]\((https?://[^\s]+)\)$"

# Online check target (HEAD, any HTTP response = online).
CONNECTIVITY_CHECK_URL = (os.getenv("CONNECTIVITY_CHECK_URL", "https://www.gstatic.com/generate_204") or "").strip()
CONNECTIVITY_TIMEOUT = float(os.getenv("CONNECTIVITY_TIMEOUT", "3") or "3")

# gh CLI: extra PATH entry (Homebrew on Apple Silicon) and timeout in seconds.
GH_EXTRA_PATH = (os.getenv("GH_EXTRA_PATH", "/opt/homebrew/bin") or "").strip()
GH_TIMEOUT = float(os.getenv("GH_TIMEOUT", "15") or "15")

# Browser scraper navigation timeout (ms).
BROWSER_TIMEOUT_MS = int(os.getenv("BROWSER_TIMEOUT_MS", "15000") or "15000")

# Literal title used when every stage fails.
FALLBACK_TITLE = "Title Unavailable | Site Unreachable"

USER_AGENT = "Auto-Link-Title/1.0 (link metadata)"
