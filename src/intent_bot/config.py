from importlib import metadata
from pathlib import Path

from pydantic_settings import BaseSettings

_DIST_NAME = "intent-bot"
_DATA_DIR = Path(__file__).resolve().parent / "data"


def _dist_metadata() -> dict[str, str]:
    # Mirrors [project] in pyproject.toml for source checkouts that are not installed
    defaults = {
        "name": _DIST_NAME,
        "version": "0.1.0",
        "author": "Intent Bot Developers",
        "author_email": "dev@intent-bot.example",
        "bug_url": "https://github.com/intent-bot/intent-bot/issues",
    }
    try:
        meta = metadata.metadata(_DIST_NAME)
    except metadata.PackageNotFoundError:
        return defaults

    # Author-email is "Name <addr>" when only [project].authors is set
    author_email = meta.get("Author-email") or ""
    if "<" in author_email:
        defaults["author"] = author_email.split("<", 1)[0].strip() or defaults["author"]
        defaults["author_email"] = author_email.split("<", 1)[1].rstrip(">").strip()
    elif author_email:
        defaults["author_email"] = author_email
    if meta.get("Author"):
        defaults["author"] = meta["Author"]
    defaults["name"] = meta.get("Name") or defaults["name"]
    defaults["version"] = meta.get("Version") or defaults["version"]
    for entry in meta.get_all("Project-URL") or []:
        label, _, url = entry.partition(",")
        if label.strip().lower() == "bug tracker":
            defaults["bug_url"] = url.strip()
    return defaults


_META = _dist_metadata()
VERSION = _META["version"]


class Settings(BaseSettings):
    # Global placeholders substituted into answers
    BOT_NAME: str = _META["name"]
    DEVELOPER_NAME: str = _META["author"]
    DEVELOPER_EMAIL: str = _META["author_email"]
    BUG_REPORT_URL: str = _META["bug_url"]

    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Minimum similarity for an answer-pool hit (strictly greater than)
    STANDARD_RATING: float = 0.6

    INTENTS_DIR: str = str(_DATA_DIR)
    STATIC_DIR: str = "public"

    WIKIPEDIA_API_URL: str = "https://en.wikipedia.org/api/rest_v1"
    WIKIPEDIA_TIMEOUT: float = 10.0

    log_dir: str = "logs"
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
