"""Centralised settings for the Zep crawler.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

_DEFAULT_CONTENT_SELECTORS = (
    "main",
    "article",
    "[role=main]",
    "#content",
    ".content",
    "#main",
    ".main-content",
    ".post-content",
    ".entry-content",
)


def _split_list(raw: str | None, default: tuple[str, ...]) -> list[str]:
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Data files
    # ------------------------------------------------------------------
    data_dir: Path = field(
        default_factory=lambda: Path(os.environ.get("ZEP_DATA_DIR", "data"))
    )
    catalog_source: str = field(
        default_factory=lambda: os.environ.get("ZEP_CATALOG_SOURCE", "")
    )
    index_filename: str = field(
        default_factory=lambda: os.environ.get("ZEP_INDEX_FILE", "index.json")
    )
    memory_filename: str = field(
        default_factory=lambda: os.environ.get("ZEP_MEMORY_FILE", "crawled.json")
    )
    votes_filename: str = field(
        default_factory=lambda: os.environ.get("ZEP_VOTES_FILE", "votes.json")
    )

    @property
    def catalog_path(self) -> str:
        """Catalog location: an explicit source, else ``sites.txt`` in the data dir."""
        return self.catalog_source or str(self.data_dir / "sites.txt")

    @property
    def index_path(self) -> Path:
        return self.data_dir / self.index_filename

    @property
    def memory_path(self) -> Path:
        return self.data_dir / self.memory_filename

    @property
    def votes_path(self) -> Path:
        return self.data_dir / self.votes_filename

    # ------------------------------------------------------------------
    # Fetching / politeness
    # ------------------------------------------------------------------
    fetch_timeout: float = field(
        default_factory=lambda: float(os.environ.get("ZEP_FETCH_TIMEOUT", "10.0"))
    )
    discovery_timeout: float = field(
        default_factory=lambda: float(os.environ.get("ZEP_DISCOVERY_TIMEOUT", "8.0"))
    )
    politeness_delay: float = field(
        default_factory=lambda: float(os.environ.get("ZEP_POLITENESS_DELAY", "1.0"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "ZEP_USER_AGENT", "Mozilla/5.0 (compatible; ZepBot/1.0)"
        )
    )

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------
    content_max_chars: int = field(
        default_factory=lambda: int(os.environ.get("ZEP_CONTENT_MAX_CHARS", "500"))
    )
    content_paragraphs: int = field(
        default_factory=lambda: int(os.environ.get("ZEP_CONTENT_PARAGRAPHS", "3"))
    )
    content_selectors: list[str] = field(
        default_factory=lambda: _split_list(
            os.environ.get("ZEP_CONTENT_SELECTORS"), _DEFAULT_CONTENT_SELECTORS
        )
    )

    # ------------------------------------------------------------------
    # Discovery / index
    # ------------------------------------------------------------------
    discovery_limit: int = field(
        default_factory=lambda: int(os.environ.get("ZEP_DISCOVERY_LIMIT", "20"))
    )
    # "delta": only entries processed this run; "full": also re-emit remembered ones
    index_mode: str = field(
        default_factory=lambda: os.environ.get("ZEP_INDEX_MODE", "delta")
    )

    def ensure_data_dir(self) -> None:
        """Create the data directory if it does not exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)


# Module-level singleton, import this everywhere:
#   from zep.config import settings
settings = Settings()
