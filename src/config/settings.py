# 爬蟲執行設定，可由 .env 或環境變數覆寫

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

DEFAULT_BASE_URL = "https://onepiece.fandom.com"
DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; OPDB-Scraper/1.0)"


@dataclass(frozen=True)
class ScraperSettings:
    base_url: str = DEFAULT_BASE_URL
    output_dir: str = "data"
    # 次要頁面 (圖片、船隻) 同時請求上限，避免對 Fandom 造成壓力
    secondary_concurrency: int = 20
    request_timeout: float = 45.0
    connect_timeout: float = 10.0
    retries: int = 3
    connector_limit_per_host: int = 10
    user_agent: str = DEFAULT_USER_AGENT
    strict_crawl: bool = False
    per_key_locks: bool = False
    show_progress: bool = True


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_settings() -> ScraperSettings:
    return ScraperSettings(
        base_url=os.getenv("SCRAPER_BASE_URL", DEFAULT_BASE_URL),
        output_dir=os.getenv("SCRAPER_OUTPUT_DIR", "data"),
        secondary_concurrency=int(os.getenv("SCRAPER_SECONDARY_CONCURRENCY", "20")),
        request_timeout=float(os.getenv("SCRAPER_REQUEST_TIMEOUT", "45")),
        connect_timeout=float(os.getenv("SCRAPER_CONNECT_TIMEOUT", "10")),
        retries=int(os.getenv("SCRAPER_RETRIES", "3")),
        connector_limit_per_host=int(os.getenv("SCRAPER_LIMIT_PER_HOST", "10")),
        user_agent=os.getenv("SCRAPER_USER_AGENT", DEFAULT_USER_AGENT),
        strict_crawl=_env_bool("SCRAPER_STRICT_CRAWL", False),
        per_key_locks=_env_bool("SCRAPER_PER_KEY_LOCKS", False),
        show_progress=_env_bool("SCRAPER_SHOW_PROGRESS", True),
    )
