import os
import sys
from pathlib import Path

from loguru import logger

log_dir = Path(os.getenv("SCRAPER_LOG_DIR", "logs"))
log_file = log_dir / "scraper_{time}.log"
log_level = os.getenv("SCRAPER_LOG_LEVEL", "INFO").upper()

logger.remove()
logger.add(sys.stderr, level=log_level)
logger.add(
    log_file,
    rotation="256 MB",  # 每個檔案滿 256MB 就切分
    retention="10 days",  # 只保留最近 10 天的日誌
    compression="zip",  # 切分後的舊檔案自動壓縮成 zip
    encoding="utf-8",
    level=log_level,
    enqueue=True,
    delay=True,  # 第一次寫入時才建立檔案
)
