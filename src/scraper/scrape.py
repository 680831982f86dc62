from __future__ import annotations
import asyncio
from collections.abc import Awaitable, Callable, Iterable, Sequence
from typing import Any

import aiohttp

from src.config.logger_config import logger
from src.config.settings import ScraperSettings, load_settings
from src.scraper.application.category_crawler import CategoryCrawler
from src.scraper.application.ports import HtmlFetcherPort, OutputWriterPort
from src.scraper.application.workflows import DevilFruitScraper, PirateScraper, ShipScraper
from src.scraper.domain.errors import ScraperError
from src.scraper.domain.models import ScrapeSummary
from src.scraper.domain.types import EntityFamily
from src.scraper.infrastructure.fetcher import HtmlFetcher
from src.scraper.infrastructure.http_store import AiohttpDocumentStore
from src.scraper.infrastructure.json_writer import JsonOutputWriter


async def scrape_families(
    families: Iterable[EntityFamily],
    fetcher: HtmlFetcherPort,
    writer: OutputWriterPort,
    settings: ScraperSettings,
) -> ScrapeSummary:
    """Run the selected families against one shared fetcher and write their outputs."""
    selected = set(families)
    crawler = CategoryCrawler(fetcher)
    outputs: dict[str, int] = {}
    failed_total = 0

    async def _run(label: str, job: Callable[[], Awaitable[None]]) -> None:
        nonlocal failed_total
        try:
            await job()
        except ScraperError as exc:
            failed_total += 1
            logger.error("Scraping {} failed: {}", label, exc)

    def _write(records: Sequence[Any], name: str) -> None:
        path = writer.write(records, name)
        outputs[name] = len(records)
        logger.info("Wrote {} records to {}", len(records), path)

    df_scraper = DevilFruitScraper(
        fetcher,
        secondary_concurrency=settings.secondary_concurrency,
        show_progress=settings.show_progress,
    )

    async def _df_type_infos() -> None:
        _write(await df_scraper.get_dftype_info(), "df_type_infos")

    async def _df_list() -> None:
        _write(await df_scraper.get_df_list(), "df_list")

    async def _pirates() -> None:
        scraper = PirateScraper(
            fetcher,
            crawler,
            concurrency=settings.secondary_concurrency,
            strict=settings.strict_crawl,
            show_progress=settings.show_progress,
        )
        pirates, ships = await scraper.scrape()
        _write(pirates, "pirates")
        _write(ships, "pirate_ships")

    async def _ships() -> None:
        scraper = ShipScraper(
            fetcher,
            crawler,
            concurrency=settings.secondary_concurrency,
            strict=settings.strict_crawl,
            show_progress=settings.show_progress,
        )
        _write(await scraper.scrape(), "ships")

    # One entry per output group, each failing on its own.
    jobs: list[tuple[EntityFamily, str, Callable[[], Awaitable[None]]]] = [
        (EntityFamily.DEVIL_FRUIT, "df_type_infos", _df_type_infos),
        (EntityFamily.DEVIL_FRUIT, "df_list", _df_list),
        (EntityFamily.PIRATE, "pirates", _pirates),
        (EntityFamily.SHIP, "ships", _ships),
    ]
    for family, label, job in jobs:
        if family in selected:
            await _run(label, job)

    return ScrapeSummary(outputs=outputs, failed_total=failed_total)


async def run_scrape_async(
    *,
    families: Iterable[EntityFamily] | None = None,
    output_dir: str | None = None,
    settings: ScraperSettings | None = None,
) -> ScrapeSummary:
    settings = settings or load_settings()
    writer = JsonOutputWriter(output_dir or settings.output_dir)
    connector = aiohttp.TCPConnector(limit=0, limit_per_host=settings.connector_limit_per_host, ttl_dns_cache=300)
    async with aiohttp.ClientSession(connector=connector) as session:
        store = AiohttpDocumentStore(
            session,
            retries=settings.retries,
            request_timeout=settings.request_timeout,
            connect_timeout=settings.connect_timeout,
            headers={"User-Agent": settings.user_agent},
        )
        fetcher = HtmlFetcher(store, base_url=settings.base_url, per_key_locks=settings.per_key_locks)
        return await scrape_families(
            list(EntityFamily) if families is None else families,
            fetcher,
            writer,
            settings,
        )


def run_scrape(
    *,
    families: Iterable[EntityFamily] | None = None,
    output_dir: str | None = None,
    settings: ScraperSettings | None = None,
) -> ScrapeSummary:
    return asyncio.run(run_scrape_async(families=families, output_dir=output_dir, settings=settings))
