from bs4 import BeautifulSoup

from src.config.logger_config import logger
from src.scraper.application.enrichment import EnrichmentPipeline
from src.scraper.application.ports import HtmlFetcherPort, UrlCrawlerPort
from src.scraper.application.workflows.ships import load_ship
from src.scraper.domain.models import Pirate, Ship
from src.scraper.parsing import markup
from src.scraper.parsing.extractor import (
    infobox_fields,
    infobox_named_urls,
    infobox_text,
    is_non_canon,
    parse_document,
    parse_main_page_first_paragraph,
    parse_main_page_title,
    parse_picture_urls,
)


def parse_pirate_detail(doc: BeautifulSoup, url: str) -> Pirate:
    pictures = parse_picture_urls(doc)
    pirate = Pirate(
        url=url,
        en_name=parse_main_page_title(doc),
        description=parse_main_page_first_paragraph(doc),
        pic_url=pictures[0] if pictures else "",
        non_canon=is_non_canon(doc),
    )
    for kind, el in infobox_fields(doc):
        if kind == markup.PIRATE_NAME_FIELD:
            pirate.name = infobox_text(el)
        elif kind in markup.PIRATE_CAPTAIN_FIELDS:
            pirate.captain.extend(infobox_named_urls(el))
        elif kind == markup.PIRATE_SHIP_FIELD:
            pirate.ship.extend(infobox_named_urls(el))
        else:
            logger.debug("unknown: .pi-data[data-source={}]", kind)
    return pirate


class PirateScraper:
    """Crews from the by-sea category tree, plus every ship they reference."""

    def __init__(
        self,
        fetcher: HtmlFetcherPort,
        category_crawler: UrlCrawlerPort,
        concurrency: int = 20,
        strict: bool = False,
        show_progress: bool = False,
        root: str = markup.PIRATE_CREWS_ROOT,
    ) -> None:
        self.fetcher = fetcher
        self.category_crawler = category_crawler
        self.concurrency = concurrency
        self.strict = strict
        self.show_progress = show_progress
        self.root = root

    async def scrape(self) -> tuple[list[Pirate], list[Ship]]:
        logger.info("crawling categories...")
        pirate_urls = await self.category_crawler.get_nested_href(self.root, strict=self.strict)

        logger.info("collecting pirates...")
        pipeline: EnrichmentPipeline[Pirate, Ship] = EnrichmentPipeline(
            concurrency_limit=self.concurrency,
            show_progress=self.show_progress,
            name="pirates",
        )
        outcome = await pipeline.run(
            pirate_urls,
            self._load_pirate,
            secondary_links=lambda pirate: [s.url for s in pirate.ship],
            load_secondary=self._load_ship,
        )
        ships = outcome.sorted_secondaries()
        logger.info("collected {} pirates and {} ships", len(outcome.records), len(ships))
        return outcome.records, ships

    async def _load_pirate(self, url: str) -> list[Pirate]:
        html = await self.fetcher.fetch_direct(url)
        return [parse_pirate_detail(parse_document(html), url)]

    async def _load_ship(self, url: str) -> Ship:
        return await load_ship(self.fetcher, url)
