from bs4 import BeautifulSoup

from src.config.logger_config import logger
from src.scraper.application.enrichment import EnrichmentPipeline
from src.scraper.application.ports import HtmlFetcherPort, UrlCrawlerPort
from src.scraper.domain.models import NamedUrl, Ship
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


def parse_ship_detail(doc: BeautifulSoup, url: str) -> Ship:
    pictures = parse_picture_urls(doc)
    ship = Ship(
        url=url,
        en_name=parse_main_page_title(doc),
        description=parse_main_page_first_paragraph(doc),
        pic_url=pictures[0] if pictures else "",
        non_canon=is_non_canon(doc),
    )
    for kind, el in infobox_fields(doc):
        if kind == markup.SHIP_NAME_FIELD:
            ship.name = infobox_text(el)
        elif kind == markup.SHIP_STATUS_FIELD:
            ship.status = infobox_text(el)
        elif kind == markup.SHIP_AFFILIATION_FIELD:
            affiliations = infobox_named_urls(el)
            ship.affiliation = affiliations[0] if affiliations else NamedUrl()
        else:
            logger.debug("unknown: .pi-data[data-source={}]", kind)
    return ship


async def load_ship(fetcher: HtmlFetcherPort, url: str) -> Ship:
    return parse_ship_detail(parse_document(await fetcher.fetch_direct(url)), url)


class ShipScraper:
    def __init__(
        self,
        fetcher: HtmlFetcherPort,
        category_crawler: UrlCrawlerPort,
        concurrency: int = 20,
        strict: bool = False,
        show_progress: bool = False,
        root: str = markup.SHIPS_ROOT,
    ) -> None:
        self.fetcher = fetcher
        self.category_crawler = category_crawler
        self.concurrency = concurrency
        self.strict = strict
        self.show_progress = show_progress
        self.root = root

    async def scrape(self) -> list[Ship]:
        logger.info("crawling ship categories")
        ship_urls = await self.category_crawler.get_nested_href(self.root, strict=self.strict)
        pipeline: EnrichmentPipeline[Ship, Ship] = EnrichmentPipeline(
            concurrency_limit=self.concurrency,
            show_progress=self.show_progress,
            name="ships",
        )
        outcome = await pipeline.run(ship_urls, self._load_ship)
        logger.info("collected {} ships, {} failed", len(outcome.records), len(outcome.failures))
        return outcome.records

    async def _load_ship(self, url: str) -> list[Ship]:
        return [await load_ship(self.fetcher, url)]
