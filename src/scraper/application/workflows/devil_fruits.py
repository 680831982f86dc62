from bs4 import BeautifulSoup

from src.config.logger_config import logger
from src.scraper.application.enrichment import EnrichmentPipeline
from src.scraper.application.ports import HtmlFetcherPort
from src.scraper.domain.errors import StructureError
from src.scraper.domain.models import DevilFruit, DfTypeInfo, PageMedia
from src.scraper.domain.types import DfSubType, DfType
from src.scraper.parsing import markup
from src.scraper.parsing.extractor import (
    extract_first_list,
    extract_first_list_after,
    extract_href,
    extract_section,
    first_sibling_text,
    heading_with_other_anchor,
    is_non_canon,
    parse_document,
    parse_named_text,
    parse_picture_urls,
    parse_table_rows,
)


def parse_sub_types(doc: BeautifulSoup) -> dict[str, DfSubType]:
    sub_types: dict[str, DfSubType] = {}
    for sub_type in DfSubType:
        for item in extract_first_list(doc, sub_type.list_anchor_id, markup.LIST_TAG):
            sub_types[extract_href(item)] = sub_type
    return sub_types


def parse_canon_zoan(doc: BeautifulSoup) -> list[DevilFruit]:
    items = extract_section(
        doc,
        DfType.ZOAN.list_anchor_id,
        heading_with_other_anchor(markup.ZOAN_SECTION_HEADING, markup.ZOAN_CANON_ANCHOR),
        markup.LIST_TAG,
    )
    sub_types = parse_sub_types(doc)
    fruits = []
    for item in items:
        path = extract_href(item)
        name_detail = parse_named_text(item, markup.EN_NAME_PATTERN, markup.ZOAN_DESCRIPTION_PATTERN)
        fruits.append(DevilFruit.from_named(path, DfType.ZOAN, name_detail, sub_types.get(path)))
    logger.info("total Zoan: {}", len(fruits))
    return fruits


def parse_canon_paramecia_logia(doc: BeautifulSoup, df_type: DfType) -> list[DevilFruit]:
    items = extract_first_list_after(
        doc,
        df_type.list_anchor_id,
        markup.LIST_INTRO_MARKER,
        markup.LIST_TAG,
    )
    fruits = []
    for item in items:
        name_detail = parse_named_text(item, markup.EN_NAME_PATTERN, markup.DESCRIPTION_PATTERN)
        fruits.append(DevilFruit.from_named(extract_href(item), df_type, name_detail))
    logger.info("total {}: {}", df_type.value, len(fruits))
    return fruits


def parse_page_media(doc: BeautifulSoup) -> PageMedia:
    pictures = parse_picture_urls(doc)
    return PageMedia(pic_url=pictures[0] if pictures else "", non_canon=is_non_canon(doc))


def merge_page_media(fruit: DevilFruit, media: PageMedia) -> None:
    fruit.pic_url = media.pic_url
    fruit.non_canon = media.non_canon


class DevilFruitScraper:
    def __init__(
        self,
        fetcher: HtmlFetcherPort,
        secondary_concurrency: int = 20,
        show_progress: bool = False,
    ) -> None:
        self.fetcher = fetcher
        self.secondary_concurrency = secondary_concurrency
        self.show_progress = show_progress
        self._types_by_path = {t.path: t for t in DfType.taxonomy()}

    async def get_dftype_info(self) -> list[DfTypeInfo]:
        doc = parse_document(await self.fetcher.fetch(markup.DF_OVERVIEW_PATH))
        descriptions = {t: first_sibling_text(doc, t.value).strip() for t in DfType.taxonomy()}

        infos = []
        for cells in parse_table_rows(doc, markup.DF_SUMMARY_ROW_SELECTOR, 1, markup.DF_SUMMARY_ROW_COUNT):
            try:
                df_type = DfType(cells[0])
                info = DfTypeInfo(
                    df_type=df_type,
                    canon_count=int(cells[1]),
                    non_canon_count=int(cells[2]),
                    description=descriptions.get(df_type, ""),
                )
            except (IndexError, ValueError) as exc:
                raise StructureError(f"invalid devil fruit summary row: {cells}") from exc
            logger.info(
                "{}: canon {}, non-canon {}",
                info.df_type.value,
                info.canon_count,
                info.non_canon_count,
            )
            infos.append(info)
        return infos

    async def get_df_list(self) -> list[DevilFruit]:
        # Three taxonomy pages: unbounded. One picture page per fruit: bounded.
        pipeline: EnrichmentPipeline[DevilFruit, PageMedia] = EnrichmentPipeline(
            concurrency_limit=0,
            secondary_concurrency_limit=self.secondary_concurrency,
            show_progress=self.show_progress,
            name="devil fruits",
        )
        outcome = await pipeline.run(
            list(self._types_by_path),
            self._load_taxonomy,
            secondary_links=lambda fruit: [fruit.url],
            load_secondary=self._load_media,
            merge=merge_page_media,
        )
        return outcome.records

    async def _load_taxonomy(self, path: str) -> list[DevilFruit]:
        df_type = self._types_by_path[path]
        logger.info("getting canon devil fruits for {}", df_type.value)
        doc = parse_document(await self.fetcher.fetch(path))
        if df_type is DfType.ZOAN:
            return parse_canon_zoan(doc)
        return parse_canon_paramecia_logia(doc, df_type)

    async def _load_media(self, path: str) -> PageMedia:
        return parse_page_media(parse_document(await self.fetcher.fetch_direct(path)))
