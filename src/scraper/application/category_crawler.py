from src.config.logger_config import logger
from src.scraper.application.ports import HtmlFetcherPort
from src.scraper.domain.errors import CrawlError, ScraperError
from src.scraper.domain.rules import NON_CANON_CATEGORY, is_category_path
from src.scraper.parsing import markup
from src.scraper.parsing.extractor import extract_links, parse_document


class CategoryCrawler:
    """Discover member pages of a wiki category tree.

    Category pages are fetched through the fetcher's coalesced path, so a
    category shared by several roots is downloaded once per run.
    """

    def __init__(
        self,
        fetcher: HtmlFetcherPort,
        member_selector: str = markup.CATEGORY_MEMBER_SELECTOR,
        exclude: tuple[str, ...] = (NON_CANON_CATEGORY,),
    ) -> None:
        self.fetcher = fetcher
        self.member_selector = member_selector
        self.exclude = exclude

    async def get_href(self, path: str) -> list[str]:
        html = await self.fetcher.fetch(path)
        return self._member_links(html)

    async def get_nested_href(self, root: str, strict: bool = False) -> list[str]:
        frontier: list[str] = [root]
        visited: set[str] = set()
        hrefs: list[str] = []
        errors: list[tuple[str, Exception]] = []

        while frontier:
            url = frontier.pop()
            if url in visited:
                continue
            visited.add(url)

            try:
                links = self._member_links(await self.fetcher.fetch(url))
            except ScraperError as exc:
                errors.append((url, exc))
                continue

            for link in links:
                if is_category_path(link):
                    if link not in visited:
                        frontier.append(link)
                else:
                    hrefs.append(link)

        logger.info(
            "Crawled {} categories under {}: {} members, {} errors",
            len(visited),
            root,
            len(hrefs),
            len(errors),
        )
        if not errors:
            return hrefs
        if strict:
            raise CrawlError(root, errors)
        for url, exc in errors:
            logger.error("Failed to crawl category {}: {}", url, exc)
        return hrefs

    def _member_links(self, html: str) -> list[str]:
        links = extract_links(parse_document(html, strip_sup=False), self.member_selector)
        return [link for link in links if not any(pattern in link for pattern in self.exclude)]
