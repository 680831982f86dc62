import unittest

from src.scraper.application.category_crawler import CategoryCrawler
from src.scraper.domain.errors import CrawlError, TransportError
from src.scraper.infrastructure.fetcher import HtmlFetcher
from tests.utils.fake_store import FakeDocumentStore
from tests.utils.wiki_pages import category_page

ROOT = "/wiki/Category:Root"


def make_crawler(pages):
    store = FakeDocumentStore(pages)
    return CategoryCrawler(HtmlFetcher(store)), store


class NestedCrawlTests(unittest.IsolatedAsyncioTestCase):
    async def test_tree_returns_every_leaf(self):
        crawler, _ = make_crawler(
            {
                ROOT: category_page("/wiki/Category:East_Blue", "/wiki/Category:Grand_Line", "/wiki/Roger_Pirates"),
                "/wiki/Category:East_Blue": category_page("/wiki/Straw_Hat_Pirates", "/wiki/Buggy_Pirates"),
                "/wiki/Category:Grand_Line": category_page("/wiki/Category:New_World"),
                "/wiki/Category:New_World": category_page("/wiki/Red_Hair_Pirates"),
            }
        )

        hrefs = await crawler.get_nested_href(ROOT)

        self.assertEqual(
            sorted(hrefs),
            ["/wiki/Buggy_Pirates", "/wiki/Red_Hair_Pirates", "/wiki/Roger_Pirates", "/wiki/Straw_Hat_Pirates"],
        )

    async def test_cycle_terminates_and_fetches_each_category_once(self):
        pages = {
            "/wiki/Category:A": category_page("/wiki/Category:B"),
            "/wiki/Category:B": category_page("/fruit1", "/wiki/Category:A"),
        }
        for strict in (False, True):
            with self.subTest(strict=strict):
                crawler, store = make_crawler(pages)
                hrefs = await crawler.get_nested_href("/wiki/Category:A", strict=strict)
                self.assertEqual(hrefs, ["/fruit1"])
                self.assertEqual(store.call_count("/wiki/Category:A"), 1)
                self.assertEqual(store.call_count("/wiki/Category:B"), 1)

    async def test_leaf_reachable_twice_is_reported_twice(self):
        crawler, _ = make_crawler(
            {
                ROOT: category_page("/wiki/Category:X", "/wiki/Category:Y"),
                "/wiki/Category:X": category_page("/wiki/Shared"),
                "/wiki/Category:Y": category_page("/wiki/Shared"),
            }
        )
        hrefs = await crawler.get_nested_href(ROOT)
        self.assertEqual(hrefs.count("/wiki/Shared"), 2)

    async def test_non_canon_category_is_not_followed(self):
        crawler, store = make_crawler(
            {ROOT: category_page("/wiki/Category:Non-Canon", "/wiki/Going_Merry")}
        )
        hrefs = await crawler.get_nested_href(ROOT)
        self.assertEqual(hrefs, ["/wiki/Going_Merry"])
        self.assertEqual(store.call_count("/wiki/Category:Non-Canon"), 0)


class CrawlFailureTests(unittest.IsolatedAsyncioTestCase):
    def pages(self):
        return {
            ROOT: category_page("/wiki/Category:Good", "/wiki/Category:Bad", "/wiki/Leaf0"),
            "/wiki/Category:Good": category_page("/wiki/Leaf1"),
            "/wiki/Category:Bad": TransportError("/wiki/Category:Bad", "HTTP 500", status=500),
        }

    async def test_lenient_crawl_returns_what_succeeded(self):
        crawler, _ = make_crawler(self.pages())
        hrefs = await crawler.get_nested_href(ROOT)
        self.assertEqual(sorted(hrefs), ["/wiki/Leaf0", "/wiki/Leaf1"])

    async def test_strict_crawl_raises_with_collected_errors(self):
        crawler, store = make_crawler(self.pages())

        with self.assertRaises(CrawlError) as ctx:
            await crawler.get_nested_href(ROOT, strict=True)

        self.assertEqual([url for url, _ in ctx.exception.errors], ["/wiki/Category:Bad"])
        # The rest of the tree is still walked before failing.
        self.assertEqual(store.call_count("/wiki/Category:Good"), 1)

    async def test_missing_root_is_an_error(self):
        crawler, _ = make_crawler({})
        self.assertEqual(await crawler.get_nested_href(ROOT), [])
        with self.assertRaises(CrawlError):
            await crawler.get_nested_href(ROOT, strict=True)


class SinglePageTests(unittest.IsolatedAsyncioTestCase):
    async def test_get_href_lists_members_without_recursing(self):
        crawler, store = make_crawler(
            {ROOT: category_page("/wiki/Category:Sub", "/wiki/Leaf"), "/wiki/Category:Sub": category_page("/wiki/Deep")}
        )
        self.assertEqual(await crawler.get_href(ROOT), ["/wiki/Category:Sub", "/wiki/Leaf"])
        self.assertEqual(store.call_count("/wiki/Category:Sub"), 0)

    async def test_category_pages_are_fetched_once_per_run(self):
        crawler, store = make_crawler({ROOT: category_page("/wiki/Leaf")})
        await crawler.get_nested_href(ROOT)
        await crawler.get_nested_href(ROOT)
        await crawler.get_href(ROOT)
        self.assertEqual(store.call_count(ROOT), 1)


if __name__ == "__main__":
    unittest.main()
