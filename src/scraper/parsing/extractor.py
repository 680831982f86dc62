"""Structured extraction over parsed wiki pages.

Every function here is pure and synchronous: it takes a parsed document (or
a node of one) plus the markup descriptors from ``markup`` and returns plain
values. Missing structure raises ``StructureError``; callers decide whether
that aborts their operation or is collected.
"""

from itertools import takewhile
from typing import Callable, Iterator, Pattern

from bs4 import BeautifulSoup, Tag

from src.scraper.domain.errors import StructureError
from src.scraper.domain.models import NamedJpEn, NamedUrl
from src.scraper.domain.rules import is_non_canon_path, strip_cache_buster
from src.scraper.parsing import markup

StopPredicate = Callable[[Tag], bool]


def parse_document(html: str, strip_sup: bool = True) -> BeautifulSoup:
    soup = BeautifulSoup(html, "lxml")
    if strip_sup:
        # Footnote markers break up the text runs the name parser relies on.
        for sup in soup.find_all("sup"):
            sup.decompose()
    return soup


def element_siblings(node: Tag) -> Iterator[Tag]:
    """Yield the element siblings after ``node`` in document order."""
    for sibling in node.next_siblings:
        if isinstance(sibling, Tag):
            yield sibling


def child_elements(node: Tag) -> list[Tag]:
    return node.find_all(recursive=False)


def _anchor_parent(doc: BeautifulSoup | Tag, anchor_id: str) -> Tag:
    anchor = doc.find(id=anchor_id)
    if anchor is None:
        raise StructureError(f"missing anchor #{anchor_id}")
    parent = anchor.parent
    if parent is None or isinstance(parent, BeautifulSoup):
        raise StructureError(f"anchor #{anchor_id} has no parent section node")
    return parent


def _section_siblings(doc: BeautifulSoup | Tag, anchor_id: str) -> Iterator[Tag]:
    parent = _anchor_parent(doc, anchor_id)
    siblings = element_siblings(parent)
    first = next(siblings, None)
    if first is None:
        raise StructureError(f"no element sibling after anchor #{anchor_id}")

    def _chain() -> Iterator[Tag]:
        yield first
        yield from siblings

    return _chain()


def extract_section(
    doc: BeautifulSoup | Tag,
    anchor_id: str,
    stop_predicate: StopPredicate,
    item_tag: str,
) -> list[Tag]:
    """Collect list items between an anchored heading and a stop marker.

    The anchor's parent is the section heading. Its following element siblings
    are walked up to, not including, the first one matching ``stop_predicate``;
    each ``item_tag`` container among them contributes its direct children.
    """
    items: list[Tag] = []
    for sibling in takewhile(lambda el: not stop_predicate(el), _section_siblings(doc, anchor_id)):
        if sibling.name == item_tag:
            items.extend(child_elements(sibling))
    return items


def extract_first_list_after(
    doc: BeautifulSoup | Tag,
    anchor_id: str,
    marker_tag: str,
    item_tag: str,
) -> list[Tag]:
    """Return the items of the first ``item_tag`` that directly follows a ``marker_tag``."""
    for sibling in _section_siblings(doc, anchor_id):
        if sibling.name != marker_tag:
            continue
        following = next(element_siblings(sibling), None)
        if following is not None and following.name == item_tag:
            return child_elements(following)
    return []


def extract_first_list(doc: BeautifulSoup | Tag, anchor_id: str, item_tag: str) -> list[Tag]:
    for sibling in _section_siblings(doc, anchor_id):
        if sibling.name == item_tag:
            return child_elements(sibling)
    return []


def first_sibling_text(doc: BeautifulSoup | Tag, anchor_id: str) -> str:
    return next(_section_siblings(doc, anchor_id)).get_text()


def heading_with_other_anchor(heading: str, expected_id: str) -> StopPredicate:
    """Stop at a ``heading`` whose first child carries an id other than ``expected_id``."""

    def _predicate(el: Tag) -> bool:
        if el.name != heading:
            return False
        first_child = next(iter(el.children), None)
        if not isinstance(first_child, Tag):
            return False
        anchor_id = first_child.get("id")
        return anchor_id is not None and anchor_id != expected_id

    return _predicate


def extract_links(region: BeautifulSoup | Tag, item_selector: str) -> list[str]:
    return [str(el["href"]) for el in region.select(item_selector) if el.get("href")]


def extract_href(item: Tag, selector: str = markup.FIRST_LINK_SELECTOR) -> str:
    el = item.select_one(selector)
    if el is None or not el.get("href"):
        raise StructureError(f"Missing href attribute. found: {item}")
    return str(el["href"])


def parse_named_text(
    item: Tag,
    alt_name_pattern: Pattern[str],
    description_pattern: Pattern[str],
) -> NamedJpEn:
    """Split an item's text runs into name, alternate name and description.

    The first non-blank run is the name. Later runs are tried against the
    alternate-name pattern, then the description pattern; the first
    description match ends the scan and every remaining run is appended to
    the description with newlines removed.
    """
    runs = iter(item.strings)
    name = ""
    for run in runs:
        if run.strip():
            name = run.strip()
            break

    en_name = ""
    description = ""
    for run in runs:
        match = alt_name_pattern.search(run)
        if match:
            en_name = match.group(1)
            continue
        match = description_pattern.search(run)
        if match:
            description = match.group(1)
            break
    description += "".join(runs).replace("\n", "")
    return NamedJpEn(name=name, en_name=en_name, description=description)


def parse_picture_urls(doc: BeautifulSoup | Tag) -> list[str]:
    return [strip_cache_buster(href) for href in extract_links(doc, markup.PICTURE_SELECTOR)]


def parse_main_page_title(doc: BeautifulSoup | Tag) -> str:
    el = doc.select_one(markup.MAIN_TITLE_SELECTOR)
    if el is None:
        raise StructureError("invalid title page element")
    return el.get_text().strip()


def parse_main_page_first_paragraph(doc: BeautifulSoup | Tag) -> str:
    el = doc.select_one(markup.FIRST_PARAGRAPH_SELECTOR)
    if el is None:
        raise StructureError("invalid first paragraph element")
    return el.get_text().replace("\n", "")


def infobox_fields(doc: BeautifulSoup | Tag) -> list[tuple[str, Tag]]:
    return [
        (str(el["data-source"]), el)
        for el in doc.select(markup.INFOBOX_DATA_SELECTOR)
        if el.get("data-source")
    ]


def infobox_text(el: Tag) -> str:
    children = child_elements(el)
    if not children:
        return ""
    return children[-1].get_text()


def infobox_named_urls(el: Tag) -> list[NamedUrl]:
    seen: set[str] = set()
    result: list[NamedUrl] = []
    for a in el.find_all("a"):
        href = a.get("href")
        if not href or href.startswith("#") or href in seen:
            continue
        seen.add(href)
        result.append(NamedUrl(name=a.get_text().strip(), url=str(href)))
    return result


def is_non_canon(doc: BeautifulSoup | Tag) -> bool:
    return any(is_non_canon_path(href) for href in extract_links(doc, markup.PAGE_HEADER_CATEGORY_SELECTOR))


def parse_table_rows(
    doc: BeautifulSoup | Tag,
    table_selector: str,
    start: int,
    count: int,
) -> list[list[str]]:
    """Return stripped cell texts of ``count`` rows starting at row ``start``."""
    table = doc.select_one(table_selector)
    if table is None:
        raise StructureError(f"missing table {table_selector}")
    rows = table.find_all("tr")[start : start + count]
    return [[td.get_text().strip() for td in row.find_all("td")] for row in rows]
