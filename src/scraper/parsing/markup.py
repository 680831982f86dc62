"""Markup descriptors for onepiece.fandom.com.

Everything here encodes one site's HTML shape; the extraction algorithms in
``extractor`` take these values as parameters.
"""

import re

CATEGORY_MEMBER_SELECTOR = "li.category-page__member a.category-page__member-link"
PAGE_HEADER_CATEGORY_SELECTOR = ".page-header__categories a"
PICTURE_SELECTOR = "aside.portable-infobox figure.pi-image > a.image"
MAIN_TITLE_SELECTOR = ".mw-page-title-main"
FIRST_PARAGRAPH_SELECTOR = "main #mw-content-text p:nth-of-type(3)"
INFOBOX_DATA_SELECTOR = "aside.portable-infobox > section .pi-data"
FIRST_LINK_SELECTOR = "a:nth-of-type(1)"

DF_OVERVIEW_PATH = "/wiki/Devil_Fruit"
DF_SUMMARY_ROW_SELECTOR = "table.wikitable"
DF_SUMMARY_ROW_COUNT = 4

PIRATE_CREWS_ROOT = "/wiki/Category:Pirate_Crews_by_Sea"
SHIPS_ROOT = "/wiki/Category:Ships"

# Zoan list: the canon block runs until the next h3 anchored with another id.
ZOAN_SECTION_HEADING = "h3"
ZOAN_CANON_ANCHOR = "Canon"
# Paramecia/Logia list: the first ul that follows the dl intro.
LIST_INTRO_MARKER = "dl"
LIST_TAG = "ul"

EN_NAME_PATTERN = re.compile(r"English version: (.+)")
ZOAN_DESCRIPTION_PATTERN = re.compile(r"\) - (.+)")
DESCRIPTION_PATTERN = re.compile(r"\): (.+)")

PIRATE_NAME_FIELD = "rname"
PIRATE_CAPTAIN_FIELDS = ("captain", "extra1")
PIRATE_SHIP_FIELD = "ship"
SHIP_NAME_FIELD = "rname"
SHIP_STATUS_FIELD = "status"
SHIP_AFFILIATION_FIELD = "affiliation"
