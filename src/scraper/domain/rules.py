CATEGORY_MARKER = "Category:"
NON_CANON_CATEGORY = "Category:Non-Canon"
CACHE_BUSTER = "?cb="


def is_category_path(path: str) -> bool:
    return CATEGORY_MARKER in path


def is_non_canon_path(path: str) -> bool:
    return NON_CANON_CATEGORY in path


def strip_cache_buster(url: str) -> str:
    return url.split(CACHE_BUSTER, 1)[0]


def build_url(base_url: str, key: str) -> str:
    """Resolve a URL key against the wiki root; absolute keys pass through."""
    if key.startswith(("http://", "https://")):
        return key
    return f"{base_url.rstrip('/')}{key}"
