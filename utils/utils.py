from typing import Iterable, Optional
from urllib.parse import urlsplit, urlunsplit
from .logger import logger

def normalize_url(url: str) -> str:
    """
    Normalize a URL for duplicate detection by:
    1. Trimming surrounding whitespace
    2. Lowercasing the scheme and host
    3. Removing www.
    4. Removing trailing slashes from the path
    5. Dropping the fragment

    The query string is kept since it often selects a different page.
    """
    url = url.strip()
    try:
        parsed = urlsplit(url)

        netloc = parsed.netloc.lower()
        if netloc.startswith('www.'):
            netloc = netloc[4:]

        if not parsed.scheme and not netloc:
            # Not an absolute URL (javascript:, place:, bare text...)
            return url.lower()

        normalized = urlunsplit((parsed.scheme.lower(), netloc, parsed.path.rstrip('/'), parsed.query, ''))
        return normalized
    except ValueError as e:
        logger.warning(f"URL normalization failed | URL: {url} | Error: {e}")
        # If URL parsing fails, return the original URL in lowercase
        return url.lower()

def join_folder_path(folder_path: Iterable[str], separator: str = " > ") -> Optional[str]:
    """
    Join a root-first folder path into a single stored folder string.
    Returns None for top-level bookmarks.
    """
    parts = list(folder_path)
    if not parts:
        return None
    return separator.join(parts)
