from .bookmark import BrowserType

# Most signals only look at the start of the file to keep large exports cheap
PREFIX_LENGTH = 2000

NETSCAPE_DOCTYPE = '<!doctype netscape-bookmark-file-1>'

FIREFOX_ATTRIBUTES = ('last_charset', 'shortcuturl', 'web_panel')
CHROME_FOLDER_NAMES = ('bookmarks bar', 'bookmark bar', 'chrome')
SAFARI_PREFIX_MARKERS = ('safari', '<!doctype plist')
FIREFOX_PREFIX_MARKERS = ('mozilla', 'firefox')
CHROMIUM_PREFIX_MARKERS = ('chromium', 'google chrome')


def detect_browser_type(html: str) -> BrowserType:
    """
    Guess which browser exported a bookmark file.

    The Netscape format carries no vendor tag, so this checks textual
    fingerprints in a fixed order and returns the first match. The label is
    informational only and never affects which bookmarks are extracted.
    """
    lower_html = html.lower()
    prefix = lower_html[:PREFIX_LENGTH]

    if NETSCAPE_DOCTYPE in prefix:
        # Edge names its toolbar folder "Favorites bar"
        if 'edge' in lower_html and 'favorites' in lower_html:
            return BrowserType.EDGE

        if any(attr in lower_html for attr in FIREFOX_ATTRIBUTES) or 'mozilla' in prefix:
            return BrowserType.FIREFOX

        if any(name in lower_html for name in CHROME_FOLDER_NAMES):
            return BrowserType.CHROME

    if any(marker in prefix for marker in SAFARI_PREFIX_MARKERS) or 'com.apple' in lower_html:
        return BrowserType.SAFARI

    if any(marker in prefix for marker in FIREFOX_PREFIX_MARKERS):
        return BrowserType.FIREFOX

    if any(marker in prefix for marker in CHROMIUM_PREFIX_MARKERS):
        return BrowserType.CHROME

    return BrowserType.UNKNOWN
