import pytest

from models import BrowserType, detect_browser_type
from conftest import CHROME_BOOKMARKS, EDGE_BOOKMARKS, EXAMPLE_DOCUMENT, FIREFOX_BOOKMARKS, SAFARI_BOOKMARKS

DOCTYPE = '<!DOCTYPE NETSCAPE-Bookmark-file-1>\n'


@pytest.mark.parametrize("html, expected", [
    (CHROME_BOOKMARKS, BrowserType.CHROME),
    (FIREFOX_BOOKMARKS, BrowserType.FIREFOX),
    (EDGE_BOOKMARKS, BrowserType.EDGE),
    (SAFARI_BOOKMARKS, BrowserType.SAFARI),
    (EXAMPLE_DOCUMENT, BrowserType.UNKNOWN),
])
def test_fixture_exports(html, expected):
    assert detect_browser_type(html) == expected


def test_shortcuturl_marks_firefox():
    html = DOCTYPE + '<DL><p><DT><A HREF="https://a.example" SHORTCUTURL="">A</A></DL>'
    assert detect_browser_type(html) == BrowserType.FIREFOX


def test_edge_wins_over_firefox_attributes():
    html = DOCTYPE + '<DL><DT><H3>Favorites</H3><DL><DT><A HREF="https://edge.example" LAST_CHARSET="UTF-8">x</A></DL></DL>'
    assert detect_browser_type(html) == BrowserType.EDGE


def test_mozilla_only_counts_in_prefix_for_signed_files():
    html = DOCTYPE + '<DL>' + ' ' * 3000 + '<DT><A HREF="https://mozilla.example">m</A></DL>'
    assert detect_browser_type(html) == BrowserType.UNKNOWN


def test_plist_without_signature_is_safari():
    assert detect_browser_type('<!DOCTYPE plist PUBLIC "-//Apple//DTD PLIST 1.0//EN"><DL></DL>') == BrowserType.SAFARI


def test_fallback_tokens_without_signature():
    assert detect_browser_type('<TITLE>Firefox export</TITLE><DL></DL>') == BrowserType.FIREFOX
    assert detect_browser_type('<TITLE>Chromium export</TITLE><DL></DL>') == BrowserType.CHROME


def test_case_insensitive():
    assert detect_browser_type(DOCTYPE.lower() + '<dl><dt><h3>BOOKMARKS BAR</h3></dl>') == BrowserType.CHROME


def test_unclassifiable_is_unknown():
    assert detect_browser_type('') == BrowserType.UNKNOWN
    assert detect_browser_type('<DL><DT><A HREF="https://a.example">A</A></DL>') == BrowserType.UNKNOWN
