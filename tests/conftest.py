import logging

import pytest

CHROME_BOOKMARKS = """<!DOCTYPE NETSCAPE-Bookmark-file-1>
<!-- This is an automatically generated file.
     It will be read and overwritten.
     DO NOT EDIT! -->
<META HTTP-EQUIV="Content-Type" CONTENT="text/html; charset=UTF-8">
<TITLE>Bookmarks</TITLE>
<H1>Bookmarks</H1>
<DL><p>
    <DT><H3 ADD_DATE="1700000000" LAST_MODIFIED="1700000500" PERSONAL_TOOLBAR_FOLDER="true">Bookmarks bar</H3>
    <DL><p>
        <DT><A HREF="https://example.com" ADD_DATE="1700000000" ICON="data:image/png;base64,AAAA">Example Site</A>
        <DT><A HREF="https://github.com" ADD_DATE="1700000001">GitHub</A>
        <DT><H3 ADD_DATE="1700000002">Dev Tools</H3>
        <DL><p>
            <DT><A HREF="https://nodejs.org" ADD_DATE="1700000003">Node.js</A>
        </DL><p>
    </DL><p>
    <DT><A HREF="https://news.ycombinator.com" ADD_DATE="1700000004">Hacker News</A>
</DL><p>
"""

FIREFOX_BOOKMARKS = """<!DOCTYPE NETSCAPE-Bookmark-file-1>
<META HTTP-EQUIV="Content-Type" CONTENT="text/html; charset=UTF-8">
<meta http-equiv="Content-Security-Policy"
      content="default-src 'self'; script-src 'none'; img-src data: *; object-src 'none'"></meta>
<TITLE>Bookmarks</TITLE>
<H1>Bookmarks Menu</H1>

<DL><p>
    <DT><A HREF="https://docs.python.org/3/" ADD_DATE="1700000000" LAST_MODIFIED="1700000100" ICON_URI="https://docs.python.org/favicon.ico" SHORTCUTURL="">Python docs</A>
    <HR>
    <DT><H3 ADD_DATE="1700000000" LAST_MODIFIED="1700000200" PERSONAL_TOOLBAR_FOLDER="true">Bookmarks Toolbar</H3>
    <DL><p>
        <DT><A HREF="https://pypi.org/" ADD_DATE="1700000300" LAST_CHARSET="UTF-8">PyPI</A>
    </DL><p>
</DL>
"""

EDGE_BOOKMARKS = """<!DOCTYPE NETSCAPE-Bookmark-file-1>
<META HTTP-EQUIV="Content-Type" CONTENT="text/html; charset=UTF-8">
<TITLE>Bookmarks</TITLE>
<H1>Bookmarks</H1>
<DL><p>
    <DT><H3 ADD_DATE="1700000000" LAST_MODIFIED="0" PERSONAL_TOOLBAR_FOLDER="true">Favorites bar</H3>
    <DL><p>
        <DT><A HREF="https://www.microsoft.com/edge" ADD_DATE="1700000000">Microsoft Edge</A>
    </DL><p>
</DL><p>
"""

SAFARI_BOOKMARKS = """<!DOCTYPE NETSCAPE-Bookmark-file-1>
<HTML>
<META HTTP-EQUIV="Content-Type" CONTENT="text/html; charset=UTF-8">
<Title>Bookmarks</Title>
<H1>Bookmarks</H1>
<DL><p>
<DT><H3 FOLDED>Favourites</H3>
<DL><p>
<DT><A HREF="https://www.apple.com/safari/">Safari</A>
</DL><p>
</DL><p>
</HTML>
"""

EXAMPLE_DOCUMENT = (
    '<!DOCTYPE NETSCAPE-Bookmark-file-1><TITLE>Bookmarks</TITLE>'
    '<DL><p><DT><A HREF="https://example.com" ADD_DATE="1700000000">Example</A></DL><p>'
)


def nested_document(levels: int) -> str:
    """Build an export with `levels` folders nested inside each other"""
    body = '<DT><A HREF="https://deep.example">Deep</A>\n'
    for n in range(levels, 0, -1):
        body = f'<DT><H3>L{n}</H3>\n<DL><p>\n{body}</DL><p>\n'
    return f'<!DOCTYPE NETSCAPE-Bookmark-file-1>\n<DL><p>\n{body}</DL><p>\n'


@pytest.fixture
def chrome_html():
    return CHROME_BOOKMARKS


@pytest.fixture
def firefox_html():
    return FIREFOX_BOOKMARKS


@pytest.fixture
def restore_root_logger():
    """Undo handler changes made by setup_logging"""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        if handler not in handlers:
            root_logger.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root_logger.handlers:
            root_logger.addHandler(handler)
    root_logger.setLevel(level)
    logging.getLogger("BookmarkImport").setLevel(logging.NOTSET)
    logging.getLogger("BookmarkImport.parser").setLevel(logging.NOTSET)
