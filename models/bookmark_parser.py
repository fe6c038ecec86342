"""
Parser for browser bookmark exports in the Netscape Bookmark File format.

The format is HTML-like but not well-formed (unclosed <DT>, stray <p>, mixed
tag case), so instead of a general HTML parser this walks the text with a
small state machine. Folders are <DT><H3>name</H3> followed by a nested <DL>;
bookmarks are <DT><A HREF=...>title</A>.
"""

import re
import sys
from enum import Enum
from typing import List, Optional, Tuple, Union

from utils.config import DEFAULT_MAX_FOLDER_DEPTH
from utils.html_text import extract_text_content, parse_attributes, parse_timestamp
from utils.logger import get_logger
from .bookmark import BookmarkFolder, ParsedBookmark, ParseResult
from .browser_detection import detect_browser_type

logger = get_logger("parser")

_SIGNATURE = 'netscape-bookmark-file'

_ENTRY_OPEN_RE = re.compile(r"<dt[\s>]", re.IGNORECASE)
_LIST_OPEN_RE = re.compile(r"<dl[\s>]", re.IGNORECASE)
_LIST_CLOSE_RE = re.compile(r"</dl>", re.IGNORECASE)
_LIST_OPEN_TAG_RE = re.compile(r"<dl(?=[\s>])[^>]*>", re.IGNORECASE)

_FOLDER_HEADER_START_RE = re.compile(r"<h3[\s>]", re.IGNORECASE)
_ANCHOR_START_RE = re.compile(r"<a[\s>]", re.IGNORECASE)
_FOLDER_HEADER_RE = re.compile(r"<h3\s*([^>]*)>(.*?)</h3>", re.IGNORECASE | re.DOTALL)
_ANCHOR_RE = re.compile(r"<a(?=[\s>])\s*([^>]*)>(.*?)</a>", re.IGNORECASE | re.DOTALL)

PREVIEW_LENGTH = 80

# walk -> _flush -> _emit_* -> _walk_nested
FRAMES_PER_LEVEL = 4


class BookmarkParseError(ValueError):
    """Base class for errors that abort a bookmark file parse"""


class InvalidInput(BookmarkParseError):
    """The value handed to the parser is not usable text"""


class MalformedDocument(BookmarkParseError):
    """The text does not look like a bookmark export, or could not be walked"""


def _preview(text: str) -> str:
    collapsed = ' '.join(text.split())
    if len(collapsed) > PREVIEW_LENGTH:
        return collapsed[:PREVIEW_LENGTH] + '...'
    return collapsed


def _validate(content: Union[str, bytes, bytearray, None]) -> str:
    """Return the trimmed document text or raise the matching error kind"""
    if isinstance(content, (bytes, bytearray)):
        content = bytes(content).decode('utf-8', errors='replace')

    if not isinstance(content, str):
        raise InvalidInput(
            f"Invalid input: expected bookmark file text, got {type(content).__name__}"
        )

    trimmed = content.strip()
    if not trimmed:
        raise InvalidInput("Invalid input: bookmark file content is empty")

    if _SIGNATURE not in trimmed.lower() and not _LIST_OPEN_RE.search(trimmed):
        raise MalformedDocument(
            "Invalid bookmark file: Missing Netscape bookmark format or DL tags. "
            "Ensure this is a valid browser bookmark export file."
        )

    return trimmed


def extract_list_content(html: str) -> Optional[str]:
    """
    Return the content between the first <DL> opener and its matching </DL>.

    Nested lists are skipped by counting openers and closers. When the list
    is never closed the rest of the text is returned; when there is no list
    at all the result is None.
    """
    start = _LIST_OPEN_TAG_RE.search(html)
    if not start:
        return None

    depth = 1
    content_start = start.end()
    i = content_start
    while True:
        i = html.find('<', i)
        if i == -1:
            break

        opener = _LIST_OPEN_RE.match(html, i)
        if opener:
            depth += 1
            i = opener.end()
            continue

        closer = _LIST_CLOSE_RE.match(html, i)
        if closer:
            depth -= 1
            if depth == 0:
                return html[content_start:i]
            i = closer.end()
            continue

        i += 1

    return html[content_start:]


class _State(Enum):
    SCANNING = "scanning"
    IN_ENTRY = "in_entry"


class _ListWalker:
    """
    Walks the body of one <DL>, emitting bookmarks and folders in document
    order and recursing into nested lists.

    Collected output lives on the instance; the current folder path and the
    list nesting level are passed down the call stack, never stored.
    """

    def __init__(self, max_folder_depth: int):
        # Each nested list costs FRAMES_PER_LEVEL frames, keep well under the interpreter limit
        self.max_folder_depth = min(max_folder_depth, sys.getrecursionlimit() // (FRAMES_PER_LEVEL + 2))
        self.bookmarks: List[ParsedBookmark] = []
        self.folders: List[BookmarkFolder] = []
        self.errors: List[str] = []

    def walk(self, html: str, path: Tuple[str, ...], level: int = 0) -> None:
        state = _State.SCANNING
        depth = 0
        entry: List[str] = []
        i = 0
        length = len(html)

        while i < length:
            if html[i] != '<':
                next_tag = html.find('<', i)
                if next_tag == -1:
                    next_tag = length
                if state is _State.IN_ENTRY:
                    entry.append(html[i:next_tag])
                i = next_tag
                continue

            if depth == 0:
                entry_open = _ENTRY_OPEN_RE.match(html, i)
                if entry_open:
                    if state is _State.IN_ENTRY:
                        self._flush(''.join(entry), path, level)
                    entry = []
                    state = _State.IN_ENTRY
                    i = entry_open.end()
                    continue

            list_open = _LIST_OPEN_RE.match(html, i)
            if list_open:
                depth += 1
                if state is _State.IN_ENTRY:
                    entry.append(list_open.group(0))
                i = list_open.end()
                continue

            list_close = _LIST_CLOSE_RE.match(html, i)
            if list_close:
                # A stray closer must not push later entries out of reach
                depth = max(depth - 1, 0)
                if state is _State.IN_ENTRY:
                    entry.append(list_close.group(0))
                i = list_close.end()
                continue

            if state is _State.IN_ENTRY:
                entry.append('<')
            i += 1

        if state is _State.IN_ENTRY:
            self._flush(''.join(entry), path, level)

    def _skip(self, message: str) -> None:
        logger.debug(message)
        self.errors.append(message)

    def _flush(self, entry: str, path: Tuple[str, ...], level: int) -> None:
        if not entry.strip():
            return

        # Classify on the entry's own header, not on tags inside a list it carries
        list_start = _LIST_OPEN_RE.search(entry)
        head_end = list_start.start() if list_start else len(entry)
        head = entry[:head_end]

        if _FOLDER_HEADER_START_RE.search(head):
            self._emit_folder(entry, head_end, path, level)
        elif _ANCHOR_START_RE.search(head):
            self._emit_bookmark(entry, head_end, path, level)
        else:
            self._skip(f"Skipped entry without a link or folder header: {_preview(entry)}")
            self._walk_nested(entry, 0, path, level, "an entry without a header")

    def _walk_nested(self, entry: str, start: int, path: Tuple[str, ...], level: int, owner: str) -> None:
        """Walk the first list inside an entry, after position start"""
        list_start = _LIST_OPEN_RE.search(entry, start)
        if not list_start:
            return

        if level + 1 > self.max_folder_depth:
            self._skip(f"Skipped list nested deeper than {self.max_folder_depth} levels under {owner}")
            return

        body = extract_list_content(entry[list_start.start():])
        if body:
            self.walk(body, path, level + 1)

    def _emit_bookmark(self, entry: str, head_end: int, path: Tuple[str, ...], level: int) -> None:
        match = _ANCHOR_RE.search(entry, 0, head_end)
        if not match:
            self._skip(f"Skipped bookmark with an unterminated link: {_preview(entry)}")
        else:
            self._append_bookmark(entry, match, path)

        # Lists hung off a bookmark are not folders, their entries keep the bookmark's path
        self._walk_nested(entry, match.end() if match else 0, path, level, f"bookmark: {_preview(entry)}")

    def _append_bookmark(self, entry: str, match: 're.Match', path: Tuple[str, ...]) -> None:
        attributes = parse_attributes(match.group(1))
        url = attributes.get('HREF')
        if not url:
            self._skip(f"Skipped bookmark without a URL: {_preview(entry)}")
            return

        title = extract_text_content(match.group(2))
        self.bookmarks.append(ParsedBookmark(
            title=title or url,
            url=url,
            folder_path=path,
            date_added=parse_timestamp(attributes.get('ADD_DATE')),
            icon=attributes.get('ICON') or attributes.get('ICON_URI') or None,
        ))

    def _emit_folder(self, entry: str, head_end: int, path: Tuple[str, ...], level: int) -> None:
        match = _FOLDER_HEADER_RE.search(entry, 0, head_end)
        if not match:
            self._skip(f"Skipped folder with an unterminated header: {_preview(entry)}")
            return

        attributes = parse_attributes(match.group(1))
        name = extract_text_content(match.group(2))
        if not name:
            self._skip(f"Skipped folder without a name: {_preview(entry)}")
            return

        folder = BookmarkFolder(
            name=name,
            path=path + (name,),
            date_added=parse_timestamp(attributes.get('ADD_DATE')),
            date_modified=parse_timestamp(attributes.get('LAST_MODIFIED')),
        )
        self.folders.append(folder)

        self._walk_nested(entry, match.end(), folder.path, level,
                          f"folder: {' > '.join(folder.path[:3])} > ...")


def parse_bookmark_html(content: Union[str, bytes, bytearray],
                        max_folder_depth: int = DEFAULT_MAX_FOLDER_DEPTH) -> ParseResult:
    """
    Parse the contents of a browser bookmark export.

    Args:
        content: The full text of an exported .html file. UTF-8 bytes are
            accepted as well.
        max_folder_depth: Folders nested deeper than this are still listed,
            but their contents are skipped with a parse error.

    Returns:
        ParseResult with bookmarks and folders in document order, the guessed
        browser type and one message per skipped entry.

    Raises:
        InvalidInput: content is not text, or is empty/blank.
        MalformedDocument: content has neither the Netscape signature nor a
            <DL> list, or walking it failed unexpectedly.
    """
    text = _validate(content)
    browser_type = detect_browser_type(text)
    walker = _ListWalker(max_folder_depth)

    try:
        body = extract_list_content(text)
        if body is not None:
            walker.walk(body, ())
    except Exception as e:
        logger.warning(f"Bookmark walk failed | Error: {e}", browser=browser_type.value)
        raise MalformedDocument(f"Failed to parse bookmark file: {e}") from e

    result = ParseResult(
        bookmarks=tuple(walker.bookmarks),
        folders=tuple(walker.folders),
        browser_type=browser_type,
        parse_errors=tuple(walker.errors),
    )
    logger.info(
        f"Parsed bookmark file | Bookmarks: {result.total_count} | Folders: {len(result.folders)} "
        f"| Skipped: {len(result.parse_errors)}",
        browser=browser_type.value,
    )
    return result


def is_valid_bookmark_html(content: Union[str, bytes, bytearray, None]) -> bool:
    """
    Cheap upload-time check: True exactly when parse_bookmark_html would
    accept the content.
    """
    try:
        _validate(content)
    except BookmarkParseError:
        return False
    return True
