from collections import abc
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from utils.config import ImportConfig
from utils.logger import get_logger
from utils.utils import join_folder_path, normalize_url
from .bookmark import BrowserType, ParsedBookmark
from .bookmark_parser import BookmarkParseError, parse_bookmark_html

logger = get_logger("import")

SUPPORTED_EXTENSIONS = ('.html', '.htm')

INVALID_FILE_MESSAGE = "Invalid bookmark file. Please upload a browser bookmark export (.html)."
EMPTY_FILE_MESSAGE = "The uploaded file is empty."
TOO_LARGE_MESSAGE = "The uploaded file is too large."
NO_BOOKMARKS_MESSAGE = "No bookmarks found in the uploaded file."

# Marks a duplicate found within the same upload rather than in storage
SAME_IMPORT_ID = -1

ExistingUrls = Union[Mapping[str, Optional[int]], Iterable[str]]


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def is_supported_filename(filename: str) -> bool:
    """Check that an uploaded file name has an HTML extension"""
    return filename.lower().endswith(SUPPORTED_EXTENSIONS)


@dataclass(frozen=True)
class ImportRecord:
    """A parsed bookmark shaped for storage"""
    url: str
    title: str
    folder: Optional[str] = None
    favicon: Optional[str] = None
    browser: Optional[str] = None
    date_added: Optional[datetime] = None
    normalized_url: str = field(init=False)

    def __post_init__(self):
        # Frozen, so set the computed field through object.__setattr__
        object.__setattr__(self, 'normalized_url', normalize_url(self.url))

    def to_dict(self) -> Dict:
        """Convert the record to a dictionary for the storage layer."""
        return {
            'url': self.url,
            'title': self.title,
            'folder': self.folder,
            'favicon': self.favicon,
            'browser': self.browser,
            'date_added': self.date_added.isoformat() if self.date_added else None,
        }


@dataclass(frozen=True)
class DuplicateBookmark:
    url: str
    title: str
    existing_id: Optional[int]

    def to_dict(self) -> Dict:
        return {'url': self.url, 'title': self.title, 'existing_id': self.existing_id}


@dataclass
class ImportSummary:
    """Outcome of one import, ready to be rendered for the user"""
    success: bool
    message: str
    imported: int = 0
    records: List[ImportRecord] = field(default_factory=list)
    duplicates: List[DuplicateBookmark] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    browser_type: Optional[BrowserType] = None

    def to_dict(self) -> Dict:
        data = {
            'success': self.success,
            'message': self.message,
            'imported': self.imported,
            'duplicates': [duplicate.to_dict() for duplicate in self.duplicates],
        }
        if self.errors:
            data['errors'] = list(self.errors)
        if self.browser_type:
            data['browser'] = self.browser_type.value
        return data


def to_import_record(bookmark: ParsedBookmark, browser_type: BrowserType,
                     separator: str = " > ") -> ImportRecord:
    """Flatten a parsed bookmark into a storable record"""
    return ImportRecord(
        url=bookmark.url,
        title=bookmark.title,
        folder=join_folder_path(bookmark.folder_path, separator),
        favicon=bookmark.icon,
        browser=browser_type.value,
        date_added=bookmark.date_added,
    )


def _existing_index(existing_urls: ExistingUrls) -> Dict[str, Optional[int]]:
    if isinstance(existing_urls, abc.Mapping):
        return {normalize_url(url): existing_id for url, existing_id in existing_urls.items()}
    return {normalize_url(url): None for url in existing_urls}


def partition_duplicates(bookmarks: Iterable[ParsedBookmark],
                         existing_urls: ExistingUrls = ()) -> Tuple[List[ParsedBookmark], List[DuplicateBookmark]]:
    """
    Split bookmarks into ones worth inserting and duplicates.

    A bookmark is a duplicate when its normalized URL was already seen
    earlier in the same batch (existing_id -1) or is among existing_urls,
    which is either a mapping of URL to stored id or a plain iterable of URLs.
    """
    existing = _existing_index(existing_urls)
    seen = set()
    unique: List[ParsedBookmark] = []
    duplicates: List[DuplicateBookmark] = []

    for bookmark in bookmarks:
        normalized = normalize_url(bookmark.url)

        if normalized in seen:
            duplicates.append(DuplicateBookmark(bookmark.url, bookmark.title, SAME_IMPORT_ID))
            continue
        seen.add(normalized)

        if normalized in existing:
            duplicates.append(DuplicateBookmark(bookmark.url, bookmark.title, existing[normalized]))
        else:
            unique.append(bookmark)

    return unique, duplicates


def _success_message(imported: int, duplicates: int) -> str:
    if imported > 0 and duplicates > 0:
        return (f"Successfully imported {_plural(imported, 'bookmark')}. "
                f"{_plural(duplicates, 'duplicate')} skipped.")
    if imported > 0:
        return f"Successfully imported {_plural(imported, 'bookmark')}."
    if duplicates > 0:
        return f"All {_plural(duplicates, 'bookmark')} already exist."
    return "No bookmarks were imported."


class BookmarkImporter:
    """Turns an uploaded bookmark export into records for the storage layer"""

    def __init__(self, config: Optional[ImportConfig] = None):
        self.config = config or ImportConfig.from_env()

    def import_html(self, content: Union[str, bytes], existing_urls: ExistingUrls = ()) -> ImportSummary:
        """
        Parse an uploaded export and build the records to insert.

        Parse failures become an unsuccessful summary with a generic message;
        the internal reason is only logged.
        """
        if isinstance(content, bytes):
            content = content.decode('utf-8', errors='replace')

        if isinstance(content, str):
            if len(content) > self.config.max_document_chars:
                logger.warning(f"Rejected bookmark file | Size: {len(content)} chars | "
                               f"Limit: {self.config.max_document_chars}")
                return ImportSummary(success=False, message=TOO_LARGE_MESSAGE)
            if not content.strip():
                return ImportSummary(success=False, message=EMPTY_FILE_MESSAGE)

        try:
            result = parse_bookmark_html(content, max_folder_depth=self.config.max_folder_depth)
        except BookmarkParseError as e:
            logger.warning(f"Rejected bookmark file | Error: {e}")
            return ImportSummary(success=False, message=INVALID_FILE_MESSAGE)

        browser = result.browser_type
        errors = list(result.parse_errors)

        if result.total_count == 0:
            logger.info("No bookmarks found in upload", browser=browser.value)
            return ImportSummary(success=True, message=NO_BOOKMARKS_MESSAGE,
                                 errors=errors, browser_type=browser)

        unique, duplicates = partition_duplicates(result.bookmarks, existing_urls)
        records = [to_import_record(bookmark, browser, self.config.folder_separator) for bookmark in unique]

        message = _success_message(len(records), len(duplicates))
        logger.info(f"Import prepared | New: {len(records)} | Duplicates: {len(duplicates)}",
                    browser=browser.value)
        return ImportSummary(
            success=True,
            message=message,
            imported=len(records),
            records=records,
            duplicates=duplicates,
            errors=errors,
            browser_type=browser,
        )
