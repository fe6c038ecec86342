from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Optional, Tuple


class BrowserType(Enum):
    """Browser an export file most likely came from"""
    CHROME = "chrome"
    FIREFOX = "firefox"
    EDGE = "edge"
    SAFARI = "safari"
    UNKNOWN = "unknown"


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(frozen=True)
class ParsedBookmark:
    """A single bookmark anchor read from an export file"""
    title: str
    url: str
    folder_path: Tuple[str, ...] = ()
    date_added: Optional[datetime] = None
    icon: Optional[str] = None

    def to_dict(self) -> Dict:
        """Convert the bookmark to a JSON-friendly dictionary."""
        return {
            'title': self.title,
            'url': self.url,
            'folder_path': list(self.folder_path),
            'date_added': _isoformat(self.date_added),
            'icon': self.icon,
        }


@dataclass(frozen=True)
class BookmarkFolder:
    """A folder header read from an export file.

    ``path`` is root-first and ends with the folder's own name, so it equals
    the ``folder_path`` of any bookmark directly inside it.
    """
    name: str
    path: Tuple[str, ...]
    date_added: Optional[datetime] = None
    date_modified: Optional[datetime] = None

    @property
    def depth(self) -> int:
        return len(self.path)

    def to_dict(self) -> Dict:
        """Convert the folder to a JSON-friendly dictionary."""
        return {
            'name': self.name,
            'path': list(self.path),
            'date_added': _isoformat(self.date_added),
            'date_modified': _isoformat(self.date_modified),
        }


@dataclass(frozen=True)
class ParseResult:
    """Everything read from one export file, in document order"""
    bookmarks: Tuple[ParsedBookmark, ...] = ()
    folders: Tuple[BookmarkFolder, ...] = ()
    browser_type: BrowserType = BrowserType.UNKNOWN
    parse_errors: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def total_count(self) -> int:
        return len(self.bookmarks)

    def to_dict(self) -> Dict:
        """Serialize the whole result to a dictionary."""
        return {
            'bookmarks': [bookmark.to_dict() for bookmark in self.bookmarks],
            'folders': [folder.to_dict() for folder in self.folders],
            'browser_type': self.browser_type.value,
            'total_count': self.total_count,
            'parse_errors': list(self.parse_errors),
        }
