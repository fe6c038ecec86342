"""
Models package for the bookmark import library.
"""

from .bookmark import BookmarkFolder, BrowserType, ParsedBookmark, ParseResult
from .browser_detection import detect_browser_type
from .bookmark_parser import (BookmarkParseError, InvalidInput, MalformedDocument,
                              extract_list_content, is_valid_bookmark_html, parse_bookmark_html)
from .bookmark_import import (BookmarkImporter, DuplicateBookmark, ImportRecord, ImportSummary,
                              is_supported_filename, partition_duplicates, to_import_record)

__all__ = [
    'BookmarkFolder',
    'BookmarkImporter',
    'BookmarkParseError',
    'BrowserType',
    'DuplicateBookmark',
    'ImportRecord',
    'ImportSummary',
    'InvalidInput',
    'MalformedDocument',
    'ParsedBookmark',
    'ParseResult',
    'detect_browser_type',
    'extract_list_content',
    'is_supported_filename',
    'is_valid_bookmark_html',
    'parse_bookmark_html',
    'partition_duplicates',
    'to_import_record',
]
