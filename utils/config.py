import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .logger import logger

DEFAULT_MAX_DOCUMENT_CHARS = 50_000_000
DEFAULT_MAX_FOLDER_DEPTH = 100
DEFAULT_FOLDER_SEPARATOR = " > "


def _int_setting(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Ignoring non-integer setting | {name}={raw!r} | Using default: {default}")
        return default
    if value <= 0:
        logger.warning(f"Ignoring non-positive setting | {name}={raw!r} | Using default: {default}")
        return default
    return value


@dataclass(frozen=True)
class ImportConfig:
    """Settings for the bookmark import boundary"""
    max_document_chars: int = DEFAULT_MAX_DOCUMENT_CHARS
    max_folder_depth: int = DEFAULT_MAX_FOLDER_DEPTH
    folder_separator: str = DEFAULT_FOLDER_SEPARATOR

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> 'ImportConfig':
        """Build a config from BOOKMARK_IMPORT_* environment variables."""
        if env is None:
            env = os.environ
        return cls(
            max_document_chars=_int_setting(env, "BOOKMARK_IMPORT_MAX_CHARS", DEFAULT_MAX_DOCUMENT_CHARS),
            max_folder_depth=_int_setting(env, "BOOKMARK_IMPORT_MAX_DEPTH", DEFAULT_MAX_FOLDER_DEPTH),
            folder_separator=env.get("BOOKMARK_IMPORT_FOLDER_SEPARATOR") or DEFAULT_FOLDER_SEPARATOR,
        )
