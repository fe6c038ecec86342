import logging
import os
import sys
import shutil
from datetime import datetime
from pathlib import Path
from typing import Optional, Union
from appdirs import user_data_dir

APP_NAME = "BookmarkImport"
MAX_BACKUP_LOGS = 2


def get_log_dir() -> Path:
    """Return the log directory, honouring BOOKMARK_IMPORT_LOG_DIR"""
    override = os.environ.get("BOOKMARK_IMPORT_LOG_DIR")
    if override:
        return Path(override)
    return Path(user_data_dir(APP_NAME)) / "logs"


def rotate_logs(log_dir: Path, current_log: Path) -> None:
    """Move the current log aside, keeping at most MAX_BACKUP_LOGS backups"""
    if not current_log.exists():
        return

    backup_log = log_dir / f"bookmark_import_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"

    backup_files = sorted(log_dir.glob("bookmark_import_*.log"), reverse=True)
    while len(backup_files) >= MAX_BACKUP_LOGS:
        backup_files[-1].unlink()
        backup_files.pop()

    shutil.move(str(current_log), str(backup_log))


def setup_logging(log_dir: Optional[Union[str, Path]] = None,
                  level: Optional[Union[str, int]] = None) -> Path:
    """Configure logging for the application and return the active log file.

    Not called on import: the parser is usable as a library without any
    filesystem side effects, so applications call this once at startup.
    """
    log_dir = Path(log_dir) if log_dir else get_log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)

    current_log = log_dir / "bookmark_import.log"
    rotate_logs(log_dir, current_log)

    if level is None:
        level = os.environ.get("BOOKMARK_IMPORT_LOG_LEVEL", "INFO")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    formatter = logging.Formatter(
        fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Remove any existing handlers
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    file_handler = logging.FileHandler(current_log, encoding='utf-8')
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)

    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logging.getLogger(APP_NAME).setLevel(level)

    # The walker reports every skipped entry at debug level
    logging.getLogger(f"{APP_NAME}.parser").setLevel(logging.DEBUG)

    logging.getLogger(APP_NAME).info(f"Logging started - Log file created at {current_log}")
    return current_log


class ContextLogger(logging.LoggerAdapter):
    def process(self, msg, kwargs):
        # Add browser context if available
        browser = kwargs.pop('browser', None)
        if browser:
            msg = f"[{browser}] {msg}"
        return msg, kwargs


def get_logger(name: Optional[str] = None) -> ContextLogger:
    """Return a ContextLogger under the application namespace"""
    full_name = f"{APP_NAME}.{name}" if name else APP_NAME
    return ContextLogger(logging.getLogger(full_name), {})


logger = get_logger()
