"""Logging setup driven by Settings."""

import glob
import gzip
import logging
import os
import shutil
import time
from logging.handlers import RotatingFileHandler
from typing import Optional

from .config import Settings


logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


class BackupRotatingFileHandler(RotatingFileHandler):
    """Size-based rotating handler that can gzip and expire its backups.

    Backups are named ``<file>.<n>`` or ``<file>.<n>.gz`` when compressed.
    After each rollover, backups last modified more than ``max_age_days``
    ago are removed; 0 keeps them until ``backup_count`` pushes them out.
    """

    def __init__(
        self,
        filename: str,
        max_bytes: int = 0,
        backup_count: int = 0,
        max_age_days: int = 0,
        compress: bool = False,
        encoding: Optional[str] = None
    ):
        self.max_age_days = max_age_days
        self.compress = compress
        super().__init__(filename, maxBytes=max_bytes, backupCount=backup_count, encoding=encoding)

    def rotation_filename(self, default_name: str) -> str:
        return default_name + ".gz" if self.compress else default_name

    def rotate(self, source: str, dest: str) -> None:
        if self.compress:
            if os.path.exists(source):
                with open(source, "rb") as src, gzip.open(dest, "wb") as dst:
                    shutil.copyfileobj(src, dst)
                os.remove(source)
        else:
            super().rotate(source, dest)
        self.remove_expired_backups()

    def remove_expired_backups(self) -> None:
        if self.max_age_days <= 0:
            return
        cutoff = time.time() - self.max_age_days * SECONDS_PER_DAY
        for path in glob.glob(glob.escape(self.baseFilename) + ".*"):
            if os.path.getmtime(path) < cutoff:
                os.remove(path)


def configure_logging(settings: Settings, root: Optional[logging.Logger] = None) -> logging.Logger:
    """Configure the root logger from settings.

    A rotating file handler is attached when ``log_filename`` is set.

    Args:
        settings: Loaded settings
        root: Logger to configure, defaults to the root logger

    Returns:
        The configured logger
    """
    root = root if root is not None else logging.getLogger()
    logging.basicConfig(format=settings.log_format)
    root.setLevel(getattr(logging, settings.log_level))

    if settings.is_logger_config_available:
        already_attached = any(
            isinstance(handler, RotatingFileHandler)
            and handler.baseFilename == os.path.abspath(settings.log_filename)
            for handler in root.handlers
        )
        if not already_attached:
            file_handler = BackupRotatingFileHandler(
                settings.log_filename,
                max_bytes=settings.log_max_file_size_mb * 1024 * 1024,
                backup_count=settings.log_max_backups,
                max_age_days=settings.log_max_age_days,
                compress=settings.log_compress_backups,
                encoding="utf-8"
            )
            file_handler.setFormatter(logging.Formatter(settings.log_format))
            root.addHandler(file_handler)
            logger.info(f"Logging to file {settings.log_filename}")

    # Driver internals are noisy below WARNING
    logging.getLogger("asyncpg").setLevel(logging.WARNING)
    return root
