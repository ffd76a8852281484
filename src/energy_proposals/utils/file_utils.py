# src/energy_proposals/utils/file_utils.py

import os
from datetime import datetime, timedelta
from pathlib import Path
from typing import Iterable, Optional

from energy_proposals.utils.logger import get_logger

logger = get_logger(__name__)

EXPORT_SUFFIXES = (".json", ".csv")


def cleanup_old_files(
    output_root: Path,
    retention_days: int = 30,
    suffixes: Iterable[str] = EXPORT_SUFFIXES,
    now: Optional[datetime] = None,
) -> int:
    """
    Deletes proposal exports in the output directory older than the retention window.

    Proposal folders are walked recursively; empty folders left behind are removed.

    :param output_root: Path to the output directory.
    :param retention_days: Number of days to retain files (default: 30).
    :return: Number of files deleted.
    """
    now = now or datetime.now()
    cutoff = now - timedelta(days=retention_days)
    suffixes = tuple(suffixes)

    output_root = Path(output_root)
    if not output_root.exists():
        logger.warning("Output directory does not exist: %s", output_root)
        return 0

    deleted_count = 0
    for file_path in sorted(output_root.rglob("*")):
        if not file_path.is_file() or not file_path.name.endswith(suffixes):
            continue
        file_mtime = datetime.fromtimestamp(os.path.getmtime(file_path))
        if file_mtime < cutoff:
            try:
                file_path.unlink()
                logger.info("Deleted old file: %s", file_path)
                deleted_count += 1
            except OSError as e:
                logger.error("Error deleting %s: %s", file_path, e)

    for folder in sorted(output_root.rglob("*"), reverse=True):
        if folder.is_dir() and not any(folder.iterdir()):
            folder.rmdir()

    logger.info("Cleanup complete: %s files deleted from %s.", deleted_count, output_root)
    return deleted_count
