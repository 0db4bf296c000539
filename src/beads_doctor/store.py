"""Read-only probes of the .beads/ storage files.

The doctor never parses issue data. Apart from the schema version marker
inside the SQLite database it only stats and lists files.
"""

from __future__ import annotations

import contextlib
import logging
import sqlite3
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

VERSION_METADATA_KEY = "bd_version"


class SchemaVersionError(Exception):
    """The database's schema version marker could not be read."""


@dataclass(frozen=True)
class FileInfo:
    size: int
    mtime: float


def _is_missing_table_error(e: sqlite3.OperationalError) -> bool:
    return "no such table" in str(e).lower()


def read_schema_version(db_path: Path) -> str:
    """Return the ``bd_version`` value from the database's metadata table.

    The database is opened read-only so the probe can never create or
    modify it. Raises SchemaVersionError on any failure.
    """
    uri = f"{Path(db_path).resolve().as_uri()}?mode=ro"
    conn: sqlite3.Connection | None = None
    try:
        conn = sqlite3.connect(uri, uri=True)
        row = conn.execute("SELECT value FROM metadata WHERE key = ?", (VERSION_METADATA_KEY,)).fetchone()
    except sqlite3.OperationalError as e:
        if _is_missing_table_error(e):
            msg = "metadata table is missing"
            raise SchemaVersionError(msg) from e
        raise SchemaVersionError(str(e)) from e
    except sqlite3.Error as e:
        raise SchemaVersionError(str(e)) from e
    finally:
        if conn is not None:
            with contextlib.suppress(sqlite3.Error):
                conn.close()
    if row is None or row[0] is None:
        msg = f"no {VERSION_METADATA_KEY} entry in metadata table"
        raise SchemaVersionError(msg)
    return str(row[0]).strip()


def stat_file(path: Path) -> FileInfo | None:
    """Return size and mtime for a regular file, or None if it is absent.

    A parent path that is not a directory also counts as absent.
    """
    try:
        st = path.stat()
    except (FileNotFoundError, NotADirectoryError):
        return None
    if not path.is_file():
        return None
    return FileInfo(size=st.st_size, mtime=st.st_mtime)


def list_files(directory: Path) -> list[str]:
    """Sorted names of the regular files directly inside *directory*.

    A missing directory yields an empty list.
    """
    if not directory.is_dir():
        return []
    names = [entry.name for entry in directory.iterdir() if entry.is_file()]
    logger.debug("Listed %d files in %s", len(names), directory)
    return sorted(names)
