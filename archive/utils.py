"""
archive/utils.py -- Small file helpers shared by the core.

Notes files are rewritten through a sibling temp file and ``os.replace()``
so a crash mid-save leaves either the old notes or the new ones, never a
truncated file.
"""

import json
import logging
import os
import tempfile

logger = logging.getLogger(__name__)


def safe_read_json(path, default=None):
    """Return the parsed contents of *path*, or *default* if it is unreadable."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            return json.load(fh)
    except FileNotFoundError:
        return default
    except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
        logger.warning("Ignoring unreadable JSON file %s: %s", path, e)
        return default


def safe_write_json(path, data, *, indent=2):
    """Write *data* to *path* as UTF-8 JSON, replacing the file atomically.

    Missing parent directories are created.
    """
    target = os.fspath(path)
    folder = os.path.dirname(target) or "."
    os.makedirs(folder, exist_ok=True)

    fd, scratch = tempfile.mkstemp(prefix=".notes-", suffix=".tmp", dir=folder)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as out:
            json.dump(data, out, indent=indent, ensure_ascii=False)
        os.replace(scratch, target)
    except BaseException:
        # Leave no scratch file behind on failure
        if os.path.exists(scratch):
            os.unlink(scratch)
        raise


def is_url(source) -> bool:
    """Return True if *source* names an http(s) resource rather than a file."""
    return str(source).lower().startswith(("http://", "https://"))
