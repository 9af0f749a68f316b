"""
JSON document store.

Every document is read whole and written whole: no partial merges and no
locking, so concurrent writers race and the last one wins.
"""

import os
import json
import logging

log = logging.getLogger("portfolio.store")


def load_json(path: str, default=None):
    """Parse the document at path. Missing or corrupt files yield default."""
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        return default
    except (OSError, ValueError) as e:
        log.warning("Unreadable JSON document %s: %s", path, e)
        return default


def save_json(path: str, data) -> None:
    """Rewrite the whole document at path."""
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
