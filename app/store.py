"""
Keyed blueprint persistence.

One JSON file per blueprint under a directory, named after the
``micro_si_blueprint_<id>`` key. Reads are all-or-nothing: a missing,
unparsable or non-object entry is reported as not found.
"""

from __future__ import annotations

import json
import logging
import uuid
from pathlib import Path
from typing import Any, Dict, Optional, Union

from . import rules

logger = logging.getLogger(__name__)


def new_blueprint_id() -> str:
    return str(uuid.uuid4())


class BlueprintStore:
    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        return self.root / f"{key}.json"

    @staticmethod
    def _key(blueprint_id: str) -> Optional[str]:
        # ids are UUIDs; anything else can't name a stored entry
        try:
            return rules.BLUEPRINT_KEY_PREFIX + str(uuid.UUID(blueprint_id))
        except (ValueError, TypeError, AttributeError):
            return None

    def save(self, blueprint_id: str, document_text: str) -> None:
        """Store ``document_text`` under ``blueprint_id`` and remember it as the latest."""
        key = self._key(blueprint_id)
        if key is None:
            raise ValueError(f"invalid blueprint id: {blueprint_id!r}")

        self.root.mkdir(parents=True, exist_ok=True)
        self._path(key).write_text(document_text, encoding="utf-8")
        self._path(rules.LAST_BLUEPRINT_KEY).write_text(json.dumps(blueprint_id), encoding="utf-8")
        logger.info("stored blueprint %s", blueprint_id)

    def load(self, blueprint_id: str) -> Optional[Dict[str, Any]]:
        """The stored document, or None when there is nothing usable under that id."""
        key = self._key(blueprint_id)
        if key is None:
            return None

        try:
            raw = self._path(key).read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (UnicodeDecodeError, OSError) as exc:
            logger.warning("stored blueprint %s is unreadable: %s", blueprint_id, exc)
            return None

        try:
            document = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("stored blueprint %s is not valid JSON", blueprint_id)
            return None

        if not isinstance(document, dict):
            logger.warning("stored blueprint %s is not a JSON object", blueprint_id)
            return None
        return document

    def last_id(self) -> Optional[str]:
        try:
            value = json.loads(self._path(rules.LAST_BLUEPRINT_KEY).read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (UnicodeDecodeError, OSError, json.JSONDecodeError) as exc:
            logger.warning("last blueprint id is unreadable: %s", exc)
            return None
        return value if isinstance(value, str) and self._key(value) else None
