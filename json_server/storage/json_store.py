import copy
import json
import logging
import os
import shutil
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..errors import (
    CollectionNotFound,
    ElementNotFound,
    InvalidBody,
    InvalidEntityType,
    InvalidId,
    InvalidParams,
    LoadFailure,
    PersistenceFailure,
    UnsupportedOperation,
)
from .values import (
    CollectionValue,
    Record,
    RecordData,
    RecordList,
    Scalar,
    from_json,
    id_matches,
    parse_int,
)

logger = logging.getLogger(__name__)


def paginate(records: List[RecordData], page: int, page_size: int) -> List[RecordData]:
    """Return the ``page``-th window of ``page_size`` records (0-based pages)."""
    if page < 0 or page_size < 0:
        raise InvalidParams()
    length = len(records)
    skip = page * page_size
    if skip >= length:
        return []
    window_end = min(page_size * (page + 1), length)
    return records[skip:window_end]


def _parse_id(raw) -> int:
    try:
        return parse_int(raw)
    except ValueError:
        raise InvalidId() from None


def _parse_param(raw) -> Optional[int]:
    if raw is None:
        return None
    try:
        value = parse_int(raw)
    except ValueError:
        raise InvalidParams() from None
    if value < 0:
        raise InvalidParams()
    return value


class JsonStore:
    """All collections of one JSON document, held in memory.

    Every mutation rewrites the whole document on disk before returning.
    A single re-entrant lock serializes engine operations, so readers never
    see a half-applied mutation and concurrent writers cannot interleave.
    """

    def __init__(self, path: Path, collections: Dict[str, CollectionValue], minified: bool = False):
        self.path = Path(path)
        self.minified = minified
        self._collections = collections
        self._lock = threading.RLock()

    # --- snapshot loader -------------------------------------------------

    @classmethod
    def load(cls, path, minified: bool = False) -> "JsonStore":
        p = Path(path)
        try:
            with p.open("r", encoding="utf-8") as f:
                raw = json.load(f)
        except OSError as e:
            raise LoadFailure(f"Error reading {p}. Make sure the file exists ({e})") from e
        except ValueError as e:
            raise LoadFailure(f"Error decoding the JSON in {p}: {e}") from e

        if not isinstance(raw, dict):
            raise LoadFailure(f"{p} must contain a JSON object at the top level")
        try:
            collections = {name: from_json(name, value) for name, value in raw.items()}
        except ValueError as e:
            raise LoadFailure(f"{p}: {e}") from e

        logger.info("Loaded %d collection(s) from %s", len(collections), p)
        return cls(p, collections, minified=minified)

    # --- persistence writer ----------------------------------------------

    def _dumps(self) -> str:
        data = self._snapshot_json()
        if self.minified:
            return json.dumps(data, ensure_ascii=False, separators=(",", ":"))
        return json.dumps(data, indent=2, ensure_ascii=False)

    def _save(self):
        """Replace the backing document with the full in-memory snapshot."""
        try:
            text = self._dumps()
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(text)
                if self.path.exists():
                    shutil.copymode(self.path, tmp_name)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as e:
            logger.exception("Failed to persist snapshot to %s", self.path)
            raise PersistenceFailure(f"Error writing the database file: {e}") from e
        logger.debug("Persisted snapshot to %s", self.path)

    # --- helpers ---------------------------------------------------------

    def _snapshot_json(self) -> Dict[str, Any]:
        return {name: value.to_json() for name, value in self._collections.items()}

    def _value(self, name: str) -> CollectionValue:
        try:
            return self._collections[name]
        except KeyError:
            raise CollectionNotFound() from None

    def names(self) -> List[str]:
        with self._lock:
            return list(self._collections)

    def snapshot(self) -> Dict[str, Any]:
        """Deep copy of every collection, as it would be written to disk."""
        with self._lock:
            return copy.deepcopy(self._snapshot_json())

    # --- collection engine -----------------------------------------------

    def list(self, name: str, page=None, page_size=None):
        """Records of ``name``, optionally paginated.

        Non-list collections are returned as-is; pagination parameters are
        still validated for them.
        """
        with self._lock:
            value = self._value(name)
            page = _parse_param(page)
            page_size = _parse_param(page_size)
            if not isinstance(value, RecordList):
                return copy.deepcopy(value.to_json())
            records = value.records
            result = paginate(
                records,
                0 if page is None else page,
                len(records) if page_size is None else page_size,
            )
            return copy.deepcopy(result)

    def get(self, name: str, entity_id):
        with self._lock:
            value = self._value(name)
            target = _parse_id(entity_id)
            if isinstance(value, Scalar):
                return value.value
            if isinstance(value, Record):
                if id_matches(value.fields, target):
                    return copy.deepcopy(value.fields)
                raise ElementNotFound()
            for record in value.records:
                if id_matches(record, target):
                    return copy.deepcopy(record)
            raise ElementNotFound()

    def create(self, name: str, body) -> Dict[str, Any]:
        """Append ``body`` (or replace a singleton) and return the full snapshot.

        Ids are neither required nor checked for uniqueness.
        """
        with self._lock:
            value = self._value(name)
            if not isinstance(body, dict):
                raise InvalidBody()
            if isinstance(value, RecordList):
                value.records.append(body)
            elif isinstance(value, Record):
                self._collections[name] = Record(body)
            else:
                raise UnsupportedOperation()
            self._save()
            return copy.deepcopy(self._snapshot_json())

    def update(self, name: str, entity_id, body):
        """Overwrite every non-id field of the first record matching ``entity_id``.

        Fields missing from ``body`` are set to null; keys in ``body`` that the
        record does not already have are ignored.
        """
        with self._lock:
            value = self._value(name)
            target = _parse_id(entity_id)
            if not isinstance(body, dict):
                raise InvalidBody()
            if isinstance(value, Scalar):
                raise InvalidEntityType()
            candidates = [value.fields] if isinstance(value, Record) else value.records
            record = next((r for r in candidates if id_matches(r, target)), None)
            if record is None:
                raise ElementNotFound()
            for key in record:
                if key != "id":
                    record[key] = copy.deepcopy(body.get(key))
            self._save()

    def delete(self, name: str, entity_id):
        """Remove every record whose id matches, keeping survivors in order."""
        with self._lock:
            value = self._value(name)
            target = _parse_id(entity_id)
            if isinstance(value, Scalar):
                raise InvalidEntityType()
            if isinstance(value, Record):
                if not value.fields or not id_matches(value.fields, target):
                    raise ElementNotFound()
                self._collections[name] = Record({})
            else:
                survivors = [r for r in value.records if not id_matches(r, target)]
                if len(survivors) == len(value.records):
                    raise ElementNotFound()
                value.records[:] = survivors
            self._save()
