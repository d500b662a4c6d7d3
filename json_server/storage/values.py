"""
Collection values held in a snapshot.

Each top-level key of the backing document names a collection whose value
takes one of three shapes: a bare string (``Scalar``), a single object
(``Record``) or an array of objects (``RecordList``). The engine dispatches
on these classes instead of inspecting raw JSON types.
"""
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

JSONValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]
RecordData = Dict[str, JSONValue]

_INT_RE = re.compile(r"[+-]?[0-9]+")


@dataclass
class Scalar:
    value: str

    def to_json(self) -> str:
        return self.value


@dataclass
class Record:
    fields: RecordData = field(default_factory=dict)

    def to_json(self) -> RecordData:
        return self.fields


@dataclass
class RecordList:
    records: List[RecordData] = field(default_factory=list)

    def to_json(self) -> List[RecordData]:
        return self.records

    def __len__(self) -> int:
        return len(self.records)


CollectionValue = Union[Scalar, Record, RecordList]


def from_json(name: str, raw: Any) -> CollectionValue:
    """Wrap a decoded JSON value in its collection shape.

    Raises ``ValueError`` when the value is none of string, object or
    array of objects.
    """
    if isinstance(raw, str):
        return Scalar(raw)
    if isinstance(raw, dict):
        return Record(raw)
    if isinstance(raw, list):
        bad = [i for i, item in enumerate(raw) if not isinstance(item, dict)]
        if bad:
            raise ValueError(f"collection {name!r}: item {bad[0]} is not an object")
        return RecordList(raw)
    raise ValueError(f"collection {name!r}: unsupported value of type {type(raw).__name__}")


def parse_int(raw: Any) -> int:
    """Parse a path or query segment as a base-10 integer.

    Accepts an optional sign followed by ASCII digits only.
    """
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    text = str(raw)
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"not an integer: {text!r}")
    return int(text)


def is_numeric(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def id_matches(record: RecordData, target: int) -> bool:
    # Stored ids decode as int or float; 3.0 matches 3, 3.5 never matches.
    stored = record.get("id")
    return is_numeric(stored) and stored == target
