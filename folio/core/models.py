"""
Record Models
=============

Base classes for typed records read from and written to the record store.
"""

from typing import Any, Dict, Iterable, List

import pydantic
from pydantic import BaseModel, ConfigDict

from .errors import ValidationError


def _describe(error: pydantic.ValidationError) -> str:
    parts = []
    for item in error.errors():
        field = '.'.join(str(loc) for loc in item.get('loc', ())) or 'record'
        parts.append(f"{field}: {item.get('msg')}")
    return '; '.join(parts)


class Record(BaseModel):
    """A stored record. Extra columns (timestamps etc.) are ignored."""

    model_config = ConfigDict(extra='ignore')

    id: str

    @classmethod
    def ingest(cls, row: Dict[str, Any]):
        try:
            return cls.model_validate(row)
        except pydantic.ValidationError as e:
            raise ValidationError(f"Malformed {cls.__name__} record: {_describe(e)}") from e

    @classmethod
    def ingest_many(cls, rows: Iterable[Dict[str, Any]]) -> List[Any]:
        return [cls.ingest(row) for row in rows]


class WritePayload(BaseModel):
    """An outgoing write body, validated before it reaches the store."""

    model_config = ConfigDict(extra='forbid', str_strip_whitespace=True)

    @classmethod
    def build(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            return cls.model_validate(data).model_dump()
        except pydantic.ValidationError as e:
            raise ValidationError(_describe(e)) from e
