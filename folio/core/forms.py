"""
Form Helpers
============

Conversions between stored records and editable text fields.

Lists are edited as comma-separated text. The round trip is lossy for entries
that themselves contain a comma: "a,b" is read back as two entries.
"""

from .errors import ValidationError


def split_list(text):
    """'A, B ,C ,' -> ['A', 'B', 'C']. A list sent back as-is is cleaned the same way."""
    if not text:
        return []
    if isinstance(text, (list, tuple)):
        parts = text
    elif isinstance(text, str):
        parts = text.split(',')
    else:
        raise ValidationError(f"Expected comma-separated text, got {type(text).__name__}")
    if not all(isinstance(part, str) for part in parts):
        raise ValidationError("List entries must be text")
    return [part.strip() for part in parts if part.strip()]


def join_list(items):
    """['A', 'B'] -> 'A, B'"""
    return ', '.join(items or [])


def blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


def flatten(record, fields):
    """Editable field values for *record*: None -> '', lists -> joined text"""
    form = {}
    for field in fields:
        value = record.get(field)
        if value is None:
            value = ''
        elif isinstance(value, (list, tuple)):
            value = join_list(value)
        form[field] = value
    return form
