from __future__ import annotations

import json

from sqlalchemy import Text, TypeDecorator
from sqlalchemy.dialects.postgresql import JSONB


class JSONDocument(TypeDecorator):
    """Stores a JSON object as JSONB in PostgreSQL, serialized text elsewhere."""

    impl = Text
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(JSONB())
        return dialect.type_descriptor(Text())

    def process_bind_param(self, value, dialect):
        if value is None:
            value = {}
        if dialect.name == "postgresql":
            return value
        return json.dumps(value, sort_keys=True)

    def process_result_value(self, value, dialect):
        if value is None:
            return {}
        if dialect.name == "postgresql" or not isinstance(value, str):
            return value
        return json.loads(value)
