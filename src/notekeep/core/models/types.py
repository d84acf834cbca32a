"""Column types shared by the models."""

from typing import List, Optional

from sqlalchemy import JSON, Text, TypeDecorator
from sqlalchemy.dialects.postgresql import ARRAY


class StringListType(TypeDecorator):
    """Ordered list of strings.

    PostgreSQL gets a native ``TEXT[]``; every other backend stores
    a JSON array. Values always load as a plain ``list`` of ``str``.
    The ORM does not see in-place mutation, so assign a new list to persist.
    """

    impl = JSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(ARRAY(Text))
        return dialect.type_descriptor(JSON())

    def process_bind_param(self, value: Optional[List[str]], dialect):
        if value is None:
            return None
        return [str(item) for item in value]

    def process_result_value(self, value, dialect) -> Optional[List[str]]:
        if value is None:
            return None
        return [str(item) for item in value]
