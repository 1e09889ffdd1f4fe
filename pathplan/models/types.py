"""
Column types

RichTextType stores step content as JSON text. The codec lives on the column
type, so no process-wide registration is needed before opening the store.
"""

from sqlalchemy import Text
from sqlalchemy.types import TypeDecorator

from pathplan.richtext import coerce, decode, encode


class RichTextType(TypeDecorator):
    """RichText <-> JSON text; undecodable values load as empty content"""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return encode(coerce(value))

    def process_result_value(self, value, dialect):
        return decode(value)
