"""Shared base for domain entities"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from sqlalchemy import Numeric, String
from sqlalchemy.types import TypeDecorator
from sqlmodel import SQLModel


def generate_uuid() -> str:
    """Generate a string UUID4 identifier"""
    return str(uuid.uuid4())


def utc_now() -> datetime:
    """Current UTC time as a naive datetime, matching the timestamp columns"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class ExactDecimal(TypeDecorator):
    """
    Fixed-point Decimal column

    NUMERIC(precision, scale) on backends that have it. SQLite keeps NUMERIC
    as a binary float, so there the value is stored as its fixed-point text
    and read back digit for digit.
    """

    impl = Numeric
    cache_ok = True

    def __init__(self, precision: int = 18, scale: int = 6):
        super().__init__(precision=precision, scale=scale, asdecimal=True)

    def load_dialect_impl(self, dialect):
        if dialect.name == "sqlite":
            # sign, digits and decimal point
            return dialect.type_descriptor(String(self.impl.precision + 2))
        return dialect.type_descriptor(self.impl)

    def process_bind_param(self, value, dialect):
        if value is None or dialect.name != "sqlite":
            return value
        exponent = Decimal(1).scaleb(-self.impl.scale)
        return format(Decimal(value).quantize(exponent, rounding=ROUND_HALF_UP), "f")

    def process_result_value(self, value, dialect):
        if value is None or isinstance(value, Decimal):
            return value
        return Decimal(value)


class BaseModel(SQLModel):
    """Base class for all persisted domain entities"""
    pass
