from sqlalchemy import BigInteger
from sqlalchemy.orm import declarative_base
from sqlalchemy.types import TypeDecorator, Integer

Base = declarative_base()


class BigIntegerType(TypeDecorator):
    """BigInteger on PostgreSQL, Integer on SQLite so autoincrement keeps working in tests."""

    impl = Integer
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(BigInteger())
        return dialect.type_descriptor(Integer())
