"""SQLAlchemy sequence store — the ``order_sequences`` table.

The atomic primitive is a single upsert that increments and returns the
counter in one statement, available on PostgreSQL and SQLite. Other dialects
report ``AtomicIncrementUnavailable`` and the generator falls back to
conditional updates.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime

from sqlalchemy import (
    Column,
    DateTime,
    Engine,
    Integer,
    MetaData,
    String,
    Table,
    create_engine,
    insert,
    select,
    update,
)
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ordering.sequence.exceptions import AtomicIncrementUnavailable, StorageError
from ordering.sequence.port import SequenceStorePort

metadata = MetaData()

order_sequences = Table(
    "order_sequences",
    metadata,
    Column("date_key", String(16), primary_key=True),
    Column("sequence_number", Integer, nullable=False),
    Column("last_updated", DateTime(timezone=True), nullable=False),
)


def _upsert_insert(dialect_name: str):
    if dialect_name == "postgresql":
        from sqlalchemy.dialects.postgresql import insert as dialect_insert
    elif dialect_name == "sqlite":
        from sqlalchemy.dialects.sqlite import insert as dialect_insert
    else:
        return None
    return dialect_insert


class SqlAlchemySequenceStore(SequenceStorePort):
    name = "sqlalchemy"

    def __init__(self, engine: Engine):
        self.engine = engine

    @classmethod
    def from_uri(cls, database_uri: str) -> "SqlAlchemySequenceStore":
        return cls(create_engine(database_uri, pool_pre_ping=True))

    def create_schema(self) -> None:
        with self._storage_errors():
            metadata.create_all(self.engine)

    def drop_schema(self) -> None:
        with self._storage_errors():
            metadata.drop_all(self.engine)

    @contextmanager
    def _storage_errors(self) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            raise StorageError(f"Sequence store error: {exc}") from exc

    def increment(self, date_key: str) -> int:
        dialect_insert = _upsert_insert(self.engine.dialect.name)
        if dialect_insert is None:
            raise AtomicIncrementUnavailable(f"No atomic upsert for dialect {self.engine.dialect.name}")

        now = datetime.now(UTC)
        statement = dialect_insert(order_sequences).values(date_key=date_key, sequence_number=1, last_updated=now)
        statement = statement.on_conflict_do_update(
            index_elements=[order_sequences.c.date_key],
            set_={
                "sequence_number": order_sequences.c.sequence_number + 1,
                "last_updated": now,
            },
        ).returning(order_sequences.c.sequence_number)

        with self._storage_errors(), self.engine.begin() as connection:
            return connection.execute(statement).scalar_one()

    def read(self, date_key: str) -> int | None:
        statement = select(order_sequences.c.sequence_number).where(order_sequences.c.date_key == date_key)
        with self._storage_errors(), self.engine.connect() as connection:
            return connection.execute(statement).scalar_one_or_none()

    def insert_if_absent(self, date_key: str, value: int) -> bool:
        statement = insert(order_sequences).values(
            date_key=date_key,
            sequence_number=value,
            last_updated=datetime.now(UTC),
        )
        try:
            with self.engine.begin() as connection:
                connection.execute(statement)
        except IntegrityError:
            return False
        except SQLAlchemyError as exc:
            raise StorageError(f"Sequence store error: {exc}") from exc
        return True

    def compare_and_set(self, date_key: str, expected: int, new: int) -> bool:
        statement = (
            update(order_sequences)
            .where(order_sequences.c.date_key == date_key)
            .where(order_sequences.c.sequence_number == expected)
            .values(sequence_number=new, last_updated=datetime.now(UTC))
        )
        with self._storage_errors(), self.engine.begin() as connection:
            return connection.execute(statement).rowcount == 1

    def close(self) -> None:
        self.engine.dispose()
