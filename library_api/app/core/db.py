"""
SQLite backed document collections and a simple migration system.

The service treats its storage as a set of collections reachable
through a handful of primitives: find by filter, find one by id,
insert, update and delete.  ``Collection`` implements those primitives
over one SQLite table and holds no business logic.  ``Stores`` bundles
the three collections the service uses (members, books, borrows)
together with the shared ``Database`` handle; it is created once at
application startup and passed to the services through FastAPI
dependencies.

A single connection is kept open in autocommit mode, so every
statement is atomic on its own.  ``Database.transaction`` opens an
immediate transaction for the few places that need a read and a write
to happen without another writer in between.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from .errors import StoreBusy
from .ids import new_record_id


logger = logging.getLogger(__name__)

MIGRATIONS: List[Tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS members (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            phone TEXT NOT NULL,
            email TEXT NOT NULL,
            address TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS books (
            id TEXT PRIMARY KEY,
            title TEXT NOT NULL,
            author TEXT NOT NULL,
            isbn TEXT NOT NULL,
            year INTEGER NOT NULL
        );

        -- member_id and book_id are weak references: no foreign keys, the
        -- referenced rows may disappear while the borrow remains.
        CREATE TABLE IF NOT EXISTS borrows (
            id TEXT PRIMARY KEY,
            member_id TEXT NOT NULL,
            book_id TEXT NOT NULL,
            start_date TEXT NOT NULL,
            end_date TEXT NOT NULL
        );
        """,
    ),
    # Migration 2: lookup indexes for duplicate checks and reference scans
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_members_phone ON members (phone);
        CREATE INDEX IF NOT EXISTS idx_members_email ON members (email);
        CREATE INDEX IF NOT EXISTS idx_borrows_book ON borrows (book_id);
        CREATE INDEX IF NOT EXISTS idx_borrows_member ON borrows (member_id);
        """,
    ),
]


def get_database_path(database_url: str) -> str:
    """Turn a configured connection string into a path for ``sqlite3``.

    ``:memory:`` is passed through, a ``sqlite:///`` prefix is stripped
    and relative paths are resolved against the working directory.
    """
    if database_url == ":memory:":
        return database_url
    if database_url.startswith("sqlite:///"):
        database_url = database_url[len("sqlite:///"):]
    return str(Path(database_url).expanduser().resolve())


class Database:
    """A long-lived SQLite connection shared by all collections."""

    def __init__(self, database_url: str, timeout: float = 1.0):
        self.path = get_database_path(database_url)
        self.timeout = timeout
        self._conn: Optional[sqlite3.Connection] = None

    @property
    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = self.connect()
        return self._conn

    def connect(self) -> sqlite3.Connection:
        """Open the connection.

        ``isolation_level=None`` keeps the connection in autocommit mode;
        explicit transactions are only started by ``transaction``.  The
        connection is used from whichever thread serves the event loop,
        hence ``check_same_thread=False``.  ``timeout`` bounds how long a
        statement waits for another connection's lock; the wait blocks
        the event loop, so it is kept short.
        """
        conn = sqlite3.connect(self.path, timeout=self.timeout, isolation_level=None, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        logger.info("Opened store at %s", self.path)
        return conn

    def execute(self, sql: str, params: Iterable[Any] = ()) -> sqlite3.Cursor:
        return self.connection.execute(sql, tuple(params))

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Run the enclosed statements in one ``BEGIN IMMEDIATE`` transaction.

        The write lock is taken up front, so no other connection can
        write between the reads and writes of the block.  The block must
        not await: the connection is shared by every request.

        Raises ``StoreBusy`` when another connection keeps the write lock
        for longer than the busy timeout.
        """
        conn = self.connection
        try:
            conn.execute("BEGIN IMMEDIATE")
        except sqlite3.OperationalError as exc:
            logger.warning("Could not lock store %s: %s", self.path, exc)
            raise StoreBusy() from exc
        try:
            yield conn
        except BaseException:
            conn.execute("ROLLBACK")
            raise
        conn.execute("COMMIT")

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None


def init_db(database: Database) -> None:
    """Create the ``migrations`` table and apply pending migrations.

    If you add a new migration, append it to ``MIGRATIONS`` with an
    incremented version number.
    """
    with database.transaction() as conn:
        conn.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
        row = conn.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                # executescript would commit the open transaction, so the
                # statements are run one by one instead.
                for statement in sql.split(";"):
                    if statement.strip():
                        conn.execute(statement)
                conn.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                logger.info("Applied migration %s", version)
                current_version = version


class Collection:
    """CRUD primitives over one table of documents keyed by ``id``.

    Documents are plain dictionaries whose keys are the table's
    columns.  Filters are dictionaries of column to value, combined with
    ``AND`` (or ``OR`` when ``match_any`` is true).
    """

    def __init__(self, database: Database, table: str, fields: Iterable[str]):
        self.database = database
        self.table = table
        self.fields = tuple(fields)
        self._columns = ("id",) + self.fields

    def _check_fields(self, names: Iterable[str]) -> None:
        unknown = [name for name in names if name not in self._columns]
        if unknown:
            raise ValueError(f"Unknown field(s) for {self.table}: {', '.join(unknown)}")

    def _where(self, filters: Optional[Mapping[str, Any]], match_any: bool) -> Tuple[str, Tuple[Any, ...]]:
        if not filters:
            return "", ()
        self._check_fields(filters)
        joiner = " OR " if match_any else " AND "
        clause = joiner.join(f"{name} = ?" for name in filters)
        return f" WHERE {clause}", tuple(filters.values())

    def find(self, filters: Optional[Mapping[str, Any]] = None, match_any: bool = False) -> List[Dict[str, Any]]:
        """Return every document matching ``filters`` in insertion order."""
        where, params = self._where(filters, match_any)
        rows = self.database.execute(
            f"SELECT {', '.join(self._columns)} FROM {self.table}{where} ORDER BY rowid",
            params,
        ).fetchall()
        return [dict(row) for row in rows]

    def find_one(self, filters: Mapping[str, Any], match_any: bool = False) -> Optional[Dict[str, Any]]:
        where, params = self._where(filters, match_any)
        row = self.database.execute(
            f"SELECT {', '.join(self._columns)} FROM {self.table}{where} ORDER BY rowid LIMIT 1",
            params,
        ).fetchone()
        return dict(row) if row else None

    def get(self, record_id: str) -> Optional[Dict[str, Any]]:
        return self.find_one({"id": record_id})

    def insert(self, document: Mapping[str, Any]) -> str:
        """Insert ``document`` under a freshly generated id and return the id."""
        self._check_fields(document)
        record_id = new_record_id()
        placeholders = ", ".join("?" for _ in self._columns)
        self.database.execute(
            f"INSERT INTO {self.table} ({', '.join(self._columns)}) VALUES ({placeholders})",
            (record_id,) + tuple(document.get(name) for name in self.fields),
        )
        return record_id

    def update(self, record_id: str, changes: Mapping[str, Any]) -> bool:
        """Set ``changes`` on the document; return whether it existed."""
        if not changes:
            return self.get(record_id) is not None
        self._check_fields(changes)
        assignments = ", ".join(f"{name} = ?" for name in changes)
        cursor = self.database.execute(
            f"UPDATE {self.table} SET {assignments} WHERE id = ?",
            tuple(changes.values()) + (record_id,),
        )
        return cursor.rowcount == 1

    def delete(self, record_id: str) -> bool:
        cursor = self.database.execute(f"DELETE FROM {self.table} WHERE id = ?", (record_id,))
        return cursor.rowcount == 1

    def delete_many(self, filters: Mapping[str, Any]) -> int:
        # An empty filter would wipe the table; callers must be explicit.
        if not filters:
            raise ValueError("delete_many requires at least one filter")
        where, params = self._where(filters, False)
        cursor = self.database.execute(f"DELETE FROM {self.table}{where}", params)
        return cursor.rowcount


@dataclass
class Stores:
    """The collections used by the service, sharing one database."""

    database: Database
    members: Collection
    books: Collection
    borrows: Collection

    def close(self) -> None:
        self.database.close()


def open_stores(database_url: str, timeout: float = 1.0) -> Stores:
    """Open the database, apply migrations and return the collections."""
    database = Database(database_url, timeout=timeout)
    init_db(database)
    return Stores(
        database=database,
        members=Collection(database, "members", ("name", "phone", "email", "address")),
        books=Collection(database, "books", ("title", "author", "isbn", "year")),
        borrows=Collection(database, "borrows", ("member_id", "book_id", "start_date", "end_date")),
    )
