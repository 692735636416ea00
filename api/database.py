"""
Database Connection and Session Management.

Provides async SQLite database operations using aiosqlite.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import aiosqlite

from api.models.database import INIT_DATABASE_SQL, SAMPLE_USERS, SEED_USERS_SQL
from api.models.errors import (
    EmailAlreadyExistsError,
    PersistenceError,
    UserNotFoundError,
    ValidationError,
)
from api.models.requests import UserCreate

logger = logging.getLogger(__name__)

# SQLite INTEGER is a signed 64-bit value
SQLITE_MIN_INTEGER = -(2 ** 63)
SQLITE_MAX_INTEGER = 2 ** 63 - 1


def _utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _fits_sqlite_integer(value: int) -> bool:
    return SQLITE_MIN_INTEGER <= value <= SQLITE_MAX_INTEGER


class DatabaseManager:
    """
    Owns the SQLite file and hands out connections.

    One manager is created per application (or CLI invocation) and passed
    explicitly to whoever needs a session.
    """

    def __init__(self, db_path: Path, seed_sample_data: bool = False):
        """
        Initialize database manager.

        Args:
            db_path: Path to SQLite database file
            seed_sample_data: Insert the sample employees during initialization
        """
        self.db_path = db_path
        self.seed_sample_data = seed_sample_data
        self._initialized = False

    async def initialize(self) -> None:
        """Initialize database schema if not exists."""
        if self._initialized:
            return

        # Ensure data directory exists
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        async with aiosqlite.connect(self.db_path) as db:
            for sql in INIT_DATABASE_SQL:
                await db.executescript(sql)

            if self.seed_sample_data:
                now = _utcnow_iso()
                await db.executemany(
                    SEED_USERS_SQL,
                    [{**user, "created_at": now} for user in SAMPLE_USERS],
                )

            await db.commit()

        self._initialized = True
        logger.info(f"Database initialized at {self.db_path}")

    async def connect(self) -> aiosqlite.Connection:
        """
        Create a new database connection.

        Returns:
            Async database connection
        """
        await self.initialize()
        conn = await aiosqlite.connect(self.db_path)
        conn.row_factory = aiosqlite.Row
        return conn


class DatabaseSession:
    """
    Async database session.

    Provides the record-store operations for users and reports on top of
    a single connection. Write failures are translated into API errors:
    duplicate emails become a conflict, anything else a persistence error.
    """

    def __init__(self, db_manager: DatabaseManager):
        """
        Initialize database session.

        Args:
            db_manager: Database manager instance
        """
        self.db_manager = db_manager
        self._connection: Optional[aiosqlite.Connection] = None

    async def __aenter__(self) -> "DatabaseSession":
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.disconnect()

    async def connect(self) -> None:
        """Establish database connection."""
        if self._connection is None:
            self._connection = await self.db_manager.connect()
            logger.debug("Database session connected")

    async def disconnect(self) -> None:
        """Close database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None
            logger.debug("Database session disconnected")

    async def execute(
        self,
        query: str,
        params: Optional[Dict[str, Any]] = None
    ) -> aiosqlite.Cursor:
        """
        Execute a database query.

        Args:
            query: SQL query with named parameters (:param_name)
            params: Dictionary of parameter values

        Returns:
            Database cursor
        """
        if not self._connection:
            raise RuntimeError("Database session not connected")

        return await self._connection.execute(query, params or {})

    async def fetchone(
        self,
        query: str,
        params: Optional[Dict[str, Any]] = None
    ) -> Optional[Dict[str, Any]]:
        """Execute query and fetch one row as a dict."""
        cursor = await self.execute(query, params)
        row = await cursor.fetchone()
        return dict(row) if row is not None else None

    async def fetchall(
        self,
        query: str,
        params: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """Execute query and fetch all rows as dicts."""
        cursor = await self.execute(query, params)
        rows = await cursor.fetchall()
        return [dict(row) for row in rows]

    async def commit(self) -> None:
        """Commit current transaction."""
        if not self._connection:
            raise RuntimeError("Database session not connected")
        await self._connection.commit()

    async def rollback(self) -> None:
        """Rollback current transaction."""
        if not self._connection:
            raise RuntimeError("Database session not connected")
        await self._connection.rollback()

    async def ping(self) -> bool:
        """Return True if the connection answers a trivial query."""
        row = await self.fetchone("SELECT 1 AS ok")
        return bool(row and row["ok"] == 1)

    # User operations

    async def list_users(self) -> List[Dict[str, Any]]:
        """List all users, most recently created first."""
        return await self.fetchall(
            "SELECT * FROM users ORDER BY created_at DESC, id DESC"
        )

    async def list_users_by_name(self) -> List[Dict[str, Any]]:
        """
        List all users ordered by name.

        Raises:
            PersistenceError: If the read fails
        """
        try:
            return await self.fetchall("SELECT * FROM users ORDER BY name, id")
        except aiosqlite.Error as e:
            logger.error(f"Failed to load users: {e}")
            raise PersistenceError("load users", reason=str(e)) from e

    async def get_user(self, user_id: int) -> Dict[str, Any]:
        """
        Get user by ID.

        Raises:
            UserNotFoundError: If no user has this ID
        """
        if not _fits_sqlite_integer(user_id):
            raise UserNotFoundError(user_id)

        row = await self.fetchone(
            "SELECT * FROM users WHERE id = :id",
            {"id": user_id}
        )
        if row is None:
            raise UserNotFoundError(user_id)
        return row

    async def list_users_by_ids(self, user_ids: Iterable[int]) -> List[Dict[str, Any]]:
        """
        Get the users whose IDs appear in ``user_ids``.

        IDs without a matching row are skipped. Results are ordered by name.

        Raises:
            PersistenceError: If the read fails
        """
        unique_ids = sorted(i for i in set(user_ids) if _fits_sqlite_integer(i))
        if not unique_ids:
            return []

        params = {f"id{i}": user_id for i, user_id in enumerate(unique_ids)}
        placeholders = ", ".join(f":{key}" for key in params)
        try:
            return await self.fetchall(
                f"SELECT * FROM users WHERE id IN ({placeholders}) ORDER BY name, id",
                params
            )
        except aiosqlite.Error as e:
            logger.error(f"Failed to load users {unique_ids}: {e}")
            raise PersistenceError("load users", reason=str(e)) from e

    async def create_user(self, user: UserCreate) -> int:
        """
        Insert a new user.

        Args:
            user: Validated user fields

        Returns:
            The new user's ID

        Raises:
            EmailAlreadyExistsError: If the email is already stored
            ValidationError: If the row violates a table constraint
            PersistenceError: On any other write failure
        """
        params = {
            "name": user.name,
            "email": user.email,
            "phone": user.phone,
            "department": user.department,
            "position": user.position,
            "salary": user.salary,
            "hire_date": user.hire_date.isoformat(),
            "created_at": _utcnow_iso(),
        }
        try:
            cursor = await self.execute(
                """
                INSERT INTO users (
                    name, email, phone, department, position,
                    salary, hire_date, created_at
                ) VALUES (
                    :name, :email, :phone, :department, :position,
                    :salary, :hire_date, :created_at
                )
                """,
                params
            )
            await self.commit()
        except aiosqlite.IntegrityError as e:
            await self.rollback()
            if "UNIQUE" in str(e) and "email" in str(e):
                raise EmailAlreadyExistsError(user.email) from e
            raise ValidationError(f"User violates a table constraint: {e}") from e
        except aiosqlite.Error as e:
            await self.rollback()
            logger.error(f"Failed to insert user {user.email}: {e}")
            raise PersistenceError("store user", reason=str(e)) from e

        logger.info(f"Created user {cursor.lastrowid} ({user.email})")
        return cursor.lastrowid

    # Report operations

    async def list_reports(self) -> List[Dict[str, Any]]:
        """List report history, most recent first."""
        return await self.fetchall(
            "SELECT * FROM reports ORDER BY created_at DESC, id DESC"
        )

    async def get_report(self, report_id: int) -> Optional[Dict[str, Any]]:
        """Get report by ID, or None."""
        return await self.fetchone(
            "SELECT * FROM reports WHERE id = :id",
            {"id": report_id}
        )

    async def count_reports(self) -> int:
        """Number of stored report records."""
        row = await self.fetchone("SELECT COUNT(*) AS n FROM reports")
        return row["n"] if row else 0

    async def create_report(self, report_data: Dict[str, Any]) -> int:
        """
        Insert a report record.

        Args:
            report_data: title, description, report_type, generated_by, file_path

        Returns:
            The new report's ID

        Raises:
            PersistenceError: If the write fails
        """
        params = {
            "title": report_data["title"],
            "description": report_data.get("description"),
            "report_type": report_data["report_type"],
            "generated_by": report_data.get("generated_by"),
            "file_path": report_data["file_path"],
            "created_at": report_data.get("created_at") or _utcnow_iso(),
        }
        try:
            cursor = await self.execute(
                """
                INSERT INTO reports (
                    title, description, report_type, generated_by,
                    file_path, created_at
                ) VALUES (
                    :title, :description, :report_type, :generated_by,
                    :file_path, :created_at
                )
                """,
                params
            )
            await self.commit()
        except aiosqlite.Error as e:
            await self.rollback()
            logger.error(f"Failed to insert report for {params['file_path']}: {e}")
            raise PersistenceError("store report", reason=str(e)) from e

        return cursor.lastrowid
