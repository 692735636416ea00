"""
Tests for database persistence layer.

Verifies schema creation, sample data seeding, user and report
operations, and translation of constraint violations into API errors.
"""

from datetime import date

import aiosqlite
import pytest

from api.database import DatabaseManager, DatabaseSession
from api.models.database import SAMPLE_USERS
from api.models.errors import EmailAlreadyExistsError, PersistenceError, UserNotFoundError
from api.models.requests import UserCreate


def make_user(name: str, email: str, department: str = "Engineering", salary: float = 75000) -> UserCreate:
    return UserCreate(
        name=name,
        email=email,
        department=department,
        position="Engineer",
        salary=salary,
        hire_date=date(2023, 1, 15),
    )


@pytest.mark.asyncio
async def test_database_initialization(db_path):
    """Test database is initialized with correct schema."""
    manager = DatabaseManager(db_path)
    await manager.initialize()

    assert db_path.exists()

    async with DatabaseSession(manager) as session:
        tables = await session.fetchall(
            "SELECT name FROM sqlite_master WHERE type='table'"
        )
    table_names = [row["name"] for row in tables]

    assert "users" in table_names
    assert "reports" in table_names


@pytest.mark.asyncio
async def test_initialize_creates_parent_directory(tmp_path):
    """Test the database directory is created on demand."""
    db_file = tmp_path / "nested" / "dir" / "app.db"
    await DatabaseManager(db_file).initialize()
    assert db_file.exists()


@pytest.mark.asyncio
async def test_seed_sample_data_is_idempotent(db_path):
    """Test seeding twice leaves exactly one copy of each sample user."""
    await DatabaseManager(db_path, seed_sample_data=True).initialize()
    await DatabaseManager(db_path, seed_sample_data=True).initialize()

    async with DatabaseSession(DatabaseManager(db_path)) as session:
        users = await session.list_users_by_name()

    assert len(users) == len(SAMPLE_USERS)
    assert {u["email"] for u in users} == {u["email"] for u in SAMPLE_USERS}


@pytest.mark.asyncio
async def test_no_seed_by_default(db_session):
    """Test a fresh database without seeding has no users."""
    assert await db_session.list_users() == []


@pytest.mark.asyncio
async def test_create_and_get_user(db_session):
    """Test creating and retrieving a user."""
    user_id = await db_session.create_user(make_user("Grace Hopper", "grace@company.com"))

    row = await db_session.get_user(user_id)

    assert row["id"] == user_id
    assert row["name"] == "Grace Hopper"
    assert row["email"] == "grace@company.com"
    assert row["phone"] is None
    assert row["salary"] == 75000
    assert row["hire_date"] == "2023-01-15"
    assert row["created_at"]


@pytest.mark.asyncio
async def test_user_ids_are_unique(db_session):
    """Test each insert gets its own identifier."""
    first = await db_session.create_user(make_user("A", "a@company.com"))
    second = await db_session.create_user(make_user("B", "b@company.com"))
    assert first != second


@pytest.mark.asyncio
async def test_duplicate_email_raises_conflict(db_session):
    """Test a second user with the same email is rejected."""
    await db_session.create_user(make_user("Grace Hopper", "grace@company.com"))

    with pytest.raises(EmailAlreadyExistsError) as exc_info:
        await db_session.create_user(make_user("Someone Else", "GRACE@company.com"))

    assert exc_info.value.status_code == 409
    assert len(await db_session.list_users()) == 1


@pytest.mark.asyncio
async def test_get_missing_user_raises(db_session):
    """Test unknown IDs raise UserNotFoundError."""
    with pytest.raises(UserNotFoundError) as exc_info:
        await db_session.get_user(424242)
    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_list_users_newest_first(db_session):
    """Test list_users returns the most recently created user first."""
    await db_session.create_user(make_user("Zed", "zed@company.com"))
    await db_session.create_user(make_user("Amy", "amy@company.com"))

    users = await db_session.list_users()

    assert [u["name"] for u in users] == ["Amy", "Zed"]


@pytest.mark.asyncio
async def test_list_users_by_name(db_session):
    """Test list_users_by_name sorts alphabetically."""
    for name in ("Mike", "Alice", "Zoe"):
        await db_session.create_user(make_user(name, f"{name.lower()}@company.com"))

    users = await db_session.list_users_by_name()

    assert [u["name"] for u in users] == ["Alice", "Mike", "Zoe"]


@pytest.mark.asyncio
async def test_list_users_by_ids_skips_unknown(db_session):
    """Test unknown IDs are dropped and known ones returned by name."""
    zoe = await db_session.create_user(make_user("Zoe", "zoe@company.com"))
    await db_session.create_user(make_user("Mike", "mike@company.com"))
    alice = await db_session.create_user(make_user("Alice", "alice@company.com"))

    users = await db_session.list_users_by_ids([zoe, 999999, alice, zoe])

    assert [u["name"] for u in users] == ["Alice", "Zoe"]


@pytest.mark.asyncio
async def test_list_users_by_ids_empty(db_session):
    """Test an empty ID list selects nothing."""
    await db_session.create_user(make_user("Alice", "alice@company.com"))
    assert await db_session.list_users_by_ids([]) == []


@pytest.mark.asyncio
async def test_create_and_list_reports(db_session):
    """Test report records are listed most recent first."""
    first = await db_session.create_report({
        "title": "Employee Report",
        "description": "",
        "report_type": "employee",
        "generated_by": "System",
        "file_path": "report_a.pdf",
    })
    second = await db_session.create_report({
        "title": "Summary Report",
        "description": "Quarterly",
        "report_type": "summary",
        "generated_by": "alice",
        "file_path": "report_b.pdf",
    })

    reports = await db_session.list_reports()

    assert [r["id"] for r in reports] == [second, first]
    assert reports[0]["file_path"] == "report_b.pdf"
    assert reports[0]["generated_by"] == "alice"
    assert await db_session.count_reports() == 2


@pytest.mark.asyncio
async def test_get_report(db_session):
    """Test fetching a single report record."""
    report_id = await db_session.create_report({
        "title": "Employee Report",
        "report_type": "employee",
        "file_path": "report_c.pdf",
    })

    row = await db_session.get_report(report_id)

    assert row["title"] == "Employee Report"
    assert await db_session.get_report(report_id + 1) is None


@pytest.mark.asyncio
async def test_ping(db_session):
    """Test the connectivity check."""
    assert await db_session.ping() is True


@pytest.mark.asyncio
async def test_get_user_beyond_integer_range(db_session):
    """Test IDs outside SQLite's INTEGER range are not found."""
    with pytest.raises(UserNotFoundError):
        await db_session.get_user(2 ** 64)


@pytest.mark.asyncio
async def test_list_users_by_ids_drops_out_of_range(db_session):
    """Test out-of-range IDs are skipped instead of failing the query."""
    alice = await db_session.create_user(make_user("Alice", "alice@company.com"))

    users = await db_session.list_users_by_ids([alice, 2 ** 64, -(2 ** 64)])
    assert [u["name"] for u in users] == ["Alice"]

    assert await db_session.list_users_by_ids([2 ** 64]) == []


@pytest.mark.asyncio
async def test_user_read_failure_raises_persistence_error(db_session):
    """Test driver errors while loading users become PersistenceError."""
    await db_session.execute("DROP TABLE users")

    with pytest.raises(PersistenceError) as exc_info:
        await db_session.list_users_by_name()
    assert "no such table" in exc_info.value.reason

    with pytest.raises(PersistenceError):
        await db_session.list_users_by_ids([1])


@pytest.mark.asyncio
async def test_user_read_failure_from_driver(db_session, monkeypatch):
    """Test any aiosqlite error on the ID lookup is wrapped."""
    async def broken_fetchall(query, params=None):
        raise aiosqlite.OperationalError("disk I/O error")

    monkeypatch.setattr(db_session, "fetchall", broken_fetchall)

    with pytest.raises(PersistenceError) as exc_info:
        await db_session.list_users_by_ids([1, 2])
    assert exc_info.value.status_code == 500
