"""
Name: PostgreSQL Repository Tests (mocked pool)

Responsibilities:
  - Validate generated SQL keeps owner scoping and soft delete predicates
  - Validate psycopg error translation (UniqueViolation, ForeignKeyViolation)
  - Validate row -> entity mapping
"""

from datetime import date, datetime, timezone
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from psycopg import errors as pg_errors

from albaranes.crosscutting.exceptions import (
    DatabaseError,
    DuplicateKeyError,
    ReferencedRecordError,
)
from albaranes.domain.entities import WorkFormat
from albaranes.domain.soft_delete import Visibility
from albaranes.infrastructure.repositories import (
    PostgresClientRepository,
    PostgresDeliveryNoteRepository,
    PostgresUserRepository,
)

pytestmark = pytest.mark.unit


def _pool(*, fetchone=None, fetchall=None, side_effect=None):
    """R: Pool mockeado: pool.connection() -> conn; conn.execute() -> cursor."""
    cursor = MagicMock()
    cursor.fetchone.return_value = fetchone
    cursor.fetchall.return_value = fetchall or []
    conn = MagicMock()
    if side_effect is not None:
        conn.execute.side_effect = side_effect
    else:
        conn.execute.return_value = cursor
    pool = MagicMock()
    pool.connection.return_value.__enter__.return_value = conn
    return pool, conn


def _executed_sql(conn) -> str:
    query = conn.execute.call_args[0][0]
    return " ".join(query.split())


def test_client_list_filters_owner_and_active_rows():
    owner_id = uuid4()
    now = datetime.now(timezone.utc)
    row = (uuid4(), owner_id, "Acme", "B1", {"city": "Madrid"}, now, now, False, None)
    pool, conn = _pool(fetchall=[row])

    result = PostgresClientRepository(pool=pool).list_clients(owner_user_id=owner_id)

    sql = _executed_sql(conn)
    assert "owner_user_id = %s" in sql
    assert "deleted = false" in sql
    assert "ORDER BY created_at DESC" in sql
    assert result[0].address.city == "Madrid"
    assert result[0].owner_user_id == owner_id


def test_client_archived_listing_uses_archived_predicate():
    pool, conn = _pool(fetchall=[])

    PostgresClientRepository(pool=pool).list_clients(
        owner_user_id=uuid4(), visibility=Visibility.ARCHIVED
    )

    assert "deleted = true" in _executed_sql(conn)


def test_archive_returns_false_when_no_row_matches():
    pool, conn = _pool(fetchone=None)

    archived = PostgresClientRepository(pool=pool).archive_client(
        uuid4(), owner_user_id=uuid4()
    )

    sql = _executed_sql(conn)
    assert archived is False
    assert sql.startswith("UPDATE clients SET deleted = true")
    assert "deleted = false" in sql


def test_unique_violation_becomes_duplicate_key_error():
    pool, _ = _pool(side_effect=pg_errors.UniqueViolation("duplicate key"))
    repo = PostgresClientRepository(pool=pool)

    with pytest.raises(DuplicateKeyError):
        repo.find_client_by_cif(owner_user_id=uuid4(), cif="b1")


def test_cif_lookups_match_the_normalized_unique_indexes():
    pool, conn = _pool(fetchone=None)
    owner_id = uuid4()

    PostgresClientRepository(pool=pool).find_client_by_cif(owner_user_id=owner_id, cif=" b1 ")
    client_sql, client_params = _executed_sql(conn), conn.execute.call_args[0][1]
    PostgresUserRepository(pool=pool).find_user_by_company_cif(" b2 ")
    user_sql, user_params = _executed_sql(conn), conn.execute.call_args[0][1]

    assert "upper(btrim(cif)) = %s" in client_sql
    assert client_params[:2] == (owner_id, "B1")
    assert "upper(btrim(company->>'cif')) = %s" in user_sql
    assert user_params[0] == "B2"


def test_foreign_key_violation_becomes_referenced_record_error():
    pool, _ = _pool(side_effect=pg_errors.ForeignKeyViolation("still referenced"))

    with pytest.raises(ReferencedRecordError):
        PostgresClientRepository(pool=pool).delete_client(uuid4(), owner_user_id=uuid4())


def test_unexpected_error_becomes_database_error():
    pool, _ = _pool(side_effect=RuntimeError("boom"))

    with pytest.raises(DatabaseError):
        PostgresClientRepository(pool=pool).count_clients(owner_user_id=uuid4())


def test_delete_unsigned_note_guards_on_is_signed():
    pool, conn = _pool(fetchone=(uuid4(),))

    deleted = PostgresDeliveryNoteRepository(pool=pool).delete_unsigned_delivery_note(
        uuid4(), owner_user_id=uuid4()
    )

    sql = _executed_sql(conn)
    assert deleted is True
    assert sql.startswith("DELETE FROM delivery_notes")
    assert "is_signed = false" in sql
    assert "owner_user_id = %s" in sql


def test_note_row_mapping():
    owner_id = uuid4()
    now = datetime.now(timezone.utc)
    row = (
        uuid4(), owner_id, uuid4(), uuid4(), "hours", date(2024, 5, 1), "Montaje",
        4, None, None, False, None, None, None, None, now, now, False, None,
    )
    pool, _ = _pool(fetchall=[row])

    [note] = PostgresDeliveryNoteRepository(pool=pool).list_delivery_notes(
        owner_user_id=owner_id
    )

    assert note.format == WorkFormat.HOURS
    assert note.hours == 4.0
    assert note.quantity is None


def test_user_ping_reports_database_failure():
    pool, _ = _pool(side_effect=RuntimeError("down"))

    assert PostgresUserRepository(pool=pool).ping() is False
