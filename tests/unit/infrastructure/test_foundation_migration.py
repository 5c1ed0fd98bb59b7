"""
Name: Foundation Migration Tests

Responsibilities:
  - Validate the store enforces the quantity rule for both work formats
  - Validate CIF unique indexes use the same normalization as the use cases
"""

import importlib.util
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import sqlalchemy as sa

pytestmark = pytest.mark.unit

MIGRATION = Path(__file__).resolve().parents[3] / "alembic" / "versions" / "001_foundation.py"


@pytest.fixture
def recorded_op(monkeypatch):
    spec = importlib.util.spec_from_file_location("foundation_migration", MIGRATION)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    op = MagicMock()
    monkeypatch.setattr(module, "op", op)
    module.upgrade()
    return op


def _checks(op, table: str) -> dict[str, str]:
    for call in op.create_table.call_args_list:
        if call.args[0] == table:
            return {
                item.name: str(item.sqltext)
                for item in call.args[1:]
                if isinstance(item, sa.CheckConstraint)
            }
    raise AssertionError(f"table {table} not created")


def _executed(op) -> list[str]:
    return [" ".join(str(call.args[0]).split()) for call in op.execute.call_args_list]


def test_delivery_notes_require_quantity_for_each_format(recorded_op):
    checks = _checks(recorded_op, "delivery_notes")

    assert "hours IS NOT NULL" in checks["ck_delivery_notes_hours_required"]
    assert checks["ck_delivery_notes_quantity_required"] == (
        "format <> 'material' OR quantity IS NOT NULL"
    )


@pytest.mark.parametrize(
    "index, expression",
    [
        ("users_company_cif_active_uidx", "upper(btrim(company->>'cif'))"),
        ("clients_owner_cif_active_uidx", "upper(btrim(cif))"),
    ],
)
def test_cif_unique_indexes_are_normalized(recorded_op, index, expression):
    [statement] = [sql for sql in _executed(recorded_op) if index in sql]

    assert expression in statement
    assert "WHERE deleted = false" in statement
