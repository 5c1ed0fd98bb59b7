"""
============================================================
TARJETA CRC (Class / Responsibilities / Collaborators)
============================================================
Class: 001_foundation (Alembic Migration)

Responsibilities:
  - Crear el esquema completo desde cero (migración fundacional).
  - Definir tablas, constraints e índices del dominio de albaranes:
    users, clients, projects, delivery_notes.
  - Materializar la unicidad "entre registros activos" con índices únicos
    parciales (WHERE deleted = false).
  - Proteger los albaranes firmados con un trigger (no DELETE, no des-firmar).

Collaborators:
  - PostgreSQL 14+
  - Alembic (framework de migraciones)
  - infrastructure/repositories/postgres/* (usan este esquema como contrato)

Policy:
  - Esta es una migración BASELINE. Downgrade NO soportado.
  - Toda evolución futura del esquema debe hacerse con migraciones aditivas (002+).
  - Convención de nombres (constraints / indexes):
      pk_<tabla>                         - Primary keys
      fk_<tabla>_<col>__<ref_tabla>      - Foreign keys
      ck_<tabla>_<regla>                 - Check constraints
      ix_<tabla>_<col>                   - Indexes
      <tabla>_<cols>_active_uidx         - Unique parciales (solo activos)
============================================================
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# ============================================================
# Alembic identifiers
# ============================================================
revision: str = "001_foundation"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _lifecycle_columns() -> list[sa.Column]:
    """R: Columnas de auditoría + soft delete comunes a todas las tablas."""
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "deleted",
            sa.Boolean,
            nullable=False,
            server_default=sa.text("false"),
        ),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    """
    Crea el esquema fundacional completo.

    Orden por dependencias:
      1) Identity (users)
      2) Clients
      3) Projects
      4) Delivery notes + trigger de firma
    """

    # =========================================================
    # 1) IDENTITY (users)
    # =========================================================
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.Text, nullable=False),
        sa.Column(
            "role",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'user'"),
        ),
        # status = email verificado / invitación aceptada
        sa.Column(
            "status",
            sa.Boolean,
            nullable=False,
            server_default=sa.text("false"),
        ),
        sa.Column("verification_code", sa.String(6), nullable=True),
        sa.Column(
            "verification_attempts",
            sa.Integer,
            nullable=False,
            server_default=sa.text("3"),
        ),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("surnames", sa.String(255), nullable=True),
        sa.Column("nif", sa.String(20), nullable=True),
        # company: perfil de empresa embebido (name, cif, dirección)
        sa.Column("company", postgresql.JSONB, nullable=True),
        sa.Column("logo_url", sa.Text, nullable=True),
        sa.Column("reset_token", sa.String(64), nullable=True),
        sa.Column("reset_token_expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("invitation_token", sa.String(64), nullable=True),
        sa.Column("invitation_expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("invited_by_user_id", postgresql.UUID(as_uuid=True), nullable=True),
        *_lifecycle_columns(),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.ForeignKeyConstraint(
            ["invited_by_user_id"],
            ["users.id"],
            name="fk_users_invited_by_user_id__users",
            ondelete="SET NULL",
        ),
        sa.CheckConstraint(
            "role IN ('user', 'autonomo', 'invitado')",
            name="ck_users_role",
        ),
        sa.CheckConstraint(
            "verification_attempts >= 0",
            name="ck_users_verification_attempts",
        ),
    )

    op.execute(
        "CREATE UNIQUE INDEX users_email_active_uidx "
        "ON users (lower(email)) WHERE deleted = false"
    )
    op.execute(
        "CREATE UNIQUE INDEX users_company_cif_active_uidx "
        "ON users ((upper(btrim(company->>'cif')))) "
        "WHERE deleted = false AND company->>'cif' IS NOT NULL"
    )
    op.create_index("ix_users_reset_token", "users", ["reset_token"])
    op.create_index("ix_users_invitation_token", "users", ["invitation_token"])

    # =========================================================
    # 2) CLIENTS
    # =========================================================
    op.create_table(
        "clients",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("owner_user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("cif", sa.String(20), nullable=False),
        sa.Column("address", postgresql.JSONB, nullable=True),
        *_lifecycle_columns(),
        sa.PrimaryKeyConstraint("id", name="pk_clients"),
        sa.ForeignKeyConstraint(
            ["owner_user_id"],
            ["users.id"],
            name="fk_clients_owner_user_id__users",
            ondelete="RESTRICT",
        ),
    )

    op.execute(
        "CREATE UNIQUE INDEX clients_owner_cif_active_uidx "
        "ON clients (owner_user_id, (upper(btrim(cif)))) WHERE deleted = false"
    )
    op.create_index(
        "ix_clients_owner_user_id_created_at",
        "clients",
        ["owner_user_id", "created_at"],
    )

    # =========================================================
    # 3) PROJECTS
    # =========================================================
    op.create_table(
        "projects",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("owner_user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("client_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("project_code", sa.String(100), nullable=True),
        sa.Column("code", sa.String(100), nullable=True),
        sa.Column("address", postgresql.JSONB, nullable=True),
        # begin/end se guardan tal cual llegan (texto libre de fecha)
        sa.Column("begin_date", sa.String(50), nullable=True),
        sa.Column("end_date", sa.String(50), nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column(
            "is_active",
            sa.Boolean,
            nullable=False,
            server_default=sa.text("true"),
        ),
        sa.Column(
            "unit_prices",
            postgresql.JSONB,
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column("amount", sa.Numeric(12, 2), nullable=True),
        *_lifecycle_columns(),
        sa.PrimaryKeyConstraint("id", name="pk_projects"),
        sa.ForeignKeyConstraint(
            ["owner_user_id"],
            ["users.id"],
            name="fk_projects_owner_user_id__users",
            ondelete="RESTRICT",
        ),
        sa.ForeignKeyConstraint(
            ["client_id"],
            ["clients.id"],
            name="fk_projects_client_id__clients",
            ondelete="RESTRICT",
        ),
        sa.CheckConstraint(
            "amount IS NULL OR amount >= 0",
            name="ck_projects_amount_non_negative",
        ),
    )

    op.execute(
        "CREATE UNIQUE INDEX projects_owner_client_code_active_uidx "
        "ON projects (owner_user_id, client_id, project_code) "
        "WHERE project_code IS NOT NULL AND deleted = false"
    )
    op.create_index(
        "ix_projects_owner_user_id_client_id",
        "projects",
        ["owner_user_id", "client_id"],
    )

    # =========================================================
    # 4) DELIVERY NOTES
    # =========================================================
    op.create_table(
        "delivery_notes",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("owner_user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("client_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("project_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("format", sa.String(20), nullable=False),
        sa.Column("workdate", sa.Date, nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("hours", sa.Numeric(10, 2), nullable=True),
        sa.Column("quantity", sa.Numeric(12, 2), nullable=True),
        sa.Column("sign_url", sa.Text, nullable=True),
        sa.Column(
            "is_signed",
            sa.Boolean,
            nullable=False,
            server_default=sa.text("false"),
        ),
        sa.Column("pdf_url", sa.Text, nullable=True),
        sa.Column("observer_name", sa.String(255), nullable=True),
        sa.Column("observer_nif", sa.String(20), nullable=True),
        sa.Column("observations", sa.Text, nullable=True),
        *_lifecycle_columns(),
        sa.PrimaryKeyConstraint("id", name="pk_delivery_notes"),
        sa.ForeignKeyConstraint(
            ["owner_user_id"],
            ["users.id"],
            name="fk_delivery_notes_owner_user_id__users",
            ondelete="RESTRICT",
        ),
        sa.ForeignKeyConstraint(
            ["client_id"],
            ["clients.id"],
            name="fk_delivery_notes_client_id__clients",
            ondelete="RESTRICT",
        ),
        sa.ForeignKeyConstraint(
            ["project_id"],
            ["projects.id"],
            name="fk_delivery_notes_project_id__projects",
            ondelete="RESTRICT",
        ),
        sa.CheckConstraint(
            "format IN ('hours', 'material')",
            name="ck_delivery_notes_format",
        ),
        sa.CheckConstraint(
            "format <> 'hours' OR (hours IS NOT NULL AND hours >= 0.1)",
            name="ck_delivery_notes_hours_required",
        ),
        sa.CheckConstraint(
            "format <> 'material' OR quantity IS NOT NULL",
            name="ck_delivery_notes_quantity_required",
        ),
        sa.CheckConstraint(
            "quantity IS NULL OR quantity >= 0",
            name="ck_delivery_notes_quantity_non_negative",
        ),
        sa.CheckConstraint(
            "NOT is_signed OR sign_url IS NOT NULL",
            name="ck_delivery_notes_signed_has_url",
        ),
    )

    op.create_index(
        "ix_delivery_notes_owner_user_id_created_at",
        "delivery_notes",
        ["owner_user_id", "created_at"],
    )
    op.create_index(
        "ix_delivery_notes_project_id", "delivery_notes", ["project_id"]
    )

    # Un albarán firmado no se borra ni se des-firma.
    op.execute(
        """
        CREATE FUNCTION delivery_notes_signed_guard() RETURNS trigger AS $$
        BEGIN
            IF TG_OP = 'DELETE' THEN
                IF OLD.is_signed THEN
                    RAISE EXCEPTION 'signed delivery note % cannot be deleted', OLD.id
                        USING ERRCODE = 'restrict_violation';
                END IF;
                RETURN OLD;
            END IF;
            IF OLD.is_signed AND NOT NEW.is_signed THEN
                RAISE EXCEPTION 'signed delivery note % cannot be unsigned', OLD.id
                    USING ERRCODE = 'restrict_violation';
            END IF;
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql
        """
    )
    op.execute(
        "CREATE TRIGGER delivery_notes_signed_guard "
        "BEFORE DELETE OR UPDATE ON delivery_notes "
        "FOR EACH ROW EXECUTE FUNCTION delivery_notes_signed_guard()"
    )


def downgrade() -> None:
    """
    Downgrade NO soportado para la migración fundacional.

    Política: esta es la base del esquema.
    Para resetear el entorno local: recrear la base y volver a `alembic upgrade head`.
    """
    raise NotImplementedError(
        "Baseline: downgrade no soportado por política. "
        "Para resetear la base de datos, recrearla y ejecutar: alembic upgrade head"
    )
