"""001 – Initial schema: attendance, holidays, leave balances and deduction log.

Revision ID: 001_initial_schema
Revises:
Create Date: 2025-03-01 09:00:00.000000+00:00
"""

from alembic import op
import sqlalchemy as sa

# Revision identifiers
revision = "001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

ENUM_TYPES: list[tuple[str, list[str]]] = [
    ("employee_status", ["active", "inactive"]),
    ("employee_group", ["group_a", "group_b"]),
    ("holiday_type", ["annual", "special", "weekend"]),
    ("leave_status", ["pending", "approved", "rejected"]),
]


def _create_enum(name: str, values: list[str]) -> None:
    vals = ", ".join(f"'{v}'" for v in values)
    op.execute(f"CREATE TYPE {name} AS ENUM ({vals})")


def _drop_enum(name: str) -> None:
    op.execute(f"DROP TYPE IF EXISTS {name}")


# ---------------------------------------------------------------------------
# UPGRADE
# ---------------------------------------------------------------------------


def upgrade() -> None:
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # ── Enum types ────────────────────────────────────────────────────────
    for name, values in ENUM_TYPES:
        _create_enum(name, values)

    # ── 1. departments ────────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE departments (
            id          UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            name        VARCHAR(150) NOT NULL UNIQUE,
            code        VARCHAR(20) UNIQUE,
            is_active   BOOLEAN NOT NULL DEFAULT TRUE,
            created_at  TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)

    # ── 2. employees ──────────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE employees (
            id              UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            employee_code   VARCHAR(20) NOT NULL UNIQUE,
            full_name       VARCHAR(255) NOT NULL,
            email           VARCHAR(255) UNIQUE,
            department_id   UUID REFERENCES departments(id),
            employee_group  employee_group NOT NULL DEFAULT 'group_a',
            status          employee_status NOT NULL DEFAULT 'active',
            join_date       DATE NOT NULL,
            created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)
    op.execute("CREATE INDEX ix_employees_status ON employees (status)")
    op.execute("CREATE INDEX ix_employees_department ON employees (department_id)")

    # ── 3. attendance_records ─────────────────────────────────────────────
    op.execute("""
        CREATE TABLE attendance_records (
            id           UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            employee_id  UUID NOT NULL REFERENCES employees(id),
            date         DATE NOT NULL,
            check_in     TIME,
            check_out    TIME,
            source       VARCHAR(50) DEFAULT 'biometric',
            remarks      TEXT,
            created_at   TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_attendance_emp_date UNIQUE (employee_id, date)
        )
    """)
    op.execute("CREATE INDEX ix_attendance_records_date ON attendance_records (date)")

    # ── 4. holidays ───────────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE holidays (
            id                 UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            name               VARCHAR(150) NOT NULL,
            date               DATE NOT NULL,
            holiday_type       holiday_type NOT NULL DEFAULT 'annual',
            applicable_groups  JSONB NOT NULL DEFAULT '[]'::jsonb,
            created_at         TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_holiday_date_name UNIQUE (date, name)
        )
    """)
    op.execute("CREATE INDEX ix_holidays_date ON holidays (date)")

    # ── 5. leave_types ────────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE leave_types (
            id           UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            code         VARCHAR(10) NOT NULL UNIQUE,
            name         VARCHAR(100) NOT NULL,
            description  TEXT,
            is_active    BOOLEAN NOT NULL DEFAULT TRUE,
            created_at   TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)

    # ── 6. leave_requests ─────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE leave_requests (
            id                UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            employee_id       UUID NOT NULL REFERENCES employees(id),
            leave_type_id     UUID REFERENCES leave_types(id),
            start_date        DATE NOT NULL,
            end_date          DATE NOT NULL,
            total_days        INTEGER NOT NULL,
            reason            TEXT,
            status            leave_status NOT NULL DEFAULT 'pending',
            reviewed_at       TIMESTAMPTZ,
            reviewer_remarks  TEXT,
            created_at        TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at        TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_leave_request_range CHECK (start_date <= end_date)
        )
    """)
    op.execute(
        "CREATE INDEX ix_leave_requests_emp_dates "
        "ON leave_requests (employee_id, start_date, end_date)"
    )

    # ── 7. leave_balances ─────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE leave_balances (
            id                  UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            employee_id         UUID NOT NULL REFERENCES employees(id),
            year                INTEGER NOT NULL,
            annual_entitlement  INTEGER NOT NULL DEFAULT 45,
            used_days           INTEGER NOT NULL DEFAULT 0,
            created_at          TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at          TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_leave_balance_emp_year UNIQUE (employee_id, year),
            CONSTRAINT ck_leave_balance_used_non_negative CHECK (used_days >= 0)
        )
    """)

    # ── 8. leave_deductions ───────────────────────────────────────────────
    op.execute("""
        CREATE TABLE leave_deductions (
            id                UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            employee_id       UUID NOT NULL REFERENCES employees(id),
            leave_balance_id  UUID NOT NULL REFERENCES leave_balances(id) ON DELETE CASCADE,
            date              DATE NOT NULL,
            days              INTEGER NOT NULL DEFAULT 1,
            created_at        TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_leave_deduction_emp_date UNIQUE (employee_id, date)
        )
    """)

    # ── 9. audit_trail ────────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE audit_trail (
            id           UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            actor        VARCHAR(100) NOT NULL DEFAULT 'system',
            action       VARCHAR(50) NOT NULL,
            entity_type  VARCHAR(50) NOT NULL,
            entity_id    UUID NOT NULL,
            old_values   JSONB,
            new_values   JSONB,
            created_at   TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)
    op.execute(
        "CREATE INDEX ix_audit_trail_entity ON audit_trail (entity_type, entity_id)"
    )
    op.execute("CREATE INDEX ix_audit_trail_action ON audit_trail (action)")

    # ── Seed data ─────────────────────────────────────────────────────────
    op.execute("""
        INSERT INTO leave_types (code, name, description) VALUES
            ('AL', 'Annual Leave',  'Charged against the annual entitlement'),
            ('SL', 'Sick Leave',    'Medical leave'),
            ('EL', 'Emergency Leave', 'Unplanned urgent absence')
    """)


# ---------------------------------------------------------------------------
# DOWNGRADE
# ---------------------------------------------------------------------------


def downgrade() -> None:
    # Drop tables in reverse dependency order
    tables = [
        "audit_trail",
        "leave_deductions",
        "leave_balances",
        "leave_requests",
        "leave_types",
        "holidays",
        "attendance_records",
        "employees",
        "departments",
    ]
    for t in tables:
        op.execute(f"DROP TABLE IF EXISTS {t} CASCADE")

    for name, _ in reversed(ENUM_TYPES):
        _drop_enum(name)

    op.execute('DROP EXTENSION IF EXISTS "uuid-ossp"')
