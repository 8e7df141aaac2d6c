"""Invoice dashboard tables

Revision ID: 001
Revises:
Create Date: 2026-10-18

Creates: users, customers, invoices
Enums: invoice_status
"""

from collections.abc import Sequence

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.execute('CREATE EXTENSION IF NOT EXISTS "pgcrypto";')

    # ── 1. Enum types ─────────────────────────────────────────────────────
    op.execute("CREATE TYPE invoice_status AS ENUM ('pending', 'paid');")

    # ── 2. users ──────────────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE users (
            id UUID DEFAULT gen_random_uuid(),
            name VARCHAR(255) NOT NULL,
            email VARCHAR(255) NOT NULL,
            password_hash VARCHAR(255) NOT NULL,
            CONSTRAINT pk_users PRIMARY KEY (id),
            CONSTRAINT uq_users_email UNIQUE (email)
        );
    """)

    # ── 3. customers ──────────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE customers (
            id UUID DEFAULT gen_random_uuid(),
            name VARCHAR(255) NOT NULL,
            email VARCHAR(255) NOT NULL,
            image_url VARCHAR(500),
            CONSTRAINT pk_customers PRIMARY KEY (id)
        );
    """)

    # ── 4. invoices ───────────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE invoices (
            id UUID DEFAULT gen_random_uuid(),
            customer_id UUID NOT NULL,
            amount INTEGER NOT NULL,
            status invoice_status NOT NULL,
            date DATE NOT NULL,
            CONSTRAINT pk_invoices PRIMARY KEY (id),
            CONSTRAINT fk_invoices_customer_id_customers
                FOREIGN KEY (customer_id) REFERENCES customers(id) ON DELETE CASCADE,
            CONSTRAINT ck_invoices_amount_positive CHECK (amount > 0)
        );
    """)
    op.execute("CREATE INDEX ix_invoices_customer_id ON invoices (customer_id);")
    op.execute("CREATE INDEX ix_invoices_status ON invoices (status);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS invoices;")
    op.execute("DROP TABLE IF EXISTS customers;")
    op.execute("DROP TABLE IF EXISTS users;")
    op.execute("DROP TYPE IF EXISTS invoice_status;")
