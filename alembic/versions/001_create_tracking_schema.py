"""Shipment tracking schema

Revision ID: 001
Revises: None
Create Date: 2026-10-18

Creates: shipments, companies, orders
Enums: shipmentstatus, destinationtype, orderstatus
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
    op.execute('CREATE EXTENSION IF NOT EXISTS "pg_trgm";')

    # ── 1. Enum types ─────────────────────────────────────────────────────
    op.execute("CREATE TYPE shipmentstatus AS ENUM ('open', 'ordered', 'received');")
    op.execute("CREATE TYPE destinationtype AS ENUM ('company', 'amazon');")
    op.execute("""
        CREATE TYPE orderstatus AS ENUM (
            'pending', 'delivered', 'in-stock', 'sold', 'in-office-use'
        );
    """)

    # ── 2. shipments ──────────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE shipments (
            id UUID NOT NULL DEFAULT gen_random_uuid(),
            shipment_number VARCHAR(100) NOT NULL,
            status shipmentstatus NOT NULL DEFAULT 'open',
            notes TEXT,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            CONSTRAINT pk_shipments PRIMARY KEY (id),
            CONSTRAINT uq_shipments_shipment_number UNIQUE (shipment_number)
        );
    """)
    op.execute("CREATE INDEX ix_shipments_status ON shipments (status);")
    op.execute("CREATE INDEX ix_shipments_created_at ON shipments (created_at);")

    # ── 3. companies ──────────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE companies (
            id UUID NOT NULL DEFAULT gen_random_uuid(),
            name VARCHAR(255) NOT NULL,
            contact VARCHAR(255),
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            CONSTRAINT pk_companies PRIMARY KEY (id)
        );
    """)

    # ── 4. orders ─────────────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE orders (
            id UUID NOT NULL DEFAULT gen_random_uuid(),
            shipment_id UUID NOT NULL,
            sku VARCHAR(100) NOT NULL,
            model_number VARCHAR(100),
            product_name VARCHAR(255) NOT NULL,
            quantity INTEGER NOT NULL,
            destination_type destinationtype NOT NULL,
            company_id UUID,
            status orderstatus NOT NULL DEFAULT 'pending',
            notes TEXT,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            CONSTRAINT pk_orders PRIMARY KEY (id),
            CONSTRAINT fk_orders_shipment_id_shipments
                FOREIGN KEY (shipment_id) REFERENCES shipments (id) ON DELETE RESTRICT,
            CONSTRAINT fk_orders_company_id_companies
                FOREIGN KEY (company_id) REFERENCES companies (id) ON DELETE RESTRICT,
            CONSTRAINT ck_orders_quantity_positive CHECK (quantity > 0),
            CONSTRAINT ck_orders_destination_company CHECK (
                (destination_type = 'company' AND company_id IS NOT NULL)
                OR (destination_type = 'amazon' AND company_id IS NULL)
            )
        );
    """)
    op.execute("CREATE INDEX ix_orders_shipment_id ON orders (shipment_id);")
    op.execute(
        "CREATE INDEX ix_orders_company_id ON orders (company_id) WHERE company_id IS NOT NULL;"
    )
    op.execute("CREATE INDEX ix_orders_destination_status ON orders (destination_type, status);")

    # Trigram indexes back the case-insensitive inventory search
    op.execute("CREATE INDEX ix_orders_sku_trgm ON orders USING gin (sku gin_trgm_ops);")
    op.execute(
        "CREATE INDEX ix_orders_product_name_trgm ON orders USING gin (product_name gin_trgm_ops);"
    )


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS orders;")
    op.execute("DROP TABLE IF EXISTS companies;")
    op.execute("DROP TABLE IF EXISTS shipments;")
    op.execute("DROP TYPE IF EXISTS orderstatus;")
    op.execute("DROP TYPE IF EXISTS destinationtype;")
    op.execute("DROP TYPE IF EXISTS shipmentstatus;")
