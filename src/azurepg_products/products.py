# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.
"""Queries against the products database."""

import json
from dataclasses import asdict, dataclass, fields, replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from psycopg2.extensions import connection

from azurepg_products.errors import InvalidProductError, ProductNotFoundError

RANDOM_PRODUCT_QUERY = """
    SELECT id, product_type_id, supplier_id, sku, name, price, description, image, digital,
           unit_description, package_dimensions, weight_in_pounds, reorder_amount, status,
           requires_shipping, warehouse_location, created_at, updated_at
    FROM products
    ORDER BY RANDOM() LIMIT 1
"""

LIST_TABLES_QUERY = "SELECT table_name FROM information_schema.tables WHERE table_schema = 'public'"

# Dropped from the JSON output when empty.
OPTIONAL_FIELDS = (
    "description",
    "image",
    "unit_description",
    "package_dimensions",
    "weight_in_pounds",
    "warehouse_location",
)


def _rfc3339(value: datetime) -> str:
    # "timestamp without time zone" columns come back naive and are read as UTC.
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


@dataclass(frozen=True)
class Product:
    id: int
    product_type_id: int
    supplier_id: int
    sku: str
    name: str
    price: float
    description: str | None
    image: str | None
    digital: bool
    unit_description: str | None
    package_dimensions: str | None
    weight_in_pounds: str | None
    reorder_amount: int
    status: str
    requires_shipping: bool
    warehouse_location: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_row(cls, row: tuple[Any, ...]) -> "Product":
        product = cls(*row)
        for field in fields(cls):
            if field.name not in OPTIONAL_FIELDS and getattr(product, field.name) is None:
                raise InvalidProductError(f"product column {field.name} is NULL")
        changes: dict[str, Any] = {}
        if isinstance(product.price, Decimal):
            changes["price"] = float(product.price)
        if product.weight_in_pounds is not None and not isinstance(product.weight_in_pounds, str):
            changes["weight_in_pounds"] = str(product.weight_in_pounds)
        return replace(product, **changes)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        for field in OPTIONAL_FIELDS:
            if not data[field]:
                del data[field]
        data["created_at"] = _rfc3339(self.created_at)
        data["updated_at"] = _rfc3339(self.updated_at)
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2) + "\n"


def fetch_random_product(conn: connection) -> Product:
    """Returns one product picked at random.

    Raises:
        ProductNotFoundError: If the products table is empty.
        InvalidProductError: If a required column is NULL.
    """
    with conn.cursor() as cur:
        cur.execute(RANDOM_PRODUCT_QUERY)
        row = cur.fetchone()
    if row is None:
        raise ProductNotFoundError("products table is empty")
    return Product.from_row(row)


def list_tables(conn: connection) -> list[str]:
    """Returns the names of the tables in the public schema."""
    with conn.cursor() as cur:
        cur.execute(LIST_TABLES_QUERY)
        return [row[0] for row in cur.fetchall()]


def ping(conn: connection) -> None:
    """Round-trips a trivial query; raises the driver error on failure."""
    with conn.cursor() as cur:
        cur.execute("SELECT 1")
        cur.fetchone()
