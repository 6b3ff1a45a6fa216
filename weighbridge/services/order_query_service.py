"""Order listings joined with customer, supplier and driver display fields."""
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

from sqlalchemy import select

from weighbridge.exceptions import NotFoundError
from weighbridge.models import Company, Driver, Order
from weighbridge.services.schema_service import SchemaFlags
from weighbridge.utils.timestamps import format_timestamp

DEFAULT_LIST_LIMIT = 200

orders_table = Order.__table__
customers = Company.__table__.alias('c')
suppliers = Company.__table__.alias('s')
drivers = Driver.__table__.alias('d')


def order_columns(flags: SchemaFlags) -> list:
    """Order columns present in this deployment."""
    excluded = flags.excluded_columns()
    return [column for column in orders_table.c if column.name not in excluded]


def _base_select(flags: SchemaFlags):
    joined = (
        orders_table
        .outerjoin(customers, orders_table.c.customer_id == customers.c.id)
        .outerjoin(suppliers, orders_table.c.supplier_id == suppliers.c.id)
        .outerjoin(drivers, orders_table.c.driver_id == drivers.c.id)
    )
    return select(
        *order_columns(flags),
        customers.c.name.label('customer_name'),
        customers.c.address.label('customer_company_address'),
        suppliers.c.name.label('supplier_name'),
        suppliers.c.address.label('supplier_company_address'),
        drivers.c.name.label('driver_name'),
        drivers.c.phone.label('driver_phone'),
    ).select_from(joined)


def _json_value(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, datetime):
        return format_timestamp(value)
    if isinstance(value, date):
        return value.isoformat()
    return value


def serialize_row(row) -> Dict[str, Any]:
    """Row mapping -> JSON-ready dict (decimals as numbers, UTC timestamps as text)."""
    return {key: _json_value(value) for key, value in row.items()}


def list_orders(
    session,
    flags: SchemaFlags,
    status: Optional[str] = None,
    order_type: Optional[str] = None,
    limit: int = DEFAULT_LIST_LIMIT,
) -> List[Dict[str, Any]]:
    """
    Newest orders first, optionally filtered by status and order type.

    The order type filter is ignored on deployments without the column. There
    is no text search here: clients filter the returned rows themselves.
    """
    stmt = _base_select(flags)

    status = (status or '').strip().lower()
    if status:
        stmt = stmt.where(orders_table.c.status == status)

    order_type = (order_type or '').strip().lower()
    if order_type and flags.has_order_type:
        stmt = stmt.where(orders_table.c.order_type == order_type)

    stmt = stmt.order_by(orders_table.c.created_at.desc(), orders_table.c.id.desc()).limit(limit)
    return [serialize_row(row) for row in session.execute(stmt).mappings()]


def _fetch_one(session, flags: SchemaFlags, condition) -> Optional[Dict[str, Any]]:
    row = session.execute(_base_select(flags).where(condition)).mappings().first()
    return serialize_row(row) if row is not None else None


def get_order(session, flags: SchemaFlags, id_or_number: Union[int, str]) -> Dict[str, Any]:
    """
    Fetch one order by surrogate id or by order number.

    A purely numeric key is tried as an id first and then as an order number.

    Raises:
        NotFoundError: If neither lookup matches
    """
    key = str(id_or_number).strip()
    order = None

    if key.isascii() and key.isdigit():
        order = _fetch_one(session, flags, orders_table.c.id == int(key))
    if order is None and key:
        order = _fetch_one(session, flags, orders_table.c.order_number == key)

    if order is None:
        raise NotFoundError('not found')
    return order
