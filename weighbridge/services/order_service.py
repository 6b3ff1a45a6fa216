"""Order service: create-or-replace by order number, sparse patch, delete."""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from sqlalchemy import select, update, delete

from weighbridge.exceptions import ValidationError, NotFoundError
from weighbridge.models import Order, OrderStatus, OrderType, PaymentMethod, PaymentTerms
from weighbridge.services.outcome import UpsertOutcome
from weighbridge.services.schema_service import SchemaFlags
from weighbridge.utils.number_format import (
    parse_int, parse_decimal, parse_non_negative_decimal, compute_net_weight
)
from weighbridge.utils.timestamps import parse_timestamp, parse_date
from weighbridge.utils.text import clean_text

logger = logging.getLogger(__name__)

orders_table = Order.__table__

# Every order column a client may write, in schema order (order_number aside)
ORDER_FIELDS = (
    'customer_id', 'supplier_id', 'driver_id',
    'num_bags', 'plate_num', 'product', 'order_type',
    'first_weight_time', 'first_weight_kg', 'second_weight_time', 'second_weight_kg', 'net_weight_kg',
    'balance_id', 'customer_address', 'fees',
    'bill_date', 'unit', 'price', 'quantity', 'total_price', 'suggested_selling_price',
    'payment_method', 'payment_terms', 'signature',
    'status',
)

PATCHABLE_FIELDS = frozenset(ORDER_FIELDS)


def _choice(enum_cls) -> Callable[[Any], Optional[str]]:
    allowed = [member.value for member in enum_cls]

    def normalize(value: Any) -> Optional[str]:
        text = clean_text(value)
        if text is None:
            return None
        text = text.lower()
        if text not in allowed:
            raise ValueError(f"must be one of {', '.join(allowed)}")
        return text

    return normalize


def _non_negative_int(value: Any) -> Optional[int]:
    number = parse_int(value)
    if number is not None and number < 0:
        raise ValueError('value must not be negative')
    return number


FIELD_NORMALIZERS: Dict[str, Callable[[Any], Any]] = {
    'customer_id': parse_int,
    'supplier_id': parse_int,
    'driver_id': parse_int,
    'num_bags': _non_negative_int,
    'plate_num': clean_text,
    'product': clean_text,
    'order_type': _choice(OrderType),
    # Unparseable timestamps are dropped, never rejected
    'first_weight_time': parse_timestamp,
    'first_weight_kg': parse_non_negative_decimal,
    'second_weight_time': parse_timestamp,
    'second_weight_kg': parse_non_negative_decimal,
    'net_weight_kg': parse_non_negative_decimal,
    'balance_id': clean_text,
    'customer_address': clean_text,
    'fees': parse_decimal,
    'bill_date': parse_date,
    'unit': clean_text,
    'price': parse_non_negative_decimal,
    'quantity': parse_non_negative_decimal,
    'total_price': parse_non_negative_decimal,
    'suggested_selling_price': parse_non_negative_decimal,
    'payment_method': _choice(PaymentMethod),
    'payment_terms': _choice(PaymentTerms),
    'signature': clean_text,
    'status': _choice(OrderStatus),
}


@dataclass(frozen=True)
class UpsertResult:
    """Identity of the row written by upsert_order."""
    id: int
    order_number: str
    balance_id: Optional[str]
    outcome: UpsertOutcome

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'order_number': self.order_number,
            'balance_id': self.balance_id,
            'outcome': self.outcome.value,
        }


def writable_fields(flags: SchemaFlags) -> tuple:
    """ORDER_FIELDS minus the optional columns this deployment lacks."""
    excluded = flags.excluded_columns()
    return tuple(field for field in ORDER_FIELDS if field not in excluded)


def patchable_fields(flags: SchemaFlags) -> frozenset:
    return PATCHABLE_FIELDS - flags.excluded_columns()


def normalize_field(name: str, value: Any) -> Any:
    """Normalize one order field, turning ValueError into a 400."""
    try:
        return FIELD_NORMALIZERS[name](value)
    except ValueError as e:
        raise ValidationError(f"{name}: {e}", payload={'field': name})


def normalize_order_payload(payload: dict, flags: SchemaFlags) -> dict:
    """
    Build the full column set for a create-or-replace.

    Absent fields become NULL (or the column default for status and
    order_type), and net_weight_kg is derived from the two weighings.
    """
    values = {field: normalize_field(field, payload.get(field)) for field in writable_fields(flags)}

    if values['status'] is None:
        values['status'] = OrderStatus.PENDING.value
    if 'order_type' in values and values['order_type'] is None:
        values['order_type'] = OrderType.REGULAR.value

    values['net_weight_kg'] = compute_net_weight(values['first_weight_kg'], values['second_weight_kg'])
    return values


def _upsert_statement(dialect_name: str, values: dict):
    """INSERT ... ON CONFLICT(order_number) overwriting every other column."""
    update_columns = [column for column in values if column != 'order_number']

    if dialect_name in ('mysql', 'mariadb'):
        from sqlalchemy.dialects.mysql import insert as mysql_insert
        stmt = mysql_insert(orders_table).values(**values)
        return stmt.on_duplicate_key_update({column: stmt.inserted[column] for column in update_columns})

    if dialect_name == 'postgresql':
        from sqlalchemy.dialects.postgresql import insert as dialect_insert
    elif dialect_name == 'sqlite':
        from sqlalchemy.dialects.sqlite import insert as dialect_insert
    else:
        raise NotImplementedError(f"Order upsert is not supported on '{dialect_name}'")

    stmt = dialect_insert(orders_table).values(**values)
    return stmt.on_conflict_do_update(
        index_elements=[orders_table.c.order_number],
        set_={column: stmt.excluded[column] for column in update_columns},
    )


def _order_id_by_number(session, order_number: str) -> Optional[int]:
    return session.execute(
        select(orders_table.c.id).where(orders_table.c.order_number == order_number)
    ).scalar()


def upsert_order(session, payload: dict, flags: SchemaFlags, allocator) -> UpsertResult:
    """
    Insert an order, or overwrite the one with the same order_number.

    Resubmitting an existing order number replaces all of that order's data;
    it is not reported as a conflict. Without an order number one is taken
    from `allocator` (see order_number_service for its concurrency caveats).

    Args:
        session: SQLAlchemy session
        payload: Order fields as received from the client
        flags: Optional-column flags of this deployment
        allocator: Order number allocator (MaxScanAllocator or CounterAllocator)

    Returns:
        UpsertResult tagged CREATED or UPDATED

    Raises:
        ValidationError: For payloads with malformed numbers or enum values
    """
    if not isinstance(payload, dict):
        raise ValidationError('order payload must be a JSON object')

    values = normalize_order_payload(payload, flags)
    try:
        order_number = clean_text(payload.get('order_number'))
    except ValueError as e:
        raise ValidationError(f"order_number: {e}", payload={'field': 'order_number'})

    try:
        if not order_number:
            order_number = allocator.next_code(session)
            logger.info(f"[ORDERS] Allocated {order_number} ({allocator.strategy})")

        existing_id = _order_id_by_number(session, order_number)
        dialect_name = session.get_bind().dialect.name
        session.execute(_upsert_statement(dialect_name, {'order_number': order_number, **values}))

        order_id = existing_id if existing_id is not None else _order_id_by_number(session, order_number)
        session.commit()
    except Exception:
        session.rollback()
        raise

    outcome = UpsertOutcome.UPDATED if existing_id is not None else UpsertOutcome.CREATED
    logger.info(f"[ORDERS] {outcome.value} {order_number} (id={order_id})")
    return UpsertResult(
        id=order_id,
        order_number=order_number,
        balance_id=values['balance_id'],
        outcome=outcome,
    )


def patch_order(session, order_id: int, fields: dict, flags: SchemaFlags) -> dict:
    """
    Update only the supplied fields of an order.

    Keys outside the allow-list (or naming a column this deployment lacks) are
    ignored. net_weight_kg is stored as sent; clients recompute it.

    Returns:
        The normalized values that were written

    Raises:
        ValidationError: If no recognized field was supplied
        NotFoundError: If the order does not exist
    """
    if not isinstance(fields, dict):
        raise ValidationError('patch payload must be a JSON object')

    allowed = patchable_fields(flags)
    values = {name: normalize_field(name, value) for name, value in fields.items() if name in allowed}

    ignored = sorted(set(fields) - allowed)
    if ignored:
        logger.debug(f"[ORDERS] Ignoring unknown patch fields for order {order_id}: {ignored}")

    if not values:
        raise ValidationError('no fields to update')
    if 'status' in values and values['status'] is None:
        raise ValidationError('status: must not be empty', payload={'field': 'status'})

    try:
        result = session.execute(
            update(orders_table).where(orders_table.c.id == order_id).values(**values)
        )
        if result.rowcount == 0:
            raise NotFoundError(f'order {order_id} not found')
        session.commit()
    except Exception:
        session.rollback()
        raise

    logger.info(f"[ORDERS] Patched order {order_id}: {sorted(values)}")
    return values


def delete_order(session, order_id: int) -> None:
    """Hard-delete an order (management action)."""
    try:
        result = session.execute(delete(orders_table).where(orders_table.c.id == order_id))
        if result.rowcount == 0:
            raise NotFoundError(f'order {order_id} not found')
        session.commit()
    except Exception:
        session.rollback()
        raise

    logger.info(f"[ORDERS] Deleted order {order_id}")

