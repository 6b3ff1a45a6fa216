"""Schema probing for columns that older deployments lack."""
import logging
from dataclasses import dataclass

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SchemaFlags:
    """
    Which optional `orders` columns exist in this deployment.

    Computed once by the app factory and handed to every service call that
    reads, writes or filters orders.
    """
    has_payment_terms: bool = True
    has_order_type: bool = True

    def excluded_columns(self) -> frozenset:
        """Order column names that must not appear in any statement."""
        excluded = set()
        if not self.has_payment_terms:
            excluded.add('payment_terms')
        if not self.has_order_type:
            excluded.add('order_type')
        return frozenset(excluded)

    def to_dict(self) -> dict:
        return {
            'has_payment_terms': self.has_payment_terms,
            'has_order_type': self.has_order_type,
        }


def detect_optional_columns(engine, table_name: str = 'orders') -> SchemaFlags:
    """
    Introspect the orders table for payment_terms and order_type.

    If the probe itself fails (database unreachable at boot) both columns are
    assumed present and only a warning is logged.
    """
    try:
        columns = {column['name'] for column in inspect(engine).get_columns(table_name)}
    except SQLAlchemyError as e:
        logger.warning(f"[SCHEMA] Could not inspect '{table_name}' ({e}); assuming optional columns exist")
        return SchemaFlags()

    flags = SchemaFlags(
        has_payment_terms='payment_terms' in columns,
        has_order_type='order_type' in columns,
    )
    logger.info(f"[SCHEMA] {table_name}: {flags.to_dict()}")
    return flags
