"""Models package - exports all SQLAlchemy models."""
from weighbridge.models.company import Company
from weighbridge.models.driver import Driver
from weighbridge.models.order import (
    Order, OrderStatus, OrderType, PaymentMethod, PaymentTerms, OPTIONAL_ORDER_COLUMNS
)
from weighbridge.models.code_counter import CodeCounter

__all__ = [
    'Company', 'Driver',
    'Order', 'OrderStatus', 'OrderType', 'PaymentMethod', 'PaymentTerms', 'OPTIONAL_ORDER_COLUMNS',
    'CodeCounter',
]
