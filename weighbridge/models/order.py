"""Order model."""
import enum
from sqlalchemy import Column, BigInteger, Integer, String, Numeric, DateTime, Date, Text, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from weighbridge.database import Base


class OrderStatus(str, enum.Enum):
    """Order lifecycle status."""
    PENDING = 'pending'
    COMPLETED = 'completed'


class OrderType(str, enum.Enum):
    """Regular (management) order or gate quick sale."""
    REGULAR = 'regular'
    QUICK = 'quick'


class PaymentMethod(str, enum.Enum):
    """Payment method recorded on the bill."""
    CASH = 'cash'
    CARD = 'card'
    TRANSFER = 'transfer'
    OTHER = 'other'


class PaymentTerms(str, enum.Enum):
    """When the customer pays."""
    NOW = 'now'
    INSTALLMENTS = 'installments'
    LATER = 'later'


# Columns some deployments were created without
OPTIONAL_ORDER_COLUMNS = ('payment_terms', 'order_type')


class Order(Base):
    """
    Weighbridge order.

    Identified internally by id and externally by order_number (ORD-0042).
    Reads and writes go through Core statements whose column lists are gated by
    SchemaFlags, so the mapped columns below describe the full schema rather
    than what every deployment has.
    """

    __tablename__ = 'orders'

    id = Column(BigInteger().with_variant(Integer(), 'sqlite'), primary_key=True, autoincrement=True)
    order_number = Column(String(64), nullable=False, unique=True)
    order_type = Column(String(20), nullable=True)  # no Python default: column may not exist

    customer_id = Column(BigInteger, ForeignKey('companies.id', ondelete='SET NULL'), nullable=True)
    supplier_id = Column(BigInteger, ForeignKey('companies.id', ondelete='SET NULL'), nullable=True)
    driver_id = Column(BigInteger, ForeignKey('drivers.id', ondelete='SET NULL'), nullable=True)

    num_bags = Column(Integer, nullable=True)
    plate_num = Column(String(50), nullable=True)
    product = Column(String(50), nullable=True)  # flour, bran, shawa2ib

    # Weighing
    first_weight_time = Column(DateTime, nullable=True)  # UTC
    first_weight_kg = Column(Numeric(12, 2), nullable=True)
    second_weight_time = Column(DateTime, nullable=True)  # UTC
    second_weight_kg = Column(Numeric(12, 2), nullable=True)
    net_weight_kg = Column(Numeric(12, 2), nullable=True)

    balance_id = Column(String(64), nullable=True)
    customer_address = Column(Text, nullable=True)
    fees = Column(Numeric(12, 2), nullable=True)

    # Billing
    bill_date = Column(Date, nullable=True)
    unit = Column(String(20), nullable=True)
    price = Column(Numeric(12, 2), nullable=True)
    quantity = Column(Numeric(12, 3), nullable=True)
    total_price = Column(Numeric(14, 2), nullable=True)
    suggested_selling_price = Column(Numeric(12, 2), nullable=True)
    payment_method = Column(String(20), nullable=True)
    payment_terms = Column(String(20), nullable=True)
    signature = Column(String(255), nullable=True)

    status = Column(String(20), nullable=False, default=OrderStatus.PENDING.value)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    # Relationships
    customer = relationship('Company', foreign_keys=[customer_id])
    supplier = relationship('Company', foreign_keys=[supplier_id])
    driver = relationship('Driver')

    def __repr__(self):
        return f"<Order(id={self.id}, number='{self.order_number}', status='{self.status}')>"
