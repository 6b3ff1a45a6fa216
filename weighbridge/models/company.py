"""Company model."""
from sqlalchemy import Column, BigInteger, Integer, String, Text, DateTime, Index
from sqlalchemy.sql import func
from weighbridge.database import Base


class Company(Base):
    """
    Company (customer or supplier).

    The role is not stored here: an order points at a company either through
    customer_id or supplier_id.
    """

    __tablename__ = 'companies'

    id = Column(BigInteger().with_variant(Integer(), 'sqlite'), primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)
    address = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index('uq_companies_name_lower', func.lower(name), unique=True),
    )

    def __repr__(self):
        return f"<Company(id={self.id}, name='{self.name}')>"

    def to_dict(self):
        return {'id': self.id, 'name': self.name, 'address': self.address}
