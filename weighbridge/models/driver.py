"""Driver model."""
from sqlalchemy import Column, BigInteger, Integer, String, DateTime, Index
from sqlalchemy.sql import func
from weighbridge.database import Base


class Driver(Base):
    """Truck driver, refreshed on every gate visit."""

    __tablename__ = 'drivers'

    id = Column(BigInteger().with_variant(Integer(), 'sqlite'), primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)
    phone = Column(String(50), nullable=True)
    last_plate = Column(String(50), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('uq_drivers_name_lower', func.lower(name), unique=True),
    )

    def __repr__(self):
        return f"<Driver(id={self.id}, name='{self.name}', phone='{self.phone}')>"

    def to_dict(self):
        return {'id': self.id, 'name': self.name, 'phone': self.phone, 'last_plate': self.last_plate}
