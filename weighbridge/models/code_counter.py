"""Code counter model backing the locked order-number strategy."""
from sqlalchemy import Column, BigInteger, String
from weighbridge.database import Base


class CodeCounter(Base):
    """Last issued sequence value per code prefix (e.g. ORD -> 42)."""

    __tablename__ = 'code_counters'

    prefix = Column(String(16), primary_key=True)
    last_value = Column(BigInteger, nullable=False, default=0)

    def __repr__(self):
        return f"<CodeCounter(prefix='{self.prefix}', last_value={self.last_value})>"
