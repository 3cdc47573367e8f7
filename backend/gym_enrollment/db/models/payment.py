"""
Payment model — immutable record of one payment against an enrollment.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gym_enrollment.db.models.base import Base, utcnow


class Payment(Base):
    __tablename__ = "payments"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    enrollment_id: Mapped[int] = mapped_column(
        ForeignKey("enrollments.id"), nullable=False, index=True
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    payment_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    transaction_id: Mapped[str] = mapped_column(
        String(64), unique=True, nullable=False
    )

    enrollment = relationship("Enrollment", back_populates="payments")

    def __repr__(self) -> str:
        return f"<Payment id={self.id} enrollment={self.enrollment_id} {self.transaction_id}>"
