"""
Enrollment model — one member in one batch for one calendar month.

`month` is always the first day of the month. A member has at most one
enrollment per month (`uq_enrollments_member_month`).
"""

from datetime import date, datetime, time
from decimal import Decimal

from sqlalchemy import (
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Time,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gym_enrollment.core.constants import PaymentStatus
from gym_enrollment.db.models.base import Base, utcnow


class Enrollment(Base):
    __tablename__ = "enrollments"
    __table_args__ = (
        UniqueConstraint("member_id", "month", name="uq_enrollments_member_month"),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    member_id: Mapped[int] = mapped_column(
        ForeignKey("members.id"), nullable=False, index=True
    )
    batch_time: Mapped[time] = mapped_column(
        Time, ForeignKey("gym_batches.batch_time"), nullable=False
    )
    month: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    payment_status: Mapped[str] = mapped_column(
        String(10), nullable=False, default=PaymentStatus.PENDING.value, index=True
    )  # pending | paid

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    member = relationship("Member", back_populates="enrollments")
    payments = relationship("Payment", back_populates="enrollment")

    def __repr__(self) -> str:
        return (
            f"<Enrollment id={self.id} member={self.member_id} "
            f"batch={self.batch_time} month={self.month} {self.payment_status}>"
        )
