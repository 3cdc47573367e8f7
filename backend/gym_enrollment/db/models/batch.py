"""
Batch model — a fixed daily time slot with a seat ceiling and monthly fee.

`current_capacity` is the live occupancy counter. It is only changed by
conditional UPDATEs in `repositories/batches.py`, and the CHECK
constraint keeps it inside [0, max_capacity].
"""

from datetime import time
from decimal import Decimal

from sqlalchemy import CheckConstraint, Integer, Numeric, Time
from sqlalchemy.orm import Mapped, mapped_column

from gym_enrollment.db.models.base import Base


class Batch(Base):
    __tablename__ = "gym_batches"
    __table_args__ = (
        CheckConstraint(
            "current_capacity >= 0 AND current_capacity <= max_capacity",
            name="ck_gym_batches_capacity_range",
        ),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    batch_time: Mapped[time] = mapped_column(Time, unique=True, nullable=False)
    current_capacity: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0
    )
    max_capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    monthly_fee: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False, default=Decimal("1000.00")
    )

    @property
    def is_full(self) -> bool:
        return self.current_capacity >= self.max_capacity

    def __repr__(self) -> str:
        return (
            f"<Batch {self.batch_time} "
            f"{self.current_capacity}/{self.max_capacity} fee={self.monthly_fee}>"
        )
