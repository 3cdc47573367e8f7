"""
Member model — identity record created on first enrollment.

Members are never deleted by the API; email is unique.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gym_enrollment.db.models.base import Base, utcnow


class Member(Base):
    __tablename__ = "members"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False, index=True
    )
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    phone: Mapped[str] = mapped_column(String(15), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    enrollments = relationship("Enrollment", back_populates="member")

    def __repr__(self) -> str:
        return f"<Member id={self.id} {self.email}>"
