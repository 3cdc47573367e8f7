"""
Member repository containing all data-access operations for the members table.

Emails are stored and compared lower-cased and stripped.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gym_enrollment.db.models.member import Member


def normalize_email(email: str) -> str:
    return email.strip().lower()


async def create_member(
    db: AsyncSession,
    *,
    name: str,
    email: str,
    phone: str,
    address: str | None = None,
) -> Member:
    """Insert a member; raises IntegrityError on a duplicate email at flush."""
    member = Member(
        name=name.strip(),
        email=normalize_email(email),
        phone=phone.strip(),
        address=address.strip() if address else None,
    )
    db.add(member)
    await db.flush()
    return member


async def get_member_by_email(db: AsyncSession, email: str) -> Member | None:
    """Fetch a member by email address (case-insensitive)."""
    stmt = select(Member).where(Member.email == normalize_email(email))
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def get_member_by_email_and_name(
    db: AsyncSession,
    email: str,
    name: str,
    *,
    for_update: bool = False,
) -> Member | None:
    """Fetch a member only when both email and name match."""
    stmt = select(Member).where(
        Member.email == normalize_email(email),
        Member.name == name.strip(),
    )
    if for_update:
        stmt = stmt.with_for_update()
    result = await db.execute(stmt)
    return result.scalar_one_or_none()
