"""
Models package — re-exports Base and all models.

Import models here so `Base.metadata.create_all` (and Alembic's
`target_metadata = Base.metadata`) picks up every table automatically.

When adding a new model:
    1. Create `gym_enrollment/db/models/<table_name>.py`
    2. Import it here
"""

from gym_enrollment.db.models.base import Base
from gym_enrollment.db.models.batch import Batch
from gym_enrollment.db.models.enrollment import Enrollment
from gym_enrollment.db.models.member import Member
from gym_enrollment.db.models.payment import Payment

__all__ = [
    "Base",
    "Batch",
    "Enrollment",
    "Member",
    "Payment",
]
