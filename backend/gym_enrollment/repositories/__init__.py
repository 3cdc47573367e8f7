"""
Repositories package — data-access layer.

Each repository file handles all DB operations for one domain entity.
Repositories do NOT handle HTTP concerns or business rules; those live
in `gym_enrollment.services`.

Convention:
    - One file per table (members.py, batches.py, enrollments.py, payments.py)
    - All functions accept `AsyncSession` as the first argument
    - Use `flush()` internally; commit/rollback belongs to the service
      that owns the transaction
"""
