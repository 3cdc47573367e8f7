"""
Services package — business rules and transaction ownership.

Services receive an `AsyncSession`, call repositories, and decide when
to commit or roll back. Routers only translate HTTP to service calls.
"""
