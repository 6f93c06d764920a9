"""
High-level use cases for the lease API.

Each service module orchestrates the repository to implement business rules
(register users and cars, start/end leases, export history, seed demo data).

Routers (FastAPI endpoints) call these services instead of touching the
database session directly.
"""
