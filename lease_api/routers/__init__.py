"""
FastAPI routers grouped by role (admin, owners, customers).

Each file inside this package exposes an APIRouter that is included in the
main application (app.py). Routers stay thin: they call the services and wrap
results in the response envelope.
"""
