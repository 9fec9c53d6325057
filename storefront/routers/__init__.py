"""
FastAPI routers grouped by resource (auth, users, products, orders).

Each module exposes an APIRouter included by the app factory. Handlers pull
their services from app.state and let ServiceError propagate to the
exception handler registered in storefront.app.
"""
