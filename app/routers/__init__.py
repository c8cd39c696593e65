# app/routers/__init__.py

from app.routers import health
from app.routers import reconcile

__all__ = ["health", "reconcile"]
