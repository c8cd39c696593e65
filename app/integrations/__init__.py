# app/integrations/__init__.py

from app.integrations import files

__all__ = ["files"]
