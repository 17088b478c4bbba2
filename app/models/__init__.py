"""
Database models package.

Import all models here so they register with Base.metadata.
Other modules can import from here: `from app.models import MyModel`
"""

from app.models.my_model import MyModel

# Export all models
__all__ = [
    "MyModel",
]
