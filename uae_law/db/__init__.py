"""
Database Package
SQLAlchemy models and the query layer. Engine and sessions live in
``uae_law.db.session`` and are created from settings on first import there.
"""

from .models import Base, DbMetadata, LegalDefinition, LegalDocument, LegalProvision

__all__ = [
    'Base',
    'DbMetadata',
    'LegalDefinition',
    'LegalDocument',
    'LegalProvision',
]
