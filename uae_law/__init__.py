"""
UAE Law Index
Structured UAE legislation (federal, DIFC and ADGM): extraction, resolution,
citation handling and full-text search.
"""

__version__ = "1.0.0"
__description__ = "UAE federal, DIFC and ADGM legislation index"
