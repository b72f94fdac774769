"""
Services Package
Extraction, resolution, citation, search and retrieval services.
"""
