"""
Album Server: CRUD backend for photo albums and their uploaded photos.
"""

__version__ = "1.0.0"
