"""
Utility functions package.
"""
from album_server.utils.params import parse_id

__all__ = ["parse_id"]
