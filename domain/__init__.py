"""
Domain layer - Request and response schemas.
"""

from domain import schemas

__all__ = ["schemas"]
