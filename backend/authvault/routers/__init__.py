"""
API Routers module.
"""
from authvault.routers import auth, health

__all__ = ["auth", "health"]
