"""
API Package

This package contains the HTTP routes:
- routes: Code review endpoint
"""

from reviewx.api.routes import router

__all__ = ["router"]
