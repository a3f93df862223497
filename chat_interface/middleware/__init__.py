"""
Middleware - wrappers around session event handlers

Modules:
- error_boundary: turns handler failures into error events
"""

from .error_boundary import ErrorBoundaryMiddleware

__all__ = ["ErrorBoundaryMiddleware"]
