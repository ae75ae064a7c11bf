"""
Dependency wiring for repositories and use cases.
"""

from .dependency_injection import DependencyContainer

__all__ = ["DependencyContainer"]
