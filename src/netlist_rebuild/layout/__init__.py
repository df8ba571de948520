"""
Deterministic component layout.
"""

from .grid import GridPlanner

__all__ = ["GridPlanner"]
