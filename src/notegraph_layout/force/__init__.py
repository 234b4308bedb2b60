"""
Force-directed graph layouts.

- ForceDirectedLayout: Spring-electrical simulation with linear cooling
"""

from .force_directed import ForceDirectedLayout

__all__ = ["ForceDirectedLayout"]
