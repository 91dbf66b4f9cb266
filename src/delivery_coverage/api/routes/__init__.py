"""Route group exports."""

from . import coverage, health

__all__ = ["coverage", "health"]
