"""CLI commands package."""

# Import all command modules to make them available
from . import content, cost, pricing, variations

__all__ = ["content", "cost", "pricing", "variations"]
