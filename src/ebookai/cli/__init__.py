"""EbookAI toolkit CLI package."""

# Import guard for CLI dependencies
try:
    from .app import app
except ImportError as e:
    raise ImportError("CLI dependencies not available. Reinstall with: pip install ebookai-toolkit") from e

__all__ = ["app"]
