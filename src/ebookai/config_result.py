"""Outcome of reading a pricing configuration file."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .errors import ConfigFileNotFoundError, InvalidConfigFormatError


@dataclass
class ConfigResult:
    """What came back from reading a YAML file, without raising.

    Attributes:
        success: Whether the file was read and parsed into a mapping
        data: Parsed mapping when ``success`` is True
        error: Human readable reason when ``success`` is False
        exception: Underlying exception, if one was caught
        path: File the result refers to
    """

    success: bool
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    exception: Optional[Exception] = None
    path: Optional[str] = None

    @classmethod
    def failure(cls, error: str, path: str, exception: Optional[Exception] = None) -> "ConfigResult":
        return cls(success=False, error=error, exception=exception, path=path)

    @property
    def is_missing(self) -> bool:
        """True when the failure was a missing file."""
        return isinstance(self.exception, FileNotFoundError)

    def raise_for_error(self) -> Dict[str, Any]:
        """Return the parsed data or raise the matching configuration error.

        Raises:
            ConfigFileNotFoundError: If the file does not exist
            InvalidConfigFormatError: If the file could not be read or parsed
        """
        if self.success:
            return self.data or {}
        if self.is_missing:
            raise ConfigFileNotFoundError(self.error or "Pricing file not found", path=self.path)
        raise InvalidConfigFormatError(self.error or "Invalid pricing file", path=self.path)
