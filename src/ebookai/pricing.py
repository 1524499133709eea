"""Pricing data structures and the provider pricing table.

The table maps provider names to per-model text rates (USD per 1,000
tokens) and an optional flat per-image rate. It is loaded once from YAML
and never mutated afterwards.
"""

import threading
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .config_paths import get_pricing_path
from .config_result import ConfigResult
from .errors import InvalidConfigFormatError
from .logging import LogEvent, log_debug, log_error, log_warning


@dataclass(frozen=True)
class ModelPricing:
    """Text generation rates for one model."""

    input_per_1k: float
    output_per_1k: float

    def __post_init__(self) -> None:
        if self.input_per_1k < 0:
            raise ValueError("input_per_1k must be non-negative")
        if self.output_per_1k < 0:
            raise ValueError("output_per_1k must be non-negative")


@dataclass(frozen=True)
class ImagePricing:
    """Flat rate for a provider's image generation model."""

    name: str
    per_image: float

    def __post_init__(self) -> None:
        if self.per_image < 0:
            raise ValueError("per_image must be non-negative")


@dataclass(frozen=True)
class ProviderPricing:
    """All rates published for one provider."""

    name: str
    models: Mapping[str, ModelPricing] = field(default_factory=dict)
    image_model: Optional[ImagePricing] = None

    @property
    def supports_images(self) -> bool:
        """Whether the provider can generate images."""
        return self.image_model is not None


def _parse_provider(name: str, block: Any) -> Optional[ProviderPricing]:
    if not isinstance(block, dict):
        log_warning(
            LogEvent.PRICING,
            f"Ignoring provider '{name}': expected mapping, got {type(block).__name__}",
            provider=name,
        )
        return None

    models_block = block.get("models") or {}
    if not isinstance(models_block, dict):
        log_warning(
            LogEvent.PRICING,
            f"Ignoring models for provider '{name}': expected mapping, got {type(models_block).__name__}",
            provider=name,
        )
        models_block = {}

    models: Dict[str, ModelPricing] = {}
    for model_name, rates in models_block.items():
        try:
            models[str(model_name)] = ModelPricing(
                input_per_1k=float(rates.get("input_per_1k", 0.0)),
                output_per_1k=float(rates.get("output_per_1k", 0.0)),
            )
        except (AttributeError, TypeError, ValueError) as e:
            log_warning(
                LogEvent.PRICING,
                "Invalid model pricing ignored",
                provider=name,
                model=model_name,
                error=str(e),
            )

    image_model: Optional[ImagePricing] = None
    image_block = block.get("image_model")
    if image_block is not None:
        try:
            image_model = ImagePricing(
                name=str(image_block.get("name", "")),
                per_image=float(image_block["per_image"]),
            )
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            log_warning(
                LogEvent.PRICING,
                "Invalid image pricing ignored",
                provider=name,
                error=str(e),
            )

    return ProviderPricing(name=name, models=MappingProxyType(models), image_model=image_model)


class PricingTable:
    """Immutable provider → model pricing lookup."""

    _default_instance: Optional["PricingTable"] = None
    _instance_lock = threading.RLock()

    def __init__(self, providers: Mapping[str, ProviderPricing], currency: str = "USD", source: Optional[str] = None):
        """Initialize the table.

        Args:
            providers: Provider pricing keyed by lower-case provider name
            currency: ISO currency code all rates are expressed in
            source: Path the table was loaded from, if any
        """
        self._providers = MappingProxyType({k.lower(): v for k, v in providers.items()})
        self.currency = currency
        self.source = source

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source: Optional[str] = None) -> "PricingTable":
        """Build a table from parsed YAML data.

        Args:
            data: Mapping with a top-level ``providers`` key
            source: Optional path for diagnostics

        Raises:
            InvalidConfigFormatError: If ``providers`` is not a mapping
        """
        providers_block = data.get("providers")
        if not isinstance(providers_block, dict):
            raise InvalidConfigFormatError(
                "Pricing configuration must contain a 'providers' mapping",
                path=source,
            )

        providers: Dict[str, ProviderPricing] = {}
        for name, block in providers_block.items():
            parsed = _parse_provider(str(name).lower(), block)
            if parsed is not None:
                providers[parsed.name] = parsed

        return cls(providers, currency=str(data.get("currency", "USD")), source=source)

    @staticmethod
    def read_config(path: str) -> ConfigResult:
        """Read and parse a pricing YAML file without raising."""
        try:
            content = Path(path).read_text(encoding="utf-8")
        except FileNotFoundError as e:
            return ConfigResult.failure(f"Pricing file not found: {path}", path, e)
        except OSError as e:
            return ConfigResult.failure(f"Could not read pricing file: {e}", path, e)

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            return ConfigResult.failure(f"YAML parsing error in {path}: {e}", path, e)

        if not isinstance(data, dict):
            return ConfigResult.failure(f"Invalid pricing format: expected dictionary, got {type(data).__name__}", path)
        return ConfigResult(success=True, data=data, path=path)

    @classmethod
    def load(cls, path: Optional[str] = None) -> "PricingTable":
        """Load a pricing table from YAML.

        Args:
            path: File to load; defaults to :func:`get_pricing_path`

        Raises:
            ConfigFileNotFoundError: If the file does not exist
            InvalidConfigFormatError: If the file cannot be parsed
        """
        path = path or get_pricing_path()
        result = cls.read_config(path)
        if not result.success:
            log_error(LogEvent.PRICING, result.error or "Failed to load pricing", path=path)

        table = cls.from_dict(result.raise_for_error(), source=path)
        log_debug(LogEvent.PRICING, "Loaded pricing table", path=path, providers=table.list_providers())
        return table

    @classmethod
    def get_default(cls) -> "PricingTable":
        """Get the process-wide pricing table, loading it on first use."""
        with cls._instance_lock:
            if cls._default_instance is None:
                cls._default_instance = cls.load()
            return cls._default_instance

    def get_provider(self, provider: str) -> Optional[ProviderPricing]:
        """Return a provider's pricing or None."""
        return self._providers.get((provider or "").lower())

    def get_model_pricing(self, provider: str, model: str) -> Optional[ModelPricing]:
        """Return text rates for ``provider``/``model`` or None if unknown."""
        provider_pricing = self.get_provider(provider)
        if provider_pricing is None:
            return None
        return provider_pricing.models.get(model)

    def get_image_pricing(self, provider: str) -> Optional[ImagePricing]:
        """Return the provider's image rate or None if it has no image model."""
        provider_pricing = self.get_provider(provider)
        if provider_pricing is None:
            return None
        return provider_pricing.image_model

    def list_providers(self) -> List[str]:
        """List provider names in sorted order."""
        return sorted(self._providers)

    def list_models(self, provider: str) -> List[str]:
        """List text model names for a provider."""
        provider_pricing = self.get_provider(provider)
        if provider_pricing is None:
            return []
        return sorted(provider_pricing.models)

    def to_dict(self) -> Dict[str, Any]:
        """Dump the table in its YAML shape."""
        providers: Dict[str, Any] = {}
        for name, provider_pricing in sorted(self._providers.items()):
            block: Dict[str, Any] = {
                "models": {
                    model: {"input_per_1k": rates.input_per_1k, "output_per_1k": rates.output_per_1k}
                    for model, rates in sorted(provider_pricing.models.items())
                }
            }
            if provider_pricing.image_model is not None:
                block["image_model"] = {
                    "name": provider_pricing.image_model.name,
                    "per_image": provider_pricing.image_model.per_image,
                }
            providers[name] = block
        return {"currency": self.currency, "providers": providers}


def get_pricing_table() -> PricingTable:
    """Get the default pricing table (thread-safe singleton)."""
    return PricingTable.get_default()
