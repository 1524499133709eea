"""Shared fixtures for the test suite."""

from pathlib import Path
from typing import Generator

import pytest
import yaml

from ebookai.config_paths import ENV_PRICING_PATH, PRICING_FILENAME, get_package_config_dir
from ebookai.logging import set_log_callback
from ebookai.pricing import PricingTable


@pytest.fixture(autouse=True)
def bundled_pricing(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Pin the default pricing table to the bundled file for every test."""
    monkeypatch.setenv(ENV_PRICING_PATH, str(get_package_config_dir() / PRICING_FILENAME))
    PricingTable._default_instance = None
    yield
    PricingTable._default_instance = None
    set_log_callback(None)


@pytest.fixture
def pricing_table() -> PricingTable:
    """Pricing table with the rates used throughout the examples."""
    return PricingTable.from_dict(
        {
            "currency": "USD",
            "providers": {
                "openai": {
                    "models": {
                        "gpt-4": {"input_per_1k": 0.03, "output_per_1k": 0.06},
                        "gpt-3.5-turbo": {"input_per_1k": 0.0015, "output_per_1k": 0.002},
                    },
                    "image_model": {"name": "dall-e-3", "per_image": 0.04},
                },
                "anthropic": {
                    "models": {
                        "claude-3-haiku": {"input_per_1k": 0.00025, "output_per_1k": 0.00125},
                    },
                },
            },
        }
    )


@pytest.fixture
def pricing_file(tmp_path: Path) -> Path:
    """A small custom pricing YAML file."""
    path = tmp_path / "pricing.yml"
    path.write_text(
        yaml.dump(
            {
                "version": "1.0.0",
                "providers": {
                    "acme": {
                        "models": {"writer-1": {"input_per_1k": 0.01, "output_per_1k": 0.02}},
                        "image_model": {"name": "painter-1", "per_image": 0.5},
                    }
                },
            }
        )
    )
    return path
