"""Where the pricing table is read from.

Lookup order for ``pricing.yml``:

1. the file named by ``EBOOKAI_PRICING_PATH``, if it exists
2. the user config directory (``platformdirs.user_config_dir("ebookai")``)
3. the copy bundled with the package
"""

import os
from pathlib import Path
from typing import Tuple

import platformdirs

APP_NAME = "ebookai"

ENV_PRICING_PATH = "EBOOKAI_PRICING_PATH"

PRICING_FILENAME = "pricing.yml"

SOURCE_ENV = f"Environment variable ({ENV_PRICING_PATH})"
SOURCE_USER = "User config directory"
SOURCE_BUNDLED = "Bundled package data"


def get_package_config_dir() -> Path:
    """Directory holding the bundled pricing file."""
    return Path(__file__).parent / "config"


def get_user_config_dir() -> Path:
    """Per-user config directory for the toolkit."""
    return Path(platformdirs.user_config_dir(APP_NAME))


def ensure_user_config_dir_exists() -> Path:
    """Create the user config directory if needed and return it.

    Raises:
        PermissionError: If the directory exists but is not writable
    """
    user_dir = get_user_config_dir()
    if user_dir.exists() and not os.access(user_dir, os.W_OK):
        raise PermissionError(f"Config directory exists but is not writable: {user_dir}")
    user_dir.mkdir(parents=True, exist_ok=True)
    return user_dir


def copy_default_to_user_config(filename: str = PRICING_FILENAME) -> bool:
    """Seed the user config directory with a bundled file.

    An existing user file is never overwritten, so local rate edits survive
    upgrades.

    Returns:
        True if the file was copied
    """
    bundled = get_package_config_dir() / filename
    target = get_user_config_dir() / filename
    if target.exists() or not bundled.exists():
        return False

    ensure_user_config_dir_exists()
    target.write_bytes(bundled.read_bytes())
    return True


def _resolve_pricing() -> Tuple[str, str]:
    env_path = os.environ.get(ENV_PRICING_PATH)
    if env_path and Path(env_path).is_file():
        return env_path, SOURCE_ENV

    user_path = get_user_config_dir() / PRICING_FILENAME
    if user_path.is_file():
        return str(user_path), SOURCE_USER

    return str(get_package_config_dir() / PRICING_FILENAME), SOURCE_BUNDLED


def get_pricing_path() -> str:
    """Path of the pricing file currently in effect."""
    return _resolve_pricing()[0]


def get_pricing_path_source() -> str:
    """Describe which lookup step :func:`get_pricing_path` resolved to."""
    return _resolve_pricing()[1]
