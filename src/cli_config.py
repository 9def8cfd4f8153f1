"""Configuration file overrides for runtime tunables (registry URLs, timeouts, retries).

Values from the file are applied onto ``Constants`` before any command runs.
Unknown keys and invalid values are reported and skipped; only an unreadable
or unparsable file is treated as an error.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Callable, Dict, Optional, Tuple

import yaml

from constants import Constants

logger = logging.getLogger(__name__)


def _positive_int(value: Any) -> int:
    number = int(value)
    if number < 0:
        raise ValueError(f"expected a non-negative integer, got {value!r}")
    return number


def _url(value: Any) -> str:
    text = str(value).strip()
    if not text.startswith(("http://", "https://")):
        raise ValueError(f"expected an http(s) URL, got {value!r}")
    return text


def _base_url(value: Any) -> str:
    text = _url(value)
    return text if text.endswith("/") else f"{text}/"


# (section, key) -> (Constants attribute, coercion)
CONFIG_KEYS: Dict[Tuple[str, str], Tuple[str, Callable[[Any], Any]]] = {
    ("nuget", "service_index"): ("REGISTRY_URL_NUGET_V3", _url),
    ("nuget", "flat_container"): ("REGISTRY_URL_NUGET_FLATCONTAINER", _base_url),
    ("nuget", "gallery_package_url"): ("GALLERY_URL_NUGET_PACKAGE", _base_url),
    ("http", "request_timeout"): ("REQUEST_TIMEOUT", _positive_int),
    ("retry", "max_retries"): ("MAX_RETRIES", _positive_int),
    ("retry", "throttle_backoff_base_sec"): ("THROTTLE_BACKOFF_BASE_SEC", _positive_int),
    ("retry", "transient_backoff_base_sec"): ("TRANSIENT_BACKOFF_BASE_SEC", _positive_int),
    ("retry", "max_wait_sec"): ("MAX_RETRY_WAIT_SEC", _positive_int),
}


def load_config_file(path: str) -> Optional[Dict[str, Any]]:
    """Load a YAML or JSON configuration file.

    Returns:
        The parsed mapping, or None when the file cannot be read or parsed.
    """
    try:
        with open(path, "r", encoding="utf-8") as fh:
            if os.path.splitext(path)[1].lower() == ".json":
                data = json.load(fh)
            else:
                data = yaml.safe_load(fh) or {}
    except FileNotFoundError:
        logger.error("Config file not found: %s", path)
        return None
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        logger.error("Failed to load config: %s", e)
        return None
    if not isinstance(data, dict):
        logger.error("Config file %s must contain a mapping at the top level", path)
        return None
    return data


def apply_config(data: Dict[str, Any]) -> None:
    """Apply a parsed configuration mapping onto ``Constants``."""
    for section, values in data.items():
        if not isinstance(values, dict):
            logger.warning("Ignoring config section %r: expected a mapping", section)
            continue
        for key, raw in values.items():
            target = CONFIG_KEYS.get((section, key))
            if target is None:
                logger.warning("Ignoring unknown config key %s.%s", section, key)
                continue
            attr, coerce = target
            try:
                setattr(Constants, attr, coerce(raw))
            except (TypeError, ValueError) as e:
                logger.warning("Ignoring invalid value for %s.%s: %s", section, key, e)
                continue
            logger.debug("Config override %s.%s applied", section, key)


def apply_config_file(path: str) -> bool:
    """Load ``path`` and apply it; return False if the file was unusable."""
    data = load_config_file(path)
    if data is None:
        return False
    apply_config(data)
    return True
