"""Centralized configuration management."""

import codecs
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from .exceptions import ConfigError

# Resolve project root (tee-secure/) from this module's location
# bin/tee_secure/config.py -> .parent=tee_secure/ -> .parent=bin/ -> .parent=tee-secure/
_PROJECT_DIR = Path(__file__).resolve().parent.parent.parent  # tee-secure/


@dataclass
class Config:
    """Centralized configuration management"""
    encoding: Optional[str] = None  # Text mode encoding (None = TEE_SECURE_ENCODING, fallback: utf-8)
    errors: str = "surrogateescape"  # Codec error handler for text mode
    max_length: Optional[int] = None  # Largest accepted input in bytes (None = TEE_SECURE_MAX_LENGTH, fallback: unlimited)
    terminated: bool = False  # Treat input as a NUL-terminated buffer
    testcases_dir: str = "tests/testcases"

    def __post_init__(self):
        if self.encoding is None:
            self.encoding = os.environ.get('TEE_SECURE_ENCODING', 'utf-8')
        if self.max_length is None:
            env_value = os.environ.get('TEE_SECURE_MAX_LENGTH')
            if env_value:
                self.max_length = _parse_max_length(env_value, 'TEE_SECURE_MAX_LENGTH')
        elif not isinstance(self.max_length, int) or isinstance(self.max_length, bool) or self.max_length < 0:
            raise ConfigError(f"max_length must be a non-negative integer, got {self.max_length!r}")

        if not isinstance(self.encoding, str):
            raise ConfigError(f"encoding must be a string, got {self.encoding!r}")
        try:
            codecs.lookup(self.encoding)
        except LookupError:
            raise ConfigError(f"unknown encoding: {self.encoding}")
        if not isinstance(self.errors, str):
            raise ConfigError(f"errors must be a string, got {self.errors!r}")
        try:
            codecs.lookup_error(self.errors)
        except LookupError:
            raise ConfigError(f"unknown codec error handler: {self.errors}")
        if not isinstance(self.terminated, bool):
            raise ConfigError(f"terminated must be true or false, got {self.terminated!r}")
        if not isinstance(self.testcases_dir, str):
            raise ConfigError(f"testcases_dir must be a string, got {self.testcases_dir!r}")

        # Resolve relative paths against project root (tee-secure/)
        if not os.path.isabs(self.testcases_dir):
            self.testcases_dir = str(_PROJECT_DIR / self.testcases_dir)


def _parse_max_length(value: str, source: str) -> int:
    try:
        parsed = int(value)
    except ValueError:
        raise ConfigError(f"{source} must be an integer, got {value!r}")
    if parsed < 0:
        raise ConfigError(f"{source} must be non-negative, got {parsed}")
    return parsed


def load_config(path: Optional[Path] = None, **overrides: Any) -> Config:
    """Build a Config from a YAML file, then apply keyword overrides.

    A missing file yields the defaults. Overrides whose value is None are
    ignored so argparse namespaces can be passed through unchanged.
    """
    values: dict[str, Any] = {}
    if path is not None and path.exists():
        try:
            loaded: Any = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid YAML in {path}: {e}")
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigError(f"config file must contain a mapping: {path}")
        known = {f.name for f in fields(Config)}
        unknown = sorted(str(k) for k in loaded if k not in known)
        if unknown:
            raise ConfigError(f"unknown config keys in {path}: {', '.join(unknown)}")
        values.update(loaded)

    values.update({k: v for k, v in overrides.items() if v is not None})
    return Config(**values)
