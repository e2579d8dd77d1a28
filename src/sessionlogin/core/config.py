# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Layered YAML configuration bound to dataclass properties."""

from __future__ import annotations

import dataclasses
import importlib.resources
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar, get_type_hints

import yaml  # type: ignore[import-untyped]

T = TypeVar("T")

_PREFIX_ATTR = "__sessionlogin_config_prefix__"
_ROOT_KEY = "sessionlogin"
_ENV_PREFIX = "SESSIONLOGIN_"
_BUNDLED_PACKAGE = "sessionlogin.resources"


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Mark a dataclass as bound to the configuration section at *prefix*.

    Usage:
        @config_properties(prefix="sessionlogin.server")
        @dataclass
        class ServerProperties:
            port: int = 3000
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _PREFIX_ATTR, prefix)
        return cls

    return decorator


def env_key_for(key: str) -> str:
    """Return the environment variable that overrides *key*.

    ``sessionlogin.session.cookie-name`` -> ``SESSIONLOGIN_SESSION_COOKIE_NAME``
    """
    base = key.removeprefix(f"{_ROOT_KEY}.")
    return _ENV_PREFIX + base.upper().replace(".", "_").replace("-", "_")


class Config:
    """Merged configuration tree with dot-notation access.

    Environment variables named by :func:`env_key_for` take precedence over
    every file; dataclass defaults apply to keys no source sets.
    """

    def __init__(self, data: dict[str, Any] | None = None, sources: list[str] | None = None) -> None:
        self._data: dict[str, Any] = data or {}
        self._sources = list(sources or [])

    @property
    def loaded_sources(self) -> list[str]:
        """Files merged into this configuration, lowest precedence first."""
        return list(self._sources)

    @classmethod
    def from_sources(cls, base_dir: str | Path, active_profiles: list[str] | None = None) -> Config:
        """Merge bundled and project YAML files, later ones winning.

        1. ``sessionlogin-defaults.yaml`` bundled with the package
        2. ``sessionlogin.yaml`` in *base_dir*
        3. per active profile: the bundled ``sessionlogin-{profile}.yaml``,
           then the one in *base_dir*
        """
        base_dir = Path(base_dir)
        data: dict[str, Any] = {}
        sources: list[str] = []

        def merge(document: dict[str, Any] | None, label: str) -> None:
            nonlocal data
            if document is not None:
                data = _deep_merge(data, document)
                sources.append(label)

        merge(_read_bundled("sessionlogin-defaults.yaml"), "sessionlogin-defaults.yaml (bundled defaults)")
        merge(_read_file(base_dir / "sessionlogin.yaml"), str(base_dir / "sessionlogin.yaml"))
        for profile in active_profiles or []:
            name = f"sessionlogin-{profile}.yaml"
            merge(_read_bundled(name), f"{name} (bundled profile: {profile})")
            merge(_read_file(base_dir / name), f"{base_dir / name} (profile: {profile})")

        return cls(data, sources)

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value at dot-notation *key*, preferring its environment override."""
        env_value = os.environ.get(env_key_for(key))
        if env_value is not None:
            return env_value
        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, dict) or current.get(part) is None:
                return default
            current = current[part]
        return current

    def get_section(self, prefix: str) -> dict[str, Any]:
        """Return the mapping at *prefix*, or an empty dict."""
        section = self.get(prefix)
        return section if isinstance(section, dict) else {}

    def bind(self, config_cls: type[T]) -> T:
        """Build a ``@config_properties`` dataclass from its section."""
        prefix = getattr(config_cls, _PREFIX_ATTR, None)
        if prefix is None:
            raise ValueError(f"{config_cls.__name__} is not decorated with @config_properties")
        return self._bind_dataclass(config_cls, prefix)

    def _bind_dataclass(self, config_cls: type[T], prefix: str) -> T:
        """Keys may use ``-`` or ``_``; nested dataclass fields bind from nested sections."""
        section = {k.replace("-", "_"): v for k, v in self.get_section(prefix).items()}
        hints = get_type_hints(config_cls)
        kwargs: dict[str, Any] = {}
        for field in dataclasses.fields(config_cls):  # type: ignore[arg-type]
            expected_type = hints.get(field.name)
            key = f"{prefix}.{field.name.replace('_', '-')}"

            if isinstance(expected_type, type) and dataclasses.is_dataclass(expected_type):
                kwargs[field.name] = self._bind_dataclass(expected_type, key)
                continue

            value = os.environ.get(env_key_for(key), section.get(field.name))
            if value is not None:
                kwargs[field.name] = _coerce(value, expected_type, key)

        return config_cls(**kwargs)


def _read_file(path: Path) -> dict[str, Any] | None:
    if not path.is_file():
        return None
    return yaml.safe_load(path.read_text(encoding="utf-8")) or {}


def _read_bundled(name: str) -> dict[str, Any] | None:
    resource = importlib.resources.files(_BUNDLED_PACKAGE).joinpath(name)
    if not resource.is_file():
        return None
    return yaml.safe_load(resource.read_text(encoding="utf-8")) or {}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _coerce(value: Any, expected_type: Any, key: str) -> Any:
    """Convert string values (environment overrides) to ``int``/``float``/``bool`` fields."""
    if not isinstance(value, str):
        return value
    try:
        if expected_type is int:
            return int(value)
        if expected_type is float:
            return float(value)
    except ValueError as exc:
        raise ValueError(f"Invalid value for '{key}': {value!r}") from exc
    if expected_type is bool:
        return value.lower() in ("true", "1", "yes")
    return value
