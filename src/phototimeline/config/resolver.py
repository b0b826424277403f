"""Merging of configuration layers."""

from __future__ import annotations

from collections.abc import Mapping
from copy import deepcopy
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from .exceptions import ConfigError
from .models import TimelineConfig

ENV_PREFIX = "PHOTOTIMELINE__"


def resolve_with_precedence(
    *,
    defaults: TimelineConfig,
    file_overrides: Optional[Mapping[str, Any]] = None,
    env_overrides: Optional[Mapping[str, Any]] = None,
    cli_overrides: Optional[Mapping[str, Any]] = None,
) -> TimelineConfig:
    """Validate ``defaults`` with each override layer applied on top.

    Layers are applied file, then environment, then CLI, so later layers win.
    Keys may be nested mappings or dotted paths such as
    ``organization.date_format``.

    Raises:
        ConfigError: If a layer is malformed or the merged values fail validation.
    """
    data = defaults.model_dump(mode="python")
    layers = (("file", file_overrides), ("environment", env_overrides), ("cli", cli_overrides))
    for origin, layer in layers:
        if layer is not None:
            data = merge_layer(data, expand_dotted(layer, origin=origin))

    try:
        return TimelineConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration values: {exc}") from exc


def expand_dotted(layer: Mapping[str, Any], *, origin: str = "override") -> dict[str, Any]:
    """Return ``layer`` with dotted keys turned into nested sections."""
    if not isinstance(layer, Mapping):
        raise ConfigError(f"{origin} overrides must be a mapping, not {type(layer).__name__}")

    expanded: dict[str, Any] = {}
    for key, value in layer.items():
        if not isinstance(key, str):
            raise ConfigError(f"{origin} override keys must be strings, got {key!r}")
        if isinstance(value, Mapping):
            value = expand_dotted(value, origin=origin)
        set_dotted(expanded, key, value, origin=origin)
    return expanded


def set_dotted(target: dict[str, Any], key: str, value: Any, *, origin: str = "override") -> None:
    """Store ``value`` at the dotted ``key`` in ``target``, creating sections on the way.

    Raises:
        ConfigError: If ``key`` has an empty segment or runs through a non-mapping value.
    """
    segments = [segment.strip() for segment in key.split(".")]
    if not all(segments):
        raise ConfigError(
            f"Malformed {origin} key {key!r}; use a dotted path like scan.include_hidden"
        )

    node = target
    for segment in segments[:-1]:
        child = node.get(segment)
        if child is None:
            child = node[segment] = {}
        elif not isinstance(child, dict):
            raise ConfigError(
                f"{origin} key {key!r} runs through {segment!r}, which is not a section"
            )
        node = child

    leaf = segments[-1]
    if isinstance(value, Mapping) and isinstance(node.get(leaf), Mapping):
        node[leaf] = merge_layer(node[leaf], value)
    else:
        node[leaf] = value


def merge_layer(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Return a deep copy of ``base`` with ``overrides`` merged in section by section."""
    merged = deepcopy(dict(base))
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            merged[key] = merge_layer(current, value)
        else:
            merged[key] = deepcopy(value)
    return merged


def parse_env(env: Mapping[str, str]) -> dict[str, Any]:
    """Collect ``PHOTOTIMELINE__SECTION__KEY`` variables into a nested layer.

    Values are read as YAML scalars so ``false`` and ``64`` arrive typed; text
    that is not valid YAML is kept verbatim.
    """
    layer: dict[str, Any] = {}
    for name, raw in env.items():
        if not name.startswith(ENV_PREFIX):
            continue
        segments = [segment.lower() for segment in name[len(ENV_PREFIX) :].split("__") if segment]
        if not segments:
            continue
        try:
            value: Any = yaml.safe_load(raw)
        except yaml.YAMLError:
            value = raw
        set_dotted(layer, ".".join(segments), value, origin="environment")
    return layer


def flatten_for_env(config: TimelineConfig) -> Dict[str, str]:
    """Render every setting as the environment variable that would override it."""
    flat: Dict[str, str] = {}
    for section, values in config.model_dump(mode="python").items():
        for key, value in values.items():
            name = f"{ENV_PREFIX}{section.upper()}__{key.upper()}"
            flat[name] = "null" if value is None else str(value)
    return flat


__all__ = [
    "ENV_PREFIX",
    "expand_dotted",
    "flatten_for_env",
    "merge_layer",
    "parse_env",
    "resolve_with_precedence",
    "set_dotted",
]
