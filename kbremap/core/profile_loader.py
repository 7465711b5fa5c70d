"""Profile loading and validation for YAML-based kbremap profiles."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Any

import yaml
from jsonschema import ValidationError, validators

from kbremap.core.errors import (
    KbRemapError,
    LiteralParseError,
    ProfileLoadError,
    ProfileValidationError,
)
from kbremap.core.literal import parse_literal
from kbremap.core.mapping import parse_mappings
from kbremap.core.model import DeviceFilters, Profile

LOGGER = logging.getLogger(__name__)


class UniqueKeyLoader(yaml.SafeLoader):
    """YAML loader that rejects duplicate mapping keys."""


UniqueKeyLoader.yaml_implicit_resolvers = {
    key: list(value) for key, value in yaml.SafeLoader.yaml_implicit_resolvers.items()
}

for first_char, mappings in list(UniqueKeyLoader.yaml_implicit_resolvers.items()):
    UniqueKeyLoader.yaml_implicit_resolvers[first_char] = [
        (tag, regexp)
        for tag, regexp in mappings
        if tag != "tag:yaml.org,2002:bool"
    ]


def _construct_mapping(loader: UniqueKeyLoader, node: yaml.Node, deep: bool = False) -> dict[str, Any]:
    mapping: dict[str, Any] = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=deep)
        if key in mapping:
            raise ProfileValidationError(f"Duplicate key '{key}' in YAML document")
        mapping[key] = loader.construct_object(value_node, deep=deep)
    return mapping


UniqueKeyLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG,
    _construct_mapping,
)


@dataclass(frozen=True)
class LoadedProfiles:
    profiles: dict[str, Profile]
    warnings: tuple[str, ...]


def _load_schema_validator() -> Any:
    schema_text = resources.files("kbremap.schemas").joinpath("profile.schema.json").read_text(
        encoding="utf-8"
    )
    schema = json.loads(schema_text)
    validator_cls = validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def _profile_dirs() -> tuple[Path, Path]:
    xdg_config = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    xdg_data = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local/share"))
    return xdg_config / "kbremap/profiles", xdg_data / "kbremap/profiles"


def _read_yaml(path: Path | Traversable) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ProfileLoadError(f"Could not read profile file {path}: {exc}") from exc

    try:
        loaded = yaml.load(content, Loader=UniqueKeyLoader)
    except yaml.YAMLError as exc:
        raise ProfileValidationError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ProfileValidationError(f"Profile file {path} must contain a mapping at root")
    return loaded


def _normalize_id(value: str | int | None, *, context: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, int):
        if value < 0:
            raise ProfileValidationError(f"{context} must not be negative")
        return value
    try:
        return parse_literal(value.strip())
    except LiteralParseError as exc:
        raise ProfileValidationError(f"{context}: {exc}") from exc


def _normalize_tokens(tokens: list[str], *, context: str) -> tuple[str, ...]:
    normalized = []
    for index, token in enumerate(tokens):
        token = token.strip()
        try:
            parse_mappings(token)
        except KbRemapError as exc:
            raise ProfileValidationError(f"{context}[{index}]: {exc}") from exc
        normalized.append(token)
    return tuple(normalized)


def _build_profile(doc: dict[str, Any], source: Path | Traversable) -> Profile:
    validator = _load_schema_validator()
    try:
        validator.validate(doc)
    except ValidationError as exc:
        path = ".".join(str(p) for p in exc.path)
        where = f" ({path})" if path else ""
        raise ProfileValidationError(f"Schema validation failed for {source}{where}: {exc.message}") from exc

    device = doc.get("device", {})
    filters = DeviceFilters(
        name=device.get("name"),
        vendor_id=_normalize_id(device.get("vendor_id"), context=f"{doc['id']}.device.vendor_id"),
        product_id=_normalize_id(device.get("product_id"), context=f"{doc['id']}.device.product_id"),
    )

    return Profile(
        id=doc["id"],
        name=doc["name"],
        description=doc.get("description", ""),
        filters=filters,
        maps=_normalize_tokens(doc.get("maps", []), context=f"{doc['id']}.maps"),
        swaps=_normalize_tokens(doc.get("swaps", []), context=f"{doc['id']}.swaps"),
    )


def _iter_packaged_profile_paths() -> list[Traversable]:
    profile_root = resources.files("kbremap.profiles")
    return [item for item in profile_root.iterdir() if item.name.endswith((".yml", ".yaml"))]


def _iter_user_profile_paths() -> list[Path]:
    paths: list[Path] = []
    for directory in _profile_dirs():
        if not directory.exists() or not directory.is_dir():
            continue
        paths.extend(sorted(p for p in directory.iterdir() if p.suffix in {".yml", ".yaml"}))
    return paths


def load_profiles() -> LoadedProfiles:
    profiles: dict[str, Profile] = {}
    warnings: list[str] = []

    for path in sorted(_iter_packaged_profile_paths(), key=lambda p: p.name):
        doc = _read_yaml(path)
        profile = _build_profile(doc, path)
        profiles[profile.id] = profile

    for path in _iter_user_profile_paths():
        doc = _read_yaml(path)
        profile = _build_profile(doc, path)
        if profile.id in profiles:
            warning = f"User profile '{profile.id}' overrides packaged profile"
            LOGGER.warning(warning)
            warnings.append(warning)
        profiles[profile.id] = profile

    return LoadedProfiles(profiles=profiles, warnings=tuple(warnings))
