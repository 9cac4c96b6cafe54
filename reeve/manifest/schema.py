"""JSON Schema generation for manifest repository entries."""

from __future__ import annotations

import json
import typing as typ
from pathlib import Path  # noqa: TC003

import msgspec

from reeve.repository.schema import REPOSITORY_ATTRIBUTES, AttributeKind

from .models import Manifest

SCHEMA_ID = "https://reeve.example/schemas/manifest.json"


def _annotate_repository(definition: dict[str, typ.Any]) -> None:
    properties = definition.setdefault("properties", {})
    for spec in REPOSITORY_ATTRIBUTES:
        if spec.kind is AttributeKind.COMPUTED:
            continue
        prop = properties.get(spec.name)
        if prop is None:
            continue
        prop["description"] = spec.description
        prop["x-replace-on-change"] = spec.replace_on_change
        if spec.sensitive:
            prop["x-sensitive"] = True
        if spec.variants is not None:
            prop["x-variants"] = sorted(str(variant) for variant in spec.variants)


def build_manifest_schema() -> dict[str, typ.Any]:
    """Build the JSON Schema for manifests.

    Repository properties are annotated with the capability table:
    ``x-replace-on-change`` on every declared attribute, ``x-sensitive`` on
    secrets and ``x-variants`` on variant-specific attributes. Computed
    attributes are listed under ``x-computed``.

    Returns
    -------
    dict[str, Any]
        JSON Schema with ``$id`` set to ``SCHEMA_ID``.

    """
    schema = msgspec.json.schema(Manifest)
    definitions = schema.get("$defs", {})
    repository = definitions.get("RepositoryEntry")
    if repository is not None:
        _annotate_repository(repository)
        repository["x-computed"] = [
            spec.name
            for spec in REPOSITORY_ATTRIBUTES
            if spec.kind is AttributeKind.COMPUTED
        ]
    schema["$id"] = SCHEMA_ID
    return schema


def write_manifest_schema(path: Path) -> Path:
    """Persist the generated JSON Schema, creating parent directories."""
    schema = build_manifest_schema()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(schema, indent=2), encoding="utf-8")
    return path
