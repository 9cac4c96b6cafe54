"""Tests for the attribute capability table."""

from __future__ import annotations

import dataclasses

from pydantic import SecretStr

from reeve.repository import RepositoryDesired, RepositoryType
from reeve.repository.schema import (
    REPOSITORY_ATTRIBUTES,
    AttributeKind,
    declared_attributes,
    foreign_attributes,
    replacement_attributes,
)


def test_every_declared_attribute_requires_replacement() -> None:
    """Every declared attribute forces replacement when changed."""
    assert all(spec.replace_on_change for spec in declared_attributes())


def test_computed_attributes() -> None:
    """Computed attributes are listed in table order."""
    computed = [
        spec.name
        for spec in REPOSITORY_ATTRIBUTES
        if spec.kind is AttributeKind.COMPUTED
    ]

    assert computed == ["repository_id", "workspace_id", "id"]


def test_only_password_is_sensitive() -> None:
    """remote_password is the only sensitive attribute."""
    assert [spec.name for spec in REPOSITORY_ATTRIBUTES if spec.sensitive] == [
        "remote_password"
    ]


def test_declared_attributes_match_desired_record() -> None:
    """The declared attributes mirror the RepositoryDesired fields."""
    names = {spec.name for spec in declared_attributes()}

    assert names == set(RepositoryDesired.__dataclass_fields__)


def test_foreign_attributes_per_variant() -> None:
    """Foreign attributes are those other variants own."""
    local = {spec.name for spec in foreign_attributes(RepositoryType.LOCAL)}
    virtual = {spec.name for spec in foreign_attributes(RepositoryType.VIRTUAL)}

    assert "remote_url" in local
    assert "child_repository_ids" in local
    assert "remote_password" in virtual
    assert "child_repository_ids" not in virtual


def test_replacement_attributes_compares_secrets_by_value() -> None:
    """Equal passwords in distinct SecretStr objects need no replacement."""
    prior = RepositoryDesired(
        name="p",
        workspace="w",
        repository_type="remote",
        remote_password=SecretStr("a"),
    )
    same = dataclasses.replace(prior, remote_password=SecretStr("a"))

    assert replacement_attributes(prior, same) == ()
