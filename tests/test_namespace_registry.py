"""Tests for the namespace registry."""

import os
from pathlib import Path

import pytest

from classloader.exceptions import DirectoryNotFoundError
from classloader.namespace_registry import NamespaceRegistry


def test_register_appends_directories(tmp_path: Path) -> None:
    """Verify that registering a prefix twice appends to its list."""
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()

    registry = NamespaceRegistry()
    registry.register("Acme", first)
    registry.register("Acme", second)

    assert registry.namespaces == {"Acme": [str(first), str(second)]}


def test_register_missing_directory_leaves_registry_unchanged(tmp_path: Path) -> None:
    """Verify that a missing directory is rejected without side effects."""
    existing = tmp_path / "existing"
    existing.mkdir()
    registry = NamespaceRegistry()
    registry.register("Acme", existing)

    with pytest.raises(DirectoryNotFoundError):
        registry.register("Acme", tmp_path / "missing")

    assert registry.candidate_directories("Acme") == [str(existing)]


def test_register_many_continues_after_failure(tmp_path: Path) -> None:
    """Verify that one failing pair does not abort the batch."""
    good = tmp_path / "good"
    good.mkdir()
    registry = NamespaceRegistry()

    results = registry.register_many(
        {"Broken": str(tmp_path / "missing"), "Acme": str(good)}
    )

    assert results == {"Broken": False, "Acme": True}
    assert "Broken" not in registry.namespaces
    assert registry.namespaces["Acme"] == [str(good)]


def test_register_many_accepts_lists(tmp_path: Path) -> None:
    """Verify that several directories can be given for one prefix."""
    a = tmp_path / "a"
    b = tmp_path / "b"
    a.mkdir()
    b.mkdir()
    registry = NamespaceRegistry()
    assert registry.register_many({"Acme": [str(a), str(b)]}) == {"Acme": True}
    assert registry.namespaces["Acme"] == [str(a), str(b)]


def test_candidate_directories_match_on_segment_boundaries(tmp_path: Path) -> None:
    """Verify prefix matching by whole segments, in registration order."""
    acme = tmp_path / "acme"
    util = tmp_path / "util"
    corp = tmp_path / "corp"
    for d in (acme, util, corp):
        d.mkdir()

    registry = NamespaceRegistry()
    registry.register("Acme.Util", util)
    registry.register("Acme", acme)
    registry.register("AcmeCorp", corp)

    assert registry.candidate_directories("Acme.Util") == [str(util), str(acme)]
    assert registry.candidate_directories(os.path.join("Acme", "Util")) == [
        str(util),
        str(acme),
    ]
    assert registry.candidate_directories("Acme") == [str(acme)]
    assert registry.candidate_directories("AcmeCorp.Billing") == [str(corp)]
    assert registry.candidate_directories("Other") == []


def test_candidates_report_matched_prefix(tmp_path: Path) -> None:
    """Verify that candidates carry the matched prefix segments."""
    registry = NamespaceRegistry(delimiter="\\")
    registry.register("Acme\\Util", tmp_path)
    assert registry.candidates(("Acme", "Util", "Time")) == [
        (("Acme", "Util"), str(tmp_path))
    ]


def test_register_many_rejects_non_directory_values(tmp_path: Path) -> None:
    """Verify that a missing or malformed value fails only its own prefix."""
    registry = NamespaceRegistry()

    results = registry.register_many(
        {"Empty": None, "Number": 3, "Mixed": [None], "Acme": str(tmp_path)}
    )

    assert results == {"Empty": False, "Number": False, "Mixed": False, "Acme": True}
    assert registry.namespaces == {"Acme": [str(tmp_path)]}


def test_register_rejects_none() -> None:
    """Verify that a None directory is reported like a missing one."""
    registry = NamespaceRegistry()
    with pytest.raises(DirectoryNotFoundError):
        registry.register("Acme", None)
    assert registry.namespaces == {}
