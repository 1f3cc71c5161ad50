"""Tests for the classloader command line interface."""

import json
from pathlib import Path

import pytest
import yaml

from classloader.cli import main


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A small project tree with one namespace directory and a search root."""
    tmp_path = tmp_path.resolve()
    (tmp_path / "lib").mkdir()
    (tmp_path / "lib" / "Clock.php").write_text("<?php\n")
    (tmp_path / "root" / "deep").mkdir(parents=True)
    (tmp_path / "root" / "deep" / "Timer.inc").write_text("<?php\n")
    return tmp_path


def test_resolves_identifiers(project: Path, capsys: pytest.CaptureFixture) -> None:
    """Verify output and exit code when everything resolves."""
    code = main(
        [
            "Acme.Clock",
            "Acme.Timer",
            "--root",
            str(project / "root"),
            "--namespace",
            f"Acme={project / 'lib'}",
        ]
    )
    out = capsys.readouterr().out

    assert code == 0
    assert f"Acme.Clock -> {project / 'lib' / 'Clock.php'} (namespace)" in out
    timer = project / "root" / "deep" / "Timer.inc"
    assert f"Acme.Timer -> {timer} (filesystem)" in out


def test_missing_identifier_exit_code(
    project: Path, capsys: pytest.CaptureFixture
) -> None:
    """Verify that a miss is reported and gives a non-zero exit code."""
    code = main(["Nope", "--root", str(project / "root")])
    assert code == 1
    assert "Nope: not found" in capsys.readouterr().out


def test_config_file_and_report(project: Path) -> None:
    """Verify that YAML configuration and the JSON report work together."""
    config_file = project / "classloader.yml"
    config_file.write_text(
        yaml.dump(
            {
                "root_path": str(project / "root"),
                "namespaces": {"Acme": [str(project / "lib")]},
                "accepted_extensions": ["php"],
            }
        )
    )
    report_file = project / "report.json"

    code = main(
        [
            "Acme.Clock",
            "Timer",
            "--config",
            str(config_file),
            "--report",
            str(report_file),
        ]
    )

    assert code == 1  # Timer.inc is not an accepted extension here
    stats = json.loads(report_file.read_text())["stats"]
    assert stats["strategy_counts"] == {"namespace": 1, "miss": 1}
    assert stats["misses"] == ["Timer"]


def test_cache_file_is_written(project: Path) -> None:
    """Verify that --cache-file persists resolutions for the next run."""
    cache_file = project / "classMap.cache"
    code = main(
        ["Timer", "--root", str(project / "root"), "--cache-file", str(cache_file)]
    )
    assert code == 0

    data = json.loads(cache_file.read_text())
    assert data["mapping"] == {"Timer": str(project / "root" / "deep" / "Timer.inc")}


def test_class_mapping(project: Path, capsys: pytest.CaptureFixture) -> None:
    """Verify explicit identifier to file registration from the command line."""
    clock = project / "lib" / "Clock.php"
    code = main(
        [
            "Vendor.Clock",
            "--root",
            str(project / "root"),
            "--class",
            f"Vendor.Clock={clock}",
        ]
    )
    assert code == 0
    assert f"Vendor.Clock -> {clock} (cache)" in capsys.readouterr().out


def test_malformed_pair_is_rejected(project: Path) -> None:
    """Verify that KEY=VALUE options are validated."""
    with pytest.raises(SystemExit, match="--namespace expects KEY=VALUE"):
        main(["Acme.Clock", "--namespace", "Acme"])


def test_invalid_config_exits(project: Path) -> None:
    """Verify that configuration errors end the program with a message."""
    config_file = project / "bad.yml"
    config_file.write_text(yaml.dump({"strategy_order": ["guess"]}))
    with pytest.raises(SystemExit, match="Unknown strategies"):
        main(["Acme.Clock", "--config", str(config_file)])
