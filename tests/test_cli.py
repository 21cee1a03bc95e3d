from __future__ import annotations

from pathlib import Path
from unittest import mock

from medium_import.cli import main, parse_args
from medium_import.config import ImportConfig
from medium_import.models import RunTotals


def test_parse_args_defaults(tmp_path: Path) -> None:
    args = parse_args([str(tmp_path)])
    assert args.directory == tmp_path
    assert args.uid == 1
    assert args.alt_fallback == "space"
    assert args.timeout == ImportConfig().fetch_timeout


def test_main_missing_directory_returns_error(tmp_path: Path) -> None:
    assert main([str(tmp_path / "missing"), "--output", str(tmp_path / "out")]) == 1


def test_main_wires_config_and_stores(tmp_path: Path) -> None:
    with mock.patch("medium_import.cli.run_import", return_value=RunTotals()) as run:
        status = main(
            [
                str(tmp_path),
                "--uid",
                "5",
                "--alt-fallback",
                "title",
                "--timeout",
                "3",
                "--output",
                str(tmp_path / "out"),
            ]
        )
    assert status == 0
    directory, config, fetcher, asset_store, content_store = run.call_args.args
    assert directory == tmp_path
    assert config.owner_id == 5
    assert config.alt_fallback == "title"
    assert fetcher.timeout == 3.0
    assert asset_store.root == (tmp_path / "out" / "images").resolve()
    assert content_store.root == (tmp_path / "out" / "records").resolve()
