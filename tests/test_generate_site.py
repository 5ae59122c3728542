"""Tests for the site generation command-line entrypoint.
"""

from pathlib import Path

from src import generate_site as cli
from src.pipeline.website_generator.runner import GenerationSummary


def test_parse_cli_args_defaults() -> None:
    args = cli.parse_cli_args([])
    assert args.zip is None
    assert args.output is None
    assert args.base_url is None
    assert args.log_level == "INFO"


def test_parse_cli_args_values() -> None:
    args = cli.parse_cli_args(
        ["--zip", "d.zip", "--output", "out", "--base-url", "https://x.test", "--log-level", "DEBUG"]
    )
    assert args.zip == Path("d.zip")
    assert args.output == Path("out")
    assert args.base_url == "https://x.test"


def test_build_summary_table_rows() -> None:
    summary = GenerationSummary(
        businesses=3,
        cities=2,
        states=1,
        categories=1,
        company_pages=3,
        city_pages=2,
        state_pages=1,
        category_pages=1,
        sitemap_files=5,
        output_dir=Path("public"),
    )
    table = cli.build_summary_table(summary)
    assert table.row_count == 6
    assert table.columns[1].header == "Count"


def test_main_success(make_directory_zip, tmp_path: Path, capsys) -> None:
    archive = make_directory_zip(
        businesses=[{"id": "1", "title": "Smooth Skin", "city_id": "c1"}],
        cities=[{"id": "c1", "city": "Austin", "state_id": "s1"}],
        states=[{"id": "s1", "state": "Texas"}],
        categories=[],
    )
    out = tmp_path / "public"
    code = cli.main(
        ["--zip", str(archive), "--output", str(out), "--base-url", "https://x.test"]
    )
    assert code == 0
    assert (out / "companies" / "austin-texas-smooth-skin-1" / "index.html").exists()
    assert "Site written to" in capsys.readouterr().out


def test_main_failure_returns_one(monkeypatch, tmp_path: Path, caplog) -> None:
    monkeypatch.setattr(cli, "configure_logging", lambda *a, **k: None)
    code = cli.main(
        [
            "--zip",
            str(tmp_path / "missing.zip"),
            "--output",
            str(tmp_path / "public"),
            "--base-url",
            "https://x.test",
        ]
    )
    assert code == 1
    assert "DATA_LOAD_ERROR" in caplog.text
