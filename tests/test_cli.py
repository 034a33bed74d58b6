"""CLI tests using typer's CliRunner."""

from __future__ import annotations

import io

from rich.console import Console
from typer.testing import CliRunner

from ref_renumber.cli import app
from ref_renumber.renumber import renumber_text
from ref_renumber.report import print_summary

runner = CliRunner()

GUIDE = "\n".join(
    [
        "# Style Guide",
        "",
        "  - [Intro](#intro)",
        "",
        "## Intro",
        "  - [TS] keep it short",
        "## Rules",
        "  - [TS 4.04](#ts-0404)<a name='ts-0404'></a> - first",
        "  - [TS 4.04](#ts-0404)<a name='ts-0404'></a> - second",
        "",
    ]
)

EXPECTED = "\n".join(
    [
        "# Style Guide",
        "",
        "  - [Intro](#intro)",
        "",
        "## Intro",
        "  - [TS 0.00](#ts-0000)<a name='ts-0000'></a> - keep it short",
        "## Rules",
        "  - [TS 1.00](#ts-0100)<a name='ts-0100'></a> - first",
        "  - [TS 1.01](#ts-0101)<a name='ts-0101'></a> - second",
    ]
)


def test_default_reads_readme_in_cwd(tmp_path, monkeypatch) -> None:
    (tmp_path / "README.md").write_text(GUIDE, encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, [])

    assert result.exit_code == 0
    assert result.stdout == EXPECTED + "\n"
    assert (tmp_path / "README.md").read_text(encoding="utf-8") == GUIDE


def test_missing_input_fails_without_output(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, [])

    assert result.exit_code != 0
    assert isinstance(result.exception, FileNotFoundError)
    assert result.stdout == ""


def test_file_and_style_options(tmp_path) -> None:
    doc = tmp_path / "GUIDE.md"
    doc.write_text("## A\n  - [[TS 9.09](#ts-0909)] - x\n  - [TS] untouched\n")

    result = runner.invoke(app, ["--file", str(doc), "--style", "double"])

    assert result.exit_code == 0
    assert result.stdout == "## A\n  - [[TS 0.00](#ts-0000)] - x\n  - [TS] untouched\n"


def test_config_file_and_cli_override(tmp_path) -> None:
    doc = tmp_path / "GUIDE.md"
    doc.write_text("## A\n  - [TS] x\n")
    cfg = tmp_path / "renumber.yaml"
    cfg.write_text(f"input: {doc}\nsection_start: 2\n")

    from_config = runner.invoke(app, ["--config", str(cfg)])
    overridden = runner.invoke(app, ["--config", str(cfg), "--section-start", "-1"])

    assert from_config.exit_code == 0
    assert "[TS 3.00](#ts-0300)" in from_config.stdout
    assert overridden.exit_code == 0
    assert "[TS 0.00](#ts-0000)" in overridden.stdout


def test_bad_config_exits_1(tmp_path) -> None:
    cfg = tmp_path / "renumber.yaml"
    cfg.write_text("style: triple\n")

    result = runner.invoke(app, ["--config", str(cfg)])

    assert result.exit_code == 1
    assert "Invalid config" in result.output


def test_write_rewrites_input(tmp_path) -> None:
    doc = tmp_path / "README.md"
    doc.write_text(GUIDE, encoding="utf-8")

    result = runner.invoke(app, ["--file", str(doc), "--write"])

    assert result.exit_code == 0
    assert doc.read_text(encoding="utf-8") == EXPECTED + "\n"
    assert "Renumbered" in result.output


def test_check_reports_pending_changes(tmp_path) -> None:
    doc = tmp_path / "README.md"
    doc.write_text(GUIDE, encoding="utf-8")

    dirty = runner.invoke(app, ["--file", str(doc), "--check"])
    doc.write_text(EXPECTED + "\n", encoding="utf-8")
    clean = runner.invoke(app, ["--file", str(doc), "--check"])

    assert dirty.exit_code == 1
    assert "Needs renumbering" in dirty.output
    assert clean.exit_code == 0
    assert clean.stdout == ""


def test_write_and_check_are_exclusive(tmp_path) -> None:
    doc = tmp_path / "README.md"
    doc.write_text(GUIDE, encoding="utf-8")

    result = runner.invoke(app, ["--file", str(doc), "--write", "--check"])

    assert result.exit_code == 2
    assert doc.read_text(encoding="utf-8") == GUIDE


def test_summary_option_lists_sections(tmp_path) -> None:
    doc = tmp_path / "README.md"
    doc.write_text(GUIDE, encoding="utf-8")

    result = runner.invoke(app, ["--file", str(doc), "--summary"])

    assert result.exit_code == 0
    assert "Rules" in result.output
    assert EXPECTED in result.output


def test_version() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert "ref-renumber" in result.stdout


def test_print_summary_table() -> None:
    buf = io.StringIO()
    out = Console(file=buf, width=100, color_system=None)

    print_summary(renumber_text(GUIDE), out)

    text = buf.getvalue()
    assert "Intro" in text
    assert "Rules" in text
    assert "Bullets: 3" in text
    assert "Changed lines: 3" in text


def test_print_summary_without_sections() -> None:
    buf = io.StringIO()
    out = Console(file=buf, width=100, color_system=None)

    print_summary(renumber_text("no headers here"), out)

    assert "No sections found" in buf.getvalue()


def test_config_without_input_path_exits_1(tmp_path) -> None:
    cfg = tmp_path / "renumber.yaml"
    cfg.write_text("input:\n")

    result = runner.invoke(app, ["--config", str(cfg)])

    assert result.exit_code == 1
    assert not isinstance(result.exception, TypeError)
    assert "Invalid config" in result.output
