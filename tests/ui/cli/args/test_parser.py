"""Tests for command line argument parser."""

import logging
from argparse import Namespace
from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from autocondense.platform.document import TextSelection
from autocondense.ui.cli.args import ArgumentParser, FitArgs, ResetArgs


def test_create_parser() -> None:
    """Argument parser should expose expected subcommands and options."""

    parser = ArgumentParser.create_parser()

    fit_args: Namespace = parser.parse_args(
        ["fit", "doc.json", "--cell", "A1", "--cell", "A2", "--target-lines", "2", "-y"]
    )
    assert fit_args.command == "fit"
    assert fit_args.document == "doc.json"
    assert fit_args.cell == ["A1", "A2"]
    assert fit_args.target_lines == "2"
    assert fit_args.yes

    reset_args: Namespace = parser.parse_args(["reset-leading", "doc.json", "--frame", "F1"])
    assert reset_args.command == "reset-leading"
    assert reset_args.frame == ["F1"]
    assert not hasattr(reset_args, "target_lines")


def test_subcommand_is_required() -> None:
    with pytest.raises(SystemExit):
        _ = ArgumentParser.create_parser().parse_args([])


def test_process_fit_args(cli_environment: Path, sample_document_file: Path) -> None:
    _ = cli_environment
    args = ArgumentParser.process_args(
        [
            "fit",
            str(sample_document_file),
            "--text",
            "T1:0,2",
            "--no-overflow-priority",
            "--exclude-leading-char",
            "--output",
            "out.json",
            "--dry-run",
        ]
    )

    assert isinstance(args, FitArgs)
    assert args.document_path == sample_document_file
    assert args.text == TextSelection("T1", (0, 2))
    assert args.target_lines == 1
    assert args.overflow_priority is False
    assert args.exclude_leading_char is True
    assert args.output_path == Path("out.json")
    assert args.dry_run
    assert not args.assume_yes


def test_target_lines_default_comes_from_config(
    cli_environment: Path, isolated_config: Path, sample_document_file: Path
) -> None:
    _ = cli_environment
    with open(isolated_config, "a", encoding="utf-8") as handle:
        _ = handle.write("default_target_lines = 4\noverflow_priority = false\n")

    args = ArgumentParser.process_args(["fit", str(sample_document_file), "--frame", "T1"])

    assert isinstance(args, FitArgs)
    assert args.target_lines == 4
    assert args.overflow_priority is False


def test_process_reset_args(cli_environment: Path, sample_document_file: Path) -> None:
    _ = cli_environment
    args = ArgumentParser.process_args(
        ["reset-leading", str(sample_document_file), "--frame", "F1", "--frame", "F2", "--quiet"]
    )

    assert isinstance(args, ResetArgs)
    assert args.frames == ("F1", "F2")
    assert args.quiet


def test_missing_document_exits(cli_environment: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        _ = ArgumentParser.process_args(["fit", str(cli_environment / "missing.json")])

    assert excinfo.value.code == 1


def test_malformed_text_selection_exits(cli_environment: Path, sample_document_file: Path) -> None:
    _ = cli_environment
    with pytest.raises(SystemExit) as excinfo:
        _ = ArgumentParser.process_args(["fit", str(sample_document_file), "--text", "T1:x"])

    assert excinfo.value.code == 2


@pytest.mark.parametrize(
    ("flags", "expected_level"),
    [([], logging.INFO), (["--verbose"], logging.DEBUG), (["--quiet"], logging.ERROR)],
)
def test_verbosity_sets_console_level(
    cli_environment: Path,
    sample_document_file: Path,
    mocker: MockerFixture,
    flags: list[str],
    expected_level: int,
) -> None:
    setup = mocker.patch("autocondense.ui.cli.args.parser.setup_logger")

    _ = ArgumentParser.process_args(["fit", str(sample_document_file), *flags])

    assert setup.call_args.kwargs["console_level"] == expected_level
    assert setup.call_args.kwargs["log_file"] == cli_environment / "logs" / "autocondense.log"


def test_string_flags_in_config_are_ignored(
    cli_environment: Path, isolated_config: Path, sample_document_file: Path
) -> None:
    _ = cli_environment
    with open(isolated_config, "a", encoding="utf-8") as handle:
        _ = handle.write('overflow_priority = "false"\nexclude_leading_char = "false"\n')

    args = ArgumentParser.process_args(["fit", str(sample_document_file), "--frame", "T1"])

    assert isinstance(args, FitArgs)
    assert args.overflow_priority is True
    assert args.exclude_leading_char is False
