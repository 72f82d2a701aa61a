# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


from pathlib import Path
from unittest.mock import MagicMock, patch

from click.testing import CliRunner

from lq_lib.core.config import CFG
from lq_lib.core.error import LQError
from lq_lib.provision.cli import provision


def test_provision_cli_derives_project_from_repository():
    with (
        patch("lq_lib.provision.cli.Provisioner") as mock_provisioner,
        patch("lq_lib.provision.cli.get_answer_source") as mock_answers,
        patch("lq_lib.provision.cli.logger"),
    ):
        mock_provisioner.return_value.provision.return_value = None
        result = CliRunner().invoke(
            provision, ["--repository", "git@github.com:acme/shop.git", "--answers", "a.yaml"]
        )

    assert result.exit_code == 0
    session = mock_provisioner.call_args.args[0]
    assert session.project == "shop"
    assert session.project_path == (Path(CFG.paths.web_root) / "shop").resolve()
    mock_answers.assert_called_once_with("a.yaml")
    mock_provisioner.return_value.provision.assert_called_once_with(
        repository="git@github.com:acme/shop.git", prune=False
    )


def test_provision_cli_requires_project_or_repository():
    with patch("lq_lib.provision.cli.logger") as mock_logger:
        result = CliRunner().invoke(provision, [])

    assert result.exit_code == CFG.exit_codes.default
    assert "Specify the project name" in str(mock_logger.error.call_args.args[0])


def test_provision_cli_prints_report(tmp_path):
    report = MagicMock()
    report.ok = True

    with (
        patch("lq_lib.provision.cli.Provisioner") as mock_provisioner,
        patch("lq_lib.provision.cli.get_answer_source"),
        patch("lq_lib.provision.cli.print_report") as mock_print,
        patch("lq_lib.provision.cli.logger"),
    ):
        mock_provisioner.return_value.provision.return_value = report
        result = CliRunner().invoke(provision, ["shop", "--path", str(tmp_path), "--prune"])

    assert result.exit_code == 0
    mock_print.assert_called_once()
    assert mock_print.call_args.args[0] is report
    mock_provisioner.return_value.provision.assert_called_once_with(repository=None, prune=True)


def test_provision_cli_failed_queue(tmp_path):
    report = MagicMock()
    report.ok = False
    report.result.failed = ["emails"]

    with (
        patch("lq_lib.provision.cli.Provisioner") as mock_provisioner,
        patch("lq_lib.provision.cli.get_answer_source"),
        patch("lq_lib.provision.cli.print_report"),
        patch("lq_lib.provision.cli.logger") as mock_logger,
    ):
        mock_provisioner.return_value.provision.return_value = report
        result = CliRunner().invoke(provision, ["shop", "--path", str(tmp_path)])

    assert result.exit_code == CFG.exit_codes.default
    assert "Could not configure queue(s): emails." == str(mock_logger.error.call_args.args[0])


def test_provision_cli_step_failure(tmp_path):
    with (
        patch("lq_lib.provision.cli.Provisioner") as mock_provisioner,
        patch("lq_lib.provision.cli.get_answer_source"),
        patch("lq_lib.provision.cli.logger") as mock_logger,
    ):
        mock_provisioner.return_value.provision.side_effect = LQError("Failed to install supervisor.")
        result = CliRunner().invoke(provision, ["shop", "--path", str(tmp_path)])

    assert result.exit_code == CFG.exit_codes.default
    mock_logger.error.assert_called_once()


def test_provision_cli_unexpected_error(tmp_path):
    with (
        patch("lq_lib.provision.cli.Provisioner") as mock_provisioner,
        patch("lq_lib.provision.cli.get_answer_source"),
        patch("lq_lib.provision.cli.logger") as mock_logger,
    ):
        mock_provisioner.return_value.provision.side_effect = KeyError("bug")
        result = CliRunner().invoke(provision, ["shop", "--path", str(tmp_path)])

    assert result.exit_code == CFG.exit_codes.unexpected_error
    mock_logger.critical.assert_called_once()
