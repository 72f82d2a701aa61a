# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from lq_lib.core.commander import Commander
from lq_lib.core.error import LQError


def _completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(
        args=[], returncode=returncode, stdout=stdout, stderr=stderr
    )


def test_commander_run_with_sudo_prefix():
    with patch("lq_lib.core.commander.subprocess.run", return_value=_completed()) as mock_run:
        Commander(use_sudo=True).run(["supervisorctl", "reread"])

    assert mock_run.call_args[0][0] == ["sudo", "supervisorctl", "reread"]


def test_commander_run_as_user_with_sudo():
    with patch("lq_lib.core.commander.subprocess.run", return_value=_completed()) as mock_run:
        Commander(use_sudo=True).run(["composer", "install"], as_user="www-data")

    assert mock_run.call_args[0][0] == ["sudo", "-u", "www-data", "composer", "install"]


def test_commander_run_without_sudo():
    with patch("lq_lib.core.commander.subprocess.run", return_value=_completed()) as mock_run:
        Commander(use_sudo=False).run(["composer", "install"], as_user="www-data")

    assert mock_run.call_args[0][0] == ["composer", "install"]


def test_commander_run_passes_input_and_cwd(tmp_path):
    with patch("lq_lib.core.commander.subprocess.run", return_value=_completed()) as mock_run:
        Commander(use_sudo=False, cwd=tmp_path).run(["cat"], input="data")

    kwargs = mock_run.call_args.kwargs
    assert kwargs["input"] == "data"
    assert kwargs["cwd"] == tmp_path
    assert kwargs["text"] is True
    assert kwargs["capture_output"] is True


def test_commander_run_cwd_argument_overrides_default(tmp_path):
    other = tmp_path / "other"
    with patch("lq_lib.core.commander.subprocess.run", return_value=_completed()) as mock_run:
        Commander(use_sudo=False, cwd=tmp_path).run(["ls"], cwd=other)

    assert mock_run.call_args.kwargs["cwd"] == other


def test_commander_run_failure_raises():
    with (
        patch(
            "lq_lib.core.commander.subprocess.run",
            return_value=_completed(returncode=2, stderr="no such program\n"),
        ),
        pytest.raises(
            LQError,
            match="Command 'supervisorctl start 'shop_default:\\*'' failed with exit code 2: no such program",
        ),
    ):
        Commander(use_sudo=True).run(["supervisorctl", "start", "shop_default:*"])


def test_commander_run_failure_without_check_returns_result():
    with patch(
        "lq_lib.core.commander.subprocess.run",
        return_value=_completed(returncode=1),
    ):
        result = Commander(use_sudo=False).run(["false"], check=False)

    assert result.returncode == 1


def test_commander_run_missing_binary_raises():
    with (
        patch("lq_lib.core.commander.subprocess.run", side_effect=FileNotFoundError("nope")),
        pytest.raises(LQError, match="Could not run 'supervisorctl reread'"),
    ):
        Commander(use_sudo=False).run(["supervisorctl", "reread"])


def test_commander_write_file_with_sudo_uses_tee():
    with patch.object(Commander, "run") as mock_run:
        Commander(use_sudo=True).writeFile(Path("/etc/supervisor/conf.d/x.conf"), "content")

    mock_run.assert_called_once_with(["tee", "/etc/supervisor/conf.d/x.conf"], input="content")


def test_commander_write_file_without_sudo(tmp_path):
    target = tmp_path / "x.conf"
    Commander(use_sudo=False).writeFile(target, "content\n")

    assert target.read_text() == "content\n"


def test_commander_write_file_without_sudo_missing_directory(tmp_path):
    with pytest.raises(LQError, match="Could not write file"):
        Commander(use_sudo=False).writeFile(tmp_path / "missing" / "x.conf", "content")


def test_commander_file_operations_with_sudo():
    with patch.object(Commander, "run") as mock_run:
        commander = Commander(use_sudo=True)
        commander.removeFile(Path("/a/b.conf"))
        commander.makeDirs(Path("/a/logs"))
        commander.touch(Path("/a/logs/q.log"))
        commander.chown(Path("/a"), "www-data", "www-data", recursive=True)
        commander.chown(Path("/a/logs/q.log"), "www-data", "web")
        commander.chmod(Path("/usr/local/bin/queue-monitor"), 0o755)

    assert [c.args[0] for c in mock_run.call_args_list] == [
        ["rm", "-f", "/a/b.conf"],
        ["mkdir", "-p", "/a/logs"],
        ["touch", "/a/logs/q.log"],
        ["chown", "-R", "www-data:www-data", "/a"],
        ["chown", "www-data:web", "/a/logs/q.log"],
        ["chmod", "755", "/usr/local/bin/queue-monitor"],
    ]


def test_commander_file_operations_without_sudo(tmp_path):
    commander = Commander(use_sudo=False)
    logs = tmp_path / "storage" / "logs"
    log = logs / "queue_default.log"

    commander.makeDirs(logs)
    commander.touch(log)
    log.write_text("old output\n")
    commander.touch(log)
    commander.chmod(log, 0o600)

    assert logs.is_dir()
    assert log.read_text() == "old output\n"
    assert log.stat().st_mode & 0o777 == 0o600

    commander.removeFile(log)
    commander.removeFile(log)
    assert not log.exists()


def test_commander_chown_without_sudo_recursive(tmp_path):
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "file").write_text("x")

    with patch("lq_lib.core.commander.shutil.chown") as mock_chown:
        Commander(use_sudo=False).chown(tmp_path, "www-data", "www-data", recursive=True)

    chowned = {c.args[0] for c in mock_chown.call_args_list}
    assert chowned == {tmp_path, tmp_path / "sub", tmp_path / "sub" / "file"}


def test_commander_chown_without_sudo_unknown_user(tmp_path):
    with (
        patch("lq_lib.core.commander.shutil.chown", side_effect=LookupError("no such user")),
        pytest.raises(LQError, match="Could not change owner"),
    ):
        Commander(use_sudo=False).chown(tmp_path, "nobody-here", "nobody-here")


def test_commander_available():
    with patch("lq_lib.core.commander.shutil.which", return_value="/usr/bin/setfacl"):
        assert Commander.available("setfacl")
    with patch("lq_lib.core.commander.shutil.which", return_value=None):
        assert not Commander.available("setfacl")
