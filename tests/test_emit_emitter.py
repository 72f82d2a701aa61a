# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


from unittest.mock import MagicMock, patch

import pytest

from lq_lib.core.commander import Commander
from lq_lib.core.error import LQEmitError, LQError
from lq_lib.emit.emitter import SupervisorConfigEmitter
from lq_lib.emit.stanza import SupervisorStanza
from lq_lib.properties.drivers import DriverSelection, QueueDriver, StoreDriver
from lq_lib.properties.queue_definition import QueueDefinition
from lq_lib.properties.queue_plan import QueuePlan
from lq_lib.properties.session import Session


@pytest.fixture
def session(tmp_path):
    conf_dir = tmp_path / "conf.d"
    conf_dir.mkdir()
    return Session(
        project="shop",
        project_path=tmp_path / "shop",
        supervisor_conf_dir=conf_dir,
    )


@pytest.fixture
def drivers():
    return DriverSelection(
        queue_driver=QueueDriver.DATABASE,
        cache_driver=StoreDriver.FILE,
        session_driver=StoreDriver.FILE,
    )


@pytest.fixture
def plan():
    return QueuePlan(
        [
            QueueDefinition(name="default", process_count=4, priority=1),
            QueueDefinition(name="emails", process_count=2),
        ]
    )


@pytest.fixture
def emitter(session):
    return SupervisorConfigEmitter(session, Commander(use_sudo=False))


@pytest.fixture(autouse=True)
def no_chown():
    with patch("lq_lib.core.commander.shutil.chown") as mock_chown:
        yield mock_chown


def _commands(mock_run):
    return [c.args[0] for c in mock_run.call_args_list]


def test_emit_writes_configs_and_logs(emitter, session, plan, drivers, no_chown):
    with patch.object(Commander, "run") as mock_run:
        result = emitter.emit(plan, drivers)

    assert result.ok
    assert result.succeeded == ["default", "emails"]
    assert result.orphans == []

    for queue in plan:
        config = session.configFile(queue.name)
        assert config.read_text() == SupervisorStanza.fromQueue(queue, session, drivers).render()
        assert session.logFile(queue.name).is_file()
        no_chown.assert_any_call(session.logFile(queue.name), "www-data", "www-data")

    assert _commands(mock_run) == [
        ["supervisorctl", "reread"],
        ["supervisorctl", "update"],
        ["supervisorctl", "start", "shop_default:*"],
        ["supervisorctl", "start", "shop_emails:*"],
    ]


def test_emit_is_idempotent(emitter, session, plan, drivers):
    with patch.object(Commander, "run"):
        emitter.emit(plan, drivers)
        first = {q.name: session.configFile(q.name).read_bytes() for q in plan}
        emitter.emit(plan, drivers)
        second = {q.name: session.configFile(q.name).read_bytes() for q in plan}

    assert first == second
    assert sorted(p.name for p in session.supervisor_conf_dir.iterdir()) == [
        "shop_default.conf",
        "shop_emails.conf",
    ]


def test_emit_keeps_existing_log_content(emitter, session, plan, drivers):
    log = session.logFile("default")
    log.parent.mkdir(parents=True)
    log.write_text("previous run\n")

    with patch.object(Commander, "run"):
        emitter.emit(plan, drivers)

    assert log.read_text() == "previous run\n"


def test_emit_failure_of_one_queue_does_not_abort_others(emitter, session, plan, drivers):
    # a directory in place of the program file makes writing it fail
    session.configFile("default").mkdir()

    with (
        patch.object(Commander, "run") as mock_run,
        patch("lq_lib.core.error_handlers.logger"),
    ):
        result = emitter.emit(plan, drivers)

    assert not result.ok
    assert result.failed == ["default"]
    assert result.succeeded == ["emails"]
    assert isinstance(result.outcomes["default"].error, LQEmitError)
    assert session.configFile("emails").is_file()
    assert ["supervisorctl", "start", "shop_emails:*"] in _commands(mock_run)
    assert ["supervisorctl", "start", "shop_default:*"] not in _commands(mock_run)


def test_emit_log_failure_leaves_no_program_file(emitter, session, plan, drivers, no_chown):
    def chown(path, *_):
        if path == session.logFile("emails"):
            raise PermissionError("operation not permitted")

    no_chown.side_effect = chown

    with (
        patch.object(Commander, "run") as mock_run,
        patch("lq_lib.core.error_handlers.logger"),
    ):
        result = emitter.emit(plan, drivers)

    assert result.failed == ["emails"]
    assert result.succeeded == ["default"]
    assert not session.configFile("emails").exists()
    assert session.configFile("default").is_file()
    assert _commands(mock_run) == [
        ["supervisorctl", "reread"],
        ["supervisorctl", "update"],
        ["supervisorctl", "start", "shop_default:*"],
    ]


def test_emit_prepares_log_before_program_file(session, plan, drivers):
    commander = MagicMock()

    SupervisorConfigEmitter(session, commander).emit(QueuePlan([plan.queues[0]]), drivers)

    calls = [c[0] for c in commander.method_calls]
    assert calls.index("chown") < calls.index("writeFile")
    assert calls.index("touch") < calls.index("writeFile")


def test_emit_all_queues_fail_skips_supervisor(emitter, session, plan, drivers):
    for queue in plan:
        session.configFile(queue.name).mkdir()

    with (
        patch.object(Commander, "run") as mock_run,
        patch("lq_lib.core.error_handlers.logger") as mock_logger,
    ):
        result = emitter.emit(plan, drivers)

    assert result.succeeded == []
    assert result.failed == ["default", "emails"]
    mock_run.assert_not_called()
    mock_logger.error.assert_any_call("No queue could be configured.")


def test_emit_start_failure_is_recorded(emitter, plan, drivers):
    def run(command, **_):
        if command[-1] == "shop_emails:*":
            raise LQError("ERROR (spawn error)")
        return MagicMock(returncode=0)

    with (
        patch.object(Commander, "run", side_effect=run),
        patch("lq_lib.emit.emitter.logger"),
    ):
        result = emitter.emit(plan, drivers)

    assert result.succeeded == ["default"]
    assert result.failed == ["emails"]
    assert "spawn error" in str(result.outcomes["emails"].error)


def test_emit_reload_failure_raises(emitter, plan, drivers):
    with (
        patch.object(Commander, "run", side_effect=LQError("supervisord not running")),
        pytest.raises(LQError, match="supervisord not running"),
    ):
        emitter.emit(plan, drivers)


def _write_foreign_files(session):
    conf_dir = session.supervisor_conf_dir
    logs = session.logs_dir
    (conf_dir / "shop_old.conf").write_text(
        f"[program:shop_old]\nstdout_logfile={logs}/queue_old.log\n"
    )
    # another project whose name starts with this project's name
    (conf_dir / "shop_admin_default.conf").write_text(
        "[program:shop_admin_default]\nstdout_logfile=/var/www/html/shop_admin/storage/logs/queue_default.log\n"
    )
    (conf_dir / "blog_default.conf").write_text(
        "[program:blog_default]\nstdout_logfile=/var/www/html/blog/storage/logs/queue_default.log\n"
    )


def test_find_orphans(emitter, session, plan):
    _write_foreign_files(session)

    assert emitter.findOrphans(plan) == [session.supervisor_conf_dir / "shop_old.conf"]


def test_find_orphans_missing_conf_dir(tmp_path, plan):
    session = Session(
        project="shop", project_path=tmp_path / "shop", supervisor_conf_dir=tmp_path / "none"
    )

    assert SupervisorConfigEmitter(session, Commander(use_sudo=False)).findOrphans(plan) == []


def test_emit_reports_orphans_without_removing(emitter, session, plan, drivers):
    _write_foreign_files(session)
    orphan = session.supervisor_conf_dir / "shop_old.conf"

    with (
        patch.object(Commander, "run"),
        patch("lq_lib.emit.emitter.logger") as mock_logger,
    ):
        result = emitter.emit(plan, drivers)

    assert result.orphans == [orphan]
    assert result.removed_orphans == []
    assert orphan.is_file()
    mock_logger.warning.assert_called_once()


def test_emit_prune_removes_orphans(emitter, session, plan, drivers):
    _write_foreign_files(session)
    orphan = session.supervisor_conf_dir / "shop_old.conf"

    with patch.object(Commander, "run"):
        result = emitter.emit(plan, drivers, prune=True)

    assert result.removed_orphans == [orphan]
    assert not orphan.exists()
    assert (session.supervisor_conf_dir / "shop_admin_default.conf").is_file()
    assert (session.supervisor_conf_dir / "blog_default.conf").is_file()


def test_render_does_not_write(emitter, session, plan, drivers):
    with patch.object(Commander, "run") as mock_run:
        rendered = emitter.render(plan, drivers)

    assert list(rendered.keys()) == [session.configFile("default"), session.configFile("emails")]
    assert rendered[session.configFile("default")].startswith("[program:shop_default]\n")
    assert not session.configFile("default").exists()
    mock_run.assert_not_called()
