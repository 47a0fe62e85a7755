from __future__ import annotations

import sys

from kvlock import cli
from kvlock.core.identity import StaticIdentity
from kvlock.core.manager import LockManager
from kvlock.core.store_memory import MemoryStore


def _manager(store: MemoryStore) -> LockManager:
    return LockManager(store, identity=StaticIdentity("cli"), sleep=lambda _: None)


def test_run_returns_command_exit_code_and_releases():
    store = MemoryStore()

    code = cli.run(_manager(store), "report", [sys.executable, "-c", "raise SystemExit(3)"], timeout=30)

    assert code == 3
    assert store.get("lock:report") is None


def test_run_reports_tempfail_when_lock_is_held():
    store = MemoryStore()
    store.set("lock:report", "99999999999-someone")

    code = cli.run(_manager(store), "report", [sys.executable, "-c", "pass"], max_attempts=2)

    assert code == cli.EX_TEMPFAIL


def test_main_requires_a_command():
    assert cli.main(["report"]) == 2


def test_main_uses_config_file(tmp_path, monkeypatch):
    path = tmp_path / "kvlock.yml"
    path.write_text("default_timeout: 5\nidentity: worker-9\n")
    store = MemoryStore()
    built = {}

    def build_manager(self, store_override=None, *, rich=True):
        built["settings"] = self
        built["rich"] = rich
        return _manager(store)

    monkeypatch.setattr(cli.LockSettings, "build_manager", build_manager)

    code = cli.main(["--config", str(path), "report", "--", sys.executable, "-c", "pass"])

    assert code == 0
    assert built["settings"].default_timeout == 5
    assert store.get("lock:report") is None


def test_main_parses_options_given_before_resource(monkeypatch):
    store = MemoryStore()
    store.set("lock:report", "99999999999-someone")
    monkeypatch.setattr(cli.LockSettings, "build_manager", lambda self, store_override=None, *, rich=True: _manager(store))

    code = cli.main(["--max-attempts", "1", "report", "--", sys.executable, "-c", "pass"])

    assert code == cli.EX_TEMPFAIL


def test_options_after_resource_belong_to_the_command():
    args = cli.build_parser().parse_args(["report", "--timeout", "5", "./job.sh"])

    assert args.timeout is None
    assert args.command == ["--timeout", "5", "./job.sh"]


def test_main_forwards_rich_logs_flag(tmp_path, monkeypatch):
    path = tmp_path / "kvlock.yml"
    path.write_text("identity: worker-9\n")
    monkeypatch.setenv("KVLOCK_RICH_LOGS", "0")
    built = {}

    def build_manager(self, store_override=None, *, rich=True):
        built["rich"] = rich
        return _manager(MemoryStore())

    monkeypatch.setattr(cli.LockSettings, "build_manager", build_manager)

    assert cli.main(["--config", str(path), "report", "--", sys.executable, "-c", "pass"]) == 0
    assert built["rich"] is False
