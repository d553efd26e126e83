import json
from pathlib import Path

import pytest

from gatelock.cli import main
from gatelock.config import build_checker, load_config
from gatelock.logger import DecisionLogger


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    # keep a stray .env in the working directory out of the tests
    monkeypatch.chdir(tmp_path)
    for name in (
        "GATELOCK_SUBJECTS",
        "GATELOCK_RESOURCES",
        "GATELOCK_GRANTS",
        "GATELOCK_LOG_PATH",
        "GATELOCK_AUDIT_ENABLED",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    config = load_config()
    assert config.subjects == ()
    assert config.grants == ()
    assert config.log_path == "gatelock.log"
    assert not config.audit_enabled


def test_load_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GATELOCK_SUBJECTS", "user, admin,,")
    monkeypatch.setenv("GATELOCK_RESOURCES", "orders")
    monkeypatch.setenv("GATELOCK_GRANTS", "user/orders.r?userId=1&x=2, admin/*.crud, bogus")
    monkeypatch.setenv("GATELOCK_AUDIT_ENABLED", "TRUE")
    config = load_config()
    assert config.subjects == ("user", "admin")
    assert config.grants == ("user/orders.r?userId=1&x=2", "admin/*.crud", "bogus")
    assert config.audit_enabled

    checker = build_checker(config)
    assert len(checker.granted_scopes) == 2
    assert checker.can("admin/orders.d")
    assert not checker.can("admin/users.d")  # resource outside allow-list


def test_load_from_dotenv_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GATELOCK_GRANTS", "")  # restored after the test
    (tmp_path / ".env").write_text("GATELOCK_GRANTS=guest/products.r\n", encoding="utf-8")
    assert load_config().grants == ("guest/products.r",)


def test_decision_logger_writes_json_lines(tmp_path: Path) -> None:
    audit = DecisionLogger(tmp_path / "decisions.log")
    audit.decision("user/orders.r", True)
    audit.decision("user/orders.d", False)
    audit.close()

    lines = (tmp_path / "decisions.jsonl").read_text(encoding="utf-8").splitlines()
    records = [json.loads(ln) for ln in lines]
    assert [r["event"] for r in records] == ["allow", "deny"]
    assert records[1]["scope"] == "user/orders.d"
    assert records[1]["allowed"] is False
    assert records[0]["ts"].endswith("Z")


def test_cli_reports_decisions(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys) -> None:
    monkeypatch.setenv("GATELOCK_GRANTS", "user/orders.r")
    monkeypatch.setenv("GATELOCK_AUDIT_ENABLED", "true")
    monkeypatch.setenv("GATELOCK_LOG_PATH", str(tmp_path / "audit.log"))

    assert main(["user/orders.r"]) == 0
    assert main(["user/orders.r", "user/orders.d"]) == 1
    out = capsys.readouterr().out.splitlines()
    assert out == ["ALLOW user/orders.r", "ALLOW user/orders.r", "DENY user/orders.d"]
    assert (tmp_path / "audit.jsonl").exists()


def test_cli_requires_arguments(capsys) -> None:
    assert main([]) == 2
    assert "usage" in capsys.readouterr().err
