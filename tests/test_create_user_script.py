from __future__ import annotations

import importlib.util
from pathlib import Path

from storefront.services.user_service import UserService

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "create_user.py"


def _load_script():
    spec = importlib.util.spec_from_file_location("create_user_script", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_script_creates_admin(db_env, capsys):
    script = _load_script()
    assert script.main(["--username", "boss", "--password", "pw"]) == 0
    assert "OK: user created" in capsys.readouterr().out
    assert UserService().read_one("boss")[0].role == "ADMIN"


def test_script_reports_duplicate_username(db_env, capsys):
    script = _load_script()
    script.main(["--username", "boss", "--password", "pw", "--role", "CUSTOMER"])
    assert script.main(["--username", "boss", "--password", "pw"]) == 1
    assert "already in use" in capsys.readouterr().err
