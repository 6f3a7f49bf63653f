import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture(autouse=True)
def _isolated_config_env(monkeypatch):
    # внешний ARITH_CONFIG / ARITH_DEBUG не должен влиять на тесты
    monkeypatch.delenv("ARITH_CONFIG", raising=False)
    monkeypatch.delenv("ARITH_DEBUG", raising=False)


@pytest.fixture
def run_cli(tmp_path: Path):
    """Запуск `python -m arith.cli` в изолированном каталоге."""
    def _run(*args: str, stdin: str | None = None, cwd: Path | None = None,
             env: dict | None = None) -> subprocess.CompletedProcess:
        full_env = os.environ.copy()
        full_env.pop("ARITH_CONFIG", None)
        full_env.pop("ARITH_DEBUG", None)
        full_env["PYTHONIOENCODING"] = "utf-8"
        full_env["PYTHONPATH"] = os.pathsep.join(
            p for p in (str(REPO_ROOT), full_env.get("PYTHONPATH", "")) if p
        )
        if env:
            full_env.update(env)
        return subprocess.run(
            [sys.executable, "-m", "arith.cli", *args],
            cwd=cwd or tmp_path, env=full_env, input=stdin,
            capture_output=True, text=True, encoding="utf-8",
        )
    return _run


def jload(s: str):
    return json.loads(s)


@pytest.fixture
def json_lines():
    def _parse(s: str):
        return [jload(line) for line in s.splitlines() if line.strip()]
    return _parse
