from __future__ import annotations

import json
import os
from pathlib import Path
import subprocess
import sys

SRC_DIR = Path(__file__).resolve().parents[1] / "src"


def _run_cli(*args: str, cwd: Path, extra_env: dict[str, str] | None = None) -> subprocess.CompletedProcess[str]:
    env = os.environ.copy()
    env["PYTHONDONTWRITEBYTECODE"] = "1"
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC_DIR), env.get("PYTHONPATH")]))
    env.update(extra_env or {})
    return subprocess.run(
        [sys.executable, "-m", "envweave.cli", *args],
        capture_output=True,
        text=True,
        env=env,
        cwd=cwd,
    )


def test_show_json(fixtures_dir: Path, tmp_path: Path) -> None:
    result = _run_cli("show", "--json", str(fixtures_dir / "mixed.env"), cwd=tmp_path)
    assert result.returncode == 0, result.stderr
    assert json.loads(result.stdout) == {
        "DB_HOST": "localhost",
        "DB_NAME": "app",
        "DB_PORT": "5432",
        "DB_URL": "postgres://localhost",
    }


def test_show_later_files_win(tmp_path: Path) -> None:
    (tmp_path / "a.env").write_text("NAME=a\nGREETING=hi\n", encoding="utf-8")
    (tmp_path / "b.env").write_text("NAME=b\nMESSAGE=\"$GREETING there\"\n", encoding="utf-8")
    result = _run_cli("show", "--json", "a.env", "b.env", cwd=tmp_path)
    assert result.returncode == 0, result.stderr
    assert json.loads(result.stdout) == {"NAME": "b", "GREETING": "hi", "MESSAGE": "hi there"}


def test_show_default_file_from_settings(tmp_path: Path) -> None:
    (tmp_path / "custom.env").write_text("FROM_CUSTOM=1\n", encoding="utf-8")
    result = _run_cli("show", "--json", cwd=tmp_path, extra_env={"ENVWEAVE_DEFAULT_FILE": "custom.env"})
    assert result.returncode == 0, result.stderr
    assert json.loads(result.stdout) == {"FROM_CUSTOM": "1"}


def test_show_strict_fails_on_bad_line(fixtures_dir: Path, tmp_path: Path) -> None:
    lenient = _run_cli("show", "--json", str(fixtures_dir / "broken.env"), cwd=tmp_path)
    assert lenient.returncode == 0
    strict = _run_cli("show", "--strict", str(fixtures_dir / "broken.env"), cwd=tmp_path)
    assert strict.returncode == 1


def test_check_exit_codes(fixtures_dir: Path, tmp_path: Path) -> None:
    valid = _run_cli("check", str(fixtures_dir / "plain.env"), str(fixtures_dir / "yaml.env"), cwd=tmp_path)
    assert valid.returncode == 0, valid.stdout
    assert "VALID" in valid.stdout

    invalid = _run_cli("check", str(fixtures_dir / "plain.env"), str(fixtures_dir / "broken.env"), cwd=tmp_path)
    assert invalid.returncode == 1
    assert "INVALID" in invalid.stdout

    missing = _run_cli("check", "missing.env", cwd=tmp_path)
    assert missing.returncode == 1


def test_run_exports_variables(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("ENVWEAVE_CHILD=from-file\nENVWEAVE_KEPT=from-file\n", encoding="utf-8")
    script = "import os; print(os.environ['ENVWEAVE_CHILD'], os.environ['ENVWEAVE_KEPT'])"
    result = _run_cli(
        "run",
        "--quiet",
        "--",
        sys.executable,
        "-c",
        script,
        cwd=tmp_path,
        extra_env={"ENVWEAVE_KEPT": "from-parent"},
    )
    assert result.returncode == 0, result.stderr
    assert result.stdout.strip() == "from-file from-parent"

    overridden = _run_cli(
        "run",
        "--quiet",
        "--override",
        "--",
        sys.executable,
        "-c",
        script,
        cwd=tmp_path,
        extra_env={"ENVWEAVE_KEPT": "from-parent"},
    )
    assert overridden.stdout.strip() == "from-file from-file"


def test_run_propagates_exit_code(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("X=1\n", encoding="utf-8")
    result = _run_cli("run", "-q", "--", sys.executable, "-c", "raise SystemExit(3)", cwd=tmp_path)
    assert result.returncode == 3


def test_run_missing_env_file(tmp_path: Path) -> None:
    result = _run_cli("run", "-f", "nope.env", "--", sys.executable, "-c", "pass", cwd=tmp_path)
    assert result.returncode == 1


def test_check_and_show_report_invalid_utf8(tmp_path: Path) -> None:
    (tmp_path / "bad.env").write_bytes(b"A=1\nB=\xff\n")
    checked = _run_cli("check", "bad.env", cwd=tmp_path)
    assert checked.returncode == 1
    assert "INVALID" in checked.stdout
    assert "Traceback" not in checked.stderr

    shown = _run_cli("show", "bad.env", cwd=tmp_path)
    assert shown.returncode == 1
    assert "Traceback" not in shown.stderr
