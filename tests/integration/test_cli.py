"""Integration tests: the readkit CLI end to end (network mocked)."""

from __future__ import annotations

import io
import json
import shutil
from pathlib import Path
from unittest.mock import patch

import pytest
import requests

from readkit import __version__
from readkit.cli import main
from readkit.config import READKIT_DIR

REPO_ROOT = Path(__file__).resolve().parent.parent.parent
SAMPLE_RESOURCES = REPO_ROOT / "resources"


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A project directory with a copy of the sample resources."""
    dest = tmp_path / "project"
    dest.mkdir()
    if SAMPLE_RESOURCES.is_dir():
        shutil.copytree(SAMPLE_RESOURCES, dest / "resources")
    else:
        res = dest / "resources"
        res.mkdir()
        (res / "file1.txt").write_text("one two three four\n", encoding="utf-8")
        (res / "file2.txt").write_text("binary\n", encoding="utf-8")
        (res / "file3.txt").write_text("channel\n", encoding="utf-8")
    return dest


def _response(body: bytes) -> requests.Response:
    response = requests.Response()
    response.status_code = 200
    response.raw = io.BytesIO(body)
    return response


def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])
    assert excinfo.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_run_prints_ten_banners(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with patch("readkit.readers.requests.get", return_value=_response(b"remote body")) as get:
        main(["-q", "run", str(project), "--url", "http://example.invalid/"])
    out = capsys.readouterr().out
    banners = [line for line in out.splitlines() if line.startswith("---- ")]
    assert banners == [f"---- {n} ----" for n in range(1, 11)]
    assert out.rstrip().endswith("remote body")
    assert get.call_args.args[0] == "http://example.invalid/"


def test_run_network_failure_stops_with_message(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with patch(
        "readkit.readers.requests.get",
        side_effect=requests.ConnectionError("connection refused"),
    ):
        main(["-q", "run", str(project)])
    out = capsys.readouterr().out
    assert out.count("connection refused") == 1
    assert out.rstrip().splitlines()[-1] == "connection refused"


def test_run_halts_on_missing_local_file(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (project / "resources" / "file1.txt").unlink()
    with patch("readkit.readers.requests.get") as get:
        main(["-q", "run", str(project)])
    get.assert_not_called()
    out = capsys.readouterr().out
    assert "---- 3 ----" in out
    assert "---- 4 ----" not in out


def test_run_keep_going(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (project / "resources" / "file1.txt").unlink()
    with patch("readkit.readers.requests.get", return_value=_response(b"still ran")):
        main(["-q", "run", str(project), "--keep-going"])
    out = capsys.readouterr().out
    assert "---- 10 ----" in out
    assert "still ran" in out


def test_run_on_error_from_project_config(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["init", str(project)])
    main(["config", str(project), "--set", "demo.on_error=continue"])
    (project / "resources" / "file1.txt").unlink()
    capsys.readouterr()
    with patch("readkit.readers.requests.get", return_value=_response(b"ok")):
        main(["-q", "run", str(project)])
    assert "---- 10 ----" in capsys.readouterr().out


def test_read_single_step(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (project / "resources" / "hello.txt").write_text("hello world\n", encoding="utf-8")
    main(["-q", "read", "6", "hello.txt", "--path", str(project)])
    out = capsys.readouterr().out.splitlines()
    assert out == ["---- 6 ----", "['HELLO WORLD']"]


def test_read_failure_prints_message(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (project / "resources" / "short.txt").write_text("too short", encoding="utf-8")
    main(["-q", "read", "7", "short.txt", "--path", str(project)])
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "---- 7 ----"
    assert "found 2" in out[1]


def test_read_bad_number_exits(project: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["-q", "read", "12", "--path", str(project)])
    assert excinfo.value.code == 1


def test_list_shows_bundled_and_local(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (project / "resources" / "notes.bak").write_text("x")
    (project / "resources" / ".hidden").write_text("x")
    main(["init", str(project)])
    main(["config", str(project), "--add", "ignore.additional_patterns", "*.bak"])
    capsys.readouterr()
    main(["-q", "list", str(project)])
    out = capsys.readouterr().out
    assert "Bundled (readkit.data):" in out
    assert "  file1.txt" in out
    assert "__init__.py" not in out
    assert "notes.bak" not in out
    assert ".hidden" not in out


def test_init_and_config_show(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["init", str(project)])
    assert (project / READKIT_DIR / "config.json").is_file()
    main(["config", str(project), "--set", "http.timeout=3"])
    capsys.readouterr()
    main(["config", str(project), "--show"])
    out = capsys.readouterr().out
    data = json.loads(out[out.find("{"):])
    assert data["http"]["timeout"] == 3
    assert data["demo"]["on_error"] == "halt"


def test_config_rejects_unknown_policy(project: Path) -> None:
    main(["init", str(project)])
    with pytest.raises(SystemExit) as excinfo:
        main(["config", str(project), "--set", "demo.on_error=retry"])
    assert excinfo.value.code == 1


def test_config_without_action_exits(project: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["config", str(project)])
    assert excinfo.value.code == 1


def test_config_add_then_remove_pattern(project: Path) -> None:
    main(["init", str(project)])
    main(["config", str(project), "--add", "ignore.additional_patterns", "*.bak"])
    main(["config", str(project), "--add", "ignore.additional_patterns", "*.tmp"])
    main(["config", str(project), "--remove", "ignore.additional_patterns", "*.bak"])
    saved = json.loads((project / READKIT_DIR / "config.json").read_text(encoding="utf-8"))
    assert saved == {"ignore": {"additional_patterns": ["*.tmp"]}}


def test_config_set_without_equals_exits(project: Path) -> None:
    main(["init", str(project)])
    with pytest.raises(SystemExit) as excinfo:
        main(["config", str(project), "--set", "demo.url"])
    assert excinfo.value.code == 1


def test_config_rejects_non_numeric_timeout(project: Path) -> None:
    main(["init", str(project)])
    with pytest.raises(SystemExit) as excinfo:
        main(["config", str(project), "--set", "http.timeout=soon"])
    assert excinfo.value.code == 1


def test_config_set_without_project_writes_global(
    project: Path, isolated_global_config: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    main(["config", str(project), "--set", "demo.url=http://example.invalid/"])
    assert "global config" in capsys.readouterr().out
    saved = json.loads((isolated_global_config / "config.json").read_text(encoding="utf-8"))
    assert saved["demo"]["url"] == "http://example.invalid/"
