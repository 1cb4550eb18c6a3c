import logging
import os

from gemini_cli.config.env_loader import (
    EnvFile,
    default_search_paths,
    load,
    read_env_file,
    take_snapshot,
)


def _write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_default_search_paths_order(workspace_dir, home_dir):
    paths = default_search_paths(workspace_dir, home_dir)

    assert [p.path for p in paths] == [
        workspace_dir.resolve() / ".gemini" / ".env",
        workspace_dir.resolve() / ".env",
        home_dir.resolve() / ".gemini" / ".env",
        home_dir.resolve() / ".env",
    ]
    assert [p.project_scoped for p in paths] == [True, True, False, False]


def test_default_search_paths_workspace_is_home(home_dir):
    paths = default_search_paths(home_dir, home_dir)

    assert len(paths) == 2
    assert not any(p.project_scoped for p in paths)


def test_earlier_file_wins(tmp_path):
    first = _write(tmp_path / "a.env", "SHARED=first\nONLY_A=a\n")
    second = _write(tmp_path / "b.env", "SHARED=second\nONLY_B=b\n")
    environ = {}

    applied = load([first, second], environ=environ)

    assert environ == {"SHARED": "first", "ONLY_A": "a", "ONLY_B": "b"}
    assert applied == environ


def test_ambient_variable_is_never_overwritten(tmp_path):
    first = _write(tmp_path / "a.env", "GEMINI_API_KEY=from-file\n")
    second = _write(tmp_path / "b.env", "GEMINI_API_KEY=other-file\n")
    environ = {"GEMINI_API_KEY": "ambient"}

    applied = load([first, second], environ=environ)

    assert environ["GEMINI_API_KEY"] == "ambient"
    assert applied == {}


def test_missing_files_are_skipped(tmp_path):
    present = _write(tmp_path / "present.env", "A=1\n")
    environ = {}

    load([tmp_path / "missing.env", present], environ=environ)

    assert environ == {"A": "1"}


def test_malformed_lines_are_skipped_with_warning(tmp_path, caplog):
    path = _write(tmp_path / ".env", "GOOD=1\nthis is not valid ===\nBARE_KEY\nALSO_GOOD=2\n")
    environ = {}

    with caplog.at_level(logging.WARNING):
        load([path], environ=environ)

    assert environ["GOOD"] == "1"
    assert environ["ALSO_GOOD"] == "2"
    assert "BARE_KEY" not in environ
    assert any(record.levelno == logging.WARNING for record in caplog.records)


def test_excluded_vars_only_apply_to_project_files(tmp_path):
    project = _write(tmp_path / "project.env", "DEBUG=1\nPROJECT_ONLY=p\n")
    home = _write(tmp_path / "home.env", "DEBUG=home\n")
    environ = {}

    load([EnvFile(project, True), EnvFile(home, False)], excluded_vars=["DEBUG"], environ=environ)

    assert environ == {"PROJECT_ONLY": "p", "DEBUG": "home"}


def test_load_writes_os_environ_by_default(tmp_path, monkeypatch):
    monkeypatch.delenv("GEMINI_TEST_FROM_FILE", raising=False)
    path = _write(tmp_path / ".env", "GEMINI_TEST_FROM_FILE=yes\n")

    load([path])

    assert os.environ["GEMINI_TEST_FROM_FILE"] == "yes"
    monkeypatch.delenv("GEMINI_TEST_FROM_FILE")


def test_read_env_file_handles_quotes(tmp_path):
    path = _write(tmp_path / ".env", 'GOOGLE_CLOUD_PROJECT="penify-prod"\nexport GOOGLE_CLOUD_LOCATION=global\n')

    assert read_env_file(path) == {
        "GOOGLE_CLOUD_PROJECT": "penify-prod",
        "GOOGLE_CLOUD_LOCATION": "global",
    }


def test_take_snapshot_is_read_only_copy():
    environ = {"A": "1"}

    snapshot = take_snapshot(environ)
    environ["A"] = "2"

    assert snapshot["A"] == "1"
    try:
        snapshot["A"] = "3"
    except TypeError:
        pass
    else:
        raise AssertionError("snapshot accepted a write")
