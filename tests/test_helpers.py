"""Tests for gocross.helpers and gocross.log."""

import io
import logging
import os
from pathlib import Path

import pytest

from gocross.errors import ProjectNameError
from gocross.helpers import format_duration, project_name, resolve_project_dir
from gocross.log import make_logger


class TestProjectName:
    def test_unix_path(self) -> None:
        assert project_name("/usr/home/username/projects/myproject") == "myproject"

    def test_windows_path(self) -> None:
        assert project_name("C:/Users/username/projects/myproject") == "myproject"
        assert project_name(r"C:\Users\username\projects\myproject") == "myproject"

    def test_trailing_separator(self) -> None:
        assert project_name("/srv/myproject/") == "myproject"

    def test_current_dir(self) -> None:
        assert project_name(".") == os.path.basename(os.getcwd())

    def test_path_object(self, go_project: Path) -> None:
        assert project_name(go_project) == "myproject"

    def test_root_raises(self) -> None:
        with pytest.raises(ProjectNameError):
            project_name("/")

    def test_cwd_failure_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def boom() -> str:
            raise FileNotFoundError("cwd removed")

        monkeypatch.setattr(os, "getcwd", boom)
        with pytest.raises(ProjectNameError, match="cwd removed"):
            project_name(".")


class TestResolveProjectDir:
    def test_defaults_to_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        assert resolve_project_dir(None) == tmp_path
        assert resolve_project_dir("") == tmp_path
        assert resolve_project_dir(".") == tmp_path

    def test_explicit(self, go_project: Path) -> None:
        assert resolve_project_dir(str(go_project)) == go_project

    def test_relative_is_made_absolute(self, go_project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(go_project.parent)
        res = resolve_project_dir("./myproject")
        assert res.is_absolute()
        assert res == Path.cwd() / "myproject"


class TestFormatDuration:
    def test_seconds(self) -> None:
        assert format_duration(1.234) == "1.2s"

    def test_minutes(self) -> None:
        assert format_duration(125) == "2m05s"


class TestMakeLogger:
    def test_quiet_hides_debug(self) -> None:
        stream = io.StringIO()
        logger = make_logger(verbose=False, stream=stream)
        logger.debug("hidden")
        logger.info("shown")
        assert stream.getvalue() == "shown\n"

    def test_verbose_prefixes_debug(self) -> None:
        stream = io.StringIO()
        logger = make_logger(verbose=True, stream=stream)
        logger.debug("project dir: %s", "/x")
        assert stream.getvalue() == "verbose: project dir: /x\n"
        assert logger.level == logging.DEBUG

    def test_verbosity_loggers_are_independent(self) -> None:
        a = make_logger(verbose=True, stream=io.StringIO())
        b = make_logger(verbose=False, stream=io.StringIO())
        assert a is not b
        assert a.level != b.level
        assert not a.propagate

    def test_repeated_runs_reuse_logger_and_replace_handler(self) -> None:
        first, second = io.StringIO(), io.StringIO()
        a = make_logger(verbose=False, stream=first)
        b = make_logger(verbose=False, stream=second)
        assert a is b
        assert len(b.handlers) == 1
        b.info("run two")
        assert first.getvalue() == ""
        assert second.getvalue() == "run two\n"
