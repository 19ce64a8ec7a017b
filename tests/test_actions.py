"""Tests for runner glue: workflow-command logging and PATH export."""

import logging
import os

from anvil_action.actions import WorkflowCommandFormatter, add_path, escape_data, in_actions


def _record(level: int, msg: str) -> logging.LogRecord:
    return logging.LogRecord("anvil_action", level, __file__, 1, msg, None, None)


class TestWorkflowCommandFormatter:
    """Tests for WorkflowCommandFormatter."""

    def test_levels_map_to_commands(self):
        fmt = WorkflowCommandFormatter("%(message)s")
        assert fmt.format(_record(logging.DEBUG, "probe")) == "::debug::probe"
        assert fmt.format(_record(logging.WARNING, "slow")) == "::warning::slow"
        assert fmt.format(_record(logging.ERROR, "boom")) == "::error::boom"

    def test_info_is_plain(self):
        fmt = WorkflowCommandFormatter("%(message)s")
        assert fmt.format(_record(logging.INFO, "started")) == "started"

    def test_multiline_payload_escaped(self):
        fmt = WorkflowCommandFormatter("%(message)s")
        assert fmt.format(_record(logging.ERROR, "a\nb 100%")) == "::error::a%0Ab 100%25"


def test_escape_data():
    assert escape_data("x\r\ny%") == "x%0D%0Ay%25"


def test_in_actions():
    assert in_actions({"GITHUB_ACTIONS": "true"})
    assert not in_actions({})


class TestAddPath:
    """Tests for add_path."""

    def test_prepends_to_path(self, tmp_path):
        environ = {"PATH": "/usr/bin"}
        add_path(tmp_path, environ)
        assert environ["PATH"] == f"{tmp_path}{os.pathsep}/usr/bin"

    def test_empty_path(self, tmp_path):
        environ = {}
        add_path(tmp_path, environ)
        assert environ["PATH"] == str(tmp_path)

    def test_appends_to_github_path_file(self, tmp_path):
        path_file = tmp_path / "github_path"
        path_file.write_text("/first\n")
        environ = {"PATH": "/usr/bin", "GITHUB_PATH": str(path_file)}

        add_path("/opt/tool", environ)

        assert path_file.read_text() == f"/first\n/opt/tool{os.linesep}"
