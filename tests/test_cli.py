"""Tests for the question-feed command line."""

from __future__ import annotations

import argparse
import json
from io import StringIO
from pathlib import Path
from unittest import mock

import pytest

from question_feed import cli
from question_feed.exceptions import NetworkError
from question_feed.models import Role, Viewer
from question_feed.session import SessionStore

from conftest import FakeService, make_question


class FakeGateway(FakeService):
    """FakeService accepting the gateway constructor arguments."""

    instance: FakeGateway | None = None
    questions_to_serve: tuple = ()
    list_failure: Exception | None = None

    def __init__(self, base_url: str, timeout: float) -> None:
        super().__init__(self.questions_to_serve, list_error=self.list_failure)
        self.closed = False
        FakeGateway.instance = self

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def gateway():
    FakeGateway.instance = None
    FakeGateway.questions_to_serve = (
        make_question("q1", votes=5, minutes=0, title="First"),
        make_question("q2", votes=12, minutes=10, title="Second", author_id="u2", username="bob"),
    )
    FakeGateway.list_failure = None
    with mock.patch.object(cli, "QuestionGateway", FakeGateway):
        yield FakeGateway


def _args(session: Path, command: str, **extra) -> argparse.Namespace:
    return argparse.Namespace(
        backend_url="http://api.test",
        session=str(session),
        timeout=5.0,
        verbose=False,
        command=command,
        **extra,
    )


def _admin_session(tmp_path: Path) -> Path:
    path = tmp_path / "session.yaml"
    SessionStore(path).save("tok", Viewer(id="a1", role=Role.ADMIN, username="root"))
    return path


class TestParser:
    def test_list_defaults(self):
        args = cli.build_parser().parse_args(["list"])
        assert args.command == "list"
        assert args.sort == "newest"
        assert args.format == "text"

    def test_rejects_unknown_sort(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["list", "--sort", "oldest"])


class TestListCommand:
    def test_text_output_sorted_by_votes(self, gateway, tmp_path):
        args = _args(tmp_path / "none.yaml", "list", sort="votes", format="text")

        with mock.patch("sys.stdout", new_callable=StringIO) as stdout:
            code = cli.list_questions(args)
        output = stdout.getvalue()

        assert code == 0
        assert output.index("Second") < output.index("First")
        assert "id:" not in output
        assert gateway.instance.closed

    def test_admin_sees_ids(self, gateway, tmp_path):
        args = _args(_admin_session(tmp_path), "list", sort="newest", format="text")
        with mock.patch("sys.stdout", new_callable=StringIO) as stdout:
            cli.list_questions(args)
        assert "id: q1" in stdout.getvalue()

    def test_json_output(self, gateway, tmp_path):
        args = _args(tmp_path / "none.yaml", "list", sort="newest", format="json")

        with mock.patch("sys.stdout", new_callable=StringIO) as stdout:
            cli.list_questions(args)
        data = json.loads(stdout.getvalue())

        assert data["status"] == "ready"
        assert [q["id"] for q in data["questions"]] == ["q2", "q1"]

    def test_load_failure(self, gateway, tmp_path):
        gateway.list_failure = NetworkError("Cannot connect to http://api.test")
        args = _args(tmp_path / "none.yaml", "list", sort="newest", format="text")

        with mock.patch("sys.stdout", new_callable=StringIO) as stdout:
            code = cli.list_questions(args)

        assert code == 1
        assert "Something went wrong" in stdout.getvalue()

    def test_empty_feed(self, gateway, tmp_path):
        gateway.questions_to_serve = ()
        args = _args(tmp_path / "none.yaml", "list", sort="newest", format="text")
        with mock.patch("sys.stdout", new_callable=StringIO) as stdout:
            cli.list_questions(args)
        assert "No questions yet" in stdout.getvalue()


class TestModerationCommands:
    def test_delete_with_yes(self, gateway, tmp_path):
        args = _args(_admin_session(tmp_path), "delete", question_id="q1", yes=True)
        assert cli.delete(args) == 0
        assert ("delete", "q1", "tok") in gateway.instance.calls

    def test_delete_prompt_declined(self, gateway, tmp_path):
        args = _args(_admin_session(tmp_path), "delete", question_id="q1", yes=False)
        with mock.patch("builtins.input", return_value="n") as prompt:
            assert cli.delete(args) == 0
        assert '"First"' in prompt.call_args.args[0]
        assert gateway.instance.calls == [("list",)]

    def test_ban_uses_author_name(self, gateway, tmp_path):
        args = _args(_admin_session(tmp_path), "ban", user_id="u2", yes=False)
        with mock.patch("builtins.input", return_value="yes") as prompt:
            assert cli.ban(args) == 0
        assert '"bob"' in prompt.call_args.args[0]
        assert ("ban", "u2", "tok") in gateway.instance.calls

    def test_signed_out_is_refused(self, gateway, tmp_path):
        args = _args(tmp_path / "none.yaml", "ban", user_id="u2", yes=True)
        assert cli.ban(args) == 1
        assert gateway.instance.calls == [("list",)]


class TestPromptConfirm:
    def test_eof_declines(self):
        with mock.patch("builtins.input", side_effect=EOFError):
            assert cli.prompt_confirm("Sure?") is False


class TestMain:
    """Exit status of the console entry point."""

    def test_list_exits_zero(self, gateway, tmp_path):
        argv = ["question-feed", "--session", str(tmp_path / "none.yaml"), "list", "--sort", "votes"]
        with mock.patch("sys.argv", argv), mock.patch("sys.stdout", new_callable=StringIO):
            with pytest.raises(SystemExit) as info:
                cli.main()
        assert info.value.code == 0
        assert gateway.instance.closed

    def test_failed_load_exits_one(self, gateway, tmp_path):
        gateway.list_failure = NetworkError("Cannot connect to http://api.test")
        argv = ["question-feed", "--session", str(tmp_path / "none.yaml"), "list"]
        with mock.patch("sys.argv", argv), mock.patch("sys.stdout", new_callable=StringIO):
            with pytest.raises(SystemExit) as info:
                cli.main()
        assert info.value.code == 1

    def test_ban_routes_to_ban_command(self, gateway, tmp_path):
        argv = ["question-feed", "--session", str(_admin_session(tmp_path)), "ban", "u2", "--yes"]
        with mock.patch("sys.argv", argv):
            with pytest.raises(SystemExit) as info:
                cli.main()
        assert info.value.code == 0
        assert ("ban", "u2", "tok") in gateway.instance.calls

    def test_missing_command_is_usage_error(self):
        with mock.patch("sys.argv", ["question-feed"]), mock.patch("sys.stderr", new_callable=StringIO):
            with pytest.raises(SystemExit) as info:
                cli.main()
        assert info.value.code == 2
