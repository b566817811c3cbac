"""
Tests for the resource groups: routes, verbs, parameters and bodies.

Run with: python -m pytest opencode_client/tests/test_resources.py -v
"""

import pytest

from opencode_client import DirectoryParams, MissingParameterError
from opencode_client.models import ApiAuth, Config, FileDiff, OAuth, TextPartInput
from opencode_client.resources import (
    AppLogParams,
    AuthSetParams,
    ConfigUpdateParams,
    FileListParams,
    FileReadParams,
    FindTextParams,
    LogLevel,
    ModelRef,
    PermissionRespondParams,
    PermissionResponse,
    SessionCreateParams,
    SessionDiffParams,
    SessionForkParams,
    SessionPromptParams,
    ToastVariant,
    ToolListParams,
    TuiShowToastParams,
)
from opencode_client.tests.conftest import json_reply

SESSION = {
    "id": "ses_1",
    "directory": "/repo",
    "projectID": "prj_1",
    "time": {"created": 1, "updated": 2},
    "title": "chat",
    "version": "0.9.0",
}

ASSISTANT = {
    "id": "msg_2",
    "sessionID": "ses_1",
    "role": "assistant",
    "parentID": "msg_1",
    "modelID": "claude",
    "providerID": "anthropic",
    "mode": "build",
    "path": {"cwd": "/repo", "root": "/repo"},
    "system": [],
    "cost": 0.01,
    "tokens": {"input": 10, "output": 5, "reasoning": 0, "cache": {"read": 0, "write": 0}},
    "time": {"created": 1, "completed": 2},
}

TEXT_PART = {"id": "prt_1", "messageID": "msg_2", "sessionID": "ses_1", "type": "text", "text": "Hello!"}


class TestSessionRoutes:
    """Tests for client.session."""

    @pytest.mark.parametrize(
        "call, method, path",
        [
            (lambda c: c.session.list(), "GET", "/session"),
            (lambda c: c.session.get("ses_1"), "GET", "/session/ses_1"),
            (lambda c: c.session.update("ses_1"), "PATCH", "/session/ses_1"),
            (lambda c: c.session.children("ses_1"), "GET", "/session/ses_1/children"),
            (lambda c: c.session.share("ses_1"), "POST", "/session/ses_1/share"),
            (lambda c: c.session.unshare("ses_1"), "DELETE", "/session/ses_1/share"),
            (lambda c: c.session.unrevert("ses_1"), "POST", "/session/ses_1/unrevert"),
            (lambda c: c.session.fork("ses_1", SessionForkParams()), "POST", "/session/ses_1/fork"),
        ],
    )
    def test_session_returning_routes(self, client, server, call, method, path):
        server.always(json_reply(SESSION))
        call(client)
        sent = server.transport.last()
        assert sent.method == method
        assert server.transport.path() == path

    def test_create_sends_title(self, client, server):
        server.queue(json_reply(SESSION))

        session = client.session.create(SessionCreateParams(title="chat", directory="/repo"))

        assert session.id == "ses_1"
        assert server.transport.json_body() == {"title": "chat"}
        assert server.transport.query() == [("directory", "/repo")]

    def test_create_without_params_sends_empty_object(self, client, server):
        server.queue(json_reply(SESSION))
        client.session.create()
        assert server.transport.json_body() == {}

    def test_delete_and_abort(self, client, server):
        assert client.session.delete("ses_1") is None
        assert server.transport.last().method == "DELETE"
        assert client.session.abort("ses_1") is None
        assert server.transport.path() == "/session/ses_1/abort"

    def test_prompt(self, client, server):
        """Test the prompt body and the decoded reply parts."""
        server.queue(json_reply({"info": ASSISTANT, "parts": [TEXT_PART]}))
        params = SessionPromptParams(
            parts=[TextPartInput(text="Hi")],
            model=ModelRef(provider_id="anthropic", model_id="claude"),
        )

        reply = client.session.prompt("ses_1", params)

        assert server.transport.path() == "/session/ses_1/message"
        assert server.transport.json_body() == {
            "parts": [{"type": "text", "text": "Hi"}],
            "model": {"providerID": "anthropic", "modelID": "claude"},
        }
        assert reply.info.model_id == "claude"
        assert reply.parts[0].as_text().text == "Hello!"

    def test_messages(self, client, server):
        user = {"id": "msg_1", "sessionID": "ses_1", "role": "user", "time": {"created": 1}}
        server.queue(json_reply([{"info": user, "parts": []}, {"info": ASSISTANT, "parts": [TEXT_PART]}]))

        history = client.session.messages("ses_1")

        assert [m.info.role for m in history] == ["user", "assistant"]
        assert history[1].info.as_assistant().cost == 0.01

    def test_diff_query(self, client, server):
        server.queue(json_reply([{"file": "a.py", "before": "", "after": "x", "additions": 1, "deletions": 0}]))

        diffs = client.session.diff("ses_1", SessionDiffParams(message_id="msg_1"))

        assert server.transport.path() == "/session/ses_1/diff"
        assert server.transport.query() == [("messageID", "msg_1")]
        assert diffs == [FileDiff(file="a.py", after="x", additions=1)]

    def test_permission_respond(self, client, server):
        result = client.session.permissions.respond(
            "ses_1", "per_1", PermissionRespondParams(response=PermissionResponse.ALWAYS)
        )

        assert result is True
        assert server.transport.path() == "/session/ses_1/permissions/per_1"
        assert server.transport.json_body() == {"response": "always"}

    def test_ids_are_percent_encoded(self, client, server):
        """Test a hostile id stays inside its path segment."""
        server.queue(json_reply(SESSION))
        client.session.get("../config")
        assert server.transport.last().url == "http://opencode.test/session/..%2Fconfig"


class TestMissingParameters:
    """Tests that bad inputs fail before anything is sent."""

    @pytest.mark.parametrize(
        "call",
        [
            lambda c: c.session.get(""),
            lambda c: c.session.delete(None),
            lambda c: c.session.message("ses_1", ""),
            lambda c: c.session.prompt("ses_1"),
            lambda c: c.session.init("ses_1"),
            lambda c: c.session.summarize("ses_1"),
            lambda c: c.session.permissions.respond("ses_1", "", None),
            lambda c: c.file.read(FileReadParams(path="")),
            lambda c: c.file.list(),
            lambda c: c.find.text(),
            lambda c: c.tool.list(ToolListParams(provider="anthropic", model="")),
            lambda c: c.tui.show_toast(),
            lambda c: c.auth.set("", AuthSetParams(auth=ApiAuth(key="k"))),
            lambda c: c.config.update(),
            lambda c: c.app.log(),
        ],
    )
    def test_nothing_sent(self, client, server, call):
        with pytest.raises(MissingParameterError):
            call(client)
        assert server.transport.calls == 0

    def test_message_names_parameter(self, client):
        with pytest.raises(MissingParameterError, match="messageID"):
            client.session.message("ses_1", "")


class TestDirectoryAndTui:
    def test_directory_query(self, client, server):
        server.queue(json_reply([]))
        client.session.list(DirectoryParams(directory="/work tree"))
        assert server.transport.query() == [("directory", "/work tree")]

    def test_directory_only_post_sends_empty_body(self, client, server):
        assert client.tui.open_help(DirectoryParams(directory="/repo")) is True
        assert server.transport.json_body() == {}

    @pytest.mark.parametrize(
        "name, path",
        [
            ("clear_prompt", "/tui/clear-prompt"),
            ("open_help", "/tui/open-help"),
            ("open_models", "/tui/open-models"),
            ("open_sessions", "/tui/open-sessions"),
            ("open_themes", "/tui/open-themes"),
            ("submit_prompt", "/tui/submit-prompt"),
        ],
    )
    def test_tui_actions(self, client, server, name, path):
        assert getattr(client.tui, name)() is True
        assert server.transport.last().method == "POST"
        assert server.transport.path() == path

    def test_show_toast(self, client, server):
        client.tui.show_toast(TuiShowToastParams(message="saved", variant=ToastVariant.SUCCESS))
        assert server.transport.json_body() == {"message": "saved", "variant": "success"}


class TestConfigAndAuth:
    """Tests for client.config and client.auth."""

    def test_update_sends_only_set_fields(self, client, server):
        server.queue(json_reply({"model": "anthropic/claude", "theme": "dark"}))

        merged = client.config.update(ConfigUpdateParams(config=Config(model="anthropic/claude")))

        assert server.transport.last().method == "PATCH"
        assert server.transport.json_body() == {"model": "anthropic/claude"}
        assert merged.theme == "dark"

    def test_auth_set_reveals_secret_on_the_wire(self, client, server):
        result = client.auth.set("anthropic", AuthSetParams(auth=ApiAuth(key="sk-secret")))

        assert result is True
        assert server.transport.last().method == "PUT"
        assert server.transport.path() == "/auth/anthropic"
        assert server.transport.json_body() == {"type": "api", "key": "sk-secret"}

    def test_auth_set_log_hides_secret(self, client, server, caplog):
        auth = OAuth(access="acc-secret", refresh="ref-secret", expires=1)
        with caplog.at_level("INFO"):
            client.auth.set("github", AuthSetParams(auth=auth))
        assert "acc-secret" not in caplog.text
        assert server.transport.json_body()["refresh"] == "ref-secret"

    def test_providers(self, client, server):
        server.queue(json_reply({"default": {"anthropic": "claude"}, "providers": []}))
        response = client.config.providers()
        assert response.default == {"anthropic": "claude"}
        assert server.transport.path() == "/config/providers"


class TestFilesAndApp:
    def test_file_list(self, client, server):
        server.queue(json_reply([{"name": "src", "path": "src", "type": "directory"}]))

        nodes = client.file.list(FileListParams(path="."))

        assert nodes[0].type == "directory"
        assert server.transport.query() == [("path", ".")]

    def test_file_read(self, client, server):
        server.queue(json_reply({"type": "text", "content": "print(1)\n"}))
        content = client.file.read(FileReadParams(path="main.py"))
        assert content.content == "print(1)\n"
        assert server.transport.path() == "/file/content"

    def test_find_text(self, client, server):
        server.queue(json_reply([]))
        client.find.text(FindTextParams(pattern="def .*"))
        assert server.transport.path() == "/find"
        assert server.transport.query() == [("pattern", "def .*")]

    def test_tool_list_query(self, client, server):
        server.queue(json_reply([]))
        client.tool.list(ToolListParams(provider="anthropic", model="claude"))
        assert server.transport.path() == "/experimental/tool"
        assert server.transport.query() == [("provider", "anthropic"), ("model", "claude")]

    def test_app_log(self, client, server):
        params = AppLogParams(service="ci", level=LogLevel.WARN, message="slow", extra={"ms": 900})
        assert client.app.log(params) is True
        assert server.transport.json_body() == {
            "service": "ci",
            "level": "warn",
            "message": "slow",
            "extra": {"ms": 900},
        }

    def test_path_and_mcp(self, client, server):
        server.queue(
            json_reply({"config": "/c", "directory": "/repo", "state": "/s", "worktree": "/repo"}),
            json_reply({"github": {"status": "connected"}}),
        )
        assert client.path.get().worktree == "/repo"
        assert client.mcp.status() == {"github": {"status": "connected"}}
