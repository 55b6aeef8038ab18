"""Tests for CLI output formatting."""

import json

from ariesbot.output.formatters import format_reply, format_result
from ariesbot.services.result import ServiceResult


class TestFormatReply:
    def test_success_is_reply_text(self) -> None:
        assert format_reply(ServiceResult.success("ping", text=None), "pong") == "pong"

    def test_failure_has_status_line(self) -> None:
        result = ServiceResult.failure("rm_user", "NOT_FOUND", "gone", user="bob")
        output = format_reply(result, "user bob doesn't exist")
        assert output.startswith("ERROR")
        assert "rm_user" in output
        assert "user bob doesn't exist" in output

    def test_json_includes_reply(self) -> None:
        result = ServiceResult.success("gid", guild_id=7)
        parsed = json.loads(format_reply(result, "guild id: 7", json_output=True))
        assert parsed["ok"] is True
        assert parsed["op"] == "gid"
        assert parsed["data"] == {"guild_id": 7}
        assert parsed["reply"] == "guild id: 7"


class TestFormatResult:
    def test_success_lists_fields(self) -> None:
        output = format_result(ServiceResult.success("users", count=2))
        assert output.splitlines()[0].startswith("OK")
        assert "count: 2" in output

    def test_nested_values_compact_json(self) -> None:
        output = format_result(ServiceResult.success("users", items=[{"id": 1}]))
        assert 'items: [{"id":1}]' in output

    def test_failure(self) -> None:
        output = format_result(ServiceResult.failure("upgrade", "CHECK_FAILED", "boom"))
        assert output.startswith("ERROR")
        assert "boom" in output

    def test_json(self) -> None:
        parsed = json.loads(format_result(ServiceResult.success("init"), json_output=True))
        assert parsed["ok"] is True
