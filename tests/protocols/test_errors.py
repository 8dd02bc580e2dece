"""Tests for the protocol error hierarchy."""

from ns_mcp.protocols.errors import (
    INVALID_PARAMS,
    METHOD_NOT_FOUND,
    InvalidParamsError,
    ProtocolError,
    ToolNotFoundError,
)


class TestErrorHierarchy:
    def test_tool_not_found_is_protocol_error(self) -> None:
        assert issubclass(ToolNotFoundError, ProtocolError)

    def test_invalid_params_is_protocol_error(self) -> None:
        assert issubclass(InvalidParamsError, ProtocolError)


class TestToolNotFoundError:
    def test_code_and_message(self) -> None:
        err = ToolNotFoundError("get_unicorn")
        assert err.code == METHOD_NOT_FOUND
        assert err.name == "get_unicorn"
        assert err.message == "Unknown tool: get_unicorn"
        assert str(err) == "MCP error -32601: Unknown tool: get_unicorn"


class TestInvalidParamsError:
    def test_echoes_arguments(self) -> None:
        err = InvalidParamsError("get_departures", {"maxJourneys": 0})
        assert err.code == INVALID_PARAMS
        assert err.message == 'Invalid arguments for get_departures: {"maxJourneys": 0}'

    def test_without_arguments(self) -> None:
        err = InvalidParamsError("get_departures", {})
        assert err.message == "Invalid arguments for get_departures"
