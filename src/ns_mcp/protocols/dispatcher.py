"""ToolDispatcher — routes tool calls through validation to the NS API.

Every call goes: catalog lookup → tool-specific shaping → validator →
typed arguments + defaults → upstream operation → formatter. Nothing
raised along the way escapes :meth:`ToolDispatcher.call_tool`; every
outcome is a :class:`ResponseEnvelope`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import TYPE_CHECKING, Any
from zoneinfo import ZoneInfo

from ns_mcp.ns_api.errors import NSApiError
from ns_mcp.protocols.errors import InvalidParamsError, ProtocolError, ToolNotFoundError
from ns_mcp.protocols.formatter import format_error, format_success
from ns_mcp.tools.arguments import coerce_arguments
from ns_mcp.tools.catalog import CATALOG, TIMEZONE, TOOLS, ToolSpec, index_catalog
from ns_mcp.utils.telemetry import ATTR_TOOL_IS_ERROR, ATTR_TOOL_NAME, get_tracer

if TYPE_CHECKING:
    from ns_mcp.ns_api.client import NSApiClient
    from ns_mcp.protocols.mcp.models import ResponseEnvelope, ToolDescriptor
    from ns_mcp.tools.arguments import ToolArguments

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


def _amsterdam_now() -> datetime:
    return datetime.now(ZoneInfo(TIMEZONE))


class ToolDispatcher:
    """Maintains the name-to-tool table and dispatches ``tools/call`` requests.

    Usage::

        dispatcher = ToolDispatcher(NSApiClient(settings.ns_api_key))
        tools = dispatcher.list_tools()
        envelope = await dispatcher.call_tool("get_departures", {"station": "ASD"})
    """

    def __init__(
        self,
        client: NSApiClient,
        *,
        catalog: tuple[ToolSpec, ...] = CATALOG,
        clock: Callable[[], datetime] = _amsterdam_now,
    ) -> None:
        self._client = client
        self._tools = TOOLS if catalog is CATALOG else index_catalog(catalog)
        self._descriptors = [spec.descriptor for spec in catalog]
        self._clock = clock

    def list_tools(self) -> list[ToolDescriptor]:
        """Return the tool descriptors in catalog order."""
        return list(self._descriptors)

    async def call_tool(self, name: str, arguments: Any = None) -> ResponseEnvelope:
        """Validate and execute one tool call. Never raises."""
        with _tracer.start_as_current_span("ns_mcp.tool.call") as span:
            span.set_attribute(ATTR_TOOL_NAME, name)
            envelope = await self._call(name, {} if arguments is None else arguments)
            span.set_attribute(ATTR_TOOL_IS_ERROR, envelope.is_error)
            return envelope

    async def _call(self, name: str, raw: Any) -> ResponseEnvelope:
        logger.debug("Calling tool %s with %r", name, raw)
        try:
            spec = self._tools.get(name)
            if spec is None:
                raise ToolNotFoundError(name)
            args = self._validate(spec, raw)
            return format_success(await self._execute(spec, args))
        except ProtocolError as exc:
            logger.info("Rejected call to %s: %s", name, exc)
            return format_error(exc)
        except NSApiError as exc:
            logger.warning("NS API call for %s failed: %s", name, exc.message)
            return format_error(exc)
        except Exception as exc:
            logger.exception("Unexpected failure in tool %s", name)
            return format_error(exc)

    def _validate(self, spec: ToolSpec, raw: Any) -> ToolArguments:
        if not isinstance(raw, Mapping):
            raise InvalidParamsError(spec.name, raw)
        shaped = spec.prepare(raw) if spec.prepare is not None else dict(raw)
        if not spec.validator(shaped):
            raise InvalidParamsError(spec.name, dict(raw))

        args = coerce_arguments(spec.arguments, shaped)
        missing = {
            key: value for key, value in spec.defaults.items() if getattr(args, key) is None
        }
        return args.model_copy(update=missing) if missing else args

    async def _execute(self, spec: ToolSpec, args: ToolArguments) -> Any:
        if spec.operation is None:
            return self._current_time()
        operation = getattr(self._client, spec.operation)
        return await operation(args)

    def _current_time(self) -> dict[str, str]:
        return {
            "datetime": self._clock().isoformat(timespec="seconds"),
            "timezone": TIMEZONE,
        }
