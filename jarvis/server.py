import functools
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, TypeVar, cast

from jarvis.config import LOG_LEVEL, SEED_DEVICES, SERVER_NAME

# Set up logging
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler()
    ]
)
logger = logging.getLogger(__name__)

from jarvis.dispatcher import Dispatcher
from jarvis.errors import NotFoundError
from jarvis.handlers import build_dispatcher
from jarvis.prompts import PROMPTS
from jarvis.state import AppState

# Type variable for generic functions
T = TypeVar('T')

from mcp.server.fastmcp import FastMCP
import mcp.types as types

INSTRUCTIONS = (
    "JARVIS personal assistant. Manages tasks, reminders, a schedule and smart home "
    "devices, reports on security and system health, and offers calculation, unit "
    "conversion and weather tools."
)


def async_handler(command_type: str):
    """
    Simple decorator that logs the command

    Args:
        command_type: The type of command (for logging)
    """
    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            logger.info(f"Executing command: {command_type}")
            return await func(*args, **kwargs)
        return cast(Callable[..., Awaitable[T]], wrapper)
    return decorator


class JarvisMCP(FastMCP):
    """
    FastMCP server whose tool surface is the dispatcher's registry

    Tool listing and invocation go straight to the dispatcher so that the
    published input schemas and argument validation come from the same
    request models. Prompts and resources use the regular FastMCP decorators.
    """

    def __init__(self, dispatcher: Dispatcher, name: str = SERVER_NAME, **kwargs: Any):
        super().__init__(name, instructions=INSTRUCTIONS, **kwargs)
        self.dispatcher = dispatcher

    async def list_tools(self) -> List[types.Tool]:
        return [
            types.Tool(name=tool.name, description=tool.description, inputSchema=tool.input_schema)
            for tool in self.dispatcher.list_tools()
        ]

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> Sequence[types.TextContent]:
        response = self.dispatcher.invoke(name, arguments or {})
        return [types.TextContent(type="text", text=response.text)]


def _device_markdown(device) -> str:
    result = f"# Device: {device.name}\n\n"
    result += f"**ID**: {device.id}\n\n"
    result += f"**Type**: {device.type}\n\n"
    result += f"**Room**: {device.room}\n\n"
    result += f"**Status**: {device.status}\n\n"
    if device.settings:
        result += "## Settings\n\n"
        for key, value in device.settings.items():
            result += f"- **{key}**: {value}\n"
    return result


def create_server(state: AppState, dispatcher: Optional[Dispatcher] = None) -> JarvisMCP:
    """
    Build the MCP server for an application state

    Args:
        state: Stores and security log served by this instance
        dispatcher: Pre-built dispatcher; one is wired from state when omitted
    """
    server = JarvisMCP(dispatcher or build_dispatcher(state))

    for prompt in PROMPTS:
        server.prompt()(prompt)

    @server.resource("jarvis://tasks")
    @async_handler("get_tasks_resource")
    async def get_tasks_resource() -> str:
        """
        Get all tasks as a markdown resource, grouped by status
        """
        tasks = state.tasks.list()
        if not tasks:
            return "# Tasks\n\nNo tasks."
        result = f"# Tasks ({len(tasks)})\n\n"
        for status in ("pending", "in_progress", "completed"):
            group = [task for task in tasks if task.status == status]
            if not group:
                continue
            result += f"## {status.replace('_', ' ').title()} ({len(group)})\n\n"
            for task in group:
                due = f", due {task.due_date}" if task.due_date else ""
                result += f"- **{task.title}** `{task.id}` ({task.priority}{due})\n"
            result += "\n"
        return result

    @server.resource("jarvis://devices")
    @async_handler("get_devices_resource")
    async def get_devices_resource() -> str:
        """
        Get all smart home devices as a markdown resource, grouped by room
        """
        devices = state.devices.list()
        result = f"# Smart Home Devices ({len(devices)})\n\n"
        rooms: Dict[str, list] = {}
        for device in devices:
            rooms.setdefault(device.room, []).append(device)
        for room, members in sorted(rooms.items()):
            result += f"## {room}\n\n"
            for device in members:
                result += f"- **{device.name}** `{device.id}` ({device.type}): {device.status}\n"
            result += "\n"
        return result

    @server.resource("jarvis://devices/{device_id}")
    @async_handler("get_device_resource")
    async def get_device_resource(device_id: str) -> str:
        """
        Get one smart home device as a markdown resource

        Args:
            device_id: The device ID to get information for
        """
        try:
            device = state.devices.get(device_id)
        except NotFoundError as e:
            return f"# Device: {device_id}\n\nError retrieving device: {e}"
        return _device_markdown(device)

    @server.resource("jarvis://security/log")
    @async_handler("get_security_log_resource")
    async def get_security_log_resource() -> str:
        """
        Get the security log, newest entry first
        """
        entries = state.security_log.entries()
        result = f"# Security Log ({len(entries)}/{state.security_log.limit})\n\n"
        for entry in entries:
            result += f"- `{entry.timestamp}` **{entry.severity.upper()}** [{entry.source}] {entry.event}\n"
        return result

    return server


# Create the MCP server
app_state = AppState.create(seed_devices=SEED_DEVICES)
mcp = create_server(app_state)
