"""
Tool registry and dispatcher

The dispatcher is the single boundary between the transport and the tool
handlers. Every invocation produces exactly one ToolResponse: unknown tools,
invalid arguments, missing entities and failed computations are all turned
into text here rather than raised into the MCP layer.
"""

import functools
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Type, get_args

from pydantic import ValidationError

from jarvis.errors import JarvisError, UnknownToolError, ValidationFailure
from jarvis.requests import ToolRequest, parse_request

logger = logging.getLogger(__name__)

Handler = Callable[[ToolRequest], str]


@dataclass(frozen=True)
class ToolResponse:
    """Uniform response envelope: one text payload per invocation"""
    text: str
    is_error: bool = False


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    description: str
    request_model: Type[ToolRequest]
    handler: Handler = field(repr=False)

    @functools.cached_property
    def input_schema(self) -> Dict[str, Any]:
        return self.request_model.input_schema()

    def describe(self) -> Dict[str, Any]:
        return {"name": self.name, "description": self.description, "inputSchema": self.input_schema}


class ToolRegistry:
    """Registry that maps tool names to request models and handlers"""

    def __init__(self) -> None:
        self._tools: Dict[str, ToolDescriptor] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def register(self, name: str, description: str, request_model: Type[ToolRequest], handler: Handler) -> ToolDescriptor:
        if name in self._tools:
            raise ValueError(f"Tool '{name}' is already registered")
        if get_args(request_model.model_fields["tool"].annotation) != (name,):
            raise ValueError(f"{request_model.__name__} is not tagged for tool '{name}'")
        descriptor = ToolDescriptor(name, description, request_model, handler)
        self._tools[name] = descriptor
        return descriptor

    def get(self, name: str) -> ToolDescriptor:
        try:
            return self._tools[name]
        except KeyError:
            raise UnknownToolError(name) from None

    def descriptors(self) -> List[ToolDescriptor]:
        return list(self._tools.values())


def _describe_validation_error(error: ValidationError) -> List[str]:
    problems = []
    for item in error.errors():
        # The first location element is the union tag (the tool name)
        loc = [str(part) for part in item.get("loc", ())[1:]]
        where = ".".join(loc) if loc else "arguments"
        problems.append(f"{where}: {item.get('msg', 'invalid value')}")
    return problems


class Dispatcher:
    """Validates arguments, runs handlers and normalizes their outcomes"""

    def __init__(self, registry: ToolRegistry):
        self.registry = registry

    def list_tools(self) -> List[ToolDescriptor]:
        return self.registry.descriptors()

    def invoke(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolResponse:
        logger.info(f"Executing command: {name}")
        try:
            descriptor = self.registry.get(name)
            try:
                request = parse_request(name, arguments)
            except ValidationError as e:
                raise ValidationFailure(name, _describe_validation_error(e)) from e
            return ToolResponse(descriptor.handler(request))
        except UnknownToolError as e:
            logger.warning(f"Unknown tool requested: {name}")
            return ToolResponse(str(e), is_error=True)
        except ValidationFailure as e:
            logger.warning(str(e))
            return ToolResponse(str(e), is_error=True)
        except JarvisError as e:
            logger.info(f"{name} failed: {e}")
            return ToolResponse(str(e), is_error=True)
        except Exception as e:
            logger.exception(f"Unexpected error in {name}")
            return ToolResponse(f"Unexpected error while running {name}: {str(e)}", is_error=True)
