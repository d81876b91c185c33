"""Exception hierarchy for tool handlers.

The dispatcher is the only place these are turned into response text; a
handler raises and never formats its own failure envelope.
"""


class JarvisError(Exception):
    """Base class for recoverable errors raised while serving a tool call"""


class NotFoundError(JarvisError, KeyError):
    """A referenced id is absent from its store"""

    def __init__(self, kind: str, entity_id: str):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} with ID {entity_id} not found.")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class ValidationFailure(JarvisError):
    """Arguments did not match the tool's request model"""

    def __init__(self, tool: str, problems: list):
        self.tool = tool
        self.problems = problems
        super().__init__(f"Invalid arguments for {tool}: " + "; ".join(problems))


class UnknownToolError(JarvisError):
    """Dispatch target is not registered"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}. I'm not familiar with that command, sir.")


class ComputationError(JarvisError):
    """A stateless computation could not produce a result"""


class ExpressionError(ComputationError):
    """Malformed or unsupported arithmetic expression"""


class UnsupportedConversion(ComputationError):
    """No conversion rule between the requested units"""
