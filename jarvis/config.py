import os

# Environment configuration for the JARVIS MCP server

def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default

def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if raw in ("1", "true", "yes", "on"):
        return True
    if raw in ("0", "false", "no", "off"):
        return False
    return default

SERVER_NAME = os.environ.get("JARVIS_SERVER_NAME", "jarvis-mcp")
LOG_LEVEL = os.environ.get("JARVIS_LOG_LEVEL", "INFO").upper()

# Maximum number of security log entries kept in memory
SECURITY_LOG_LIMIT = max(1, _env_int("JARVIS_SECURITY_LOG_LIMIT", 100))

# Location used by briefings when the caller gives none
DEFAULT_LOCATION = os.environ.get("JARVIS_DEFAULT_LOCATION", "New York")

SEED_DEVICES = _env_bool("JARVIS_SEED_DEVICES", True)
