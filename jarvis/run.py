"""Console entry point: serve JARVIS over stdio"""

import logging

from jarvis.server import app_state, mcp

logger = logging.getLogger(__name__)


def main():
    """Run the MCP server with stdio communication"""
    logger.info(
        f"Starting {mcp.name} with {len(app_state.devices)} devices "
        f"and a security log of {app_state.security_log.limit} entries"
    )
    mcp.run()


if __name__ == "__main__":
    main()
