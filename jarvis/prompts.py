"""Prompt templates published alongside the tools"""

from typing import Optional

from jarvis.config import DEFAULT_LOCATION


def morning_briefing(location: Optional[str] = None) -> str:
    """
    Get a comprehensive morning briefing from JARVIS including weather, schedule, and system status

    Args:
        location: Your location for weather information
    """
    location = location or DEFAULT_LOCATION
    return (
        f"JARVIS, give me my morning briefing. Include weather for {location}, "
        "my schedule for today, pending tasks, and system status."
    )


def security_check() -> str:
    """Have JARVIS perform a security check and provide a status report"""
    return "JARVIS, run a security check. I want status on all locks, cameras, and any security alerts."


def system_diagnostic() -> str:
    """Request a full system diagnostic report from JARVIS"""
    return "JARVIS, run a full system diagnostic. I need CPU, memory, network status, and any performance concerns."


PROMPTS = [morning_briefing, security_check, system_diagnostic]
