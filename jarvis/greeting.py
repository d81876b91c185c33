"""Time-of-day greetings and clock formatting"""

import random
from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from jarvis.errors import ComputationError

GREETINGS = {
    "morning": [
        "Good morning, sir. I trust you slept well.",
        "Good morning. All systems are operational and ready for the day.",
        "Rise and shine, sir. The day awaits.",
    ],
    "afternoon": [
        "Good afternoon, sir. How may I assist you?",
        "Good afternoon. All systems nominal.",
        "Afternoon, sir. Ready when you are.",
    ],
    "evening": [
        "Good evening, sir. I hope your day was productive.",
        "Good evening. Shall I prepare anything for you?",
        "Evening, sir. All systems remain operational.",
    ],
    "night": [
        "Good evening, sir. Perhaps you should consider getting some rest.",
        "Burning the midnight oil again, sir?",
        "It is quite late, sir. All systems are secure for the night.",
    ],
}


def time_of_day(hour: int) -> str:
    if 5 <= hour < 12:
        return "morning"
    if 12 <= hour < 17:
        return "afternoon"
    if 17 <= hour < 21:
        return "evening"
    return "night"


def greeting(now: Optional[datetime] = None, rng: Optional[random.Random] = None) -> str:
    """Pick one of the phrasings for the current part of the day"""
    now = now or datetime.now()
    rng = rng or random
    return rng.choice(GREETINGS[time_of_day(now.hour)])


def describe_time(tz_name: Optional[str] = None, now: Optional[datetime] = None) -> str:
    """
    Current time in a human readable form, plus UTC and a unix timestamp

    Args:
        tz_name: IANA timezone name (e.g. 'America/New_York'); local time when omitted
        now: aware datetime to describe instead of the current time

    Raises:
        ComputationError: tz_name is not a known timezone
    """
    now = now or datetime.now(timezone.utc)
    if tz_name and tz_name.upper() == "UTC":
        local = now.astimezone(timezone.utc)
    elif tz_name:
        try:
            local = now.astimezone(ZoneInfo(tz_name))
        except (ZoneInfoNotFoundError, ValueError):
            raise ComputationError(f"Unknown timezone: {tz_name}. Use an IANA name such as 'America/New_York' or 'UTC'.")
    else:
        local = now.astimezone()

    utc = now.astimezone(timezone.utc)
    return (
        f"Current time: {local.strftime('%A, %B %d, %Y, %I:%M:%S %p %Z')}\n"
        f"UTC: {utc.isoformat(timespec='milliseconds').replace('+00:00', 'Z')}\n"
        f"Unix timestamp: {int(utc.timestamp() * 1000)}"
    )
