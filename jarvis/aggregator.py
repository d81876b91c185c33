"""
Cross-store reports: security status and the daily briefing

Both reports are read-only; no store or log is modified while building them.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from jarvis.config import DEFAULT_LOCATION
from jarvis.diagnostics import system_diagnostics
from jarvis.greeting import greeting
from jarvis.models import (
    CameraSummary, DailyBriefing, LockSummary, ScheduleSummary, SecurityStatus,
    SecuritySummary, SmartDevice, SystemSummary, TaskCounts,
)
from jarvis.security_log import utc_now_iso
from jarvis.state import AppState
from jarvis.weather import simulate_weather

logger = logging.getLogger(__name__)

ALERT_SEVERITIES = frozenset({"alert", "critical"})
RECENT_ALERT_LIMIT = 5


def lock_is_secured(device: SmartDevice) -> bool:
    return device.status == "on" or device.settings.get("locked") is True


def camera_is_active(device: SmartDevice) -> bool:
    return device.status == "on"


class Aggregator:
    """
    Builds derived reports from the application state

    The greeting, weather and diagnostics producers and the clock are
    injectable so reports can be made deterministic in tests.
    """

    def __init__(
        self,
        state: AppState,
        weather: Callable[[str], Dict[str, Any]] = simulate_weather,
        diagnostics: Callable[[], Dict[str, Any]] = system_diagnostics,
        greeter: Optional[Callable[[datetime], str]] = None,
        clock: Callable[[], datetime] = datetime.now,
        default_location: str = DEFAULT_LOCATION,
    ):
        self.state = state
        self.weather = weather
        self.diagnostics = diagnostics
        self.greeter = greeter or greeting
        self.clock = clock
        self.default_location = default_location

    def security_status(self) -> SecurityStatus:
        locks = self.state.devices.filter(type="lock")
        cameras = self.state.devices.filter(type="camera")

        secured = sum(1 for lock in locks if lock_is_secured(lock))
        active = sum(1 for camera in cameras if camera_is_active(camera))
        all_locked = secured == len(locks)
        all_active = active == len(cameras)

        return SecurityStatus(
            overall_status="SECURE" if all_locked and all_active else "ATTENTION_NEEDED",
            locks=LockSummary(
                total=len(locks),
                locked=secured,
                status="All Secured" if all_locked else "Some Unlocked",
            ),
            cameras=CameraSummary(
                total=len(cameras),
                active=active,
                status="All Active" if all_active else "Some Inactive",
            ),
            recent_alerts=self.state.security_log.recent_by_severity(ALERT_SEVERITIES, RECENT_ALERT_LIMIT),
            last_check=utc_now_iso(),
        )

    def daily_briefing(self, location: Optional[str] = None) -> DailyBriefing:
        """
        Compose greeting, weather, system, tasks, today's schedule and security

        Args:
            location: weather location; falls back to the configured default
        """
        now = self.clock()
        location = location or self.default_location
        logger.info(f"Building daily briefing for {location}")

        diagnostics = self.diagnostics()
        open_tasks = self.state.tasks.list(lambda task: task.status != "completed")
        by_priority = {level: 0 for level in ("critical", "high", "medium", "low")}
        for task in open_tasks:
            by_priority[task.priority] += 1

        today = now.date().isoformat()
        todays_events = self.state.schedule.list(lambda event: event.start_time.startswith(today))
        security = self.security_status()

        return DailyBriefing(
            greeting=self.greeter(now),
            timestamp=now.isoformat(),
            weather=self.weather(location)["current"],
            system=SystemSummary(
                status="Operational",
                cpu=diagnostics["cpu"]["averageUsage"],
                memory=diagnostics["memory"]["usagePercent"],
                uptime=diagnostics["uptime"],
            ),
            tasks=TaskCounts(pending=len(open_tasks), **by_priority),
            schedule=ScheduleSummary(
                events_today=len(todays_events),
                next_event=todays_events[0] if todays_events else None,
            ),
            security=SecuritySummary(
                status=security.overall_status,
                alerts=len(security.recent_alerts),
            ),
        )
