"""Application state: the four entity stores and the security log"""

import logging
from dataclasses import dataclass, field

from jarvis.config import SECURITY_LOG_LIMIT
from jarvis.models import Reminder, ScheduleEvent, SmartDevice, Task
from jarvis.security_log import SecurityLog
from jarvis.store import EntityStore

logger = logging.getLogger(__name__)

DEFAULT_DEVICES = [
    {
        "id": "light-1",
        "name": "Living Room Light",
        "type": "light",
        "status": "off",
        "room": "Living Room",
        "settings": {"brightness": 100, "color": "warm"},
    },
    {
        "id": "light-2",
        "name": "Bedroom Light",
        "type": "light",
        "status": "off",
        "room": "Bedroom",
        "settings": {"brightness": 80, "color": "cool"},
    },
    {
        "id": "thermostat-1",
        "name": "Main Thermostat",
        "type": "thermostat",
        "status": "on",
        "room": "Hallway",
        "settings": {"temperature": 72, "mode": "auto"},
    },
    {
        "id": "lock-1",
        "name": "Front Door Lock",
        "type": "lock",
        "status": "on",
        "room": "Entrance",
        "settings": {"locked": True},
    },
    {
        "id": "camera-1",
        "name": "Front Door Camera",
        "type": "camera",
        "status": "on",
        "room": "Entrance",
        "settings": {"recording": True, "motion_detection": True},
    },
    {
        "id": "speaker-1",
        "name": "Living Room Speaker",
        "type": "speaker",
        "status": "off",
        "room": "Living Room",
        "settings": {"volume": 50},
    },
    {
        "id": "blinds-1",
        "name": "Living Room Blinds",
        "type": "blinds",
        "status": "off",
        "room": "Living Room",
        "settings": {"position": 100},
    },
]


def _task_store() -> EntityStore[Task]:
    return EntityStore(Task, "Task", "task", immutable_fields=("created_at",))


def _reminder_store() -> EntityStore[Reminder]:
    return EntityStore(Reminder, "Reminder", "reminder")


def _schedule_store() -> EntityStore[ScheduleEvent]:
    return EntityStore(ScheduleEvent, "Event", "event")


def _device_store() -> EntityStore[SmartDevice]:
    return EntityStore(SmartDevice, "Device", "device", casefold_fields=("room",))


@dataclass
class AppState:
    """
    Process-lifetime state shared by all tool handlers

    Built once at startup and handed to the dispatcher; handlers never reach
    for module-level collections.
    """
    tasks: EntityStore[Task] = field(default_factory=_task_store)
    reminders: EntityStore[Reminder] = field(default_factory=_reminder_store)
    schedule: EntityStore[ScheduleEvent] = field(default_factory=_schedule_store)
    devices: EntityStore[SmartDevice] = field(default_factory=_device_store)
    security_log: SecurityLog = field(default_factory=SecurityLog)

    @classmethod
    def create(cls, seed_devices: bool = True, log_limit: int = SECURITY_LOG_LIMIT) -> "AppState":
        """Build a state, optionally seeded with the default device set"""
        state = cls(security_log=SecurityLog(log_limit))
        if seed_devices:
            for device in DEFAULT_DEVICES:
                state.devices.add(SmartDevice.model_validate(device))
            logger.info(f"Seeded {len(state.devices)} smart home devices")
        state.security_log.append("JARVIS system initialized", "info", "system")
        return state
