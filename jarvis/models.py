"""
Entity and report models

All records are immutable pydantic models. Python attributes are snake_case;
serialized output uses camelCase aliases (createdAt, dueDate, startTime, ...)
so that JSON sent over the wire keeps the established field names.
"""

from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel as PydanticBaseModel
from pydantic import ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr
from pydantic.alias_generators import to_camel

Priority = Literal["low", "medium", "high", "critical"]
TaskStatus = Literal["pending", "in_progress", "completed"]
Frequency = Literal["daily", "weekly", "monthly"]
DeviceType = Literal["light", "thermostat", "lock", "camera", "speaker", "blinds"]
DeviceStatus = Literal["on", "off", "unknown"]
DeviceAction = Literal["on", "off", "toggle"]
Severity = Literal["info", "warning", "alert", "critical"]
OverallStatus = Literal["SECURE", "ATTENTION_NEEDED"]

PRIORITIES = ("low", "medium", "high", "critical")

# Closed variant for device settings: flag, number or text.
# StrictBool comes first so that true/false are never read as 1/0.
SettingValue = Union[StrictBool, StrictInt, StrictFloat, StrictStr]
Settings = Dict[str, SettingValue]


class BaseModel(PydanticBaseModel):
    """Immutable record with camelCase serialization"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_wire(self) -> dict:
        """Dump using wire names, leaving out unset optional fields"""
        return self.model_dump(by_alias=True, exclude_none=True)


class Task(BaseModel):
    id: str
    title: str
    description: str = ""
    priority: Priority = "medium"
    status: TaskStatus = "pending"
    created_at: str
    due_date: Optional[str] = None


class Reminder(BaseModel):
    id: str
    message: str
    time: str
    recurring: bool = False
    frequency: Optional[Frequency] = None


class ScheduleEvent(BaseModel):
    id: str
    title: str
    description: str = ""
    start_time: str
    end_time: str
    location: Optional[str] = None


class SmartDevice(BaseModel):
    id: str
    name: str
    type: DeviceType
    status: DeviceStatus = "unknown"
    room: str
    settings: Settings = Field(default_factory=dict)


class SecurityLogEntry(BaseModel):
    id: str
    timestamp: str
    event: str
    severity: Severity
    source: str


class LockSummary(BaseModel):
    total: int
    locked: int
    status: str


class CameraSummary(BaseModel):
    total: int
    active: int
    status: str


class SecurityStatus(BaseModel):
    overall_status: OverallStatus
    locks: LockSummary
    cameras: CameraSummary
    recent_alerts: List[SecurityLogEntry]
    last_check: str


class LockdownResult(BaseModel):
    confirmed: bool
    locks_secured: int = 0
    cameras_activated: int = 0
    log_entry: Optional[SecurityLogEntry] = None


class SystemSummary(BaseModel):
    status: str
    cpu: str
    memory: str
    uptime: str


class TaskCounts(BaseModel):
    pending: int
    critical: int
    high: int
    medium: int
    low: int


class ScheduleSummary(BaseModel):
    events_today: int
    next_event: Optional[ScheduleEvent] = None


class SecuritySummary(BaseModel):
    status: OverallStatus
    alerts: int


class DailyBriefing(BaseModel):
    greeting: str
    timestamp: str
    weather: dict
    system: SystemSummary
    tasks: TaskCounts
    schedule: ScheduleSummary
    security: SecuritySummary

    def to_wire(self) -> dict:
        # nextEvent is reported as null rather than dropped
        data = self.model_dump(by_alias=True, exclude_none=True)
        data["schedule"].setdefault("nextEvent", None)
        return data
