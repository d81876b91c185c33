"""
Per-tool request models

Each tool has one request model tagged by its tool name. The models are
combined into a discriminated union so arguments are validated exactly once,
at the dispatch boundary, and handlers receive typed requests.

Wire names are camelCase (dueDate, startTime, deviceId); convert uses the
literal names "from" and "to".
"""

from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import BaseModel as PydanticBaseModel
from pydantic import ConfigDict, Field, TypeAdapter, ValidationInfo, field_validator, model_validator
from pydantic.alias_generators import to_camel

from jarvis.models import DeviceAction, DeviceType, Frequency, Priority, Settings, TaskStatus


class ToolRequest(PydanticBaseModel):
    """Base request: camelCase aliases, unknown arguments ignored"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("*", mode="before")
    @classmethod
    def null_means_default(cls, value: Any, info: ValidationInfo) -> Any:
        """An explicit null for an optional argument behaves like an omitted one"""
        if value is None and info.field_name:
            field = cls.model_fields[info.field_name]
            if not field.is_required():
                return field.get_default(call_default_factory=True)
        return value

    @classmethod
    def input_schema(cls) -> Dict[str, Any]:
        """JSON schema of the tool arguments, without the routing tag"""
        schema = cls.model_json_schema(by_alias=True)
        schema.get("properties", {}).pop("tool", None)
        required = [name for name in schema.get("required", []) if name != "tool"]
        if required:
            schema["required"] = required
        else:
            schema.pop("required", None)
        schema.pop("title", None)
        schema.setdefault("properties", {})
        return schema


# System / utility

class GreetRequest(ToolRequest):
    tool: Literal["jarvis_greet"]


class StatusRequest(ToolRequest):
    tool: Literal["jarvis_status"]


class TimeRequest(ToolRequest):
    tool: Literal["jarvis_time"]
    timezone: Optional[str] = Field(None, description="Timezone to display (e.g., 'America/New_York', 'UTC')")


class WeatherRequest(ToolRequest):
    tool: Literal["jarvis_weather"]
    location: str = Field(description="Location to get weather for")


class CalculateRequest(ToolRequest):
    tool: Literal["jarvis_calculate"]
    expression: str = Field(description="Arithmetic expression to evaluate (e.g., '2 + 2', '(3 + 4) * 2')")


class ConvertRequest(ToolRequest):
    tool: Literal["jarvis_convert"]
    value: float = Field(description="Value to convert")
    from_unit: str = Field(alias="from", description="Unit to convert from")
    to_unit: str = Field(alias="to", description="Unit to convert to")


class DailyBriefingRequest(ToolRequest):
    tool: Literal["jarvis_daily_briefing"]
    location: Optional[str] = Field(None, description="Location for weather")


# Tasks

class TaskCreateRequest(ToolRequest):
    tool: Literal["jarvis_task_create"]
    title: str = Field(description="Task title")
    description: str = Field("", description="Task description")
    priority: Priority = Field("medium", description="Task priority level")
    due_date: Optional[str] = Field(None, description="Due date in ISO format")


class TaskListRequest(ToolRequest):
    tool: Literal["jarvis_task_list"]
    status: Optional[TaskStatus] = Field(None, description="Filter by status")
    priority: Optional[Priority] = Field(None, description="Filter by priority")


class TaskUpdateRequest(ToolRequest):
    tool: Literal["jarvis_task_update"]
    id: str = Field(description="Task ID to update")
    status: Optional[TaskStatus] = Field(None, description="New status")
    priority: Optional[Priority] = Field(None, description="New priority")
    title: Optional[str] = Field(None, description="New title")
    description: Optional[str] = Field(None, description="New description")
    due_date: Optional[str] = Field(None, description="New due date in ISO format")

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude={"tool", "id"}, exclude_none=True)


# Reminders

class ReminderCreateRequest(ToolRequest):
    tool: Literal["jarvis_reminder_create"]
    message: str = Field(description="Reminder message")
    time: str = Field(description="Time for the reminder (ISO format or natural language)")
    recurring: bool = Field(False, description="Whether the reminder should repeat")
    frequency: Optional[Frequency] = Field(None, description="Frequency for recurring reminders")

    @model_validator(mode="after")
    def frequency_needs_recurring(self):
        if self.frequency is not None and not self.recurring:
            raise ValueError("frequency is only valid when recurring is true")
        return self


class ReminderListRequest(ToolRequest):
    tool: Literal["jarvis_reminder_list"]


# Schedule

class ScheduleAddRequest(ToolRequest):
    tool: Literal["jarvis_schedule_add"]
    title: str = Field(description="Event title")
    start_time: str = Field(description="Start time in ISO format")
    end_time: str = Field(description="End time in ISO format")
    description: str = Field("", description="Event description")
    location: Optional[str] = Field(None, description="Event location")


class ScheduleListRequest(ToolRequest):
    tool: Literal["jarvis_schedule_list"]
    date: Optional[str] = Field(None, description="Date to list events for (YYYY-MM-DD format)")


# Smart home and security

class SmartHomeListRequest(ToolRequest):
    tool: Literal["jarvis_smart_home_list"]
    room: Optional[str] = Field(None, description="Filter by room name")
    type: Optional[DeviceType] = Field(None, description="Filter by device type")


class SmartHomeControlRequest(ToolRequest):
    tool: Literal["jarvis_smart_home_control"]
    device_id: str = Field(description="Device ID to control")
    action: DeviceAction = Field(description="Action to perform")
    settings: Optional[Settings] = Field(None, description="Additional settings to apply (e.g., brightness, temperature)")


class SecurityStatusRequest(ToolRequest):
    tool: Literal["jarvis_security_status"]


class SecurityLockdownRequest(ToolRequest):
    tool: Literal["jarvis_security_lockdown"]
    confirm: bool = Field(description="Confirm lockdown initiation")


AnyToolRequest = Annotated[
    Union[
        GreetRequest,
        StatusRequest,
        TimeRequest,
        WeatherRequest,
        TaskCreateRequest,
        TaskListRequest,
        TaskUpdateRequest,
        ReminderCreateRequest,
        ReminderListRequest,
        ScheduleAddRequest,
        ScheduleListRequest,
        SmartHomeListRequest,
        SmartHomeControlRequest,
        SecurityStatusRequest,
        SecurityLockdownRequest,
        CalculateRequest,
        ConvertRequest,
        DailyBriefingRequest,
    ],
    Field(discriminator="tool"),
]

REQUEST_ADAPTER: TypeAdapter = TypeAdapter(AnyToolRequest)


def parse_request(tool: str, arguments: Optional[Dict[str, Any]]) -> ToolRequest:
    """
    Validate raw tool arguments into the tool's request model

    Raises:
        pydantic.ValidationError: missing required field or value outside its enum
    """
    return REQUEST_ADAPTER.validate_python({**(arguments or {}), "tool": tool})
