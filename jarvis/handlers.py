"""
Tool handlers

One method per tool. Handlers receive an already-validated request model and
return the response text; failures are raised as JarvisError subclasses and
rendered by the dispatcher.
"""

import logging
from typing import Optional

from jarvis.aggregator import Aggregator
from jarvis.calculator import evaluate
from jarvis.devices import DeviceController
from jarvis.dispatcher import Dispatcher, ToolRegistry
from jarvis.errors import ComputationError, ExpressionError
from jarvis.formatting import format_number, to_json
from jarvis.greeting import describe_time
from jarvis.security_log import utc_now_iso
from jarvis.requests import (
    CalculateRequest, ConvertRequest, DailyBriefingRequest, GreetRequest,
    ReminderCreateRequest, ReminderListRequest, ScheduleAddRequest,
    ScheduleListRequest, SecurityLockdownRequest, SecurityStatusRequest,
    SmartHomeControlRequest, SmartHomeListRequest, StatusRequest,
    TaskCreateRequest, TaskListRequest, TaskUpdateRequest, TimeRequest,
    WeatherRequest,
)
from jarvis.state import AppState
from jarvis.units import convert

logger = logging.getLogger(__name__)


class JarvisTools:
    def __init__(self, state: AppState, aggregator: Optional[Aggregator] = None):
        self.state = state
        self.controller = DeviceController(state.devices, state.security_log)
        self.aggregator = aggregator or Aggregator(state)

    # System

    def greet(self, request: GreetRequest) -> str:
        return self.aggregator.greeter(self.aggregator.clock())

    def status(self, request: StatusRequest) -> str:
        return f"System Status Report:\n{to_json(self.aggregator.diagnostics())}"

    def time(self, request: TimeRequest) -> str:
        return describe_time(request.timezone)

    def weather(self, request: WeatherRequest) -> str:
        report = self.aggregator.weather(request.location)
        return f"Weather Report for {request.location}:\n{to_json(report)}"

    # Tasks

    def task_create(self, request: TaskCreateRequest) -> str:
        task_id = self.state.tasks.create({
            "title": request.title,
            "description": request.description,
            "priority": request.priority,
            "status": "pending",
            "created_at": utc_now_iso(),
            "due_date": request.due_date,
        })
        task = self.state.tasks.get(task_id)
        self.state.security_log.append(f"Task created: {task.title}", "info", "task_manager")
        return f"Task created successfully:\n{to_json(task)}"

    def task_list(self, request: TaskListRequest) -> str:
        tasks = self.state.tasks.filter(status=request.status, priority=request.priority)
        if not tasks:
            return "No tasks found matching the criteria."
        return f"Tasks ({len(tasks)}):\n{to_json(tasks)}"

    def task_update(self, request: TaskUpdateRequest) -> str:
        task = self.state.tasks.update(request.id, request.changes())
        return f"Task updated:\n{to_json(task)}"

    # Reminders

    def reminder_create(self, request: ReminderCreateRequest) -> str:
        reminder_id = self.state.reminders.create(
            request.model_dump(include={"message", "time", "recurring", "frequency"})
        )
        return f"Reminder set:\n{to_json(self.state.reminders.get(reminder_id))}"

    def reminder_list(self, request: ReminderListRequest) -> str:
        reminders = self.state.reminders.list()
        if not reminders:
            return "No active reminders."
        return f"Active Reminders ({len(reminders)}):\n{to_json(reminders)}"

    # Schedule

    def schedule_add(self, request: ScheduleAddRequest) -> str:
        event_id = self.state.schedule.create(
            request.model_dump(include={"title", "description", "start_time", "end_time", "location"})
        )
        return f"Event added to schedule:\n{to_json(self.state.schedule.get(event_id))}"

    def schedule_list(self, request: ScheduleListRequest) -> str:
        if request.date:
            events = self.state.schedule.list(lambda event: event.start_time.startswith(request.date))
        else:
            events = self.state.schedule.list()
        if not events:
            return "No events scheduled for this period."
        return f"Scheduled Events ({len(events)}):\n{to_json(events)}"

    # Smart home and security

    def smart_home_list(self, request: SmartHomeListRequest) -> str:
        # An empty room means no room filter
        devices = self.state.devices.filter(room=request.room or None, type=request.type)
        return f"Smart Home Devices ({len(devices)}):\n{to_json(devices)}"

    def smart_home_control(self, request: SmartHomeControlRequest) -> str:
        device = self.controller.control(request.device_id, request.action, request.settings)
        return f"Device updated:\n{to_json(device)}"

    def security_status(self, request: SecurityStatusRequest) -> str:
        return f"Security Status Report:\n{to_json(self.aggregator.security_status())}"

    def security_lockdown(self, request: SecurityLockdownRequest) -> str:
        result = self.controller.lockdown(request.confirm)
        if not result.confirmed:
            return "Lockdown not confirmed. Please set confirm to true to initiate security lockdown."
        return "Security lockdown initiated. All doors locked. All cameras activated. Perimeter secure."

    # Utilities

    def calculate(self, request: CalculateRequest) -> str:
        try:
            result = evaluate(request.expression)
        except ExpressionError as e:
            raise ComputationError(
                f"Unable to evaluate expression: {request.expression}. "
                f"{e}. Please use standard mathematical notation."
            ) from e
        return f"{request.expression} = {format_number(result)}"

    def convert(self, request: ConvertRequest) -> str:
        result = convert(request.value, request.from_unit, request.to_unit)
        return f"{format_number(request.value)} {request.from_unit} = {result:.4f} {request.to_unit}"

    def daily_briefing(self, request: DailyBriefingRequest) -> str:
        briefing = self.aggregator.daily_briefing(request.location)
        return f"Daily Briefing:\n{to_json(briefing)}"


TOOL_CATALOGUE = [
    ("jarvis_greet", GreetRequest, "greet",
     "Get a personalized greeting from JARVIS based on the current time of day"),
    ("jarvis_status", StatusRequest, "status",
     "Get a comprehensive system status report including CPU, memory, network, and uptime"),
    ("jarvis_time", TimeRequest, "time",
     "Get the current date and time in various formats and timezones"),
    ("jarvis_weather", WeatherRequest, "weather",
     "Get current weather conditions and forecast for a location (simulated data)"),
    ("jarvis_task_create", TaskCreateRequest, "task_create",
     "Create a new task with title, description, and priority"),
    ("jarvis_task_list", TaskListRequest, "task_list",
     "List all tasks with optional filtering by status or priority"),
    ("jarvis_task_update", TaskUpdateRequest, "task_update",
     "Update an existing task status or details"),
    ("jarvis_reminder_create", ReminderCreateRequest, "reminder_create",
     "Create a reminder with a message and time"),
    ("jarvis_reminder_list", ReminderListRequest, "reminder_list",
     "List all active reminders"),
    ("jarvis_schedule_add", ScheduleAddRequest, "schedule_add",
     "Add an event to the schedule/calendar"),
    ("jarvis_schedule_list", ScheduleListRequest, "schedule_list",
     "List scheduled events, optionally for a specific date"),
    ("jarvis_smart_home_list", SmartHomeListRequest, "smart_home_list",
     "List all smart home devices and their current status"),
    ("jarvis_smart_home_control", SmartHomeControlRequest, "smart_home_control",
     "Control a smart home device (turn on/off, adjust settings)"),
    ("jarvis_security_status", SecurityStatusRequest, "security_status",
     "Get comprehensive security status including locks, cameras, and recent alerts"),
    ("jarvis_security_lockdown", SecurityLockdownRequest, "security_lockdown",
     "Initiate security lockdown - lock all doors and activate all security devices"),
    ("jarvis_calculate", CalculateRequest, "calculate",
     "Perform arithmetic calculations (+, -, *, /, %, parentheses)"),
    ("jarvis_convert", ConvertRequest, "convert",
     "Convert between units (temperature, length, weight)"),
    ("jarvis_daily_briefing", DailyBriefingRequest, "daily_briefing",
     "Get a comprehensive daily briefing including weather, schedule, tasks, and system status"),
]


def build_registry(tools: JarvisTools) -> ToolRegistry:
    registry = ToolRegistry()
    for name, request_model, method, description in TOOL_CATALOGUE:
        registry.register(name, description, request_model, getattr(tools, method))
    return registry


def build_dispatcher(state: AppState, aggregator: Optional[Aggregator] = None) -> Dispatcher:
    """Wire handlers for the given state into a ready-to-use dispatcher"""
    tools = JarvisTools(state, aggregator)
    registry = build_registry(tools)
    logger.info(f"Registered {len(registry)} tools")
    return Dispatcher(registry)
