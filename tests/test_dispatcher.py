"""
Tests for tool dispatch: validation, handlers and the response envelope
"""

import json
from datetime import datetime

import pytest

from jarvis.aggregator import Aggregator
from jarvis.dispatcher import Dispatcher, ToolRegistry
from jarvis.handlers import build_dispatcher
from jarvis.requests import GreetRequest, TaskCreateRequest
from jarvis.state import AppState
from jarvis.weather import simulate_weather


@pytest.fixture
def state():
    return AppState.create()


@pytest.fixture
def dispatcher(state):
    aggregator = Aggregator(
        state,
        diagnostics=lambda: {
            "uptime": "1.00 hours",
            "cpu": {"averageUsage": "1.00%"},
            "memory": {"usagePercent": "2.00%"},
        },
        greeter=lambda now: "Good morning, sir.",
        clock=lambda: datetime(2026, 5, 1, 9, 0, 0),
    )
    return build_dispatcher(state, aggregator)


def payload(text):
    """Parse the JSON body that follows the first line of a response"""
    return json.loads(text.split("\n", 1)[1])


def test_unknown_tool_names_the_tool(dispatcher):
    response = dispatcher.invoke("jarvis_make_coffee", {})

    assert response.is_error
    assert "Unknown tool: jarvis_make_coffee" in response.text


def test_list_tools_schemas(dispatcher):
    tools = {tool.name: tool for tool in dispatcher.list_tools()}

    assert len(tools) == 18
    create = tools["jarvis_task_create"].input_schema
    assert create["required"] == ["title"]
    assert set(create["properties"]) == {"title", "description", "priority", "dueDate"}
    assert create["properties"]["priority"]["enum"] == ["low", "medium", "high", "critical"]
    convert = tools["jarvis_convert"].input_schema
    assert set(convert["required"]) == {"value", "from", "to"}
    control = tools["jarvis_smart_home_control"].input_schema
    assert set(control["required"]) == {"deviceId", "action"}
    assert "required" not in tools["jarvis_greet"].input_schema


def test_task_create_defaults(dispatcher):
    """Only a title: medium priority, pending status, empty description"""
    response = dispatcher.invoke("jarvis_task_create", {"title": "Patch the roof"})

    assert not response.is_error
    assert response.text.startswith("Task created successfully:")
    task = payload(response.text)
    assert task["title"] == "Patch the roof"
    assert task["priority"] == "medium"
    assert task["status"] == "pending"
    assert task["description"] == ""
    assert "createdAt" in task
    assert "dueDate" not in task


def test_task_list_filters_by_status(dispatcher):
    dispatcher.invoke("jarvis_task_create", {"title": "Patch the roof"})

    pending = dispatcher.invoke("jarvis_task_list", {"status": "pending"})
    completed = dispatcher.invoke("jarvis_task_list", {"status": "completed"})

    assert "Patch the roof" in pending.text
    assert pending.text.startswith("Tasks (1):")
    assert completed.text == "No tasks found matching the criteria."


def test_task_create_logs_security_entry(state, dispatcher):
    dispatcher.invoke("jarvis_task_create", {"title": "Calibrate repulsors"})
    entry = state.security_log.entries()[0]
    assert entry.event == "Task created: Calibrate repulsors"
    assert entry.source == "task_manager"


def test_task_update(state, dispatcher):
    task = payload(dispatcher.invoke("jarvis_task_create", {"title": "Refuel", "dueDate": "2026-06-01"}).text)

    response = dispatcher.invoke("jarvis_task_update", {"id": task["id"], "status": "completed", "priority": "high"})

    updated = payload(response.text)
    assert updated["status"] == "completed"
    assert updated["priority"] == "high"
    assert updated["createdAt"] == task["createdAt"]
    assert updated["dueDate"] == "2026-06-01"


def test_task_update_missing_id_is_text(dispatcher):
    response = dispatcher.invoke("jarvis_task_update", {"id": "task-404", "status": "completed"})
    assert response.text == "Task with ID task-404 not found."


def test_missing_required_field_is_structured_error(dispatcher):
    response = dispatcher.invoke("jarvis_task_create", {"priority": "high"})

    assert response.is_error
    assert response.text.startswith("Invalid arguments for jarvis_task_create:")
    assert "title" in response.text


def test_enum_outside_declared_values_is_rejected(state, dispatcher):
    response = dispatcher.invoke("jarvis_task_create", {"title": "x", "priority": "urgent"})

    assert response.is_error
    assert "priority" in response.text
    assert len(state.tasks) == 0


def test_none_arguments_treated_as_empty(dispatcher):
    assert dispatcher.invoke("jarvis_reminder_list", None).text == "No active reminders."


def test_null_optional_arguments_take_defaults(dispatcher):
    """Optional arguments sent as null behave as if they were omitted"""
    task = payload(dispatcher.invoke("jarvis_task_create", {
        "title": "Tune the suit", "description": None, "priority": None, "dueDate": None,
    }).text)
    assert task["description"] == ""
    assert task["priority"] == "medium"
    assert "dueDate" not in task

    reminder = payload(dispatcher.invoke("jarvis_reminder_create", {
        "message": "Stretch", "time": "noon", "recurring": None, "frequency": None,
    }).text)
    assert reminder["recurring"] is False

    event = payload(dispatcher.invoke("jarvis_schedule_add", {
        "title": "Lab", "startTime": "2026-05-01T14:00", "endTime": "2026-05-01T15:00", "description": None,
    }).text)
    assert event["description"] == ""


def test_null_required_argument_is_still_rejected(dispatcher):
    response = dispatcher.invoke("jarvis_task_create", {"title": None})
    assert response.is_error
    assert "title" in response.text


def test_reminder_create_and_list(dispatcher):
    created = dispatcher.invoke("jarvis_reminder_create", {
        "message": "Call Pepper", "time": "2026-05-01T18:00", "recurring": True, "frequency": "weekly",
    })
    reminder = payload(created.text)
    assert reminder["recurring"] is True
    assert reminder["frequency"] == "weekly"

    listing = dispatcher.invoke("jarvis_reminder_list", {})
    assert listing.text.startswith("Active Reminders (1):")


def test_reminder_frequency_requires_recurring(dispatcher):
    response = dispatcher.invoke("jarvis_reminder_create", {"message": "m", "time": "t", "frequency": "daily"})
    assert response.is_error
    assert "recurring" in response.text


def test_schedule_add_and_filter_by_date(dispatcher):
    dispatcher.invoke("jarvis_schedule_add", {
        "title": "Board meeting", "startTime": "2026-05-01T10:00", "endTime": "2026-05-01T11:00", "location": "HQ",
    })
    dispatcher.invoke("jarvis_schedule_add", {
        "title": "Expo", "startTime": "2026-05-02T10:00", "endTime": "2026-05-02T18:00",
    })

    first_day = dispatcher.invoke("jarvis_schedule_list", {"date": "2026-05-01"})
    events = payload(first_day.text)
    assert [e["title"] for e in events] == ["Board meeting"]
    assert events[0]["startTime"] == "2026-05-01T10:00"
    assert events[0]["location"] == "HQ"

    assert dispatcher.invoke("jarvis_schedule_list", {}).text.startswith("Scheduled Events (2):")
    assert dispatcher.invoke("jarvis_schedule_list", {"date": "2027-01-01"}).text == "No events scheduled for this period."


def test_smart_home_list_filters(dispatcher):
    response = dispatcher.invoke("jarvis_smart_home_list", {"room": "living room", "type": "light"})
    devices = payload(response.text)
    assert response.text.startswith("Smart Home Devices (1):")
    assert devices[0]["id"] == "light-1"


def test_smart_home_list_empty_room_lists_everything(dispatcher):
    response = dispatcher.invoke("jarvis_smart_home_list", {"room": ""})
    assert response.text.startswith("Smart Home Devices (7):")


def test_smart_home_control_merges_settings(dispatcher):
    dispatcher.invoke("jarvis_smart_home_control", {"deviceId": "light-1", "action": "on", "settings": {"brightness": 10}})
    response = dispatcher.invoke("jarvis_smart_home_control", {"deviceId": "light-1", "action": "on", "settings": {"color": "warm"}})

    device = payload(response.text)
    assert device["status"] == "on"
    assert device["settings"] == {"brightness": 10, "color": "warm"}


def test_smart_home_control_unknown_device(dispatcher):
    response = dispatcher.invoke("jarvis_smart_home_control", {"deviceId": "toaster", "action": "on"})
    assert response.text == "Device with ID toaster not found."


def test_smart_home_control_rejects_bad_action(dispatcher):
    response = dispatcher.invoke("jarvis_smart_home_control", {"deviceId": "light-1", "action": "dim"})
    assert response.is_error
    assert "action" in response.text


def test_security_status_report(dispatcher):
    response = dispatcher.invoke("jarvis_security_status", {})
    report = payload(response.text)
    assert response.text.startswith("Security Status Report:")
    assert report["overallStatus"] == "SECURE"


def test_lockdown_gate(state, dispatcher):
    dispatcher.invoke("jarvis_smart_home_control", {"deviceId": "lock-1", "action": "off", "settings": {"locked": False}})
    log_size = len(state.security_log)

    refused = dispatcher.invoke("jarvis_security_lockdown", {"confirm": False})
    assert refused.text.startswith("Lockdown not confirmed.")
    assert not refused.is_error
    assert len(state.security_log) == log_size
    assert state.devices.get("lock-1").status == "off"

    accepted = dispatcher.invoke("jarvis_security_lockdown", {"confirm": True})
    assert accepted.text.startswith("Security lockdown initiated.")
    assert state.devices.get("lock-1").settings["locked"] is True
    assert len(state.security_log) == log_size + 1


def test_lockdown_requires_confirm_argument(dispatcher):
    response = dispatcher.invoke("jarvis_security_lockdown", {})
    assert response.is_error
    assert "confirm" in response.text


@pytest.mark.parametrize("expression, expected", [
    ("2 + 2", "2 + 2 = 4"),
    ("(2 + 3) * 4", "(2 + 3) * 4 = 20"),
    ("10 % 3", "10 % 3 = 1"),
    ("7 / 2", "7 / 2 = 3.5"),
])
def test_calculate(dispatcher, expression, expected):
    assert dispatcher.invoke("jarvis_calculate", {"expression": expression}).text == expected


def test_calculate_malformed_expression_is_text(dispatcher):
    response = dispatcher.invoke("jarvis_calculate", {"expression": "2 +* 2"})
    assert response.is_error
    assert response.text.startswith("Unable to evaluate expression: 2 +* 2.")


def test_calculate_refuses_code(dispatcher):
    response = dispatcher.invoke("jarvis_calculate", {"expression": "__import__('os').system('ls')"})
    assert response.is_error
    assert "Unable to evaluate expression" in response.text


def test_calculate_overflow_is_text(dispatcher):
    response = dispatcher.invoke("jarvis_calculate", {"expression": "1e309 % 2"})
    assert response.is_error
    assert response.text.startswith("Unable to evaluate expression: 1e309 % 2.")
    assert "too large" in response.text


def test_convert_examples(dispatcher):
    assert dispatcher.invoke("jarvis_convert", {"value": 0, "from": "celsius", "to": "fahrenheit"}).text == \
        "0 celsius = 32.0000 fahrenheit"
    assert dispatcher.invoke("jarvis_convert", {"value": 100, "from": "celsius", "to": "kelvin"}).text == \
        "100 celsius = 373.1500 kelvin"


def test_convert_unsupported_pair(dispatcher):
    response = dispatcher.invoke("jarvis_convert", {"value": 1, "from": "celsius", "to": "meters"})
    assert response.text.startswith("Conversion from celsius to meters is not supported.")


def test_greet_and_weather(dispatcher):
    assert dispatcher.invoke("jarvis_greet", {}).text == "Good morning, sir."
    weather = dispatcher.invoke("jarvis_weather", {"location": "Malibu"})
    assert weather.text.startswith("Weather Report for Malibu:")
    assert payload(weather.text)["location"] == "Malibu"


def test_weather_requires_location(dispatcher):
    assert dispatcher.invoke("jarvis_weather", {}).is_error


def test_time_reports_utc_and_unix(dispatcher):
    text = dispatcher.invoke("jarvis_time", {"timezone": "UTC"}).text
    assert text.startswith("Current time:")
    assert "\nUTC: " in text
    assert "\nUnix timestamp: " in text


def test_time_unknown_timezone_is_text(dispatcher):
    response = dispatcher.invoke("jarvis_time", {"timezone": "Mars/Olympus_Mons"})
    assert response.is_error
    assert "Unknown timezone" in response.text


def test_status_report(dispatcher):
    response = dispatcher.invoke("jarvis_status", {})
    assert response.text.startswith("System Status Report:")
    assert payload(response.text)["uptime"] == "1.00 hours"


def test_daily_briefing(dispatcher):
    dispatcher.invoke("jarvis_schedule_add", {"title": "Gala", "startTime": "2026-05-01T20:00", "endTime": "2026-05-01T23:00"})
    response = dispatcher.invoke("jarvis_daily_briefing", {"location": "Malibu"})

    briefing = payload(response.text)
    assert briefing["greeting"] == "Good morning, sir."
    assert briefing["schedule"]["eventsToday"] == 1
    assert briefing["schedule"]["nextEvent"]["title"] == "Gala"
    assert briefing["security"]["status"] == "SECURE"


def test_handler_crash_becomes_text():
    """Unexpected handler exceptions are logged and returned as text"""
    registry = ToolRegistry()

    def explode(request):
        raise RuntimeError("flux capacitor offline")

    registry.register("jarvis_greet", "boom", GreetRequest, explode)
    response = Dispatcher(registry).invoke("jarvis_greet", {})

    assert response.is_error
    assert "flux capacitor offline" in response.text


def test_registry_rejects_duplicates_and_mistagged_models():
    registry = ToolRegistry()
    registry.register("jarvis_greet", "hi", GreetRequest, lambda request: "hi")

    with pytest.raises(ValueError):
        registry.register("jarvis_greet", "hi", GreetRequest, lambda request: "hi")
    with pytest.raises(ValueError):
        registry.register("jarvis_status", "status", TaskCreateRequest, lambda request: "")


def test_simulated_weather_is_repeatable_with_seed():
    import random
    assert simulate_weather("Here", random.Random(7)) == simulate_weather("Here", random.Random(7))
