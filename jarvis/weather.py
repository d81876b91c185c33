"""Simulated weather reports (no external weather API is called)"""

import random
from typing import Any, Dict, Optional

CONDITIONS = ["Sunny", "Partly Cloudy", "Cloudy", "Light Rain", "Clear"]


def fahrenheit_to_celsius(value: float) -> float:
    return (value - 32) * 5 / 9


def simulate_weather(location: str, rng: Optional[random.Random] = None) -> Dict[str, Any]:
    """
    Build a plausible weather report for a location

    Temperatures fall in 50-79F, humidity 40-79%, wind 5-24 mph.

    Args:
        location: Free-text location name, echoed back in the report
        rng: Random source; pass a seeded random.Random for repeatable output
    """
    rng = rng or random.Random()
    condition = rng.choice(CONDITIONS)
    temperature = rng.randint(50, 79)
    humidity = rng.randint(40, 79)
    wind_speed = rng.randint(5, 24)

    return {
        "location": location,
        "current": {
            "condition": condition,
            "temperature": f"{temperature}F ({fahrenheit_to_celsius(temperature):.1f}C)",
            "humidity": f"{humidity}%",
            "windSpeed": f"{wind_speed} mph",
            "feelsLike": f"{temperature - wind_speed // 5}F",
        },
        "forecast": [
            {"day": "Today", "high": f"{temperature + 5}F", "low": f"{temperature - 10}F", "condition": condition},
            {"day": "Tomorrow", "high": f"{temperature + 3}F", "low": f"{temperature - 8}F", "condition": rng.choice(CONDITIONS)},
            {"day": "Day After", "high": f"{temperature + 7}F", "low": f"{temperature - 5}F", "condition": rng.choice(CONDITIONS)},
        ],
        "note": "This is simulated weather data for demonstration purposes.",
    }
