from __future__ import annotations


def build_greeting(hour: int) -> str:
    """Greeting for an hour (0-23) of store wall time."""
    if hour < 12:
        return "Good Morning!"
    if hour < 17:
        return "Good Afternoon!"
    return "Good Evening!"
