"""
Shared fakes for the smart mirror tests
Stand-ins for the sensor, screen, HTTP session and fetcher
"""

import threading

import pytest

import config
import state
from modes import Gesture


class FakeScreen:
    """Records every display call"""

    def __init__(self):
        self.calls = []

    def clear_screen(self, color):
        self.calls.append(("clear_screen", color))

    def set_cursor(self, x, y):
        self.calls.append(("set_cursor", x, y))

    def set_text_size(self, size):
        self.calls.append(("set_text_size", size))

    def set_text_color(self, color):
        self.calls.append(("set_text_color", color))

    def set_text_wrap(self, wrap):
        self.calls.append(("set_text_wrap", wrap))

    def print(self, text):
        self.calls.append(("print", text))

    def printed(self):
        return [call[1] for call in self.calls if call[0] == "print"]


class FakeSensor:
    """Light level and queued gestures set by the test"""

    def __init__(self, light=0):
        self.light = light
        self.gestures = []
        self.gestures_enabled = False
        self.enable_result = True
        self.disable_result = True
        self.enable_calls = 0
        self.disable_calls = 0

    def read_ambient_light(self):
        if isinstance(self.light, Exception):
            raise self.light
        return self.light

    def enable_gesture_sensor(self, interrupts_enabled=False):
        self.enable_calls += 1
        if self.enable_result:
            self.gestures_enabled = True
        return self.enable_result

    def disable_gesture_sensor(self):
        self.disable_calls += 1
        if self.disable_result:
            self.gestures_enabled = False
        return self.disable_result

    def is_gesture_available(self):
        return bool(self.gestures)

    def read_gesture(self):
        if self.gestures:
            return self.gestures.pop(0)
        return Gesture.NONE


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self.payload = payload
        self.closed = False

    def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload

    def close(self):
        self.closed = True


class FakeSession:
    """
    Returns queued responses in order, the last one forever.

    A queued exception is raised from get(). When `gate` is set, the first
    request blocks until the gate is opened.
    """

    def __init__(self, *responses):
        self.responses = list(responses)
        self.urls = []
        self.gate = None

    def get(self, url, timeout=None):
        self.urls.append(url)
        if self.gate is not None and len(self.urls) == 1:
            self.gate.wait(5)
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response


class FakeFetcher:
    """Counts lifecycle calls instead of fetching"""

    def __init__(self):
        self.starts = 0
        self.restarts = 0
        self.stops = 0
        self.running = False

    def start(self):
        self.starts += 1
        self.running = True

    def restart(self):
        self.restarts += 1
        self.running = True

    def stop(self):
        self.stops += 1
        self.running = False

    def close(self):
        self.stop()


class FakeRenderer:
    def __init__(self):
        self.updates = []
        self.clears = 0

    def update(self, content, now=None):
        self.updates.append(content)

    def clear(self):
        self.clears += 1


CURRENT_PAYLOAD = {
    "name": "Boulder",
    "main": {"temp": 72.34, "temp_min": 60.01, "temp_max": 75.49},
    "weather": [{"description": "Clear"}],
    "wind": {"speed": 5.67, "deg": 315},
}

CURRENT_TEXT = "Boulder\n72.3F\nClear\n\nWind: 5.7mph NW\n\nHigh: 75.5F\nLow:  60.0F"

# 2024-01-01 00:00 UTC, a Monday
MONDAY = 1704067200


def forecast_payload(steps=10, timezone=0):
    """3-hour steps starting Monday midnight; temperatures climb 1 degree per step"""
    return {
        "city": {"name": "Boulder", "timezone": timezone},
        "list": [
            {
                "dt": MONDAY + i * 10800,
                "main": {"temp": 50.0 + i, "temp_min": 49.0 + i, "temp_max": 51.0 + i},
                "weather": [{"description": "clouds"}],
            }
            for i in range(steps)
        ],
    }


@pytest.fixture(autouse=True)
def clean_state(monkeypatch):
    state.reset()
    monkeypatch.setattr(config.Env, "OPENWEATHER_API_KEY", "testkey")
    monkeypatch.setattr(config.Env, "LATITUDE", 40.015)
    monkeypatch.setattr(config.Env, "LONGITUDE", -105.27)
    monkeypatch.setattr(config.Env, "UNITS", config.Units.IMPERIAL)
    monkeypatch.setattr(config, "CURRENT_LOG_LEVEL", config.LogLevel.VERBOSE)
    yield
    state.reset()


@pytest.fixture
def screen():
    return FakeScreen()


@pytest.fixture
def sensor():
    return FakeSensor()


@pytest.fixture
def gate():
    return threading.Event()
