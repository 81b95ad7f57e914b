#!/usr/bin/env python3
"""
Module validation tests for the smart mirror

Checks that every module:
1. Compiles
2. Defines the expected functions and classes
3. Starts with a module docstring
4. Keeps hardware imports out of the testable modules

Parses source only, so it also covers hardware.py and main.py, which need
the board libraries to import.
"""

import ast
import os

import pytest

HERE = os.path.dirname(os.path.abspath(__file__))

# Define modules and their expected content
MODULES = {
    'config.py': {
        'classes': ['Display', 'Colors', 'Layout', 'Sensor', 'Timing', 'API',
                    'Units', 'LogLevel', 'Paths', 'Env'],
        'functions': ['validate_configuration'],
    },
    'state.py': {
        'classes': [],
        'functions': ['reset'],
    },
    'logger.py': {
        'classes': [],
        'functions': ['get_timestamp', 'log', 'format_uptime', 'log_transition',
                      'log_weather', 'log_stats'],
    },
    'modes.py': {
        'classes': ['Mode', 'Event', 'Action', 'Gesture'],
        'functions': ['transition'],
    },
    'scheduler.py': {
        'classes': ['Timer'],
        'functions': ['start', 'stop'],
    },
    'weather_api.py': {
        'classes': ['WeatherSnapshot'],
        'functions': ['round_tenth', 'format_tenth', 'compass_direction', 'build_url',
                      'parse_current', 'parse_forecast', 'group_daily', 'format_current',
                      'format_hourly', 'format_daily', 'describe_status', 'request_for',
                      'fetch'],
    },
    'display.py': {
        'classes': ['Renderer'],
        'functions': ['format_time', 'update', 'clear'],
    },
    'fetcher.py': {
        'classes': ['WeatherFetcher'],
        'functions': ['start', 'restart', 'stop', 'tick', 'deliver', 'drain'],
    },
    'mirror.py': {
        'classes': ['SmartMirror'],
        'functions': ['start', 'stop', 'dispatch', 'poll_asleep', 'poll_awake'],
    },
    'hardware.py': {
        'classes': ['GestureSensor', 'Screen'],
        'functions': ['init', 'enable_light_sensor', 'read_ambient_light',
                      'enable_gesture_sensor', 'disable_gesture_sensor',
                      'is_gesture_available', 'read_gesture', 'init_sensor',
                      'clear_screen', 'set_cursor', 'set_text_size', 'set_text_color',
                      'set_text_wrap', 'print', 'init_display', 'init_session'],
    },
    'main.py': {
        'classes': [],
        'functions': ['initialize', 'run', 'main'],
    },
}

HARDWARE_IMPORTS = {'board', 'busio', 'displayio', 'terminalio', 'adafruit_ili9341',
                    'adafruit_requests', 'adafruit_apds9960', 'adafruit_bitmap_font',
                    'adafruit_display_text', 'fourwire', 'hardware'}


def read_source(module_name):
    with open(os.path.join(HERE, module_name), 'r') as f:
        return f.read()


def check_file_syntax(filepath):
    """Check if Python file has valid syntax"""
    try:
        compile(read_source(filepath), filepath, 'exec')
        return True, None
    except SyntaxError as e:
        return False, str(e)


def check_module_structure(filepath, expected_items):
    """Check if module defines expected functions/classes"""
    tree = ast.parse(read_source(filepath))

    defined = set()
    for node in ast.walk(tree):
        if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef, ast.ClassDef)):
            defined.add(node.name)

    missing = set(expected_items) - defined
    if missing:
        return False, f"Missing: {', '.join(sorted(missing))}"
    return True, None


def imported_modules(filepath):
    """Top-level names of everything a module imports"""
    tree = ast.parse(read_source(filepath))
    names = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            names.update(alias.name.split('.')[0] for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module:
            names.add(node.module.split('.')[0])
    return names


@pytest.mark.parametrize("module_name", sorted(MODULES))
def test_syntax(module_name):
    valid, error = check_file_syntax(module_name)
    assert valid, error


@pytest.mark.parametrize("module_name", sorted(MODULES))
def test_structure(module_name):
    expected = MODULES[module_name]
    valid, error = check_module_structure(module_name, expected['classes'] + expected['functions'])
    assert valid, error


@pytest.mark.parametrize("module_name", sorted(MODULES))
def test_module_docstring(module_name):
    tree = ast.parse(read_source(module_name))
    assert ast.get_docstring(tree), "Missing module-level docstring"


@pytest.mark.parametrize("module_name", ['config.py', 'state.py', 'logger.py', 'modes.py',
                                         'scheduler.py', 'weather_api.py', 'display.py',
                                         'fetcher.py', 'mirror.py'])
def test_no_hardware_imports(module_name):
    assert not imported_modules(module_name) & HARDWARE_IMPORTS
