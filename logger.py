"""
Smart Mirror - Centralized Logging Module
Log format with timestamps: [2016-05-02 21:04:08] INFO: message
"""

import time

import config
import state

# ============================================================================
# TIMESTAMP FORMATTING
# ============================================================================

def get_timestamp():
    """
    Get current timestamp from the system clock: [2016-05-02 21:04:08]

    Returns:
        str: Formatted timestamp
    """
    now = time.localtime()
    return (f"[{now.tm_year:04d}-{now.tm_mon:02d}-{now.tm_mday:02d} "
            f"{now.tm_hour:02d}:{now.tm_min:02d}:{now.tm_sec:02d}]")

# ============================================================================
# LOGGING FUNCTIONS
# ============================================================================

def log(message, level=config.LogLevel.INFO):
    """
    Log message with timestamp.

    Format: [2016-05-02 21:04:08] INFO: message

    Args:
        message: The message to log
        level: Log level (ERROR, WARNING, INFO, DEBUG, VERBOSE)
    """
    if level <= config.CURRENT_LOG_LEVEL:
        # Map level to name
        level_names = {
            config.LogLevel.ERROR: "ERROR",
            config.LogLevel.WARNING: "WARNING",
            config.LogLevel.INFO: "INFO",
            config.LogLevel.DEBUG: "DEBUG",
            config.LogLevel.VERBOSE: "VERBOSE"
        }
        level_name = level_names.get(level, "INFO")

        print(f"{get_timestamp()} {level_name}: {message}", flush=True)

# ============================================================================
# FORMATTING HELPERS
# ============================================================================

def format_uptime(seconds):
    """
    Format uptime as HH:MM:SS.

    Args:
        seconds: Uptime in seconds (from time.monotonic())

    Returns:
        str: Formatted uptime like "08:15:42"
    """
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = int(seconds % 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"

# ============================================================================
# EVENT LOGGING
# ============================================================================

def log_transition(old_name, new_name, event_name):
    """Log a mode change"""
    log(f"{event_name}: {old_name} -> {new_name}", config.LogLevel.INFO)

def log_weather(snapshot):
    """
    Log current weather in one line.

    Args:
        snapshot: weather_api.WeatherSnapshot
    """
    log(f"Weather: {snapshot.city}, {snapshot.description}, "
        f"{snapshot.temperature}{snapshot.temperature_unit}, "
        f"wind {snapshot.wind_speed}{snapshot.speed_unit} {snapshot.wind_direction}",
        config.LogLevel.INFO)

def log_stats(current_time):
    """
    Log uptime and weather statistics.

    Args:
        current_time: Current time from time.monotonic()
    """
    uptime = format_uptime(current_time - state.start_time)
    log(f"Uptime: {uptime} | Transitions: {state.transition_count} | "
        f"Fetches: {state.weather_fetch_count} | Errors: {state.weather_fetch_errors} | "
        f"Stale: {state.weather_stale_drops}", config.LogLevel.INFO)
