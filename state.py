"""
Smart Mirror - Global State Module
Device handles and counters shared across modules
"""

# ============================================================================
# HARDWARE STATE
# ============================================================================

# Light/gesture sensor (initialized by hardware.init_sensor)
sensor = None

# Screen adapter (initialized by hardware.init_display)
screen = None

# ============================================================================
# NETWORK STATE
# ============================================================================

# HTTP session (initialized by hardware.init_session)
session = None

# ============================================================================
# RUNTIME STATE
# ============================================================================

# Uptime tracking (using time.monotonic())
start_time = 0  # Set in main.py on startup

# Mode transitions since startup
transition_count = 0

# ============================================================================
# WEATHER STATISTICS
# ============================================================================

weather_fetch_count = 0
weather_fetch_errors = 0
weather_stale_drops = 0


def reset():
    """Forget all handles and counters"""
    global sensor, screen, session, start_time, transition_count
    global weather_fetch_count, weather_fetch_errors, weather_stale_drops

    sensor = None
    screen = None
    session = None
    start_time = 0
    transition_count = 0
    weather_fetch_count = 0
    weather_fetch_errors = 0
    weather_stale_drops = 0
