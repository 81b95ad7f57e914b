"""
Smart Mirror - Configuration Module
All constants and configuration - ZERO runtime cost
"""

import os

# ============================================================================
# DISPLAY HARDWARE
# ============================================================================

class Display:
    """ILI9341 TFT specifications and wiring"""
    WIDTH = 320
    HEIGHT = 240
    ROTATION = 90

    # Pin names on the board module (SPI0 on a Raspberry Pi header)
    CS_PIN = "CE0"
    DC_PIN = "D25"
    RST_PIN = "D24"

    # Erase the panel when going to sleep
    CLEAR_ON_SLEEP = True

# ============================================================================
# COLORS
# ============================================================================

class Colors:
    """Color palette"""
    BLACK = 0x000000
    WHITE = 0xFFFFFF
    BLUE = 0x0000FF
    CYAN = 0x00FFFF

    BACKGROUND = BLACK
    TEXT = CYAN

# ============================================================================
# LAYOUT & POSITIONING
# ============================================================================

class Layout:
    """Display positioning constants"""
    # Clock region
    TIME_X = 0
    TIME_Y = 10
    TIME_SIZE = 4

    # Weather text region
    CONTENT_X = 0
    CONTENT_Y = 50
    CONTENT_SIZE = 2

# ============================================================================
# SENSOR
# ============================================================================

class Sensor:
    """APDS-9960 light/gesture sensor settings"""
    LIGHT_THRESHOLD_HIGH = 100  # Amount of light needed to start LCD
    LIGHT_THRESHOLD_LOW = 10    # Amount of light needed to go to "sleep"

# ============================================================================
# TIMING
# ============================================================================

class Timing:
    """Timing constants in seconds"""
    POLL_ASLEEP = 0.5       # Light check while the LCD is off
    POLL_AWAKE = 0.25       # Light and gesture check while awake
    WEATHER_UPDATE = 10     # Time between weather updates
    STATS_INTERVAL = 3600   # Time between statistics log lines

# ============================================================================
# API CONFIGURATION
# ============================================================================

class API:
    """API endpoints and configuration"""
    # OpenWeatherMap
    BASE_URL = "http://api.openweathermap.org/data/2.5"
    CURRENT_ENDPOINT = "weather"
    FORECAST_ENDPOINT = "forecast"

    TIMEOUT = 10

    # Forecast sizes
    HOURLY_STEPS = 5        # 3-hour steps on the hourly view
    DAILY_DAYS = 5          # Days on the daily view
    FORECAST_MAX_STEPS = 40 # Everything the free forecast returns (5 days)

    # HTTP status codes
    HTTP_OK = 200
    HTTP_BAD_REQUEST = 400
    HTTP_UNAUTHORIZED = 401
    HTTP_FORBIDDEN = 403
    HTTP_NOT_FOUND = 404
    HTTP_TOO_MANY_REQUESTS = 429
    HTTP_INTERNAL_SERVER_ERROR = 500
    HTTP_SERVICE_UNAVAILABLE = 503

# ============================================================================
# UNITS
# ============================================================================

class Units:
    """Unit systems understood by OpenWeatherMap"""
    METRIC = "metric"
    IMPERIAL = "imperial"

    TEMPERATURE = {METRIC: "C", IMPERIAL: "F"}
    SPEED = {METRIC: "m/s", IMPERIAL: "mph"}

# ============================================================================
# LOGGING
# ============================================================================

class LogLevel:
    """Logging levels"""
    ERROR = 1
    WARNING = 2
    INFO = 3
    DEBUG = 4
    VERBOSE = 5

    NAMES = {
        "ERROR": ERROR,
        "WARNING": WARNING,
        "INFO": INFO,
        "DEBUG": DEBUG,
        "VERBOSE": VERBOSE,
    }

# Current log level
CURRENT_LOG_LEVEL = LogLevel.INFO

# ============================================================================
# PATHS
# ============================================================================

class Paths:
    """File system paths"""
    FONT = None  # BDF font; None uses the built-in terminal font

# ============================================================================
# ENVIRONMENT VARIABLES
# ============================================================================

class Env:
    """Deployment values read from the environment"""

    OPENWEATHER_API_KEY = None
    LATITUDE = 40.015
    LONGITUDE = -105.27
    UNITS = Units.IMPERIAL

    @classmethod
    def load(cls):
        """Load all environment variables"""
        global CURRENT_LOG_LEVEL

        cls.OPENWEATHER_API_KEY = os.getenv("OPENWEATHER_API_KEY")
        cls.LATITUDE = _to_float(os.getenv("LATITUDE"), 40.015)
        cls.LONGITUDE = _to_float(os.getenv("LONGITUDE"), -105.27)
        cls.UNITS = os.getenv("UNITS", Units.IMPERIAL).strip().lower()

        level_name = os.getenv("LOG_LEVEL")
        if level_name:
            CURRENT_LOG_LEVEL = LogLevel.NAMES.get(level_name.strip().upper(), CURRENT_LOG_LEVEL)

        font = os.getenv("SMARTMIRROR_FONT")
        if font:
            Paths.FONT = font


def _to_float(value, default):
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError:
        return None

# ============================================================================
# VALIDATION
# ============================================================================

def validate_configuration():
    """
    Check the loaded configuration.

    Returns:
        list: Human-readable problems, empty when the configuration is usable
    """
    problems = []

    if not Env.OPENWEATHER_API_KEY:
        problems.append("OPENWEATHER_API_KEY is not set")

    if Env.UNITS not in (Units.METRIC, Units.IMPERIAL):
        problems.append(f"UNITS must be 'metric' or 'imperial', got {Env.UNITS!r}")

    if Env.LATITUDE is None or not -90 <= Env.LATITUDE <= 90:
        problems.append("LATITUDE must be a number between -90 and 90")

    if Env.LONGITUDE is None or not -180 <= Env.LONGITUDE <= 180:
        problems.append("LONGITUDE must be a number between -180 and 180")

    if Sensor.LIGHT_THRESHOLD_LOW >= Sensor.LIGHT_THRESHOLD_HIGH:
        problems.append("LIGHT_THRESHOLD_LOW must be below LIGHT_THRESHOLD_HIGH")

    return problems
