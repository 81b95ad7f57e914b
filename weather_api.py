"""
Smart Mirror - Weather API Module
Fetch weather from OpenWeatherMap and turn it into display text
"""

import time
from collections import namedtuple
from decimal import Decimal, ROUND_HALF_UP

import config
import logger
from modes import Mode

# ============================================================================
# DATA
# ============================================================================

_Snapshot = namedtuple("_Snapshot", [
    "city", "temperature", "description", "wind_speed", "wind_direction",
    "temp_min", "temp_max", "units",
])


class WeatherSnapshot(_Snapshot):
    """Current conditions, already rounded for display"""
    __slots__ = ()

    @property
    def temperature_unit(self):
        return config.Units.TEMPERATURE[self.units]

    @property
    def speed_unit(self):
        return config.Units.SPEED[self.units]


ForecastEntry = namedtuple("ForecastEntry", ["local_time", "temperature", "temp_min", "temp_max", "description"])

COMPASS_POINTS = ("N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
                  "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW")

# ============================================================================
# NUMBER FORMATTING
# ============================================================================

def round_tenth(value):
    """
    Round to the nearest tenth, halves away from zero (5.65 -> 5.7).

    The decimal string of the float is rounded, so values like 5.65 that are
    stored slightly below the half still round up.
    """
    rounded = Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return float(rounded) + 0.0  # no "-0.0"


def format_tenth(value):
    """Rounded value with exactly one decimal: 60.01 -> "60.0" """
    return f"{round_tenth(value):.1f}"


def compass_direction(degrees):
    """16-point compass code for a meteorological wind direction"""
    if degrees is None:
        return ""
    index = int((float(degrees) % 360) / 22.5 + 0.5) % len(COMPASS_POINTS)
    return COMPASS_POINTS[index]

# ============================================================================
# URLS
# ============================================================================

def build_url(endpoint, count=None):
    """
    Build an OpenWeatherMap request URL for the configured location.

    Args:
        endpoint: API.CURRENT_ENDPOINT or API.FORECAST_ENDPOINT
        count: Optional number of forecast steps

    Returns:
        str: Full request URL
    """
    url = (f"{config.API.BASE_URL}/{endpoint}"
           f"?lat={config.Env.LATITUDE}&lon={config.Env.LONGITUDE}"
           f"&appid={config.Env.OPENWEATHER_API_KEY}&units={config.Env.UNITS}")
    if count is not None:
        url += f"&cnt={count}"
    return url


def redact(url):
    """URL with the API key hidden, for logs"""
    key = config.Env.OPENWEATHER_API_KEY
    if key:
        return url.replace(key, "***")
    return url

# ============================================================================
# PARSING
# ============================================================================

def parse_current(data, units):
    """
    Extract current conditions from a /weather response.

    Raises KeyError, IndexError, TypeError, ValueError or AttributeError on a
    malformed payload.
    """
    main = data["main"]
    wind = data.get("wind") or {}

    return WeatherSnapshot(
        city=str(data["name"]),
        temperature=round_tenth(main["temp"]),
        description=str(data["weather"][0]["description"]),
        wind_speed=round_tenth(wind.get("speed", 0)),
        wind_direction=compass_direction(wind.get("deg")),
        temp_min=round_tenth(main["temp_min"]),
        temp_max=round_tenth(main["temp_max"]),
        units=units,
    )


def parse_forecast(data):
    """
    Extract city name and 3-hour steps from a /forecast response.

    Step times are shifted to the city's local time.

    Returns:
        tuple: (city, list of ForecastEntry)
    """
    city = data["city"]
    offset = int(city.get("timezone", 0))

    entries = []
    for step in data["list"]:
        main = step["main"]
        entries.append(ForecastEntry(
            local_time=time.gmtime(int(step["dt"]) + offset),
            temperature=round_tenth(main["temp"]),
            temp_min=round_tenth(main["temp_min"]),
            temp_max=round_tenth(main["temp_max"]),
            description=str(step["weather"][0]["description"]),
        ))

    return str(city["name"]), entries


def group_daily(entries):
    """
    Fold 3-hour steps into one entry per local day.

    Returns:
        list: ForecastEntry per day, in order, with the day's min/max
    """
    days = []
    day_keys = []
    for entry in entries:
        key = (entry.local_time.tm_year, entry.local_time.tm_yday)
        if day_keys and day_keys[-1] == key:
            day = days[-1]
            days[-1] = day._replace(
                temp_min=min(day.temp_min, entry.temp_min),
                temp_max=max(day.temp_max, entry.temp_max),
            )
        else:
            day_keys.append(key)
            days.append(entry)
    return days

# ============================================================================
# FORMATTING
# ============================================================================

def format_current(snapshot):
    """Multi-line text for the current conditions view"""
    t = snapshot.temperature_unit
    return (f"{snapshot.city}\n"
            f"{format_tenth(snapshot.temperature)}{t}\n"
            f"{snapshot.description}\n"
            f"\n"
            f"Wind: {format_tenth(snapshot.wind_speed)}{snapshot.speed_unit} {snapshot.wind_direction}\n"
            f"\n"
            f"High: {format_tenth(snapshot.temp_max)}{t}\n"
            f"Low:  {format_tenth(snapshot.temp_min)}{t}")


def format_hourly(city, entries, units):
    """City line, blank line, then one 'HH:MM TEMP description' line per step"""
    t = config.Units.TEMPERATURE[units]
    lines = [city, ""]
    for entry in entries[:config.API.HOURLY_STEPS]:
        clock = f"{entry.local_time.tm_hour:02d}:{entry.local_time.tm_min:02d}"
        lines.append(f"{clock} {format_tenth(entry.temperature)}{t} {entry.description}")
    return "\n".join(lines)


def format_daily(city, entries, units):
    """City line, blank line, then one 'Ddd HIGH/LOW' line per day"""
    t = config.Units.TEMPERATURE[units]
    lines = [city, ""]
    for day in group_daily(entries)[:config.API.DAILY_DAYS]:
        weekday = time.strftime("%a", day.local_time)
        lines.append(f"{weekday} {format_tenth(day.temp_max)}{t}/{format_tenth(day.temp_min)}{t}")
    return "\n".join(lines)


def describe_status(status):
    """Readable reason for a failed HTTP status"""
    reasons = {
        config.API.HTTP_BAD_REQUEST: "Bad request (400) - check URL/parameters",
        config.API.HTTP_UNAUTHORIZED: "Unauthorized (401) - check API key",
        config.API.HTTP_FORBIDDEN: "Forbidden (403) - API key lacks permissions",
        config.API.HTTP_NOT_FOUND: "Not found (404) - check coordinates",
        config.API.HTTP_TOO_MANY_REQUESTS: "Rate limited (429)",
        config.API.HTTP_INTERNAL_SERVER_ERROR: "Server error (500)",
        config.API.HTTP_SERVICE_UNAVAILABLE: "Service unavailable (503)",
    }
    return reasons.get(status, f"HTTP {status}")

# ============================================================================
# FETCHING
# ============================================================================

def request_for(mode):
    """URL to fetch for an awake mode"""
    if mode == Mode.HOURLY:
        return build_url(config.API.FORECAST_ENDPOINT, config.API.HOURLY_STEPS)
    if mode == Mode.DAILY:
        return build_url(config.API.FORECAST_ENDPOINT, config.API.FORECAST_MAX_STEPS)
    return build_url(config.API.CURRENT_ENDPOINT)


def render_payload(mode, data, units):
    """Display text for a decoded response of the given mode"""
    if mode == Mode.HOURLY:
        city, entries = parse_forecast(data)
        return format_hourly(city, entries, units)
    if mode == Mode.DAILY:
        city, entries = parse_forecast(data)
        return format_daily(city, entries, units)

    snapshot = parse_current(data, units)
    logger.log_weather(snapshot)
    return format_current(snapshot)


def fetch(session, mode):
    """
    Fetch and format the content of one view. Blocking; run off the event loop.

    Every failure is logged here and reported as None: connection errors,
    timeouts, non-200 responses and malformed payloads.

    Args:
        session: adafruit_requests.Session (or anything with .get)
        mode: Mode.CURRENT, Mode.HOURLY or Mode.DAILY

    Returns:
        str: Display text, or None on failure
    """
    url = request_for(mode)
    units = config.Env.UNITS
    logger.log(f"Fetching {Mode.name(mode)}: {redact(url)}", config.LogLevel.DEBUG)

    response = None
    try:
        response = session.get(url, timeout=config.API.TIMEOUT)
    except Exception as e:
        logger.log(f"Connection error: {e}", config.LogLevel.ERROR)
        return None

    try:
        if response.status_code != config.API.HTTP_OK:
            logger.log(f"Response error: {describe_status(response.status_code)}", config.LogLevel.ERROR)
            return None

        try:
            data = response.json()
            return render_payload(mode, data, units)
        except (KeyError, IndexError, TypeError, ValueError, AttributeError, ArithmeticError) as e:
            logger.log(f"Parsing error: {e!r}", config.LogLevel.ERROR)
            return None
        except OSError as e:
            logger.log(f"Connection error while reading: {e}", config.LogLevel.ERROR)
            return None

    finally:
        # Always close response to release the socket
        try:
            response.close()
        except Exception as e:
            logger.log(f"Response close failed: {e}", config.LogLevel.DEBUG)
