"""
Smart Mirror - Main Entry Point
Shows weather on an LCD, controlled with hand gestures. When the room gets
bright the LCD turns on with the current weather; swipe left/right to cycle
to the hourly and daily forecasts. In the dark the mirror goes to sleep.
"""

import asyncio
import sys
import time

import config
import state
import logger
import hardware
from display import Renderer
from mirror import SmartMirror

# ============================================================================
# INITIALIZATION
# ============================================================================

def initialize():
    """
    Load configuration and bring up the hardware.

    Returns:
        SmartMirror: Ready to start, or None when anything essential failed
    """
    config.Env.load()

    problems = config.validate_configuration()
    for problem in problems:
        logger.log(f"Configuration: {problem}", config.LogLevel.ERROR)
    if problems:
        return None

    sensor = hardware.init_sensor()
    if sensor is None:
        return None

    screen = hardware.init_display()
    if screen is None:
        return None

    try:
        session = hardware.init_session()
    except Exception as e:
        logger.log(f"HTTP session failed: {e}", config.LogLevel.ERROR)
        return None

    logger.log(f"Location: {config.Env.LATITUDE}, {config.Env.LONGITUDE} ({config.Env.UNITS})")
    return SmartMirror(sensor, Renderer(screen), session)

# ============================================================================
# MAIN LOOP
# ============================================================================

async def run(mirror):
    """Start the poller and log statistics until cancelled"""
    mirror.start()
    try:
        while True:
            await asyncio.sleep(config.Timing.STATS_INTERVAL)
            logger.log_stats(time.monotonic())
    finally:
        mirror.stop()

# ============================================================================
# MAIN FUNCTION
# ============================================================================

def main():
    """Main entry point, returns the process exit code"""
    logger.log("=== Smart Mirror ===")
    state.start_time = time.monotonic()

    mirror = initialize()
    if mirror is None:
        logger.log("Cannot continue - initialization failed", config.LogLevel.ERROR)
        return 1

    try:
        asyncio.run(run(mirror))
    except KeyboardInterrupt:
        logger.log("=== Smart mirror stopped ===")
        logger.log_stats(time.monotonic())

    return 0

# ============================================================================
# ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    sys.exit(main())
