"""
Smart Mirror - Mode Module
Display modes and the transition table
"""

# ============================================================================
# MODES
# ============================================================================

class Mode:
    """Device operating modes"""
    CURRENT = 0     # Current weather
    HOURLY = 1      # Hourly forecast
    DAILY = 2       # Daily forecast
    ASLEEP = 4      # LCD off, not updating weather

    AWAKE = (CURRENT, HOURLY, DAILY)

    NAMES = {
        CURRENT: "CURRENT",
        HOURLY: "HOURLY",
        DAILY: "DAILY",
        ASLEEP: "ASLEEP",
    }

    @staticmethod
    def name(mode):
        return Mode.NAMES.get(mode, str(mode))

# ============================================================================
# EVENTS & ACTIONS
# ============================================================================

class Event:
    """Inputs produced by the poller"""
    LIGHT_HIGH = "LIGHT_HIGH"
    LIGHT_LOW = "LIGHT_LOW"
    SWIPE_LEFT = "SWIPE_LEFT"
    SWIPE_RIGHT = "SWIPE_RIGHT"


class Action:
    """Side effects requested by a transition"""
    START_FETCH = "START_FETCH"
    STOP_FETCH = "STOP_FETCH"
    RESTART_FETCH = "RESTART_FETCH"
    ENABLE_GESTURES = "ENABLE_GESTURES"
    DISABLE_GESTURES = "DISABLE_GESTURES"
    CLEAR_SCREEN = "CLEAR_SCREEN"
    POLL_AWAKE = "POLL_AWAKE"
    POLL_ASLEEP = "POLL_ASLEEP"

# ============================================================================
# TRANSITIONS
# ============================================================================

WAKE_ACTIONS = (Action.ENABLE_GESTURES, Action.CLEAR_SCREEN,
                Action.START_FETCH, Action.POLL_AWAKE)
SLEEP_ACTIONS = (Action.STOP_FETCH, Action.DISABLE_GESTURES,
                 Action.CLEAR_SCREEN, Action.POLL_ASLEEP)


def transition(mode, event):
    """
    Apply one event to a mode.

    Pure function: nothing is touched, the caller performs the actions.
    Combinations with no meaning in the current mode (light high while awake,
    swipes while asleep, ...) leave the mode alone and request nothing.

    Args:
        mode: Current Mode value
        event: Event value

    Returns:
        tuple: (new mode, tuple of Action values)
    """
    if mode == Mode.ASLEEP:
        if event == Event.LIGHT_HIGH:
            return Mode.CURRENT, WAKE_ACTIONS
        return mode, ()

    if event == Event.LIGHT_LOW:
        return Mode.ASLEEP, SLEEP_ACTIONS

    # Floored modulo: left from CURRENT wraps around to DAILY
    cycle = len(Mode.AWAKE)
    if event == Event.SWIPE_RIGHT:
        return Mode.AWAKE[(mode + 1) % cycle], (Action.RESTART_FETCH,)
    if event == Event.SWIPE_LEFT:
        return Mode.AWAKE[(mode - 1) % cycle], (Action.RESTART_FETCH,)

    return mode, ()

# ============================================================================
# GESTURES
# ============================================================================

class Gesture:
    """Gesture codes reported by the APDS-9960 driver"""
    NONE = 0
    UP = 1
    DOWN = 2
    LEFT = 3
    RIGHT = 4
    NEAR = 5
    FAR = 6

    SWIPES = {
        LEFT: Event.SWIPE_LEFT,
        RIGHT: Event.SWIPE_RIGHT,
    }
