"""
Smart Mirror - Controller Module
Owns the mode, the sensor poller and the weather fetcher's lifecycle
"""

import config
import state
import logger
from fetcher import WeatherFetcher
from modes import Action, Event, Gesture, Mode, transition
from scheduler import Timer


class SmartMirror:
    """
    Mode state machine driven by the light/gesture sensor.

    Asleep: check the light every Timing.POLL_ASLEEP and wake up when it is
    bright enough. Awake: check the light and gestures every
    Timing.POLL_AWAKE; go to sleep in the dark, swipe left/right to change
    view. Every mode change goes through dispatch().
    """

    def __init__(self, sensor, renderer, session=None, fetcher=None):
        self.sensor = sensor
        self.renderer = renderer
        self.mode = Mode.ASLEEP
        self.poll_timer = Timer("sensor")
        self.fetcher = fetcher or WeatherFetcher(session, renderer, lambda: self.mode)

    # ------------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------------

    def start(self):
        """Clear the LCD and wait for light"""
        logger.log("Waiting for light...")
        for action in (Action.DISABLE_GESTURES, Action.CLEAR_SCREEN, Action.POLL_ASLEEP):
            self._apply(action)

    def stop(self):
        self.poll_timer.stop()
        self.fetcher.close()

    # ------------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------------

    def dispatch(self, event):
        """Apply an event to the current mode and perform the resulting actions"""
        new_mode, actions = transition(self.mode, event)

        if new_mode != self.mode:
            logger.log_transition(Mode.name(self.mode), Mode.name(new_mode), event)
            state.transition_count += 1
        self.mode = new_mode

        for action in actions:
            self._apply(action)
        return new_mode

    def _apply(self, action):
        if action == Action.START_FETCH:
            self.fetcher.start()
        elif action == Action.RESTART_FETCH:
            self.fetcher.restart()
        elif action == Action.STOP_FETCH:
            self.fetcher.stop()
        elif action == Action.ENABLE_GESTURES:
            # Initialize gesture sensing (no interrupts)
            if not self.sensor.enable_gesture_sensor(False):
                logger.log("Something went wrong during gesture init!", config.LogLevel.WARNING)
        elif action == Action.DISABLE_GESTURES:
            if not self.sensor.disable_gesture_sensor():
                logger.log("Something went wrong during gesture disable!", config.LogLevel.WARNING)
        elif action == Action.CLEAR_SCREEN:
            if config.Display.CLEAR_ON_SLEEP or self.mode != Mode.ASLEEP:
                self.renderer.clear()
        elif action == Action.POLL_AWAKE:
            self.poll_timer.start(config.Timing.POLL_AWAKE, self.poll_awake)
        elif action == Action.POLL_ASLEEP:
            self.poll_timer.start(config.Timing.POLL_ASLEEP, self.poll_asleep)
        else:
            raise ValueError(f"Unknown action {action!r}")

    # ------------------------------------------------------------------------
    # Poller ticks
    # ------------------------------------------------------------------------

    def poll_asleep(self):
        """Look for light"""
        light = self._read_light()
        if light is None:
            return

        if light >= config.Sensor.LIGHT_THRESHOLD_HIGH:
            logger.log("Light found! Starting weather...")
            self.dispatch(Event.LIGHT_HIGH)

    def poll_awake(self):
        """Look for a gesture or for lights to go out"""
        light = self._read_light()
        if light is None:
            return

        if light <= config.Sensor.LIGHT_THRESHOLD_LOW:
            logger.log("Lights out. Goodnight.")
            self.dispatch(Event.LIGHT_LOW)
            return

        try:
            if not self.sensor.is_gesture_available():
                return
            gesture = self.sensor.read_gesture()
        except Exception as e:
            logger.log(f"Gesture read failed: {e}", config.LogLevel.WARNING)
            return

        event = Gesture.SWIPES.get(gesture)
        if event is not None:
            self.dispatch(event)
            logger.log(f"{event} gesture. Now {Mode.name(self.mode)}", config.LogLevel.DEBUG)

    def _read_light(self):
        """Ambient light level, or None when the sensor could not be read"""
        try:
            light = self.sensor.read_ambient_light()
        except Exception as e:
            logger.log(f"Light read failed: {e}", config.LogLevel.WARNING)
            return None
        logger.log(f"Light: {light}", config.LogLevel.VERBOSE)
        return light
