"""
Smart Mirror - Hardware Module
Sensor, display and network initialization
"""

import socket
import ssl

import board
import busio
import displayio
import terminalio
import adafruit_ili9341
import adafruit_requests
from adafruit_apds9960.apds9960 import APDS9960
from adafruit_bitmap_font import bitmap_font
from adafruit_display_text import bitmap_label, wrap_text_to_lines
from fourwire import FourWire

import config
import state
import logger
from modes import Gesture

# ============================================================================
# LIGHT / GESTURE SENSOR
# ============================================================================

class GestureSensor:
    """
    APDS-9960 wrapper with boolean setup calls.

    Setup calls report failure with False instead of raising. The driver
    only tells whether a gesture is available by reading it, so
    is_gesture_available() keeps what it read for read_gesture().
    """

    def __init__(self, i2c=None):
        self.i2c = i2c
        self.apds = None
        self._pending = Gesture.NONE

    def init(self):
        try:
            if self.i2c is None:
                self.i2c = busio.I2C(board.SCL, board.SDA)
            self.apds = APDS9960(self.i2c)
            return True
        except Exception as e:
            logger.log(f"APDS9960 init failed: {e}", config.LogLevel.ERROR)
            return False

    def enable_light_sensor(self, interrupts_enabled=False):
        try:
            self.apds.enable_color = True
            if interrupts_enabled:
                logger.log("Light sensor interrupts not wired, polling instead", config.LogLevel.DEBUG)
            return True
        except Exception as e:
            logger.log(f"Light sensor enable failed: {e}", config.LogLevel.ERROR)
            return False

    def read_ambient_light(self):
        """Clear channel count"""
        return self.apds.color_data[3]

    def enable_gesture_sensor(self, interrupts_enabled=False):
        try:
            self.apds.enable_proximity = True
            self.apds.enable_gesture = True
            self._pending = Gesture.NONE
            if interrupts_enabled:
                logger.log("Gesture interrupts not wired, polling instead", config.LogLevel.DEBUG)
            return True
        except Exception as e:
            logger.log(f"Gesture enable failed: {e}", config.LogLevel.WARNING)
            return False

    def disable_gesture_sensor(self):
        try:
            self.apds.enable_gesture = False
            self.apds.enable_proximity = False
            self._pending = Gesture.NONE
            return True
        except Exception as e:
            logger.log(f"Gesture disable failed: {e}", config.LogLevel.WARNING)
            return False

    def is_gesture_available(self):
        if self._pending == Gesture.NONE:
            self._pending = self.apds.gesture()
        return self._pending != Gesture.NONE

    def read_gesture(self):
        gesture = self._pending
        if gesture == Gesture.NONE:
            gesture = self.apds.gesture()
        self._pending = Gesture.NONE
        return gesture


def init_sensor():
    """Initialize the APDS-9960 and turn on ambient light sensing"""
    logger.log("Initializing gesture sensor...")

    sensor = GestureSensor()
    if not sensor.init():
        logger.log("Error with gesture sensor init", config.LogLevel.ERROR)
        return None

    # Enable light sensor without interrupts
    if not sensor.enable_light_sensor(False):
        logger.log("Error enabling light sensor", config.LogLevel.ERROR)
        return None

    state.sensor = sensor
    logger.log("Gesture sensor initialized")
    return sensor

# ============================================================================
# DISPLAY
# ============================================================================

class Screen:
    """
    Cursor-and-print text drawing on a displayio display.

    Each print() becomes a label anchored at the cursor. Printing at a
    position replaces whatever was printed there before, so erasing by
    printing in the background color does not grow the group.
    """

    def __init__(self, display, font):
        self.display = display
        self.font = font
        self.group = displayio.Group()

        self._bitmap = displayio.Bitmap(config.Display.WIDTH, config.Display.HEIGHT, 1)
        self._palette = displayio.Palette(1)
        self._palette[0] = config.Colors.BACKGROUND
        self.group.append(displayio.TileGrid(self._bitmap, pixel_shader=self._palette))

        self._labels = {}
        self._cursor = (0, 0)
        self._size = 1
        self._color = config.Colors.WHITE
        self._wrap = True

        display.root_group = self.group

    def clear_screen(self, color):
        for label in self._labels.values():
            self.group.remove(label)
        self._labels.clear()
        self._palette[0] = color

    def set_cursor(self, x, y):
        self._cursor = (x, y)

    def set_text_size(self, size):
        self._size = size

    def set_text_color(self, color):
        self._color = color

    def set_text_wrap(self, wrap):
        self._wrap = wrap

    def print(self, text):
        if self._wrap:
            max_chars = max(1, (config.Display.WIDTH - self._cursor[0]) // (6 * self._size))
            text = "\n".join("\n".join(wrap_text_to_lines(line, max_chars)) for line in text.split("\n"))

        label = bitmap_label.Label(
            self.font,
            text=text,
            color=self._color,
            scale=self._size,
            anchor_point=(0.0, 0.0),
            anchored_position=self._cursor,
        )

        old = self._labels.pop(self._cursor, None)
        if old is not None:
            self.group.remove(old)
        self.group.append(label)
        self._labels[self._cursor] = label


def init_display():
    """Initialize the ILI9341 TFT"""
    logger.log("Initializing display...")

    try:
        # Release any existing displays
        displayio.release_displays()

        spi = board.SPI()
        display_bus = FourWire(
            spi,
            command=getattr(board, config.Display.DC_PIN),
            chip_select=getattr(board, config.Display.CS_PIN),
            reset=getattr(board, config.Display.RST_PIN),
        )
        display = adafruit_ili9341.ILI9341(
            display_bus,
            width=config.Display.WIDTH,
            height=config.Display.HEIGHT,
            rotation=config.Display.ROTATION,
        )
    except Exception as e:
        logger.log(f"Display initialization failed: {e}", config.LogLevel.ERROR)
        return None

    # Load font
    font = terminalio.FONT
    if config.Paths.FONT:
        try:
            font = bitmap_font.load_font(config.Paths.FONT)
            logger.log(f"Font loaded: {config.Paths.FONT}")
        except Exception as e:
            logger.log(f"Failed to load font {config.Paths.FONT}: {e}", config.LogLevel.WARNING)

    state.screen = Screen(display, font)
    logger.log("Display initialized successfully")
    return state.screen

# ============================================================================
# NETWORK
# ============================================================================

def init_session():
    """Create the HTTP session used for weather requests"""
    state.session = adafruit_requests.Session(socket, ssl.create_default_context())
    logger.log("HTTP session created")
    return state.session
