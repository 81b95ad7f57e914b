"""
Smart Mirror - Display Module
Draws the clock and weather text, touching only regions that changed
"""

import time

import config
import logger


def format_time(now):
    """'H:MM' with unpadded 24h hours: 9:05, 21:40"""
    return f"{now.tm_hour}:{now.tm_min:02d}"


class Renderer:
    """
    Keeps the last strings drawn so unchanged regions are not redrawn.

    Text is erased by printing the previous string again in the background
    color before the new string goes on top.
    """

    def __init__(self, screen):
        self.screen = screen
        self.last_time = None
        self.last_content = None

    def update(self, content, now=None):
        """
        Show the current time and a content string.

        Args:
            content: Multi-line display text
            now: time.struct_time to show, defaults to time.localtime()
        """
        if now is None:
            now = time.localtime()
        time_str = format_time(now)

        if time_str != self.last_time:
            self.screen.set_text_wrap(False)
            self.screen.set_text_size(config.Layout.TIME_SIZE)
            if self.last_time is not None:
                logger.log("LCD: Clearing time", config.LogLevel.VERBOSE)
                self._draw(config.Layout.TIME_X, config.Layout.TIME_Y, self.last_time, config.Colors.BACKGROUND)
            logger.log(f"LCD: Writing time {time_str}", config.LogLevel.VERBOSE)
            self._draw(config.Layout.TIME_X, config.Layout.TIME_Y, time_str, config.Colors.TEXT)
            self.last_time = time_str

        if content != self.last_content:
            self.screen.set_text_size(config.Layout.CONTENT_SIZE)
            if self.last_content is not None:
                logger.log("LCD: Clearing string", config.LogLevel.VERBOSE)
                self._draw(config.Layout.CONTENT_X, config.Layout.CONTENT_Y, self.last_content,
                           config.Colors.BACKGROUND)
            logger.log(f"LCD: {content!r}", config.LogLevel.VERBOSE)
            self._draw(config.Layout.CONTENT_X, config.Layout.CONTENT_Y, content, config.Colors.TEXT)
            self.last_content = content

    def clear(self):
        """Blank the screen and forget what was drawn"""
        self.screen.clear_screen(config.Colors.BACKGROUND)
        self.last_time = None
        self.last_content = None

    def _draw(self, x, y, text, color):
        self.screen.set_cursor(x, y)
        self.screen.set_text_color(color)
        self.screen.print(text)
