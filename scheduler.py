"""
Smart Mirror - Scheduler Module
Repeating timers on the asyncio event loop
"""

import asyncio

import config
import logger


class Timer:
    """
    Calls a short synchronous callback every `period` seconds.

    The first call happens one period after start(). start() on a running
    timer cancels the running task first, so a timer never has more than one
    task. Stopping only prevents further ticks; work a tick already handed
    off elsewhere is not affected.
    """

    def __init__(self, name, period=None, callback=None):
        self.name = name
        self.period = period
        self.callback = callback
        self.ticks = 0
        self._task = None

    @property
    def running(self):
        return self._task is not None

    def start(self, period=None, callback=None):
        """(Re)start the timer, optionally with a new period and callback"""
        self.stop()
        if period is not None:
            self.period = period
        if callback is not None:
            self.callback = callback
        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.log(f"Timer {self.name} started ({self.period}s)", config.LogLevel.DEBUG)

    def stop(self):
        if self._task is None:
            return
        self._task.cancel()
        self._task = None
        logger.log(f"Timer {self.name} stopped", config.LogLevel.DEBUG)

    async def _run(self):
        while True:
            await asyncio.sleep(self.period)
            self.ticks += 1
            try:
                self.callback()
            except Exception as e:
                logger.log(f"Timer {self.name} callback failed: {e}", config.LogLevel.ERROR)
