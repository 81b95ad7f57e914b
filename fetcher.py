"""
Smart Mirror - Weather Fetcher Module
Periodic weather requests, run off the event loop, results sent to the renderer
"""

import asyncio
from concurrent.futures import ThreadPoolExecutor

import config
import state
import logger
import weather_api
from modes import Mode
from scheduler import Timer


class WeatherFetcher:
    """
    Fetches the view for the current mode on every timer tick.

    Every start/restart/stop begins a new epoch. A request remembers the
    epoch it was sent in; when it completes in a later epoch (the view was
    swiped or the mirror went to sleep meanwhile) its result is dropped.

    Requests run one at a time on a single worker thread. A tick is skipped
    while a request of the current epoch is still pending.
    """

    def __init__(self, session, renderer, get_mode, period=None):
        self.session = session
        self.renderer = renderer
        self.get_mode = get_mode
        self.timer = Timer("weather", period or config.Timing.WEATHER_UPDATE, self.tick)
        self.epoch = 0
        self._pending = set()
        self._tasks = set()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="weather")

    @property
    def running(self):
        return self.timer.running

    def start(self):
        """Fetch now, then every period"""
        self.epoch += 1
        self.timer.start()
        self.tick()

    def restart(self):
        """Drop the current schedule and fetch fresh content for a new view"""
        logger.log("Restarting weather updates", config.LogLevel.DEBUG)
        self.start()

    def stop(self):
        self.epoch += 1
        self.timer.stop()

    def tick(self):
        """Dispatch one request; returns immediately"""
        if self.epoch in self._pending:
            logger.log("Weather request still pending, skipping update", config.LogLevel.DEBUG)
            return

        mode = self.get_mode()
        if mode not in Mode.AWAKE:
            return

        epoch = self.epoch
        self._pending.add(epoch)
        task = asyncio.get_running_loop().create_task(self._fetch(epoch, mode))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _fetch(self, epoch, mode):
        loop = asyncio.get_running_loop()
        try:
            content = await loop.run_in_executor(self._executor, weather_api.fetch, self.session, mode)
        except Exception as e:
            logger.log(f"Weather fetch failed: {e!r}", config.LogLevel.ERROR)
            content = None
        finally:
            self._pending.discard(epoch)

        try:
            self.deliver(epoch, mode, content)
        except Exception as e:
            logger.log(f"Weather display failed: {e!r}", config.LogLevel.ERROR)
            state.weather_fetch_errors += 1

    def deliver(self, epoch, mode, content):
        """
        Hand a finished request to the renderer.

        Args:
            epoch: Epoch the request was sent in
            mode: Mode the request was made for
            content: Display text, or None when the request failed
        """
        if content is None:
            state.weather_fetch_errors += 1
            return

        if epoch != self.epoch:
            state.weather_stale_drops += 1
            logger.log(f"Dropping stale {Mode.name(mode)} weather (epoch {epoch}, now {self.epoch})",
                       config.LogLevel.DEBUG)
            return

        state.weather_fetch_count += 1
        self.renderer.update(content)

    async def drain(self):
        """Wait for requests already sent"""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    def close(self):
        self.stop()
        self._executor.shutdown(wait=False)
