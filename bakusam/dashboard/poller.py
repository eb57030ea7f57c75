import asyncio
import logging

logger = logging.getLogger(__name__)

class Poller:
    """Awaits ``callback()`` every ``interval`` seconds in a background task.

    A failing callback is logged and the loop carries on with the next tick.
    """

    def __init__(self, name: str, interval: float, callback):
        self.name = name
        self.interval = interval
        self.callback = callback
        self._task = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self):
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name=f"poller-{self.name}")
        logger.info(f"Polling {self.name} every {self.interval}s")

    async def stop(self):
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info(f"Stopped polling {self.name}")

    async def _run(self):
        while True:
            try:
                await self.callback()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error(f"Polling {self.name} failed: {str(e)}", exc_info=True)
            await asyncio.sleep(self.interval)
