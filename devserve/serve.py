"""
serve.py - The `serve` task: start the static server on the app folder, watch
its HTML/CSS/JS and reload connected browsers on every change.

Everything runs on one asyncio loop. The watcher posts ChangeEvents onto a
queue and a single consumer turns each one into a reload broadcast.
"""

import asyncio
import contextlib
import logging
import signal

from devserve.config import (
    APP_DIR, DEFAULT_DEBOUNCE_MS, DEFAULT_HOST, DEFAULT_PATTERNS, ServerConfig, WatchSpec,
)
from devserve.static_server import StaticServer
from devserve.watcher import WatchTrigger

logger = logging.getLogger(__name__)


class DevTask:

    def __init__(self, server_config, watch_spec, server=None, trigger=None):
        self.server_config = server_config
        self.watch_spec = watch_spec
        self.server = server or StaticServer()
        self.trigger = trigger or WatchTrigger()
        self._stop_requested = False
        self._stop_event = None

    @classmethod
    def for_app(cls, root=APP_DIR, host=DEFAULT_HOST, port=None, debounce=DEFAULT_DEBOUNCE_MS, **kwargs):
        return cls(
            ServerConfig(base_directory=root, host=host, port=port),
            WatchSpec(patterns=DEFAULT_PATTERNS, working_directory=root, debounce=debounce),
            **kwargs
        )

    def run(self):
        asyncio.run(self.serve())

    def stop(self):
        self._stop_requested = True
        if self._stop_event is not None:
            self._stop_event.set()

    async def serve(self):
        self._stop_event = asyncio.Event()
        if self._stop_requested:
            self._stop_event.set()

        handle = self.server.start(self.server_config)
        try:
            await self._watch_until_stopped(handle)
        finally:
            handle.close()
            logger.info('Shutting down...')

    async def _watch_until_stopped(self, handle):
        events = asyncio.Queue()
        watcher = self.trigger.watch(self.watch_spec, events.put_nowait)

        loop = asyncio.get_running_loop()
        installed = self._install_signal_handlers(loop)
        consumer = loop.create_task(self._dispatch(handle, events))
        stopper = loop.create_task(self._stop_event.wait())
        logger.info('Ready: %s (Ctrl+C to stop)', handle.url)
        try:
            await asyncio.wait({stopper, watcher.task}, return_when=asyncio.FIRST_COMPLETED)
            if watcher.task.done() and not watcher.task.cancelled():
                # surfaces a crashed watcher
                watcher.task.result()
        finally:
            for sig in installed:
                loop.remove_signal_handler(sig)
            stopper.cancel()
            consumer.cancel()
            await watcher.stop()
            with contextlib.suppress(asyncio.CancelledError):
                await consumer

    async def _dispatch(self, handle, events):
        while True:
            event = await events.get()
            self.server.notify_reload(handle, event.relpath)

    def _install_signal_handlers(self, loop):
        installed = []
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, self.stop)
            except (NotImplementedError, RuntimeError):
                # not supported on this platform or not in the main thread
                continue
            installed.append(sig)
        return installed
