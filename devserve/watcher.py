"""
watcher.py - Glob-filtered file watching on top of watchfiles.awatch.

Each changed path in a batch becomes one ChangeEvent handed to the callback;
batching within the debounce window is watchfiles' own policy.
"""

import asyncio
import logging
import os
from dataclasses import dataclass

from watchfiles import DefaultFilter, awatch

from devserve.errors import WatchSetupError
from devserve.globs import GlobSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChangeEvent:
    kind: str
    path: str
    relpath: str


class PatternFilter(DefaultFilter):
    """DefaultFilter (skips .git, node_modules, editor swap files...) narrowed to a GlobSet."""

    def __init__(self, root, globs):
        super().__init__()
        self.root = root
        self.globs = globs

    def __call__(self, change, path):
        if not super().__call__(change, path):
            return False
        return self.globs.matches(_relative(self.root, path))


def _relative(root, path):
    return os.path.relpath(path, root).replace(os.sep, '/')


class WatcherHandle:

    def __init__(self, task, stop_event):
        self.task = task
        self._stop_event = stop_event

    async def stop(self):
        self._stop_event.set()
        if self.task.done():
            return
        try:
            await asyncio.wait_for(self.task, timeout=5)
        except asyncio.TimeoutError:
            self.task.cancel()


class WatchTrigger:

    def watch(self, spec, on_change):
        root = os.path.realpath(spec.working_directory)
        if not os.path.isdir(root):
            raise WatchSetupError('Watch directory not found: %s' % root)

        globs = GlobSet(spec.patterns)
        stop_event = asyncio.Event()
        task = asyncio.get_running_loop().create_task(
            self._run(root, globs, spec.debounce, on_change, stop_event)
        )
        logger.info('Watching %s for %s', root, ', '.join(spec.patterns))
        return WatcherHandle(task, stop_event)

    async def _run(self, root, globs, debounce, on_change, stop_event):
        async for changes in awatch(
            root,
            watch_filter=PatternFilter(root, globs),
            debounce=debounce,
            stop_event=stop_event,
        ):
            for change, path in sorted(changes, key=lambda c: c[1]):
                event = ChangeEvent(kind=change.name, path=path, relpath=_relative(root, path))
                logger.debug('%s %s', event.kind, event.relpath)
                on_change(event)
