"""
config.py - Process-scoped settings for the dev server and the file watcher.
Both objects are created once at startup and never mutated.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

APP_DIR = 'app'
DEFAULT_HOST = '127.0.0.1'
DEFAULT_PORT = 3000
PORT_SCAN_LIMIT = 20
DEFAULT_INDEX = 'index.html'
DEFAULT_PATTERNS = ('*.html', 'styles/**/*.css', 'scripts/**/*.js')
DEFAULT_DEBOUNCE_MS = 200


@dataclass(frozen=True)
class ServerConfig:
    base_directory: str
    host: str = DEFAULT_HOST
    # None -> first free port from DEFAULT_PORT upwards
    port: Optional[int] = None
    index: str = DEFAULT_INDEX
    live_css: bool = True


@dataclass(frozen=True)
class WatchSpec:
    patterns: Tuple[str, ...]
    working_directory: str
    debounce: int = DEFAULT_DEBOUNCE_MS

    def __post_init__(self):
        if isinstance(self.patterns, str):
            object.__setattr__(self, 'patterns', (self.patterns,))
        else:
            object.__setattr__(self, 'patterns', tuple(self.patterns))
        if self.debounce < 0:
            raise ValueError('debounce must be >= 0, got %r' % self.debounce)
