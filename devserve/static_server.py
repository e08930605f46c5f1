"""
static_server.py - Serves the app folder on tornado with livereload's
browser endpoints and pushes reload commands to connected browsers.

The Flask app injects livereload's client script into HTML pages; livereload
provides the script itself, the /livereload WebSocket and the set of
connected browsers. tornado runs on the asyncio loop, so start() must be
called from inside a running loop.
"""

import logging
import os
import socket
from dataclasses import dataclass
from typing import Any

from livereload.handlers import ForceReloadHandler, LiveReloadHandler, LiveReloadJSHandler
from livereload.watcher import Watcher
from tornado import web
from tornado.httpserver import HTTPServer
from tornado.netutil import bind_sockets
from tornado.wsgi import WSGIContainer

from devserve.app import create_app
from devserve.config import DEFAULT_PORT, PORT_SCAN_LIMIT
from devserve.errors import StartupError

logger = logging.getLogger(__name__)

LIVE_SCRIPT = '<script src="/livereload.js?port=%d"></script>'


class IdleWatcher(Watcher):
    """A livereload watcher that never reports changes.

    Changes come from WatchTrigger. Without this, livereload falls back to
    polling the whole working directory once a browser connects.
    """

    def watch(self, path, func=None, delay=0, ignore=None):
        pass

    def start(self, callback):
        # True tells livereload not to schedule its polling loop
        return True

    def examine(self):
        return None, None


@dataclass(frozen=True)
class ServerHandle:
    host: str
    port: int
    base_directory: str
    http_server: Any = None

    @property
    def url(self):
        host = 'localhost' if self.host in ('0.0.0.0', '::') else self.host
        return 'http://%s:%d' % (host, self.port)

    def close(self):
        """Stop listening and release the socket."""
        if self.http_server is not None:
            self.http_server.stop()


def _is_port_available(host, port):
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((host, port))
        return True
    except OSError:
        return False


def _pick_port(host, preferred_port=DEFAULT_PORT, max_tries=PORT_SCAN_LIMIT):
    for port in range(preferred_port, preferred_port + max_tries):
        if _is_port_available(host, port):
            return port
    raise StartupError(
        'No available port in range %d-%d on %s'
        % (preferred_port, preferred_port + max_tries - 1, host)
    )


def _make_application(app, live_css):
    LiveReloadHandler.watcher = IdleWatcher()
    LiveReloadHandler.live_css = live_css
    return web.Application(
        handlers=[
            (r'/livereload', LiveReloadHandler),
            (r'/forcereload', ForceReloadHandler),
            (r'/livereload.js', LiveReloadJSHandler),
            (r'.*', web.FallbackHandler, {'fallback': WSGIContainer(app.wsgi_app)}),
        ],
        # tornado's debug mode would autoreload the process
        debug=False,
    )


class StaticServer:

    def start(self, config):
        root = os.path.abspath(config.base_directory)
        if not os.path.isdir(root):
            raise StartupError('Base directory not found: %s' % root)
        if not os.access(root, os.R_OK | os.X_OK):
            raise StartupError('Base directory is not readable: %s' % root)

        port = config.port if config.port is not None else _pick_port(config.host)
        try:
            sockets = bind_sockets(port, address=config.host)
        except OSError as e:
            raise StartupError(
                'Could not listen on %s:%d: %s' % (config.host, port, e.strerror or e)
            ) from e
        port = sockets[0].getsockname()[1]

        app = create_app(root, index=config.index, live_script=LIVE_SCRIPT % port)
        http_server = HTTPServer(_make_application(app, config.live_css))
        http_server.add_sockets(sockets)

        handle = ServerHandle(host=config.host, port=port, base_directory=root, http_server=http_server)
        logger.info('Serving %s at %s', root, handle.url)
        return handle

    def notify_reload(self, handle, path=None):
        """Tell every connected browser to reload.

        Browsers that are not connected right now get nothing; there is no
        queued delivery. Send failures are dropped by livereload.
        """
        if not LiveReloadHandler.waiters:
            logger.debug('No browsers connected to %s, skipping reload of %s', handle.url, path or '*')
            return
        logger.info('Reloading %d browser(s): %s', len(LiveReloadHandler.waiters), path or '*')
        LiveReloadHandler.reload_waiters(path or '*')
