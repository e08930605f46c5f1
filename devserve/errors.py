"""Errors raised while bringing the dev server up."""


class DevServeError(Exception):
    pass


class StartupError(DevServeError):
    """The static server could not start (missing root, port in use)."""


class WatchSetupError(DevServeError):
    """The file watcher could not start (missing working directory)."""
