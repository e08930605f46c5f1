import logging
import sys

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

# third-party loggers that are chatty at INFO
NOISY_LOGGERS = ('livereload', 'tornado.access', 'tornado.general', 'watchfiles')


def configure_logging(verbose=False):
    """Log to stderr; DEBUG for devserve and the noisy libraries when verbose."""
    root = logging.getLogger()
    root.handlers.clear()
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT, stream=sys.stderr)

    logging.getLogger('devserve').setLevel(logging.DEBUG if verbose else logging.INFO)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)
