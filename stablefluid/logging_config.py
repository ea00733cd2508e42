import logging
import sys

LOG_FORMAT = '[%(asctime)s] %(levelname)-7s %(name)s: %(message)s'

'''
setup_logging: routes the records of the stablefluid loggers to stdout
params:
    level: logging level of the package loggers
    log_file: optional path receiving a copy of every record
Calling it again replaces the handlers installed by the previous call.
'''


def setup_logging(level=logging.INFO, log_file=None):
    logger = logging.getLogger('stablefluid')
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w'))

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging to %s", log_file if log_file else 'stdout')
    return logger
