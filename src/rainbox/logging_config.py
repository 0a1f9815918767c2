import logging
import sys

FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level=logging.INFO, log_file=None):
    """Sends 'rainbox' logs to stderr and, if given, to `log_file`. Safe to call again."""
    logger = logging.getLogger("rainbox")
    logger.setLevel(level)
    logger.handlers.clear()

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    formatter = logging.Formatter(FORMAT, datefmt='%H:%M:%S')
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
