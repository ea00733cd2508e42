import logging

from stablefluid import setup_logging


def test_repeated_setup_keeps_one_console_handler():
    setup_logging(logging.INFO)
    logger = setup_logging(logging.WARNING)
    try:
        assert logger.name == 'stablefluid'
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1
    finally:
        setup_logging(logging.INFO)


def test_log_file_receives_package_records(tmp_path):
    path = tmp_path / 'run.log'
    logger = setup_logging(logging.DEBUG, str(path))
    try:
        logging.getLogger('stablefluid.simulation').info("frame %d done", 3)
        for handler in logger.handlers:
            handler.flush()
        assert "frame 3 done" in path.read_text()
        assert "stablefluid.simulation" in path.read_text()
    finally:
        setup_logging(logging.INFO)
