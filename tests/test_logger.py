import logging
from pathlib import Path
from typing import Iterator

import pytest

from devconsole.logger import LOG_FILE_NAME, setup_logging


@pytest.fixture(autouse=True)
def restore_logger() -> Iterator[None]:
    logger = logging.getLogger("devconsole")
    handlers, level = list(logger.handlers), logger.level
    yield
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers = handlers
    logger.setLevel(level)


def test_setup_logging_writes_to_data_dir(tmp_path: Path) -> None:
    log_file = setup_logging("debug")
    assert log_file == tmp_path / "data" / "devconsole" / LOG_FILE_NAME

    logging.getLogger("devconsole.console.registry").debug("registered things")
    for handler in logging.getLogger("devconsole").handlers:
        handler.flush()
    assert "DEBUG - devconsole.console.registry - registered things" in log_file.read_text()


def test_setup_logging_replaces_previous_file_handler(tmp_path: Path) -> None:
    setup_logging("INFO", log_dir=tmp_path / "one")
    setup_logging("WARNING", log_dir=tmp_path / "two")
    logger = logging.getLogger("devconsole")
    file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
    assert len(file_handlers) == 1
    assert Path(file_handlers[0].baseFilename) == tmp_path / "two" / LOG_FILE_NAME
    assert logger.level == logging.WARNING
