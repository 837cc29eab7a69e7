import json
import logging

import pytest
import structlog

from ecr_sync.utils.logging import LogFormats, LogSettings, setup_logger

pytestmark = pytest.mark.usefixtures("restore_logging")


def test_json_lines_carry_context(capsys):
    setup_logger(LogSettings(log_format=LogFormats.JSON))

    structlog.stdlib.get_logger("ecr_sync.sync").info(
        "repository found", repository="app-a"
    )

    record = json.loads(capsys.readouterr().out.splitlines()[-1])
    assert record["event"] == "repository found"
    assert record["level"] == "info"
    assert record["logger"] == "ecr_sync.sync"
    assert record["repository"] == "app-a"
    assert "timestamp" in record


def test_console_lines_leave_timestamps_to_the_runner(capsys):
    setup_logger(LogSettings(log_format=LogFormats.CONSOLE))

    structlog.stdlib.get_logger("ecr_sync.sync").info(
        "repository found", repository="app-a"
    )

    line = capsys.readouterr().out.splitlines()[-1]
    assert line.startswith("[info")
    assert "repository found" in line
    assert "repository=app-a" in line


def test_sdk_debug_logs_are_silenced(capsys):
    setup_logger(LogSettings(log_level="DEBUG"))

    logging.getLogger("botocore.endpoint").debug("Sending http request")
    logging.getLogger("ecr_sync.sync").debug("checking policy")

    out = capsys.readouterr().out
    assert "Sending http request" not in out
    assert "checking policy" in out
