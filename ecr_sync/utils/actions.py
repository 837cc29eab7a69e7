"""GitHub Actions workflow commands.

https://docs.github.com/en/actions/using-workflows/workflow-commands-for-github-actions
"""

import sys
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import structlog

logger = structlog.stdlib.get_logger(__name__)


def _escape(data: str) -> str:
    # % first, so the escapes it introduces are not escaped again
    return data.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _command(name: str, message: str = ""):
    sys.stdout.write(f"::{name}::{message}\n")
    sys.stdout.flush()


@contextmanager
def group(label: str, enabled: bool = False) -> Iterator[None]:
    """Run the enclosed block inside a collapsible log group.

    The workflow commands are only written when ``enabled`` (running under
    GitHub Actions); the label is always logged.
    """
    if enabled:
        _command("group", _escape(label))
    logger.info(label)
    try:
        yield
    finally:
        if enabled:
            _command("endgroup")


def error_annotation(message: str):
    _command("error", _escape(message))


def set_output(name: str, value: str, output_path: str | None = None):
    """Publish a step output for downstream steps.

    Appends to the $GITHUB_OUTPUT file when one is given, otherwise falls
    back to the deprecated ``set-output`` command.
    """
    if output_path:
        with Path(output_path).open("a", encoding="utf-8") as f:
            if "\n" in value:
                delimiter = f"ghadelimiter_{uuid.uuid4()}"
                f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
            else:
                f.write(f"{name}={value}\n")
    else:
        _command(f"set-output name={name}", _escape(value))
    logger.debug("Set output", name=name, value=value)
