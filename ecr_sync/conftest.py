import logging

import pytest
import structlog

ISOLATED_ENV = (
    "INPUT_REPOSITORY",
    "INPUT_PUBLIC",
    "INPUT_LIFECYCLE-POLICY",
    "INPUT_LIFECYCLE_POLICY",
    "INPUT_REPOSITORY-POLICY",
    "INPUT_REPOSITORY_POLICY",
    "GITHUB_ACTIONS",
    "GITHUB_OUTPUT",
    "AWS_REGION",
    "AWS_DEFAULT_REGION",
    "AWS_PROFILE",
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
    "AWS_SESSION_TOKEN",
    "AWS_MAX_ATTEMPTS",
    "LOG_FORMAT",
    "LOG_LEVEL",
)


# Keep the runner's own GitHub Actions and AWS environment out of the tests
@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    for name in ISOLATED_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def restore_logging():
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
    structlog.reset_defaults()
