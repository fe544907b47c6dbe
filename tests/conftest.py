import logging

import pytest


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Restore root logger handlers after each test.

    The CLI calls ``logging.basicConfig(force=True)``, which binds the root
    handler to the stream of the ``CliRunner`` invocation. That stream is
    closed once the invocation finishes, so later log records would fail
    to emit if the handler were left in place.
    """
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    try:
        yield
    finally:
        for handler in list(root.handlers):
            if handler not in handlers:
                root.removeHandler(handler)
        for handler in handlers:
            if handler not in root.handlers:
                root.addHandler(handler)
        root.setLevel(level)
