import logging

from deepseek_proxy.core.logging import configure_logging


def test_updates_level_of_existing_handlers():
    root = logging.getLogger()
    previous = root.level
    try:
        configure_logging("debug")
        assert root.level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING

        configure_logging("ERROR")
        assert root.level == logging.ERROR
        assert logging.getLogger("httpcore").level == logging.ERROR
    finally:
        root.setLevel(previous)


def test_unknown_level_falls_back_to_info():
    root = logging.getLogger()
    previous = root.level
    try:
        configure_logging("chatty")
        assert root.level == logging.INFO
    finally:
        root.setLevel(previous)
