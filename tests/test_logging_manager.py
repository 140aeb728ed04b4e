import logging

from event_blog.managers.logging_manager import PrefixedLoggerAdapter, get_logger


def test_get_logger_is_cached_and_nested():
    logger = get_logger(prefix="[DATABASE]")
    assert get_logger(prefix="[DATABASE]") is logger

    nested = get_logger(name="worker", prefix="[X]")
    assert nested.logger.name == "EventBlog.worker"


def test_prefix_is_prepended():
    adapter = PrefixedLoggerAdapter(logging.getLogger("EventBlog.test"), "[CONSISTENCY]")
    msg, kwargs = adapter.process("deleted %d", {})
    assert msg == "[CONSISTENCY] deleted %d"
    assert kwargs == {}
