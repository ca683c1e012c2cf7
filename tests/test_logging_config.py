"""Tests for structured JSON logging."""

import json
import logging

from prompt_refinery.api.middleware import request_id_var
from prompt_refinery.core.user_context import set_user_context
from prompt_refinery.logging_config import ContextFilter, JSONFormatter


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="prompt_refinery.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="Conversation turn %s",
        args=("completed",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formats_json_with_extra_fields():
    """Test that records become JSON including extra fields."""
    record = make_record(round=2, is_final_generation=False)

    data = json.loads(JSONFormatter().format(record))

    assert data["message"] == "Conversation turn completed"
    assert data["severity"] == "INFO"
    assert data["logger"] == "prompt_refinery.test"
    assert data["round"] == 2
    assert data["is_final_generation"] is False


def test_context_filter_adds_request_and_user():
    """Test that request and user ids from context reach the output."""
    token = request_id_var.set("req-1")
    set_user_context("user-1")
    try:
        record = make_record()
        ContextFilter().filter(record)
        data = json.loads(JSONFormatter().format(record))
    finally:
        request_id_var.reset(token)
        set_user_context(None)

    assert data["request_id"] == "req-1"
    assert data["user_id"] == "user-1"


def test_explicit_user_id_wins():
    """Test that a user_id passed via extra is not overwritten."""
    set_user_context("context-user")
    try:
        record = make_record(user_id="explicit-user")
        ContextFilter().filter(record)
    finally:
        set_user_context(None)

    assert record.user_id == "explicit-user"
