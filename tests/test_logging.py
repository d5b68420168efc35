import asyncio
import json
import logging

from labourconnect.core.logging import LogContext, StructuredFormatter, context_fields, get_logger


def make_record(**extra):
    record = logging.LogRecord("labourconnect.test", logging.INFO, __file__, 1, "hello", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_get_logger_namespaces_names():
    assert get_logger("scripts.init_db").name == "labourconnect.scripts.init_db"
    assert get_logger("labourconnect.api.auth").name == "labourconnect.api.auth"


def test_log_context_fields_apply_inside_block_only():
    with LogContext(user_id="u1", page="profile"):
        assert context_fields(make_record()) == {"user_id": "u1", "page": "profile"}
    assert context_fields(make_record()) == {}


def test_extra_fields_override_context():
    with LogContext(user_id="u1"):
        assert context_fields(make_record(user_id="u2")) == {"user_id": "u2"}


def test_nested_contexts_merge():
    with LogContext(user_id="u1"):
        with LogContext(page="payment"):
            assert context_fields(make_record()) == {"user_id": "u1", "page": "payment"}
        assert context_fields(make_record()) == {"user_id": "u1"}


async def test_concurrent_tasks_keep_their_own_context():
    async def tagged(user_id):
        with LogContext(user_id=user_id):
            await asyncio.sleep(0)
            return context_fields(make_record())["user_id"]

    assert await asyncio.gather(tagged("a"), tagged("b")) == ["a", "b"]


def test_structured_formatter_emits_json_with_context():
    with LogContext(mobile="9876543210"):
        line = StructuredFormatter().format(make_record())

    entry = json.loads(line)
    assert entry["msg"] == "hello"
    assert entry["level"] == "INFO"
    assert entry["mobile"] == "9876543210"
