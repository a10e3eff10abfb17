import pytest
from starlette.requests import Request

from rate_engine.core.dependencies import parse_bool, parse_persist_flag


def make_request(headers=None, query=""):
    scope = {
        "type": "http",
        "method": "POST",
        "path": "/v1/quote",
        "query_string": query.encode(),
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
    }
    return Request(scope)


@pytest.mark.parametrize("value", ["1", "t", "T", "TRUE", "true", "True"])
def test_true_literals(value):
    assert parse_bool(value) is True


@pytest.mark.parametrize("value", ["0", "f", "F", "FALSE", "false", "False"])
def test_false_literals(value):
    assert parse_bool(value) is False


@pytest.mark.parametrize("value", ["yes", "on", "tRuE", " true"])
def test_other_literals_rejected(value):
    with pytest.raises(ValueError):
        parse_bool(value)


@pytest.mark.parametrize("headers,query,expected", [
    ({}, "", False),
    ({"X-Persist": "true"}, "", True),
    ({}, "persist=1", True),
    ({}, "persist=maybe", False),
    ({"X-Persist": "0"}, "persist=true", False),
    ({"X-Persist": "garbage"}, "persist=true", False),
    ({"X-Persist": ""}, "persist=T", True),
])
def test_parse_persist_flag(headers, query, expected):
    assert parse_persist_flag(make_request(headers, query)) is expected
