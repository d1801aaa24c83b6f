# -*- coding: utf-8 -*-
"""Tests covering the submitted-value request wrapper."""

from __future__ import annotations

import json

import pytest
from fastapi import Request

from multiselect_field import FieldRequest


def _json_request(payload: object) -> Request:
    body = json.dumps(payload).encode()
    sent = False

    async def receive() -> dict:
        nonlocal sent
        if sent:
            return {"type": "http.disconnect"}
        sent = True
        return {"type": "http.request", "body": body, "more_body": False}

    scope = {
        "type": "http",
        "method": "POST",
        "path": "/",
        "headers": [(b"content-type", b"application/json")],
        "query_string": b"",
    }
    return Request(scope, receive)


def test_input_reads_dotted_paths() -> None:
    request = FieldRequest({"meta": {"colors": [1, 2]}, "name": "x"})

    assert request.input("meta.colors") == [1, 2]
    assert request.input("meta->colors") == [1, 2]
    assert request.input("missing", "fallback") == "fallback"
    assert request.has("name") is True
    assert request.has("missing") is False


def test_get_reads_top_level_keys_only() -> None:
    request = FieldRequest({"meta": {"colors": [1]}, "meta.colors": "flat"})

    assert request.get("meta.colors") == "flat"
    assert request.get("absent") is None
    assert request.get("absent", []) == []


@pytest.mark.asyncio
async def test_from_request_parses_json_body() -> None:
    request = await FieldRequest.from_request(_json_request({"tags": [1, 3]}))

    assert request.input("tags") == [1, 3]
    assert request.all() == {"tags": [1, 3]}


@pytest.mark.asyncio
async def test_from_request_ignores_non_object_json() -> None:
    request = await FieldRequest.from_request(_json_request([1, 2]))

    assert request.all() == {}


# The End
