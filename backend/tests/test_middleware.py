"""
Bookworm Backend - Middleware Tests
====================================

What we test:
    ✅ Well-formed X-Request-ID values are reused, malformed ones replaced
    ✅ The replacement ID reaches error bodies as well as the header
    ✅ Access lines name the catalog resource and skip /health
"""

import logging

import pytest

from bookworm.middleware.logging import resource_for
from bookworm.middleware.request_id import resolve_request_id


class TestRequestID:

    @pytest.mark.parametrize("supplied", ["trace-42", "a.b_c-D9", "x" * 64])
    def test_safe_id_kept(self, supplied):
        assert resolve_request_id(supplied) == supplied

    @pytest.mark.parametrize("supplied", [None, "", "has space", "x" * 65, "semi;colon", "ünïcode"])
    def test_unsafe_id_replaced(self, supplied):
        rid = resolve_request_id(supplied)
        assert rid != supplied
        assert len(rid) == 8
        int(rid, 16)

    @pytest.mark.asyncio
    async def test_unsafe_header_not_echoed(self, test_client, sample_user):
        await test_client.post("/api/users", json=sample_user)
        forged = "ok <script>"

        response = await test_client.post(
            "/api/users", json=sample_user, headers={"X-Request-ID": forged}
        )

        assert response.status_code == 400
        rid = response.headers["X-Request-ID"]
        assert rid != forged
        assert len(rid) == 8
        assert response.json()["request_id"] == rid


class TestAccessLog:

    @pytest.mark.parametrize("path,resource", [
        ("/api/books/66a1f0c2e4b0a1b2c3d4e5f6", "books"),
        ("/api/users/login", "users"),
        ("/api/genres", "genres"),
        ("/api/", "root"),
        ("/docs", "-"),
    ])
    def test_resource_for(self, path, resource):
        assert resource_for(path) == resource

    @pytest.mark.asyncio
    async def test_line_names_resource(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="bookworm.access")

        await test_client.post("/api/genres", json={"name": "Horror"})
        await test_client.post("/api/genres", json={"name": "horror"})

        records = [r for r in caplog.records if r.name == "bookworm.access"]
        assert [(r.resource, r.status, r.levelno) for r in records] == [
            ("genres", 200, logging.INFO),
            ("genres", 400, logging.WARNING),
        ]
        assert "POST /api/genres 400 (genres)" in records[1].getMessage()

    @pytest.mark.asyncio
    async def test_health_not_logged(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="bookworm.access")

        await test_client.get("/health")

        assert not [r for r in caplog.records if r.name == "bookworm.access"]
