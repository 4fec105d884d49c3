"""
Tests for LinkRepository against the in-memory API.

These run the full client stack (repository -> client -> httpx ->
FastAPI app) through httpx.ASGITransport.
"""

import httpx
import pytest

from tinylink.core.exceptions import ErrorKind


class TestListLinks:

    @pytest.mark.asyncio
    async def test_empty_list(self, repository):
        result = await repository.list_links()

        assert result.ok
        assert result.value == []

    @pytest.mark.asyncio
    async def test_list_is_idempotent(self, repository, link_store):
        """Listing twice with no mutation in between yields the same sequence."""
        link_store.add("https://a.com", "aaaaaa")
        link_store.add("https://b.com", "bbbbbb", total_clicks=5)

        first = await repository.list_links()
        second = await repository.list_links()

        assert first.ok and second.ok
        assert first.value == second.value
        assert [link.code for link in first.value] == ["bbbbbb", "aaaaaa"]

    @pytest.mark.asyncio
    async def test_transport_failure(self, mock_repository):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        result = await mock_repository(handler).list_links()

        assert not result.ok
        assert result.kind is ErrorKind.TRANSPORT
        assert result.value is None


class TestCreateLink:

    @pytest.mark.asyncio
    async def test_server_generated_code(self, repository, link_store):
        result = await repository.create_link("https://example.com")

        assert result.ok
        record = result.value
        assert len(record.code) == 6
        assert record.target_url == "https://example.com"
        assert record.total_clicks == 0
        assert record.last_clicked_at is None
        assert record.created_at is not None
        assert record.code in link_store.links

    @pytest.mark.asyncio
    async def test_url_is_trimmed(self, repository, link_store):
        result = await repository.create_link("  https://example.com/page  ", "page001")

        assert result.ok
        assert link_store.links["page001"]["target_url"] == "https://example.com/page"

    @pytest.mark.asyncio
    async def test_code_conflict(self, repository, link_store):
        link_store.add("https://a.com", "taken1")

        result = await repository.create_link("https://b.com", "taken1")

        assert result.kind is ErrorKind.CODE_CONFLICT
        assert result.error.status_code == 409
        assert link_store.links["taken1"]["target_url"] == "https://a.com"

    @pytest.mark.asyncio
    async def test_server_rejection_message(self, repository):
        result = await repository.create_link("https://a.com", "bad!code")

        assert result.kind is ErrorKind.VALIDATION
        assert result.error.message == "code must be 6-8 alphanumeric characters"


class TestDeleteAndGet:

    @pytest.mark.asyncio
    async def test_delete_then_get(self, repository, link_store):
        link_store.add("https://a.com", "abc123")

        deleted = await repository.delete_link("abc123")
        fetched = await repository.get_link("abc123")

        assert deleted.ok
        assert fetched.kind is ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_delete_missing_is_not_found(self, repository):
        result = await repository.delete_link("abc123")

        assert result.kind is ErrorKind.NOT_FOUND
        assert result.error.status_code == 404

    @pytest.mark.asyncio
    async def test_get_existing(self, repository, link_store):
        link_store.add("https://a.com", "abc123", total_clicks=42, last_clicked_at="2024-03-01T12:00:00Z")

        result = await repository.get_link("abc123")

        assert result.ok
        assert result.value.total_clicks == 42
        assert result.value.last_clicked_at.month == 3

    @pytest.mark.asyncio
    async def test_get_server_error(self, mock_repository):
        result = await mock_repository(lambda request: httpx.Response(502)).get_link("abc123")

        assert result.kind is ErrorKind.OPERATION_FAILED
        assert result.error.status_code == 502


@pytest.mark.asyncio
async def test_short_url(repository):
    assert repository.short_url("abc123") == "http://testserver/abc123"
