"""Integration tests for POST /api/generate (generator faked)."""

import pytest

from app.domain.exceptions import GenerationError


@pytest.mark.asyncio
async def test_generate_returns_draft(client, admin_headers, fake_generator):
    response = await client.post("/api/generate", json={"keyword": "  tea  "}, headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {
        "title": "All about tea",
        "content": "Everything worth knowing about tea.",
        "sources": [{"uri": "https://example.com/guide", "title": "Example guide"}],
    }
    assert fake_generator.keywords == ["tea"]


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{"keyword": ""}, {"keyword": "   "}, {}])
async def test_generate_requires_keyword(client, admin_headers, fake_generator, body):
    response = await client.post("/api/generate", json=body, headers=admin_headers)

    assert response.status_code == 400
    assert response.json() == {"error": "Keyword is required and must be a non-empty string."}
    assert fake_generator.keywords == []


@pytest.mark.asyncio
async def test_generation_failure_is_502(client, admin_headers, fake_generator):
    fake_generator.error = GenerationError("The AI responded in an unexpected format.")

    response = await client.post("/api/generate", json={"keyword": "tea"}, headers=admin_headers)

    assert response.status_code == 502
    assert response.json() == {"error": "The AI responded in an unexpected format."}


@pytest.mark.asyncio
async def test_generate_is_admin_only(client, reader_headers, fake_generator):
    anonymous = await client.post("/api/generate", json={"keyword": "tea"})
    reader = await client.post("/api/generate", json={"keyword": "tea"}, headers=reader_headers)

    assert anonymous.status_code == 401
    assert reader.status_code == 403
    assert fake_generator.keywords == []
