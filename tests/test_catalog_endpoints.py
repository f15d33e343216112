import pytest

from modelsplus.core.store import set_snapshot
from tests.conftest import make_snapshot


def _assert_error_envelope(payload: dict) -> None:
    assert payload["ok"] is False
    assert payload["data"] is None
    assert isinstance(payload["error"], str)
    assert "timestamp" in payload


def _ids(response) -> list[str]:
    assert response.status_code == 200
    return [item["id"] for item in response.json()]


def test_list_models_returns_plain_array(client) -> None:
    response = client.get("/v1/models")
    assert response.status_code == 200
    body = response.json()
    assert isinstance(body, list)
    assert len(body) == 6
    assert body[0]["id"] == "anthropic:claude-sonnet-4"


def test_list_models_with_filters(client) -> None:
    response = client.get(
        "/v1/models",
        params={"provider": "openai", "tool_call": "true"},
    )
    assert _ids(response) == ["openai:gpt-4o"]


def test_list_models_tolerates_malformed_values(client) -> None:
    response = client.get(
        "/v1/models",
        params={
            "min_input_cost": "cheap",
            "reasoning": "sometimes",
            "release_after": "someday",
            "limit": "many",
            "offset": "x",
        },
    )
    assert len(_ids(response)) == 6


@pytest.mark.parametrize(
    "name, value",
    [
        ("release_after", "0001-01-01T00:00:00+01:00"),
        ("release_before", "9999-12-31T23:00:00-05:00"),
        ("updated_before", "9999-12-31T23:00:00-05:00"),
    ],
)
def test_out_of_range_date_filter_is_ignored(client, name, value) -> None:
    response = client.get("/v1/models", params={name: value})
    assert len(_ids(response)) == 6


def test_out_of_range_stored_date_sorts_as_missing(client) -> None:
    set_snapshot(
        make_snapshot(
            models=[
                {"id": "acme:dated", "provider": "acme", "release_date": "2024-01-01"},
                {
                    "id": "acme:far",
                    "provider": "acme",
                    "release_date": "9999-12-31T23:00:00-05:00",
                },
            ],
            providers=[{"id": "acme", "name": "Acme"}],
        )
    )
    response = client.get("/v1/models", params={"sort": "release_date"})
    assert _ids(response) == ["acme:far", "acme:dated"]

    filtered = client.get("/v1/models", params={"release_after": "2000-01-01"})
    assert _ids(filtered) == ["acme:dated"]


def test_list_models_sort_and_fields(client) -> None:
    response = client.get(
        "/v1/models",
        params={"sort": "cost_output", "order": "desc", "limit": "2", "fields": "id,cost"},
    )
    assert response.status_code == 200
    assert response.json() == [
        {"id": "anthropic:claude-sonnet-4", "cost": {"input": 3.0, "output": 15.0, "cache_read": 0.3, "cache_write": 3.75}},
        {"id": "openai:gpt-4o", "cost": {"input": 2.5, "output": 10.0, "cache_read": 1.25}},
    ]


def test_count_models(client) -> None:
    response = client.get("/v1/models/count", params={"modalities": "image,text"})
    assert response.status_code == 200
    assert response.json() == {"count": 3}


def test_get_model_by_id(client) -> None:
    response = client.get("/v1/models/openai:gpt-4o")
    assert response.status_code == 200
    assert response.json()["limit"] == {"context": 128000, "output": 16384}


def test_get_model_not_found(client) -> None:
    response = client.get("/v1/models/openai:gpt-9")
    assert response.status_code == 404
    body = response.json()
    _assert_error_envelope(body)
    assert body["error"] == "Model not found"


def test_empty_result_is_not_a_miss(client) -> None:
    response = client.get("/v1/models", params={"provider": "nobody"})
    assert response.status_code == 200
    assert response.json() == []


def test_list_providers(client) -> None:
    assert _ids(client.get("/v1/providers")) == ["anthropic", "google", "local", "openai"]
    assert _ids(client.get("/v1/providers", params={"npm": "google"})) == ["google"]
    assert _ids(client.get("/v1/providers", params={"limit": "2", "offset": "1"})) == [
        "google",
        "local",
    ]


def test_count_providers(client) -> None:
    response = client.get("/v1/providers/count", params={"env": "api_key"})
    assert response.json() == {"count": 3}


def test_get_provider(client) -> None:
    assert client.get("/v1/providers/google").json()["name"] == "Google"
    missing = client.get("/v1/providers/nope")
    assert missing.status_code == 404
    _assert_error_envelope(missing.json())


def test_search_suggestions(client) -> None:
    response = client.get("/v1/search/suggestions", params={"q": "Gemini"})
    assert response.json() == {"suggestions": ["Gemini 2.5 Flash", "google:gemini-2.5-flash"]}


def test_search_suggestions_short_query(client) -> None:
    assert client.get("/v1/search/suggestions", params={"q": "g"}).json() == {"suggestions": []}
    assert client.get("/v1/search/suggestions").json() == {"suggestions": []}


def test_search_suggestions_limit(client) -> None:
    response = client.get("/v1/search/suggestions", params={"q": "openai", "limit": "1"})
    assert response.json() == {"suggestions": ["openai:gpt-4o"]}
    fallback = client.get("/v1/search/suggestions", params={"q": "openai", "limit": "-3"})
    assert len(fallback.json()["suggestions"]) == 4


def test_health(client) -> None:
    body = client.get("/health").json()
    assert body["status"] == "healthy"
    assert body["server"] == "modelsplus"
    assert "timestamp" in body


def test_cors_preflight(client) -> None:
    response = client.options(
        "/mcp",
        headers={
            "Origin": "https://agent.example",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
