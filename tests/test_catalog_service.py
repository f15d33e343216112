from modelsplus.engine import PROVIDER_FILTER_PARAMS, QueryOptions
from modelsplus.services.catalog_service import CatalogService
from tests.conftest import NAME_ORDER, make_snapshot


def _options(**params) -> QueryOptions:
    return QueryOptions.from_params(params)


def test_options_from_params_normalizes_paging() -> None:
    options = QueryOptions.from_params(
        {"limit": "0", "offset": "-4", "order": "DESC", "fields": "id, name", "bogus": "1"}
    )
    assert options.limit is None
    assert options.offset == 0
    assert options.order == "desc"
    assert options.fields == ("id", "name")
    assert options.filters == {}


def test_options_default_limit_applies_only_when_absent() -> None:
    assert QueryOptions.from_params({}, default_limit=50).limit == 50
    assert QueryOptions.from_params({"limit": 5}, default_limit=50).limit == 5
    assert QueryOptions.from_params({"limit": "junk"}, default_limit=50).limit is None


def test_options_keep_only_known_filters() -> None:
    options = QueryOptions.from_params(
        {"q": "x", "provider": "openai", "env": "KEY"}, filter_names=PROVIDER_FILTER_PARAMS
    )
    assert options.filters == {"q": "x", "env": "KEY"}


def test_search_models_filters_sorts_pages_and_projects(catalog) -> None:
    result = catalog.search_models(
        _options(provider="openai", sort="release_date", order="desc", limit="2", fields="id,release_date")
    )
    assert result == [
        {"id": "openai:o1-mini", "release_date": "2024-09-12"},
        {"id": "openai:gpt-4o", "release_date": "2024-05-13"},
    ]


def test_projection_happens_after_sorting(catalog) -> None:
    # the sort field is not among the projected ones
    result = catalog.search_models(_options(sort="cost_input", order="desc", fields="id"))
    assert result[0] == {"id": "anthropic:claude-sonnet-4"}


def test_search_models_default_order(catalog) -> None:
    assert [m["id"] for m in catalog.search_models(_options())] == NAME_ORDER


def test_count_ignores_paging(catalog) -> None:
    assert catalog.count_models(_options(provider="openai", limit="1", offset="2")) == 3


def test_get_model_hit_and_miss(catalog) -> None:
    model = catalog.get_model("openai:gpt-4o")
    assert model["name"] == "GPT-4o"
    assert model["modalities"] == {"input": ["text", "image"], "output": ["text"]}
    assert "open_weights" in model
    assert catalog.get_model("openai:gpt-5") is None


def test_serialized_records_omit_absent_attributes(catalog) -> None:
    whisper = catalog.get_model("openai:whisper")
    assert "cost" not in whisper
    assert "name" not in whisper


def test_search_providers_keeps_snapshot_order(catalog) -> None:
    providers = catalog.search_providers(
        QueryOptions.from_params({"env": "key"}, filter_names=PROVIDER_FILTER_PARAMS)
    )
    assert [p["id"] for p in providers] == ["anthropic", "google", "openai"]


def test_provider_lookup(catalog) -> None:
    assert catalog.get_provider("local")["api"] == "http://localhost:11434/v1"
    assert catalog.get_provider("nope") is None
    assert catalog.count_providers(QueryOptions()) == 4


def test_suggest_collects_names_ids_and_providers(catalog) -> None:
    assert catalog.suggest("gp", 10) == ["GPT-4o", "openai:gpt-4o"]
    assert catalog.suggest("open", 10) == [
        "openai:gpt-4o",
        "openai:o1-mini",
        "openai:whisper",
        "OpenAI",
    ]
    assert catalog.suggest("open", 2) == ["openai:gpt-4o", "openai:o1-mini"]


def test_suggest_requires_two_characters(catalog) -> None:
    assert catalog.suggest("g", 10) == []
    assert catalog.suggest("", 10) == []
    assert catalog.suggest(None, 10) == []


def test_suggest_has_no_duplicates() -> None:
    snapshot = make_snapshot(
        models=[
            {"id": "acme:rocket", "provider": "acme", "name": "Rocket"},
            {"id": "acme:rocket-2", "provider": "acme", "name": "Rocket"},
        ],
        providers=[{"id": "acme", "name": "Rocket Labs"}],
    )
    assert CatalogService(snapshot).suggest("rocket", 10) == [
        "Rocket",
        "acme:rocket",
        "acme:rocket-2",
        "Rocket Labs",
    ]
