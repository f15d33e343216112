"""Model and provider records as served by the catalog."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class _Record(BaseModel):
    # Source files carry keys we do not model explicitly; keep them so they
    # round-trip to callers.
    model_config = ConfigDict(frozen=True, extra="allow")

    def to_dict(self) -> dict[str, Any]:
        """Flat JSON-ready structure; absent attributes are left out."""
        return self.model_dump(mode="json", exclude_none=True)


class ModelCost(_Record):
    input: float | None = Field(default=None, ge=0)
    output: float | None = Field(default=None, ge=0)
    cache_read: float | None = Field(default=None, ge=0)
    cache_write: float | None = Field(default=None, ge=0)


class ModelLimit(_Record):
    context: int | None = Field(default=None, ge=0)
    output: int | None = Field(default=None, ge=0)


class ModelModalities(_Record):
    input: tuple[str, ...] = ()
    output: tuple[str, ...] = ()


class Model(_Record):
    id: str = Field(min_length=3)
    provider: str = Field(min_length=1)
    name: str | None = None
    release_date: str | None = None
    last_updated: str | None = None
    attachment: bool | None = None
    reasoning: bool | None = None
    temperature: bool | None = None
    tool_call: bool | None = None
    open_weights: bool | None = None
    knowledge: str | None = None
    cost: ModelCost | None = None
    limit: ModelLimit | None = None
    modalities: ModelModalities | None = None

    @model_validator(mode="after")
    def _provider_matches_id(self) -> Model:
        provider_id, sep, slug = self.id.partition(":")
        if not sep or not slug:
            raise ValueError(f"model id {self.id!r} is not of the form provider:slug")
        if provider_id != self.provider:
            raise ValueError(
                f"model {self.id!r} declares provider {self.provider!r}"
            )
        return self

    @property
    def search_text(self) -> str:
        return f"{self.id} {self.name or ''} {self.provider}".lower()

    @property
    def all_modalities(self) -> set[str]:
        if self.modalities is None:
            return set()
        return {m.lower() for m in (*self.modalities.input, *self.modalities.output)}


class Provider(_Record):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    env: tuple[str, ...] = ()
    npm: str | None = None
    api: str | None = None
    doc: str | None = None
