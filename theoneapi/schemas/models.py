from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Document(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(validation_alias=AliasChoices("_id", "id"))


class Book(Document):
    name: str | None = Field(default=None)


class Chapter(Document):
    chapter_name: str | None = Field(default=None, alias="chapterName")
    book: str | None = Field(default=None)


class Movie(Document):
    name: str | None = Field(default=None)
    runtime_in_minutes: float | None = Field(default=None, alias="runtimeInMinutes")
    budget_in_millions: float | None = Field(default=None, alias="budgetInMillions")
    box_office_revenue_in_millions: float | None = Field(default=None, alias="boxOfficeRevenueInMillions")
    academy_award_nominations: int | None = Field(default=None, alias="academyAwardNominations")
    academy_award_wins: int | None = Field(default=None, alias="academyAwardWins")
    rotten_tomatoes_score: float | None = Field(default=None, alias="rottenTomatoesScore")


class Character(Document):
    height: str | None = Field(default=None)
    race: str | None = Field(default=None)
    gender: str | None = Field(default=None)
    birth: str | None = Field(default=None)
    spouse: str | None = Field(default=None)
    death: str | None = Field(default=None)
    realm: str | None = Field(default=None)
    hair: str | None = Field(default=None)
    name: str | None = Field(default=None)
    wiki_url: str | None = Field(default=None, alias="wikiUrl")


class Quote(Document):
    dialog: str | None = Field(default=None)
    movie: str | None = Field(default=None)
    character: str | None = Field(default=None)


D = TypeVar("D", bound=Document)


class Envelope(BaseModel, Generic[D]):
    model_config = ConfigDict(frozen=True, extra="ignore")

    docs: list[D] | None = Field(default=None)
    total: int | None = Field(default=None)
    limit: int | None = Field(default=None)
    offset: int | None = Field(default=None)
    page: int | None = Field(default=None)
    pages: int | None = Field(default=None)


def wire_name(document: type[Document], field_name: str) -> str:
    """Return the wire key for ``field_name`` on ``document``.

    Snake-case attribute names are mapped to their camelCase alias; names
    that are not attributes of the model (including wire names already)
    are returned unchanged.
    """
    field = document.model_fields.get(field_name)
    if field is None:
        return field_name
    if field_name == "id":
        return "_id"
    return field.alias or field_name
