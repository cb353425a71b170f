"""
Regulation Models
=================

Models for regulatory documents, programs and search results.

Upstream payloads are kept close to their wire shape: unknown keys are
preserved and camelCase names are exposed as aliases.

Version: 0.1.0
"""

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    field_validator,
    model_serializer,
)


# Sections extracted from the narrative rendering; omitted when not found
NARRATIVE_FIELDS = ("summary", "dates", "addresses", "contact", "sup_info")


class RegulationRecord(BaseModel):
    """A regulation known to the program catalog."""

    model_config = ConfigDict(extra="allow")

    id: str
    name: str = ""
    cfr: str | None = Field(default=None, description="CFR part number (e.g., '60')")

    @field_validator("id", "cfr", mode="before")
    @classmethod
    def coerce_to_string(cls, v: Any) -> Any:
        """Catalogs store numeric ids and CFR parts as numbers or strings."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class Program(BaseModel):
    """An EPA program and the regulations it administers."""

    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    description: str | None = None
    regulations: list[RegulationRecord] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class ProgramPage(BaseModel):
    """One page of a program search."""

    items: list[Program] = Field(default_factory=list)
    total: int = 0


class DocumentDetails(BaseModel):
    """
    A regulatory document as returned by the documents API, enriched with
    related programs, regulations, facilities and narrative sections.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    # Upstream fields; some API versions wrap values as {"label", "value"}
    document_id: str | dict[str, Any] | None = Field(default=None, alias="documentId")
    cfr_part: str | dict[str, Any] | None = Field(default=None, alias="cfrPart")
    file_formats: list[str | None] = Field(default_factory=list, alias="fileFormats")

    # Lookup enrichment
    programs: list[Program] = Field(default_factory=list)
    all_regulations: list[RegulationRecord] = Field(
        default_factory=list,
        alias="allRegulations",
    )

    # Narrative sections
    summary: str | None = None
    dates: str | None = None
    addresses: str | None = None
    contact: str | None = None
    sup_info: str | None = Field(default=None, alias="supInfo")

    facilities: list[dict[str, Any]] = Field(default_factory=list)

    @field_validator("file_formats", mode="before")
    @classmethod
    def default_file_formats(cls, v: Any) -> Any:
        return v or []

    @model_serializer(mode="wrap")
    def drop_unset_sections(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        """Leave out narrative sections that were not found.

        Other null values, including upstream metadata, are kept.
        """
        data = handler(self)
        for name in NARRATIVE_FIELDS:
            if getattr(self, name) is None:
                data.pop(name, None)
                data.pop(type(self).model_fields[name].alias or name, None)
        return data


class SearchCriteria(BaseModel):
    """Criteria accepted by the regulation search."""

    model_config = ConfigDict(populate_by_name=True)

    naics: str | None = None
    zip: str | None = None
    state: str | None = None
    state_abbr: str | None = Field(default=None, alias="stateAbbr")
    city: str | None = None
    street: str | None = None
    substance: str | None = None
    program: str | None = None

    # Pagination, forwarded verbatim upstream
    offset: int = Field(default=0, ge=0)
    limit: int = Field(default=20, ge=1, le=1000)


class SearchResult(BaseModel):
    """
    Search response.

    `total` is the count reported upstream and may differ from len(items).
    """

    items: list[dict[str, Any]] = Field(default_factory=list)
    total: int = 0
