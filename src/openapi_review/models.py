from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ContentNode(BaseModel):
    type: str
    depth: int | None = None
    value: str | None = None
    lang: str | None = None
    url: str | None = None
    title: str | None = None
    ordered: bool | None = None
    start: int | None = None
    tight: bool | None = None
    align: list[str | None] | None = None
    rows: list[list["ContentNode"]] | None = None
    children: list["ContentNode"] | None = None
    data: dict[str, Any] = Field(default_factory=dict)


ContentNode.model_rebuild()  # necessary for recursive types


def text(value: str) -> ContentNode:
    return ContentNode(type="text", value=value)


def html(value: str) -> ContentNode:
    return ContentNode(type="html", value=value)


class DiffEntityLocation(BaseModel):
    model_config = ConfigDict(extra="allow")

    location: str


class DiffResult(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    source_spec_entity_details: list[DiffEntityLocation] = Field(
        default_factory=list, alias="sourceSpecEntityDetails"
    )
    destination_spec_entity_details: list[DiffEntityLocation] = Field(
        default_factory=list, alias="destinationSpecEntityDetails"
    )

    def locations(self) -> list[str]:
        return [d.location for d in (*self.source_spec_entity_details, *self.destination_spec_entity_details)]


_DIFFERENCE_LISTS = ("breaking_differences", "non_breaking_differences", "unclassified_differences")


class DiffOutcome(BaseModel):
    """Result of an openapi-diff run. Missing difference lists count as zero."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    breaking_differences_found: bool = Field(default=False, alias="breakingDifferencesFound")
    breaking_differences: list[DiffResult] | None = Field(default=None, alias="breakingDifferences")
    non_breaking_differences: list[DiffResult] | None = Field(default=None, alias="nonBreakingDifferences")
    unclassified_differences: list[DiffResult] | None = Field(default=None, alias="unclassifiedDifferences")

    def counts(self) -> dict[str, int]:
        return {
            "breaking": len(self.breaking_differences or []),
            "non_breaking": len(self.non_breaking_differences or []),
            "unclassified": len(self.unclassified_differences or []),
        }

    def to_json(self) -> str:
        """Pretty JSON in openapi-diff's shape; absent difference lists stay absent, explicit nulls are kept."""
        absent = {name for name in _DIFFERENCE_LISTS if getattr(self, name) is None}
        return self.model_dump_json(by_alias=True, exclude=absent, indent=2)


class SpecDocument(BaseModel):
    spec: dict[str, Any]
    content: str
    location: str
    format: str | None = None

    @property
    def paths(self) -> dict[str, Any]:
        paths = self.spec.get("paths")
        return paths if isinstance(paths, dict) else {}


class ConverterOptions(BaseModel):
    """Options handed to the documentation generator untouched."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    omit_header: bool = Field(default=True, alias="omitHeader")
    toc_summary: bool = Field(default=True, alias="tocSummary")
    code_samples: bool = Field(default=False, alias="codeSamples")
    language_tabs: list[Any] = Field(default_factory=list)

    def as_generator_options(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
