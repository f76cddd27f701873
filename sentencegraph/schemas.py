from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from sentencegraph.config import GeneratorSettings


# Snapshot Schemas
class NodeRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    links: list[str] = Field(default_factory=list)
    freqs: list[int] = Field(default_factory=list)
    weight: int = 0
    is_exit: bool = Field(default=False, alias="isExit")

    @model_validator(mode="after")
    def _check_alignment(self) -> "NodeRecord":
        if len(self.links) != len(self.freqs):
            raise ValueError("links and freqs must have the same length")
        if self.weight < sum(self.freqs):
            raise ValueError("weight must cover the sum of freqs")
        return self


class GraphSnapshot(BaseModel):
    order: int = Field(ge=1)
    graph: dict[str, NodeRecord] = Field(default_factory=dict)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


class LibraryEntry(BaseModel):
    queries: list[str] = Field(default_factory=list)
    analyzed: list[str] = Field(default_factory=list)


class LibrarySnapshot(BaseModel):
    settings: GeneratorSettings = Field(default_factory=GeneratorSettings)
    library: dict[str, LibraryEntry] = Field(default_factory=dict)
    graphs: dict[str, GraphSnapshot] = Field(default_factory=dict)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


# API Schemas
class StudyRequest(BaseModel):
    query: str
    pages: dict[str, str] = Field(default_factory=dict)


class StudyResponse(BaseModel):
    language: str
    query: str
    analyzed: int


class ExplainRequest(BaseModel):
    keywords: list[str] = Field(default_factory=list)
    seed: Optional[int] = None


class ExplainResponse(BaseModel):
    language: str
    text: str
    score: float


class GraphInfo(BaseModel):
    language: str
    order: int
    contexts: int


class SettingUpdate(BaseModel):
    parameter: str
    value: str


class SnapshotResponse(BaseModel):
    name: str
    languages: list[str]
