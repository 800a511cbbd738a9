from __future__ import annotations

from pydantic import BaseModel, Field


class ErrorEnvelope(BaseModel):
    code: str
    message: str


class FormatOptions(BaseModel):
    tab_size: int = Field(default=4, ge=1, le=16)
    insert_spaces: bool = True


class FormatRequest(BaseModel):
    text: str
    options: FormatOptions = Field(default_factory=FormatOptions)


class FormatResponse(BaseModel):
    text: str
    changed: bool
    stats: dict[str, int] = Field(default_factory=dict)


class PositionOut(BaseModel):
    line: int
    character: int


class TextEditOut(BaseModel):
    start: PositionOut
    end: PositionOut
    new_text: str


class EditsResponse(BaseModel):
    edits: list[TextEditOut]
