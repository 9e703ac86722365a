from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

__all__ = [
    "ResponseItem",
    "CalculateRequest",
    "StackSlotOut",
    "TypeMatchOut",
    "StrategyNamesOut",
    "CalculateResponse",
    "QuestionOut",
    "QuestionListResponse",
    "ArchetypeOut",
    "ArchetypeListResponse",
    "PresetOut",
    "PresetListResponse",
]


class ResponseItem(BaseModel):
    question_index: int
    value: Optional[bool] = None


class CalculateRequest(BaseModel):
    # null entries and out-of-range indices are accepted and ignored
    responses: List[Optional[ResponseItem]] = Field(default_factory=list)


class StackSlotOut(BaseModel):
    function: str
    extraverted_name: str
    introverted_name: str
    is_extraverted: bool


class TypeMatchOut(BaseModel):
    type: str
    score: float
    confidence: int = Field(ge=0, le=100)
    stack: List[str]


class StrategyNamesOut(BaseModel):
    calculation: str
    scoring: str
    stack_building: str
    type_matching: str


class CalculateResponse(BaseModel):
    type: str
    stack: List[StackSlotOut]
    confidence: int = Field(ge=0, le=100)
    scores: Dict[str, float]
    alternative_types: List[TypeMatchOut]
    strategies: StrategyNamesOut
    response_count: int


class QuestionOut(BaseModel):
    index: int
    text: str
    extraverted_option: str
    introverted_option: str
    axis: str
    question_class: str


class QuestionListResponse(BaseModel):
    instrument: str
    version: str
    questions: List[QuestionOut]


class ArchetypeOut(BaseModel):
    type: str
    nickname: str
    stack: List[str]
    description: str


class ArchetypeListResponse(BaseModel):
    archetypes: List[ArchetypeOut]
    function_descriptions: Dict[str, str]


class PresetOut(BaseModel):
    name: str
    scoring: str
    stack_building: str
    type_matching: str
    description: str


class PresetListResponse(BaseModel):
    default: str
    presets: List[PresetOut]
