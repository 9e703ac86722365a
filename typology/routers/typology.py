from typing import Optional

from fastapi import APIRouter, Query

from typology.schemas.typology import (
    ArchetypeListResponse,
    CalculateRequest,
    CalculateResponse,
    PresetListResponse,
    QuestionListResponse,
)
from typology.services.calculation import (
    archetype_catalog,
    calculate_type,
    preset_catalog,
    question_bank,
)

router = APIRouter(prefix="/typology", tags=["typology"])


@router.get("/questions", response_model=QuestionListResponse)
def list_questions() -> QuestionListResponse:
    return question_bank()


@router.get("/archetypes", response_model=ArchetypeListResponse)
def list_archetypes() -> ArchetypeListResponse:
    return archetype_catalog()


@router.get("/presets", response_model=PresetListResponse)
def list_presets() -> PresetListResponse:
    return preset_catalog()


@router.post("/calculate", response_model=CalculateResponse)
def calculate(
    payload: CalculateRequest,
    preset: Optional[str] = Query(default=None, description="Preset name; DEFAULT_PRESET when omitted"),
) -> CalculateResponse:
    return calculate_type(payload, preset)
