from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from typology.assessments.enums import CognitiveFunction, DichotomyAxis, FunctionAxis, QuestionClass
from typology.assessments.mbti import CONFIG_PATH, load_config
from typology.assessments.mbti.catalog import get_archetype, get_archetypes, get_questions
from typology.assessments.mbti.types import names_form_valid_stack
from typology.core.errors import ArchetypeNotFoundError, ConfigurationError


def test_question_bank_has_forty_indexed_questions():
    questions = get_questions()
    assert len(questions) == 40
    assert [q.index for q in questions] == list(range(40))


def test_dichotomy_questions_use_the_dichotomy_class():
    for question in get_questions():
        if question.is_dichotomy:
            assert question.question_class is QuestionClass.TRADITIONAL_DICHOTOMY
            assert question.extraverted_function is None
        else:
            assert isinstance(question.axis, FunctionAxis)
            assert question.extraverted_function.is_extraverted
            assert not question.introverted_function.is_extraverted


def test_every_axis_is_probed():
    axes = {q.axis for q in get_questions()}
    assert set(FunctionAxis) <= axes
    assert set(DichotomyAxis) <= axes


def test_function_axis_maps_to_its_pair():
    assert FunctionAxis.INTUITION.extraverted is CognitiveFunction.NE
    assert FunctionAxis.INTUITION.introverted is CognitiveFunction.NI
    assert FunctionAxis.FEELING.extraverted is CognitiveFunction.FE


def test_sixteen_archetypes_with_valid_canonical_stacks():
    archetypes = get_archetypes()
    assert len(archetypes) == 16
    for code, archetype in archetypes.items():
        assert archetype.code == code
        assert names_form_valid_stack(archetype.stack)


def test_archetype_letters_follow_code():
    intj = get_archetype("intj")
    assert intj.stack == (CognitiveFunction.NI, CognitiveFunction.TE, CognitiveFunction.FI, CognitiveFunction.SE)
    assert not intj.is_extraverted
    assert intj.is_judging


def test_unknown_archetype_raises_not_found():
    with pytest.raises(ArchetypeNotFoundError) as excinfo:
        get_archetype("XXXX")
    assert excinfo.value.status_code == 404


def _write_config(tmp_path: Path, mutate) -> Path:
    raw = yaml.safe_load(CONFIG_PATH.read_text(encoding="utf-8"))
    mutate(raw)
    target = tmp_path / "params.yaml"
    target.write_text(yaml.safe_dump(raw), encoding="utf-8")
    return target


def test_broken_archetype_stack_is_rejected(tmp_path):
    def _mutate(raw):
        raw["archetypes"]["INTJ"]["stack"] = ["Ni", "Ti", "Fe", "Se"]

    with pytest.raises(ConfigurationError):
        load_config(_write_config(tmp_path, _mutate))


def test_missing_section_is_rejected(tmp_path):
    with pytest.raises(ConfigurationError):
        load_config(_write_config(tmp_path, lambda raw: raw.pop("matching")))


def test_missing_file_is_rejected(tmp_path):
    with pytest.raises(ConfigurationError):
        load_config(tmp_path / "absent.yaml")
