from typology.assessments.mbti.types import Response
from typology.assessments.validators import is_in_bank, usable_responses


def test_drops_nulls_and_out_of_range_indices():
    sheet = [
        Response(0, True),
        None,
        Response(1, None),
        Response(40, True),
        Response(-1, False),
        Response(2, False),
    ]
    assert usable_responses(sheet, 40) == [Response(0, True), Response(2, False)]


def test_last_answer_wins_but_first_position_is_kept():
    sheet = [Response(5, True), Response(3, True), Response(5, False)]
    assert usable_responses(sheet, 40) == [Response(5, False), Response(3, True)]


def test_later_null_clears_an_answer():
    assert usable_responses([Response(4, True), Response(4, None)], 40) == []


def test_accepts_mappings():
    sheet = [{"question_index": 1, "value": 1}, {"questionIndex": 2, "value": None}]
    assert usable_responses(sheet, 40) == [Response(1, True)]


def test_bank_bounds():
    assert is_in_bank(39, 40)
    assert not is_in_bank(40, 40)
