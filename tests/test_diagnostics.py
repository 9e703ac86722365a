from __future__ import annotations

import pytest
import yaml

from typology.assessments.enums import DichotomyAxis, FunctionAxis, QuestionClass
from typology.assessments.mbti import CONFIG_PATH
from typology.assessments.mbti.catalog import get_archetypes
from typology.assessments.mbti.types import InstrumentParameters, Question
from typology.engine.presets import create_calculator
from typology.services.diagnostics import (
    ConsistencyTester,
    ResponsePatternGenerator,
    stability_label,
)
from typology.services.question_quality import QuestionQualityAnalyzer


@pytest.fixture(scope="module")
def generator():
    return ResponsePatternGenerator()


def test_ideal_pattern_answers_every_question(generator, params):
    pattern = generator.ideal_pattern("INTJ")
    assert [r.question_index for r in pattern] == list(range(params.question_count))
    assert all(r.value is not None for r in pattern)


def test_ideal_pattern_follows_type_letters(generator, params):
    pattern = generator.ideal_pattern("ENFP")
    for response in pattern:
        question = params.questions[response.question_index]
        if question.axis.value == "extraversion-introversion":
            assert response.value is True
        if question.axis.value == "judging-perceiving":
            assert response.value is False


def test_every_ideal_pattern_classifies_as_itself():
    results = ConsistencyTester(create_calculator("accurate")).evaluate_accuracy()
    assert len(results) == 16
    misses = {code: r.actual for code, r in results.items() if not r.correct}
    assert misses == {}
    assert all(r.confidence == 100 for r in results.values())


def test_noise_flips_exactly_the_requested_share(generator):
    ideal = generator.ideal_pattern("ISTP")
    noisy = generator.with_noise(ideal, 0.1, seed=3)
    flipped = [a for a, b in zip(ideal, noisy) if a.value != b.value]
    assert len(flipped) == 4
    assert generator.with_noise(ideal, 0.1, seed=3) == noisy


def test_blanks_null_exactly_the_requested_share(generator):
    ideal = generator.ideal_pattern("ESFJ")
    blanked = generator.with_blanks(ideal, 0.25, seed=1)
    assert sum(r.value is None for r in blanked) == 10
    assert generator.with_noise(blanked, 0.0) == blanked


def test_fractions_outside_unit_interval_are_rejected(generator):
    with pytest.raises(ValueError):
        generator.with_noise(generator.ideal_pattern("INTJ"), 1.5)


@pytest.mark.parametrize("code", ["INTJ", "ENFP"])
def test_top_type_survives_ten_percent_noise(code):
    tester = ConsistencyTester(create_calculator("accurate"), flip_fraction=0.1, seed=42)
    outcome = tester.test_type(code, trials=40)
    assert outcome.trials == 40
    assert outcome.stability >= 0.6
    assert sum(outcome.outcomes.values()) == 40


def test_consistency_report_is_reproducible():
    first = ConsistencyTester(create_calculator("accurate"), seed=5).run(["INFJ", "ESTP"], trials=5)
    second = ConsistencyTester(create_calculator("accurate"), seed=5).run(["INFJ", "ESTP"], trials=5)
    assert first == second
    assert [r.type for r in first.results] == ["INFJ", "ESTP"]
    assert 0.0 <= first.overall_stability <= 1.0


@pytest.mark.parametrize(("std", "label"), [(0.0, "High"), (9.99, "High"), (10.0, "Medium"), (19.9, "Medium"), (20.0, "Low")])
def test_stability_labels(std, label):
    assert stability_label(std) == label


def test_tester_lists_archetypes_from_its_generator():
    raw = yaml.safe_load(CONFIG_PATH.read_text(encoding="utf-8"))
    raw["archetypes"] = dict(reversed(list(raw["archetypes"].items())))
    generator = ResponsePatternGenerator(InstrumentParameters.from_raw(raw))
    expected = list(reversed(list(get_archetypes())))

    tester = ConsistencyTester(create_calculator("accurate"), generator)

    accuracy = tester.evaluate_accuracy()
    assert list(accuracy) == expected
    assert all(result.correct for result in accuracy.values())
    assert [r.type for r in tester.run(trials=1).results] == expected


def test_packaged_question_bank_is_balanced():
    report = QuestionQualityAnalyzer().analyze()

    assert report.distribution_passed
    assert report.distribution["intuition"] == 8
    assert report.distribution["feeling"] == 8
    assert report.distribution["extraversion-introversion"] == 4
    assert report.distribution["function-preference"] == report.distribution["function-order"] == 16
    assert report.compliance == 100
    assert report.violations == ()
    assert len(report.clarity_scores) == 40
    assert 0 <= report.bias_score <= 100
    assert 0 <= report.overall_score <= 100
    assert set(report.as_dict()) == {"distribution", "bias", "clarity", "theoretical", "overall_score"}


def test_loaded_and_lopsided_options_are_flagged():
    question = Question(
        index=0,
        text="How do you plan?",
        extraverted_option="A creative, innovative and flexible plan for the day",
        introverted_option="A plan",
        axis=FunctionAxis.INTUITION,
        question_class=QuestionClass.FUNCTION_PREFERENCE,
    )

    report = QuestionQualityAnalyzer([question]).analyze()

    assert [(i.code, i.severity) for i in report.bias_issues] == [
        ("LOADED_LANGUAGE", "medium"),
        ("LENGTH_DISPARITY", "high"),
        ("COMPLEXITY_DIFFERENCE", "high"),
    ]
    assert report.bias_score == 25
    assert report.clarity_scores[0].issues == ("TEXT_TOO_SHORT", "OPTIONS_TOO_SHORT")
    assert report.clarity_average == 8.0
    assert not report.distribution_passed
    # four function axes and two dichotomies miscounted, classes unbalanced
    assert len(report.violations) == 7
    assert report.compliance == 25
    assert report.overall_score == 50


def test_hedging_words_lower_clarity_only():
    question = Question(
        index=3,
        text="Do you usually plan ahead for the week?",
        extraverted_option="I map out each day in advance",
        introverted_option="I decide each day as it comes",
        axis=DichotomyAxis.JUDGING_PERCEIVING,
        question_class=QuestionClass.TRADITIONAL_DICHOTOMY,
    )

    analyzer = QuestionQualityAnalyzer([question])

    assert analyzer.question_bias(question) == []
    clarity = analyzer.question_clarity(question)
    assert clarity.issues == ("AMBIGUOUS_WORD:usually",)
    assert clarity.score == 9.5
