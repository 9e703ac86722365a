"""Static quality checks over the question bank.

The analyzer looks at four things and averages them into one 0-100 score:

- distribution: every function axis carries the same number of questions and
  preference questions balance order questions;
- bias: loaded vocabulary, length and word-count gaps between the two options;
- clarity: stem and option lengths, hedging words, option complexity;
- compliance: exact question counts per axis and per dichotomy.

Vocabulary checks are plain lower-cased substring tests.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from typology.assessments.enums import DichotomyAxis, FunctionAxis, QuestionClass
from typology.assessments.mbti.catalog import get_parameters
from typology.assessments.mbti.types import InstrumentParameters, Question
from typology.core.logging import get_logger
from typology.core.numeric import safe_div, safe_round

__all__ = [
    "BiasIssue",
    "ClarityScore",
    "QualityReport",
    "QuestionQualityAnalyzer",
]

logger = get_logger("typology.services.question_quality", component="diagnostics")

POSITIVE_WORDS: Tuple[str, ...] = (
    "creative", "innovative", "flexible", "spontaneous", "exciting", "dynamic",
    "efficient", "organized", "reliable", "systematic", "thorough", "practical",
)
NEGATIVE_WORDS: Tuple[str, ...] = (
    "boring", "rigid", "chaotic", "unpredictable", "slow", "disorganized",
    "cold", "impersonal", "overly", "too much", "excessive",
)
AMBIGUOUS_WORDS: Tuple[str, ...] = ("sometimes", "usually", "often", "maybe", "might")

EXPECTED_PER_FUNCTION_AXIS = 8
EXPECTED_PER_DICHOTOMY = 4

SEVERITY_PENALTY: Dict[str, int] = {"high": 30, "medium": 15, "low": 5}

MAX_CLARITY = 10.0


@dataclass(frozen=True, slots=True)
class BiasIssue:
    question_index: int
    code: str
    severity: str
    description: str
    suggestion: str

    def as_dict(self) -> Dict[str, object]:
        return {
            "question_index": self.question_index,
            "code": self.code,
            "severity": self.severity,
            "description": self.description,
            "suggestion": self.suggestion,
        }


@dataclass(frozen=True, slots=True)
class ClarityScore:
    question_index: int
    score: float
    issues: Tuple[str, ...]
    extraverted_length: int
    introverted_length: int
    complexity: float

    def as_dict(self) -> Dict[str, object]:
        return {
            "question_index": self.question_index,
            "score": self.score,
            "issues": list(self.issues),
            "extraverted_length": self.extraverted_length,
            "introverted_length": self.introverted_length,
            "complexity": self.complexity,
        }


@dataclass(frozen=True, slots=True)
class QualityReport:
    distribution: Dict[str, int]
    distribution_passed: bool
    bias_score: int
    bias_issues: Tuple[BiasIssue, ...]
    clarity_average: float
    clarity_scores: Tuple[ClarityScore, ...]
    compliance: int
    violations: Tuple[str, ...] = field(default_factory=tuple)
    overall_score: int = 0

    def as_dict(self) -> Dict[str, object]:
        return {
            "distribution": {"passed": self.distribution_passed, "details": dict(self.distribution)},
            "bias": {"score": self.bias_score, "issues": [issue.as_dict() for issue in self.bias_issues]},
            "clarity": {
                "average_score": self.clarity_average,
                "question_scores": [score.as_dict() for score in self.clarity_scores],
            },
            "theoretical": {"compliance": self.compliance, "violations": list(self.violations)},
            "overall_score": self.overall_score,
        }


def _word_count(text: str) -> int:
    return len(text.split())


def _matches(text: str, vocabulary: Sequence[str]) -> List[str]:
    lowered = text.lower()
    return [word for word in vocabulary if word in lowered]


class QuestionQualityAnalyzer:
    """Scores a question bank for balance, neutrality and readability.

    Args:
        questions: Questions to inspect; defaults to the loaded instrument.
        parameters: Instrument to read the questions from when ``questions``
            is not given.
    """

    def __init__(
        self,
        questions: Optional[Sequence[Question]] = None,
        *,
        parameters: Optional[InstrumentParameters] = None,
    ) -> None:
        if questions is None:
            questions = (parameters or get_parameters()).questions
        self._questions = tuple(questions)

    def distribution(self) -> Tuple[bool, Dict[str, int]]:
        """Question counts per axis and per class, plus whether they balance."""

        axes = Counter(question.axis for question in self._questions)
        classes = Counter(question.question_class for question in self._questions)
        counts: Dict[str, int] = {axis.value: axes.get(axis, 0) for axis in FunctionAxis}
        counts.update({axis.value: axes.get(axis, 0) for axis in DichotomyAxis})
        counts.update({cls.value: classes.get(cls, 0) for cls in QuestionClass})

        balanced = all(counts[axis.value] == EXPECTED_PER_FUNCTION_AXIS for axis in FunctionAxis)
        equal_classes = counts[QuestionClass.FUNCTION_PREFERENCE.value] == counts[QuestionClass.FUNCTION_ORDER.value]
        return balanced and equal_classes, counts

    def question_bias(self, question: Question) -> List[BiasIssue]:
        issues: List[BiasIssue] = []
        extraverted, introverted = question.extraverted_option, question.introverted_option

        ext_positive = _matches(extraverted, POSITIVE_WORDS)
        if len(ext_positive) > len(_matches(introverted, POSITIVE_WORDS)) + 1:
            issues.append(
                BiasIssue(
                    question.index,
                    "LOADED_LANGUAGE",
                    "medium",
                    f"Extraverted option has more positive language: {', '.join(ext_positive)}",
                    "Balance positive language between options",
                )
            )
        ext_negative = _matches(extraverted, NEGATIVE_WORDS)
        if len(ext_negative) > len(_matches(introverted, NEGATIVE_WORDS)) + 1:
            issues.append(
                BiasIssue(
                    question.index,
                    "LOADED_LANGUAGE",
                    "medium",
                    f"Extraverted option has more negative language: {', '.join(ext_negative)}",
                    "Remove or balance negative language",
                )
            )

        length_gap = abs(len(extraverted) - len(introverted))
        if length_gap > 20:
            issues.append(
                BiasIssue(
                    question.index,
                    "LENGTH_DISPARITY",
                    "high" if length_gap > 40 else "medium",
                    f"Length difference of {length_gap} characters",
                    "Balance option lengths to within 20 characters",
                )
            )

        word_gap = abs(_word_count(extraverted) - _word_count(introverted))
        if word_gap > 3:
            issues.append(
                BiasIssue(
                    question.index,
                    "COMPLEXITY_DIFFERENCE",
                    "high" if word_gap > 6 else "medium",
                    f"Word count difference of {word_gap} words",
                    "Balance complexity between options",
                )
            )
        return issues

    def bias(self) -> Tuple[int, List[BiasIssue]]:
        """Average per-question neutrality (100 minus severity penalties) and all issues."""

        issues: List[BiasIssue] = []
        total = 0
        for question in self._questions:
            found = self.question_bias(question)
            issues.extend(found)
            total += max(0, 100 - sum(SEVERITY_PENALTY[issue.severity] for issue in found))
        return int(safe_round(safe_div(total, len(self._questions)), 0)), issues

    def question_clarity(self, question: Question) -> ClarityScore:
        issues: List[str] = []
        score = MAX_CLARITY

        if len(question.text) > 100:
            issues.append("TEXT_TOO_LONG")
            score -= 1
        if len(question.text) < 20:
            issues.append("TEXT_TOO_SHORT")
            score -= 1

        ext_len, int_len = len(question.extraverted_option), len(question.introverted_option)
        if ext_len > 120 or int_len > 120:
            issues.append("OPTIONS_TOO_LONG")
            score -= 1
        if ext_len < 15 or int_len < 15:
            issues.append("OPTIONS_TOO_SHORT")
            score -= 1

        for word in _matches(question.text, AMBIGUOUS_WORDS):
            issues.append(f"AMBIGUOUS_WORD:{word}")
            score -= 0.5

        complexity = (_word_count(question.extraverted_option) + _word_count(question.introverted_option)) / 2
        if complexity > 15:
            issues.append("OPTIONS_TOO_COMPLEX")
            score -= 1

        return ClarityScore(
            question_index=question.index,
            score=max(0.0, score),
            issues=tuple(issues),
            extraverted_length=ext_len,
            introverted_length=int_len,
            complexity=complexity,
        )

    def clarity(self) -> Tuple[float, List[ClarityScore]]:
        scores = [self.question_clarity(question) for question in self._questions]
        return safe_div(sum(s.score for s in scores), len(scores)), scores

    def theoretical_compliance(self) -> Tuple[int, List[str]]:
        """Start at 100; -10 per miscounted axis, -15 when classes are unbalanced."""

        _, counts = self.distribution()
        violations: List[str] = []
        compliance = 100
        for axis in FunctionAxis:
            if counts[axis.value] != EXPECTED_PER_FUNCTION_AXIS:
                violations.append(f"{axis.value} has {counts[axis.value]} questions, expected {EXPECTED_PER_FUNCTION_AXIS}")
                compliance -= 10
        for axis in DichotomyAxis:
            if counts[axis.value] != EXPECTED_PER_DICHOTOMY:
                violations.append(f"{axis.value} has {counts[axis.value]} questions, expected {EXPECTED_PER_DICHOTOMY}")
                compliance -= 10
        if counts[QuestionClass.FUNCTION_PREFERENCE.value] != counts[QuestionClass.FUNCTION_ORDER.value]:
            violations.append("function-preference and function-order question counts differ")
            compliance -= 15
        return max(0, compliance), violations

    def analyze(self) -> QualityReport:
        passed, counts = self.distribution()
        bias_score, bias_issues = self.bias()
        clarity_average, clarity_scores = self.clarity()
        compliance, violations = self.theoretical_compliance()

        # equal quarters
        overall = safe_round(
            (100 if passed else 70) * 0.25
            + bias_score * 0.25
            + safe_div(clarity_average, MAX_CLARITY) * 100 * 0.25
            + compliance * 0.25,
            0,
        )
        report = QualityReport(
            distribution=counts,
            distribution_passed=passed,
            bias_score=bias_score,
            bias_issues=tuple(bias_issues),
            clarity_average=safe_round(clarity_average, 2),
            clarity_scores=tuple(clarity_scores),
            compliance=compliance,
            violations=tuple(violations),
            overall_score=int(overall),
        )
        logger.info(
            "question_quality_analyzed",
            extra={
                "structured_data": {
                    "questions": len(self._questions),
                    "overall_score": report.overall_score,
                    "bias_issues": len(report.bias_issues),
                    "violations": len(report.violations),
                }
            },
        )
        return report
