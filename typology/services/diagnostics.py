"""Synthetic answer sheets and classification stability checks.

``ResponsePatternGenerator`` writes the answer sheet an idealised respondent
of a given archetype would produce. ``ConsistencyTester`` perturbs those
sheets and measures how often a calculator still returns the expected type.
Random choices go through seeded NumPy generators, so every report is
reproducible for a given seed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from typology.assessments.enums import DichotomyAxis, QuestionClass
from typology.assessments.mbti.catalog import get_parameters
from typology.assessments.mbti.types import Archetype, InstrumentParameters, Response
from typology.core.logging import get_logger
from typology.core.numeric import safe_div, safe_round
from typology.engine.calculator import TypeCalculator

__all__ = [
    "POSITION_ANSWER_COUNTS",
    "ResponsePatternGenerator",
    "TypeConsistency",
    "ConsistencyReport",
    "AccuracyResult",
    "ConsistencyTester",
    "stability_label",
]

logger = get_logger("typology.services.diagnostics", component="diagnostics")

SeedLike = int | np.random.Generator | None

# (preference answers, order answers) favouring the archetype's function, by stack position
POSITION_ANSWER_COUNTS: Tuple[Tuple[int, int], ...] = ((4, 4), (3, 2), (2, 3), (2, 2))

HIGH_STABILITY_STD = 10.0
MEDIUM_STABILITY_STD = 20.0


def stability_label(confidence_std: float) -> str:
    if confidence_std < HIGH_STABILITY_STD:
        return "High"
    if confidence_std < MEDIUM_STABILITY_STD:
        return "Medium"
    return "Low"


class ResponsePatternGenerator:
    """Builds deterministic "ideal" answer sheets for archetypes."""

    def __init__(self, parameters: Optional[InstrumentParameters] = None) -> None:
        self._params = parameters or get_parameters()

    @property
    def parameters(self) -> InstrumentParameters:
        return self._params

    def ideal_pattern(self, archetype: Archetype | str) -> List[Response]:
        """One answer per question, leaning according to the canonical stack.

        Within each axis the function present in the stack wins the first
        ``n`` questions of each class, where ``n`` comes from
        ``POSITION_ANSWER_COUNTS`` for its position. Dichotomy questions
        follow the type letters.
        """
        target = archetype if isinstance(archetype, Archetype) else self._params.archetypes[archetype.upper()]
        seen: Dict[Tuple[object, QuestionClass], int] = {}
        pattern: List[Response] = []
        for question in self._params.questions:
            if question.axis is DichotomyAxis.EXTRAVERSION_INTROVERSION:
                value = target.is_extraverted
            elif question.axis is DichotomyAxis.JUDGING_PERCEIVING:
                value = target.is_judging
            else:
                key = (question.axis, question.question_class)
                nth = seen.get(key, 0)
                seen[key] = nth + 1
                function = next((fn for fn in target.stack if fn.axis is question.axis), None)
                if function is None:
                    # axis absent from the stack: no lean either way
                    value = nth % 2 == 0
                else:
                    preference_count, order_count = POSITION_ANSWER_COUNTS[target.stack.index(function)]
                    if question.question_class is QuestionClass.FUNCTION_PREFERENCE:
                        wins = preference_count
                    else:
                        wins = order_count
                    value = function.is_extraverted if nth < wins else not function.is_extraverted
            pattern.append(Response(question_index=question.index, value=value))
        return pattern

    def with_noise(self, pattern: Sequence[Response], flip_fraction: float, seed: SeedLike = None) -> List[Response]:
        """Flip exactly ``round(answered * flip_fraction)`` answered questions."""

        if not 0.0 <= flip_fraction <= 1.0:
            raise ValueError("flip_fraction must be within [0, 1]")
        rng = np.random.default_rng(seed)
        answered = [pos for pos, response in enumerate(pattern) if response.value is not None]
        flips = int(safe_round(len(answered) * flip_fraction, 0))
        chosen = set(rng.choice(answered, size=flips, replace=False).tolist()) if flips else set()
        return [
            Response(question_index=r.question_index, value=(not r.value) if pos in chosen else r.value)
            for pos, r in enumerate(pattern)
        ]

    def with_blanks(self, pattern: Sequence[Response], blank_fraction: float, seed: SeedLike = None) -> List[Response]:
        """Replace ``round(answered * blank_fraction)`` answers with ``None``."""

        if not 0.0 <= blank_fraction <= 1.0:
            raise ValueError("blank_fraction must be within [0, 1]")
        rng = np.random.default_rng(seed)
        answered = [pos for pos, response in enumerate(pattern) if response.value is not None]
        blanks = int(safe_round(len(answered) * blank_fraction, 0))
        chosen = set(rng.choice(answered, size=blanks, replace=False).tolist()) if blanks else set()
        return [
            Response(question_index=r.question_index, value=None if pos in chosen else r.value)
            for pos, r in enumerate(pattern)
        ]


@dataclass(frozen=True, slots=True)
class TypeConsistency:
    type: str
    trials: int
    hits: int
    mean_confidence: float
    confidence_std: float
    outcomes: Dict[str, int] = field(default_factory=dict)

    @property
    def stability(self) -> float:
        """Share of trials that returned the expected type."""
        return safe_div(self.hits, self.trials)

    @property
    def stability_label(self) -> str:
        return stability_label(self.confidence_std)

    def as_dict(self) -> Dict[str, object]:
        return {
            "type": self.type,
            "trials": self.trials,
            "hits": self.hits,
            "stability": safe_round(self.stability, 4),
            "mean_confidence": self.mean_confidence,
            "confidence_std": self.confidence_std,
            "stability_label": self.stability_label,
            "outcomes": dict(self.outcomes),
        }


@dataclass(frozen=True, slots=True)
class ConsistencyReport:
    results: Tuple[TypeConsistency, ...]

    @property
    def overall_stability(self) -> float:
        return safe_div(sum(r.hits for r in self.results), sum(r.trials for r in self.results))

    def unstable_types(self, threshold: float = 0.7) -> List[str]:
        return [r.type for r in self.results if r.stability < threshold]


@dataclass(frozen=True, slots=True)
class AccuracyResult:
    expected: str
    actual: str
    confidence: int

    @property
    def correct(self) -> bool:
        return self.expected == self.actual


class ConsistencyTester:
    """Runs a calculator over perturbed ideal patterns.

    Args:
        calculator: The strategy combination under test.
        generator: Pattern source; defaults to one over the loaded instrument.
        flip_fraction: Share of answers flipped in every trial.
        seed: Base seed; every archetype draws from its own child stream.
    """

    def __init__(
        self,
        calculator: TypeCalculator,
        generator: Optional[ResponsePatternGenerator] = None,
        *,
        flip_fraction: float = 0.1,
        seed: int = 0,
    ) -> None:
        self._calculator = calculator
        self._generator = generator or ResponsePatternGenerator()
        self._flip_fraction = flip_fraction
        self._seed = seed

    def test_type(self, code: str, trials: int = 20) -> TypeConsistency:
        if trials < 1:
            raise ValueError("trials must be positive")
        code = code.upper()
        ideal = self._generator.ideal_pattern(code)
        rng = np.random.default_rng([self._seed, sum(ord(ch) for ch in code)])
        confidences: List[int] = []
        outcomes: Dict[str, int] = {}
        for _ in range(trials):
            noisy = self._generator.with_noise(ideal, self._flip_fraction, rng)
            result = self._calculator.calculate(noisy)
            outcomes[result.type] = outcomes.get(result.type, 0) + 1
            confidences.append(result.confidence)
        values = np.asarray(confidences, dtype=np.float64)
        return TypeConsistency(
            type=code,
            trials=trials,
            hits=outcomes.get(code, 0),
            mean_confidence=safe_round(float(values.mean()), 2),
            confidence_std=safe_round(float(values.std()), 2),
            outcomes=dict(sorted(outcomes.items(), key=lambda item: (-item[1], item[0]))),
        )

    def run(self, codes: Optional[Sequence[str]] = None, trials: int = 20) -> ConsistencyReport:
        targets = list(codes) if codes is not None else list(self._generator.parameters.archetypes)
        report = ConsistencyReport(results=tuple(self.test_type(code, trials) for code in targets))
        logger.info(
            "consistency_run_complete",
            extra={
                "structured_data": {
                    "strategies": self._calculator.strategy_names(),
                    "types": len(report.results),
                    "trials": trials,
                    "overall_stability": safe_round(report.overall_stability, 4),
                }
            },
        )
        return report

    def evaluate_accuracy(self) -> Dict[str, AccuracyResult]:
        """Classify every archetype's noiseless ideal pattern."""

        results: Dict[str, AccuracyResult] = {}
        for code in self._generator.parameters.archetypes:
            outcome = self._calculator.calculate(self._generator.ideal_pattern(code))
            results[code] = AccuracyResult(expected=code, actual=outcome.type, confidence=outcome.confidence)
        return results
