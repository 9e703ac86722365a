from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from typology.assessments.constants import ARCHETYPE_COUNT, FUNCTION_NAMES, STACK_SIZE
from typology.assessments.enums import (
    CognitiveFunction,
    DichotomyAxis,
    FunctionAxis,
    QuestionClass,
)
from typology.core.errors import ConfigurationError
from typology.i18n.messages import ConfigurationMessages


def names_form_valid_stack(names: Sequence[CognitiveFunction]) -> bool:
    """Four distinct functions whose attitude alternates from slot 0."""

    if len(names) != STACK_SIZE or len(set(names)) != STACK_SIZE:
        return False
    return all(names[i].is_extraverted != names[i + 1].is_extraverted for i in range(STACK_SIZE - 1))


@dataclass(frozen=True, slots=True)
class Question:
    """One forced-choice statement; ``index`` is its identity."""

    index: int
    text: str
    extraverted_option: str
    introverted_option: str
    axis: FunctionAxis | DichotomyAxis
    question_class: QuestionClass

    @property
    def is_dichotomy(self) -> bool:
        return isinstance(self.axis, DichotomyAxis)

    @property
    def extraverted_function(self) -> Optional[CognitiveFunction]:
        return None if isinstance(self.axis, DichotomyAxis) else self.axis.extraverted

    @property
    def introverted_function(self) -> Optional[CognitiveFunction]:
        return None if isinstance(self.axis, DichotomyAxis) else self.axis.introverted

    def as_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "text": self.text,
            "extraverted_option": self.extraverted_option,
            "introverted_option": self.introverted_option,
            "axis": self.axis.value,
            "question_class": self.question_class.value,
        }


@dataclass(frozen=True, slots=True)
class Response:
    """Answer to one question.

    ``True`` picks the extraverted (first) option, ``False`` the introverted
    one and ``None`` means unsure or skipped.
    """

    question_index: int
    value: Optional[bool]


@dataclass(frozen=True, slots=True)
class FunctionScores:
    """Signed strength per cognitive function."""

    Ne: float = 0.0
    Ni: float = 0.0
    Se: float = 0.0
    Si: float = 0.0
    Te: float = 0.0
    Ti: float = 0.0
    Fe: float = 0.0
    Fi: float = 0.0

    def __getitem__(self, function: CognitiveFunction | str) -> float:
        return getattr(self, CognitiveFunction(function).value)

    @classmethod
    def from_mapping(cls, values: Mapping[CognitiveFunction | str, float]) -> "FunctionScores":
        """Build from a partial mapping; missing functions score zero."""
        kwargs = {CognitiveFunction(name).value: float(score) for name, score in values.items()}
        return cls(**kwargs)

    def ranked(self) -> List[Tuple[CognitiveFunction, float]]:
        """Functions by descending score, ties broken by the fixed function order."""
        return sorted(((fn, self[fn]) for fn in FUNCTION_NAMES), key=lambda item: (-item[1], item[0].rank))

    def as_dict(self) -> dict[str, float]:
        return {fn.value: self[fn] for fn in FUNCTION_NAMES}


@dataclass(frozen=True, slots=True)
class CognitiveFunctionSlot:
    """One position in a four-slot stack."""

    extraverted_name: CognitiveFunction
    introverted_name: CognitiveFunction
    is_extraverted: bool

    @property
    def active(self) -> CognitiveFunction:
        return self.extraverted_name if self.is_extraverted else self.introverted_name

    @classmethod
    def of(cls, function: CognitiveFunction | str) -> "CognitiveFunctionSlot":
        fn = CognitiveFunction(function)
        return cls(
            extraverted_name=fn.axis.extraverted,
            introverted_name=fn.axis.introverted,
            is_extraverted=fn.is_extraverted,
        )

    def as_dict(self) -> dict[str, Any]:
        return {
            "function": self.active.value,
            "extraverted_name": self.extraverted_name.value,
            "introverted_name": self.introverted_name.value,
            "is_extraverted": self.is_extraverted,
        }


Stack = Tuple[CognitiveFunctionSlot, ...]


def stack_from_names(names: Iterable[CognitiveFunction | str]) -> Stack:
    return tuple(CognitiveFunctionSlot.of(name) for name in names)


def stack_names(stack: Sequence[CognitiveFunctionSlot]) -> Tuple[CognitiveFunction, ...]:
    return tuple(slot.active for slot in stack)


@dataclass(frozen=True, slots=True)
class Archetype:
    """One of the sixteen canonical types."""

    code: str
    nickname: str
    stack: Tuple[CognitiveFunction, CognitiveFunction, CognitiveFunction, CognitiveFunction]
    description: str

    @property
    def is_extraverted(self) -> bool:
        return self.code[0] == "E"

    @property
    def is_judging(self) -> bool:
        return self.code[3] == "J"

    def slots(self) -> Stack:
        return stack_from_names(self.stack)

    def position_of(self, function: CognitiveFunction) -> Optional[int]:
        try:
            return self.stack.index(function)
        except ValueError:
            return None

    def as_dict(self) -> dict[str, Any]:
        return {
            "type": self.code,
            "nickname": self.nickname,
            "stack": [fn.value for fn in self.stack],
            "description": self.description,
        }


@dataclass(frozen=True, slots=True)
class TypeMatchResult:
    type: str
    score: float
    confidence: int
    stack: Stack

    def as_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "score": self.score,
            "confidence": self.confidence,
            "stack": [slot.active.value for slot in self.stack],
        }


@dataclass(frozen=True, slots=True)
class CalculationResult:
    """Everything a results screen needs from one calculation."""

    type: str
    stack: Stack
    confidence: int
    scores: FunctionScores
    alternative_types: Tuple[TypeMatchResult, ...]
    strategies: Mapping[str, str]
    response_count: int

    def as_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "stack": [slot.as_dict() for slot in self.stack],
            "confidence": self.confidence,
            "scores": self.scores.as_dict(),
            "alternative_types": [match.as_dict() for match in self.alternative_types],
            "strategies": dict(self.strategies),
            "response_count": self.response_count,
        }


@dataclass(frozen=True, slots=True)
class ScoringWeights:
    """Per-question-class weights of one scoring strategy."""

    function_preference: float
    function_order: float
    traditional_dichotomy: float
    order_amplifier: float = 1.0

    def weight_for(self, question_class: QuestionClass) -> float:
        if question_class is QuestionClass.FUNCTION_ORDER:
            return self.function_order * self.order_amplifier
        if question_class is QuestionClass.TRADITIONAL_DICHOTOMY:
            return self.traditional_dichotomy
        return self.function_preference

    def as_dict(self) -> dict[str, Any]:
        return {
            "function_preference": self.function_preference,
            "function_order": self.function_order,
            "traditional_dichotomy": self.traditional_dichotomy,
            "order_amplifier": self.order_amplifier,
        }

    @classmethod
    def from_raw(cls, payload: Mapping[str, Any]) -> "ScoringWeights":
        return cls(
            function_preference=float(payload["function_preference"]),
            function_order=float(payload["function_order"]),
            traditional_dichotomy=float(payload["traditional_dichotomy"]),
            order_amplifier=float(payload.get("order_amplifier", 1.0)),
        )


@dataclass(frozen=True, slots=True)
class DichotomyBonuses:
    """Multiplicative nudges applied when a traditional dichotomy leans one way."""

    extraversion: float
    introversion: float
    judging: float
    perceiving: float
    introverted_intuition_judging_factor: float

    @classmethod
    def from_raw(cls, payload: Mapping[str, Any]) -> "DichotomyBonuses":
        return cls(
            extraversion=float(payload["extraversion"]),
            introversion=float(payload["introversion"]),
            judging=float(payload["judging"]),
            perceiving=float(payload["perceiving"]),
            introverted_intuition_judging_factor=float(payload["introverted_intuition_judging_factor"]),
        )


@dataclass(frozen=True, slots=True)
class MatchingParameters:
    exact_points: Tuple[float, ...]
    weighted_position_weights: Tuple[float, ...]
    weighted_scale: float
    dominant_auxiliary_points: Tuple[float, ...]
    confidence_divisor: float
    inexact_confidence_factor: float

    @classmethod
    def from_raw(cls, payload: Mapping[str, Any]) -> "MatchingParameters":
        return cls(
            exact_points=_position_table(payload, "exact_points"),
            weighted_position_weights=_position_table(payload, "weighted_position_weights"),
            weighted_scale=float(payload["weighted_scale"]),
            dominant_auxiliary_points=_position_table(payload, "dominant_auxiliary_points"),
            confidence_divisor=float(payload["confidence_divisor"]),
            inexact_confidence_factor=float(payload["inexact_confidence_factor"]),
        )


@dataclass(frozen=True, slots=True)
class InstrumentParameters:
    """Immutable container for the instrument configuration."""

    instrument_id: str
    version: str
    questions: Tuple[Question, ...]
    archetypes: Mapping[str, Archetype]
    function_descriptions: Mapping[CognitiveFunction, str]
    scoring: Mapping[str, ScoringWeights]
    dichotomy_bonuses: DichotomyBonuses
    type_first_position_weights: Tuple[float, ...]
    matching: MatchingParameters

    @property
    def question_count(self) -> int:
        return len(self.questions)

    def scoring_weights(self, key: str) -> ScoringWeights:
        return self.scoring[key]

    @classmethod
    def from_raw(cls, payload: Mapping[str, Any]) -> "InstrumentParameters":
        for key in ("id", "version", "questions", "archetypes", "scoring", "dichotomy_bonuses", "matching"):
            if key not in payload:
                raise ConfigurationError(ConfigurationMessages.MISSING_KEY.format(key=key))
        try:
            questions = tuple(_parse_question(idx, raw) for idx, raw in enumerate(payload["questions"]))
            archetypes = {
                str(code): _parse_archetype(str(code), raw) for code, raw in payload["archetypes"].items()
            }
            if len(archetypes) != ARCHETYPE_COUNT:
                raise ConfigurationError(ConfigurationMessages.ARCHETYPE_COUNT.format(count=len(archetypes)))
            descriptions = {
                CognitiveFunction(name): str(text)
                for name, text in payload.get("function_descriptions", {}).items()
            }
            scoring = {str(name): ScoringWeights.from_raw(raw) for name, raw in payload["scoring"].items()}
            stack_building = payload.get("stack_building", {})
            return cls(
                instrument_id=str(payload["id"]),
                version=str(payload["version"]),
                questions=questions,
                archetypes=MappingProxyType(archetypes),
                function_descriptions=MappingProxyType(descriptions),
                scoring=MappingProxyType(scoring),
                dichotomy_bonuses=DichotomyBonuses.from_raw(payload["dichotomy_bonuses"]),
                type_first_position_weights=_position_table(
                    {"type_first_position_weights": stack_building.get("type_first_position_weights", [4, 3, 2, 1])},
                    "type_first_position_weights",
                ),
                matching=MatchingParameters.from_raw(payload["matching"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ConfigurationError(detail=str(exc)) from exc


def _position_table(payload: Mapping[str, Any], key: str) -> Tuple[float, ...]:
    values = payload[key]
    if not isinstance(values, (list, tuple)) or len(values) != STACK_SIZE:
        raise ConfigurationError(ConfigurationMessages.POSITION_TABLE.format(key=key))
    return tuple(float(v) for v in values)


def _parse_question(index: int, raw: Mapping[str, Any]) -> Question:
    axis_value = str(raw["axis"])
    axis: FunctionAxis | DichotomyAxis
    if axis_value in {a.value for a in DichotomyAxis}:
        axis = DichotomyAxis(axis_value)
    else:
        axis = FunctionAxis(axis_value)
    question_class = QuestionClass(str(raw["question_class"]))
    if (question_class is QuestionClass.TRADITIONAL_DICHOTOMY) != isinstance(axis, DichotomyAxis):
        raise ConfigurationError(
            ConfigurationMessages.BAD_QUESTION.format(
                index=index, reason="dichotomy axes and the traditional-dichotomy class go together"
            )
        )
    return Question(
        index=index,
        text=str(raw["text"]),
        extraverted_option=str(raw["extraverted_option"]),
        introverted_option=str(raw["introverted_option"]),
        axis=axis,
        question_class=question_class,
    )


def _parse_archetype(code: str, raw: Mapping[str, Any]) -> Archetype:
    names = tuple(CognitiveFunction(name) for name in raw["stack"])
    if not names_form_valid_stack(names):
        raise ConfigurationError(
            ConfigurationMessages.BAD_STACK.format(code=code, stack=[n.value for n in names])
        )
    return Archetype(
        code=code,
        nickname=str(raw.get("nickname", "")),
        stack=names,  # type: ignore[arg-type]
        description=str(raw.get("description", "")),
    )
