from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from types import MappingProxyType
from typing import Callable, Mapping, NamedTuple

from services.errors import AnalysisError, InvalidInput
from services.logging_utils import get_logger
from services.rules import AggregationMode, Corpus, Indicator, Rule

logger = get_logger(__name__)

DISPLAY_SCALE = 100


@total_ordering
class RiskLevel(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return list(RiskLevel).index(self)

    def __lt__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank < other.rank


@dataclass(frozen=True)
class Thresholds:
    """Lower bounds (inclusive) of the medium and high tiers."""

    medium: int
    high: int

    def __post_init__(self):
        if not 0 <= self.medium <= self.high:
            raise ValueError(
                f"thresholds must satisfy 0 <= medium <= high, got {self.medium}/{self.high}"
            )

    def classify(self, score: int) -> RiskLevel:
        if score >= self.high:
            return RiskLevel.HIGH
        if score >= self.medium:
            return RiskLevel.MEDIUM
        return RiskLevel.LOW


class Match(NamedTuple):
    rule: Rule
    tokens: tuple[str, ...]

    @property
    def indicators(self) -> tuple[Indicator, ...]:
        rule = self.rule
        if rule.mode is AggregationMode.ONCE_PER_CATEGORY:
            return (Indicator(rule.category, rule.describe(self.tokens[0])),)
        return tuple(Indicator(rule.category, rule.describe(t)) for t in self.tokens)

    @property
    def contribution(self) -> int:
        return self.rule.weight * len(self.indicators)


class IndicatorGroup(NamedTuple):
    category: str
    items: tuple[str, ...]


@dataclass(frozen=True)
class AnalysisResult:
    subject: str
    risk_score: int
    risk_level: RiskLevel
    indicators: tuple[IndicatorGroup, ...]
    recommendations: tuple[str, ...]

    @property
    def display_score(self) -> int:
        return min(self.risk_score, DISPLAY_SCALE)

    def to_dict(self) -> dict:
        return {
            "subject": self.subject,
            "risk_score": self.risk_score,
            "display_score": self.display_score,
            "risk_level": self.risk_level.value,
            "indicators": [
                {"category": group.category, "items": list(group.items)}
                for group in self.indicators
            ],
            "recommendations": list(self.recommendations),
        }


def evaluate(corpus: Corpus, subject) -> tuple[Match, ...]:
    """Run every rule of the corpus in order, keeping only rules that matched."""
    matches = []
    for rule in corpus.rules:
        tokens = rule.matches(subject)
        if tokens:
            matches.append(Match(rule, tokens))
    return tuple(matches)


def score(matches: tuple[Match, ...]) -> int:
    return sum(m.contribution for m in matches)


def group_indicators(matches: tuple[Match, ...], fallback: Indicator) -> tuple[IndicatorGroup, ...]:
    """
    Group indicators by category in first-seen order.
    Falls back to a single synthetic group when nothing matched.
    """
    grouped: dict[str, list[str]] = {}
    for m in matches:
        for indicator in m.indicators:
            grouped.setdefault(indicator.category, []).append(indicator.description)

    if not grouped:
        return (IndicatorGroup(fallback.category, (fallback.description,)),)
    return tuple(IndicatorGroup(category, tuple(items)) for category, items in grouped.items())


class RuleEngine:
    """
    Generic heuristic pipeline: validate -> normalize -> evaluate -> score
    -> classify -> recommend.

    Analyzers differ only in the corpus, normalizer, thresholds and
    recommendation table they hand in here.
    """

    def __init__(
        self,
        corpus: Corpus,
        normalize: Callable[[str], object],
        thresholds: Thresholds,
        recommendations: Mapping[RiskLevel, tuple[str, ...]],
    ):
        missing = set(RiskLevel) - set(recommendations)
        if missing:
            raise ValueError(f"no recommendations for {sorted(level.value for level in missing)}")
        self.corpus = corpus
        self.normalize = normalize
        self.thresholds = thresholds
        self.recommendations = MappingProxyType(
            {level: tuple(items) for level, items in recommendations.items()}
        )

    def recommend(self, level: RiskLevel) -> tuple[str, ...]:
        return self.recommendations[level]

    def analyze(self, raw: str) -> AnalysisResult:
        try:
            if not isinstance(raw, str) or not raw.strip():
                raise InvalidInput(f"{self.corpus.name} input must not be empty")
            text = raw.strip()
            subject = self.normalize(text)
        except AnalysisError as exc:
            logger.warning(
                "analysis rejected",
                extra={"analyzer": self.corpus.name, "error": exc.code},
            )
            raise

        matches = evaluate(self.corpus, subject)
        risk_score = score(matches)
        risk_level = self.thresholds.classify(risk_score)
        indicators = group_indicators(matches, self.corpus.fallback)

        logger.info(
            "analysis complete",
            extra={
                "analyzer": self.corpus.name,
                "ruleset_version": self.corpus.version,
                "risk_score": risk_score,
                "risk_level": risk_level.value,
                "indicator_count": sum(len(m.indicators) for m in matches),
            },
        )

        return AnalysisResult(
            subject=text,
            risk_score=risk_score,
            risk_level=risk_level,
            indicators=indicators,
            recommendations=self.recommend(risk_level),
        )

    def describe(self) -> dict:
        return {
            "name": self.corpus.name,
            "version": self.corpus.version,
            "thresholds": {"medium": self.thresholds.medium, "high": self.thresholds.high},
            "rules": self.corpus.describe(),
        }
