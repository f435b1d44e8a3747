from services import config
from services.engine import AnalysisResult, RuleEngine, Thresholds
from services.recommendations import EMAIL_RECOMMENDATIONS
from services.rules import EMAIL_CORPUS


def normalize_email(content: str) -> str:
    return content.lower()


EMAIL_ENGINE = RuleEngine(
    corpus=EMAIL_CORPUS,
    normalize=normalize_email,
    thresholds=Thresholds(config.EMAIL_MEDIUM_THRESHOLD, config.EMAIL_HIGH_THRESHOLD),
    recommendations=EMAIL_RECOMMENDATIONS,
)


def analyze_email(content: str) -> AnalysisResult:
    """
    Score pasted email text against the email corpus.

    Every distinct matched term adds its rule's weight, so an email hitting
    three urgency terms scores 3 x 15 for that category alone.
    """
    return EMAIL_ENGINE.analyze(content)
