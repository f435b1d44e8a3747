"""
Rule corpora for the URL and email analyzers.

A corpus is an ordered, immutable tuple of weighted rules. Each rule either
matches a fixed term set against one field of the normalized input, or runs a
structural check on it. How matches turn into score is decided per rule by
its aggregation mode:

- ONCE_PER_CATEGORY: any match adds the weight once and yields one indicator
- ONCE_PER_MATCHED_TERM: each distinct matched term adds the weight and
  yields its own indicator
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, NamedTuple, Optional, Sequence

RULESET_VERSION = "1.0"


class AggregationMode(Enum):
    ONCE_PER_CATEGORY = "once-per-category"
    ONCE_PER_MATCHED_TERM = "once-per-matched-term"


class Indicator(NamedTuple):
    category: str
    description: str


class UrlSubject(NamedTuple):
    """Normalized URL: the stripped raw string, its lower-cased form and hostname."""

    raw: str
    lowered: str
    hostname: str


@dataclass(frozen=True)
class Rule:
    category: str
    weight: int
    describe: Callable[[str], str]
    terms: tuple[str, ...] = ()
    field: Optional[str] = None
    check: Optional[Callable[[object], Sequence[str]]] = None
    mode: AggregationMode = AggregationMode.ONCE_PER_CATEGORY

    def __post_init__(self):
        if self.weight < 0:
            raise ValueError(f"rule {self.category!r} has negative weight")
        if not self.terms and self.check is None:
            raise ValueError(f"rule {self.category!r} needs terms or a check")

    def matches(self, subject) -> tuple[str, ...]:
        """Matched tokens, in the order the rule declares its terms."""
        if self.check is not None:
            return tuple(self.check(subject))
        text = getattr(subject, self.field) if self.field else subject
        return tuple(term for term in self.terms if term in text)


@dataclass(frozen=True)
class Corpus:
    name: str
    version: str
    rules: tuple[Rule, ...]
    fallback: Indicator

    def describe(self) -> list[dict]:
        return [
            {
                "category": rule.category,
                "weight": rule.weight,
                "mode": rule.mode.value,
                "terms": list(rule.terms),
            }
            for rule in self.rules
        ]


# ---------- URL corpus ----------

SHORTENER_DOMAINS = ("bit.ly", "tinyurl.com", "short.link", "click.me")
# Compared against the lower-cased hostname, so "microsofT" folds into the real brand.
HOMOGRAPH_BRANDS = tuple(b.lower() for b in ("paypaI", "arnazon", "microsofT", "goog1e"))
URL_KEYWORDS = ("urgent", "verify", "suspended", "click", "login", "secure")

IP_HOST_REGEX = re.compile(r"^\d+\.\d+\.\d+\.\d+")
MAX_HOST_LABELS = 4
SECURE_PREFIX = "https://"


def _literal_ip_host(subject: UrlSubject) -> tuple[str, ...]:
    match = IP_HOST_REGEX.match(subject.hostname)
    return (match.group(0),) if match else ()


def _excessive_subdomains(subject: UrlSubject) -> tuple[str, ...]:
    if len(subject.hostname.split(".")) > MAX_HOST_LABELS:
        return (subject.hostname,)
    return ()


def _insecure_transport(subject: UrlSubject) -> tuple[str, ...]:
    """
    Case-sensitive prefix check on the URL after surrounding whitespace is
    stripped, so "  https://x" counts as secure and "HTTPS://x" does not.
    """
    if subject.raw.startswith(SECURE_PREFIX):
        return ()
    return ("insecure",)


def _fixed(text: str) -> Callable[[str], str]:
    return lambda _token: text


URL_CORPUS = Corpus(
    name="url",
    version=RULESET_VERSION,
    rules=(
        Rule(
            "URL shortening service", 30, _fixed("Uses URL shortening service"),
            terms=SHORTENER_DOMAINS, field="hostname",
        ),
        Rule(
            "Homograph attack", 40,
            _fixed("Contains character substitution (homograph attack)"),
            terms=HOMOGRAPH_BRANDS, field="hostname",
        ),
        Rule(
            "Suspicious keyword", 20, _fixed("Contains suspicious keywords"),
            terms=URL_KEYWORDS, field="lowered",
        ),
        Rule(
            "Literal IP host", 35, _fixed("Uses IP address instead of domain name"),
            check=_literal_ip_host,
        ),
        Rule(
            "Excessive subdomains", 25, _fixed("Excessive number of subdomains"),
            check=_excessive_subdomains,
        ),
        Rule(
            "Insecure transport", 15, _fixed("Not using secure HTTPS protocol"),
            check=_insecure_transport,
        ),
    ),
    fallback=Indicator("Analysis Results", "No obvious suspicious indicators found"),
)


# ---------- Email corpus ----------

URGENCY_TERMS = ("urgent", "immediate", "expires today", "act now", "limited time", "hurry")
SENSITIVE_TERMS = (
    "password",
    "credit card",
    "ssn",
    "social security",
    "bank account",
    "pin",
    "verification",
)
SUSPICIOUS_PHRASES = (
    "verify your account",
    "suspended account",
    "click here",
    "confirm identity",
    "security alert",
    "unauthorized access",
)
COMMON_MISSPELLINGS = ("recieve", "occured", "seperate", "definately", "youre account")
GENERIC_GREETINGS = ("dear customer", "dear user", "dear client", "valued customer")

_PER_TERM = AggregationMode.ONCE_PER_MATCHED_TERM

EMAIL_CORPUS = Corpus(
    name="email",
    version=RULESET_VERSION,
    rules=(
        Rule(
            "Urgency Tactics", 15, lambda t: f'Contains "{t}"',
            terms=URGENCY_TERMS, mode=_PER_TERM,
        ),
        Rule(
            "Sensitive Information Requests", 25, lambda t: f"Requests {t}",
            terms=SENSITIVE_TERMS, mode=_PER_TERM,
        ),
        Rule(
            "Suspicious Phrases", 20, lambda t: f'Contains "{t}"',
            terms=SUSPICIOUS_PHRASES, mode=_PER_TERM,
        ),
        Rule(
            "Grammar/Spelling Issues", 10, lambda t: f'Misspelling: "{t}"',
            terms=COMMON_MISSPELLINGS, mode=_PER_TERM,
        ),
        Rule(
            "Generic Communication", 5, lambda t: f'Uses generic greeting: "{t}"',
            terms=GENERIC_GREETINGS, mode=_PER_TERM,
        ),
    ),
    fallback=Indicator("Analysis Results", "No obvious phishing indicators detected in content"),
)
