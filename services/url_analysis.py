import re
from urllib.parse import urlsplit

from services import config
from services.engine import AnalysisResult, RuleEngine, Thresholds
from services.errors import UnparseableUrl
from services.recommendations import URL_RECOMMENDATIONS
from services.rules import URL_CORPUS, UrlSubject

WHITESPACE = re.compile(r"\s")


def parse_url(url: str) -> UrlSubject:
    """
    Split an absolute URL into the pieces the URL corpus looks at.
    Raises UnparseableUrl when no scheme or hostname can be extracted.

    Whitespace is only fatal inside the scheme or authority; spaces in the
    path, query or fragment are left for the browser to percent-encode.
    """
    try:
        parts = urlsplit(url)
        # .hostname is already lower-cased by urlsplit
        hostname = parts.hostname
    except ValueError as exc:
        raise UnparseableUrl(f"could not parse URL: {exc}") from exc

    if WHITESPACE.search(parts.scheme) or WHITESPACE.search(parts.netloc):
        raise UnparseableUrl(f"URL host contains whitespace: {url!r}")

    if not parts.scheme or not hostname:
        raise UnparseableUrl(f"not an absolute URL: {url!r}")

    return UrlSubject(raw=url, lowered=url.lower(), hostname=hostname)


URL_ENGINE = RuleEngine(
    corpus=URL_CORPUS,
    normalize=parse_url,
    thresholds=Thresholds(config.URL_MEDIUM_THRESHOLD, config.URL_HIGH_THRESHOLD),
    recommendations=URL_RECOMMENDATIONS,
)


def analyze_url(url: str) -> AnalysisResult:
    return URL_ENGINE.analyze(url)
