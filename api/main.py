from fastapi import FastAPI, HTTPException, status
from pydantic import BaseModel

from services.email_analysis import EMAIL_ENGINE, analyze_email
from services.errors import AnalysisError
from services.url_analysis import URL_ENGINE, analyze_url

app = FastAPI(title="Phishing Heuristics")


class UrlRequest(BaseModel):
    url: str


class EmailRequest(BaseModel):
    content: str


def _bad_request(exc: AnalysisError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=exc.to_detail(),
    )


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.post("/analyze/url")
async def analyze_url_endpoint(request: UrlRequest):
    """
    Score a single URL. Invalid or unparseable URLs come back as 400
    with {"error": code, "message": ...} in detail.
    """
    try:
        result = analyze_url(request.url)
    except AnalysisError as exc:
        raise _bad_request(exc) from exc
    return result.to_dict()


@app.post("/analyze/email")
async def analyze_email_endpoint(request: EmailRequest):
    try:
        result = analyze_email(request.content)
    except AnalysisError as exc:
        raise _bad_request(exc) from exc
    return result.to_dict()


@app.get("/rules")
async def rules():
    """Corpus metadata for both analyzers. Predicates stay server-side."""
    return {"analyzers": [URL_ENGINE.describe(), EMAIL_ENGINE.describe()]}
