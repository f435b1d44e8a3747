class AnalysisError(ValueError):
    """Base class for input the engine refuses to score."""

    code = "analysis_error"

    def to_detail(self) -> dict:
        return {"error": self.code, "message": str(self)}


class InvalidInput(AnalysisError):
    """Empty or whitespace-only submission."""

    code = "invalid_input"


class UnparseableUrl(InvalidInput):
    """URL string from which no hostname can be extracted."""

    code = "unparseable_url"
