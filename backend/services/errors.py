"""Failures of the external services the gap engine depends on.

Local heuristic misses (no matching category, no alignment, no skill
match) are normal results and never raise.
"""


class SkillGapError(Exception):
    """Base error; ``stage`` names the pipeline step that failed."""

    stage: str = "unknown"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.stage} failed: {self.message}"


class EmbeddingError(SkillGapError):
    """Embedding provider unreachable, rejected the input, or returned a bad vector."""

    stage = "embedding"


class SearchError(SkillGapError):
    """Vector index unreachable or the query was rejected."""

    stage = "search"
