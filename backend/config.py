import os
from enum import Enum
from pathlib import Path

from pydantic_settings import BaseSettings

BASE_DIR = Path(__file__).resolve().parent


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class MatchProfile(str, Enum):
    """Call-site contexts that query the category index with different limits."""
    gap_finder = "gap_finder"
    service = "service"


class Settings(BaseSettings):
    gemini_api_key: str = ""
    embedding_model: str = "gemini-embedding-001"
    embedding_dim: int = 1536
    summary_model: str = "gemini-2.5-flash"

    qdrant_url: str = "http://localhost:6333"
    qdrant_api_key: str = ""
    skill_collection: str = "skill_embeddings"

    taxonomy_path: str = str(BASE_DIR / "data" / "skill_taxonomy.json")

    # Category matching: standalone gap finder vs integrated service
    gap_finder_match_limit: int = 10
    gap_finder_score_threshold: float = 0.4
    service_match_limit: int = 5
    service_score_threshold: float = 0.45
    alignment_threshold: float = 0.7

    skill_search_limit: int = 10
    skill_search_score_threshold: float = 0.3

    max_goal_length: int = 2000
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    debug: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "protected_namespaces": ("settings_",)}

    def match_params(self, profile: MatchProfile) -> tuple[int, float]:
        """Return (limit, score_threshold) for a category-match call site."""
        if profile == MatchProfile.gap_finder:
            return self.gap_finder_match_limit, self.gap_finder_score_threshold
        return self.service_match_limit, self.service_score_threshold


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
