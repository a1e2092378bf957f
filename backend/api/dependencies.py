"""Shared dependencies for API routes.

Routes receive the embedding provider, vector index and taxonomy through
FastAPI dependencies, so tests can swap them via ``app.dependency_overrides``.
"""

from functools import lru_cache

from fastapi import Depends

from config import MatchProfile, settings
from services.category_matcher import CategoryMatcher
from services.embeddings import EmbeddingProvider, GeminiEmbeddingProvider
from services.gap_analysis import GapAnalysisEngine
from services.gemini_client import get_client
from services.skill_resolver import HeuristicSkillResolver
from services.skill_search import SkillSearchService
from services.taxonomy import Taxonomy, TaxonomyAligner, get_taxonomy
from services.vector_index import QdrantVectorIndex, VectorIndex


@lru_cache(maxsize=1)
def get_embedding_provider() -> EmbeddingProvider:
    return GeminiEmbeddingProvider(
        get_client(),
        model=settings.embedding_model,
        dimension=settings.embedding_dim,
    )


@lru_cache(maxsize=1)
def get_vector_index() -> VectorIndex:
    return QdrantVectorIndex.from_url(settings.qdrant_url, settings.qdrant_api_key)


def get_skill_taxonomy() -> Taxonomy:
    return get_taxonomy()


def build_gap_engine(
    profile: MatchProfile,
    embedder: EmbeddingProvider,
    index: VectorIndex,
    taxonomy: Taxonomy,
) -> GapAnalysisEngine:
    """Engine wired with the limit/threshold of the given call-site profile."""
    limit, threshold = settings.match_params(profile)
    matcher = CategoryMatcher(
        embedder,
        index,
        collection=settings.skill_collection,
        limit=limit,
        score_threshold=threshold,
    )
    return GapAnalysisEngine(
        matcher,
        TaxonomyAligner(taxonomy),
        HeuristicSkillResolver(),
        alignment_threshold=settings.alignment_threshold,
    )


def get_skill_search(
    embedder: EmbeddingProvider = Depends(get_embedding_provider),
    index: VectorIndex = Depends(get_vector_index),
    taxonomy: Taxonomy = Depends(get_skill_taxonomy),
) -> SkillSearchService:
    return SkillSearchService(embedder, index, taxonomy, collection=settings.skill_collection)
