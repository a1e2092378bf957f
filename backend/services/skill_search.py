"""Semantic search over the skill embedding collection."""

import logging

from models.schemas.skill_search import CategorySkillResult, SkillSearchResult
from services.embeddings import EmbeddingProvider
from services.taxonomy import Taxonomy
from services.vector_index import VectorIndex

logger = logging.getLogger(__name__)


class SkillSearchService:
    def __init__(
        self,
        embedder: EmbeddingProvider,
        index: VectorIndex,
        taxonomy: Taxonomy,
        collection: str = "skill_embeddings",
    ) -> None:
        self.embedder = embedder
        self.index = index
        self.taxonomy = taxonomy
        self.collection = collection

    async def search_similar_skills(
        self,
        query: str,
        limit: int = 10,
        score_threshold: float = 0.3,
    ) -> list[SkillSearchResult]:
        """Rank taxonomy skills by semantic similarity to ``query``."""
        logger.info("Searching for skills similar to: %r", query)
        vector = await self.embedder.embed(query)
        hits = await self.index.search(
            self.collection, vector, limit=limit, score_threshold=score_threshold,
        )
        logger.info("Found %d similar skills", len(hits))

        return [
            SkillSearchResult(
                rank=rank,
                skill=hit.payload.get("skill", ""),
                category=hit.payload.get("category", ""),
                description=hit.payload.get("description", ""),
                similarity_score=hit.score,
                content=hit.payload.get("content", ""),
            )
            for rank, hit in enumerate(hits, start=1)
        ]

    async def search_skills_in_category(
        self,
        category: str,
        query: str,
        limit: int = 5,
    ) -> list[CategorySkillResult]:
        """Like search_similar_skills, restricted to one category and unthresholded."""
        vector = await self.embedder.embed(query)
        hits = await self.index.search(
            self.collection, vector, limit=limit, query_filter={"category": category},
        )
        return [
            CategorySkillResult(
                skill=hit.payload.get("skill", ""),
                description=hit.payload.get("description", ""),
                similarity_score=hit.score,
            )
            for hit in hits
        ]

    def list_categories(self) -> list[str]:
        return sorted(set(self.taxonomy.category_names()))
