"""Goal-to-category retrieval over the skill embedding collection."""

import logging

from models.schemas.gap_analysis import CategoryMatch
from services.embeddings import EmbeddingProvider
from services.vector_index import VectorIndex

logger = logging.getLogger(__name__)


class CategoryMatcher:
    """Embeds a goal, finds neighbouring skills, and collapses them to categories.

    Each distinct ``category`` payload appears once, with the highest score
    seen among its neighbours. Categories keep the order in which they first
    appear in the (best-first) neighbour list.
    """

    def __init__(
        self,
        embedder: EmbeddingProvider,
        index: VectorIndex,
        collection: str = "skill_embeddings",
        limit: int = 5,
        score_threshold: float = 0.45,
    ) -> None:
        self.embedder = embedder
        self.index = index
        self.collection = collection
        self.limit = limit
        self.score_threshold = score_threshold

    async def match(self, goal_text: str) -> list[CategoryMatch]:
        vector = await self.embedder.embed(goal_text)
        hits = await self.index.search(
            self.collection,
            vector,
            limit=self.limit,
            score_threshold=self.score_threshold,
        )

        scores: dict[str, float] = {}
        for hit in hits:
            category = hit.payload.get("category")
            if not category:
                continue
            if category not in scores or hit.score > scores[category]:
                scores[category] = hit.score

        if not scores:
            logger.info("No matching categories found for the user goal")
            return []

        return [CategoryMatch(category=c, confidence=s) for c, s in scores.items()]
