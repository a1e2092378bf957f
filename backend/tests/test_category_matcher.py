"""Tests for goal-to-category retrieval."""

import pytest

from models.schemas.gap_analysis import CategoryMatch
from models.schemas.skill_search import SearchHit
from services.category_matcher import CategoryMatcher
from services.errors import EmbeddingError, SearchError
from services.vector_index import InMemoryVectorIndex, VectorIndex

from conftest import SKILL_COLLECTION, FailingEmbedder, KeywordEmbedder


def _matcher(embedder, index, limit=5, score_threshold=0.45):
    return CategoryMatcher(
        embedder, index, collection=SKILL_COLLECTION, limit=limit, score_threshold=score_threshold,
    )


class FixedHitsIndex(VectorIndex):
    """Returns canned hits and records the query parameters."""

    def __init__(self, hits):
        self.hits = hits
        self.queries = []

    async def search(self, collection, query_vector, limit, score_threshold=None, query_filter=None):
        self.queries.append((collection, limit, score_threshold))
        return self.hits

    async def ensure_collection(self, collection, vector_size):
        return False

    async def upsert(self, collection, records):
        pass

    async def delete_collection(self, collection):
        pass


class TestCategoryMatcher:
    @pytest.mark.asyncio
    async def test_single_category_goal(self, category_embedder, seeded_index):
        matches = await _matcher(category_embedder, seeded_index).match(
            "I want to get better at web development"
        )
        assert [m.category for m in matches] == ["Web Development"]
        assert matches[0].confidence == pytest.approx(1.0)
        assert category_embedder.calls == ["I want to get better at web development"]

    @pytest.mark.asyncio
    async def test_confidence_is_max_score_per_category(self, category_embedder, seeded_index):
        # The "Embeddings & Vector DBs" description mentions databases,
        # so AI & ML surfaces with a weaker score.
        matches = await _matcher(category_embedder, seeded_index).match("databases")
        assert [m.category for m in matches] == ["Databases", "AI & ML"]
        assert matches[0].confidence == pytest.approx(1.0)
        assert matches[1].confidence == pytest.approx(0.7071, abs=1e-3)

    @pytest.mark.asyncio
    async def test_limit_caps_neighbours_before_grouping(self, category_embedder, seeded_index):
        goal = "web development and databases"

        service = await _matcher(category_embedder, seeded_index, limit=5, score_threshold=0.45).match(goal)
        gap_finder = await _matcher(category_embedder, seeded_index, limit=10, score_threshold=0.4).match(goal)

        assert [m.category for m in service] == ["Web Development"]
        assert [m.category for m in gap_finder] == ["Web Development", "Databases"]

    @pytest.mark.asyncio
    async def test_nothing_above_threshold_is_empty_not_error(self, category_embedder, seeded_index):
        assert await _matcher(category_embedder, seeded_index).match("learn to bake bread") == []

    @pytest.mark.asyncio
    async def test_categories_are_distinct(self):
        index = FixedHitsIndex([
            SearchHit(score=0.9, payload={"category": "Web Development", "skill": "React"}),
            SearchHit(score=0.7, payload={"category": "Databases", "skill": "SQL"}),
            SearchHit(score=0.6, payload={"category": "Web Development", "skill": "Nextjs"}),
            SearchHit(score=0.95, payload={"category": "Databases", "skill": "PostgreSQL"}),
        ])
        matches = await _matcher(KeywordEmbedder(["x"]), index, limit=10, score_threshold=0.4).match("goal")

        assert matches == [
            CategoryMatch(category="Web Development", confidence=0.9),
            CategoryMatch(category="Databases", confidence=0.95),
        ]
        assert index.queries == [(SKILL_COLLECTION, 10, 0.4)]

    @pytest.mark.asyncio
    async def test_hits_without_category_are_ignored(self):
        index = FixedHitsIndex([SearchHit(score=0.9, payload={"skill": "orphan"})])
        assert await _matcher(KeywordEmbedder(["x"]), index).match("goal") == []

    @pytest.mark.asyncio
    async def test_embedding_failure_propagates(self, seeded_index):
        with pytest.raises(EmbeddingError):
            await _matcher(FailingEmbedder(), seeded_index).match("web development")

    @pytest.mark.asyncio
    async def test_search_failure_propagates(self, category_embedder):
        with pytest.raises(SearchError):
            await _matcher(category_embedder, InMemoryVectorIndex()).match("web development")
