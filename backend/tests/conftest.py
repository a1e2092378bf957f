"""Shared test configuration, fakes and fixtures."""

import pytest
import pytest_asyncio

from models.schemas.gap_analysis import CategoryMatch
from models.schemas.taxonomy import TaxonomyCategory, TaxonomySkill
from services.embeddings import EmbeddingProvider
from services.errors import EmbeddingError
from services.taxonomy import Taxonomy, get_taxonomy
from services.taxonomy_seeder import seed_taxonomy
from services.vector_index import InMemoryVectorIndex

SKILL_COLLECTION = "skill_embeddings"


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: needs live Gemini and Qdrant services"
    )


class KeywordEmbedder(EmbeddingProvider):
    """Deterministic embedder: one axis per keyword, valued by occurrence count.

    With the taxonomy's category names as keywords, every seeded record
    "<category>: <skill> - <description>" lands on its category's axis.
    """

    def __init__(self, keywords: list[str]) -> None:
        self.keywords = [k.lower() for k in keywords]
        self.dimension = len(self.keywords)
        self.calls: list[str] = []

    async def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        lower = text.lower()
        return [float(lower.count(k)) for k in self.keywords]


class FailingEmbedder(EmbeddingProvider):
    async def embed(self, text: str) -> list[float]:
        raise EmbeddingError("provider timed out")


class StaticMatcher:
    """Stands in for CategoryMatcher with a fixed answer."""

    def __init__(self, matches: list[CategoryMatch]) -> None:
        self.matches = matches
        self.goals: list[str] = []

    async def match(self, goal_text: str) -> list[CategoryMatch]:
        self.goals.append(goal_text)
        return list(self.matches)


@pytest.fixture
def taxonomy() -> Taxonomy:
    return get_taxonomy()


@pytest.fixture
def web_taxonomy() -> Taxonomy:
    return Taxonomy([
        TaxonomyCategory(
            name="Web Development",
            skills=(
                TaxonomySkill(name="HTML and CSS", description="Static pages and styling."),
                TaxonomySkill(name="React", description="Component-based UIs."),
            ),
        ),
    ])


@pytest.fixture
def category_embedder(taxonomy) -> KeywordEmbedder:
    return KeywordEmbedder(taxonomy.category_names())


@pytest_asyncio.fixture
async def seeded_index(taxonomy, category_embedder) -> InMemoryVectorIndex:
    """In-memory skill collection seeded from the default taxonomy."""
    index = InMemoryVectorIndex()
    await seed_taxonomy(
        taxonomy,
        category_embedder,
        index,
        collection=SKILL_COLLECTION,
        vector_size=category_embedder.dimension,
    )
    category_embedder.calls.clear()
    return index
