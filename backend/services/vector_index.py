"""Nearest-neighbour index over skill embeddings.

QdrantVectorIndex is the production binding; InMemoryVectorIndex keeps
vectors in a NumPy matrix and serves tests and offline runs with the same
cosine-score semantics.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence

import numpy as np
from qdrant_client import AsyncQdrantClient
from qdrant_client.models import (
    Distance,
    FieldCondition,
    Filter,
    MatchValue,
    PointStruct,
    VectorParams,
)

from models.schemas.skill_search import SearchHit
from models.schemas.taxonomy import SkillEmbeddingRecord
from services.errors import SearchError

logger = logging.getLogger(__name__)


class VectorIndex(ABC):
    """Collection-oriented vector search service."""

    @abstractmethod
    async def search(
        self,
        collection: str,
        query_vector: Sequence[float],
        limit: int,
        score_threshold: float | None = None,
        query_filter: Mapping[str, object] | None = None,
    ) -> list[SearchHit]:
        """Return up to ``limit`` hits scoring at least ``score_threshold``, best first.

        ``query_filter`` maps payload keys to values that must match exactly.
        Raises SearchError on failure.
        """

    @abstractmethod
    async def ensure_collection(self, collection: str, vector_size: int) -> bool:
        """Create the collection if missing. Returns True when it was created."""

    @abstractmethod
    async def upsert(self, collection: str, records: Sequence[SkillEmbeddingRecord]) -> None:
        """Insert or overwrite records by id."""

    @abstractmethod
    async def delete_collection(self, collection: str) -> None:
        """Drop the collection and all of its points."""


class QdrantVectorIndex(VectorIndex):
    def __init__(self, client: AsyncQdrantClient) -> None:
        self._client = client

    @classmethod
    def from_url(cls, url: str, api_key: str = "") -> "QdrantVectorIndex":
        return cls(AsyncQdrantClient(url=url, api_key=api_key or None))

    async def search(
        self,
        collection: str,
        query_vector: Sequence[float],
        limit: int,
        score_threshold: float | None = None,
        query_filter: Mapping[str, object] | None = None,
    ) -> list[SearchHit]:
        try:
            response = await self._client.query_points(
                collection_name=collection,
                query=list(query_vector),
                limit=limit,
                score_threshold=score_threshold,
                query_filter=_to_qdrant_filter(query_filter),
                with_payload=True,
            )
        except Exception as e:
            logger.error("Qdrant search on %s failed: %s", collection, e)
            raise SearchError(str(e)) from e

        return [SearchHit(score=p.score, payload=p.payload or {}) for p in response.points]

    async def ensure_collection(self, collection: str, vector_size: int) -> bool:
        try:
            if await self._client.collection_exists(collection):
                logger.info("Collection %s already exists", collection)
                return False
            await self._client.create_collection(
                collection_name=collection,
                vectors_config=VectorParams(size=vector_size, distance=Distance.COSINE),
            )
        except Exception as e:
            raise SearchError(f"could not ensure collection {collection}: {e}") from e
        logger.info("Created collection %s (size=%d, cosine)", collection, vector_size)
        return True

    async def upsert(self, collection: str, records: Sequence[SkillEmbeddingRecord]) -> None:
        points = [
            PointStruct(id=r.id, vector=r.vector, payload=r.payload())
            for r in records
        ]
        try:
            await self._client.upsert(collection_name=collection, points=points, wait=True)
        except Exception as e:
            raise SearchError(f"upsert into {collection} failed: {e}") from e

    async def delete_collection(self, collection: str) -> None:
        try:
            await self._client.delete_collection(collection_name=collection)
        except Exception as e:
            raise SearchError(f"could not delete collection {collection}: {e}") from e
        logger.info("Deleted collection %s", collection)


def _to_qdrant_filter(query_filter: Mapping[str, object] | None) -> Filter | None:
    if not query_filter:
        return None
    return Filter(
        must=[
            FieldCondition(key=key, match=MatchValue(value=value))
            for key, value in query_filter.items()
        ]
    )


class InMemoryVectorIndex(VectorIndex):
    """Brute-force cosine search; collections live in process memory."""

    def __init__(self) -> None:
        self._collections: dict[str, dict[int, tuple[np.ndarray, dict]]] = {}
        self._sizes: dict[str, int] = {}

    async def search(
        self,
        collection: str,
        query_vector: Sequence[float],
        limit: int,
        score_threshold: float | None = None,
        query_filter: Mapping[str, object] | None = None,
    ) -> list[SearchHit]:
        if collection not in self._collections:
            raise SearchError(f"collection {collection} not found")

        entries = [
            (vec, payload)
            for vec, payload in self._collections[collection].values()
            if _payload_matches(payload, query_filter)
        ]
        if not entries:
            return []

        q = np.asarray(query_vector, dtype="float32").reshape(-1,)
        if q.shape[0] != self._sizes[collection]:
            raise SearchError(
                f"query has {q.shape[0]} dims, collection expects {self._sizes[collection]}"
            )
        q = q / (np.linalg.norm(q) + 1e-12)

        matrix = np.vstack([vec for vec, _ in entries])  # rows are pre-normalized
        sims = matrix @ q
        order = np.argsort(-sims, kind="stable")

        hits: list[SearchHit] = []
        for i in order:
            score = float(sims[i])
            if score_threshold is not None and score < score_threshold:
                break
            hits.append(SearchHit(score=score, payload=dict(entries[i][1])))
            if len(hits) >= limit:
                break
        return hits

    async def ensure_collection(self, collection: str, vector_size: int) -> bool:
        if collection in self._collections:
            return False
        self._collections[collection] = {}
        self._sizes[collection] = vector_size
        return True

    async def upsert(self, collection: str, records: Sequence[SkillEmbeddingRecord]) -> None:
        if collection not in self._collections:
            raise SearchError(f"collection {collection} not found")
        size = self._sizes[collection]
        points = self._collections[collection]
        for r in records:
            vec = np.asarray(r.vector, dtype="float32")
            if vec.shape != (size,):
                raise SearchError(f"record {r.id} has {vec.size} dims, expected {size}")
            points[r.id] = (vec / (np.linalg.norm(vec) + 1e-12), r.payload())

    async def delete_collection(self, collection: str) -> None:
        self._collections.pop(collection, None)
        self._sizes.pop(collection, None)

    def count(self, collection: str) -> int:
        return len(self._collections.get(collection, {}))


def _payload_matches(payload: dict, query_filter: Mapping[str, object] | None) -> bool:
    if not query_filter:
        return True
    return all(payload.get(key) == value for key, value in query_filter.items())
