#!/usr/bin/env python3
"""Seed the skill taxonomy into the vector index.

Run from the backend/ directory:
    python seed_taxonomy.py
    python seed_taxonomy.py --recreate   # drop and rebuild the collection

Requires GEMINI_API_KEY and a reachable QDRANT_URL.
"""

import argparse
import asyncio
import logging
import sys

from config import settings
from services import gemini_client
from services.embeddings import DOCUMENT_TASK, GeminiEmbeddingProvider
from services.errors import SkillGapError
from services.taxonomy import load_taxonomy
from services.taxonomy_seeder import seed_taxonomy
from services.vector_index import QdrantVectorIndex

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
logger = logging.getLogger(__name__)


async def main(taxonomy_path: str, collection: str, recreate: bool) -> int:
    taxonomy = load_taxonomy(taxonomy_path)
    embedder = GeminiEmbeddingProvider(
        gemini_client.get_client(),
        model=settings.embedding_model,
        dimension=settings.embedding_dim,
        task_type=DOCUMENT_TASK,
    )
    index = QdrantVectorIndex.from_url(settings.qdrant_url, settings.qdrant_api_key)

    logger.info("Starting skill taxonomy seeding (%d skills)", taxonomy.skill_count())
    return await seed_taxonomy(
        taxonomy,
        embedder,
        index,
        collection=collection,
        vector_size=settings.embedding_dim,
        recreate=recreate,
    )


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed skill taxonomy embeddings")
    parser.add_argument("--taxonomy", default=settings.taxonomy_path)
    parser.add_argument("--collection", default=settings.skill_collection)
    parser.add_argument("--recreate", action="store_true", help="Delete the collection first")
    args = parser.parse_args()

    try:
        asyncio.run(main(args.taxonomy, args.collection, args.recreate))
    except SkillGapError as e:
        logger.error("Seeding failed: %s", e)
        sys.exit(1)
