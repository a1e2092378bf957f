"""Embed the taxonomy and load it into the skill collection.

Records get ids 1..N in taxonomy order, so seeding the same taxonomy
again overwrites the existing points instead of duplicating them.
"""

import logging

from models.schemas.taxonomy import SkillEmbeddingRecord
from services.embeddings import EmbeddingProvider
from services.taxonomy import Taxonomy
from services.vector_index import VectorIndex

logger = logging.getLogger(__name__)


def skill_content(category: str, skill: str, description: str) -> str:
    """Text that is embedded for one (category, skill) pair."""
    return f"{category}: {skill} - {description}"


async def build_skill_records(
    taxonomy: Taxonomy,
    embedder: EmbeddingProvider,
) -> list[SkillEmbeddingRecord]:
    records: list[SkillEmbeddingRecord] = []
    skill_id = 1

    for category in taxonomy:
        logger.info("Processing category: %s", category.name)
        for skill in category.skills:
            content = skill_content(category.name, skill.name, skill.description)
            records.append(SkillEmbeddingRecord(
                id=skill_id,
                vector=await embedder.embed(content),
                category=category.name,
                skill=skill.name,
                description=skill.description,
                content=content,
            ))
            skill_id += 1
            logger.debug("Processed: %s", skill.name)

    return records


async def seed_taxonomy(
    taxonomy: Taxonomy,
    embedder: EmbeddingProvider,
    index: VectorIndex,
    collection: str = "skill_embeddings",
    vector_size: int = 1536,
    recreate: bool = False,
) -> int:
    """Embed every taxonomy skill and upsert it. Returns the number of records.

    All records are embedded before the collection is touched, so an
    embedding failure leaves the existing collection intact.
    """
    records = await build_skill_records(taxonomy, embedder)

    if recreate:
        await index.delete_collection(collection)
    await index.ensure_collection(collection, vector_size)

    logger.info("Inserting %d skill embeddings into %s", len(records), collection)
    await index.upsert(collection, records)

    logger.info("Seeded %d skills in collection: %s", len(records), collection)
    return len(records)
