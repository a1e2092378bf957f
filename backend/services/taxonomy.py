"""Static skill taxonomy: loading and alignment of detected category labels.

The taxonomy is the only source of skill names for gap analysis. It is
loaded once per process and never mutated.
"""

import json
import logging
from collections.abc import Iterator
from functools import lru_cache
from pathlib import Path

from pydantic import TypeAdapter

from config import settings
from models.schemas.gap_analysis import TaxonomyAlignment
from models.schemas.taxonomy import TaxonomyCategory
from services.similarity import string_similarity

logger = logging.getLogger(__name__)

_categories_adapter = TypeAdapter(list[TaxonomyCategory])


class Taxonomy:
    """Ordered, read-only collection of taxonomy categories."""

    def __init__(self, categories: list[TaxonomyCategory] | tuple[TaxonomyCategory, ...]) -> None:
        self._categories = tuple(categories)
        self._by_name = {c.name: c for c in self._categories}

    @property
    def categories(self) -> tuple[TaxonomyCategory, ...]:
        return self._categories

    def category_names(self) -> list[str]:
        return [c.name for c in self._categories]

    def get(self, name: str) -> TaxonomyCategory | None:
        return self._by_name.get(name)

    def skill_count(self) -> int:
        return sum(len(c.skills) for c in self._categories)

    def __iter__(self) -> Iterator[TaxonomyCategory]:
        return iter(self._categories)

    def __len__(self) -> int:
        return len(self._categories)


def load_taxonomy(path: str | Path) -> Taxonomy:
    """Load and validate a taxonomy JSON file.

    Raises ValueError on duplicate category names, or duplicate skill
    names within one category.
    """
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    categories = _categories_adapter.validate_python(raw)

    seen: set[str] = set()
    for category in categories:
        if category.name in seen:
            raise ValueError(f"Duplicate taxonomy category: {category.name}")
        seen.add(category.name)

        skill_names = [s.name for s in category.skills]
        if len(skill_names) != len(set(skill_names)):
            raise ValueError(f"Duplicate skill name in category: {category.name}")

    logger.info("Loaded taxonomy from %s: %d categories", path, len(categories))
    return Taxonomy(categories)


@lru_cache(maxsize=1)
def get_taxonomy() -> Taxonomy:
    """Process-wide taxonomy from ``settings.taxonomy_path``."""
    return load_taxonomy(settings.taxonomy_path)


class TaxonomyAligner:
    """Snaps a free-text category label onto the closest taxonomy category."""

    def __init__(self, taxonomy: Taxonomy) -> None:
        self.taxonomy = taxonomy

    def align(self, detected_category: str) -> TaxonomyAlignment:
        # Strictly greater: the first category reaching the max score wins
        best: TaxonomyCategory | None = None
        best_score = 0.0
        for category in self.taxonomy:
            score = string_similarity(detected_category, category.name)
            if score > best_score:
                best = category
                best_score = score
        return TaxonomyAlignment(category=best, similarity=best_score)
