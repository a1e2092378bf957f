"""Resolve taxonomy skill names against a user's self-reported skills.

The resolver is heuristic: direct key lookup, then substring containment
and the synonym table. Any other strategy (e.g. embedding-based) can be
dropped in by implementing SkillResolver.
"""

import re
from abc import ABC, abstractmethod
from collections.abc import Mapping

from models.schemas.gap_analysis import ResolvedSkill
from services.skill_synonyms import are_similar

_PUNCTUATION = re.compile(r"[^\w\s]")

SUBSTRING_SCORE = 0.8
SYNONYM_SCORE = 0.9
MATCH_THRESHOLD = 0.7
MIN_OVERLAP_LENGTH = 2
MIN_LENGTH_RATIO = 0.3


def strip_punctuation(text: str) -> str:
    return _PUNCTUATION.sub("", text)


class SkillResolver(ABC):
    """Finds the user-reported skill (and level) that covers a taxonomy skill."""

    @abstractmethod
    def resolve(self, skill_name: str, user_skills: Mapping[str, str]) -> ResolvedSkill | None:
        """Return the matching user skill, or None if the skill is absent."""


class HeuristicSkillResolver(SkillResolver):
    """First-match-wins fuzzy resolver.

    User skills are scanned in insertion order and the first one scoring at
    least MATCH_THRESHOLD is returned, even if a later one would score
    higher. Matched user skills are not consumed: one entry can cover
    several taxonomy skills.
    """

    def resolve(self, skill_name: str, user_skills: Mapping[str, str]) -> ResolvedSkill | None:
        skill_name = strip_punctuation(skill_name)

        if skill_name in user_skills:
            return ResolvedSkill(name=skill_name, level=user_skills[skill_name])

        skill_lower = skill_name.lower()
        for user_skill, level in user_skills.items():
            if self._score(skill_lower, user_skill.lower()) >= MATCH_THRESHOLD:
                return ResolvedSkill(name=user_skill, level=level)

        return None

    @staticmethod
    def _score(skill_lower: str, user_lower: str) -> float:
        score = 0.0

        if user_lower in skill_lower or skill_lower in user_lower:
            shorter = min(len(skill_lower), len(user_lower))
            longer = max(len(skill_lower), len(user_lower))
            # Ignore trivial overlaps such as single letters
            if shorter >= MIN_OVERLAP_LENGTH and shorter / longer >= MIN_LENGTH_RATIO:
                score = SUBSTRING_SCORE

        if are_similar(skill_lower, user_lower):
            score = SYNONYM_SCORE

        return score
