"""Hand-curated skill name variations used by fuzzy skill matching.

Keys are canonical lowercase names; values are informal spellings that
should be treated as the same skill. Extending coverage is a data change
to SKILL_VARIATIONS only.
"""

SKILL_VARIATIONS: dict[str, tuple[str, ...]] = {
    "javascript": ("js", "node.js", "nodejs"),
    "python": ("py",),
    "html/css": ("html", "css"),
    "react": ("react.js", "reactjs"),
    "backend (node/express)": ("node.js", "express.js", "express", "backend"),
    "sql": ("postgresql", "mysql", "sqlite"),
    "git & github": ("git", "github"),
    "docker": ("containerization",),
    "linux/bash": ("linux", "bash", "shell"),
}


def are_similar(skill_a: str, skill_b: str) -> bool:
    """True if the two (already lowercased) names are listed as variations.

    Matches key -> variant in either direction, or two variants under the
    same key.
    """
    for key, variants in SKILL_VARIATIONS.items():
        if key == skill_a and skill_b in variants:
            return True
        if key == skill_b and skill_a in variants:
            return True
        if skill_a in variants and skill_b in variants:
            return True
    return False
