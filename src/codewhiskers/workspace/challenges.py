"""
Fixed challenge tables for the learning path.

Improvement areas map to per-skill-level challenge lists and to a cosmetic
character. Strength names map to the area used for the stretch item.

codewhiskers/src/codewhiskers/workspace/challenges.py
"""

from typing import Dict, List, Optional, Tuple

from ..models import CharacterTag, SkillLevel

__all__ = [
    "CODE_COMPLEXITY",
    "DEBUGGING_PRACTICES",
    "CODE_DOCUMENTATION",
    "MODERN_FEATURES",
    "LEARNING_CHALLENGES",
    "CHARACTERS",
    "DEFAULT_CHARACTER",
    "challenges_for",
    "character_for",
    "next_skill_level",
    "stretch_area_for",
]

CODE_COMPLEXITY = "Code Complexity"
DEBUGGING_PRACTICES = "Debugging Practices"
CODE_DOCUMENTATION = "Code Documentation"
MODERN_FEATURES = "Modern Language Features"

LEARNING_CHALLENGES: Dict[str, Dict[SkillLevel, Tuple[str, ...]]] = {
    CODE_COMPLEXITY: {
        SkillLevel.BEGINNER: ("Refactor a simple function", "Extract helper methods"),
        SkillLevel.INTERMEDIATE: ("Apply single responsibility principle", "Use pure functions"),
        SkillLevel.ADVANCED: ("Implement design patterns", "Apply functional programming concepts"),
    },
    DEBUGGING_PRACTICES: {
        SkillLevel.BEGINNER: ("Use breakpoints instead of console.log", "Debug with VS Code tools"),
        SkillLevel.INTERMEDIATE: ("Create reusable debugging utilities", "Implement error boundaries"),
        SkillLevel.ADVANCED: ("Write unit tests for debugging", "Implement logging strategy"),
    },
    CODE_DOCUMENTATION: {
        SkillLevel.BEGINNER: ("Add function comments", "Document public APIs"),
        SkillLevel.INTERMEDIATE: ("Generate documentation", "Create README files"),
        SkillLevel.ADVANCED: ("Implement style guides", "Create architecture diagrams"),
    },
    MODERN_FEATURES: {
        SkillLevel.BEGINNER: ("Use template literals", "Apply array methods"),
        SkillLevel.INTERMEDIATE: ("Implement async/await", "Use destructuring"),
        SkillLevel.ADVANCED: ("Apply advanced patterns", "Use newest language features"),
    },
}

CHARACTERS: Dict[str, CharacterTag] = {
    CODE_COMPLEXITY: CharacterTag("Professor Paws", "Wise and methodical", "cats/professor.svg"),
    DEBUGGING_PRACTICES: CharacterTag(
        "Detective Whiskers", "Curious and thorough", "cats/detective.svg"
    ),
    CODE_DOCUMENTATION: CharacterTag("Scribe Kitty", "Organized and meticulous", "cats/scribe.svg"),
    MODERN_FEATURES: CharacterTag("Tech Tabby", "Innovative and playful", "cats/tech.svg"),
}

DEFAULT_CHARACTER = CharacterTag("Coding Kitty", "Friendly and helpful", "cats/default.svg")

# Idiom-cluster strengths stretch into modern features; language strengths
# ("<Language> Development") stretch into code structure.
_CLUSTER_STRETCH = {
    "Modern JavaScript": MODERN_FEATURES,
    "React Development": MODERN_FEATURES,
    "Python Idioms": MODERN_FEATURES,
    "Java Modern Features": MODERN_FEATURES,
    "C# Modern Features": MODERN_FEATURES,
}

_NEXT_LEVEL = {
    SkillLevel.BEGINNER: SkillLevel.INTERMEDIATE,
    SkillLevel.INTERMEDIATE: SkillLevel.ADVANCED,
    SkillLevel.ADVANCED: SkillLevel.ADVANCED,
}


def challenges_for(area: str, level: SkillLevel) -> List[str]:
    return list(LEARNING_CHALLENGES.get(area, {}).get(level, ()))


def character_for(area: str) -> CharacterTag:
    return CHARACTERS.get(area, DEFAULT_CHARACTER)


def next_skill_level(level: SkillLevel) -> SkillLevel:
    """The level above ``level``; advanced stays advanced."""
    return _NEXT_LEVEL[level]


def stretch_area_for(strength: str) -> Optional[str]:
    """Improvement area whose next-level challenge suits a given strength."""
    if strength in _CLUSTER_STRETCH:
        return _CLUSTER_STRETCH[strength]
    for area in LEARNING_CHALLENGES:
        if area in strength:
            return area
    if strength.endswith(" Development"):
        return CODE_COMPLEXITY
    return None
