"""
Fuzzy ranking for the skill palette.

Substring hits always outrank subsequence hits: a substring scores in
[100, 150), while a subsequence needs a long consecutive run to get there.
"""

from typing import List, Sequence, Tuple

from skill_palette.skills.models import Skill

DESCRIPTION_WEIGHT = 0.8


def fuzzy_score(query: str, text: str) -> float:
    """Score how well ``query`` matches ``text`` (case-insensitive).

    Returns:
        ``100 + len(query) / len(text) * 50`` for a substring match,
        otherwise the subsequence score (each matched character adds
        ``10 + bonus``; the bonus grows by 5 per consecutive match and
        resets on a miss), or 0 if ``query`` is not a subsequence.
    """
    lower_query = query.lower()
    lower_text = text.lower()

    if not lower_text:
        return 0.0

    if lower_query in lower_text:
        return 100 + (len(lower_query) / len(lower_text)) * 50

    score = 0.0
    query_index = 0
    consecutive_bonus = 0

    for char in lower_text:
        if query_index == len(lower_query):
            break
        if char == lower_query[query_index]:
            score += 10 + consecutive_bonus
            consecutive_bonus += 5
            query_index += 1
        else:
            consecutive_bonus = 0

    return score if query_index == len(lower_query) else 0.0


def score_skill(query: str, skill: Skill) -> float:
    """Best of the name score and the weighted description score."""
    return max(
        fuzzy_score(query, skill.name),
        fuzzy_score(query, skill.description) * DESCRIPTION_WEIGHT,
    )


def rank_skills(skills: Sequence[Skill], query: str) -> List[Tuple[Skill, float]]:
    """Score, drop non-matches and order by descending score.

    The sort is stable, so equal scores keep catalog order.
    """
    scored = [(skill, score_skill(query, skill)) for skill in skills]
    scored = [item for item in scored if item[1] > 0]
    scored.sort(key=lambda item: item[1], reverse=True)
    return scored


def filter_skills(skills: Sequence[Skill], query: str) -> List[Skill]:
    """Filter the catalog for the palette.

    A blank query returns the catalog unchanged.
    """
    if not query.strip():
        return list(skills)
    return [skill for skill, _ in rank_skills(skills, query)]
