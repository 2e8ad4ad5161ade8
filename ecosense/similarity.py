#!/usr/bin/env python3
"""
Word Similarity: Graded Lexical Relatedness
===========================================

A lightweight stand-in for WordNet-style relatedness, built on the
curated SEMANTIC_RELATIONSHIPS table. Used as the semantic fallback when
a sentence does not literally contain a class keyword, and whenever no
embedding provider is available.

Similarity tiers:
  - 1.0  exact match (case-insensitive)
  - 0.8  direct relation (one word lists the other)
  - 0.6  indirect relation (relation lists share a member)
  - 0.4  substring containment, both words >= 4 characters
  - 0.0  otherwise

The length guard on substrings keeps short words from matching inside
unrelated keywords ("in" is not "marine").

Basic Usage:
    >>> from ecosense.similarity import word_similarity, match_class_keywords
    >>> word_similarity("trees", "forest")
    0.8
    >>> match_class_keywords(["trees"], ["trees", "forest", "rain"])
    1.0

License: MIT
"""

from typing import Dict, Iterable, List, Sequence

from .lexicon import SEMANTIC_RELATIONSHIPS

__all__ = [
    'EXACT_MATCH', 'DIRECT_RELATION', 'INDIRECT_RELATION', 'SUBSTRING_MATCH',
    'MIN_SUBSTRING_LENGTH',
    'word_similarity',
    'match_class_keywords',
    'best_matches',
    'extract_words',
]

EXACT_MATCH = 1.0
DIRECT_RELATION = 0.8
INDIRECT_RELATION = 0.6
SUBSTRING_MATCH = 0.4
MIN_SUBSTRING_LENGTH = 4

# Weighting of the strongest match against the breadth of weaker ones
MAX_WEIGHT = 0.6
MEAN_WEIGHT = 0.4


def word_similarity(
    word_a: str,
    word_b: str,
    relationships: Dict[str, List[str]] = None,
    verbose: bool = False
) -> float:
    """
    Graded similarity between two words.

    Args:
        word_a: First word
        word_b: Second word
        relationships: Relationship table (default: SEMANTIC_RELATIONSHIPS)
        verbose: Print which tier matched

    Returns:
        Similarity in [0, 1]
    """
    relationships = SEMANTIC_RELATIONSHIPS if relationships is None else relationships
    a = word_a.lower()
    b = word_b.lower()

    if a == b:
        if verbose:
            print(f"  '{a}' == '{b}' -> {EXACT_MATCH}")
        return EXACT_MATCH

    related_a = relationships.get(a, [])
    related_b = relationships.get(b, [])

    if b in related_a or a in related_b:
        if verbose:
            print(f"  '{a}' related to '{b}' -> {DIRECT_RELATION}")
        return DIRECT_RELATION

    shared = [w for w in related_a if w in related_b]
    if shared:
        if verbose:
            print(f"  '{a}' indirectly related to '{b}' via {shared} -> {INDIRECT_RELATION}")
        return INDIRECT_RELATION

    if (len(a) >= MIN_SUBSTRING_LENGTH and len(b) >= MIN_SUBSTRING_LENGTH
            and (a in b or b in a)):
        if verbose:
            print(f"  '{a}' contains '{b}' (or vice versa) -> {SUBSTRING_MATCH}")
        return SUBSTRING_MATCH

    return 0.0


def best_matches(
    user_words: Iterable[str],
    class_keywords: Sequence[str],
    relationships: Dict[str, List[str]] = None
) -> Dict[str, tuple]:
    """
    Best-matching keyword for each user word.

    Returns:
        Dict mapping user word -> (keyword, similarity); words with no
        match at all are omitted
    """
    result = {}
    for word in user_words:
        best_keyword, best_sim = None, 0.0
        for keyword in class_keywords:
            sim = word_similarity(word, keyword, relationships)
            if sim > best_sim:
                best_keyword, best_sim = keyword, sim
                if sim == EXACT_MATCH:
                    break
        if best_sim > 0:
            result[word] = (best_keyword, best_sim)
    return result


def match_class_keywords(
    user_words: Sequence[str],
    class_keywords: Sequence[str],
    relationships: Dict[str, List[str]] = None,
    verbose: bool = False
) -> float:
    """
    Semantic match between a bag of user words and one class's keywords.

    Each user word contributes its best similarity against any keyword.
    The score rewards one strong match while crediting breadth:

        0.6 * max(best) + 0.4 * mean(best > 0)

    Args:
        user_words: Tokens from one sentence
        class_keywords: Keyword list of one class
        relationships: Relationship table (default: SEMANTIC_RELATIONSHIPS)
        verbose: Print per-word best matches

    Returns:
        Score in [0, 1]; 0 if no word matched anything
    """
    matches = best_matches(user_words, class_keywords, relationships)

    if not matches:
        if verbose:
            print("  No semantic matches found")
        return 0.0

    sims = [sim for _, sim in matches.values()]
    max_sim = max(sims)
    mean_sim = sum(sims) / len(sims)
    score = MAX_WEIGHT * max_sim + MEAN_WEIGHT * mean_sim

    if verbose:
        for word, (keyword, sim) in matches.items():
            print(f"  Best match for '{word}': '{keyword}' ({sim})")
        print(f"  max={max_sim:.2f}, mean={mean_sim:.3f} -> {score:.3f}")

    return score


def extract_words(descriptors: Iterable[str]) -> List[str]:
    """Unique lowercased words, in first-seen order."""
    return list(dict.fromkeys(w.lower() for w in descriptors))
