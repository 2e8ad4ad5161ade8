#!/usr/bin/env python3
"""
Aggregation and Sharpening
==========================

Per-sentence class scores are summed element-wise into one raw vector,
turned into fractions of the total, raised to a sharpening power and
renormalised:

    p_i = (s_i / S) ** k / sum_j (s_j / S) ** k

With k = 3, the leading class gains at the expense of weak competitors
while the distribution stays a distribution. An all-zero raw vector is
no evidence and stays all-zero; it is never spread uniformly.

License: MIT
"""

from dataclasses import dataclass, field
from typing import Dict, Mapping, Sequence

from .lexicon import Ecosystem
from .scoring import SentenceScore, empty_vector

__all__ = [
    'DEFAULT_SHARPENING_POWER',
    'Aggregate',
    'sum_scores',
    'sharpen',
    'renormalize',
    'aggregate',
]

DEFAULT_SHARPENING_POWER = 3


@dataclass
class Aggregate:
    """Summed evidence across all sentences."""
    raw_scores: Dict[Ecosystem, float] = field(default_factory=empty_vector)
    probabilities: Dict[Ecosystem, float] = field(default_factory=empty_vector)
    match_counts: Dict[Ecosystem, int] = field(
        default_factory=lambda: {eco: 0 for eco in Ecosystem})
    negative_associations: Dict[Ecosystem, int] = field(
        default_factory=lambda: {eco: 0 for eco in Ecosystem})

    @property
    def has_evidence(self) -> bool:
        return any(v > 0 for v in self.raw_scores.values())


def sum_scores(vectors: Sequence[Mapping[Ecosystem, float]]) -> Dict[Ecosystem, float]:
    """Element-wise sum of ClassScoreVectors."""
    total = empty_vector()
    for vec in vectors:
        for eco in Ecosystem:
            total[eco] += vec.get(eco, 0.0)
    return total


def sharpen(
    raw_scores: Mapping[Ecosystem, float],
    power: float = DEFAULT_SHARPENING_POWER
) -> Dict[Ecosystem, float]:
    """
    Normalise raw scores into a sharpened distribution.

    Args:
        raw_scores: Non-negative score per class
        power: Sharpening exponent (> 0; 1 means plain normalisation)

    Returns:
        Probability per class; all zeros if the scores sum to zero
    """
    total = sum(raw_scores.values())
    if total <= 0:
        return empty_vector()

    powered = {eco: (raw_scores[eco] / total) ** power for eco in Ecosystem}
    powered_total = sum(powered.values())
    if powered_total <= 0:
        return empty_vector()
    return {eco: powered[eco] / powered_total for eco in Ecosystem}


def renormalize(probabilities: Mapping[Ecosystem, float]) -> Dict[Ecosystem, float]:
    """Divide by the sum; an all-zero vector is returned unchanged."""
    total = sum(probabilities.values())
    if total <= 0:
        return {eco: float(probabilities.get(eco, 0.0)) for eco in Ecosystem}
    return {eco: probabilities.get(eco, 0.0) / total for eco in Ecosystem}


def aggregate(
    sentence_scores: Sequence[Mapping[Ecosystem, SentenceScore]],
    power: float = DEFAULT_SHARPENING_POWER
) -> Aggregate:
    """
    Combine per-sentence scores into raw totals and probabilities.

    Args:
        sentence_scores: One {Ecosystem: SentenceScore} dict per sentence
        power: Sharpening exponent

    Returns:
        Aggregate with raw scores, probabilities, and per-class counts of
        keyword matches and negated mentions
    """
    result = Aggregate()
    result.raw_scores = sum_scores(
        [{eco: s.score for eco, s in scores.items()} for scores in sentence_scores])

    for scores in sentence_scores:
        for eco, s in scores.items():
            result.match_counts[eco] += len(s.matched_keywords)
            if s.negated:
                result.negative_associations[eco] += 1

    result.probabilities = sharpen(result.raw_scores, power)
    return result
