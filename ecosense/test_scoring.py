#!/usr/bin/env python3
"""
Tests for per-sentence scoring and aggregation.

Usage:
    pytest ecosense/test_scoring.py
"""

import pytest

from ecosense.lexicon import Ecosystem
from ecosense.polarity import SentenceSentiment
from ecosense.scoring import (
    score_sentence, sentiment_multiplier, keyword_stem, is_negated,
    find_matched_keywords, content_words,
)
from ecosense.aggregate import aggregate, sharpen, renormalize, sum_scores


def _scores(sentence, **kwargs):
    return {eco: s.score for eco, s in score_sentence(sentence, **kwargs).items()}


# =============================================================================
# Token Helpers
# =============================================================================

def test_keyword_stem_is_plural_tolerant():
    assert keyword_stem('trees') == 'tree'
    assert keyword_stem('Waves') == 'wave'
    assert keyword_stem('grass') == 'grass'
    assert keyword_stem('sea') == 'sea'


def test_matched_keywords_tolerate_plurals():
    assert find_matched_keywords(['tree', 'flower'], ['trees', 'flowers', 'rain']) == ['trees', 'flowers']


def test_is_negated():
    assert is_negated('water', ['water', 'like'])
    assert is_negated('waves', ['wave'])
    assert not is_negated('sea', ['season'])


def test_content_words_drop_filler():
    assert content_words("Bees live in the trees") == ['bees', 'trees']


def test_sentiment_multiplier():
    assert sentiment_multiplier(SentenceSentiment(), [], False) == 0.5
    assert sentiment_multiplier(SentenceSentiment(), ['water'], False) == 1.0
    assert sentiment_multiplier(SentenceSentiment(is_positive=True), [], False) == 1.0
    assert sentiment_multiplier(SentenceSentiment(is_negative=True), [], False) == -1.0
    assert sentiment_multiplier(SentenceSentiment(is_positive=True, is_negative=True),
                                ['water'], True) == -1.0


# =============================================================================
# Keyword Scoring
# =============================================================================

def test_literal_keyword_with_positive_cue():
    scores = score_sentence("Bees live in trees")
    rain = scores[Ecosystem.RAINFOREST]
    assert rain.score == pytest.approx(1.1)
    assert rain.matched_keywords == ('trees',)
    assert rain.sentiment == 1.0
    assert not rain.used_embedding
    for eco in (Ecosystem.DESERT, Ecosystem.OCEAN, Ecosystem.GRASSLAND, Ecosystem.TUNDRA):
        assert scores[eco].score == 0.0


def test_negated_keyword_scores_zero():
    scores = score_sentence("Bees don't like water")
    ocean = scores[Ecosystem.OCEAN]
    assert ocean.negated
    assert ocean.sentiment == -1.0
    assert ocean.score == 0.0
    assert all(s.score == 0.0 for s in scores.values())


def test_negated_habitat_scores_zero():
    for sentence, eco in (("Bees do not live in the desert", Ecosystem.DESERT),
                          ("Zebras don't live in the ocean", Ecosystem.OCEAN)):
        scores = score_sentence(sentence)
        assert scores[eco].negated
        assert scores[eco].sentiment == -1.0
        assert all(s.score == 0.0 for s in scores.values())


def test_neutral_mention_beats_negated_mention():
    negated = _scores("Bees don't like water")[Ecosystem.OCEAN]
    neutral = _scores("There is water here")[Ecosystem.OCEAN]
    assert neutral > negated
    assert neutral == pytest.approx(1.1)


def test_neutral_related_word_is_damped():
    # 'aquatic' is related to ocean keywords but is not one
    ocean = score_sentence("Dolphins are aquatic")[Ecosystem.OCEAN]
    assert ocean.matched_keywords == ()
    assert ocean.keyword_similarity == pytest.approx(0.8)
    assert ocean.score == pytest.approx(0.4)


def test_sentence_without_evidence_scores_zero():
    sims = {eco: 0.9 for eco in Ecosystem}
    scores = score_sentence("Bees are nice", embedding_similarities=sims)
    assert all(s.score == 0.0 for s in scores.values())


def test_every_class_is_present():
    assert set(score_sentence("")) == set(Ecosystem)


# =============================================================================
# Embedding and Hybrid Scoring
# =============================================================================

EMBEDDING_SIMS = {
    Ecosystem.DESERT: 0.1,
    Ecosystem.OCEAN: -0.3,
    Ecosystem.RAINFOREST: 0.5,
    Ecosystem.GRASSLAND: 0.1,
    Ecosystem.TUNDRA: 0.1,
}


def test_embedding_similarity_replaces_keyword_similarity():
    scores = score_sentence("Bees live in trees", embedding_similarities=EMBEDDING_SIMS)
    assert scores[Ecosystem.RAINFOREST].used_embedding
    assert scores[Ecosystem.RAINFOREST].score == pytest.approx(0.5 + 0.1)
    # Negative cosine is clipped
    assert scores[Ecosystem.OCEAN].embedding_similarity == 0.0
    assert scores[Ecosystem.OCEAN].score == 0.0
    assert scores[Ecosystem.DESERT].score == pytest.approx(0.1)


def test_hybrid_blend():
    scores = score_sentence("Bees live in trees", embedding_similarities=EMBEDDING_SIMS,
                            hybrid_weight=0.7)
    rain = scores[Ecosystem.RAINFOREST]
    assert rain.similarity == pytest.approx(0.7 * 0.5 + 0.3 * 1.0)
    assert rain.score == pytest.approx(0.65 + 0.1)


def test_keyword_bonus_is_configurable():
    scores = score_sentence("Bees live in trees", keyword_bonus=0.0)
    assert scores[Ecosystem.RAINFOREST].score == pytest.approx(1.0)


# =============================================================================
# Aggregation
# =============================================================================

def test_sum_scores():
    total = sum_scores([{Ecosystem.OCEAN: 1.0}, {Ecosystem.OCEAN: 0.5, Ecosystem.TUNDRA: 0.2}])
    assert total[Ecosystem.OCEAN] == pytest.approx(1.5)
    assert total[Ecosystem.TUNDRA] == pytest.approx(0.2)
    assert total[Ecosystem.DESERT] == 0.0


def test_sharpen_cubes_fractions():
    raw = {eco: 0.0 for eco in Ecosystem}
    raw[Ecosystem.RAINFOREST] = 2.0
    raw[Ecosystem.OCEAN] = 1.0
    probs = sharpen(raw, 3)
    assert probs[Ecosystem.RAINFOREST] == pytest.approx(8 / 9)
    assert probs[Ecosystem.OCEAN] == pytest.approx(1 / 9)
    assert sum(probs.values()) == pytest.approx(1.0)


def test_sharpen_power_one_is_plain_normalisation():
    raw = {eco: 1.0 for eco in Ecosystem}
    assert all(p == pytest.approx(0.2) for p in sharpen(raw, 1).values())


def test_zero_total_stays_zero():
    zeros = {eco: 0.0 for eco in Ecosystem}
    assert sharpen(zeros) == zeros
    assert renormalize(zeros) == zeros


def test_renormalize():
    probs = renormalize({Ecosystem.OCEAN: 2.0, Ecosystem.DESERT: 2.0})
    assert probs[Ecosystem.OCEAN] == pytest.approx(0.5)
    assert probs[Ecosystem.TUNDRA] == 0.0
    assert sum(probs.values()) == pytest.approx(1.0)


def test_aggregate_counts():
    per_sentence = [score_sentence("Bees live in trees"), score_sentence("Bees don't like water")]
    agg = aggregate(per_sentence)
    assert agg.has_evidence
    assert agg.raw_scores[Ecosystem.RAINFOREST] == pytest.approx(1.1)
    assert agg.match_counts[Ecosystem.RAINFOREST] == 1
    assert agg.match_counts[Ecosystem.OCEAN] == 1
    assert agg.negative_associations[Ecosystem.OCEAN] == 1
    assert agg.probabilities[Ecosystem.RAINFOREST] == pytest.approx(1.0)


def test_aggregate_without_evidence():
    agg = aggregate([score_sentence("Bees don't like water")])
    assert not agg.has_evidence
    assert all(p == 0.0 for p in agg.probabilities.values())
