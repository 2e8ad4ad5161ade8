#!/usr/bin/env python3
"""
Tests for graded word similarity and class keyword matching.

Usage:
    pytest ecosense/test_similarity.py
"""

import pytest

from ecosense.lexicon import Ecosystem, ECOSYSTEM_KEYWORDS
from ecosense.similarity import (
    word_similarity, match_class_keywords, best_matches, extract_words,
    EXACT_MATCH, DIRECT_RELATION, INDIRECT_RELATION, SUBSTRING_MATCH,
)


# =============================================================================
# word_similarity
# =============================================================================

def test_exact_match_is_case_insensitive():
    assert word_similarity("Water", "water") == EXACT_MATCH


def test_direct_relation():
    assert word_similarity("trees", "forest") == DIRECT_RELATION
    # Either side may list the other
    assert word_similarity("aquatic", "water") == DIRECT_RELATION


def test_indirect_relation_through_shared_member():
    # 'vine' and 'fruit' both list 'tree' but not each other
    assert word_similarity("vine", "fruit") == INDIRECT_RELATION


def test_substring_needs_four_characters():
    assert word_similarity("deserts", "desert") == SUBSTRING_MATCH
    assert word_similarity("in", "marine") == 0.0
    assert word_similarity("sea", "season") == 0.0


def test_unrelated_words():
    assert word_similarity("bees", "snow") == 0.0


def test_custom_relationship_table():
    table = {'hive': ['honey']}
    assert word_similarity("hive", "honey", relationships=table) == DIRECT_RELATION
    assert word_similarity("trees", "forest", relationships=table) == 0.0


# =============================================================================
# match_class_keywords
# =============================================================================

def test_literal_keyword_scores_one():
    rainforest = ECOSYSTEM_KEYWORDS[Ecosystem.RAINFOREST]
    assert match_class_keywords(["trees"], rainforest) == pytest.approx(1.0)


def test_unmatched_words_do_not_dilute_mean():
    rainforest = ECOSYSTEM_KEYWORDS[Ecosystem.RAINFOREST]
    assert match_class_keywords(["bees", "trees"], rainforest) == pytest.approx(1.0)


def test_max_and_mean_weighting():
    # best similarities 1.0 and 0.6 -> 0.6 * 1.0 + 0.4 * 0.8
    score = match_class_keywords(["fruit", "vine"], ["fruit"])
    assert score == pytest.approx(0.6 * 1.0 + 0.4 * 0.8)


def test_no_match_scores_zero():
    assert match_class_keywords([], ["water"]) == 0.0
    assert match_class_keywords(["in", "the"], ECOSYSTEM_KEYWORDS[Ecosystem.OCEAN]) == 0.0


def test_best_matches_reports_keyword():
    matches = best_matches(["trees", "bees"], ECOSYSTEM_KEYWORDS[Ecosystem.RAINFOREST])
    assert matches == {"trees": ("trees", 1.0)}


def test_extract_words_dedups_in_order():
    assert extract_words(["Water", "sand", "water"]) == ["water", "sand"]
