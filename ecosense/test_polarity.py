#!/usr/bin/env python3
"""
Tests for sentence sentiment and per-word abundance.

Usage:
    pytest ecosense/test_polarity.py
"""

from ecosense.polarity import (
    HIGH, LOW,
    analyze_sentiment, determine_sentiment_abundance, abundance_color,
    contains_phrase, normalize_text,
)


# =============================================================================
# Sentence Sentiment
# =============================================================================

def test_negation_phrase_scopes_following_words():
    sentiment = analyze_sentiment("Bees don't like water")
    assert sentiment.is_negative
    assert sentiment.negated_words == ['water', 'like']


def test_positive_sentence():
    sentiment = analyze_sentiment("Bees live in trees")
    assert sentiment.is_positive
    assert not sentiment.is_negative
    assert sentiment.negated_words == []


def test_negation_word_scope_is_two_words():
    sentiment = analyze_sentiment("Zebras never see snow in summer")
    assert sentiment.is_negative
    assert sentiment.negated_words == ['see', 'snow']


def test_negated_habitat_cue_is_not_positive():
    sentiment = analyze_sentiment("Bees do not live in the desert")
    assert sentiment.is_negative
    assert not sentiment.is_positive
    assert sentiment.negated_words == ['live', 'in', 'the', 'desert']


def test_filler_scope_extension_is_capped():
    sentiment = analyze_sentiment("Bees never do it in the and of the sand")
    assert 'sand' not in sentiment.negated_words


def test_positive_cue_outside_negation_still_counts():
    sentiment = analyze_sentiment("Monkeys avoid snow and ice but they love trees")
    assert sentiment.is_negative
    assert sentiment.is_positive


def test_typographic_apostrophe():
    assert analyze_sentiment("Bees don’t like water").is_negative


def test_neutral_sentence():
    sentiment = analyze_sentiment("There is water here")
    assert not sentiment.is_positive
    assert not sentiment.is_negative


def test_negation_needs_whole_word():
    # 'knot' must not trigger 'not'
    assert not analyze_sentiment("A knot of trees").is_negative


# =============================================================================
# Abundance
# =============================================================================

def test_positive_abundance():
    assert determine_sentiment_abundance("Dolphins live in water", "water", "dolphins") == HIGH


def test_neutral_defaults_to_high():
    assert determine_sentiment_abundance("There is water here", "water", "bees") == HIGH


def test_absence_is_low():
    assert determine_sentiment_abundance("Deserts have very little water", "water", "zebras") == LOW


def test_negated_preference_is_low():
    assert determine_sentiment_abundance("Bees don't like water", "water", "bees") == LOW


def test_polarity_is_sentence_local():
    assert determine_sentiment_abundance("Bees don't like water", "water", "bees") == LOW
    assert determine_sentiment_abundance("Dolphins love water", "water", "dolphins") == HIGH


def test_abundance_colors():
    assert abundance_color(HIGH) == 'blue'
    assert abundance_color(LOW) == 'orange'


def test_text_helpers():
    assert normalize_text("Don’t") == "don't"
    assert contains_phrase("they live in trees", "live in")
    assert not contains_phrase("they delivered", "live")
