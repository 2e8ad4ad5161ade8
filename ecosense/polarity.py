#!/usr/bin/env python3
"""
Polarity: Sentiment Cues Within a Single Sentence
=================================================

Two related judgements, both strictly sentence-local:

  1. Abundance of a concept: does the sentence say the entity has/likes
     the word ('high') or lacks/avoids it ('low')?
  2. Sentence sentiment: is the sentence positive, negative, and which
     words fall inside the scope of a negation cue?

Key point: polarity is never carried across sentences. "water" can be
'low' in "Bees don't like water" and 'high' in "Dolphins live in water".

Neutral sentences default to 'high' abundance: a plainly descriptive
sentence is treated like a positive one.

Basic Usage:
    >>> from ecosense.polarity import determine_sentiment_abundance, analyze_sentiment
    >>> determine_sentiment_abundance("Deserts have very little water", "water", "zebras")
    'low'
    >>> analyze_sentiment("Bees don't like water").negated_words
    ['water', 'like']

License: MIT
"""

import re
from dataclasses import dataclass, field
from typing import List, Tuple

from .lexicon import (
    POSITIVE_INDICATORS, NEGATIVE_INDICATORS,
    NEGATION_WORDS, NEGATION_PHRASES, POSITIVE_CUES,
    POSITIVE_ENTITY_VERBS, POSITIVE_OBJECT_VERBS, POSITIVE_ADJECTIVES,
    NEGATIVE_ENTITY_VERBS, NEGATIVE_OBJECT_ADJECTIVES, NEGATIVE_ADJECTIVES,
    ABSENCE_WORDS, COMMON_WORDS,
)

__all__ = [
    'HIGH', 'LOW',
    'ABUNDANCE_COLORS', 'CENTER_COLOR',
    'SentenceSentiment',
    'normalize_text',
    'contains_phrase',
    'determine_sentiment_abundance',
    'abundance_color',
    'analyze_sentiment',
]

HIGH = 'high'
LOW = 'low'

ABUNDANCE_COLORS = {HIGH: 'blue', LOW: 'orange'}
# Reserved for the subject/center entity of a mindmap
CENTER_COLOR = 'purple'

# Words in the scope of a negation cue
PHRASE_SCOPE = 3
WORD_SCOPE = 2
# Extra filler words a scope may run over to reach a content word
MAX_SCOPE_EXTENSION = 3

_WORD_RE = re.compile(r"[\w']+")


def normalize_text(text: str) -> str:
    """Lowercase and fold typographic apostrophes (speech-to-text emits them)."""
    return text.lower().replace('’', "'").replace('‘', "'")


def contains_phrase(text: str, phrase: str) -> bool:
    """Whole-word (or whole-phrase) containment."""
    return re.search(rf"\b{re.escape(phrase)}\b", text) is not None


# =============================================================================
# Concept Abundance
# =============================================================================

def _abundance_patterns(word: str, entity: str):
    w = re.escape(word)
    e = re.escape(entity)
    positive = [
        # entity + positive verb + concept
        rf"\b{e}\b.*\b({POSITIVE_ENTITY_VERBS})\b.*\b{w}\b",
        # concept + positive verb + entity
        rf"\b{w}\b.*\b({POSITIVE_OBJECT_VERBS})\b.*\b{e}\b",
        rf"\b{w}\b.*\b({POSITIVE_ADJECTIVES})\b",
        rf"\b({POSITIVE_ADJECTIVES})\b.*\b{w}\b",
    ]
    negative = [
        rf"\b{e}\b.*\b({NEGATIVE_ENTITY_VERBS})\b.*\b{w}\b",
        rf"\b{w}\b.*\b({NEGATIVE_OBJECT_ADJECTIVES})\b.*\b{e}\b",
        rf"\b{w}\b.*\b({NEGATIVE_ADJECTIVES})\b",
        rf"\b({NEGATIVE_ADJECTIVES})\b.*\b{w}\b",
        # lack / absence
        rf"\b({ABSENCE_WORDS})\b.*\b{w}\b",
        rf"\b{w}\b.*\b({ABSENCE_WORDS})\b",
    ]
    return positive, negative


def determine_sentiment_abundance(
    sentence: str,
    word: str,
    entity: str,
    verbose: bool = False
) -> str:
    """
    Decide whether a sentence presents `word` as abundant for `entity`.

    Both indicator containment and proximity templates (cue between or
    beside the entity and the word) are checked. Any negative hit wins;
    everything else, neutral included, is 'high'.

    Args:
        sentence: Source sentence
        word: Concept word to judge
        entity: Subject of the sentence, e.g. 'bees'

    Returns:
        'high' or 'low'
    """
    text = normalize_text(sentence)
    positive, negative = _abundance_patterns(word.lower(), (entity or '').lower())

    has_negative_indicator = any(contains_phrase(text, ind) for ind in NEGATIVE_INDICATORS)
    has_negative_pattern = any(re.search(p, text) for p in negative)

    if verbose:
        has_positive = (any(contains_phrase(text, ind) for ind in POSITIVE_INDICATORS)
                        or any(re.search(p, text) for p in positive))
        print(f"  '{word}': positive={has_positive}, "
              f"negative_indicator={has_negative_indicator}, "
              f"negative_pattern={has_negative_pattern}")

    if has_negative_pattern or has_negative_indicator:
        return LOW
    return HIGH


def abundance_color(abundance: str) -> str:
    """Display colour for an abundance tag."""
    return ABUNDANCE_COLORS.get(abundance, ABUNDANCE_COLORS[LOW])


# =============================================================================
# Sentence Sentiment
# =============================================================================

@dataclass(frozen=True)
class SentenceSentiment:
    """
    Sentiment of one sentence.

    Attributes:
        is_positive: A positive cue (like, love, live in, ...) was found
        is_negative: A negation cue was found
        negated_words: Words falling inside a negation cue's scope
    """
    is_positive: bool = False
    is_negative: bool = False
    negated_words: List[str] = field(default_factory=list)


def _negation_scope(text: str, end: int, n: int) -> Tuple[List[str], int]:
    """
    The n words after a negation cue, extended up to the first content
    word when those n are all filler ("not live in the desert").

    Returns:
        (scoped words, character offset where the scope ends)
    """
    words = []
    scope_end = end
    for m in _WORD_RE.finditer(text, end):
        if len(words) >= n and (any(w not in COMMON_WORDS for w in words)
                                or len(words) >= n + MAX_SCOPE_EXTENSION):
            break
        words.append(m.group())
        scope_end = m.end()
    return words, scope_end


def analyze_sentiment(sentence: str) -> SentenceSentiment:
    """
    Detect positive/negative cues and the scope of negation.

    Negation phrases ("don't like", "stay away from") scope over the next
    three words; single negation words over the next two. A scope made of
    filler only runs on to the next content word. Positive cues inside a
    negation ("do not live in") do not make the sentence positive.

    Returns:
        SentenceSentiment
    """
    text = normalize_text(sentence)
    negated = []
    spans = []

    for cues, scope in ((NEGATION_PHRASES, PHRASE_SCOPE), (NEGATION_WORDS, WORD_SCOPE)):
        for cue in cues:
            for m in re.finditer(rf"\b{re.escape(cue)}\b", text):
                words, scope_end = _negation_scope(text, m.end(), scope)
                negated.extend(words)
                spans.append((m.start(), scope_end))

    is_negative = bool(spans)
    is_positive = False
    for cue in POSITIVE_CUES:
        for m in re.finditer(rf"\b{re.escape(cue)}\b", text):
            if not any(start <= m.start() < stop for start, stop in spans):
                is_positive = True

    return SentenceSentiment(
        is_positive=is_positive,
        is_negative=is_negative,
        negated_words=list(dict.fromkeys(negated)),
    )
