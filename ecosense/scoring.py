#!/usr/bin/env python3
"""
Per-Sentence Scoring
====================

Each sentence votes independently for every ecosystem class. Scoring
sentences one at a time keeps a polarity cue next to the keyword it
modifies: "Bees don't like water" cannot suppress the "trees" in
"Bees live in trees".

For one sentence and one class:

    similarity  = embedding cosine            (embedding path)
                | w * embedding + (1-w) * kw  (hybrid path)
                | match_class_keywords(...)   (keyword fallback)
    multiplier  = -1.0  matched keyword inside a negation's scope,
                        or a negative sentence with no positive cue
                  +1.0  positive cue or literal keyword match
                  0.5   neutral, nothing matched
    score       = max(0, similarity * multiplier + 0.1 * n_matched)

A sentence that shares no vocabulary at all with any class (zero keyword
similarity everywhere) is no evidence and scores zero for every class,
whatever the embedding says.

License: MIT
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .lexicon import Ecosystem, ECOSYSTEM_KEYWORDS, COMMON_WORDS
from .concepts import tokenize
from .polarity import SentenceSentiment, analyze_sentiment
from .similarity import match_class_keywords, MIN_SUBSTRING_LENGTH

__all__ = [
    'DEFAULT_KEYWORD_BONUS',
    'DEFAULT_NEUTRAL_MULTIPLIER',
    'SentenceScore',
    'keyword_stem',
    'content_words',
    'find_matched_keywords',
    'is_negated',
    'sentiment_multiplier',
    'score_sentence',
    'empty_vector',
]

DEFAULT_KEYWORD_BONUS = 0.1
DEFAULT_NEUTRAL_MULTIPLIER = 0.5

POSITIVE = 1.0
NEGATIVE = -1.0


@dataclass(frozen=True)
class SentenceScore:
    """
    One sentence's vote for one class.

    Attributes:
        score: Final non-negative contribution
        similarity: Semantic similarity actually used
        sentiment: Multiplier applied to the similarity
        matched_keywords: Class keywords literally present in the sentence
        negated: A matched keyword fell inside a negation's scope
        keyword_similarity: Word-similarity score (always computed)
        embedding_similarity: Clipped cosine, None if not used
    """
    score: float = 0.0
    similarity: float = 0.0
    sentiment: float = 0.0
    matched_keywords: Tuple[str, ...] = ()
    negated: bool = False
    keyword_similarity: float = 0.0
    embedding_similarity: Optional[float] = None

    def __post_init__(self):
        object.__setattr__(self, 'matched_keywords', tuple(self.matched_keywords))

    @property
    def used_embedding(self) -> bool:
        return self.embedding_similarity is not None


def empty_vector() -> Dict[Ecosystem, float]:
    """A ClassScoreVector with every class present at zero."""
    return {eco: 0.0 for eco in Ecosystem}


# =============================================================================
# Token Helpers
# =============================================================================

def keyword_stem(word: str) -> str:
    """Plural-tolerant comparison key ('trees' ~ 'tree', 'waves' ~ 'wave')."""
    word = word.lower()
    if len(word) > 3 and word.endswith('s') and not word.endswith('ss'):
        return word[:-1]
    return word


def content_words(sentence: str) -> List[str]:
    """Unique non-filler tokens of a sentence."""
    return list(dict.fromkeys(t for t in tokenize(sentence) if t not in COMMON_WORDS))


def find_matched_keywords(tokens: Iterable[str], keywords: Sequence[str]) -> List[str]:
    stems = {keyword_stem(t) for t in tokens}
    return [kw for kw in keywords if keyword_stem(kw) in stems]


def is_negated(keyword: str, negated_words: Iterable[str]) -> bool:
    kw = keyword_stem(keyword)
    for word in negated_words:
        w = keyword_stem(word)
        if w == kw:
            return True
        if (len(w) >= MIN_SUBSTRING_LENGTH and len(kw) >= MIN_SUBSTRING_LENGTH
                and (w in kw or kw in w)):
            return True
    return False


def sentiment_multiplier(
    sentiment: SentenceSentiment,
    matched_keywords: Sequence[str],
    negated: bool,
    neutral_multiplier: float = DEFAULT_NEUTRAL_MULTIPLIER
) -> float:
    if negated or (sentiment.is_negative and not sentiment.is_positive):
        return NEGATIVE
    if sentiment.is_positive or matched_keywords:
        return POSITIVE
    return neutral_multiplier


# =============================================================================
# Scoring
# =============================================================================

def score_sentence(
    sentence: str,
    embedding_similarities: Optional[Mapping[Ecosystem, float]] = None,
    hybrid_weight: Optional[float] = None,
    keyword_bonus: float = DEFAULT_KEYWORD_BONUS,
    neutral_multiplier: float = DEFAULT_NEUTRAL_MULTIPLIER,
    keywords: Mapping[Ecosystem, Sequence[str]] = None,
    verbose: bool = False
) -> Dict[Ecosystem, SentenceScore]:
    """
    Score one sentence against every class.

    Args:
        sentence: One free-text utterance
        embedding_similarities: Cosine similarity of the sentence to each
                                class description; None for keyword-only
        hybrid_weight: If set, blend w * embedding + (1 - w) * keyword
        keyword_bonus: Added per literally matched keyword
        neutral_multiplier: Multiplier for neutral sentences without matches
        keywords: Per-class keyword lists (default: ECOSYSTEM_KEYWORDS)
        verbose: Print the per-class breakdown

    Returns:
        Dict mapping every Ecosystem to its SentenceScore
    """
    keywords = ECOSYSTEM_KEYWORDS if keywords is None else keywords
    tokens = tokenize(sentence)
    words = content_words(sentence)
    sentiment = analyze_sentiment(sentence)

    keyword_sims = {eco: match_class_keywords(words, keywords[eco]) for eco in Ecosystem}
    matches = {eco: find_matched_keywords(tokens, keywords[eco]) for eco in Ecosystem}
    has_evidence = any(keyword_sims.values()) or any(matches.values())

    scores = {}
    for eco in Ecosystem:
        matched = matches[eco]
        negated = sentiment.is_negative and any(is_negated(kw, sentiment.negated_words)
                                                for kw in matched)
        multiplier = sentiment_multiplier(sentiment, matched, negated, neutral_multiplier)

        emb_sim = None
        if embedding_similarities is not None:
            emb_sim = max(0.0, float(embedding_similarities[eco]))
            if hybrid_weight is not None:
                similarity = hybrid_weight * emb_sim + (1.0 - hybrid_weight) * keyword_sims[eco]
            else:
                similarity = emb_sim
        else:
            similarity = keyword_sims[eco]

        if has_evidence:
            score = max(0.0, similarity * multiplier + keyword_bonus * len(matched))
        else:
            score = 0.0

        scores[eco] = SentenceScore(
            score=score,
            similarity=similarity,
            sentiment=multiplier,
            matched_keywords=matched,
            negated=negated,
            keyword_similarity=keyword_sims[eco],
            embedding_similarity=emb_sim,
        )

    if verbose:
        print(f"  \"{sentence}\" (positive={sentiment.is_positive}, "
              f"negative={sentiment.is_negative}, negated={sentiment.negated_words})")
        for eco, s in scores.items():
            print(f"    {eco.value:<11} sim={s.similarity:.3f} x{s.sentiment:+.1f} "
                  f"kw={s.matched_keywords} -> {s.score:.3f}")

    return scores
