#!/usr/bin/env python3
"""
EcoSense: Ecosystem Prediction from Taught Sentences
====================================================

Predicts which ecosystem (desert, ocean, rainforest, grassland, tundra)
an animal lives in, from the free-text sentences a learner has "taught"
an agent. Training-free: every decision is a lexicon lookup, a word-
similarity tier, or (optionally) a cosine against class descriptions in
embedding space.

Pipeline:
  1. Initialise the embedding provider once (optional, may fall back)
  2. Score every sentence on its own against every class
  3. Sum the per-sentence scores, sharpen (power 3) and normalise
  4. Attach supporting sentences, keywords, reasoning and a method tag

Three scoring methods:
  - embedding:         cosine(sentence, class description)
  - hybrid:            0.7 * embedding + 0.3 * word similarity
  - keyword-fallback:  word similarity only (no provider, failed load,
                       failed inference, or method='keyword')

Provider problems are never raised from predict(): they are warned about
and the affected sentences are scored by keywords instead.

Basic Usage:
  >>> from ecosense import EcosystemPredictor
  >>> predictor = EcosystemPredictor()
  >>> result = predictor.predict_sync(["Bees live in trees"], "bees")
  >>> result.top_class, result.method
  (<Ecosystem.RAINFOREST: 'rainforest'>, 'keyword-fallback')

  # With embeddings
  >>> from ecosense import SentenceTransformerProvider
  >>> predictor = EcosystemPredictor(SentenceTransformerProvider())
  >>> result = predictor.predict_sync(["Dolphins jump over waves"], "dolphins")

License: MIT
"""

__version__ = "0.3.0"

import asyncio
import json
import sys
import warnings
from dataclasses import dataclass, field
from functools import partial
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

from .lexicon import Ecosystem, ECOSYSTEM_DESCRIPTIONS, LEXICON_VERSION
from .scoring import (
    SentenceScore, score_sentence, empty_vector,
    DEFAULT_KEYWORD_BONUS, DEFAULT_NEUTRAL_MULTIPLIER,
)
from .aggregate import aggregate, renormalize, DEFAULT_SHARPENING_POWER
from .embeddings import (
    EmbeddingProvider, EmbeddingHandle,
    StaticEmbeddingProvider, SentenceTransformerProvider,
    DEFAULT_MODEL_NAME,
)

__all__ = [
    'DEFAULT_HYBRID_WEIGHT',
    'METHODS',
    'EcosystemPrediction',
    'PredictionResult',
    'EcosystemPredictor',
    'main',
]

DEFAULT_HYBRID_WEIGHT = 0.7

# Configured methods; 'auto' and 'embedding' behave the same
METHODS = ('auto', 'embedding', 'hybrid', 'keyword')

# Result method tags
EMBEDDING = 'embedding'
HYBRID = 'hybrid'
KEYWORD_FALLBACK = 'keyword-fallback'

_METHOD_REASONS = {
    EMBEDDING: 'Based on semantic similarity using sentence embeddings',
    HYBRID: 'Based on combined sentence embeddings and keyword matching',
    KEYWORD_FALLBACK: 'Based on keyword matching (embeddings unavailable)',
}


# =============================================================================
# Result Types
# =============================================================================

def _frozen_map(mapping) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class EcosystemPrediction:
    """Probability and evidence for one ecosystem."""
    ecosystem: Ecosystem
    probability: float
    supporting_sentences: Tuple[str, ...] = ()
    matched_keywords: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'supporting_sentences', tuple(self.supporting_sentences))
        object.__setattr__(self, 'matched_keywords', tuple(self.matched_keywords))


@dataclass(frozen=True)
class PredictionResult:
    """
    Outcome of one prediction.

    `classes` lists every ecosystem in canonical order. `top_class` is None
    (and `confidence` 0.0) when the sentences carried no evidence at all,
    in which case every probability is exactly 0.

    Containers are copied on construction into tuples and read-only
    mappings, so a result never changes after it is returned.
    """
    classes: Tuple[EcosystemPrediction, ...]
    top_class: Optional[Ecosystem]
    confidence: float
    reasoning: Tuple[str, ...]
    method: str
    entity: str = ''
    # Diagnostics
    raw_scores: Mapping[Ecosystem, float] = field(default_factory=empty_vector)
    match_counts: Mapping[Ecosystem, int] = field(default_factory=dict)
    negative_associations: Mapping[Ecosystem, int] = field(default_factory=dict)
    embedding_similarities: Mapping[Ecosystem, float] = field(default_factory=dict)
    keyword_similarities: Mapping[Ecosystem, float] = field(default_factory=dict)
    sentence_scores: Tuple[Mapping[Ecosystem, SentenceScore], ...] = ()

    def __post_init__(self):
        assign = partial(object.__setattr__, self)
        assign('classes', tuple(self.classes))
        assign('reasoning', tuple(self.reasoning))
        for name in ('raw_scores', 'match_counts', 'negative_associations',
                     'embedding_similarities', 'keyword_similarities'):
            assign(name, _frozen_map(getattr(self, name)))
        assign('sentence_scores', tuple(_frozen_map(s) for s in self.sentence_scores))

    def probabilities(self) -> Dict[Ecosystem, float]:
        return {c.ecosystem: c.probability for c in self.classes}

    def get(self, ecosystem: Union[Ecosystem, str]) -> EcosystemPrediction:
        eco = Ecosystem(ecosystem)
        for c in self.classes:
            if c.ecosystem is eco:
                return c
        raise KeyError(ecosystem)

    def ranked(self) -> List[EcosystemPrediction]:
        """Classes by descending probability (canonical order on ties)."""
        return sorted(self.classes, key=lambda c: -c.probability)

    def to_dict(self) -> Dict[str, object]:
        """JSON-friendly view (enum keys become their string values)."""
        def by_value(d):
            return {eco.value: v for eco, v in d.items()}

        return {
            'entity': self.entity,
            'top_class': self.top_class.value if self.top_class is not None else None,
            'confidence': self.confidence,
            'method': self.method,
            'reasoning': list(self.reasoning),
            'classes': [
                {
                    'ecosystem': c.ecosystem.value,
                    'probability': c.probability,
                    'supporting_sentences': list(c.supporting_sentences),
                    'matched_keywords': list(c.matched_keywords),
                }
                for c in self.classes
            ],
            'raw_scores': by_value(self.raw_scores),
            'match_counts': by_value(self.match_counts),
            'negative_associations': by_value(self.negative_associations),
            'embedding_similarities': by_value(self.embedding_similarities),
            'keyword_similarities': by_value(self.keyword_similarities),
        }

    def __repr__(self) -> str:
        top = self.top_class.value if self.top_class is not None else None
        return (f"PredictionResult(top_class={top!r}, confidence={self.confidence:.3f}, "
                f"method={self.method!r})")


# =============================================================================
# Predictor
# =============================================================================

class EcosystemPredictor:
    """
    Sentence-level ecosystem classifier with graceful degradation.

    The predictor owns an EmbeddingHandle. Pass a provider (or a handle
    to share one loaded model between predictors); pass nothing to run
    keyword-only.

    Example:
        >>> predictor = EcosystemPredictor(method='keyword')
        >>> result = predictor.predict_sync(
        ...     ["Zebras eat grass", "Zebras run on the open plain"], "zebras")
        >>> result.top_class
        <Ecosystem.GRASSLAND: 'grassland'>
    """

    def __init__(
        self,
        provider: Union[EmbeddingProvider, EmbeddingHandle, None] = None,
        method: str = 'auto',
        sharpening_power: float = DEFAULT_SHARPENING_POWER,
        keyword_bonus: float = DEFAULT_KEYWORD_BONUS,
        neutral_multiplier: float = DEFAULT_NEUTRAL_MULTIPLIER,
        hybrid_weight: float = DEFAULT_HYBRID_WEIGHT,
        verbose: bool = False
    ):
        """
        Initialize the predictor.

        Args:
            provider: EmbeddingProvider or EmbeddingHandle (None: keyword-only)
            method: 'auto' / 'embedding' (embeddings when available),
                    'hybrid' (blend with word similarity) or
                    'keyword' (never touch the provider)
            sharpening_power: Exponent applied to score fractions (> 0)
            keyword_bonus: Added per literal keyword match in a sentence
            neutral_multiplier: Weight of neutral, keyword-less sentences
            hybrid_weight: Embedding weight in hybrid mode, in [0, 1]
            verbose: Print progress and per-sentence scores
        """
        if method not in METHODS:
            raise ValueError(f"method must be one of {list(METHODS)}, got {method!r}")
        if sharpening_power <= 0:
            raise ValueError(f"sharpening_power must be positive, got {sharpening_power}")
        if not 0.0 <= hybrid_weight <= 1.0:
            raise ValueError(f"hybrid_weight must be in [0, 1], got {hybrid_weight}")

        if isinstance(provider, EmbeddingHandle):
            self.handle = provider
        else:
            self.handle = EmbeddingHandle(provider, verbose=verbose)

        self.method = method
        self.sharpening_power = sharpening_power
        self.keyword_bonus = keyword_bonus
        self.neutral_multiplier = neutral_multiplier
        self.hybrid_weight = hybrid_weight
        self.verbose = verbose

        if verbose:
            print(f"EcosystemPredictor v{__version__} initialized (lexicon {LEXICON_VERSION})")
            print(f"  Method: {method}, provider: {self.handle.status()['provider']}")
            print(f"  Sharpening power: {sharpening_power}, keyword bonus: {keyword_bonus}")

    # =========================================================================
    # Prediction
    # =========================================================================

    async def predict(self, sentences: Sequence[str], target_entity: str) -> PredictionResult:
        """
        Predict the ecosystem of `target_entity` from taught sentences.

        Args:
            sentences: Free-text sentences, scored one at a time
            target_entity: Subject the sentences describe, e.g. 'bees'

        Returns:
            PredictionResult
        """
        return await self._predict(sentences, target_entity, self.method)

    def predict_sync(self, sentences: Sequence[str], target_entity: str) -> PredictionResult:
        """Blocking wrapper around predict() for callers without an event loop."""
        return asyncio.run(self.predict(sentences, target_entity))

    async def compare_methods(
        self,
        sentences: Sequence[str],
        target_entity: str
    ) -> Dict[str, PredictionResult]:
        """
        Run the keyword-only path next to the configured one.

        Returns:
            Dict with a 'keyword' result and, unless the predictor is
            itself keyword-only, one keyed by the configured method
        """
        results = {'keyword': await self._predict(sentences, target_entity, 'keyword')}
        if self.method != 'keyword':
            results[self.method] = await self._predict(sentences, target_entity, self.method)
        return results

    def compare_methods_sync(
        self,
        sentences: Sequence[str],
        target_entity: str
    ) -> Dict[str, PredictionResult]:
        return asyncio.run(self.compare_methods(sentences, target_entity))

    async def _predict(
        self,
        sentences: Sequence[str],
        target_entity: str,
        method: str
    ) -> PredictionResult:
        sentences = [s.strip() for s in sentences if s and s.strip()]
        if not sentences:
            return self._no_evidence(target_entity, KEYWORD_FALLBACK, [])

        descriptions = None
        failures = []
        if method != 'keyword' and await self.handle.ensure_initialized():
            try:
                descriptions = await self.handle.description_vectors(ECOSYSTEM_DESCRIPTIONS)
            except Exception as e:
                failures.append(e)

        hybrid_weight = self.hybrid_weight if method == 'hybrid' else None

        if self.verbose:
            print(f"\nScoring {len(sentences)} sentence(s) about '{target_entity}'...")

        per_sentence = []
        n_embedded = 0
        for sentence in sentences:
            emb_sims = None
            if descriptions is not None:
                try:
                    vec = await self.handle.embed(sentence)
                    emb_sims = {eco: self.handle.cosine_similarity(vec, descriptions[eco])
                                for eco in Ecosystem}
                    n_embedded += 1
                except Exception as e:
                    failures.append(e)
            per_sentence.append(score_sentence(
                sentence,
                embedding_similarities=emb_sims,
                hybrid_weight=hybrid_weight,
                keyword_bonus=self.keyword_bonus,
                neutral_multiplier=self.neutral_multiplier,
                verbose=self.verbose,
            ))

        if failures:
            warnings.warn(f"Embedding inference failed {len(failures)} time(s) "
                          f"(first error: {failures[0]}); affected sentences were "
                          f"scored by keyword matching", RuntimeWarning)

        tag = self._method_tag(method, n_embedded, len(sentences))
        agg = aggregate(per_sentence, self.sharpening_power)
        if not agg.has_evidence:
            return self._no_evidence(target_entity, tag, per_sentence, agg)

        probabilities = renormalize(agg.probabilities)
        classes = [self._class_entry(eco, probabilities[eco], sentences, per_sentence)
                   for eco in Ecosystem]
        # max() keeps the first maximal class in canonical order
        top_class = max(Ecosystem, key=lambda eco: probabilities[eco])

        result = PredictionResult(
            classes=classes,
            top_class=top_class,
            confidence=probabilities[top_class],
            reasoning=self._reasoning(tag, target_entity, top_class, classes, agg),
            method=tag,
            entity=target_entity,
            raw_scores=agg.raw_scores,
            match_counts=agg.match_counts,
            negative_associations=agg.negative_associations,
            embedding_similarities=self._mean_similarity(per_sentence, embedding=True),
            keyword_similarities=self._mean_similarity(per_sentence, embedding=False),
            sentence_scores=per_sentence,
        )

        if self.verbose:
            print(f"Prediction: {top_class.value} ({result.confidence:.1%}, method={tag})")

        return result

    # =========================================================================
    # Result Assembly
    # =========================================================================

    @staticmethod
    def _method_tag(method: str, n_embedded: int, n_sentences: int) -> str:
        if n_embedded == 0:
            return KEYWORD_FALLBACK
        if method == 'hybrid' or n_embedded < n_sentences:
            return HYBRID
        return EMBEDDING

    @staticmethod
    def _class_entry(
        eco: Ecosystem,
        probability: float,
        sentences: List[str],
        per_sentence: List[Dict[Ecosystem, SentenceScore]]
    ) -> EcosystemPrediction:
        supporting = []
        keywords = []
        for sentence, scores in zip(sentences, per_sentence):
            if scores[eco].score > 0:
                supporting.append(sentence)
                keywords.extend(scores[eco].matched_keywords)
        return EcosystemPrediction(
            ecosystem=eco,
            probability=probability,
            supporting_sentences=supporting,
            matched_keywords=list(dict.fromkeys(keywords)),
        )

    @staticmethod
    def _mean_similarity(
        per_sentence: List[Dict[Ecosystem, SentenceScore]],
        embedding: bool
    ) -> Dict[Ecosystem, float]:
        result = {}
        for eco in Ecosystem:
            if embedding:
                values = [s[eco].embedding_similarity for s in per_sentence
                          if s[eco].embedding_similarity is not None]
            else:
                values = [s[eco].keyword_similarity for s in per_sentence]
            if values:
                result[eco] = sum(values) / len(values)
        return result

    @staticmethod
    def _reasoning(tag, entity, top_class, classes, agg) -> List[str]:
        reasons = [_METHOD_REASONS[tag]]
        top = classes[list(Ecosystem).index(top_class)]
        subject = entity.capitalize() if entity else 'The animal'
        reasons.append(f"{subject} most likely live in the {top_class.value} "
                       f"({len(top.supporting_sentences)} supporting sentence(s))")
        if top.matched_keywords:
            reasons.append(f"Keywords found: {', '.join(top.matched_keywords)}")
        for eco in Ecosystem:
            n = agg.negative_associations[eco]
            if n:
                reasons.append(f"{eco.value} was mentioned negatively {n} time(s)")
        return reasons

    def _no_evidence(self, entity, tag, per_sentence, agg=None) -> PredictionResult:
        classes = [EcosystemPrediction(ecosystem=eco, probability=0.0) for eco in Ecosystem]
        reasoning = [_METHOD_REASONS[tag],
                     'No evidence for any ecosystem was found in the sentences']
        if agg is not None:
            for eco in Ecosystem:
                n = agg.negative_associations[eco]
                if n:
                    reasoning.append(f"{eco.value} was mentioned negatively {n} time(s)")
        if self.verbose:
            print("Prediction: no evidence")
        return PredictionResult(
            classes=classes,
            top_class=None,
            confidence=0.0,
            reasoning=reasoning,
            method=tag,
            entity=entity,
            raw_scores=agg.raw_scores if agg is not None else empty_vector(),
            match_counts=agg.match_counts if agg is not None else {eco: 0 for eco in Ecosystem},
            negative_associations=(agg.negative_associations if agg is not None
                                   else {eco: 0 for eco in Ecosystem}),
            embedding_similarities=self._mean_similarity(per_sentence, embedding=True),
            keyword_similarities=self._mean_similarity(per_sentence, embedding=False),
            sentence_scores=per_sentence,
        )

    # =========================================================================
    # Status
    # =========================================================================

    def status(self) -> Dict[str, object]:
        """Provider state ('uninitialized', 'initializing', 'ready', 'fallback-only')."""
        return self.handle.status()

    def __repr__(self) -> str:
        return (f"EcosystemPredictor(method={self.method!r}, "
                f"state={self.handle.state.value!r}, power={self.sharpening_power})")


# =============================================================================
# Command-Line Interface
# =============================================================================

def _print_result(result: PredictionResult, label: str = None):
    if label:
        print(f"\n[{label}]")
    if result.top_class is None:
        print("No ecosystem could be predicted.")
    else:
        print(f"Prediction: {result.top_class.value} ({result.confidence:.1%})")
    print(f"Method: {result.method}")
    for c in result.ranked():
        bar = '#' * int(round(c.probability * 40))
        print(f"  {c.ecosystem.value:<11} {c.probability:6.1%} {bar}")
    print("Reasoning:")
    for line in result.reasoning:
        print(f"  - {line}")


def main():
    """Command-line interface for EcoSense."""
    import argparse

    parser = argparse.ArgumentParser(
        description='EcoSense: predict an animal\'s ecosystem from taught sentences',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Keyword matching only
  ecosense --animal bees "Bees live in trees" "Bees don't like water"

  # Sentence embeddings (pip install ecosense[full])
  ecosense --animal dolphins --sentence-transformer "Dolphins jump over waves"

  # Static word vectors, blended with keyword matching
  ecosense --animal zebras --glove glove.6B.100d.txt --method hybrid "Zebras eat grass"

  # Keyword-only next to the configured method
  ecosense --animal monkeys --sentence-transformer --compare "Monkeys swing from branches"

  # Sentences from stdin, one per line
  cat sentences.txt | ecosense --animal bees --json
        """
    )

    parser.add_argument('sentences', nargs='*', help='Sentences (default: read stdin)')
    parser.add_argument('--animal', type=str, default='animal', help='Entity the sentences describe')
    parser.add_argument('--glove', type=str, help='Path to GloVe embeddings')
    parser.add_argument('--word2vec', type=str, help='Path to Word2Vec embeddings')
    parser.add_argument('--max-words', type=int, default=50000, help='Max words to load')
    parser.add_argument('--sentence-transformer', nargs='?', const=DEFAULT_MODEL_NAME,
                        metavar='MODEL', help=f'Use a sentence-transformers model '
                                              f'(default: {DEFAULT_MODEL_NAME})')
    parser.add_argument('--method', choices=METHODS, default='auto', help='Scoring method')
    parser.add_argument('--power', type=float, default=DEFAULT_SHARPENING_POWER,
                        help='Sharpening power')
    parser.add_argument('--compare', action='store_true', help='Also run keyword-only matching')
    parser.add_argument('--json', action='store_true', help='Print results as JSON')
    parser.add_argument('--verbose', action='store_true', help='Print per-sentence scores')

    args = parser.parse_args()

    sentences = args.sentences or [line for line in sys.stdin.read().splitlines() if line.strip()]
    if not sentences:
        parser.error("No sentences given")

    provider = None
    if args.glove:
        provider = StaticEmbeddingProvider.from_glove(args.glove, max_words=args.max_words,
                                                      verbose=args.verbose)
    elif args.word2vec:
        provider = StaticEmbeddingProvider.from_word2vec(args.word2vec, max_words=args.max_words,
                                                         verbose=args.verbose)
    elif args.sentence_transformer:
        provider = SentenceTransformerProvider(args.sentence_transformer, verbose=args.verbose)

    try:
        predictor = EcosystemPredictor(provider, method=args.method,
                                       sharpening_power=args.power, verbose=args.verbose)
    except ValueError as e:
        parser.error(str(e))

    if args.compare:
        results = predictor.compare_methods_sync(sentences, args.animal)
    else:
        results = {args.method: predictor.predict_sync(sentences, args.animal)}

    if args.json:
        print(json.dumps({name: r.to_dict() for name, r in results.items()}, indent=2))
        return

    for name, result in results.items():
        _print_result(result, label=name if len(results) > 1 else None)


if __name__ == "__main__":
    main()
