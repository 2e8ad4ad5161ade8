"""
EcoSense: Ecosystem Prediction from Taught Sentences
====================================================

A lightweight, training-free text classifier that predicts which ecosystem
an animal lives in from the sentences a learner has taught an agent.

Key insight: every sentence is scored on its own. Polarity cues ("don't
like", "never") only affect the keywords they sit next to, so one
negative sentence cannot cancel the evidence of another.

Four capabilities:
  - EcosystemPredictor:      sentences -> sharpened class distribution
  - extract_concepts():      sentences -> categorised, confidence-scored concepts
  - build_mindmap():         concept graph with per-concept abundance colours
  - word_similarity():       graded lexical relatedness (no model required)

Basic Usage:
    >>> from ecosense import EcosystemPredictor
    >>> predictor = EcosystemPredictor()
    >>> result = predictor.predict_sync(["Bees live in trees"], "bees")
    >>> result.top_class
    <Ecosystem.RAINFOREST: 'rainforest'>

    # Sentence embeddings (pip install ecosense[full])
    >>> from ecosense import SentenceTransformerProvider
    >>> predictor = EcosystemPredictor(SentenceTransformerProvider(), method='hybrid')

    # Concept mindmap
    >>> from ecosense import build_mindmap
    >>> mindmap = build_mindmap(["Bees collect nectar from flowers"], "bees")

License: MIT
Version: 0.3.0
"""

from .core import (
    EcosystemPredictor,
    EcosystemPrediction,
    PredictionResult,
    DEFAULT_HYBRID_WEIGHT,
    METHODS,
)

from .lexicon import (
    Ecosystem,
    LEXICON_VERSION,
    ECOSYSTEM_KEYWORDS,
    ECOSYSTEM_DESCRIPTIONS,
    get_relevant_nouns,
)

from .concepts import (
    Concept,
    ConceptCategory,
    ConceptRelationship,
    Mindmap,
    extract_concepts,
    extract_ecosystem_concepts,
    extract_relationships,
    extract_concepts_from_sentences,
    build_mindmap,
)

from .polarity import (
    SentenceSentiment,
    analyze_sentiment,
    determine_sentiment_abundance,
)

from .similarity import (
    word_similarity,
    match_class_keywords,
)

from .scoring import (
    SentenceScore,
    score_sentence,
    DEFAULT_KEYWORD_BONUS,
    DEFAULT_NEUTRAL_MULTIPLIER,
)

from .aggregate import (
    Aggregate,
    aggregate,
    renormalize,
    DEFAULT_SHARPENING_POWER,
)

from .embeddings import (
    EmbeddingProvider,
    StaticEmbeddingProvider,
    SentenceTransformerProvider,
    EmbeddingHandle,
    ProviderState,
    DEFAULT_MODEL_NAME,
)

from .animals import (
    Animal,
    ANIMALS,
    CORRECT_ANSWERS,
    get_animal,
    is_correct_answer,
    calculate_ecosystem_probability,
)

__version__ = "0.3.0"
__all__ = [
    # Core
    'EcosystemPredictor',
    'EcosystemPrediction',
    'PredictionResult',
    'DEFAULT_HYBRID_WEIGHT',
    'METHODS',
    # Lexicon
    'Ecosystem',
    'LEXICON_VERSION',
    'ECOSYSTEM_KEYWORDS',
    'ECOSYSTEM_DESCRIPTIONS',
    'get_relevant_nouns',
    # Concepts
    'Concept',
    'ConceptCategory',
    'ConceptRelationship',
    'Mindmap',
    'extract_concepts',
    'extract_ecosystem_concepts',
    'extract_relationships',
    'extract_concepts_from_sentences',
    'build_mindmap',
    # Polarity
    'SentenceSentiment',
    'analyze_sentiment',
    'determine_sentiment_abundance',
    # Similarity
    'word_similarity',
    'match_class_keywords',
    # Scoring
    'SentenceScore',
    'score_sentence',
    'DEFAULT_KEYWORD_BONUS',
    'DEFAULT_NEUTRAL_MULTIPLIER',
    'Aggregate',
    'aggregate',
    'renormalize',
    'DEFAULT_SHARPENING_POWER',
    # Embeddings
    'EmbeddingProvider',
    'StaticEmbeddingProvider',
    'SentenceTransformerProvider',
    'EmbeddingHandle',
    'ProviderState',
    'DEFAULT_MODEL_NAME',
    # Animals
    'Animal',
    'ANIMALS',
    'CORRECT_ANSWERS',
    'get_animal',
    'is_correct_answer',
    'calculate_ecosystem_probability',
]
