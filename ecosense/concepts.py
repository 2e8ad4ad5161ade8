#!/usr/bin/env python3
"""
Concept Extraction from Taught Sentences
========================================

Turns free-text sentences about an animal into categorised, confidence-
scored concepts, following the same lexicon-first strategy as anchor
extraction elsewhere:

  1. Entity-specific noun lexicon (exact match 1.0, partial match 0.7)
  2. Habitat / trait keywords (0.8)
  3. Relationship verbs (0.9)

Two variants:
  - extract_concepts(): general extraction, every matching category
    yields a concept (a token can appear more than once)
  - extract_ecosystem_concepts(): stricter, one concept per unique word,
    verbs and filler discarded, each concept tagged with abundance
    ('high'/'low') and display colour

On top of these sit relationship triples (noun - verb - noun) and a
mindmap with the entity at its center.

Basic Usage:
    >>> from ecosense.concepts import extract_ecosystem_concepts
    >>> [(c.word, c.abundance) for c in
    ...  extract_ecosystem_concepts("Bees don't like water", "bees")]
    [('bees', 'low'), ('water', 'low')]

License: MIT
"""

import re
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from .lexicon import (
    get_relevant_nouns,
    HABITAT_KEYWORDS, RELATIONSHIP_VERBS,
    COMMON_WORDS, COMMON_VERBS, LIKELY_NOUNS,
    NOUN_SUFFIXES, VERB_ENDINGS,
)
from .polarity import (
    HIGH, LOW, CENTER_COLOR,
    determine_sentiment_abundance, abundance_color,
)

__all__ = [
    'ConceptCategory',
    'Concept',
    'ConceptRelationship',
    'MindmapNode',
    'MindmapEdge',
    'Mindmap',
    'ConceptExtractionResult',
    'tokenize',
    'extract_concepts',
    'extract_ecosystem_concepts',
    'extract_relationships',
    'extract_concepts_from_sentences',
    'build_mindmap',
    'analyze_concept_frequency',
    'filter_concepts_by_confidence',
    'is_common_word',
    'is_likely_noun',
]

EXACT_CONFIDENCE = 1.0
PARTIAL_CONFIDENCE = 0.7
HABITAT_CONFIDENCE = 0.8
VERB_CONFIDENCE = 0.9
HEURISTIC_CONFIDENCE = 0.5

MIN_TOKEN_LENGTH = 2
MIN_ECOSYSTEM_TOKEN_LENGTH = 3

_PUNCT_RE = re.compile(r"[^\w\s]")


# =============================================================================
# Data Structures
# =============================================================================

class ConceptCategory(str, Enum):
    CONCEPT = 'concept'
    HABITAT = 'habitat-trait'
    VERB = 'relationship-verb'

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Concept:
    """
    A single extracted token.

    Attributes:
        word: Lowercased surface form
        category: concept / habitat-trait / relationship-verb
        confidence: 1.0 exact lexicon match, 0.7 partial, fixed otherwise
        position: Token index in the source sentence
        source_text: The originating sentence
        abundance: 'high' or 'low' (ecosystem variant only)
        color: 'blue' (high) or 'orange' (low) (ecosystem variant only)
    """
    word: str
    category: ConceptCategory
    confidence: float
    position: int
    source_text: str
    abundance: Optional[str] = None
    color: Optional[str] = None


@dataclass(frozen=True)
class ConceptRelationship:
    source: str
    target: str
    verb: str
    confidence: float


@dataclass
class MindmapNode:
    id: str
    label: str
    category: str
    color: str
    size: float
    source_sentences: List[str] = field(default_factory=list)
    connections: List[str] = field(default_factory=list)


@dataclass
class MindmapEdge:
    id: str
    source: str
    target: str
    label: Optional[str] = None


@dataclass
class Mindmap:
    nodes: List[MindmapNode]
    edges: List[MindmapEdge]


@dataclass
class ConceptExtractionResult:
    concepts: List[Concept]
    relationships: List[ConceptRelationship]
    mindmap: Mindmap


# =============================================================================
# Tokenization and Lexicon Lookups
# =============================================================================

def tokenize(sentence: str, min_length: int = MIN_TOKEN_LENGTH,
             lowercase: bool = True) -> List[str]:
    """Strip punctuation to spaces, split on whitespace, drop short tokens."""
    text = _PUNCT_RE.sub(' ', sentence or '')
    if lowercase:
        text = text.lower()
    return [t for t in text.split() if len(t) >= min_length]


def _find_noun_match(word: str, relevant_nouns: Dict[str, List[str]]) -> Optional[float]:
    """Confidence of the best noun-lexicon match, or None."""
    for nouns in relevant_nouns.values():
        if word in nouns:
            return EXACT_CONFIDENCE
    for nouns in relevant_nouns.values():
        for noun in nouns:
            if noun in word or word in noun:
                return PARTIAL_CONFIDENCE
    return None


def is_common_word(word: str) -> bool:
    return word.lower() in COMMON_WORDS


def is_likely_noun(word: str, capitalized: bool = False) -> bool:
    """
    Last-resort noun heuristic for words outside every lexicon.

    Verb-like endings and known verbs reject; noun suffixes, the known
    noun list and capitalisation accept; otherwise only words of 4+
    characters without verb fragments pass.
    """
    word = word.lower()
    if is_common_word(word):
        return False
    if word.endswith(VERB_ENDINGS) or word in COMMON_VERBS:
        return False
    if word.endswith(NOUN_SUFFIXES):
        return True
    if word in LIKELY_NOUNS:
        return True
    if capitalized and len(word) > 2:
        return True
    return len(word) >= 4 and 'ing' not in word and 'ed' not in word


# =============================================================================
# Extraction
# =============================================================================

def extract_concepts(sentence: str, target_entity: str) -> List[Concept]:
    """
    General concept extraction.

    Each token is tried against the entity nouns, the habitat list and
    the verb list in turn; every list it belongs to yields a concept.

    Args:
        sentence: Free-text sentence
        target_entity: Subject label used to pick the noun lexicon

    Returns:
        List of Concept (empty for empty/whitespace input)
    """
    relevant_nouns = get_relevant_nouns(target_entity)
    concepts = []

    for position, word in enumerate(tokenize(sentence, MIN_TOKEN_LENGTH)):
        confidence = _find_noun_match(word, relevant_nouns)
        if confidence is not None:
            concepts.append(Concept(word, ConceptCategory.CONCEPT, confidence,
                                    position, sentence))
        if word in HABITAT_KEYWORDS:
            concepts.append(Concept(word, ConceptCategory.HABITAT, HABITAT_CONFIDENCE,
                                    position, sentence))
        if word in RELATIONSHIP_VERBS:
            concepts.append(Concept(word, ConceptCategory.VERB, VERB_CONFIDENCE,
                                    position, sentence))

    return concepts


def _classify_for_ecosystem(
    word: str,
    relevant_nouns: Dict[str, List[str]],
    capitalized: bool
) -> Optional[Tuple[ConceptCategory, float]]:
    confidence = _find_noun_match(word, relevant_nouns)
    if confidence is not None:
        return ConceptCategory.CONCEPT, confidence
    if word in HABITAT_KEYWORDS:
        return ConceptCategory.HABITAT, HABITAT_CONFIDENCE
    if word in RELATIONSHIP_VERBS:
        return None
    if is_common_word(word):
        return None
    if is_likely_noun(word, capitalized=capitalized):
        return ConceptCategory.CONCEPT, HEURISTIC_CONFIDENCE
    return None


def extract_ecosystem_concepts(
    sentence: str,
    target_entity: str,
    verbose: bool = False
) -> List[Concept]:
    """
    Strict extraction for the ecosystem mindmap.

    One concept per unique word (first occurrence wins the position).
    Verbs and common words are discarded; everything kept is tagged with
    its abundance in this sentence.

    Args:
        sentence: Free-text sentence
        target_entity: Subject label
        verbose: Print the abundance decision for each kept word

    Returns:
        List of Concept with abundance and color set
    """
    relevant_nouns = get_relevant_nouns(target_entity)
    raw_tokens = tokenize(sentence, MIN_ECOSYSTEM_TOKEN_LENGTH, lowercase=False)

    first_seen: Dict[str, Tuple[int, bool]] = {}
    for position, token in enumerate(raw_tokens):
        word = token.lower()
        if word not in first_seen:
            # Capitalisation only means something away from the sentence start
            first_seen[word] = (position, position > 0 and token[0].isupper())

    concepts = []
    for word, (position, capitalized) in first_seen.items():
        decision = _classify_for_ecosystem(word, relevant_nouns, capitalized)
        if decision is None:
            continue
        category, confidence = decision
        abundance = determine_sentiment_abundance(sentence, word, target_entity,
                                                  verbose=verbose)
        concepts.append(Concept(
            word=word,
            category=category,
            confidence=confidence,
            position=position,
            source_text=sentence,
            abundance=abundance,
            color=abundance_color(abundance),
        ))

    return concepts


def extract_relationships(
    sentence: str,
    concepts: Sequence[Concept]
) -> List[ConceptRelationship]:
    """
    Noun - verb - noun triples from one sentence's general concepts.

    Every concept noun before a verb is linked to every concept noun after
    it. Confidence is the weakest of the three parts.
    """
    nouns = [c for c in concepts if c.category == ConceptCategory.CONCEPT]
    relationships = []

    for verb in (c for c in concepts if c.category == ConceptCategory.VERB):
        before = [n for n in nouns if n.position < verb.position]
        after = [n for n in nouns if n.position > verb.position]
        for source in before:
            for target in after:
                relationships.append(ConceptRelationship(
                    source=source.word,
                    target=target.word,
                    verb=verb.word,
                    confidence=min(source.confidence, target.confidence, verb.confidence),
                ))

    return relationships


def analyze_concept_frequency(concepts: Sequence[Concept]) -> Dict[str, int]:
    """Occurrences of each concept word."""
    return dict(Counter(c.word.lower() for c in concepts))


def filter_concepts_by_confidence(
    concepts: Sequence[Concept],
    min_confidence: float = 0.5
) -> List[Concept]:
    return [c for c in concepts if c.confidence >= min_confidence]


# =============================================================================
# Mindmap
# =============================================================================

def build_mindmap(sentences: Sequence[str], target_entity: str) -> Mindmap:
    """
    Mindmap of what the agent was taught about an entity.

    The entity sits at the center (purple). Each unique ecosystem concept
    becomes a node coloured by its majority abundance across sentences
    (ties go to 'high'), sized by frequency. Verb relationships between
    concepts become labelled edges.

    Args:
        sentences: Taught sentences
        target_entity: The center entity

    Returns:
        Mindmap
    """
    center_label = (target_entity or '').lower()
    center_id = 'center'

    by_word: Dict[str, List[Concept]] = defaultdict(list)
    sources: Dict[str, List[str]] = defaultdict(list)
    relationships = []

    for sentence in sentences:
        for concept in extract_ecosystem_concepts(sentence, target_entity):
            if concept.word == center_label:
                continue
            by_word[concept.word].append(concept)
            if sentence not in sources[concept.word]:
                sources[concept.word].append(sentence)
        relationships.extend(extract_relationships(sentence,
                                                   extract_concepts(sentence, target_entity)))

    nodes = [MindmapNode(
        id=center_id,
        label=center_label,
        category=ConceptCategory.CONCEPT.value,
        color=CENTER_COLOR,
        size=100.0,
        source_sentences=list(sentences),
    )]
    edges = []
    node_ids = {}

    for i, (word, group) in enumerate(by_word.items()):
        node_id = f"concept-{i}"
        node_ids[word] = node_id
        n_high = sum(1 for c in group if c.abundance == HIGH)
        abundance = HIGH if n_high * 2 >= len(group) else LOW
        size = max(30.0, min(100.0, 30.0 + 20.0 * len(group)))
        nodes.append(MindmapNode(
            id=node_id,
            label=word,
            category=group[0].category.value,
            color=abundance_color(abundance),
            size=size,
            source_sentences=sources[word],
            connections=[center_label],
        ))
        edges.append(MindmapEdge(id=f"edge-{center_id}-{node_id}",
                                 source=center_id, target=node_id))

    node_by_id = {n.id: n for n in nodes}
    for rel in relationships:
        src = center_id if rel.source == center_label else node_ids.get(rel.source)
        tgt = center_id if rel.target == center_label else node_ids.get(rel.target)
        if src is None or tgt is None or src == tgt:
            continue
        edge_id = f"edge-{src}-{tgt}-{rel.verb}"
        if any(e.id == edge_id for e in edges):
            continue
        edges.append(MindmapEdge(id=edge_id, source=src, target=tgt, label=rel.verb))
        for a, b in ((src, tgt), (tgt, src)):
            other = node_by_id[b].label
            if other not in node_by_id[a].connections:
                node_by_id[a].connections.append(other)

    return Mindmap(nodes=nodes, edges=edges)


def extract_concepts_from_sentences(
    sentences: Sequence[str],
    target_entity: str
) -> ConceptExtractionResult:
    """General concepts and relationships for many sentences, plus the mindmap."""
    concepts = []
    relationships = []
    for sentence in sentences:
        found = extract_concepts(sentence, target_entity)
        concepts.extend(found)
        relationships.extend(extract_relationships(sentence, found))

    return ConceptExtractionResult(
        concepts=concepts,
        relationships=relationships,
        mindmap=build_mindmap(sentences, target_entity),
    )
