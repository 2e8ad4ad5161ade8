#!/usr/bin/env python3
"""
Tests for concept extraction, relationships and the mindmap.

Usage:
    pytest ecosense/test_concepts.py
"""

from ecosense.concepts import (
    ConceptCategory, Concept,
    tokenize, extract_concepts, extract_ecosystem_concepts, extract_relationships,
    extract_concepts_from_sentences, build_mindmap,
    analyze_concept_frequency, filter_concepts_by_confidence, is_likely_noun,
)


def _triples(concepts):
    return {(c.word, c.category, c.confidence) for c in concepts}


# =============================================================================
# General Extraction
# =============================================================================

def test_tokenize_strips_punctuation_and_short_tokens():
    assert tokenize("Bees, live in a tree!") == ['bees', 'live', 'in', 'tree']
    assert tokenize("Bees live in a tree", min_length=3) == ['bees', 'live', 'tree']


def test_empty_input_yields_nothing():
    assert extract_concepts("", "bees") == []
    assert extract_concepts("   ", "bees") == []


def test_categories_and_confidences():
    triples = _triples(extract_concepts("Bees live in trees", "bees"))
    assert ('bees', ConceptCategory.CONCEPT, 1.0) in triples
    assert ('live', ConceptCategory.VERB, 0.9) in triples
    assert ('trees', ConceptCategory.HABITAT, 0.8) in triples


def test_partial_noun_match():
    triples = _triples(extract_concepts("Dolphins like seawater", "dolphins"))
    assert ('seawater', ConceptCategory.CONCEPT, 0.7) in triples


def test_token_can_yield_several_concepts():
    concepts = [c for c in extract_concepts("Bees build a nest", "bees") if c.word == 'nest']
    assert {c.category for c in concepts} == {ConceptCategory.CONCEPT, ConceptCategory.HABITAT}


def test_positions_and_source():
    concepts = extract_concepts("Zebras eat grass", "zebras")
    grass = [c for c in concepts if c.word == 'grass'][0]
    assert grass.position == 2
    assert grass.source_text == "Zebras eat grass"


# =============================================================================
# Ecosystem Extraction
# =============================================================================

def test_ecosystem_concepts_carry_abundance():
    concepts = extract_ecosystem_concepts("Bees don't like water", "bees")
    assert [(c.word, c.abundance, c.color) for c in concepts] == [
        ('bees', 'low', 'orange'),
        ('water', 'low', 'orange'),
    ]


def test_ecosystem_concepts_drop_verbs_and_filler():
    words = [c.word for c in extract_ecosystem_concepts("Bees live in the trees", "bees")]
    assert words == ['bees', 'trees']


def test_ecosystem_concepts_are_unique():
    words = [c.word for c in extract_ecosystem_concepts("Trees and more trees", "monkeys")]
    assert words.count('trees') == 1


def test_capitalisation_counts_away_from_sentence_start():
    words = [c.word for c in extract_ecosystem_concepts("Zebras like Sam", "zebras")]
    assert 'sam' in words
    words = [c.word for c in extract_ecosystem_concepts("Zebras like sam", "zebras")]
    assert 'sam' not in words


def test_is_likely_noun():
    assert is_likely_noun('migration')
    assert not is_likely_noun('running')
    assert not is_likely_noun('the')
    assert is_likely_noun('sam', capitalized=True)
    assert not is_likely_noun('sam')


# =============================================================================
# Relationships, Frequency and Mindmap
# =============================================================================

def test_relationship_confidence_is_weakest_part():
    sentence = "Bees collect nectar"
    rels = extract_relationships(sentence, extract_concepts(sentence, "bees"))
    assert len(rels) == 1
    assert (rels[0].source, rels[0].verb, rels[0].target) == ('bees', 'collect', 'nectar')
    assert rels[0].confidence == 0.9


def test_frequency_and_filter():
    concepts = [
        Concept('water', ConceptCategory.HABITAT, 0.8, 0, 's1'),
        Concept('Water', ConceptCategory.HABITAT, 0.8, 1, 's2'),
        Concept('thing', ConceptCategory.CONCEPT, 0.4, 2, 's2'),
    ]
    assert analyze_concept_frequency(concepts) == {'water': 2, 'thing': 1}
    assert [c.word for c in filter_concepts_by_confidence(concepts)] == ['water', 'Water']


def test_mindmap_center_and_colours():
    mindmap = build_mindmap(["Bees live in trees", "Bees don't like water"], "bees")
    center = mindmap.nodes[0]
    assert center.id == 'center'
    assert center.label == 'bees'
    assert center.color == 'purple'

    colours = {n.label: n.color for n in mindmap.nodes[1:]}
    assert colours['trees'] == 'blue'
    assert colours['water'] == 'orange'
    assert all(e.source == 'center' for e in mindmap.edges)


def test_mindmap_majority_tie_goes_high():
    mindmap = build_mindmap(["Bees live in trees", "Bees don't like trees"], "bees")
    trees = [n for n in mindmap.nodes if n.label == 'trees'][0]
    assert trees.color == 'blue'
    assert trees.size == 70.0
    assert len(trees.source_sentences) == 2


def test_mindmap_size_is_clamped():
    sentences = ["Monkeys climb trees"] * 6
    mindmap = build_mindmap(sentences, "monkeys")
    trees = [n for n in mindmap.nodes if n.label == 'trees'][0]
    assert trees.size == 100.0


def test_mindmap_verb_edges():
    mindmap = build_mindmap(["Bees collect nectar"], "bees")
    labelled = [e for e in mindmap.edges if e.label]
    assert len(labelled) == 1
    assert labelled[0].label == 'collect'
    assert labelled[0].source == 'center'


def test_extract_concepts_from_sentences():
    result = extract_concepts_from_sentences(["Bees collect nectar", "Bees live in trees"], "bees")
    assert any(c.word == 'nectar' for c in result.concepts)
    assert any(r.verb == 'collect' for r in result.relationships)
    assert result.mindmap.nodes[0].color == 'purple'
