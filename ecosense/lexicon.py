#!/usr/bin/env python3
"""
Lexicon: Word Tables for Ecosystem Prediction
=============================================

Every static word list the pipeline consults lives here, keyed by the
closed set of ecosystem classes:

  - ECOSYSTEM_KEYWORDS / ECOSYSTEM_DESCRIPTIONS: per-class vocabulary
  - ANIMAL_NOUNS: entity-specific relevant nouns (bees, dolphins, ...)
  - HABITAT_KEYWORDS / RELATIONSHIP_VERBS: concept category lists
  - POSITIVE_INDICATORS / NEGATIVE_INDICATORS: abundance cues
  - NEGATION_WORDS / NEGATION_PHRASES / POSITIVE_CUES: sentence sentiment
  - COMMON_WORDS / LIKELY_NOUNS: filler filtering and noun heuristics
  - SEMANTIC_RELATIONSHIPS: seed word -> semantically adjacent words

Bump LEXICON_VERSION whenever a table changes; predictions are only
reproducible against the same revision.

Basic Usage:
    >>> from ecosense.lexicon import Ecosystem, ECOSYSTEM_KEYWORDS
    >>> ECOSYSTEM_KEYWORDS[Ecosystem.OCEAN][:3]
    ['water', 'ocean', 'sea']

License: MIT
"""

from enum import Enum
from typing import Dict, List, Mapping

__all__ = [
    'LEXICON_VERSION',
    'Ecosystem',
    'ECOSYSTEM_KEYWORDS',
    'ECOSYSTEM_DESCRIPTIONS',
    'ANIMAL_NOUNS',
    'ENTITY_NOUN_GROUPS',
    'HABITAT_KEYWORDS',
    'RELATIONSHIP_VERBS',
    'POSITIVE_INDICATORS',
    'NEGATIVE_INDICATORS',
    'NEGATION_WORDS',
    'NEGATION_PHRASES',
    'POSITIVE_CUES',
    'COMMON_WORDS',
    'COMMON_VERBS',
    'LIKELY_NOUNS',
    'NOUN_SUFFIXES',
    'VERB_ENDINGS',
    'SEMANTIC_RELATIONSHIPS',
    'get_relevant_nouns',
]

LEXICON_VERSION = "1.2.0"


# =============================================================================
# Ecosystem Classes
# =============================================================================

class Ecosystem(str, Enum):
    """The closed set of classes the predictor scores. Member order is the
    canonical class order (and the tie-break order)."""

    DESERT = 'desert'
    OCEAN = 'ocean'
    RAINFOREST = 'rainforest'
    GRASSLAND = 'grassland'
    TUNDRA = 'tundra'

    def __str__(self) -> str:
        return self.value


def _check_exhaustive(name: str, table: Mapping) -> None:
    """Fail at import time if a per-class table misses (or adds) a class."""
    missing = [e.value for e in Ecosystem if e not in table]
    extra = [k for k in table if not isinstance(k, Ecosystem)]
    if missing or extra:
        raise ValueError(f"{name} is not exhaustive over Ecosystem "
                         f"(missing={missing}, extra={extra})")


# =============================================================================
# Per-Class Vocabulary
# =============================================================================

ECOSYSTEM_KEYWORDS: Dict[Ecosystem, List[str]] = {
    Ecosystem.DESERT: ['hot', 'dry', 'sand', 'cactus', 'desert', 'arid', 'scarce'],
    Ecosystem.OCEAN: ['water', 'ocean', 'sea', 'swim', 'fish', 'waves', 'blue', 'marine'],
    Ecosystem.RAINFOREST: ['trees', 'forest', 'rain', 'green', 'jungle', 'tropical',
                           'flowers', 'canopy'],
    Ecosystem.GRASSLAND: ['grass', 'field', 'open', 'plain', 'meadow', 'prairie', 'savanna'],
    Ecosystem.TUNDRA: ['cold', 'snow', 'ice', 'arctic', 'frozen', 'winter', 'polar'],
}

# Short keyword "documents" compared against sentences in embedding space
ECOSYSTEM_DESCRIPTIONS: Dict[Ecosystem, str] = {
    Ecosystem.DESERT: 'hot dry arid sandy cactus scarce water extreme temperatures',
    Ecosystem.OCEAN: 'water sea marine aquatic fish swim saltwater waves blue deep',
    Ecosystem.RAINFOREST: 'trees forest jungle tropical humid rain green canopy dense vegetation',
    Ecosystem.GRASSLAND: 'grass plains savanna open prairie meadow field graze herd',
    Ecosystem.TUNDRA: 'cold snow ice frozen arctic winter polar extreme cold temperatures',
}

_check_exhaustive('ECOSYSTEM_KEYWORDS', ECOSYSTEM_KEYWORDS)
_check_exhaustive('ECOSYSTEM_DESCRIPTIONS', ECOSYSTEM_DESCRIPTIONS)


# =============================================================================
# Entity-Specific Nouns
# =============================================================================

ANIMAL_NOUNS: Dict[str, List[str]] = {
    # Bees
    'bees': ['bee', 'bees', 'honeybee', 'honeybees', 'worker', 'queen', 'drone'],
    'bee_habitat': ['hive', 'hives', 'nest', 'nests', 'colony', 'colonies', 'comb', 'combs'],
    'bee_food': ['nectar', 'pollen', 'honey', 'flowers', 'blossoms', 'blooms'],
    'bee_behavior': ['swarm', 'swarms', 'dance', 'dances', 'buzz', 'buzzing'],

    # Dolphins
    'dolphins': ['dolphin', 'dolphins', 'porpoise', 'porpoises', 'cetacean', 'cetaceans'],
    'dolphin_habitat': ['ocean', 'oceans', 'sea', 'seas', 'water', 'waves', 'currents'],
    'dolphin_behavior': ['swim', 'swimming', 'jump', 'jumping', 'dive', 'diving', 'pod', 'pods'],
    'dolphin_food': ['fish', 'fishes', 'squid', 'octopus', 'marine', 'prey'],

    # Monkeys
    'monkeys': ['monkey', 'monkeys', 'ape', 'apes', 'primate', 'primates'],
    'monkey_habitat': ['trees', 'tree', 'forest', 'forests', 'jungle', 'jungles',
                       'canopy', 'branches'],
    'monkey_behavior': ['climb', 'climbing', 'swing', 'swinging', 'jump', 'jumping',
                        'groom', 'grooming'],
    'monkey_food': ['fruit', 'fruits', 'leaves', 'nuts', 'seeds', 'bananas', 'berries'],

    # Zebras
    'zebras': ['zebra', 'zebras', 'equine', 'equines', 'herd', 'herds'],
    'zebra_habitat': ['grass', 'plains', 'savanna', 'savannas', 'grassland', 'grasslands',
                      'field', 'fields'],
    'zebra_behavior': ['graze', 'grazing', 'run', 'running', 'gallop', 'galloping', 'stampede'],
    'zebra_food': ['grass', 'plants', 'vegetation', 'hay'],
}

# entity stem -> noun groups that belong to it
ENTITY_NOUN_GROUPS: Dict[str, List[str]] = {
    'bee': ['bees', 'bee_habitat', 'bee_food', 'bee_behavior'],
    'dolphin': ['dolphins', 'dolphin_habitat', 'dolphin_behavior', 'dolphin_food'],
    'monkey': ['monkeys', 'monkey_habitat', 'monkey_behavior', 'monkey_food'],
    'zebra': ['zebras', 'zebra_habitat', 'zebra_behavior', 'zebra_food'],
}

# Unknown entities get the union of every entity's own noun group
_DEFAULT_NOUN_GROUPS = ['bees', 'dolphins', 'monkeys', 'zebras']


def get_relevant_nouns(entity: str) -> Dict[str, List[str]]:
    """
    Select the noun groups relevant to a target entity.

    Args:
        entity: Caller-defined subject label, e.g. 'bees' or 'Dolphins'

    Returns:
        Dict mapping group name to noun list
    """
    lowered = (entity or '').lower()
    for stem, groups in ENTITY_NOUN_GROUPS.items():
        if stem in lowered:
            return {g: ANIMAL_NOUNS[g] for g in groups}
    return {g: ANIMAL_NOUNS[g] for g in _DEFAULT_NOUN_GROUPS}


# =============================================================================
# Concept Category Lists
# =============================================================================

RELATIONSHIP_VERBS = frozenset([
    'eat', 'eats', 'eating', 'consume', 'consumes', 'consuming',
    'drink', 'drinks', 'drinking', 'sip', 'sips', 'sipping',
    'live', 'lives', 'living', 'dwell', 'dwells', 'dwelling', 'inhabit', 'inhabits',
    'fly', 'flies', 'flying', 'soar', 'soars', 'soaring',
    'swim', 'swims', 'swimming', 'dive', 'dives', 'diving',
    'climb', 'climbs', 'climbing', 'scale', 'scales', 'scaling',
    'run', 'runs', 'running', 'gallop', 'gallops', 'galloping',
    'jump', 'jumps', 'jumping', 'leap', 'leaps', 'leaping',
    'collect', 'collects', 'collecting', 'gather', 'gathers', 'gathering',
    'build', 'builds', 'building', 'construct', 'constructs', 'constructing',
    'make', 'makes', 'making', 'create', 'creates', 'creating',
    'find', 'finds', 'finding', 'discover', 'discovers', 'discovering',
    'hide', 'hides', 'hiding', 'conceal', 'conceals', 'concealing',
    'hunt', 'hunts', 'hunting', 'chase', 'chases', 'chasing',
    'play', 'plays', 'playing', 'frolic', 'frolics', 'frolicking',
    'sleep', 'sleeps', 'sleeping', 'rest', 'rests', 'resting',
])

HABITAT_KEYWORDS = frozenset([
    'hot', 'cold', 'warm', 'cool', 'wet', 'dry', 'humid', 'arid',
    'sunny', 'shady', 'bright', 'dark', 'loud', 'quiet',
    'trees', 'grass', 'water', 'sand', 'rocks', 'soil', 'mud',
    'forest', 'jungle', 'desert', 'ocean', 'sea', 'river', 'lake',
    'mountains', 'plains', 'valley', 'cave', 'burrow', 'nest',
])


# =============================================================================
# Abundance (Per-Word Polarity) Indicators
# =============================================================================

POSITIVE_INDICATORS = [
    'live', 'lives', 'live in', 'lives in', 'found in', 'found', 'inhabit', 'inhabits',
    'make', 'makes', 'produce', 'produces', 'create', 'creates', 'build', 'builds',
    'eat', 'eats', 'consume', 'consumes', 'feed on', 'feeds on', 'drink', 'drinks',
    'have', 'has', 'contain', 'contains', 'full of', 'rich in', 'abundant', 'plenty',
    'like', 'likes', 'love', 'loves', 'enjoy', 'enjoys', 'prefer', 'prefers',
    'good', 'great', 'excellent', 'perfect', 'ideal', 'suitable', 'beneficial',
    'help', 'helps', 'support', 'supports', 'protect', 'protects', 'benefit', 'benefits',
]

NEGATIVE_INDICATORS = [
    "don't", 'do not', "doesn't", 'does not', 'never', 'not', 'avoid', 'avoids',
    'hate', 'hates', 'dislike', 'dislikes', 'harmful', 'dangerous', 'toxic', 'poisonous',
    'bad', 'terrible', 'awful', 'poor', 'inadequate', 'insufficient', 'lack', 'lacks',
    'without', 'no', 'none', 'little', 'few', 'scarce', 'rare', 'uncommon',
    'kill', 'kills', 'destroy', 'destroys', 'damage', 'damages', 'hurt', 'hurts',
    'threaten', 'threatens', 'endanger', 'endangers', 'risk', 'risks',
]

# Alternations used inside the proximity templates of the polarity module
POSITIVE_ENTITY_VERBS = ('live|lives|inhabit|inhabits|found|make|produce|eat|consume|have|'
                         'contain|like|likes|love|loves|visit|visits|collect|collects|'
                         'gather|gathers|feed|feeds|drink|drinks')
POSITIVE_OBJECT_VERBS = 'contain|contains|have|has|support|supports|provide|provides|attract|attracts|feed|feeds'
POSITIVE_ADJECTIVES = 'good|great|excellent|perfect|ideal|suitable|beneficial|rich|abundant'
NEGATIVE_ENTITY_VERBS = "don't|do not|doesn't|does not|never|avoid|hate|dislike"
NEGATIVE_OBJECT_ADJECTIVES = 'harmful|dangerous|toxic|poisonous|bad|terrible|awful'
NEGATIVE_ADJECTIVES = 'bad|terrible|awful|poor|inadequate|insufficient|scarce|rare'
ABSENCE_WORDS = 'lack|lacks|without|no|none|little|few'


# =============================================================================
# Sentence-Level Sentiment
# =============================================================================

# Phrases scope over the next three words, single words over the next two
NEGATION_PHRASES = ["don't like", "doesn't like", "don't want", "doesn't want",
                    'avoid', 'stay away from']
NEGATION_WORDS = ["don't", "doesn't", 'not', 'never', 'avoid', 'hate', 'dislike',
                  "can't", "won't"]
POSITIVE_CUES = ['like', 'love', 'enjoy', 'prefer', 'thrive', 'live in', 'habitat', 'home']


# =============================================================================
# Filler Filtering and Noun Heuristics
# =============================================================================

COMMON_VERBS = frozenset([
    'like', 'likes', 'love', 'loves', 'want', 'wants', 'need', 'needs', 'get', 'gets',
    'make', 'makes', 'take', 'takes', 'give', 'gives', 'see', 'sees', 'know', 'knows',
    'think', 'thinks', 'feel', 'feels', 'seem', 'seems', 'look', 'looks', 'find', 'finds',
    'come', 'comes', 'go', 'goes', 'use', 'uses', 'work', 'works', 'call', 'calls',
    'try', 'tries', 'ask', 'asks', 'turn', 'turns', 'move', 'moves', 'play', 'plays',
    'run', 'runs', 'walk', 'walks', 'jump', 'jumps', 'fly', 'flies', 'swim', 'swims',
    'eat', 'eats', 'drink', 'drinks', 'sleep', 'sleeps', 'wake', 'wakes', 'live', 'lives',
    'die', 'dies', 'grow', 'grows', 'change', 'changes', 'help', 'helps', 'stop', 'stops',
    'start', 'starts', 'begin', 'begins', 'end', 'ends', 'finish', 'finishes',
    'visit', 'visits', 'collect', 'collects', 'gather', 'gathers', 'build', 'builds',
    'create', 'creates', 'produce', 'produces', 'consume', 'consumes', 'feed', 'feeds',
    'hunt', 'hunts', 'catch', 'catches', 'avoid', 'avoids', 'escape', 'escapes',
    'protect', 'protects', 'defend', 'defends', 'attack', 'attacks', 'fight', 'fights',
])

COMMON_WORDS = frozenset([
    'the', 'and', 'or', 'but', 'in', 'on', 'at', 'to', 'for', 'of', 'with', 'by',
    'from', 'up', 'about', 'into', 'through', 'during', 'before', 'after', 'above',
    'below', 'between', 'among', 'this', 'that', 'these', 'those', 'a', 'an',
    'is', 'are', 'was', 'were', 'be', 'been', 'being', 'have', 'has', 'had',
    'do', 'does', 'did', 'will', 'would', 'could', 'should', 'may', 'might',
    'can', 'must', 'shall', 'very', 'quite', 'rather', 'just', 'only', 'also',
    'too', 'either', 'neither', 'both', 'all', 'some', 'any', 'no', 'not',
    'here', 'there', 'where', 'when', 'why', 'how', 'what', 'who', 'which',
    'they', 'them', 'their', 'it', 'its', 'lots', 'don', 'doesn', 'can', 'won',
    'sit', 'sits', 'stand', 'stands', 'open', 'opens', 'close', 'closes', 'show', 'shows',
    'hide', 'hides', 'keep', 'keeps', 'hold', 'holds', 'carry', 'carries', 'bring', 'brings',
    'send', 'sends', 'leave', 'leaves', 'stay', 'stays', 'wait', 'waits', 'watch', 'watches',
    'listen', 'listens', 'hear', 'hears', 'smell', 'smells', 'taste', 'tastes',
    'touch', 'touches', 'hurt', 'hurts', 'break', 'breaks', 'fix', 'fixes',
    'repair', 'repairs', 'clean', 'cleans', 'wash', 'washes', 'cut', 'cuts',
    'slice', 'slices', 'cook', 'cooks', 'bake', 'bakes', 'boil', 'boils',
    'freeze', 'freezes', 'melt', 'melts', 'burn', 'burns', 'light', 'lights',
    'learn', 'learns', 'teach', 'teaches', 'study', 'studies', 'read', 'reads',
    'write', 'writes', 'speak', 'speaks', 'talk', 'talks', 'tell', 'tells',
    'say', 'says', 'sing', 'sings', 'dance', 'dances', 'draw', 'draws',
    'paint', 'paints',
]) | COMMON_VERBS

LIKELY_NOUNS = frozenset([
    'animal', 'animals', 'creature', 'creatures', 'species', 'group', 'family',
    'food', 'water', 'air', 'land', 'ground', 'tree', 'trees', 'plant', 'plants',
    'flower', 'flowers', 'fruit', 'fruits', 'seed', 'seeds', 'leaf', 'leaves',
    'home', 'house', 'nest', 'nests', 'cave', 'caves', 'hole', 'holes',
    'color', 'colors', 'size', 'shape', 'sound', 'sounds', 'smell', 'smells',
    'behavior', 'behaviors', 'habit', 'habits', 'pattern', 'patterns',
    'environment', 'environments', 'habitat', 'habitats', 'ecosystem', 'ecosystems',
    'honey', 'nectar', 'pollen', 'wax', 'venom', 'poison', 'milk', 'blood',
    'skin', 'fur', 'feather', 'feathers', 'wing', 'wings', 'tail', 'tails',
    'eye', 'eyes', 'ear', 'ears', 'nose', 'mouth', 'tooth', 'teeth',
    'leg', 'legs', 'foot', 'feet', 'hand', 'hands', 'finger', 'fingers',
    'bone', 'bones', 'muscle', 'muscles', 'brain', 'heart', 'lung', 'lungs',
    'egg', 'eggs', 'baby', 'babies', 'child', 'children', 'adult', 'adults',
    'male', 'males', 'female', 'females', 'parent', 'parents', 'offspring',
    'wasp', 'wasps', 'ant', 'ants', 'spider', 'spiders', 'fly', 'flies', 'bug', 'bugs',
])

NOUN_SUFFIXES = ('tion', 'sion', 'ness', 'ment', 'ity', 'ty', 'er', 'or', 'ist',
                 'ism', 'acy', 'cy')
VERB_ENDINGS = ('ing', 'ed', 'en', 'ize', 'ise', 'ify', 'ate', 'ute')


# =============================================================================
# Semantic Relationships (Word-Similarity Seeds)
# =============================================================================

SEMANTIC_RELATIONSHIPS: Dict[str, List[str]] = {
    # Trees & forest
    'tree': ['forest', 'jungle', 'rainforest', 'canopy', 'wood', 'trunk', 'branch',
             'branches', 'foliage'],
    'trees': ['forest', 'jungle', 'rainforest', 'canopy', 'wood', 'trunk', 'branch',
              'branches', 'foliage'],
    'branch': ['tree', 'forest', 'jungle', 'rainforest', 'canopy', 'trunk', 'wood'],
    'branches': ['tree', 'forest', 'jungle', 'rainforest', 'canopy', 'trunk', 'wood'],
    'leaf': ['tree', 'leaves', 'foliage', 'vegetation', 'green'],
    'leaves': ['tree', 'leaf', 'foliage', 'vegetation', 'green'],
    'vine': ['tree', 'forest', 'jungle', 'rainforest', 'tropical', 'plant'],
    'vines': ['tree', 'forest', 'jungle', 'rainforest', 'tropical', 'plant'],
    'fruit': ['tree', 'jungle', 'rainforest', 'tropical', 'plant'],
    'nuts': ['tree', 'jungle', 'forest', 'plant'],
    'jungle': ['tree', 'forest', 'rainforest', 'tropical', 'dense', 'green'],
    'forest': ['tree', 'jungle', 'rainforest', 'canopy', 'green', 'dense'],

    # Ocean & water
    'water': ['ocean', 'sea', 'aquatic', 'marine', 'wet', 'wave', 'waves'],
    'ocean': ['water', 'sea', 'marine', 'aquatic', 'saltwater', 'blue', 'deep'],
    'sea': ['water', 'ocean', 'marine', 'aquatic', 'saltwater', 'waves'],
    'wave': ['water', 'ocean', 'sea', 'beach', 'shore', 'surf'],
    'waves': ['water', 'ocean', 'sea', 'beach', 'shore', 'surf'],
    'shore': ['water', 'ocean', 'sea', 'beach', 'coast', 'sand'],
    'beach': ['water', 'ocean', 'sea', 'shore', 'sand', 'coast'],
    'coast': ['water', 'ocean', 'sea', 'beach', 'shore'],
    'clam': ['water', 'ocean', 'sea', 'marine', 'aquatic', 'shell'],
    'crabs': ['water', 'ocean', 'sea', 'marine', 'beach', 'shell'],
    'fish': ['water', 'ocean', 'sea', 'marine', 'aquatic'],
    'swim': ['water', 'ocean', 'sea', 'aquatic'],

    # Grassland & prairie
    'grass': ['field', 'plains', 'meadow', 'prairie', 'savanna', 'pasture', 'open'],
    'field': ['grass', 'plains', 'meadow', 'prairie', 'savanna', 'pasture', 'open'],
    'plains': ['grass', 'field', 'meadow', 'prairie', 'savanna', 'flat', 'open'],
    'herd': ['grass', 'field', 'plains', 'savanna', 'prairie', 'meadow', 'grazing', 'animals'],
    'herds': ['grass', 'field', 'plains', 'savanna', 'prairie', 'meadow', 'grazing', 'animals'],
    'hay': ['grass', 'field', 'plains', 'meadow', 'pasture', 'plant'],
    'pasture': ['grass', 'field', 'plains', 'meadow', 'prairie', 'grazing'],
    'prairie': ['grass', 'field', 'plains', 'meadow', 'savanna', 'open', 'flat'],
    'meadow': ['grass', 'field', 'plains', 'prairie', 'savanna', 'open'],
    'savanna': ['grass', 'plains', 'prairie', 'meadow', 'field', 'open'],

    # Tundra & cold
    'cold': ['snow', 'ice', 'frozen', 'arctic', 'polar', 'winter', 'tundra'],
    'snow': ['cold', 'ice', 'frozen', 'arctic', 'polar', 'winter', 'tundra'],
    'ice': ['cold', 'snow', 'frozen', 'arctic', 'polar', 'winter', 'tundra'],
    'frozen': ['cold', 'snow', 'ice', 'arctic', 'polar', 'winter'],
    'arctic': ['cold', 'snow', 'ice', 'polar', 'frozen', 'winter'],
    'polar': ['cold', 'snow', 'ice', 'arctic', 'frozen', 'winter'],
    'winter': ['cold', 'snow', 'ice', 'arctic', 'polar', 'frozen'],
    'blizzard': ['cold', 'snow', 'winter', 'storm', 'wind'],

    # Desert & dry
    'hot': ['desert', 'arid', 'dry', 'cactus', 'sun', 'sunny'],
    'dry': ['desert', 'hot', 'arid', 'cactus', 'sand'],
    'sand': ['desert', 'dry', 'beach', 'arid', 'dune'],
    'cactus': ['desert', 'hot', 'dry', 'arid'],
    'sunny': ['hot', 'dry', 'desert', 'arid', 'sun'],
    'sun': ['hot', 'sunny', 'desert', 'dry'],
    'arid': ['desert', 'hot', 'dry', 'cactus', 'scarce'],
}
