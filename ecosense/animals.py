#!/usr/bin/env python3
"""
Animal Reference Data
=====================

The four animals a learner can teach about, with their habitat
vocabulary and a prior affinity for each ecosystem. The affinity is
reference knowledge, used to grade answers and to suggest animals. It
never leaks into EcosystemPredictor, which only sees the sentences.

Basic Usage:
    >>> from ecosense.animals import get_most_likely_ecosystem, is_correct_answer
    >>> get_most_likely_ecosystem('dolphins')
    <Ecosystem.OCEAN: 'ocean'>
    >>> is_correct_answer('bees', 'grassland')
    True

License: MIT
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Union

from .lexicon import Ecosystem, ECOSYSTEM_KEYWORDS, _check_exhaustive

__all__ = [
    'Animal',
    'ANIMALS',
    'CORRECT_ANSWERS',
    'KEYWORD_BOOST',
    'AFFINITY_THRESHOLD',
    'get_animal',
    'get_most_likely_ecosystem',
    'is_habitat_keyword',
    'calculate_ecosystem_probability',
    'get_animals_for_ecosystem',
    'is_correct_answer',
]

KEYWORD_BOOST = 0.1
AFFINITY_THRESHOLD = 0.1


@dataclass
class Animal:
    """An animal the agent can be taught about."""
    name: str
    display_name: str
    habitat_keywords: List[str] = field(default_factory=list)
    ecosystem_affinity: Dict[Ecosystem, float] = field(default_factory=dict)

    def __post_init__(self):
        _check_exhaustive(f"{self.name} ecosystem_affinity", self.ecosystem_affinity)


ANIMALS: Dict[str, Animal] = {
    'bees': Animal(
        name='bees',
        display_name='Bees',
        habitat_keywords=['flowers', 'nectar', 'pollen', 'hive', 'trees', 'garden', 'meadow',
                          'plants', 'blossoms', 'honey', 'forest', 'warm', 'temperate'],
        ecosystem_affinity={
            Ecosystem.DESERT: 0.05,
            Ecosystem.OCEAN: 0.0,
            Ecosystem.RAINFOREST: 0.35,
            Ecosystem.GRASSLAND: 0.30,
            Ecosystem.TUNDRA: 0.05,
        },
    ),
    'dolphins': Animal(
        name='dolphins',
        display_name='Dolphins',
        habitat_keywords=['ocean', 'water', 'sea', 'saltwater', 'marine', 'coastal', 'swim',
                          'fish', 'waves', 'deep', 'pod', 'warm', 'tropical'],
        ecosystem_affinity={
            Ecosystem.DESERT: 0.0,
            Ecosystem.OCEAN: 0.95,
            Ecosystem.RAINFOREST: 0.0,
            Ecosystem.GRASSLAND: 0.0,
            # some dolphins live in cold waters
            Ecosystem.TUNDRA: 0.05,
        },
    ),
    'monkeys': Animal(
        name='monkeys',
        display_name='Monkeys',
        habitat_keywords=['trees', 'forest', 'jungle', 'canopy', 'branches', 'climb', 'fruit',
                          'leaves', 'tropical', 'warm', 'humid', 'rainforest', 'vines'],
        ecosystem_affinity={
            Ecosystem.DESERT: 0.0,
            Ecosystem.OCEAN: 0.0,
            Ecosystem.RAINFOREST: 0.85,
            Ecosystem.GRASSLAND: 0.10,
            Ecosystem.TUNDRA: 0.0,
        },
    ),
    'zebras': Animal(
        name='zebras',
        display_name='Zebras',
        habitat_keywords=['grass', 'plains', 'savanna', 'grassland', 'graze', 'herd', 'open',
                          'field', 'dry', 'warm', 'africa', 'prairie'],
        ecosystem_affinity={
            Ecosystem.DESERT: 0.05,
            Ecosystem.OCEAN: 0.0,
            Ecosystem.RAINFOREST: 0.0,
            Ecosystem.GRASSLAND: 0.90,
            Ecosystem.TUNDRA: 0.0,
        },
    ),
}

# Ecosystems accepted as a correct prediction for each animal
CORRECT_ANSWERS: Dict[str, List[Ecosystem]] = {
    'bees': [Ecosystem.RAINFOREST, Ecosystem.GRASSLAND],
    'dolphins': [Ecosystem.OCEAN],
    'monkeys': [Ecosystem.RAINFOREST],
    'zebras': [Ecosystem.GRASSLAND],
}


def get_animal(name: str) -> Animal:
    """
    Look up an animal by name (case-insensitive).

    Raises:
        ValueError: If the animal is unknown
    """
    key = (name or '').strip().lower()
    if key not in ANIMALS:
        raise ValueError(f"Unknown animal '{name}'. Known: {sorted(ANIMALS)}")
    return ANIMALS[key]


def get_most_likely_ecosystem(name: str) -> Ecosystem:
    """Ecosystem with the highest prior affinity (first in class order on ties)."""
    affinity = get_animal(name).ecosystem_affinity
    return max(Ecosystem, key=lambda eco: affinity[eco])


def is_habitat_keyword(name: str, keyword: str) -> bool:
    keyword = keyword.lower()
    return any(k.lower() == keyword for k in get_animal(name).habitat_keywords)


def calculate_ecosystem_probability(
    name: str,
    found_keywords: Iterable[str]
) -> Dict[Ecosystem, float]:
    """
    Prior-weighted ecosystem distribution from keywords found in sentences.

    Starts from the animal's affinity, adds 0.1 to a class for every found
    keyword that contains (or is contained in) one of the class keywords,
    then normalises to sum to 1.

    Args:
        name: Animal name
        found_keywords: Words extracted from the learner's sentences

    Returns:
        Dict mapping every Ecosystem to a probability
    """
    scores = dict(get_animal(name).ecosystem_affinity)

    for keyword in found_keywords:
        lowered = keyword.lower()
        for eco, class_keywords in ECOSYSTEM_KEYWORDS.items():
            if any(k in lowered or lowered in k for k in class_keywords):
                scores[eco] += KEYWORD_BOOST

    total = sum(scores.values())
    if total > 0:
        scores = {eco: score / total for eco, score in scores.items()}
    return {eco: scores[eco] for eco in Ecosystem}


def get_animals_for_ecosystem(ecosystem: Union[Ecosystem, str]) -> List[Animal]:
    """Animals with affinity above 0.1 for an ecosystem, strongest first."""
    eco = Ecosystem(ecosystem)
    candidates = [a for a in ANIMALS.values() if a.ecosystem_affinity[eco] > AFFINITY_THRESHOLD]
    return sorted(candidates, key=lambda a: a.ecosystem_affinity[eco], reverse=True)


def is_correct_answer(name: str, ecosystem: Union[Ecosystem, str, None]) -> bool:
    """Whether a predicted ecosystem is an accepted habitat for the animal."""
    if ecosystem is None:
        return False
    return Ecosystem(ecosystem) in CORRECT_ANSWERS.get(get_animal(name).name, [])
