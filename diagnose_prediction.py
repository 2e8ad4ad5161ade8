#!/usr/bin/env python3
"""
Diagnostic script for ecosystem prediction.

Prints how every sentence scores against every class, so it is easy to
see which sentence (and which polarity cue) moves the prediction.

Usage:
    python diagnose_prediction.py --animal bees "Bees live in trees" "Bees don't like water"
"""

import argparse

from ecosense import EcosystemPredictor, Ecosystem, analyze_sentiment, extract_ecosystem_concepts

DEFAULT_SENTENCES = [
    "Bees live in trees",
    "Bees don't like water",
    "Bees collect nectar from flowers",
]

parser = argparse.ArgumentParser(description='Per-sentence score table')
parser.add_argument('sentences', nargs='*', default=DEFAULT_SENTENCES)
parser.add_argument('--animal', default='bees')
args = parser.parse_args()

# Same filtering as the predictor, so rows line up with sentence_scores
sentences = [s.strip() for s in args.sentences if s and s.strip()]

predictor = EcosystemPredictor(method='keyword')
result = predictor.predict_sync(sentences, args.animal)

print("=" * 72)
print(f"DIAGNOSTIC: per-sentence scores for '{args.animal}'")
print("=" * 72)

header = f"{'sentence':<36}" + "".join(f"{eco.value[:10]:>11}" for eco in Ecosystem)
print(header)
print("-" * len(header))
for sentence, scores in zip(sentences, result.sentence_scores):
    print(f"{sentence[:35]:<36}" + "".join(f"{scores[eco].score:>11.3f}" for eco in Ecosystem))

print("-" * len(header))
print(f"{'raw total':<36}" + "".join(f"{result.raw_scores[eco]:>11.3f}" for eco in Ecosystem))
print(f"{'probability':<36}" + "".join(f"{c.probability:>11.3f}" for c in result.classes))

print("\nSentiment and concepts:")
for sentence in sentences:
    sentiment = analyze_sentiment(sentence)
    concepts = extract_ecosystem_concepts(sentence, args.animal)
    print(f"  \"{sentence}\"")
    print(f"    positive={sentiment.is_positive} negative={sentiment.is_negative} "
          f"negated={sentiment.negated_words}")
    print(f"    concepts: " + ", ".join(f"{c.word} ({c.abundance})" for c in concepts))

print("\n" + "=" * 72)
top = result.top_class.value if result.top_class is not None else 'none'
print(f"Prediction: {top} ({result.confidence:.1%}, method={result.method})")
for line in result.reasoning:
    print(f"  - {line}")
