#!/usr/bin/env python3
"""
Setup script for EcoSense package.
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="ecosense",
    version="0.3.0",
    description="Predict an animal's ecosystem from taught sentences",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Education",
        "Topic :: Scientific/Engineering :: Artificial Intelligence",
        "Topic :: Text Processing :: Linguistic",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.19.0",
    ],
    extras_require={
        "full": [
            "sentence-transformers>=2.2.0",  # For SentenceTransformerProvider
        ],
        "dev": [
            "pytest>=6.0",
            "black>=21.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "ecosense=ecosense.core:main",
        ],
    },
    keywords=[
        "text-classification",
        "sentence-embeddings",
        "keyword-matching",
        "sentiment",
        "negation",
        "education",
        "nlp",
    ],
)
