#!/usr/bin/env python3
"""
Tests for embedding providers and the provider lifecycle handle.

Async code is driven with asyncio.run; fake providers stand in for
real models.

Usage:
    pytest ecosense/test_embeddings.py
"""

import asyncio
import sys
import threading
import time

import numpy as np
import pytest

from ecosense.embeddings import (
    cosine_similarity,
    EmbeddingProvider, StaticEmbeddingProvider, SentenceTransformerProvider,
    EmbeddingHandle, ProviderState,
)


class CountingProvider(EmbeddingProvider):
    """Slow to load; counts loads and embeds."""

    name = 'counting'

    def __init__(self, delay: float = 0.05):
        super().__init__()
        self.delay = delay
        self.load_calls = 0
        self.embed_calls = 0
        self._lock = threading.Lock()

    def load(self):
        with self._lock:
            self.load_calls += 1
        time.sleep(self.delay)
        super().load()

    def _embed(self, text):
        self.embed_calls += 1
        return np.ones(3, dtype=np.float32)


class BrokenProvider(EmbeddingProvider):
    name = 'broken'

    def load(self):
        raise OSError("model file not found")


# =============================================================================
# Cosine Similarity
# =============================================================================

def test_cosine_similarity():
    assert cosine_similarity(np.array([1.0, 0.0]), np.array([2.0, 0.0])) == pytest.approx(1.0)
    assert cosine_similarity(np.array([1.0, 0.0]), np.array([0.0, 1.0])) == pytest.approx(0.0)
    assert cosine_similarity(np.array([1.0, 0.0]), np.array([-1.0, 0.0])) == pytest.approx(-1.0)


def test_cosine_degenerate_inputs():
    assert cosine_similarity(np.zeros(3), np.ones(3)) == 0.0
    assert cosine_similarity(np.ones(2), np.ones(3)) == 0.0


# =============================================================================
# Static Word Vectors
# =============================================================================

def test_static_provider_averages_word_vectors():
    p = StaticEmbeddingProvider.from_dict({'water': [1, 0], 'sand': [0, 1]})
    p.load()
    np.testing.assert_allclose(p.embed("Water, sand!"), [0.5, 0.5])
    np.testing.assert_allclose(p.embed("unknown words"), [0.0, 0.0])


def test_embed_before_load_raises():
    p = StaticEmbeddingProvider.from_dict({'water': [1, 0]})
    with pytest.raises(RuntimeError):
        p.embed("water")


def test_static_provider_needs_a_source():
    with pytest.raises(ValueError):
        StaticEmbeddingProvider()
    with pytest.raises(ValueError):
        StaticEmbeddingProvider(embeddings={}).load()


def test_glove_file_is_read_on_load(tmp_path):
    path = tmp_path / "vectors.txt"
    path.write_text("water 1.0 0.0 0.0\nsand 0.0 2.0 0.0\nsnow 0.0 0.0 3.0\n", encoding='utf-8')

    p = StaticEmbeddingProvider.from_glove(str(path), max_words=2)
    assert not p.is_loaded
    p.load()
    assert p.vocab == {'water', 'sand'}
    assert p.dim == 3
    np.testing.assert_allclose(p.embed("sand"), [0.0, 1.0, 0.0], atol=1e-6)


def _word2vec_bytes(rows):
    body = b"".join(word.encode() + b" " + np.array(vec, dtype='<f4').tobytes() + b"\n"
                   for word, vec in rows)
    return f"{len(rows)} 3\n".encode() + body


def test_word2vec_binary_file(tmp_path):
    path = tmp_path / "vectors.bin"
    path.write_bytes(_word2vec_bytes([('water', [1, 0, 0]), ('sand', [0, 2, 0])]))

    p = StaticEmbeddingProvider.from_word2vec(str(path))
    p.load()
    assert p.vocab == {'water', 'sand'}
    assert p.dim == 3
    np.testing.assert_allclose(p.embed("sand"), [0.0, 1.0, 0.0], atol=1e-6)


def test_word2vec_binary_respects_max_words(tmp_path):
    path = tmp_path / "vectors.bin"
    path.write_bytes(_word2vec_bytes([('water', [1, 0, 0]), ('sand', [0, 1, 0]),
                                      ('snow', [0, 0, 1])]))
    p = StaticEmbeddingProvider.from_word2vec(str(path), max_words=2)
    p.load()
    assert p.vocab == {'water', 'sand'}


def test_glove_bin_suffix_reads_word2vec_binary(tmp_path):
    path = tmp_path / "glove.bin"
    path.write_bytes(_word2vec_bytes([('ice', [0, 0, 1])]))
    p = StaticEmbeddingProvider.from_glove(str(path))
    p.load()
    assert p.vocab == {'ice'}


def test_word2vec_text_file(tmp_path):
    path = tmp_path / "vectors.txt"
    path.write_text("2 3\nwater 1 0 0\nsand 0 1 0\n", encoding='utf-8')
    p = StaticEmbeddingProvider.from_word2vec(str(path), binary=False)
    p.load()
    assert p.vocab == {'water', 'sand'}
    np.testing.assert_allclose(p.embed("water"), [1.0, 0.0, 0.0], atol=1e-6)


def test_word2vec_bad_header(tmp_path):
    path = tmp_path / "vectors.txt"
    path.write_text("water 1 0 0\n", encoding='utf-8')
    with pytest.raises(ValueError, match="header"):
        StaticEmbeddingProvider.from_word2vec(str(path), binary=False).load()


def test_missing_file_fails_on_load_not_construction(tmp_path):
    p = StaticEmbeddingProvider.from_glove(str(tmp_path / "missing.txt"))
    with pytest.raises(OSError):
        p.load()


def test_sentence_transformer_missing_dependency(monkeypatch):
    monkeypatch.setitem(sys.modules, 'sentence_transformers', None)
    p = SentenceTransformerProvider()
    with pytest.raises(ImportError, match="ecosense\\[full\\]"):
        p.load()


# =============================================================================
# Lifecycle Handle
# =============================================================================

def test_handle_without_provider_is_fallback_only():
    handle = EmbeddingHandle()
    assert handle.state is ProviderState.FALLBACK_ONLY
    assert asyncio.run(handle.ensure_initialized()) is False
    assert handle.status() == {'state': 'fallback-only', 'provider': 'none', 'initialized': False}


def test_handle_loads_once():
    provider = CountingProvider()
    handle = EmbeddingHandle(provider)
    assert handle.state is ProviderState.UNINITIALIZED

    async def run():
        first = await handle.ensure_initialized()
        second = await handle.ensure_initialized()
        return first, second

    assert asyncio.run(run()) == (True, True)
    assert provider.load_calls == 1
    assert handle.state is ProviderState.READY


def test_concurrent_callers_share_one_load():
    provider = CountingProvider(delay=0.1)
    handle = EmbeddingHandle(provider)

    async def run():
        return await asyncio.gather(*(handle.ensure_initialized() for _ in range(5)))

    assert asyncio.run(run()) == [True] * 5
    assert provider.load_calls == 1


def test_failed_load_falls_back_with_warning():
    handle = EmbeddingHandle(BrokenProvider())
    with pytest.warns(RuntimeWarning, match="falling back"):
        ok = asyncio.run(handle.ensure_initialized())
    assert ok is False
    assert handle.state is ProviderState.FALLBACK_ONLY
    assert isinstance(handle.load_error, OSError)
    # No second attempt
    assert asyncio.run(handle.ensure_initialized()) is False


def test_handle_embed_requires_ready_provider():
    handle = EmbeddingHandle(CountingProvider())
    with pytest.raises(RuntimeError):
        asyncio.run(handle.embed("water"))


def test_description_vectors_are_cached():
    provider = CountingProvider(delay=0.0)
    handle = EmbeddingHandle(provider)
    descriptions = {'a': 'first text', 'b': 'second text'}

    async def run():
        await handle.ensure_initialized()
        await handle.description_vectors(descriptions)
        return await handle.description_vectors(descriptions)

    vectors = asyncio.run(run())
    assert set(vectors) == {'a', 'b'}
    assert provider.embed_calls == 2
