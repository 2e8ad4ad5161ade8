#!/usr/bin/env python3
"""
Embedding Providers: Pluggable Text Vectors
===========================================

The predictor treats embeddings as an optional capability. Anything that
can `load()` itself and `embed(text)` into a numpy vector can be plugged
in; when nothing is plugged in, or loading fails, prediction degrades to
keyword matching instead of failing.

Providers:
  - StaticEmbeddingProvider:      mean of static word vectors
                                  (GloVe text/binary, Word2Vec, dict)
  - SentenceTransformerProvider:  sentence-transformers model
                                  (optional dependency, imported lazily)

Lifecycle:
  EmbeddingHandle owns one provider and moves it through
      UNINITIALIZED -> INITIALIZING -> READY
                                    -> FALLBACK_ONLY (load failed / no provider)
  ensure_initialized() is idempotent, and concurrent callers await one
  shared in-flight load, so a model is never loaded twice.

Basic Usage:
    >>> provider = StaticEmbeddingProvider.from_glove("glove.6B.100d.txt")
    >>> handle = EmbeddingHandle(provider)
    >>> await handle.ensure_initialized()
    True

License: MIT
"""

import asyncio
import re
import warnings
from enum import Enum
from functools import partial
from pathlib import Path
from typing import BinaryIO, Callable, Dict, List, Mapping, Optional, Tuple, Union

import numpy as np
from numpy.linalg import norm

__all__ = [
    'DEFAULT_MODEL_NAME',
    'cosine_similarity',
    'EmbeddingProvider',
    'StaticEmbeddingProvider',
    'SentenceTransformerProvider',
    'ProviderState',
    'EmbeddingHandle',
]

DEFAULT_MODEL_NAME = 'all-MiniLM-L6-v2'

_TOKEN_RE = re.compile(r"[\w']+")


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """Cosine similarity; 0 for zero vectors or mismatched shapes."""
    a = np.asarray(a, dtype=np.float32).ravel()
    b = np.asarray(b, dtype=np.float32).ravel()
    if a.shape != b.shape:
        return 0.0
    denom = norm(a) * norm(b)
    if denom == 0:
        return 0.0
    return float(np.dot(a, b) / denom)


# =============================================================================
# Provider Interface
# =============================================================================

class EmbeddingProvider:
    """
    Base class for embedding providers.

    Subclasses implement `load()` (may be slow, may raise) and
    `_embed(text)`. `embed()` refuses to run before a successful load.
    """

    name = 'embedding-provider'

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self._loaded = False

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def load(self) -> None:
        self._loaded = True

    def embed(self, text: str) -> np.ndarray:
        if not self._loaded:
            raise RuntimeError(f"{self.name} used before load()")
        return self._embed(text)

    def _embed(self, text: str) -> np.ndarray:
        raise NotImplementedError

    def cosine_similarity(self, a: np.ndarray, b: np.ndarray) -> float:
        return cosine_similarity(a, b)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, loaded={self._loaded})"


# =============================================================================
# Static Word Vectors
# =============================================================================

def _read_text_vectors(f: BinaryIO, limit: int = None) -> Dict[str, np.ndarray]:
    """Rows of "<word> <float> <float> ..."; malformed rows are skipped."""
    embeddings = {}
    for line in f:
        parts = line.decode('utf-8', errors='replace').split()
        if len(parts) < 2:
            continue
        try:
            embeddings[parts[0]] = np.array(parts[1:], dtype=np.float32)
        except ValueError:
            continue
        if limit and len(embeddings) >= limit:
            break
    return embeddings


def _read_binary_vectors(f: BinaryIO, limit: int, dim: int) -> Dict[str, np.ndarray]:
    """Rows of "<word> " followed by dim little-endian float32s."""
    embeddings = {}
    width = dim * np.dtype(np.float32).itemsize
    for _ in range(limit):
        word = bytearray()
        while True:
            c = f.read(1)
            if c in (b' ', b''):
                break
            # Rows may be separated by a newline
            if c != b'\n':
                word.extend(c)
        data = f.read(width)
        if len(data) < width:
            break
        embeddings[word.decode('utf-8', errors='replace')] = np.frombuffer(
            data, dtype='<f4').astype(np.float32)
    return embeddings


class StaticEmbeddingProvider(EmbeddingProvider):
    """
    Sentence vector = mean of the (normalised) vectors of its
    in-vocabulary words. Out-of-vocabulary text embeds to a zero vector.

    Example:
        >>> p = StaticEmbeddingProvider.from_dict({'water': [1, 0], 'sand': [0, 1]})
        >>> p.load()
        >>> p.embed("water sand")
        array([0.5, 0.5], dtype=float32)
    """

    name = 'static-word-vectors'

    def __init__(
        self,
        embeddings: Dict[str, np.ndarray] = None,
        loader: Callable[[], Tuple[Dict[str, np.ndarray], int]] = None,
        verbose: bool = False
    ):
        """
        Args:
            embeddings: Dict mapping words to numpy vectors
            loader: Deferred loader returning (embeddings, dim); used when
                    `embeddings` is None so file reading happens in load()
            verbose: Print progress messages
        """
        super().__init__(verbose=verbose)
        if embeddings is None and loader is None:
            raise ValueError("Need either embeddings or a loader")
        self._raw = embeddings
        self._loader = loader
        self.dim = None
        self.vocab = set()
        self._embeddings_norm = {}

    @classmethod
    def from_glove(cls, filepath: str, max_words: int = None, **kwargs) -> 'StaticEmbeddingProvider':
        """GloVe text (.txt) or gensim-style binary (.bin); read on load()."""
        return cls(loader=partial(cls._load_glove, filepath, max_words,
                                  kwargs.get('verbose', False)), **kwargs)

    @classmethod
    def from_word2vec(cls, filepath: str, max_words: int = None, binary: bool = True,
                      **kwargs) -> 'StaticEmbeddingProvider':
        """Word2Vec format; read on load()."""
        return cls(loader=partial(cls._load_word2vec, filepath, max_words, binary,
                                  kwargs.get('verbose', False)), **kwargs)

    @classmethod
    def from_dict(cls, embeddings: Dict[str, Union[np.ndarray, List[float]]],
                  **kwargs) -> 'StaticEmbeddingProvider':
        """From a dict of numpy arrays or plain lists."""
        emb_dict = {}
        for word, vec in embeddings.items():
            if isinstance(vec, list):
                emb_dict[word] = np.array(vec, dtype=np.float32)
            else:
                emb_dict[word] = np.asarray(vec).astype(np.float32)
        return cls(embeddings=emb_dict, **kwargs)

    @staticmethod
    def _load_glove(filepath: str, max_words: int = None,
                    verbose: bool = False) -> Tuple[Dict[str, np.ndarray], int]:
        """GloVe has no header line; a .bin file is read as word2vec binary."""
        if Path(filepath).suffix == '.bin':
            return StaticEmbeddingProvider._load_word2vec(filepath, max_words, True, verbose)
        if verbose:
            print(f"Loading GloVe vectors from {filepath}...")
        with open(filepath, 'rb') as f:
            embeddings = _read_text_vectors(f, max_words)
        dim = len(next(iter(embeddings.values()))) if embeddings else None
        if verbose:
            print(f"Loaded {len(embeddings):,} vectors, dim={dim}")
        return embeddings, dim

    @staticmethod
    def _load_word2vec(filepath: str, max_words: int = None, binary: bool = True,
                       verbose: bool = False) -> Tuple[Dict[str, np.ndarray], int]:
        """Word2Vec: a "<count> <dim>" header, then binary or text rows."""
        if verbose:
            print(f"Loading Word2Vec vectors from {filepath}...")
        with open(filepath, 'rb') as f:
            try:
                count, dim = map(int, f.readline().split())
            except ValueError:
                raise ValueError(f"{filepath}: expected a '<count> <dim>' header")
            limit = min(count, max_words) if max_words else count
            if binary:
                embeddings = _read_binary_vectors(f, limit, dim)
            else:
                embeddings = _read_text_vectors(f, limit)
        if verbose:
            print(f"Loaded {len(embeddings):,} of {count:,} vectors, dim={dim}")
        return embeddings, dim

    def load(self) -> None:
        if self._loaded:
            return
        if self._raw is None:
            self._raw, _ = self._loader()
        if not self._raw:
            raise ValueError("No word vectors loaded")

        self.dim = len(next(iter(self._raw.values())))
        self.vocab = set(self._raw)
        for word, emb in self._raw.items():
            self._embeddings_norm[word.lower()] = emb / (norm(emb) + 1e-10)
        self._loaded = True

        if self.verbose:
            print(f"StaticEmbeddingProvider ready: {len(self.vocab):,} words, dim={self.dim}")

    def _embed(self, text: str) -> np.ndarray:
        vecs = [self._embeddings_norm[w] for w in _TOKEN_RE.findall(text.lower())
                if w in self._embeddings_norm]
        if not vecs:
            return np.zeros(self.dim, dtype=np.float32)
        return np.mean(vecs, axis=0).astype(np.float32)

    def __repr__(self) -> str:
        return f"StaticEmbeddingProvider(vocab={len(self.vocab)}, dim={self.dim}, loaded={self._loaded})"


# =============================================================================
# Sentence Transformers
# =============================================================================

def _import_sentence_transformer():
    """Lazy import of SentenceTransformer; raises clear error if missing."""
    try:
        from sentence_transformers import SentenceTransformer
        return SentenceTransformer
    except ImportError:
        raise ImportError(
            "sentence-transformers is required for SentenceTransformerProvider. "
            "Install with: pip install 'ecosense[full]'"
        )


class SentenceTransformerProvider(EmbeddingProvider):
    """Mean-pooled, normalised sentence embeddings from a transformer model."""

    name = 'sentence-transformers'

    def __init__(self, model_name: str = DEFAULT_MODEL_NAME, device: str = None,
                 verbose: bool = False):
        super().__init__(verbose=verbose)
        self.model_name = model_name
        self.device = device
        self.model = None

    def load(self) -> None:
        if self._loaded:
            return
        SentenceTransformer = _import_sentence_transformer()
        if self.verbose:
            print(f"Loading embedding model ({self.model_name})...")
        self.model = SentenceTransformer(self.model_name, device=self.device)
        self._loaded = True
        if self.verbose:
            print("Embedding model loaded")

    def _embed(self, text: str) -> np.ndarray:
        vec = self.model.encode(
            text,
            show_progress_bar=False,
            convert_to_numpy=True,
            normalize_embeddings=True,
        )
        return np.asarray(vec, dtype=np.float32)

    def __repr__(self) -> str:
        return f"SentenceTransformerProvider(model={self.model_name!r}, loaded={self._loaded})"


# =============================================================================
# Lifecycle Handle
# =============================================================================

class ProviderState(str, Enum):
    UNINITIALIZED = 'uninitialized'
    INITIALIZING = 'initializing'
    READY = 'ready'
    FALLBACK_ONLY = 'fallback-only'


class EmbeddingHandle:
    """
    Owns an embedding provider and its one-time initialisation.

    Blocking provider calls (load, embed) run in the event loop's default
    executor and are awaited one at a time.
    """

    def __init__(self, provider: Optional[EmbeddingProvider] = None, verbose: bool = False):
        self.provider = provider
        self.verbose = verbose
        self.state = ProviderState.UNINITIALIZED if provider is not None else ProviderState.FALLBACK_ONLY
        self.load_error: Optional[BaseException] = None
        self._init_task: Optional[asyncio.Future] = None
        self._description_cache: Dict[object, np.ndarray] = {}

    @property
    def available(self) -> bool:
        return self.state is ProviderState.READY

    async def ensure_initialized(self) -> bool:
        """
        Load the provider once. Safe to call repeatedly and concurrently.

        Returns:
            True if embeddings are usable, False if running keyword-only
        """
        if self.state in (ProviderState.READY, ProviderState.FALLBACK_ONLY):
            return self.available
        if self._init_task is None:
            self.state = ProviderState.INITIALIZING
            self._init_task = asyncio.ensure_future(self._initialize())
        await self._init_task
        return self.available

    async def _initialize(self) -> None:
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, self.provider.load)
        except Exception as e:
            self.load_error = e
            self.state = ProviderState.FALLBACK_ONLY
            warnings.warn(f"Failed to load embedding provider {self.provider.name!r} ({e}); "
                          f"falling back to keyword matching", RuntimeWarning)
        else:
            self.state = ProviderState.READY
            if self.verbose:
                print(f"Embedding provider {self.provider.name!r} ready")
        finally:
            self._init_task = None

    async def embed(self, text: str) -> np.ndarray:
        if not self.available:
            raise RuntimeError("Embedding provider is not available")
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.provider.embed, text)

    async def description_vectors(self, descriptions: Mapping) -> Dict:
        """Embed each class description once; later calls hit the cache."""
        for key, text in descriptions.items():
            if key not in self._description_cache:
                self._description_cache[key] = await self.embed(text)
        return {key: self._description_cache[key] for key in descriptions}

    def cosine_similarity(self, a: np.ndarray, b: np.ndarray) -> float:
        return self.provider.cosine_similarity(a, b)

    def status(self) -> Dict[str, object]:
        return {
            'state': self.state.value,
            'provider': self.provider.name if self.provider is not None else 'none',
            'initialized': self.available,
        }

    def __repr__(self) -> str:
        return f"EmbeddingHandle(provider={self.provider!r}, state={self.state.value})"
