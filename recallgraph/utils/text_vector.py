"""
Lightweight text vectorization: tokenizer, normalized term frequency,
cosine similarity and keyword extraction.
"""

import math
import re
from typing import Dict, List

from ..models.core import Vector

_TOKEN_RE = re.compile(r'[a-z0-9]+')

STOPWORDS = frozenset({
    'a', 'about', 'above', 'after', 'again', 'against', 'all', 'am', 'an', 'and', 'any', 'are', 'as', 'at', 'be',
    'because', 'been', 'before', 'being', 'below', 'between', 'both', 'but', 'by', 'can', 'could', 'did', 'do',
    'does', 'doing', 'down', 'during', 'each', 'few', 'for', 'from', 'further', 'had', 'has', 'have', 'having', 'he',
    'her', 'here', 'hers', 'herself', 'him', 'himself', 'his', 'how', 'i', 'if', 'in', 'into', 'is', 'it', 'its',
    'itself', 'just', 'me', 'more', 'most', 'my', 'myself', 'no', 'nor', 'not', 'now', 'of', 'off', 'on', 'once',
    'only', 'or', 'other', 'our', 'ours', 'ourselves', 'out', 'over', 'own', 'same', 'she', 'should', 'so', 'some',
    'such', 'than', 'that', 'the', 'their', 'theirs', 'them', 'themselves', 'then', 'there', 'these', 'they', 'this',
    'those', 'through', 'to', 'too', 'under', 'until', 'up', 'very', 'via', 'was', 'we', 'were', 'what', 'when',
    'where', 'which', 'while', 'who', 'whom', 'why', 'will', 'with', 'would', 'you', 'your', 'yours', 'yourself',
    'yourselves'
})


def tokenize(text: str) -> List[str]:
    """Lowercase the text and return its alphanumeric runs minus stopwords."""
    if not text:
        return []
    return [token for token in _TOKEN_RE.findall(text.lower()) if token not in STOPWORDS]


def term_frequency(tokens: List[str]) -> Vector:
    """Count tokens and L2-normalize the counts.

    The returned dict keeps first-occurrence order of terms. An empty token
    list gives the zero vector ({}).
    """
    counts: Dict[str, float] = {}
    for token in tokens:
        counts[token] = counts.get(token, 0) + 1

    norm = math.sqrt(sum(value * value for value in counts.values()))
    if norm == 0:
        return counts
    return {term: value / norm for term, value in counts.items()}


def vectorize(text: str) -> Vector:
    return term_frequency(tokenize(text))


def cosine_similarity(a: Vector, b: Vector) -> float:
    """Dot product of two normalized vectors, clamped to [0, 1].

    Zero or disjoint vectors score 0.0.
    """
    if not a or not b:
        return 0.0
    small, large = (a, b) if len(a) <= len(b) else (b, a)
    dot = 0.0
    for term, weight in sorted(small.items()):
        other = large.get(term)
        if other:
            dot += weight * other
    return min(1.0, max(0.0, dot))


def similarity(query: str, doc: str) -> float:
    return cosine_similarity(vectorize(query), vectorize(doc))


def keywords(text: str, top_n: int = 6) -> List[str]:
    """Return the top_n highest-weight terms of text.

    Equal weights keep first-occurrence order (sorted() is stable over the
    insertion-ordered term dict).
    """
    if top_n <= 0:
        return []
    weights = vectorize(text)
    ranked = sorted(weights.items(), key=lambda item: item[1], reverse=True)
    return [term for term, _ in ranked[:top_n]]
