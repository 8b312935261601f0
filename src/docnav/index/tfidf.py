"""TF-IDF weights over the whole corpus.

Weights are ``tf * idf`` where ``tf`` is the raw term count in a document and
``idf = 1 + ln(N / (1 + df))``. They are always recomputed from scratch.
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, List, Sequence

import numpy as np

from docnav.models import Document
from docnav.utils.text import index_tokens


def inverse_document_frequency(document_frequency: np.ndarray, total_documents: int) -> np.ndarray:
    return 1.0 + np.log(total_documents / (1.0 + document_frequency))


def compute_tfidf(documents: Sequence[Document]) -> Dict[str, Dict[str, float]]:
    """Return ``{path: {term: weight}}`` for every document in ``documents``."""
    if not documents:
        return {}

    term_counts: List[Counter] = [Counter(index_tokens(doc.indexable_text)) for doc in documents]

    vocabulary: Dict[str, int] = {}
    for counts in term_counts:
        for term in counts:
            vocabulary.setdefault(term, len(vocabulary))

    document_frequency = np.zeros(len(vocabulary), dtype=np.float64)
    for counts in term_counts:
        if counts:
            document_frequency[[vocabulary[term] for term in counts]] += 1.0

    idf = inverse_document_frequency(document_frequency, len(documents))

    weights: Dict[str, Dict[str, float]] = {}
    for document, counts in zip(documents, term_counts):
        if not counts:
            weights[document.path] = {}
            continue
        terms = list(counts)
        tf = np.fromiter((counts[term] for term in terms), dtype=np.float64, count=len(terms))
        scores = tf * idf[[vocabulary[term] for term in terms]]
        weights[document.path] = {term: float(score) for term, score in zip(terms, scores)}
    return weights
