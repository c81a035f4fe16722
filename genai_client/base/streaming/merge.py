"""Merge rules folding partial stream messages into one cumulative response.

All ``join_*`` helpers mutate and return ``dest``. Values taken from ``src``
are copied whenever ``dest`` keeps a reference to them, so a partial message
handed to the caller is never modified by later merges.
"""
from __future__ import annotations

import copy
from typing import Dict, List, Optional, Sequence

from ..models import (
    Candidate,
    CitationMetadata,
    Content,
    GenerateContentResponse,
    Part,
    Text,
)


def merge_texts(parts: Sequence[Part]) -> List[Part]:
    """Collapse every run of adjacent ``Text`` parts into one ``Text`` part.

    Any other part kind is a barrier and is kept as-is, in order.
    """
    out: List[Part] = []
    run: List[str] = []
    for part in parts:
        if isinstance(part, Text):
            run.append(part.text)
            continue
        if run:
            out.append(Text("".join(run)))
            run = []
        out.append(part)
    if run:
        out.append(Text("".join(run)))
    return out


def join_content(dest: Optional[Content], src: Optional[Content]) -> Optional[Content]:
    if dest is None:
        return copy.deepcopy(src)
    if src is None:
        return dest
    # Roles are assumed equal within one candidate.
    dest.parts = merge_texts([*dest.parts, *src.parts])
    return dest


def join_citation_metadata(
    dest: Optional[CitationMetadata], src: Optional[CitationMetadata]
) -> Optional[CitationMetadata]:
    if dest is None:
        return copy.deepcopy(src)
    if src is None:
        return dest
    dest.citation_sources.extend(copy.deepcopy(src.citation_sources))
    return dest


def join_candidate_lists(dest: List[Candidate], src: Sequence[Candidate]) -> List[Candidate]:
    """Merge ``src`` candidates into ``dest`` by ``index``.

    Candidates whose index is not already in ``dest`` are dropped: identities
    are fixed by the first message of a stream.
    """
    by_index: Dict[int, Candidate] = {c.index: c for c in src}
    for d in dest:
        s = by_index.get(d.index)
        if s is None:
            continue
        d.content = join_content(d.content, s.content)
        d.finish_reason = s.finish_reason
        d.safety_ratings = copy.deepcopy(s.safety_ratings)
        d.citation_metadata = join_citation_metadata(d.citation_metadata, s.citation_metadata)
        if s.token_count is not None:
            d.token_count = s.token_count
    return dest


def join_responses(
    dest: Optional[GenerateContentResponse], src: GenerateContentResponse
) -> GenerateContentResponse:
    """Fold ``src`` into the cumulative response ``dest`` and return it.

    With no cumulative response yet, a deep copy of ``src`` becomes it.
    ``prompt_feedback`` is the first message's value (``None`` included) and
    never changes afterwards; the latest ``usage_metadata`` replaces any
    earlier one.
    """
    if dest is None:
        return copy.deepcopy(src)
    dest.candidates = join_candidate_lists(dest.candidates, src.candidates)
    if src.usage_metadata is not None:
        dest.usage_metadata = copy.deepcopy(src.usage_metadata)
    return dest


__all__ = [
    "merge_texts",
    "join_content",
    "join_citation_metadata",
    "join_candidate_lists",
    "join_responses",
]
