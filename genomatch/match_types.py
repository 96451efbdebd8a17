"""Shared types for index entries, query results and search defaults.

This module contains the value types passed between the trie, the matcher
and the command-line layer.
"""

from dataclasses import dataclass
from typing import NamedTuple, Optional, Tuple


class IndexEntry(NamedTuple):
    """Where an indexed window starts: genome name and zero-based offset."""
    genome_name: str
    offset: int


@dataclass(frozen=True)
class DNAMatch:
    """Longest verified occurrence of a fragment within one genome."""
    genome_name: str
    position: int
    length: int


@dataclass(frozen=True)
class GenomeMatch:
    """Percentage of query chunks found in one genome."""
    genome_name: str
    percent_match: float


def match_preference_key(length: int, offset: int) -> Tuple[int, int]:
    """Sort key ranking candidate matches: longest first, then earliest offset.

    Examples:
        >>> sorted([(4, 7), (6, 3), (6, 1)], key=lambda c: match_preference_key(*c))
        [(6, 1), (6, 3), (4, 7)]
    """
    return -length, offset


def related_genome_sort_key(result: GenomeMatch) -> Tuple[float, str]:
    """Sort key for related-genome results: highest percent first, then name."""
    return -result.percent_match, result.genome_name


@dataclass
class SearchConfig:
    """Default parameters for command-line searches.

    ``minimum_length`` and ``fragment_match_length`` fall back to the index's
    minimum search length when left as None.
    """
    minimum_search_length: int = 10
    minimum_length: Optional[int] = None
    exact_match_only: bool = False
    fragment_match_length: Optional[int] = None
    match_percent_threshold: float = 20.0

    def resolved_minimum_length(self) -> int:
        if self.minimum_length is None:
            return self.minimum_search_length
        return self.minimum_length

    def resolved_fragment_match_length(self) -> int:
        if self.fragment_match_length is None:
            return self.minimum_search_length
        return self.fragment_match_length
