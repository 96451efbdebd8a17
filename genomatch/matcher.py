"""
Genome index and matcher for genomatch.

This module builds a k-mer prefix index over a library of genomes and answers
two kinds of query: where a fragment occurs (exactly or with a single
substituted base), and what share of a query genome's chunks occur in each
library genome.
"""

import logging
from collections import Counter
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

import numpy as np
from tqdm import tqdm

from .genome import Genome
from .match_types import (
    DNAMatch,
    GenomeMatch,
    IndexEntry,
    match_preference_key,
    related_genome_sort_key,
)
from .trie import Trie


def iter_windows(sequence: str, width: int) -> Iterator[Tuple[int, str]]:
    """
    Yield (offset, window) pairs for indexing a sequence.

    Full windows of ``width`` symbols are produced at every offset. The
    symbols after the last full window start are then produced as one shorter
    tail window, so a sequence shorter than ``width`` is yielded whole at
    offset 0.
    """
    next_offset = 0
    for next_offset in range(len(sequence) - width + 1):
        yield next_offset, sequence[next_offset:next_offset + width]
    if len(sequence) >= width:
        next_offset += 1
    if next_offset < len(sequence):
        yield next_offset, sequence[next_offset:]


def matched_prefix_length(candidate: str, fragment: str, mismatch_budget: int) -> int:
    """
    Length of the longest common-offset prefix within a mismatch budget.

    Args:
        candidate: Text extracted from a genome, no longer than fragment
        fragment: Query fragment
        mismatch_budget: Number of mismatching positions tolerated

    Returns:
        Index of the first mismatch beyond the budget, or len(candidate) if
        the whole candidate is within budget
    """
    n = len(candidate)
    # one code point per element so distinct symbols never compare equal
    a = np.frombuffer(candidate.encode("utf-32-le"), dtype=np.uint32)
    b = np.frombuffer(fragment[:n].encode("utf-32-le"), dtype=np.uint32)
    mismatches = np.flatnonzero(a != b)
    if len(mismatches) > mismatch_budget:
        return int(mismatches[mismatch_budget])
    return n


class GenomeMatcher:
    """
    Prefix index over a genome library with fragment and related-genome search.

    The index is built by inserting every ``minimum_search_length`` window of
    each added genome into a trie. Queries seed on the first window of a
    fragment and then verify each candidate against the stored genome.

    Adding genomes mutates the index and must not overlap any other call on
    the same matcher. Once loading is finished the queries only read shared
    state and can run concurrently.
    """

    def __init__(self,
                 minimum_search_length: int,
                 show_progress: bool = False,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize an empty matcher.

        Args:
            minimum_search_length: Width of indexed windows and the smallest
                match length any query may ask for
            show_progress: If True, show progress bars for bulk loading and
                related-genome searches (default False)
            logger: Optional logger instance; uses the module logger if None

        Raises:
            ValueError: If minimum_search_length is not positive
        """
        if minimum_search_length < 1:
            raise ValueError(f"minimum_search_length must be positive, got {minimum_search_length}")
        self._minimum_search_length = minimum_search_length
        self.show_progress = show_progress
        self.logger = logger or logging.getLogger(__name__)
        self.trie = Trie()
        self.genomes: Dict[str, Genome] = {}

    @property
    def minimum_search_length(self) -> int:
        return self._minimum_search_length

    @property
    def genome_names(self) -> List[str]:
        return sorted(self.genomes)

    def add_genome(self, genome: Genome) -> None:
        """Index every window of a genome and register it by name."""
        if genome.name in self.genomes:
            self.logger.warning(f"Genome '{genome.name}' added more than once; "
                                f"the most recent sequence will be used")

        windows = 0
        for offset, window in iter_windows(genome.sequence, self._minimum_search_length):
            self.trie.insert(window, IndexEntry(genome.name, offset))
            windows += 1
        self.genomes[genome.name] = genome

        self.logger.debug(f"Indexed {windows} windows from genome '{genome.name}' ({len(genome)} bp)")

    def add_genomes(self, genomes: Iterable[Genome]) -> None:
        """Add several genomes, optionally with a progress bar."""
        genomes = list(genomes)
        pbar = None
        if self.show_progress:
            pbar = tqdm(total=len(genomes), desc="Indexing", unit=" genomes")

        for genome in genomes:
            self.add_genome(genome)
            if pbar is not None:
                pbar.update(1)

        if pbar is not None:
            pbar.close()

        self.logger.info(f"Indexed {len(genomes)} genomes "
                         f"({len(self.trie)} windows, {len(self.genomes)} distinct names)")

    def find_genomes_with_this_dna(self,
                                   fragment: str,
                                   minimum_length: int,
                                   exact_match_only: bool) -> Tuple[bool, List[DNAMatch]]:
        """
        Find the longest occurrence of a fragment in each indexed genome.

        Candidates are seeded from the fragment's first ``minimum_search_length``
        symbols and extended along the genome. A match must start at the
        beginning of the fragment and is allowed no mismatches when
        exact_match_only is set, otherwise at most one in total.

        Args:
            fragment: Query sequence
            minimum_length: Shortest match length to report
            exact_match_only: If True, disallow the single substitution

        Returns:
            Tuple of (success, matches) where matches holds at most one
            DNAMatch per genome, ordered by genome name. Fails with no
            matches if the fragment is shorter than minimum_length, if
            minimum_length is below the index granularity, or if nothing
            qualifies.
        """
        if len(fragment) < minimum_length or minimum_length < self._minimum_search_length:
            return False, []

        anchor = fragment[:self._minimum_search_length]
        candidates = self.trie.find(anchor, exact_match_only)
        mismatch_budget = 0 if exact_match_only else 1

        best: Dict[str, Tuple[int, int]] = {}
        for entry in candidates:
            genome = self.genomes[entry.genome_name]
            span = min(len(fragment), len(genome) - entry.offset)
            if span <= 0:
                # stale entry from a genome replaced under the same name
                continue
            ok, extract = genome.extract(entry.offset, span)
            assert ok, f"Index entry {entry} lies outside genome '{genome.name}'"

            length = matched_prefix_length(extract, fragment, mismatch_budget)
            if length < minimum_length:
                continue

            current = best.get(entry.genome_name)
            if current is None or match_preference_key(length, entry.offset) < match_preference_key(*current):
                best[entry.genome_name] = (length, entry.offset)

        self.logger.debug(f"Fragment of {len(fragment)} bp: {len(candidates)} candidates, "
                          f"{len(best)} genomes matched")

        if not best:
            return False, []

        matches = [DNAMatch(genome_name=name, position=offset, length=length)
                   for name, (length, offset) in sorted(best.items())]
        return True, matches

    def find_related_genomes(self,
                             query: Genome,
                             fragment_match_length: int,
                             exact_match_only: bool,
                             match_percent_threshold: float) -> Tuple[bool, List[GenomeMatch]]:
        """
        Score library genomes by the share of query chunks they contain.

        The query is cut into non-overlapping chunks of fragment_match_length
        symbols (a shorter remainder is ignored) and each chunk is searched
        with find_genomes_with_this_dna. A genome scores one hit per chunk it
        matches.

        Args:
            query: Genome to compare against the library
            fragment_match_length: Chunk size, also the minimum match length
            exact_match_only: If True, chunks must match without substitution
            match_percent_threshold: Minimum percentage of chunks to report

        Returns:
            Tuple of (success, results) sorted by percent descending then
            genome name. Fails with no results if the query is shorter than
            fragment_match_length, if fragment_match_length is below the
            index granularity, or if no genome reaches the threshold.
        """
        if len(query) < fragment_match_length or fragment_match_length < self._minimum_search_length:
            return False, []

        chunk_count = len(query) // fragment_match_length
        hits: Counter = Counter()

        chunks = range(chunk_count)
        if self.show_progress:
            chunks = tqdm(chunks, desc=f"Comparing {query.name}", unit=" chunks")

        for i in chunks:
            ok, chunk = query.extract(i * fragment_match_length, fragment_match_length)
            assert ok, f"Chunk {i} lies outside query '{query.name}'"

            found, matches = self.find_genomes_with_this_dna(chunk, fragment_match_length, exact_match_only)
            if not found:
                continue
            hits.update({match.genome_name for match in matches})

        results = []
        for name, count in hits.items():
            percent = 100.0 * count / chunk_count
            if percent >= match_percent_threshold:
                results.append(GenomeMatch(genome_name=name, percent_match=percent))

        self.logger.debug(f"Query '{query.name}': {chunk_count} chunks, {len(hits)} genomes hit, "
                          f"{len(results)} at or above {match_percent_threshold}%")

        if not results:
            return False, []

        results.sort(key=related_genome_sort_key)
        return True, results
