"""
Utility functions for genomatch.

This module provides helpers for formatting and saving query results.
"""

import logging
from typing import List, Tuple

from .match_types import DNAMatch, GenomeMatch


def format_dna_matches(matches: List[DNAMatch]) -> str:
    """
    Format fragment matches for display.

    Args:
        matches: Matches returned by find_genomes_with_this_dna

    Returns:
        Formatted string, one line per genome
    """
    lines = [f"{len(matches)} matches found:"]
    for match in matches:
        lines.append(f"  length {match.length} position {match.position} in {match.genome_name}")
    return "\n".join(lines)


def format_genome_matches(results: List[GenomeMatch]) -> str:
    """
    Format related-genome results for display.

    Args:
        results: Results returned by find_related_genomes

    Returns:
        Formatted string, one line per genome
    """
    lines = [f"{len(results)} related genomes found:"]
    for result in results:
        lines.append(f"  {result.percent_match:.2f}% {result.genome_name}")
    return "\n".join(lines)


def save_matches_to_tsv(matches: List[DNAMatch], output_path: str) -> None:
    """
    Save fragment matches as a tab-separated file with a header row.

    Args:
        matches: Matches returned by find_genomes_with_this_dna
        output_path: Path of the TSV file to write
    """
    with open(output_path, 'w') as f:
        f.write("genome\tposition\tlength\n")
        for match in matches:
            f.write(f"{match.genome_name}\t{match.position}\t{match.length}\n")

    logging.info(f"Wrote {len(matches)} matches to {output_path}")


def save_related_genomes_to_tsv(results: List[Tuple[str, GenomeMatch]], output_path: str) -> None:
    """
    Save related-genome results for one or more queries as a tab-separated file.

    Args:
        results: (query name, GenomeMatch) pairs
        output_path: Path of the TSV file to write
    """
    with open(output_path, 'w') as f:
        f.write("query\tgenome\tpercent_match\n")
        for query_name, result in results:
            f.write(f"{query_name}\t{result.genome_name}\t{result.percent_match:.4f}\n")

    logging.info(f"Wrote {len(results)} results to {output_path}")
