"""
genomatch: k-mer prefix indexing for genome fragment search

A Python package for finding where DNA fragments occur across a genome library,
exactly or with a single substituted base, and for scoring how closely query
genomes relate to the library.
"""

__version__ = "0.1.0"

from .genome import Genome, InvalidGenomeError, load_genomes_from_fasta, validate_genomes
from .trie import Trie, TrieNode
from .match_types import IndexEntry, DNAMatch, GenomeMatch, SearchConfig
from .matcher import GenomeMatcher
from .utils import format_dna_matches, format_genome_matches, save_matches_to_tsv, save_related_genomes_to_tsv

__all__ = [
    "Genome",
    "InvalidGenomeError",
    "load_genomes_from_fasta",
    "validate_genomes",
    "Trie",
    "TrieNode",
    "IndexEntry",
    "DNAMatch",
    "GenomeMatch",
    "SearchConfig",
    "GenomeMatcher",
    "format_dna_matches",
    "format_genome_matches",
    "save_matches_to_tsv",
    "save_related_genomes_to_tsv"
]
