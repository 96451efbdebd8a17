"""
Genome records for genomatch.

This module provides the immutable genome value consumed by the index along
with helpers for loading genomes from FASTA files and validating them.
"""

import logging
from dataclasses import dataclass
from typing import List, Tuple, Union, TextIO
from Bio import SeqIO

logger = logging.getLogger(__name__)

NUCLEOTIDES = "ACGTN"


class InvalidGenomeError(ValueError):
    """Raised when a genome record cannot be read."""
    pass


@dataclass(frozen=True)
class Genome:
    """A named nucleotide sequence.

    Genomes are never mutated once created; the index holds references to them
    and re-reads their content when verifying candidate matches.
    """
    name: str
    sequence: str

    def __post_init__(self):
        if not self.name:
            raise ValueError("Genome name must be non-empty")

    def __len__(self) -> int:
        return len(self.sequence)

    @property
    def length(self) -> int:
        return len(self.sequence)

    def extract(self, position: int, length: int) -> Tuple[bool, str]:
        """
        Extract a substring of the genome.

        Args:
            position: Zero-based start offset
            length: Number of symbols to extract

        Returns:
            Tuple of (success, fragment). Fails with an empty fragment when
            position or length is negative or the range runs past the end.
        """
        if position < 0 or length < 0 or position + length > len(self.sequence):
            return False, ""
        return True, self.sequence[position:position + length]


def load_genomes_from_fasta(source: Union[str, TextIO]) -> List[Genome]:
    """
    Load genomes from a FASTA file.

    Args:
        source: Path to the FASTA file or an open text handle

    Returns:
        List of genomes in file order, sequences upper-cased

    Raises:
        InvalidGenomeError: If the file cannot be parsed or a record is unnamed
    """
    genomes = []

    try:
        for record in SeqIO.parse(source, "fasta"):
            genomes.append(Genome(record.id, str(record.seq).upper()))
    except ValueError as e:
        logger.error(f"Error reading FASTA file: {e}")
        raise InvalidGenomeError(str(e)) from e

    logger.debug(f"Loaded {len(genomes)} genomes")
    return genomes


def validate_genomes(genomes: List[Genome]) -> Tuple[bool, List[str]]:
    """
    Validate genome sequences against the nucleotide alphabet.

    Args:
        genomes: List of genomes

    Returns:
        Tuple of (is_valid, error_messages)
    """
    valid_bases = set(NUCLEOTIDES)
    errors = []

    if not genomes:
        return False, ["No genomes provided"]

    for genome in genomes:
        if not genome.sequence:
            errors.append(f"Genome {genome.name} is empty")
            continue

        invalid_chars = set(genome.sequence.upper()) - valid_bases
        if invalid_chars:
            errors.append(f"Genome {genome.name} contains invalid characters: {sorted(invalid_chars)}")

    return len(errors) == 0, errors
