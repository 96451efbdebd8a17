"""
Command-line interface for genomatch.
"""

import argparse
import logging
import sys
from pathlib import Path

from .genome import load_genomes_from_fasta, validate_genomes
from .match_types import SearchConfig
from .matcher import GenomeMatcher
from .utils import format_dna_matches, format_genome_matches, save_matches_to_tsv, save_related_genomes_to_tsv


def setup_logging(verbose: bool = False):
    """Configure logging based on verbosity level."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def build_parser() -> argparse.ArgumentParser:
    defaults = SearchConfig()
    parser = argparse.ArgumentParser(
        description='genomatch: k-mer prefix index for exact and SNP-tolerant genome search',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  genomatch library.fasta fragment ACGTACGTACGTAA
  genomatch library.fasta --min-search-length 8 fragment ACGTACGTAC --exact
  genomatch library.fasta related query.fasta --fragment-length 16 --threshold 30
  genomatch library.fasta related query.fasta -o related.tsv -v
        """
    )

    parser.add_argument(
        'library',
        help='FASTA file containing the genomes to index'
    )
    parser.add_argument(
        '--min-search-length',
        type=int,
        default=defaults.minimum_search_length,
        help=f'Width of indexed windows and floor for match lengths (default: {defaults.minimum_search_length})'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    fragment_parser = subparsers.add_parser('fragment', help='Find genomes containing a DNA fragment')
    fragment_parser.add_argument('fragment', help='DNA fragment to search for')
    fragment_parser.add_argument(
        '--min-length',
        type=int,
        default=defaults.minimum_length,
        help='Minimum match length to report (default: the minimum search length)'
    )
    fragment_parser.add_argument(
        '--exact',
        action='store_true',
        default=defaults.exact_match_only,
        help='Require exact matches (default: allow one substituted base)'
    )
    fragment_parser.add_argument('-o', '--output', help='Write matches to this TSV file')

    related_parser = subparsers.add_parser('related', help='Find library genomes related to query genomes')
    related_parser.add_argument('query', help='FASTA file containing query genomes')
    related_parser.add_argument(
        '--fragment-length',
        type=int,
        default=defaults.fragment_match_length,
        help='Chunk size for comparison (default: the minimum search length)'
    )
    related_parser.add_argument(
        '--exact',
        action='store_true',
        default=defaults.exact_match_only,
        help='Require exact chunk matches (default: allow one substituted base)'
    )
    related_parser.add_argument(
        '--threshold',
        type=float,
        default=defaults.match_percent_threshold,
        help=f'Minimum percentage of matching chunks (default: {defaults.match_percent_threshold})'
    )
    related_parser.add_argument('-o', '--output', help='Write results to this TSV file')

    return parser


def load_validated(path: str, label: str):
    """Load genomes from a FASTA file, exiting on missing files or invalid sequences."""
    if not Path(path).exists():
        logging.error(f"{label} file not found: {path}")
        sys.exit(1)

    logging.info(f"Loading {label.lower()} genomes from {path}")
    genomes = load_genomes_from_fasta(path)
    is_valid, errors = validate_genomes(genomes)
    if not is_valid:
        logging.error(f"Invalid {label.lower()} genomes found:")
        for error in errors:
            logging.error(f"  {error}")
        sys.exit(1)
    return genomes


def main():
    """Main entry point for the genomatch CLI."""
    args = build_parser().parse_args()

    setup_logging(args.verbose)

    try:
        library = load_validated(args.library, "Library")
        matcher = GenomeMatcher(args.min_search_length, show_progress=args.verbose)
        matcher.add_genomes(library)

        config = SearchConfig(minimum_search_length=args.min_search_length)

        if args.command == 'fragment':
            config.minimum_length = args.min_length
            config.exact_match_only = args.exact
            found, matches = matcher.find_genomes_with_this_dna(
                args.fragment.upper(),
                config.resolved_minimum_length(),
                config.exact_match_only
            )
            if not found:
                logging.warning("No matches found")
                sys.exit(1)
            print(format_dna_matches(matches))
            if args.output:
                save_matches_to_tsv(matches, args.output)
        else:
            config.fragment_match_length = args.fragment_length
            config.exact_match_only = args.exact
            config.match_percent_threshold = args.threshold
            queries = load_validated(args.query, "Query")

            all_results = []
            for query in queries:
                found, results = matcher.find_related_genomes(
                    query,
                    config.resolved_fragment_match_length(),
                    config.exact_match_only,
                    config.match_percent_threshold
                )
                if not found:
                    logging.info(f"No related genomes found for {query.name}")
                    continue
                print(f"{query.name}: {format_genome_matches(results)}")
                all_results.extend((query.name, result) for result in results)

            if not all_results:
                logging.warning("No related genomes found")
                sys.exit(1)
            if args.output:
                save_related_genomes_to_tsv(all_results, args.output)

        logging.debug("Done!")

    except KeyboardInterrupt:
        logging.info("Interrupted by user")
        sys.exit(1)
    except Exception as e:
        logging.error(f"Error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == '__main__':
    main()
