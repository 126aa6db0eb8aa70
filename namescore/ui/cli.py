"""Command-line interface for namescore."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import numpy as np

from ..core.tokens import CharacterTokenizer, EMPTY
from ..matching.similarity import NameSimilarity
from ..matching.training import TrainingPass
from ..utils.config import ScoringConfig, STRATEGIES

logger = logging.getLogger(__name__)


def build_config(args: argparse.Namespace) -> ScoringConfig:
    """Build a ScoringConfig from parsed arguments."""
    return ScoringConfig(
        smoothing=args.smoothing,
        strategy=args.strategy,
        match_cost=args.match_cost,
        substitute_cost=args.substitute_cost,
        indel_cost=args.indel_cost,
        phonetic=args.phonetic,
    )


def score_command(args: argparse.Namespace) -> int:
    """Execute the score command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        config = build_config(args)
        tokenizer = config.build_tokenizer()
        similarity = NameSimilarity(config.build_cost_model(tokenizer.num_tokens), tokenizer, config)
        alignment = similarity.align(args.name1, args.name2)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"{args.name1} / {args.name2}: {alignment.score:.4f}")

    if args.trace:
        direction = "reversed" if alignment.reversed else "forward"
        print(f"Path ({direction}, cost {alignment.cost}):")
        for line in alignment.details:
            print(f"  {line}")

    return 0


def read_pairs(filepath: Path, tokenizer: CharacterTokenizer) -> List[Tuple[List[int], List[int]]]:
    """Read tab-separated name pairs, skipping blank and malformed lines."""
    pairs = []
    with open(filepath, encoding='utf-8') as f:
        for line_no, line in enumerate(f, start=1):
            line = line.rstrip('\n')
            if not line.strip():
                continue
            fields = line.split('\t')
            if len(fields) != 2:
                logger.warning(f"{filepath}:{line_no}: expected two names, skipping")
                continue
            pairs.append((tokenizer.tokenize(fields[0]), tokenizer.tokenize(fields[1])))
    return pairs


def print_top_edits(counts: np.ndarray, tokenizer: CharacterTokenizer, limit: int) -> None:
    """Print the most frequent edits that are not matches."""
    counts = counts.copy()
    np.fill_diagonal(counts, 0)
    counts[EMPTY, EMPTY] = 0

    order = np.argsort(counts, axis=None)[::-1]
    print("\nMOST FREQUENT EDITS:")
    print("-" * 40)
    shown = 0
    for flat_index in order[:limit]:
        source, target = np.unravel_index(flat_index, counts.shape)
        count = int(counts[source, target])
        if count == 0:
            break
        print(f"{tokenizer.symbol(int(source))} -> {tokenizer.symbol(int(target))}: {count:,}")
        shown += 1
    if not shown:
        print("No edits other than matches.")
    print("-" * 40 + "\n")


def count_command(args: argparse.Namespace) -> int:
    """Execute the count command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    if args.top < 1:
        print(f"Error: --top must be at least 1, got {args.top}", file=sys.stderr)
        return 1

    filepath = Path(args.file)
    if not filepath.exists():
        print(f"Error: File not found: {filepath}", file=sys.stderr)
        return 1

    try:
        config = build_config(args)
        tokenizer = config.build_tokenizer()
        model = config.build_cost_model(tokenizer.num_tokens)
        pairs = read_pairs(filepath, tokenizer)
        summary = TrainingPass(model, bidirectional=args.bidirectional).run(pairs)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1

    print(f"Pairs:        {summary.pairs:,}")
    print(f"Edits:        {summary.edits:,}")
    print(f"Mean cost:    {summary.mean_cost:.2f}")
    print_top_edits(model.counts, tokenizer, args.top)
    return 0


def add_model_arguments(parser: argparse.ArgumentParser) -> None:
    """Arguments shared by commands that build a uniform cost model."""
    defaults = ScoringConfig()
    parser.add_argument(
        '--smoothing',
        type=float,
        default=defaults.smoothing,
        help=f'Positional weight offset (default: {defaults.smoothing})'
    )
    parser.add_argument(
        '--strategy',
        choices=STRATEGIES,
        default=defaults.strategy,
        help=f'Alignment directions to score (default: {defaults.strategy})'
    )
    parser.add_argument(
        '--match-cost',
        type=int,
        default=defaults.match_cost,
        help=f'Cost of matching a token with itself (default: {defaults.match_cost})'
    )
    parser.add_argument(
        '--substitute-cost',
        type=int,
        default=defaults.substitute_cost,
        help=f'Cost of substituting a token (default: {defaults.substitute_cost})'
    )
    parser.add_argument(
        '--indel-cost',
        type=int,
        default=defaults.indel_cost,
        help=f'Cost of inserting or deleting a token (default: {defaults.indel_cost})'
    )
    parser.add_argument(
        '--phonetic',
        action='store_true',
        help='Compare Metaphone codes instead of spellings'
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog='namescore',
        description='Weighted edit distance scoring for genealogy names.',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        '--version',
        action='version',
        version='%(prog)s 0.1.0'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands'
    )

    # Score command
    score_parser = subparsers.add_parser(
        'score',
        help='Score the similarity of two normalized names'
    )
    score_parser.add_argument('name1', help='First name')
    score_parser.add_argument('name2', help='Second name')
    score_parser.add_argument(
        '-t', '--trace',
        action='store_true',
        help='Show the edits of the best alignment'
    )
    add_model_arguments(score_parser)

    # Count command
    count_parser = subparsers.add_parser(
        'count',
        help='Count best-path edits over a file of tab-separated name pairs'
    )
    count_parser.add_argument(
        'file',
        help='Path to the name pairs file'
    )
    count_parser.add_argument(
        '-b', '--bidirectional',
        action='store_true',
        help='Also count each pair in reverse'
    )
    count_parser.add_argument(
        '-n', '--top',
        type=int,
        default=10,
        help='Number of edits to display (default: 10)'
    )
    add_model_arguments(count_parser)

    return parser


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s'
    )

    # If no command specified, print help
    if not args.command:
        parser.print_help()
        return 0

    if args.command == 'score':
        return score_command(args)
    elif args.command == 'count':
        return count_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
