import argparse
from collections import defaultdict

import numpy as np

from dataset_loader import PuzzleDatasetLoader


def length_statistics(puzzles):
    """Total statement length and outer-loop attempts, grouped by complexity."""
    lengths = defaultdict(list)
    attempts = defaultdict(list)
    for puzzle in puzzles:
        metadata = puzzle["metadata"]
        complexity = metadata["complexity"]
        lengths[complexity].append(sum(len(s) for s in metadata["statements"]))
        attempts[complexity].append(metadata.get("attempts", 1))

    stats = {}
    for complexity in sorted(lengths):
        values = np.array(lengths[complexity])
        stats[complexity] = {
            "count": int(values.size),
            "mean_length": float(np.mean(values)),
            "min_length": int(np.min(values)),
            "max_length": int(np.max(values)),
            "mean_attempts": float(np.mean(attempts[complexity])),
        }
    return stats


def print_report(stats):
    print("LENGTH ANALYSIS (by complexity)")
    print("=" * 60)
    print(f"{'Level':<8} {'Count':<8} {'Mean len':<10} {'Min':<8} {'Max':<8} {'Attempts':<10}")
    print("-" * 60)
    for complexity, row in stats.items():
        print(
            f"{complexity:<8} {row['count']:<8} {row['mean_length']:<10.1f} "
            f"{row['min_length']:<8} {row['max_length']:<8} {row['mean_attempts']:<10.1f}"
        )


def main(argv=None):
    """Main function."""
    ap = argparse.ArgumentParser(description="Summarize statement lengths of generated puzzles.")
    ap.add_argument("datasource", nargs="?", default="truth_liar_puzzles.json",
                    help="Puzzle file written by the truth_liar generator")
    args = ap.parse_args(argv)

    try:
        puzzles = PuzzleDatasetLoader().load_data(args.datasource)
    except FileNotFoundError:
        print(f"Error: Could not find {args.datasource}")
        return

    print_report(length_statistics(puzzles))


if __name__ == "__main__":
    main()
