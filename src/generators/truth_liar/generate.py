#!/usr/bin/env python3
"""Truth‑teller / liar puzzle generator.

Every character in a puzzle is either a *truth‑teller* (only says true things)
or a *liar* (only says false things), and each one makes a single statement
about who is which.  Statements range from "B is a liar" to
"If either A is a liar, or C is a truth-teller, then among B and me, the
number of liars is at most 1."  Each generated puzzle is guaranteed to have
*exactly one* consistent truth‑teller/liar assignment.

Output: a JSON (or JSONL) file containing objects of the form
    {"question": <str>, "canonical_answer": <str>, "metadata": {...}}
plus a human‑readable text file with answer keys.

Example CLI::

    python src/generators/truth_liar/generate.py --count 10 --people-min 3 \
        --people-max 5 --complexity 2 --seed 42 --output puzzles/
"""
from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from dataset_loader import PuzzleDatasetLoader
from puzzle_assembler import (
    MAX_COMPLEXITY,
    MAX_PERSON_COUNT,
    MIN_PERSON_COUNT,
    GenerationParams,
    Puzzle,
    assemble_puzzle,
)
from statement import person_name

# ---------------------------------------------------------------------------
# Writers
# ---------------------------------------------------------------------------


def write_text_all(puzzles: List[Puzzle], path: Path) -> None:
    """Write all puzzles, each followed by its answer key, to a single text file."""
    lines: List[str] = []

    for idx, puzzle in enumerate(puzzles, 1):
        if idx > 1:
            lines.append("")
            lines.append("=" * 80)
            lines.append("")

        lines.append(f"Truth-tellers & Liars #{idx}: {puzzle.person_count} people, complexity {puzzle.complexity}")
        lines.append("")
        lines.append(puzzle.complete_puzzle_description())
        lines.append("")
        lines.append("Answer key (scroll past if you don't want spoilers)")
        lines.append("=" * 60)
        lines.append(" ")
        lines.append(", ".join(
            f"{person_name(i)}: {label}" for i, label in enumerate(puzzle.solution_labels())
        ))

    path.write_text("\n".join(lines), encoding="utf8")


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def generate_puzzles(count: int, people_min: int, people_max: int, complexity: int,
                     rng: random.Random, max_iterations: Optional[int] = None) -> List[Puzzle]:
    """Return up to *count* puzzles with people counts drawn from the range.

    Puzzles that hit the iteration cap are skipped with a warning.
    """
    puzzles: List[Puzzle] = []
    for idx in range(1, count + 1):
        params = GenerationParams(
            person_count=rng.randint(people_min, people_max),
            complexity=complexity,
            rng=rng,
            max_iterations=max_iterations,
        )
        try:
            puzzles.append(assemble_puzzle(params))
        except RuntimeError as er:
            print(f"[warn] Skipping puzzle {idx}: {er}", file=sys.stderr)
            continue
        print(f"Generated puzzle {idx}/{count}")
    return puzzles


def main(argv: Optional[Sequence[str]] = None) -> None:
    ap = argparse.ArgumentParser(description="Generate truth-teller / liar logic puzzles.")
    ap.add_argument("--people-min", type=int, default=4, help="Minimum number of people (inclusive)")
    ap.add_argument("--people-max", type=int, default=4, help="Maximum number of people (inclusive)")
    ap.add_argument("--complexity", type=int, default=2,
                    help=f"Statement complexity from 0 to {MAX_COMPLEXITY}")
    ap.add_argument("--count", type=int, default=100, help="How many puzzles to generate")
    ap.add_argument("--seed", type=int, default=None, help="Random‑seed for reproducibility")
    ap.add_argument("--output", type=Path, default=Path("."), help="Directory for output files")
    ap.add_argument("--max-iterations", type=int, default=None,
                    help="Give up on a puzzle after this many regenerations (default: never)")
    ap.add_argument("--jsonl", action="store_true", help="Write JSONL instead of a JSON list")
    ap.add_argument("--verbose", action="store_true", help="Log every rejected candidate")

    args = ap.parse_args(argv)
    if args.people_min < MIN_PERSON_COUNT or args.people_max > MAX_PERSON_COUNT:
        ap.error(f"People counts must be between {MIN_PERSON_COUNT} and {MAX_PERSON_COUNT}")
    if args.people_max < args.people_min:
        ap.error("--people-max must be at least --people-min")
    if not 0 <= args.complexity <= MAX_COMPLEXITY:
        ap.error(f"--complexity must be between 0 and {MAX_COMPLEXITY}")
    if args.count < 1:
        ap.error("--count must be positive")
    if args.max_iterations is not None and args.max_iterations < 1:
        ap.error("--max-iterations must be positive")

    logging.basicConfig(level=logging.INFO)
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    rng = random.Random(args.seed)
    puzzles = generate_puzzles(args.count, args.people_min, args.people_max,
                               args.complexity, rng, args.max_iterations)

    loader = PuzzleDatasetLoader(output_dir=str(args.output))
    records = [puzzle.to_json() for puzzle in puzzles]
    loader.validate_data(records)
    if args.jsonl:
        data_path = loader.save_jsonl(records, "truth_liar_puzzles.jsonl")
    else:
        data_path = loader.save_json(records, "truth_liar_puzzles.json")
    txt_path = args.output / "truth_liar_puzzles.txt"
    write_text_all(puzzles, txt_path)
    print(f"Created {data_path} and {txt_path} with {len(puzzles)} puzzles")


if __name__ == "__main__":  # pragma: no cover
    main()
