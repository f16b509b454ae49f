"""Assembles complete truth-teller / liar puzzles.

A puzzle gives every character one statement.  It is accepted only when

* exactly one truth-teller/liar assignment is consistent with every statement, and
* the statements' total length falls inside a band picked from the complexity dial.

Until both hold, one randomly chosen speaker's statement is regenerated and the
puzzle is solved again.  Only that one statement changes per iteration, which
keeps the search local.
"""
from __future__ import annotations

import json
import logging
import math
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from puzzle_solver import solutions_for
from statement import Statement, StatementContext, person_name, person_type
from statement_generator import StatementGenerator
from utils_bits import bit_is_set

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

MIN_PERSON_COUNT = 2
MAX_PERSON_COUNT = 8
MAX_COMPLEXITY = 4

# Length formula endpoints, in reference units per person
SHORTEST_LENGTH_PER_PERSON = 11
LONGEST_LENGTH_PER_EXTRA_PERSON = 100
# English characters per reference unit
LENGTH_SCALE = 1.75


def complexity_factor_for(complexity: int) -> float:
    """Map the 0-4 complexity dial to the generator's depth bias."""
    return 10 ** ((complexity - 1) / 2 - 1)


def interpolated_sentence_length(person_count: int, t: float) -> float:
    """Target total statement length for dial position t (0 to 1)."""
    range_start = SHORTEST_LENGTH_PER_PERSON * person_count
    range_end = LONGEST_LENGTH_PER_EXTRA_PERSON * (person_count - 1)
    interpolation_parameter = (2 ** (2 * t) - 1) / 3
    return range_start + interpolation_parameter * (range_end - range_start)


def sentence_length_band(person_count: int, complexity: int,
                         length_scale: float = LENGTH_SCALE) -> Tuple[float, float]:
    """Return (min, max) total rendered length for a complexity level.

    The lowest level has no minimum and the highest level has no maximum.
    """
    steps = MAX_COMPLEXITY + 1
    if complexity == 0:
        min_length = 0.0
    else:
        min_length = interpolated_sentence_length(person_count, complexity / steps) * length_scale
    if complexity == MAX_COMPLEXITY:
        max_length = math.inf
    else:
        max_length = interpolated_sentence_length(person_count, (complexity + 1) / steps) * length_scale
    return min_length, max_length


@dataclass
class GenerationParams:
    person_count: int
    complexity: int
    rng: random.Random = field(default_factory=random.Random)

    length_scale: float = LENGTH_SCALE
    max_statement_attempts: Optional[int] = None  # safety valve for the statement generator
    max_iterations: Optional[int] = None  # safety valve for the outer loop

    def __post_init__(self):
        if not MIN_PERSON_COUNT <= self.person_count <= MAX_PERSON_COUNT:
            raise ValueError(
                f"person_count must be between {MIN_PERSON_COUNT} and {MAX_PERSON_COUNT}, got {self.person_count}"
            )
        if not 0 <= self.complexity <= MAX_COMPLEXITY:
            raise ValueError(f"complexity must be between 0 and {MAX_COMPLEXITY}, got {self.complexity}")

    # ---- helpers --------------------------------------------------------
    def complexity_factor(self) -> float:
        return complexity_factor_for(self.complexity)

    def length_band(self) -> Tuple[float, float]:
        return sentence_length_band(self.person_count, self.complexity, self.length_scale)

    def root_contexts(self) -> List[StatementContext]:
        factor = self.complexity_factor()
        return [
            StatementContext(self.person_count, speaker_index, is_root=True, subordinate=False,
                             precondition_predicate=None, complexity_factor=factor)
            for speaker_index in range(self.person_count)
        ]


# ---------------------------------------------------------------------------
# Puzzle container
# ---------------------------------------------------------------------------


@dataclass
class Puzzle:
    statements: List[Statement]
    sentences: List[str]
    solution: int  # bit i set = person i is a truth-teller
    complexity: int
    attempts: int = 1

    @property
    def person_count(self) -> int:
        return len(self.statements)

    def total_length(self) -> int:
        return sum(len(s) for s in self.sentences)

    def is_consistent_on(self, speaker_index: int, guess: int) -> bool:
        """Whether speaker_index's statement fits the guessed assignment."""
        return self.statements[speaker_index].is_consistent_on(guess)

    def solution_labels(self) -> List[str]:
        return [person_type(bit_is_set(self.solution, i)) for i in range(self.person_count)]

    def speaker_lines(self) -> List[str]:
        return [f"{person_name(i)}: {sentence}" for i, sentence in enumerate(self.sentences)]

    def complete_puzzle_description(self) -> str:
        """Generate the complete English description of the puzzle."""
        names = [person_name(i) for i in range(self.person_count)]
        lines: List[str] = []
        lines.append(f"There are {self.person_count} people: {', '.join(names)}.")
        lines.append("Each of them is either a truth-teller, who only says true things,")
        lines.append("or a liar, who only says false things. Each person says one thing:")
        lines.append("")
        lines.extend(self.speaker_lines())
        lines.append("")
        lines.append(
            "Work out who is a truth-teller and who is a liar. "
            "You can think step by step as long as you'd like. "
            "Give your answer inside a \\boxed{...} tag as a Python list of "
            f"'{person_type(True)}' or '{person_type(False)}' in the order {', '.join(names)}."
        )
        return "\n".join(lines)

    def to_json(self) -> Dict:
        return {
            "question": self.complete_puzzle_description(),
            "canonical_answer": json.dumps(self.solution_labels()),
            "metadata": {
                "people": self.person_count,
                "complexity": self.complexity,
                "statements": list(self.sentences),
                "solution": self.solution,
                "attempts": self.attempts,
            },
        }


# ---------------------------------------------------------------------------
# Outer search loop
# ---------------------------------------------------------------------------


def assemble_puzzle(params: GenerationParams) -> Puzzle:
    """Build one puzzle with a unique solution inside the target length band."""
    rng = params.rng
    min_length, max_length = params.length_band()
    generator = StatementGenerator(rng, params.max_statement_attempts)
    contexts = params.root_contexts()

    statements = [generator.random_statement(context) for context in contexts]
    sentences = [statement.sentence() for statement in statements]
    solutions = solutions_for(statements)

    iteration = 1
    while True:
        total_length = sum(len(s) for s in sentences)
        if len(solutions) == 1 and min_length <= total_length <= max_length:
            break
        if params.max_iterations is not None and iteration >= params.max_iterations:
            raise RuntimeError(
                f"Unable to build a unique puzzle after {iteration} iterations – try relaxing settings."
            )
        logger.debug(
            f"Iteration {iteration}: {len(solutions)} solution(s), total length {total_length} "
            f"(band [{min_length:.0f}, {max_length:.0f}])"
        )

        # Regenerate one speaker only and solve again
        speaker_index = rng.randrange(params.person_count)
        statements[speaker_index] = generator.random_statement(contexts[speaker_index])
        sentences[speaker_index] = statements[speaker_index].sentence()
        solutions = solutions_for(statements)
        iteration += 1

    logger.info(
        f"Assembled {params.person_count}-person puzzle (complexity {params.complexity}) "
        f"after {iteration} iteration(s)"
    )
    return Puzzle(statements, sentences, solutions[0], params.complexity, iteration)
