"""Random construction of truth-teller / liar statements.

Statements are built by weighted recursive random choice followed by
rejection sampling: a candidate that is trivially true, trivially false,
redundant, or that names the same group of people twice is thrown away and
drawn again.  Every statement returned is therefore informative without
needing a separate simplifier.

The set of statement classes that can be produced is the closed table
``STATEMENT_FACTORIES``; each entry maps a class to its randomized
constructor.
"""
from __future__ import annotations

import bisect
import logging
import math
import random
from itertools import accumulate
from typing import Callable, Dict, Iterator, Mapping, Optional, Type

from statement import (
    Conditional,
    Conjunction,
    CountAssertion,
    Disjunction,
    IdentityAssertion,
    Negation,
    Statement,
    StatementContext,
)
from utils_bits import has_duplicate, popcount

logger = logging.getLogger(__name__)

Factory = Callable[["StatementGenerator", StatementContext], Statement]


# ---------------------------------------------------------------------------
# Per-class randomized constructors
# ---------------------------------------------------------------------------


def random_identity(gen: "StatementGenerator", context: StatementContext) -> IdentityAssertion:
    subject_index = gen.rng.randrange(context.person_count)
    is_truth_teller = gen.rng.random() < 0.5
    return IdentityAssertion(context, subject_index, is_truth_teller)


def random_count(gen: "StatementGenerator", context: StatementContext) -> CountAssertion:
    # Keep drawing groups until at least two people are in it
    for _ in gen.retries("a group of two or more people"):
        subject_bits = gen.rng.randrange(1 << context.person_count)
        if popcount(subject_bits) >= 2:
            break
    subject_count = popcount(subject_bits)
    # Any set of possible liar counts except "none of them" (0) and
    # "all of them" (2^(n+1) - 1)
    liar_count_bits = gen.rng.randrange(1, (1 << (subject_count + 1)) - 1)
    return CountAssertion(context, subject_bits, liar_count_bits)


def random_conjunction(gen: "StatementGenerator", context: StatementContext) -> Conjunction:
    for attempt in gen.retries("a conjunction"):
        first_context = context.as_clause()
        first = gen.random_statement(first_context, 0)
        second_context = first_context.with_precondition(first.predicate())
        second = gen.random_statement(second_context, 0)

        candidate = Conjunction(context, first, second)
        # one side is unnecessary, or the whole thing can never hold
        if first.implies(candidate) or second.implies(candidate) or not candidate.is_satisfiable():
            logger.debug(f"Rejected conjunction (attempt {attempt}): {candidate.sentence()!r}")
            continue
        return candidate


def random_disjunction(gen: "StatementGenerator", context: StatementContext) -> Disjunction:
    for attempt in gen.retries("a disjunction"):
        sub_context = context.as_clause().with_subordinate(True).with_precondition(None)
        first = gen.random_statement(sub_context, 0)
        second = gen.random_statement(sub_context, 0)

        candidate = Disjunction(context, first, second)
        # one side is unnecessary, or the whole thing always holds
        if candidate.implies(first) or candidate.implies(second) or candidate.is_tautology():
            logger.debug(f"Rejected disjunction (attempt {attempt}): {candidate.sentence()!r}")
            continue
        return candidate


def random_conditional(gen: "StatementGenerator", context: StatementContext) -> Conditional:
    for attempt in gen.retries("a conditional"):
        antecedent_context = context.as_clause().with_subordinate(True)
        antecedent = gen.random_statement(antecedent_context, 1)
        consequent_context = (
            antecedent_context
            .with_subordinate(context.subordinate)
            .with_precondition(antecedent.predicate())
        )
        consequent = gen.random_statement(consequent_context, 1)

        candidate = Conditional(context, antecedent, consequent)
        if (candidate.implies(Negation.of(antecedent))
                or candidate.implies(consequent)
                or candidate.is_tautology()):
            logger.debug(f"Rejected conditional (attempt {attempt}): {candidate.sentence()!r}")
            continue
        return candidate


STATEMENT_FACTORIES: Dict[Type[Statement], Factory] = {
    IdentityAssertion: random_identity,
    CountAssertion: random_count,
    Conjunction: random_conjunction,
    Disjunction: random_disjunction,
    Conditional: random_conditional,
}


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------


class StatementGenerator:
    """Draws random statements from a shared random source."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        max_attempts: Optional[int] = None,
        factories: Optional[Mapping[Type[Statement], Factory]] = None,
    ):
        """
        Args:
            rng: Random source used for every draw (a fresh one if omitted)
            max_attempts: Optional cap on each rejection loop; None retries forever
            factories: Statement classes to draw from, defaults to STATEMENT_FACTORIES
        """
        self.rng = rng if rng is not None else random.Random()
        self.max_attempts = max_attempts
        self.factories = dict(STATEMENT_FACTORIES if factories is None else factories)

    def retries(self, what: str) -> Iterator[int]:
        """Yield attempt numbers 1, 2, ... until the optional cap is hit."""
        attempt = 0
        while True:
            if self.max_attempts is not None and attempt >= self.max_attempts:
                raise RuntimeError(f"Unable to build {what} after {attempt} attempts – try relaxing settings.")
            attempt += 1
            yield attempt

    def random_statement(self, context: StatementContext, max_layer: float = math.inf) -> Statement:
        """Return a random informative statement whose nesting layer is at most `max_layer`.

        Raises:
            RuntimeError: no statement class has a small enough nesting layer,
                or max_attempts was exhausted
        """
        choices = [cls for cls in self.factories if cls.nesting_layer <= max_layer]
        if not choices:
            raise RuntimeError(f"No statement class with nesting_layer <= {max_layer} is registered")

        # Deeper classes get more weight as complexity_factor grows
        weights = [context.complexity_factor ** cls.nesting_layer for cls in choices]
        partial_weight_sums = list(accumulate(weights))
        weight_sum = partial_weight_sums[-1]

        for attempt in self.retries("a statement"):
            r = self.rng.random() * weight_sum
            choice_index = min(bisect.bisect_right(partial_weight_sums, r), len(choices) - 1)
            cls = choices[choice_index]

            candidate = self.factories[cls](self, context)
            # the same group of people named twice reads badly
            if has_duplicate(candidate.subject_bits_array()):
                logger.debug(f"Rejected {cls.__name__} with repeated subjects (attempt {attempt})")
                continue
            return candidate


def random_statement(
    context: StatementContext,
    max_layer: float = math.inf,
    rng: Optional[random.Random] = None,
) -> Statement:
    """Convenience wrapper around StatementGenerator.random_statement."""
    return StatementGenerator(rng).random_statement(context, max_layer)
