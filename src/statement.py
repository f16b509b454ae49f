"""Statement algebra for truth-teller / liar puzzles.

Every character in a puzzle utters one statement about which characters are
truth-tellers.  A statement is a small boolean expression tree whose leaves
are either

* an *identity assertion* ("B is a liar"), or
* a *count assertion* ("among A, C and me, the number of liars is at most 1").

Leaves are combined with "and", "or" and "if ... then ...".  Each statement
can be evaluated against an *assignment*: an integer whose bit ``i`` is set
when character ``i`` is a truth-teller.

The set of statement classes is closed: the generator's variant table in
``statement_generator`` lists every class that can be produced.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import ClassVar, List, Optional, Tuple

from utils_bits import bit_is_set, full_mask, popcount

# ---------------------------------------------------------------------------
# 1 – Naming helpers
# ---------------------------------------------------------------------------

TRUTH_TELLER = "truth-teller"
LIAR = "liar"


def person_name(person_index: int) -> str:
    """Return the display name of a character: A, B, C, ..."""
    return chr(ord("A") + person_index)


def person_type(is_truth_teller: bool) -> str:
    return TRUTH_TELLER if is_truth_teller else LIAR


def english_join(words: List[str], conjunction: str = "and") -> str:
    """Return comma‑separated English list: "A, B and C"."""
    if not words:
        return ""
    if len(words) == 1:
        return words[0]
    return ", ".join(words[:-1]) + f" {conjunction} {words[-1]}"


# ---------------------------------------------------------------------------
# 2 – Context
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StatementContext:
    """Situation a statement is uttered in.

    Contexts are immutable; the ``as_clause`` / ``with_*`` helpers return
    modified copies for substatements.
    """

    person_count: int
    speaker_index: int
    is_root: bool = True
    # Phrase the statement as a subordinate clause ("the number of liars
    # among A and B is ...") instead of a main clause ("among A and B, ...").
    subordinate: bool = False
    # Truth type asserted by a sibling clause that was already uttered.
    precondition_predicate: Optional[bool] = None
    complexity_factor: float = 1.0

    def as_clause(self) -> "StatementContext":
        return replace(self, is_root=False)

    def with_subordinate(self, subordinate: bool) -> "StatementContext":
        return replace(self, subordinate=subordinate)

    def with_precondition(self, predicate: Optional[bool]) -> "StatementContext":
        return replace(self, precondition_predicate=predicate)

    def assignments(self) -> range:
        """Every possible truth-teller/liar assignment for this many people."""
        return range(1 << self.person_count)


# ---------------------------------------------------------------------------
# 3 – Statement base class
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Statement:
    """Abstract base class for every statement node."""

    context: StatementContext

    # Nesting depth used by the generator; None for structural-only nodes.
    nesting_layer: ClassVar[Optional[int]] = None

    # ---- interface every concrete variant implements ---------------------
    def is_true_on(self, assignment: int) -> bool:
        """Return whether the statement holds when `assignment` is the truth."""
        raise NotImplementedError(f"is_true_on is not implemented by {type(self).__name__}")

    def sentence(self) -> str:
        """Plain‑English rendering."""
        raise NotImplementedError(f"sentence is not implemented by {type(self).__name__}")

    def subject_bits_array(self) -> List[int]:
        """Subject bit‑set of every atomic leaf, left to right."""
        raise NotImplementedError(f"subject_bits_array is not implemented by {type(self).__name__}")

    def predicate(self) -> Optional[bool]:
        """The truth type this statement asserts outright, if any."""
        return None

    # ---- derived operations ----------------------------------------------
    def is_consistent_on(self, assignment: int) -> bool:
        """True iff the speaker could say this under `assignment`.

        Truth-tellers only say true things and liars only false ones.
        """
        return self.is_true_on(assignment) == bit_is_set(assignment, self.context.speaker_index)

    def is_tautology(self) -> bool:
        for assignment in self.context.assignments():
            if not self.is_true_on(assignment):
                return False
        return True

    def is_satisfiable(self) -> bool:
        return not Negation.of(self).is_tautology()

    def implies(self, other: "Statement") -> bool:
        """True iff `other` holds on every assignment where this statement holds."""
        return Disjunction(self.context, Negation.of(self), other).is_tautology()

    def truth_table(self) -> Tuple[bool, ...]:
        return tuple(self.is_true_on(a) for a in self.context.assignments())

    def _finish(self, text: str) -> str:
        # Outermost clauses become a full sentence.
        if self.context.is_root:
            return text[0].upper() + text[1:] + "."
        return text


# ---------------------------------------------------------------------------
# 4 – Structural combinators
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Negation(Statement):
    """Logical "not"; only used for implication and tautology checks."""

    substatement: Statement

    @classmethod
    def of(cls, statement: Statement) -> "Negation":
        return cls(statement.context, statement)

    def is_true_on(self, assignment: int) -> bool:
        return not self.substatement.is_true_on(assignment)

    def subject_bits_array(self) -> List[int]:
        return self.substatement.subject_bits_array()


# ---------------------------------------------------------------------------
# 5 – Atomic assertions (layer 0)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class IdentityAssertion(Statement):
    """"<subject> is a truth-teller" or "<subject> is a liar"."""

    subject_index: int
    is_truth_teller: bool

    nesting_layer: ClassVar[Optional[int]] = 0

    def is_true_on(self, assignment: int) -> bool:
        return bit_is_set(assignment, self.subject_index) == self.is_truth_teller

    def predicate(self) -> Optional[bool]:
        return self.is_truth_teller

    def subject_bits_array(self) -> List[int]:
        return [1 << self.subject_index]

    def sentence(self) -> str:
        if self.subject_index == self.context.speaker_index:
            subject, verb = "I", "am"
        else:
            subject, verb = person_name(self.subject_index), "is"
        also = " also" if self.context.precondition_predicate == self.is_truth_teller else ""
        return self._finish(f"{subject} {verb}{also} a {person_type(self.is_truth_teller)}")


@dataclass(frozen=True)
class CountAssertion(Statement):
    """Statement about how many liars there are within a group of two or more.

    `liar_count_bits` has bit k set when "exactly k liars" is allowed, so one
    integer expresses "at most k", "at least k", "exactly k" or any mix.
    """

    subject_bits: int
    liar_count_bits: int

    nesting_layer: ClassVar[Optional[int]] = 0

    @property
    def subject_count(self) -> int:
        return popcount(self.subject_bits)

    def is_true_on(self, assignment: int) -> bool:
        liar_count = popcount(self.subject_bits & ~assignment)
        return bit_is_set(self.liar_count_bits, liar_count)

    def subject_bits_array(self) -> List[int]:
        return [self.subject_bits]

    def _group(self, as_object: bool) -> str:
        ctx = self.context
        if self.subject_bits == full_mask(ctx.person_count):
            return f"the {ctx.person_count} of us"
        names = [
            person_name(i)
            for i in range(ctx.person_count)
            if i != ctx.speaker_index and bit_is_set(self.subject_bits, i)
        ]
        if bit_is_set(self.subject_bits, ctx.speaker_index):
            names.append("me" if as_object else "I")
        return english_join(names)

    def _count_phrase(self) -> str:
        count = self.subject_count
        bits = self.liar_count_bits
        flipped = ~bits & full_mask(count + 1)
        if not bits & (bits + 1):
            return f"at most {popcount(bits) - 1}"
        if not flipped & (flipped + 1):
            return f"at least {popcount(flipped)}"
        counts = [str(k) for k in range(count + 1) if bit_is_set(bits, k)]
        return "exactly " + english_join(counts, "or")

    def sentence(self) -> str:
        ctx = self.context
        count = self.subject_count
        if self.liar_count_bits in (1, 1 << count):
            kind = person_type(self.liar_count_bits == 1) + "s"
            if self.subject_bits == full_mask(ctx.person_count):
                everyone = "both" if count == 2 else f"all {count}"
                text = f"{everyone} of us are {kind}"
            else:
                text = f"{self._group(False)} are {'both' if count == 2 else 'all'} {kind}"
        elif ctx.subordinate:
            text = f"the number of liars among {self._group(True)} is {self._count_phrase()}"
        else:
            text = f"among {self._group(True)}, the number of liars is {self._count_phrase()}"
        return self._finish(text)


# ---------------------------------------------------------------------------
# 6 – Compound statements
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Conjunction(Statement):
    """"<first>, and <second>"."""

    first: Statement
    second: Statement

    nesting_layer: ClassVar[Optional[int]] = 1

    def is_true_on(self, assignment: int) -> bool:
        return self.first.is_true_on(assignment) and self.second.is_true_on(assignment)

    def subject_bits_array(self) -> List[int]:
        return self.first.subject_bits_array() + self.second.subject_bits_array()

    def sentence(self) -> str:
        return self._finish(f"{self.first.sentence()}, and {self.second.sentence()}")


@dataclass(frozen=True)
class Disjunction(Statement):
    """"either <first>, or <second>"."""

    first: Statement
    second: Statement

    nesting_layer: ClassVar[Optional[int]] = 1

    def is_true_on(self, assignment: int) -> bool:
        return self.first.is_true_on(assignment) or self.second.is_true_on(assignment)

    def subject_bits_array(self) -> List[int]:
        return self.first.subject_bits_array() + self.second.subject_bits_array()

    def sentence(self) -> str:
        return self._finish(f"either {self.first.sentence()}, or {self.second.sentence()}")


@dataclass(frozen=True)
class Conditional(Statement):
    """Material implication: "if <antecedent>, then <consequent>"."""

    antecedent: Statement
    consequent: Statement

    nesting_layer: ClassVar[Optional[int]] = 2

    def is_true_on(self, assignment: int) -> bool:
        return not self.antecedent.is_true_on(assignment) or self.consequent.is_true_on(assignment)

    def subject_bits_array(self) -> List[int]:
        return self.antecedent.subject_bits_array() + self.consequent.subject_bits_array()

    def sentence(self) -> str:
        return self._finish(f"if {self.antecedent.sentence()}, then {self.consequent.sentence()}")
