"""
Statement algebra tests: evaluation, derived operations and English rendering.
"""
import dataclasses

import pytest

from statement import (
    Conditional,
    Conjunction,
    CountAssertion,
    Disjunction,
    IdentityAssertion,
    Negation,
    Statement,
    StatementContext,
    english_join,
    person_name,
)
from utils_bits import popcount


def all_atomic_statements(context):
    n = context.person_count
    statements = [IdentityAssertion(context, i, t) for i in range(n) for t in (True, False)]
    for subject_bits in range(1 << n):
        count = popcount(subject_bits)
        if count < 2:
            continue
        for liar_count_bits in range(1, (1 << (count + 1)) - 1):
            statements.append(CountAssertion(context, subject_bits, liar_count_bits))
    return statements


def sample_statements(context):
    clause = context.as_clause()
    atoms = all_atomic_statements(clause)
    compounds = []
    for first in atoms[:6]:
        for second in atoms[-6:]:
            compounds.append(Conjunction(context, first, second))
            compounds.append(Disjunction(context, first, second))
            compounds.append(Conditional(context, Disjunction(clause, first, second), second))
    return all_atomic_statements(context) + compounds


# ── Context ───────────────────────────────────────────────────────────────────

class TestStatementContext:
    def test_defaults(self):
        ctx = StatementContext(3, 1)
        assert ctx.is_root
        assert not ctx.subordinate
        assert ctx.precondition_predicate is None
        assert ctx.complexity_factor == 1.0

    def test_derived_copies_leave_original_untouched(self):
        ctx = StatementContext(3, 1)
        clause = ctx.as_clause().with_subordinate(True).with_precondition(False)
        assert (clause.is_root, clause.subordinate, clause.precondition_predicate) == (False, True, False)
        assert (ctx.is_root, ctx.subordinate, ctx.precondition_predicate) == (True, False, None)
        assert clause.speaker_index == ctx.speaker_index
        assert clause.person_count == ctx.person_count

    def test_immutable(self):
        ctx = StatementContext(3, 1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            ctx.is_root = False

    def test_assignments(self):
        assert list(StatementContext(3, 0).assignments()) == list(range(8))


# ── Evaluation ────────────────────────────────────────────────────────────────

class TestEvaluation:
    def test_identity_assertion(self):
        ctx = StatementContext(2, 0)
        says_b_truthful = IdentityAssertion(ctx, 1, True)
        says_b_liar = IdentityAssertion(ctx, 1, False)
        assert says_b_truthful.truth_table() == (False, False, True, True)
        assert says_b_liar.truth_table() == (True, True, False, False)

    def test_count_assertion_exactly_one_liar(self):
        ctx = StatementContext(2, 0)
        statement = CountAssertion(ctx, 0b11, 0b010)
        assert statement.is_true_on(0b01)
        assert statement.is_true_on(0b10)
        assert not statement.is_true_on(0b11)
        assert not statement.is_true_on(0b00)

    def test_count_assertion_ignores_people_outside_group(self):
        ctx = StatementContext(3, 0)
        statement = CountAssertion(ctx, 0b011, 0b001)  # A and B are both truth-tellers
        assert statement.is_true_on(0b011)
        assert statement.is_true_on(0b111)
        assert not statement.is_true_on(0b101)

    def test_connectives(self):
        ctx = StatementContext(2, 0)
        clause = ctx.as_clause()
        a = IdentityAssertion(clause, 0, True)
        b = IdentityAssertion(clause, 1, True)
        assert Conjunction(ctx, a, b).truth_table() == (False, False, False, True)
        assert Disjunction(ctx, a, b).truth_table() == (False, True, True, True)
        assert Conditional(ctx, a, b).truth_table() == (True, False, True, True)
        assert Negation.of(a).truth_table() == (True, False, True, False)

    def test_totality_and_determinism(self):
        for n in range(2, 5):
            ctx = StatementContext(n, 0)
            for statement in sample_statements(ctx):
                table = statement.truth_table()
                assert len(table) == 1 << n
                assert all(isinstance(v, bool) for v in table)
                assert statement.truth_table() == table

    def test_consistency_symmetry(self):
        for speaker in range(3):
            ctx = StatementContext(3, speaker)
            for statement in sample_statements(ctx):
                for a in ctx.assignments():
                    expected = statement.is_true_on(a) == bool((a >> speaker) & 1)
                    assert statement.is_consistent_on(a) == expected


# ── Derived operations ────────────────────────────────────────────────────────

class TestDerivedOperations:
    def test_tautology_agrees_with_enumeration(self):
        ctx = StatementContext(3, 0)
        for statement in sample_statements(ctx):
            assert statement.is_tautology() == all(statement.truth_table())
            assert Negation.of(statement).is_tautology() == (not any(statement.truth_table()))
            assert statement.is_satisfiable() == any(statement.truth_table())

    def test_known_tautology(self):
        ctx = StatementContext(2, 0)
        a = IdentityAssertion(ctx.as_clause(), 0, True)
        assert Disjunction(ctx, a, Negation.of(a)).is_tautology()
        assert not a.is_tautology()

    def test_implies(self):
        ctx = StatementContext(3, 0)
        clause = ctx.as_clause()
        a = IdentityAssertion(clause, 0, True)
        b = IdentityAssertion(clause, 1, False)
        both = Conjunction(ctx, a, b)
        assert both.implies(a)
        assert both.implies(b)
        assert not a.implies(both)
        assert a.implies(Disjunction(ctx, a, b))

    def test_predicate(self):
        ctx = StatementContext(3, 0)
        assert IdentityAssertion(ctx, 1, True).predicate() is True
        assert IdentityAssertion(ctx, 1, False).predicate() is False
        assert CountAssertion(ctx, 0b011, 0b001).predicate() is None
        a = IdentityAssertion(ctx.as_clause(), 1, True)
        assert Conjunction(ctx, a, a).predicate() is None

    def test_subject_bits_array(self):
        ctx = StatementContext(3, 0)
        clause = ctx.as_clause()
        a = IdentityAssertion(clause, 2, True)
        c = CountAssertion(clause, 0b011, 0b001)
        assert a.subject_bits_array() == [0b100]
        assert Conditional(ctx, Conjunction(clause, a, c), a).subject_bits_array() == [0b100, 0b011, 0b100]

    def test_nesting_layers(self):
        assert IdentityAssertion.nesting_layer == 0
        assert CountAssertion.nesting_layer == 0
        assert Conjunction.nesting_layer == 1
        assert Disjunction.nesting_layer == 1
        assert Conditional.nesting_layer == 2


class TestAbstractStatements:
    def test_base_class_evaluation_fails_loudly(self):
        statement = Statement(StatementContext(2, 0))
        with pytest.raises(NotImplementedError):
            statement.is_true_on(0)
        with pytest.raises(NotImplementedError):
            statement.sentence()
        with pytest.raises(NotImplementedError):
            statement.subject_bits_array()

    def test_negation_cannot_be_rendered(self):
        ctx = StatementContext(2, 0)
        with pytest.raises(NotImplementedError):
            Negation.of(IdentityAssertion(ctx, 1, True)).sentence()


# ── Rendering ─────────────────────────────────────────────────────────────────

class TestRendering:
    def setup_method(self):
        self.ctx = StatementContext(3, 0)
        self.clause = self.ctx.as_clause()

    def test_helpers(self):
        assert [person_name(i) for i in range(3)] == ["A", "B", "C"]
        assert english_join(["A"]) == "A"
        assert english_join(["A", "B", "C"]) == "A, B and C"
        assert english_join(["1", "3"], "or") == "1 or 3"

    def test_identity(self):
        assert IdentityAssertion(self.ctx, 1, False).sentence() == "B is a liar."
        assert IdentityAssertion(self.ctx, 0, True).sentence() == "I am a truth-teller."
        assert IdentityAssertion(self.clause, 2, True).sentence() == "C is a truth-teller"

    def test_identity_with_matching_precondition(self):
        clause = self.clause.with_precondition(False)
        assert IdentityAssertion(clause, 2, False).sentence() == "C is also a liar"
        assert IdentityAssertion(clause, 0, False).sentence() == "I am also a liar"
        assert IdentityAssertion(clause, 2, True).sentence() == "C is a truth-teller"

    def test_count_both(self):
        assert CountAssertion(self.ctx, 0b011, 0b100).sentence() == "B and I are both liars."
        assert CountAssertion(self.ctx, 0b110, 0b001).sentence() == "B and C are both truth-tellers."

    def test_count_everyone(self):
        assert CountAssertion(self.ctx, 0b111, 0b0001).sentence() == "All 3 of us are truth-tellers."
        two = StatementContext(2, 1)
        assert CountAssertion(two, 0b11, 0b100).sentence() == "Both of us are liars."

    def test_count_at_most_and_at_least(self):
        assert (CountAssertion(self.ctx, 0b110, 0b011).sentence()
                == "Among B and C, the number of liars is at most 1.")
        assert (CountAssertion(self.ctx, 0b011, 0b110).sentence()
                == "Among B and me, the number of liars is at least 1.")

    def test_count_listing(self):
        assert (CountAssertion(self.ctx, 0b111, 0b1010).sentence()
                == "Among the 3 of us, the number of liars is exactly 1 or 3.")

    def test_count_subordinate_grammar(self):
        clause = self.clause.with_subordinate(True)
        assert (CountAssertion(clause, 0b110, 0b011).sentence()
                == "the number of liars among B and C is at most 1")

    def test_compounds(self):
        b_liar = IdentityAssertion(self.clause, 1, False)
        c_liar = IdentityAssertion(self.clause.with_precondition(False), 2, False)
        c_truthful = IdentityAssertion(self.clause, 2, True)
        assert Conjunction(self.ctx, b_liar, c_liar).sentence() == "B is a liar, and C is also a liar."
        assert Disjunction(self.ctx, b_liar, c_truthful).sentence() == "Either B is a liar, or C is a truth-teller."
        assert Conditional(self.ctx, b_liar, c_truthful).sentence() == "If B is a liar, then C is a truth-teller."
