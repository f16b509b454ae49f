"""
Brute-force solver for truth-teller / liar puzzles.
"""

from typing import List, Sequence

from statement import Statement


def solutions_for(statements: Sequence[Statement]) -> List[int]:
    """
    Find every truth-teller/liar assignment consistent with all statements.

    Args:
        statements: One statement per speaker, statement i spoken by person i

    Returns:
        Assignments (bit i set = person i is a truth-teller) in ascending order.
        A well-formed puzzle has exactly one.
    """
    person_count = len(statements)
    solutions = []
    for assignment in range(1 << person_count):
        if all(statement.is_consistent_on(assignment) for statement in statements):
            solutions.append(assignment)
    return solutions
