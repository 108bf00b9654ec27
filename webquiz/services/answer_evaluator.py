from typing import AbstractSet


class AnswerEvaluator:
    """Grades a submission against a quiz's correct options.

    A submission is correct only when it selects exactly the correct options:
    picking a subset, a superset or an overlapping set is wrong. Indices that
    do not exist in the quiz are not an error, they just never match.

    Example:
        >>> AnswerEvaluator().evaluate({0, 2}, {0, 2})
        True
        >>> AnswerEvaluator().evaluate({0}, {0, 2})
        False
    """

    def evaluate(self, submitted: AbstractSet[int], correct: AbstractSet[int]) -> bool:
        return set(submitted) == set(correct)
