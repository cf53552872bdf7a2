"""
Pivot tracker for row-pivoted factorizations.

Records the row permutation applied during factorization: order[i] is the
original row index now sitting at position i. The sign flips on every
exchange so the determinant can be recovered from U's diagonal.
"""

import numpy as np
from numpy.typing import NDArray


class Pivot:
    """
    Row permutation and its sign.

    Created fresh at the start of each factorization and frozen when the
    factorization completes.
    """

    def __init__(self, n: int):
        self.initialize(n)

    def initialize(self, n: int) -> None:
        """Reset to the identity permutation of length n."""
        self._order = np.arange(n, dtype=np.intp)
        self._sign = 1
        self._modified = False
        self._frozen = False

    def exchange(self, i: int, j: int) -> None:
        """
        Record an exchange of rows i and j.

        Callers only invoke this with i != j.

        Raises:
            RuntimeError: If the tracker has been frozen
        """
        if self._frozen:
            raise RuntimeError("Pivot is frozen; factorization already completed")
        self._order[i], self._order[j] = self._order[j], self._order[i]
        self._sign = -self._sign
        self._modified = True

    def freeze(self) -> None:
        self._frozen = True

    def signum(self) -> int:
        """+1 for an even number of exchanges, -1 for odd."""
        return self._sign

    @property
    def order(self) -> NDArray[np.intp]:
        """Copy of the current permutation."""
        return self._order.copy()

    @property
    def size(self) -> int:
        return len(self._order)

    def is_modified(self) -> bool:
        """True iff at least one exchange occurred."""
        return self._modified

    def __repr__(self) -> str:
        return f"Pivot(order={self._order.tolist()}, sign={self._sign:+d})"
