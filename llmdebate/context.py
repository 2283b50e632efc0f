"""Bounded, seed-anchored turn history shared by both debaters."""

from collections.abc import Iterator

from llmdebate.models import Role, Turn


class ContextWindow:
    """Ordered turn log whose first entry is always the seed claim.

    The window stores every turn appended during a run; capacity is applied
    when a view is taken with trimmed(), which keeps the seed and drops the
    oldest non-seed turns first.
    """

    def __init__(self, seed: str) -> None:
        self._seed = Turn(Role.SEED, seed)
        self._turns: list[Turn] = []

    @property
    def seed(self) -> Turn:
        return self._seed

    @property
    def turns(self) -> tuple[Turn, ...]:
        return (self._seed, *self._turns)

    def __len__(self) -> int:
        return len(self._turns) + 1

    def __iter__(self) -> Iterator[Turn]:
        return iter(self.turns)

    def append(self, turn: Turn) -> None:
        if turn.role is Role.SEED:
            raise ValueError("The seed turn is fixed at construction")
        self._turns.append(turn)

    def trimmed(self, max_len: int) -> list[Turn]:
        """Return the seed followed by the most recent max_len - 1 turns."""
        keep = max_len - 1
        if keep <= 0:
            return [self._seed]
        return [self._seed, *self._turns[-keep:]]
