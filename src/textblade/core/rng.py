"""Deterministic RNG wrapper built on top of random.Random."""
from __future__ import annotations

from random import Random
from typing import Any, Dict, MutableSequence, Protocol, Sequence, TypeVar

T_co = TypeVar("T_co")

RNGStatePayload = Dict[str, Any]


class RandomSource(Protocol):
    """Anything the simulation can draw random numbers from."""

    def random(self) -> float: ...

    def randint(self, a: int, b: int) -> int: ...

    def choice(self, seq: Sequence[T_co]) -> T_co: ...


class RNG:
    """Wrapper around random.Random that provides deterministic helpers."""

    def __init__(self, seed: int | None = None) -> None:
        self._random = Random(seed)

    def randint(self, a: int, b: int) -> int:
        """Return a random integer N such that a <= N <= b."""
        return self._random.randint(a, b)

    def random(self) -> float:
        """Return the next random floating point number in the range [0.0, 1.0)."""
        return self._random.random()

    def choice(self, seq: Sequence[T_co]) -> T_co:
        """Return a random element from the non-empty sequence."""
        if not seq:
            raise ValueError("Cannot choose from an empty sequence.")
        return self._random.choice(seq)

    def shuffle(self, seq: MutableSequence[T_co]) -> None:
        """Shuffle the sequence in-place."""
        self._random.shuffle(seq)

    def export_state(self) -> RNGStatePayload:
        """Return the generator state in a JSON-friendly shape."""
        version, internal, gauss_next = self._random.getstate()
        return {"version": version, "internal": list(internal), "gauss_next": gauss_next}

    def restore_state(self, payload: RNGStatePayload) -> None:
        """Restore a state previously produced by export_state."""
        try:
            version = int(payload["version"])
            internal = tuple(int(value) for value in payload["internal"])
            gauss_next = payload.get("gauss_next")
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError("Malformed RNG state payload.") from exc
        self._random.setstate((version, internal, gauss_next))


class ScriptedRandom:
    """Replays a fixed script of draws; used to force outcomes in tests and demos.

    ``random()`` pops from ``floats`` and ``randint``/``choice`` pop indices from
    ``ints``. Exhausted scripts fall back to the lowest value.
    """

    def __init__(self, floats: Sequence[float] = (), ints: Sequence[int] = ()) -> None:
        self._floats = list(floats)
        self._ints = list(ints)

    def random(self) -> float:
        if self._floats:
            return self._floats.pop(0)
        return 0.0

    def randint(self, a: int, b: int) -> int:
        if self._ints:
            return max(a, min(b, a + self._ints.pop(0)))
        return a

    def choice(self, seq: Sequence[T_co]) -> T_co:
        if not seq:
            raise ValueError("Cannot choose from an empty sequence.")
        return seq[self.randint(0, len(seq) - 1)]
