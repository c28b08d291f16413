"""Deterministic random stream used for maze carving."""

from __future__ import annotations

import hashlib
import random
import re
from typing import Union

ContentId = Union[int, str, bytes]

_INTEGER_ID = re.compile(rb"[+-]?\d+")


class SeededRandom:
    """Seeded stream over :class:`random.Random`.

    ``random.Random`` seeds from ``abs(seed)``, so the seed is folded onto the
    non-negative integers first (0, -1, 1, -2, 2 ... -> 0, 1, 2, 3, 4 ...) to
    keep ``seed`` and ``-seed`` on different streams.
    """

    __slots__ = ("seed", "_rng")

    def __init__(self, seed: int) -> None:
        if isinstance(seed, bool) or not isinstance(seed, int):
            raise TypeError(f"seed must be an int, got {type(seed).__name__}")
        self.seed = seed
        folded = seed * 2 if seed >= 0 else -seed * 2 - 1
        self._rng = random.Random(folded)

    def random(self) -> float:
        """Return the next float in [0, 1)."""

        return self._rng.random()

    def randbelow(self, n: int) -> int:
        """Pick an index in ``range(n)`` from the next draw."""

        if n < 1:
            raise ValueError("n must be at least 1")
        return int(self.random() * n)

    def getrandbits(self, k: int) -> int:
        return self._rng.getrandbits(k)


def derive_seed(content_id: ContentId) -> int:
    """Map a content identifier onto a stable integer seed.

    Integers, and text that spells an integer such as ``"17"``, are used as-is.
    Other text and bytes are hashed, so the same daily content always produces
    the same maze across processes.
    """

    if isinstance(content_id, bool):
        raise TypeError("content_id must be an int, str or bytes, not bool")
    if isinstance(content_id, int):
        return content_id
    if isinstance(content_id, str):
        content_id = content_id.encode("utf-8")
    if isinstance(content_id, bytes):
        if _INTEGER_ID.fullmatch(content_id.strip()):
            return int(content_id.strip())
        digest = hashlib.blake2b(content_id, digest_size=8).digest()
        return int.from_bytes(digest, "big", signed=True)
    raise TypeError(f"content_id must be an int, str or bytes, got {type(content_id).__name__}")


__all__ = ["SeededRandom", "derive_seed", "ContentId"]
