from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any, Iterable

logger = logging.getLogger(__name__)


@dataclass
class RandomSource:
    """
    A thin wrapper around random.Random to:
    - keep piece randomization on one generator per editing session
    - support optional deterministic seeding for tests
    """

    seed: int | None = None

    def __post_init__(self) -> None:
        if self.seed is not None:
            self._rng = random.Random(self.seed)
            logger.debug("Initialized RandomSource with deterministic seed=%s", self.seed)
        else:
            self._rng = random.Random()
            logger.debug("Initialized RandomSource with non-deterministic seed")

    def choice(self, seq: Iterable[Any]) -> Any:
        seq_list = list(seq)
        if not seq_list:
            raise ValueError("RandomSource.choice() received an empty sequence")
        idx = self._rng.randrange(0, len(seq_list))
        return seq_list[idx]


__all__ = ["RandomSource"]
