"""Deterministic, seed-derived tie-breaking among equally scored candidates.

Topic seed layout: SHA-256 over the UTF-8 topic bytes followed by the run
seed as 8 little-endian bytes; the first 8 digest bytes, read little-endian,
seed a Mersenne Twister (random.Random) that picks an index uniformly.
"""

import hashlib
import logging
import random
from typing import Sequence

from selector.errors import InvariantViolation

logger = logging.getLogger(__name__)

SEED_BYTES = 8
MAX_SEED = 2 ** 64 - 1


def derive_topic_seed(topic: str, seed: int) -> int:
    """Topic-local 64-bit seed; different topics never share a stream."""
    digest = hashlib.sha256(topic.encode("utf-8") + seed.to_bytes(SEED_BYTES, "little")).digest()
    return int.from_bytes(digest[:SEED_BYTES], "little")


def choose(topic: str, seed: int, names: Sequence[str]) -> str:
    """Pick one of `names` (in the order given) for this topic and seed.

    Raises:
        InvariantViolation: `names` is empty, which means filtering upstream is broken
    """
    if not names:
        raise InvariantViolation(f"No candidates provided for tie breaker (topic {topic!r})")
    if len(names) == 1:
        return names[0]

    rng = random.Random(derive_topic_seed(topic, seed))
    choice = names[rng.randrange(len(names))]
    logger.info("Tie in %s between %s resolved to %r (seed %d)", topic, list(names), choice, seed)
    return choice
