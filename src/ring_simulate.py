import random
import sys
from collections import Counter

from colorama import init

from ring_core import ConsistentHash
from ring_config import RingConfig
from ring_logger import Logger


def key_shares(ring, keys):
    """Counts how many keys resolve to each node; unresolved keys count under None."""
    shares = Counter()
    for key in keys:
        node, found = ring.get(key)
        shares[node if found else None] += 1
    return shares


def moved_keys(before, ring, keys):
    """Number of keys whose owner differs from the `before` assignment."""
    return sum(1 for key in keys if ring.get(key)[0] != before[key])


def main(num_keys=10_000, seed=None):
    cfg = RingConfig.from_env()
    logger = Logger.get_logger("simulation", cfg.log_level, cfg.log_dir)
    logger.info("[SYSTEM] Consistent hash simulation started.")

    try:
        ring = ConsistentHash.from_config(cfg)
        rng = random.Random(seed)
        keys = [f"key-{rng.getrandbits(64):016x}" for _ in range(num_keys)]

        ring.add("A")
        node, found = ring.get("foo")
        logger.info(f"[SYSTEM] Single node ring: 'foo' -> {node} (found={found})")

        ring.add("B")
        logger.info(f"[SYSTEM] Shares with A, B: {dict(key_shares(ring, keys))}")

        before = {k: ring.get(k)[0] for k in keys}
        ring.add_with_weight("C", 50)
        logger.info(
            f"[SYSTEM] Added C at weight 50: moved={moved_keys(before, ring, keys)}, "
            f"shares={dict(key_shares(ring, keys))}"
        )

        for name in ("C", "A", "B"):
            before = {k: ring.get(k)[0] for k in keys}
            ring.remove(name)
            logger.info(
                f"[SYSTEM] Removed {name}: moved={moved_keys(before, ring, keys)}, "
                f"shares={dict(key_shares(ring, keys))}"
            )

        logger.info(f"[SYSTEM] Simulation completed: {ring!r}")
        return 0
    except Exception as e:
        logger.error(f"[SYSTEM] Simulation failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    init(autoreset=True)
    sys.exit(main())
