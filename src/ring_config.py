import os
from dataclasses import dataclass
from typing import Optional

MIN_REPLICAS = 100
TOP_WEIGHT = 100


@dataclass
class RingConfig:
    """
    Configuration object for a consistent hash ring.

    Attributes:
        replicas: Virtual nodes per physical node at weight 100.
        log_name: Name of the logger used by the ring.
        log_level: Logging level name for the ring logger.
        log_dir: Directory for the log file; no file is written when None.
    Derived attributes:
        effective_replicas: replicas raised to the enforced minimum.
    """

    replicas: int = MIN_REPLICAS
    log_name: str = "ring"
    log_level: str = "INFO"
    log_dir: Optional[str] = None

    @property
    def effective_replicas(self) -> int:
        return max(self.replicas, MIN_REPLICAS)

    @classmethod
    def from_env(cls, prefix: str = "RING_") -> "RingConfig":
        """Builds a config from environment variables, falling back to defaults."""
        raw_replicas = os.getenv(f"{prefix}REPLICAS", str(MIN_REPLICAS))
        try:
            replicas = int(raw_replicas)
        except ValueError:
            raise ValueError(
                f"{prefix}REPLICAS must be an integer, got {raw_replicas!r}"
            ) from None

        return cls(
            replicas=replicas,
            log_name=os.getenv(f"{prefix}LOG_NAME", "ring"),
            log_level=os.getenv(f"{prefix}LOG_LEVEL", "INFO").upper(),
            log_dir=os.getenv(f"{prefix}LOG_DIR") or None,
        )
