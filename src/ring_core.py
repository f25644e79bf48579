import logging
from bisect import bisect_left
from typing import Optional

from ring_hashing import HashFunc, inner_repr, murmur3_64
from ring_config import MIN_REPLICAS, TOP_WEIGHT, RingConfig
from ring_logger import Logger
from ring_rwlock import RWLock


class ConsistentHash:
    """
    Consistent hash ring with weighted virtual nodes.

    Each physical node is placed on a 64-bit ring at up to `replicas`
    positions computed as hash(node + str(i)). A key resolves to the node
    owning the first position clockwise from hash(key).

    `keys` is the ascending list of live positions and `ring` maps each
    position to the nodes that registered it, in insertion order. Distinct
    nodes can share a position; lookups then pick one with a salted hash of
    the key.

    Known limitation: removing one of two nodes that share a position drops
    that position from `keys` even though the other node is still listed in
    its bucket, so the survivor is no longer reachable at that position.
    """

    def __init__(
        self,
        replicas: int = MIN_REPLICAS,
        hash_func: Optional[HashFunc] = None,
        logger: Optional[logging.Logger] = None,
    ):
        if replicas < MIN_REPLICAS:
            replicas = MIN_REPLICAS
        if hash_func is None:
            hash_func = murmur3_64

        self._replicas = replicas
        self._hash_func = hash_func
        self._keys = []
        self._ring = {}
        self._nodes = set()
        self._lock = RWLock()
        self.logger = logger or logging.getLogger(__name__)

    @classmethod
    def from_config(
        cls, cfg: RingConfig, hash_func: Optional[HashFunc] = None
    ) -> "ConsistentHash":
        logger = Logger.get_logger(cfg.log_name, cfg.log_level, cfg.log_dir)
        return cls(cfg.replicas, hash_func, logger=logger)

    def _position(self, data: str) -> int:
        return self._hash_func(data.encode())

    def add(self, node: str):
        """Adds a node with the full configured replica count."""
        self.add_with_replicas(node, self._replicas)

    def add_with_replicas(self, node: str, replicas: int):
        """
        Adds a node with the given number of virtual nodes.

        Any previous placement of the node is retracted first, so calling this
        again with a different count replaces the old positions.
        """
        self.remove(node)

        if replicas > self._replicas:
            self.logger.debug(
                f"[RING] Clamping replicas for {node} from {replicas} to {self._replicas}"
            )
            replicas = self._replicas

        with self._lock.writer():
            self._nodes.add(node)
            for i in range(replicas):
                position = self._position(node + str(i))
                self._keys.append(position)
                self._ring.setdefault(position, []).append(node)
            self._keys.sort()

        if replicas > 0:
            self.logger.debug(f"[RING] Added {node} with {replicas} virtual nodes")
        else:
            self.logger.debug(f"[RING] Registered {node} without virtual nodes")

    def add_with_weight(self, node: str, weight: int):
        """Adds a node with replicas scaled by weight, where 100 is full weight."""
        replicas = self._replicas * weight // TOP_WEIGHT
        self.add_with_replicas(node, replicas)

    def get(self, key: str):
        """
        Returns (node, True) for the node owning key, or (None, False) when
        no node is reachable.
        """
        with self._lock.reader():
            if not self._ring or not self._keys:
                return None, False

            hv = self._position(key)
            i = bisect_left(self._keys, hv) % len(self._keys)

            nodes = self._ring.get(self._keys[i], [])
            if not nodes:
                return None, False
            if len(nodes) == 1:
                return nodes[0], True

            inner = self._position(inner_repr(key))
            return nodes[inner % len(nodes)], True

    def remove(self, node: str):
        """Removes a node and every position it may have registered."""
        with self._lock.writer():
            if node not in self._nodes:
                return

            # Positions are recomputed for the full replica count; nodes added
            # with fewer replicas simply have no match for the rest.
            for i in range(self._replicas):
                position = self._position(node + str(i))
                idx = bisect_left(self._keys, position)
                if idx < len(self._keys) and self._keys[idx] == position:
                    del self._keys[idx]
                self._remove_ring_node(position, node)

            self._nodes.discard(node)

        self.logger.debug(f"[RING] Removed {node}")

    def _remove_ring_node(self, position: int, node: str):
        nodes = self._ring.get(position)
        if nodes is None:
            return

        remaining = [n for n in nodes if n != node]
        if remaining:
            self._ring[position] = remaining
        else:
            del self._ring[position]

    @property
    def replicas(self) -> int:
        return self._replicas

    @property
    def nodes(self) -> frozenset:
        with self._lock.reader():
            return frozenset(self._nodes)

    @property
    def vnode_count(self) -> int:
        with self._lock.reader():
            return len(self._keys)

    def __len__(self) -> int:
        with self._lock.reader():
            return len(self._nodes)

    def __contains__(self, node) -> bool:
        with self._lock.reader():
            return node in self._nodes

    def __repr__(self) -> str:
        return f"ConsistentHash(replicas={self._replicas}, nodes={len(self)}, vnodes={self.vnode_count})"
