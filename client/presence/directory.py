"""
Peer directory module.

Each peer keeps its own belief about who is present. The directory is written
by the receiver thread and by the application thread, so every access goes
through one lock, and readers outside this class only ever get a snapshot.
"""

from threading import Lock
from typing import FrozenSet, Iterable


class Directory:
    """Thread-safe set of peer identifiers."""

    def __init__(self, peers: Iterable[str] = ()):
        self.lock = Lock()
        self.peers = set(peers)

    def add(self, peer: str) -> bool:
        """Add a peer. Returns True if it was not already present."""
        with self.lock:
            if peer in self.peers:
                return False
            self.peers.add(peer)
            return True

    def remove(self, peer: str) -> bool:
        """Remove a peer. Returns True if it was present."""
        with self.lock:
            if peer not in self.peers:
                return False
            self.peers.discard(peer)
            return True

    def contains(self, peer: str) -> bool:
        with self.lock:
            return peer in self.peers

    def snapshot(self) -> FrozenSet[str]:
        """Immutable copy of the current members."""
        with self.lock:
            return frozenset(self.peers)

    def __contains__(self, peer: str) -> bool:
        return self.contains(peer)

    def __len__(self) -> int:
        with self.lock:
            return len(self.peers)
