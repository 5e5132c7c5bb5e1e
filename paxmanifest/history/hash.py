"""
Snapshot fingerprints.

Computes stable hashes of manifest content so display collaborators can
tell whether the snapshot they rendered is still current.
"""

from __future__ import annotations

from typing import Iterable

import xxhash

from paxmanifest.core.json_canonical import canonical_json_bytes
from paxmanifest.core.schema import PassengerRecord


def compute_record_hash(record: PassengerRecord) -> str:
    """
    Compute hash of a single record.

    Args:
        record: Record to hash.

    Returns:
        Hex-encoded xxh64 digest of the record's canonical JSON.
    """
    return xxhash.xxh64(canonical_json_bytes(record.model_dump(mode="json"))).hexdigest()


def compute_snapshot_hash(snapshot: Iterable[PassengerRecord]) -> str:
    """
    Compute hash of a whole snapshot.

    Order matters: the same records in a different display order hash
    differently.

    Args:
        snapshot: Records in display order.

    Returns:
        Hex-encoded hash string.
    """
    hasher = xxhash.xxh64()
    for record in snapshot:
        hasher.update(compute_record_hash(record).encode("ascii"))
    return hasher.hexdigest()
