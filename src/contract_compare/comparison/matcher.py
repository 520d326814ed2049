"""Exact-key matching of two record sets.

Records are bucketed by their normalized ``MatchKey``. Within a key shared by
both sides the buckets are zipped positionally, so repeated line items pair up
in input order and any surplus falls through to the one-sided buckets. There is
no scoring and no tie-breaking beyond input order.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Optional

from contract_compare.contracts.models import MatchKey

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Pairing:
    """Index-level partition of the two inputs."""

    pairs: list[tuple[int, int]] = field(default_factory=list)
    only_in_a: list[int] = field(default_factory=list)
    only_in_b: list[int] = field(default_factory=list)


def bucket_by_key(keys: Sequence[Optional[MatchKey]]) -> dict[MatchKey, list[int]]:
    """Group record indices by key, in input order. ``None`` keys are skipped."""
    buckets: dict[MatchKey, list[int]] = defaultdict(list)
    for index, key in enumerate(keys):
        if key is not None:
            buckets[key].append(index)
    return dict(buckets)


def pair_by_key(
    keys_a: Sequence[Optional[MatchKey]],
    keys_b: Sequence[Optional[MatchKey]],
) -> Pairing:
    """Pair records of A and B with equal keys; ``None`` marks an unmatchable record."""
    buckets_a = bucket_by_key(keys_a)
    buckets_b = bucket_by_key(keys_b)
    pairing = Pairing()

    for key, indices_a in buckets_a.items():
        indices_b = buckets_b.get(key, [])
        if len(indices_a) > 1 or len(indices_b) > 1:
            logger.debug(
                "Key %s has %s record(s) in A and %s in B; pairing positionally",
                key,
                len(indices_a),
                len(indices_b),
            )
        pairing.pairs.extend(zip(indices_a, indices_b))
        pairing.only_in_a.extend(indices_a[len(indices_b) :])

    for key, indices_b in buckets_b.items():
        paired = len(buckets_a.get(key, ()))
        pairing.only_in_b.extend(indices_b[paired:])

    pairing.only_in_a.extend(index for index, key in enumerate(keys_a) if key is None)
    pairing.only_in_b.extend(index for index, key in enumerate(keys_b) if key is None)

    pairing.pairs.sort()
    pairing.only_in_a.sort()
    pairing.only_in_b.sort()

    logger.debug(
        "Matched %s pair(s) across %s/%s distinct keys; %s only in A, %s only in B",
        len(pairing.pairs),
        len(buckets_a),
        len(buckets_b),
        len(pairing.only_in_a),
        len(pairing.only_in_b),
    )
    return pairing
