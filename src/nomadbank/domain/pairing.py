"""Balanced transfer pair generation."""

from typing import Sequence

from nomadbank.domain.entities import Account, TransferPair
from nomadbank.domain.randomizer import Randomizer


def generate_balanced_pairs(
    accounts: Sequence[Account], randomizer: Randomizer
) -> list[TransferPair]:
    """Build one cycle's transfer pairs over ``accounts``.

    Every account appears at least once as a sender and at least once as a
    receiver. An even number of accounts yields exactly ``n`` pairs, an odd
    number yields ``n + 1``. Fewer than two accounts yields no pairs.

    Args:
        accounts: Active accounts to pair up
        randomizer: Source of the shuffle

    Returns:
        Pairs in scheduling order
    """
    n = len(accounts)
    if n < 2:
        return []

    shuffled = randomizer.shuffled(accounts)
    pairs: list[TransferPair] = []

    # Adjacent positions: 0->1, 2->3, ...
    for i in range(0, n - 1, 2):
        pairs.append(TransferPair(from_account=shuffled[i], to_account=shuffled[i + 1]))

    # Odd positions forward to the next, wrapping at the end: 1->2, 3->4, ...
    for i in range(1, n, 2):
        pairs.append(TransferPair(from_account=shuffled[i], to_account=shuffled[(i + 1) % n]))

    if n % 2 == 1:
        # The last account was never paired above
        pairs.append(TransferPair(from_account=shuffled[n - 1], to_account=shuffled[0]))
        pairs.append(TransferPair(from_account=shuffled[n - 2], to_account=shuffled[n - 1]))

    return pairs
