from enum import Enum


class OrderSource(str, Enum):
    """Which order list is authoritative for a reconciliation run."""

    LOCAL = "LOCAL"      # Orders recorded on this register today
    REMOTE = "REMOTE"    # Orders fetched from the remote order store
