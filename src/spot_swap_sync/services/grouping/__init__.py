from spot_swap_sync.services.grouping.transfer_grouper import group_transfers_by_transaction

__all__ = ["group_transfers_by_transaction"]
