from spot_swap_sync.services.cursor.block_cursor_resolver import (
    BlockCursorResolver,
    Since,
    estimate_start_block,
)

__all__ = ["BlockCursorResolver", "Since", "estimate_start_block"]
