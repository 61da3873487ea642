from storefront.core.utils.sync_adapter import run_sync

__all__ = ["run_sync"]
