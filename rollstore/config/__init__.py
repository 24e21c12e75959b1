from .settings import StoreSettings

__all__ = ["StoreSettings"]
