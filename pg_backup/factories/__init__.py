from .storage_factory import StorageProviderFactory

__all__ = ['StorageProviderFactory']
