"""
Storage module.

Storage gateway interface plus HTTP and in-memory implementations.
"""
from .config import BlobStoreConfig, TimeoutConfig
from .models import StoredObject, BlobEntry, BlobListing
from .protocols import StorageGateway
from .http_gateway import HttpBlobGateway
from .memory_gateway import MemoryGateway
from .operations import delete_many
from .signing import UrlSigner

__all__ = [
    # Configuration
    'BlobStoreConfig',
    'TimeoutConfig',
    
    # Models
    'StoredObject',
    'BlobEntry',
    'BlobListing',
    
    # Gateways
    'StorageGateway',
    'HttpBlobGateway',
    'MemoryGateway',
    'delete_many',
    
    # Signing
    'UrlSigner',
]
