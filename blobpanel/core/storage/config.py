"""
Storage gateway configuration.

Provides configuration for the HTTP blob gateway.
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Mapping
import os


@dataclass
class TimeoutConfig:
    """
    Timeout configuration.
    
    Granular control over different timeout types.
    """
    total: float = 300.0  # Total request timeout
    connect: float = 30.0  # Connection timeout
    sock_read: float = 60.0  # Socket read timeout
    
    def to_aiohttp_timeout(self):
        """Convert to aiohttp ClientTimeout."""
        import aiohttp
        return aiohttp.ClientTimeout(
            total=self.total,
            connect=self.connect,
            sock_read=self.sock_read
        )


@dataclass
class BlobStoreConfig:
    """
    Complete blob store configuration.
    
    Attributes:
        token: Read/write bearer token
        api_url: Base URL of the blob REST API
        api_version: Value sent in the ``x-api-version`` header
        add_random_suffix: Ask the service to append a random suffix to paths
        timeout: Timeout settings
        user_agent: User agent header
        extra_headers: Additional headers for every request
        limit: Connection pool size
    """
    token: Optional[str] = None
    api_url: str = 'https://blob.vercel-storage.com'
    api_version: str = '7'
    add_random_suffix: bool = False
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    user_agent: str = 'blobpanel/1.0.0'
    extra_headers: Dict[str, str] = field(default_factory=dict)
    limit: int = 100
    
    TOKEN_ENV = 'BLOB_READ_WRITE_TOKEN'
    API_URL_ENV = 'BLOB_API_URL'
    
    def __post_init__(self):
        self.api_url = self.api_url.rstrip('/')
    
    @classmethod
    def default(cls) -> 'BlobStoreConfig':
        """Create default configuration."""
        return cls()
    
    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        **kwargs
    ) -> 'BlobStoreConfig':
        """
        Create configuration from environment variables.
        
        Reads ``BLOB_READ_WRITE_TOKEN`` and, if set, ``BLOB_API_URL``.
        """
        env = os.environ if environ is None else environ
        if env.get(cls.API_URL_ENV):
            kwargs.setdefault('api_url', env[cls.API_URL_ENV])
        return cls(token=env.get(cls.TOKEN_ENV), **kwargs)
    
    def get_headers(self) -> Dict[str, str]:
        """Get headers sent with every request."""
        headers = {
            'User-Agent': self.user_agent,
            'x-api-version': self.api_version,
            **self.extra_headers
        }
        if self.token:
            headers['Authorization'] = f'Bearer {self.token}'
        return headers
    
    def get_session_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp ClientSession."""
        return {
            'headers': self.get_headers(),
            'timeout': self.timeout.to_aiohttp_timeout(),
        }
