"""
HTTP blob gateway.

Talks to a Vercel-Blob-style REST API over aiohttp.
"""
import asyncio
import time
from typing import Any, Dict, Optional
from urllib.parse import quote

import aiohttp

from .config import BlobStoreConfig
from .models import StoredObject, BlobEntry, BlobListing
from ..exceptions import StorageError, BlobNotFoundError
from ..logging import get_logger


class HttpBlobGateway:
    """
    Storage gateway backed by a remote blob REST API.
    
    Reuses one HTTP session for all requests. Transport faults and bad
    responses are translated into ``StorageError``.
    
    Example:
        >>> config = BlobStoreConfig.from_env()
        >>> async with HttpBlobGateway(config) as gateway:
        ...     stored = await gateway.store("images/1-logo.png", data, "image/png")
        ...     print(stored.url)
    """
    
    def __init__(
        self,
        config: Optional[BlobStoreConfig] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize gateway.
        
        Args:
            config: Store configuration (defaults if not provided)
            session: Optional shared session; closed by its owner, not here
        """
        self._config = config or BlobStoreConfig.default()
        self._session = session
        self._owns_session = False
        self._logger = get_logger('blobpanel.storage.http')
    
    @property
    def config(self) -> BlobStoreConfig:
        """Get current configuration."""
        return self._config
    
    async def __aenter__(self) -> 'HttpBlobGateway':
        await self._get_session()
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
    
    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None:
            self._session = aiohttp.ClientSession(
                connector=aiohttp.TCPConnector(limit=self._config.limit),
                **self._config.get_session_kwargs()
            )
            self._owns_session = True
        return self._session
    
    async def close(self):
        """Close session if we own it."""
        if self._owns_session and self._session:
            await self._session.close()
            self._session = None
            self._owns_session = False
    
    def _blob_url(self, path: str) -> str:
        return f"{self._config.api_url}/{quote(path.lstrip('/'))}"
    
    async def _request(
        self,
        method: str,
        url: str,
        not_found: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs
    ) -> Any:
        """
        Send a request and decode the JSON body.
        
        Args:
            method: HTTP method
            url: Request URL
            not_found: Blob URL to report if the service answers 404
            headers: Extra headers for this request
            
        Raises:
            BlobNotFoundError: On 404 when ``not_found`` is given
            StorageError: On error status, unreadable body or transport failure
        """
        session = await self._get_session()
        request_headers = {**self._config.get_headers(), **(headers or {})}
        start = time.time()
        try:
            async with session.request(
                method, url, headers=request_headers, **kwargs
            ) as response:
                if response.status == 404 and not_found is not None:
                    raise BlobNotFoundError(not_found)
                if response.status >= 400:
                    detail = await response.text()
                    self._logger.error(
                        f"{method} {url} failed: HTTP {response.status} {detail}"
                    )
                    raise StorageError(
                        f"Blob service returned HTTP {response.status}: {detail}",
                        response.status
                    )
                try:
                    payload = await response.json(content_type=None)
                except ValueError as e:
                    self._logger.error(f"{method} {url} returned a non-JSON body: {e}")
                    raise StorageError(
                        f"Blob service returned an unreadable response: {e}",
                        response.status
                    ) from e
                elapsed = time.time() - start
                self._logger.debug(f"{method} {url} -> {response.status} in {elapsed:.2f}s")
                return payload
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self._logger.error(f"{method} {url} transport failure: {e}")
            raise StorageError(f"Blob service unreachable: {e}") from e
    
    def _malformed(self, action: str, payload: Any, error: Exception) -> StorageError:
        self._logger.error(f"Malformed {action} response: {payload!r}")
        return StorageError(f"Malformed blob service response to {action}: {error!r}")
    
    async def store(
        self,
        path: str,
        data: bytes,
        content_type: Optional[str] = None
    ) -> StoredObject:
        """Upload bytes to ``path``."""
        headers = {
            'x-add-random-suffix': '1' if self._config.add_random_suffix else '0',
        }
        if content_type:
            headers['x-content-type'] = content_type
        payload = await self._request(
            'PUT', self._blob_url(path), headers=headers, data=data
        )
        try:
            return StoredObject(
                url=payload['url'],
                path=payload.get('pathname', path)
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise self._malformed('store', payload, e) from e
    
    async def delete(self, url: str) -> None:
        """Delete the blob at ``url``."""
        await self._request(
            'POST',
            f"{self._config.api_url}/delete",
            not_found=url,
            json={'urls': [url]}
        )
    
    async def list(
        self,
        prefix: Optional[str] = None,
        limit: Optional[int] = None,
        cursor: Optional[str] = None
    ) -> BlobListing:
        """List blobs page by page."""
        params: Dict[str, str] = {}
        if prefix:
            params['prefix'] = prefix
        if limit is not None:
            params['limit'] = str(limit)
        if cursor:
            params['cursor'] = cursor
        payload = await self._request('GET', self._config.api_url, params=params)
        try:
            entries = [BlobEntry.from_dict(item) for item in payload.get('blobs', [])]
            next_cursor = payload.get('cursor') if payload.get('hasMore') else None
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise self._malformed('list', payload, e) from e
        return BlobListing(entries=entries, next_cursor=next_cursor)
    
    async def head(self, url: str) -> BlobEntry:
        """Fetch metadata for the blob at ``url``."""
        payload = await self._request(
            'GET', self._config.api_url, not_found=url, params={'url': url}
        )
        try:
            return BlobEntry.from_dict(payload)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise self._malformed('head', payload, e) from e
