"""Tests for the HTTP blob gateway."""
import asyncio
import json
from datetime import datetime, timezone

import aiohttp
import pytest

from blobpanel.core.exceptions import StorageError, BlobNotFoundError
from blobpanel.core.storage import BlobStoreConfig, HttpBlobGateway


class FakeResponse:
    """Minimal stand-in for aiohttp.ClientResponse."""
    
    def __init__(self, status=200, payload=None, text=""):
        self.status = status
        self._payload = payload
        self._text = text
    
    async def json(self, content_type=None):
        return self._payload
    
    async def text(self):
        return self._text
    
    async def __aenter__(self):
        return self
    
    async def __aexit__(self, exc_type, exc, tb):
        return False


class NonJsonResponse(FakeResponse):
    """Successful response whose body is not JSON."""
    
    async def json(self, content_type=None):
        raise json.JSONDecodeError("Expecting value", self._text, 0)


class FakeSession:
    """Records requests and replays canned responses."""
    
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []
        self.closed = False
    
    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response
    
    async def close(self):
        self.closed = True


@pytest.fixture
def config():
    return BlobStoreConfig(token="tok_123", api_url="https://blob.example.com/")


def make_gateway(config, *responses):
    session = FakeSession(*responses)
    return HttpBlobGateway(config, session=session), session


class TestBlobStoreConfig:
    """Test suite for BlobStoreConfig."""
    
    def test_api_url_trailing_slash_stripped(self, config):
        """Test trailing slash is stripped from the API URL."""
        assert config.api_url == "https://blob.example.com"
    
    def test_headers(self, config):
        """Test bearer token, API version and user agent headers."""
        headers = config.get_headers()
        
        assert headers["Authorization"] == "Bearer tok_123"
        assert headers["x-api-version"] == "7"
        assert headers["User-Agent"].startswith("blobpanel/")
    
    def test_no_token_no_auth_header(self):
        """Test no Authorization header without a token."""
        assert "Authorization" not in BlobStoreConfig().get_headers()
    
    def test_from_env(self):
        """Test token and API URL read from the environment."""
        config = BlobStoreConfig.from_env({
            "BLOB_READ_WRITE_TOKEN": "env_tok",
            "BLOB_API_URL": "https://local.test",
        })
        
        assert config.token == "env_tok"
        assert config.api_url == "https://local.test"
    
    def test_from_env_defaults(self):
        """Test defaults with an empty environment."""
        config = BlobStoreConfig.from_env({})
        
        assert config.token is None
        assert config.api_url == "https://blob.vercel-storage.com"
    
    def test_session_kwargs(self, config):
        """Test aiohttp session kwargs."""
        kwargs = config.get_session_kwargs()
        
        assert isinstance(kwargs["timeout"], aiohttp.ClientTimeout)
        assert kwargs["headers"]["Authorization"] == "Bearer tok_123"


class TestHttpBlobGateway:
    """Test suite for HttpBlobGateway."""
    
    @pytest.mark.asyncio
    async def test_store(self, config):
        """Test store sends a PUT with content headers."""
        gateway, session = make_gateway(config, FakeResponse(payload={
            "url": "https://cdn.example.com/images/1-a.png",
            "pathname": "images/1-a.png",
        }))
        
        stored = await gateway.store("images/1-a.png", b"abc", "image/png")
        
        assert stored.url == "https://cdn.example.com/images/1-a.png"
        assert stored.path == "images/1-a.png"
        method, url, kwargs = session.calls[0]
        assert method == "PUT"
        assert url == "https://blob.example.com/images/1-a.png"
        assert kwargs["data"] == b"abc"
        assert kwargs["headers"]["x-content-type"] == "image/png"
        assert kwargs["headers"]["x-add-random-suffix"] == "0"
        assert kwargs["headers"]["Authorization"] == "Bearer tok_123"
    
    @pytest.mark.asyncio
    async def test_store_quotes_path(self, config):
        """Test store URL-quotes the path."""
        gateway, session = make_gateway(config, FakeResponse(payload={"url": "u"}))
        
        stored = await gateway.store("docs/1-my file.pdf", b"x")
        
        assert session.calls[0][1] == "https://blob.example.com/docs/1-my%20file.pdf"
        assert stored.path == "docs/1-my file.pdf"
    
    @pytest.mark.asyncio
    async def test_store_error_status(self, config):
        """Test an error status raises StorageError with the code."""
        gateway, _ = make_gateway(config, FakeResponse(status=503, text="busy"))
        
        with pytest.raises(StorageError) as exc_info:
            await gateway.store("a", b"x")
        
        assert exc_info.value.error_code == 503
        assert "busy" in str(exc_info.value)
    
    @pytest.mark.asyncio
    async def test_transport_error_wrapped(self, config):
        """Test connection errors become StorageError."""
        gateway, _ = make_gateway(config, aiohttp.ClientConnectionError("refused"))
        
        with pytest.raises(StorageError) as exc_info:
            await gateway.store("a", b"x")
        
        assert isinstance(exc_info.value.__cause__, aiohttp.ClientConnectionError)
    
    @pytest.mark.asyncio
    async def test_timeout_wrapped(self, config):
        """Test timeouts become StorageError."""
        gateway, _ = make_gateway(config, asyncio.TimeoutError())
        
        with pytest.raises(StorageError):
            await gateway.list()
    
    @pytest.mark.asyncio
    async def test_delete(self, config):
        """Test delete posts the URL to the delete endpoint."""
        gateway, session = make_gateway(config, FakeResponse(payload=None))
        
        await gateway.delete("https://cdn.example.com/a.png")
        
        method, url, kwargs = session.calls[0]
        assert method == "POST"
        assert url == "https://blob.example.com/delete"
        assert kwargs["json"] == {"urls": ["https://cdn.example.com/a.png"]}
    
    @pytest.mark.asyncio
    async def test_delete_missing(self, config):
        """Test delete maps 404 to BlobNotFoundError."""
        gateway, _ = make_gateway(config, FakeResponse(status=404))
        
        with pytest.raises(BlobNotFoundError) as exc_info:
            await gateway.delete("https://cdn.example.com/a.png")
        
        assert exc_info.value.url == "https://cdn.example.com/a.png"
    
    @pytest.mark.asyncio
    async def test_list(self, config):
        """Test list parses entries and the next cursor."""
        gateway, session = make_gateway(config, FakeResponse(payload={
            "blobs": [{
                "url": "https://cdn.example.com/images/1-a.png",
                "pathname": "images/1-a.png",
                "size": 2048,
                "uploadedAt": "2024-05-01T10:00:00.000Z",
                "contentType": "image/png",
            }],
            "cursor": "next-page",
            "hasMore": True,
        }))
        
        listing = await gateway.list(prefix="images/", limit=10)
        
        assert session.calls[0][2]["params"] == {"prefix": "images/", "limit": "10"}
        entry = listing.entries[0]
        assert entry.size_bytes == 2048
        assert entry.uploaded_at == datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
        assert listing.next_cursor == "next-page"
    
    @pytest.mark.asyncio
    async def test_list_last_page(self, config):
        """Test no cursor is returned on the last page."""
        gateway, _ = make_gateway(config, FakeResponse(payload={
            "blobs": [], "cursor": "ignored", "hasMore": False
        }))
        
        listing = await gateway.list(cursor="abc")
        
        assert listing.entries == []
        assert listing.next_cursor is None
    
    @pytest.mark.asyncio
    async def test_head(self, config):
        """Test head queries metadata by URL."""
        gateway, session = make_gateway(config, FakeResponse(payload={
            "url": "https://cdn.example.com/a.pdf",
            "pathname": "a.pdf",
            "size": 10,
            "uploadedAt": "2024-05-01T10:00:00Z",
            "contentType": "application/pdf",
        }))
        
        entry = await gateway.head("https://cdn.example.com/a.pdf")
        
        assert entry.content_type == "application/pdf"
        assert session.calls[0][2]["params"] == {"url": "https://cdn.example.com/a.pdf"}
    
    @pytest.mark.asyncio
    async def test_head_missing(self, config):
        """Test head maps 404 to BlobNotFoundError."""
        gateway, _ = make_gateway(config, FakeResponse(status=404))
        
        with pytest.raises(BlobNotFoundError):
            await gateway.head("https://cdn.example.com/missing")
    
    @pytest.mark.asyncio
    async def test_injected_session_not_closed(self, config):
        """Test an injected session is left open."""
        gateway, session = make_gateway(config)
        
        async with gateway:
            pass
        
        assert session.closed is False
    
    @pytest.mark.asyncio
    async def test_owned_session_built_from_config(self, config, monkeypatch):
        """Test the gateway's own session carries config headers and timeout."""
        created = {}
        
        class RecordingSession(FakeSession):
            def __init__(self, **kwargs):
                super().__init__()
                created.update(kwargs)
        
        monkeypatch.setattr(aiohttp, "ClientSession", RecordingSession)
        monkeypatch.setattr(aiohttp, "TCPConnector", lambda limit: ("connector", limit))
        
        async with HttpBlobGateway(config):
            pass
        
        assert created["headers"]["Authorization"] == "Bearer tok_123"
        assert isinstance(created["timeout"], aiohttp.ClientTimeout)
        assert created["connector"] == ("connector", 100)


class TestMalformedResponses:
    """Test suite for successful statuses carrying unusable bodies."""
    
    @pytest.mark.asyncio
    async def test_non_json_list(self, config):
        """Test a non-JSON listing body raises StorageError."""
        gateway, _ = make_gateway(config, NonJsonResponse(text="<html>oops</html>"))
        
        with pytest.raises(StorageError) as exc_info:
            await gateway.list()
        
        assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)
        assert exc_info.value.error_code == 200
    
    @pytest.mark.asyncio
    async def test_non_json_store(self, config):
        """Test a non-JSON store body raises StorageError."""
        gateway, _ = make_gateway(config, NonJsonResponse(text="ok"))
        
        with pytest.raises(StorageError):
            await gateway.store("a.png", b"x", "image/png")
    
    @pytest.mark.asyncio
    async def test_store_without_url(self, config):
        """Test a store reply missing the blob URL raises StorageError."""
        gateway, _ = make_gateway(config, FakeResponse(payload={"error": "x"}))
        
        with pytest.raises(StorageError) as exc_info:
            await gateway.store("a.png", b"x", "image/png")
        
        assert isinstance(exc_info.value.__cause__, KeyError)
    
    @pytest.mark.asyncio
    async def test_store_empty_body(self, config):
        """Test an empty store reply raises StorageError."""
        gateway, _ = make_gateway(config, FakeResponse(payload=None))
        
        with pytest.raises(StorageError):
            await gateway.store("a.png", b"x")
    
    @pytest.mark.asyncio
    async def test_list_entry_without_url(self, config):
        """Test a listing entry missing its URL raises StorageError."""
        gateway, _ = make_gateway(config, FakeResponse(payload={
            "blobs": [{"pathname": "a.png"}], "hasMore": False
        }))
        
        with pytest.raises(StorageError):
            await gateway.list()
    
    @pytest.mark.asyncio
    async def test_list_not_an_object(self, config):
        """Test a listing body that is not an object raises StorageError."""
        gateway, _ = make_gateway(config, FakeResponse(payload=["a.png"]))
        
        with pytest.raises(StorageError):
            await gateway.list()
    
    @pytest.mark.asyncio
    async def test_head_bad_timestamp(self, config):
        """Test an unparseable upload time raises StorageError."""
        gateway, _ = make_gateway(config, FakeResponse(payload={
            "url": "u", "pathname": "a.png", "uploadedAt": "yesterday"
        }))
        
        with pytest.raises(StorageError) as exc_info:
            await gateway.head("u")
        
        assert isinstance(exc_info.value.__cause__, ValueError)
