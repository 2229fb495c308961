"""
Signed URLs for private blobs.

Appends an expiry and an HMAC-SHA256 signature to a blob path so a
download endpoint can check the link without a database lookup.
"""
import time
from typing import Optional, Union
from urllib.parse import urlsplit, urlunsplit, parse_qsl, urlencode

from Crypto.Hash import HMAC, SHA256


class UrlSigner:
    """
    Signs and verifies expiring URLs.
    
    Example:
        >>> signer = UrlSigner(b"secret")
        >>> url = signer.sign("receipts/1700000000000-r.png", expires_in=600)
        >>> signer.verify(url)
        True
    """
    
    DEFAULT_EXPIRES_IN = 3600
    
    def __init__(self, secret: Union[str, bytes]):
        if isinstance(secret, str):
            secret = secret.encode('utf-8')
        if not secret:
            raise ValueError("Signing secret must not be empty")
        self._secret = secret
    
    def _digest(self, path: str, expires: int) -> str:
        mac = HMAC.new(self._secret, digestmod=SHA256)
        mac.update(f"{path}\n{expires}".encode('utf-8'))
        return mac.hexdigest()
    
    def sign(
        self,
        path: str,
        expires_in: int = DEFAULT_EXPIRES_IN,
        now: Optional[float] = None
    ) -> str:
        """
        Create a signed URL.
        
        Args:
            path: Blob path or URL to sign
            expires_in: Lifetime in seconds
            now: Current Unix time (defaults to time.time())
            
        Returns:
            URL with ``expires`` and ``signature`` query parameters
        """
        if expires_in <= 0:
            raise ValueError("expires_in must be positive")
        issued = time.time() if now is None else now
        expires = int(issued) + expires_in
        parts = urlsplit(path)
        query = parse_qsl(parts.query, keep_blank_values=True)
        query.append(('expires', str(expires)))
        query.append(('signature', self._digest(parts.path, expires)))
        return urlunsplit(parts._replace(query=urlencode(query)))
    
    def verify(self, url: str, now: Optional[float] = None) -> bool:
        """Returns True if the signature matches and the link has not expired."""
        parts = urlsplit(url)
        params = dict(parse_qsl(parts.query, keep_blank_values=True))
        signature = params.get('signature')
        try:
            expires = int(params.get('expires', ''))
        except ValueError:
            return False
        if not signature:
            return False
        
        current = time.time() if now is None else now
        if current > expires:
            return False
        
        mac = HMAC.new(self._secret, digestmod=SHA256)
        mac.update(f"{parts.path}\n{expires}".encode('utf-8'))
        try:
            mac.hexverify(signature)
        except ValueError:
            return False
        return True
