"""Tests for upload constraint validation."""
import pytest

from blobpanel.core.exceptions import (
    ValidationError,
    ValidationErrorKind,
    FileTooLargeError,
    UnsupportedTypeError,
)
from blobpanel.core.upload import UploadConstraints, UploadValidator, matches_mime

MB = 1024 * 1024


class TestMatchesMime:
    """Test suite for MIME pattern matching."""
    
    def test_wildcard_matches_same_prefix(self):
        """Test wildcard matches same prefix."""
        assert matches_mime("image/png", "image/*")
    
    def test_wildcard_other_prefix(self):
        """Test wildcard rejects another prefix."""
        assert not matches_mime("image/png", "video/*")
    
    def test_exact_pattern_requires_equality(self):
        """Test exact pattern requires equality."""
        assert not matches_mime("image/png", "image/jpeg")
        assert matches_mime("image/jpeg", "image/jpeg")
    
    def test_wildcard_does_not_match_longer_prefix(self):
        """'image/*' must not match 'imagex/png'."""
        assert not matches_mime("imagex/png", "image/*")


class TestUploadValidator:
    """Test suite for UploadValidator."""
    
    @pytest.fixture
    def validator(self):
        return UploadValidator()
    
    def test_size_exceeded(self, validator, make_request):
        """2 MiB png against a 1 MiB image-only limit."""
        constraints = UploadConstraints(
            max_size_bytes=1048576, allowed_mime_patterns=["image/*"]
        )
        request = make_request(size_bytes=2097152, mime_type="image/png")
        
        with pytest.raises(FileTooLargeError) as exc_info:
            validator.validate(request, constraints)
        
        assert exc_info.value.kind == ValidationErrorKind.SIZE_EXCEEDED
        assert exc_info.value.size_bytes == 2097152
        assert exc_info.value.max_size_bytes == 1048576
    
    def test_unsupported_type(self, validator, make_request):
        """Test unsupported type is rejected."""
        constraints = UploadConstraints(allowed_mime_patterns=["application/pdf"])
        request = make_request(size_bytes=1000, mime_type="image/png")
        
        with pytest.raises(UnsupportedTypeError) as exc_info:
            validator.validate(request, constraints)
        
        assert exc_info.value.kind == ValidationErrorKind.UNSUPPORTED_TYPE
        assert exc_info.value.mime_type == "image/png"
    
    def test_empty_allow_list_rejects_everything(self, validator, make_request):
        """Test empty allow list rejects everything."""
        constraints = UploadConstraints(allowed_mime_patterns=[])
        
        for mime in ("image/png", "application/pdf", "text/plain"):
            with pytest.raises(UnsupportedTypeError):
                validator.validate(make_request(mime_type=mime), constraints)
    
    def test_size_checked_before_type(self, validator, make_request):
        """Test size checked before type."""
        constraints = UploadConstraints(
            max_size_bytes=10, allowed_mime_patterns=["application/pdf"]
        )
        error = validator.check(make_request(size_bytes=11, mime_type="image/png"), constraints)
        
        assert isinstance(error, FileTooLargeError)
    
    def test_size_equal_to_limit_passes(self, validator, make_request):
        """Test size equal to limit passes."""
        constraints = UploadConstraints(max_size_bytes=MB)
        
        validator.validate(make_request(size_bytes=MB), constraints)
    
    def test_default_constraints(self, validator, make_request):
        """Defaults are 10 MiB and image/* only."""
        constraints = UploadConstraints()
        
        assert validator.is_valid(make_request(size_bytes=10 * MB), constraints)
        assert not validator.is_valid(make_request(size_bytes=10 * MB + 1), constraints)
        assert not validator.is_valid(make_request(mime_type="application/pdf"), constraints)
    
    def test_check_returns_none_for_valid(self, validator, make_request):
        """Test check returns None for a valid request."""
        assert validator.check(make_request(), UploadConstraints()) is None
    
    def test_check_is_idempotent(self, validator, make_request):
        """Test check is idempotent."""
        constraints = UploadConstraints(allowed_mime_patterns=["application/pdf"])
        request = make_request(mime_type="image/png")
        
        first = validator.check(request, constraints)
        second = validator.check(request, constraints)
        
        assert isinstance(first, ValidationError)
        assert first == second
        assert validator.is_valid(make_request(), UploadConstraints())
        assert validator.is_valid(make_request(), UploadConstraints())
    
    def test_mixed_patterns(self, validator, make_request):
        """Test wildcard and exact patterns together."""
        constraints = UploadConstraints(
            allowed_mime_patterns=["image/*", "application/pdf"]
        )
        
        assert validator.is_valid(make_request(mime_type="image/webp"), constraints)
        assert validator.is_valid(make_request(mime_type="application/pdf"), constraints)
        assert not validator.is_valid(make_request(mime_type="application/zip"), constraints)
