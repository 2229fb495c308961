"""Tests for stored path construction."""
import itertools

from blobpanel.core.upload.paths import StoredPathBuilder


class TestStoredPathBuilder:
    """Test suite for StoredPathBuilder."""
    
    def test_without_folder(self):
        """Test path without folder."""
        builder = StoredPathBuilder(clock=lambda: 1700000000000)
        
        assert builder.build("logo.png") == "1700000000000-logo.png"
    
    def test_with_folder(self):
        """Test path with folder."""
        builder = StoredPathBuilder(clock=lambda: 1700000000000)
        
        assert builder.build("logo.png", "images") == "images/1700000000000-logo.png"
    
    def test_folder_slashes_stripped(self):
        """Test folder slashes stripped."""
        builder = StoredPathBuilder(clock=lambda: 5)
        
        assert builder.build("a.txt", "/docs/2024/") == "docs/2024/5-a.txt"
    
    def test_empty_folder_ignored(self):
        """Test empty folder ignored."""
        builder = StoredPathBuilder(clock=lambda: 5)
        
        assert builder.build("a.txt", "") == "5-a.txt"
    
    def test_same_millisecond_never_collides(self):
        """Test same millisecond never collides."""
        builder = StoredPathBuilder(clock=lambda: 1000)
        
        paths = [builder.build("same.png", "images") for _ in range(5)]
        
        assert len(set(paths)) == 5
        assert paths[0] == "images/1000-same.png"
        assert paths[-1] == "images/1004-same.png"
    
    def test_clock_going_backwards(self):
        """Test timestamps keep increasing when the clock goes back."""
        ticks = itertools.chain([2000, 1500], itertools.repeat(2500))
        builder = StoredPathBuilder(clock=lambda: next(ticks))
        
        stamps = [builder.next_timestamp() for _ in range(3)]
        
        assert stamps == [2000, 2001, 2500]
    
    def test_default_clock_is_milliseconds(self):
        """Test default clock is milliseconds."""
        stamp = StoredPathBuilder().next_timestamp()
        
        # 2001-09-09 in milliseconds
        assert stamp > 1_000_000_000_000
