"""Tests for the cosmetic progress tracker."""
import asyncio

import pytest

from blobpanel.core.upload.progress import ProgressConfig, ProgressTracker


class TestProgressConfig:
    """Test suite for ProgressConfig."""
    
    def test_defaults(self):
        """Test default heartbeat timing."""
        config = ProgressConfig()
        
        assert config.tick_interval == 0.1
        assert config.tick_step == 10
        assert config.tick_ceiling == 90
        assert config.reset_delay == 1.0
    
    @pytest.mark.parametrize("ceiling", [100, 150, -1])
    def test_ceiling_must_stay_below_100(self, ceiling):
        """Test ceiling must stay below 100."""
        with pytest.raises(ValueError):
            ProgressConfig(tick_ceiling=ceiling)
    
    def test_interval_must_be_positive(self):
        """Test interval must be positive."""
        with pytest.raises(ValueError):
            ProgressConfig(tick_interval=0)


class TestProgressTracker:
    """Test suite for ProgressTracker."""
    
    def test_starts_at_zero(self):
        """Test starts at zero."""
        assert ProgressTracker().value == 0
    
    def test_advance_caps_at_ceiling(self):
        """Test advance caps at ceiling."""
        tracker = ProgressTracker()
        
        for _ in range(20):
            tracker.advance()
        
        assert tracker.value == 90
    
    def test_advance_never_decreases(self):
        """Test advance never decreases."""
        tracker = ProgressTracker()
        tracker.advance(50)
        
        tracker.advance(-20)
        
        assert tracker.value == 50
    
    def test_complete_and_reset(self):
        """Test complete sets 100 and reset sets 0."""
        tracker = ProgressTracker()
        
        assert tracker.complete() == 100
        assert tracker.reset() == 0
    
    def test_listeners_receive_changes_only(self):
        """Test listeners receive changes only."""
        seen = []
        tracker = ProgressTracker().on(seen.append)
        
        tracker.advance()
        tracker.advance(0)
        tracker.complete()
        tracker.complete()
        
        assert seen == [10, 100]
    
    def test_off_removes_listener(self):
        """Test off removes listener."""
        seen = []
        tracker = ProgressTracker().on(seen.append)
        tracker.off(seen.append)
        
        tracker.advance()
        
        assert seen == []
    
    def test_off_without_callback_removes_all(self):
        """Test off without callback removes all."""
        first, second = [], []
        tracker = ProgressTracker().on(first.append).on(second.append)
        tracker.off()
        
        tracker.complete()
        
        assert first == second == []
    
    @pytest.mark.asyncio
    async def test_ticking_advances_below_ceiling(self):
        """Test ticking advances below ceiling."""
        config = ProgressConfig(tick_interval=0.01, tick_step=10, tick_ceiling=60)
        seen = []
        tracker = ProgressTracker(config).on(seen.append)
        
        tracker.start()
        await asyncio.sleep(0.2)
        await tracker.stop_ticking()
        
        assert tracker.value == 60
        assert seen == sorted(seen)
        assert max(seen) < 100
        assert not tracker.is_ticking
    
    @pytest.mark.asyncio
    async def test_start_without_ticking(self):
        """Test start without ticking."""
        tracker = ProgressTracker(ProgressConfig(tick_interval=0.01))
        
        tracker.start(ticking=False)
        await asyncio.sleep(0.05)
        
        assert tracker.value == 0
        assert not tracker.is_ticking
    
    @pytest.mark.asyncio
    async def test_start_resets_previous_value(self):
        """Test start resets previous value."""
        tracker = ProgressTracker()
        tracker.complete()
        
        tracker.start(ticking=False)
        
        assert tracker.value == 0
    
    @pytest.mark.asyncio
    async def test_stop_ticking_when_idle(self):
        """Test stop_ticking without a heartbeat."""
        tracker = ProgressTracker()
        
        await tracker.stop_ticking()
        
        assert tracker.value == 0
    
    @pytest.mark.asyncio
    async def test_schedule_reset(self):
        """Test scheduled reset fires after the delay."""
        tracker = ProgressTracker(ProgressConfig(reset_delay=0.02))
        tracker.complete()
        
        tracker.schedule_reset()
        assert tracker.value == 100
        await asyncio.sleep(0.1)
        
        assert tracker.value == 0
    
    @pytest.mark.asyncio
    async def test_start_cancels_scheduled_reset(self):
        """Test start cancels scheduled reset."""
        tracker = ProgressTracker(ProgressConfig(reset_delay=0.02))
        tracker.schedule_reset()
        
        tracker.start(ticking=False)
        tracker.advance(30)
        await asyncio.sleep(0.1)
        
        assert tracker.value == 30
