"""Tests for the in-memory registry service."""

import pytest

from build_registry.client import MockRegistryService
from build_registry.models import Build


@pytest.fixture
def snapshot():
    """Create a build snapshot."""
    return Build("happycloud.image", fingerprint="fp").snapshot()


class TestMockRegistryService:
    """Tests for MockRegistryService."""

    def test_create_build_returns_unique_ids(self, snapshot) -> None:
        """Each created build should get its own id."""
        service = MockRegistryService()
        first = service.create_build("bucket", "it-1", snapshot)
        second = service.create_build("bucket", "it-1", snapshot)
        assert first
        assert first != second

    def test_records_calls(self, snapshot) -> None:
        """Calls should be recorded with their arguments."""
        service = MockRegistryService()
        service.create_build("bucket", "it-1", snapshot, timeout=2.0)
        service.update_build("bucket", "it-1", snapshot)

        created = service.calls_for("create_build")
        assert len(created) == 1
        assert created[0].bucket_slug == "bucket"
        assert created[0].iteration_id == "it-1"
        assert created[0].build == snapshot
        assert created[0].timeout == 2.0
        assert len(service.calls_for("update_build")) == 1

    def test_fail_on(self, snapshot) -> None:
        """Configured components should fail."""
        service = MockRegistryService(fail_on={"happycloud.image"})
        with pytest.raises(ConnectionError):
            service.create_build("bucket", None, snapshot)
        assert service.calls == []
