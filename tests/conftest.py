import pytest

from sfwkt.lib.geometry_filter import GeometryFilter
from sfwkt.models.geometry import Geometry
from sfwkt.models.geometry_type import GeometryType


class RecordingFilter:
    """Geometry filter remembering every candidate it was asked about."""

    def __init__(self, reject: GeometryFilter | None = None) -> None:
        self.calls: list[tuple[GeometryType | None, Geometry]] = []
        self._reject = reject

    def __call__(self, containing_type: GeometryType | None, geometry: Geometry) -> bool:
        self.calls.append((containing_type, geometry))
        return self._reject is None or not self._reject(containing_type, geometry)


@pytest.fixture
def recording_filter() -> RecordingFilter:
    return RecordingFilter()
