class SimulationError(Exception):
    """Base class for errors raised by the memory simulator"""
    pass


class ConfigError(SimulationError, ValueError):
    """Invalid simulator configuration (sizes, segments or policy)"""
    pass


class InvalidSegmentError(SimulationError, ValueError):
    """Segment index does not name a defined segment"""
    pass


class OffsetOutOfBoundsError(SimulationError, IndexError):
    """Segmentation fault: offset is outside the segment's limit"""
    pass
