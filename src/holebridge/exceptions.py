"""Exception hierarchy for Holebridge."""


class HolebridgeError(Exception):
    """Base exception for all Holebridge errors."""

    pass


class GeometryError(HolebridgeError):
    """Errors in geometric calculations."""

    pass


class InvalidRingError(GeometryError):
    """Ring is too small or a ring collection is empty."""

    def __init__(self, reason: str, size: int = 0) -> None:
        self.reason = reason
        self.size = size
        super().__init__(f"Invalid ring: {reason}")


class NoIntersectionError(GeometryError):
    """Horizontal ray from a point crosses no qualifying ring edge."""

    def __init__(self, point: object) -> None:
        self.point = point
        super().__init__(f"No ring edge crosses the horizontal ray from {point}")


class BridgeError(GeometryError):
    """Could not splice a hole into the outer ring."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Bridge construction failed: {reason}")


class DocumentError(HolebridgeError):
    """Errors related to polygon document loading or saving."""

    pass


class DocumentLoadError(DocumentError):
    """Error loading a polygon document."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load document '{path}': {reason}")


class DocumentSaveError(DocumentError):
    """Error saving a polygon document."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save document '{path}': {reason}")


class DocumentFormatError(DocumentError):
    """Document content does not describe polygons."""

    def __init__(self, path: str, details: str) -> None:
        self.path = path
        self.details = details
        super().__init__(f"Invalid document format '{path}': {details}")


class PolygonProcessingError(HolebridgeError):
    """Error processing a specific polygon."""

    def __init__(self, polygon_id: str, reason: str) -> None:
        self.polygon_id = polygon_id
        self.reason = reason
        super().__init__(f"Error processing polygon '{polygon_id}': {reason}")

