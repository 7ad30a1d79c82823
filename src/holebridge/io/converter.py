"""Converters between polygon documents and domain models.

Documents are JSON objects of the form::

    {"polygons": [{"id": "lot-7",
                   "outer": [[x, y, z], ...],
                   "holes": [[[x, y, z], ...], ...]}]}

Coordinates may omit z. Output documents attach the flattened simple ring
to a polygon primitive::

    {"polygons": [{"id": "lot-7",
                   "polygon": {"positions": {"cartesian": [x0, y0, z0, x1, ...]}}}]}
"""

from typing import Annotated, Any

from pydantic import BaseModel, Field

from holebridge.domain import Point, Polygon, Ring

Coordinate = Annotated[list[float], Field(min_length=2, max_length=3)]


class PolygonRecord(BaseModel):
    """One polygon entry of an input document."""

    id: str | None = None
    outer: list[Coordinate]
    holes: list[list[Coordinate]] = Field(default_factory=list)


class PolygonDocument(BaseModel):
    """Input document holding polygons with holes."""

    polygons: list[PolygonRecord]


def assign_polygon_ids(records: list[PolygonRecord]) -> list[str]:
    """Polygon ids for a document's records, in document order.

    Records without an id get ``polygon-<index>``. A generated id never
    reuses an id the document already carries; a numeric suffix is added
    until it is free. Explicit ids are returned as given, duplicates
    included.
    """
    taken = {record.id for record in records if record.id is not None}
    ids: list[str] = []
    for index, record in enumerate(records):
        if record.id is not None:
            ids.append(record.id)
            continue

        candidate = f"polygon-{index}"
        suffix = 1
        while candidate in taken:
            candidate = f"polygon-{index}-{suffix}"
            suffix += 1
        taken.add(candidate)
        ids.append(candidate)
    return ids


def record_to_domain(record: PolygonRecord, polygon_id: str) -> Polygon:
    """Convert a validated document record to a Polygon.

    Args:
        record: Validated polygon record
        polygon_id: Id of the polygon, from ``assign_polygon_ids``

    Returns:
        Polygon domain model
    """
    return Polygon(
        id=polygon_id,
        outer=Ring(points=[Point.from_sequence(c) for c in record.outer]),
        holes=[
            Ring(points=[Point.from_sequence(c) for c in hole])
            for hole in record.holes
        ],
    )


def ring_to_positions(ring: Ring) -> list[float]:
    """Flatten a ring into an [x0, y0, z0, x1, y1, z1, ...] array."""
    positions: list[float] = []
    for point in ring.points:
        positions.extend(point.to_tuple())
    return positions


def ring_to_packet(polygon_id: str, ring: Ring) -> dict[str, Any]:
    """Build the output entry for one simplified polygon."""
    return {
        "id": polygon_id,
        "polygon": {"positions": {"cartesian": ring_to_positions(ring)}},
    }
