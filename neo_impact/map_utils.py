"""
NEO Impact Simulation - Map Utility Functions

Geographic outlines for circular damage rings. It handles Earth's spherical
geometry, antimeridian crossings and rings that enclose a pole, and returns
GeoJSON-style geometries built with shapely.
"""

import math

from shapely.affinity import translate
from shapely.geometry import Polygon, box, mapping
from shapely.ops import unary_union

from neo_impact.thresholds import TIMELINE
from neo_impact.utils import EARTH_RADIUS_KM, arc_from_meters, gc_destination, km_to_m, rad2deg

WORLD = box(-180.0, -90.0, 180.0, 90.0)


def create_circle_coordinates(center_lat, center_lon, radius_km, points=TIMELINE["ring_outline_points"]):
    """
    Generates [longitude, latitude] pairs for a circle of constant great-circle radius.

    Longitudes are unwrapped so consecutive points never jump by more than 180°;
    the ring may therefore extend past ±180 and must be folded back by the caller.

    Args:
        center_lat (float): Latitude of the circle's center, in decimal degrees.
        center_lon (float): Longitude of the circle's center, in decimal degrees.
        radius_km (float): Radius of the circle in kilometers.
        points (int, optional): Number of perimeter segments (default 72, one every 5°).

    Returns:
        list: Closed ring of (longitude, latitude) tuples.
    """
    arc = arc_from_meters(km_to_m(radius_km))
    coordinates = []
    prev_lon = None
    for i in range(points + 1):
        lat, lon = gc_destination(center_lat, center_lon, i * 360.0 / points, arc)
        if prev_lon is not None:
            while lon - prev_lon > 180.0:
                lon -= 360.0
            while lon - prev_lon < -180.0:
                lon += 360.0
        coordinates.append((lon, lat))
        prev_lon = lon
    return coordinates


def create_ring_geometry(center_lat, center_lon, radius_km, points=TIMELINE["ring_outline_points"]):
    """
    Shapely geometry covering a damage ring, or None for a non-positive radius.

    - Rings enclosing both poles cover the whole globe.
    - Rings enclosing one pole become a polar cap down to the ring's lowest latitude.
    - Rings crossing the antimeridian are split into a MultiPolygon.
    """
    if radius_km <= 0:
        return None

    arc_deg = rad2deg(arc_from_meters(km_to_m(radius_km)))
    north = center_lat + arc_deg >= 90.0
    south = center_lat - arc_deg <= -90.0
    if (north and south) or radius_km >= math.pi * EARTH_RADIUS_KM:
        return WORLD

    coordinates = create_circle_coordinates(center_lat, center_lon, radius_km, points)
    if north:
        return box(-180.0, min(lat for _, lat in coordinates), 180.0, 90.0)
    if south:
        return box(-180.0, -90.0, 180.0, max(lat for _, lat in coordinates))

    polygon = Polygon(coordinates)
    pieces = []
    for shift in (0.0, -360.0, 360.0):
        piece = translate(polygon, xoff=shift).intersection(WORLD)
        if piece.area > 0:
            pieces.append(piece)
    return unary_union(pieces)


def create_ring_outlines(center_lat, center_lon, rings):
    """GeoJSON outline for every ring with a positive radius."""
    outlines = []
    for ring in rings:
        geometry = create_ring_geometry(center_lat, center_lon, ring.radius_km)
        if geometry is None:
            continue
        outlines.append({
            "type": ring.kind,
            "label": ring.label,
            "radius_km": ring.radius_km,
            "geometry": mapping(geometry),
        })
    return outlines
