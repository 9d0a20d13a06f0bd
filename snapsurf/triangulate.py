"""
snapsurf/triangulate.py
-----------------------
Fan triangulation of a polygon loop.

Every corner of the loop is tried as the fan root. A root is scored by the
smallest interior angle found in any triangle of its fan, and the root with
the largest score wins. This steers the fan away from roots at reflex or
near-degenerate corners, which would otherwise produce slivers.
"""
import logging
import math

from .config import GEOM_TOL
from .geometry import min_angle
from .topology import Face

logger = logging.getLogger(__name__)


def fan_triangles(n, root):
    ''' Corner index triples of the fan rooted at `root` in an n-gon. '''
    return [(root, (root + j - 1) % n, (root + j) % n) for j in range(2, n)]


def fan_min_angle(positions, root):
    ''' Smallest interior angle (radians) over the fan rooted at `root`. '''
    n = len(positions)
    worst = math.inf
    for i0, i1, i2 in fan_triangles(n, root):
        worst = min(worst, min_angle(positions[i0], positions[i1], positions[i2]))
    return worst


def best_fan_root(positions):
    """
    Returns (root, score) for the max-min-angle fan root of a polygon loop.

    Args:
        positions: Sequence of world space corner positions, in loop order.

    Raises:
        ValueError: With fewer than 3 corners, or when every fan contains a
            zero-angle triangle (collinear or coincident corners).
    """
    n = len(positions)
    if n < 3:
        raise ValueError(f"A polygon needs at least 3 corners, got {n}.")

    best_root = -1
    best_score = 0.0
    for i in range(n):
        score = fan_min_angle(positions, i)
        # Strictly greater: ties keep the earliest root
        if score > best_score:
            best_score = score
            best_root = i

    if best_root < 0 or best_score <= GEOM_TOL:
        raise ValueError(f"Polygon with {n} corners is degenerate "
                         f"(best minimum angle = {best_score:.2e} rad).")
    return best_root, best_score


def triangulate(points):
    """
    Converts a polygon loop of SurfacePoints into n - 2 unregistered Faces.

    The SurfacePoints must already be connected to their Nodes, which supply
    the positions. The fan keeps the loop's orientation. The returned faces
    still have to be added to a Mesh.
    """
    points = list(points)
    positions = [p.node.x for p in points]
    root, score = best_fan_root(positions)

    if len(points) > 3:
        logger.debug("Triangulating %d-gon from root %d (min angle %.2f deg)",
                     len(points), root, math.degrees(score))

    return [Face(points[i0], points[i1], points[i2])
            for i0, i1, i2 in fan_triangles(len(points), root)]
