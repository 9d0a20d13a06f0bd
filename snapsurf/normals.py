"""
snapsurf/normals.py
-------------------
Face normals and smoothed per-Node normals.

Node normals are gathered through each Node's SurfacePoints, so a face that
reaches a Node through two UV copies of it is counted once per copy. Both
copies share the same corner geometry, so the direction is unchanged.
"""
import logging

import numpy as np

from .geometry import norm2, normalized, triangle_normal

logger = logging.getLogger(__name__)


def update_face_normals(mesh):
    ''' Recomputes the cached unit normal of every Face. '''
    for face in mesh.faces:
        x0, x1, x2 = face.positions
        face.n = normalized(triangle_normal(x0, x1, x2))


def _corner_weighted_normal(face, vert):
    ''' Contribution of one face corner to the normal of its Node.

    cross(e1, e2) / (2 |e1|^2 |e2|^2), with e1, e2 the edges leaving the
    corner.
    '''
    j = face.corner(vert)
    x = vert.node.x
    e1 = face.v[(j + 1) % 3].node.x - x
    e2 = face.v[(j + 2) % 3].node.x - x
    denom = 2.0 * norm2(e1) * norm2(e2)
    if denom == 0.0:
        return np.zeros(3)
    return np.cross(e1, e2) / denom


def shade_smooth(mesh):
    """
    Sets every Node normal to the weighted average of the adjacent faces.

    Nodes with no adjacent faces end up with a zero normal.
    """
    for node in mesh.nodes:
        n = np.zeros(3)
        for vert in node.verts:
            for face in vert.adj_f:
                n += _corner_weighted_normal(face, vert)
        node.n = normalized(n)
    logger.debug("Smoothed normals on %d nodes", len(mesh.nodes))


def shade_flat(mesh):
    ''' Node normal = normalized mean of the adjacent face normals. '''
    update_face_normals(mesh)
    for node in mesh.nodes:
        seen = []
        for vert in node.verts:
            for face in vert.adj_f:
                if not any(f is face for f in seen):
                    seen.append(face)
        if seen:
            node.n = normalized(np.sum([f.n for f in seen], axis=0))
        else:
            node.n = np.zeros(3)
