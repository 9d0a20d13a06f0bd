"""
snapsurf/mesh.py
----------------
The Mesh manager. It owns every SurfacePoint, Node, Edge and Face and is the
only place where adjacency is created or torn down.

Usage:
    mesh = Mesh()
    a, b, c = (mesh.new_node(x) for x in [(0, 0, 0), (1, 0, 0), (0, 1, 0)])
    mesh.new_face(*(mesh.new_surface_point(n.x[:2], n) for n in (a, b, c)))
"""
import logging

import numpy as np

from .config import DEFAULT_NORMAL_LENGTH
from .drawable import Drawable
from .geometry import as_vec3, normalized
from .topology import (SurfacePoint, Node, Edge, Face, TopologyError,
                       get_edge, include, exclude)
from .triangulate import triangulate
from . import normals

logger = logging.getLogger(__name__)


def connect(vert, node):
    ''' Links a SurfacePoint to its world space Node in both directions. '''
    if vert.node is not None and vert.node is not node:
        exclude(vert, vert.node.verts)
    vert.node = node
    include(vert, node.verts)


class Mesh(Drawable):
    def __init__(self, pos=(0.0, 0.0, 0.0), scale=(1.0, 1.0, 1.0)):
        self.surface_points = []
        self.nodes = []
        self.edges = []
        self.faces = []

        self.pos = as_vec3((0.0, 0.0, 0.0))
        self.scale = as_vec3((1.0, 1.0, 1.0))
        self.set_transform(pos, scale)

    # --- Registration helpers ---

    def _claim(self, entity):
        if entity.mesh is self:
            raise TopologyError(f"{entity!r} is already part of this mesh.")
        if entity.mesh is not None:
            raise TopologyError(f"{entity!r} belongs to another mesh.")

    def _check_owned(self, entity):
        if entity.mesh is not self:
            raise TopologyError(f"{entity!r} is not part of this mesh.")

    # --- Add ---

    def add(self, entity):
        ''' Registers any entity kind. Returns the entity. '''
        if isinstance(entity, SurfacePoint):
            self.add_surface_point(entity)
        elif isinstance(entity, Node):
            self.add_node(entity)
        elif isinstance(entity, Edge):
            self.add_edge(entity)
        elif isinstance(entity, Face):
            self.add_face(entity)
        else:
            raise TypeError(f"Cannot add {type(entity).__name__} to a Mesh.")
        return entity

    def add_surface_point(self, vert):
        self._claim(vert)
        self.surface_points.append(vert)
        vert.mesh = self
        # A fresh registration starts detached
        if vert.node is not None:
            exclude(vert, vert.node.verts)
            vert.node = None
        vert.adj_f.clear()
        vert.index = len(self.surface_points) - 1

    def add_node(self, node):
        self._claim(node)
        self.nodes.append(node)
        node.mesh = self
        node.adj_e.clear()
        for vert in node.verts:
            vert.node = node
        node.index = len(self.nodes) - 1

    def add_edge(self, edge):
        """
        Registers an edge between two Nodes of this mesh.

        Raises:
            TopologyError: If an endpoint is not part of this mesh, or an
                edge between the two Nodes already exists.
        """
        self._claim(edge)
        n0, n1 = edge.n
        self._check_owned(n0)
        self._check_owned(n1)
        if get_edge(n0, n1) is not None:
            raise TopologyError(f"An edge between nodes {n0.index} and "
                                f"{n1.index} already exists.")

        self.edges.append(edge)
        edge.mesh = self
        edge.adj_f = [None, None]
        include(edge, n0.adj_e)
        include(edge, n1.adj_e)
        edge.index = len(self.edges) - 1

    def add_face(self, face):
        """
        Registers a triangle, creating any missing edges.

        Each of the face's edges must still have a free side; a third face on
        an edge raises TopologyError before anything is changed.
        """
        self._claim(face)

        # --- 1. Validate corners ---
        nodes = []
        for vert in face.v:
            self._check_owned(vert)
            if vert.node is None or vert.node.mesh is not self:
                raise TopologyError(f"{vert!r} is not connected to a node of this mesh.")
            nodes.append(vert.node)
        if nodes[0] is nodes[1] or nodes[1] is nodes[2] or nodes[2] is nodes[0]:
            raise TopologyError(f"{face!r} uses the same node twice.")

        for i in range(3):
            edge = get_edge(nodes[i], nodes[(i + 1) % 3])
            if edge is not None and edge.adj_f[0] is not None and edge.adj_f[1] is not None:
                raise TopologyError(f"{edge!r} already has two faces (non-manifold).")

        # --- 2. Create missing edges in winding order ---
        for i in range(3):
            n0, n1 = nodes[i], nodes[(i + 1) % 3]
            if get_edge(n0, n1) is None:
                self.add_edge(Edge(n0, n1))

        # --- 3. Link face <-> verts and face <-> edges ---
        self.faces.append(face)
        face.mesh = self
        for i in range(3):
            v0 = face.v[(i + 1) % 3]
            v1 = face.v[(i + 2) % 3]
            include(face, v0.adj_f)

            edge = get_edge(v0.node, v1.node)
            face.adj_e[i] = edge
            side = 0 if edge.n[0] is v0.node else 1
            if edge.adj_f[side] is not None:
                # Neighbour wound the same way; take the free side
                logger.warning("Inconsistent winding between faces %d and %d",
                               edge.adj_f[side].index, len(self.faces) - 1)
                side = 1 - side
            edge.adj_f[side] = face
        face.index = len(self.faces) - 1

    # --- Remove ---

    def remove(self, entity):
        if isinstance(entity, SurfacePoint):
            self.remove_surface_point(entity)
        elif isinstance(entity, Node):
            self.remove_node(entity)
        elif isinstance(entity, Edge):
            self.remove_edge(entity)
        elif isinstance(entity, Face):
            self.remove_face(entity)
        else:
            raise TypeError(f"Cannot remove {type(entity).__name__} from a Mesh.")

    def remove_surface_point(self, vert):
        self._check_owned(vert)
        if vert.adj_f:
            raise TopologyError(f"{vert!r} still has {len(vert.adj_f)} adjacent faces.")
        exclude(vert, self.surface_points)
        if vert.node is not None:
            exclude(vert, vert.node.verts)
            vert.node = None
        vert.mesh = None
        vert.index = -1

    def remove_node(self, node):
        self._check_owned(node)
        if node.adj_e:
            raise TopologyError(f"{node!r} still has {len(node.adj_e)} adjacent edges.")
        exclude(node, self.nodes)
        node.mesh = None
        node.index = -1

    def remove_edge(self, edge):
        self._check_owned(edge)
        if edge.adj_f[0] is not None or edge.adj_f[1] is not None:
            raise TopologyError(f"{edge!r} still has adjacent faces.")
        exclude(edge, self.edges)
        exclude(edge, edge.n[0].adj_e)
        exclude(edge, edge.n[1].adj_e)
        edge.mesh = None
        edge.index = -1

    def remove_face(self, face):
        ''' Detaches a face from its verts and edges. Edges left without
        faces stay in the mesh. '''
        self._check_owned(face)
        exclude(face, self.faces)
        for i in range(3):
            exclude(face, face.v[i].adj_f)
            edge = face.adj_e[i]
            side = edge.face_side(face)
            if side is not None:
                edge.adj_f[side] = None
            face.adj_e[i] = None
        face.mesh = None
        face.index = -1

    def set_indices(self):
        ''' Re-numbers every collection to match storage order. '''
        for i, vert in enumerate(self.surface_points):
            vert.index = i
        for i, face in enumerate(self.faces):
            face.index = i
        for i, node in enumerate(self.nodes):
            node.index = i
        for i, edge in enumerate(self.edges):
            edge.index = i

    def clear(self):
        ''' Drops every entity. '''
        for items in (self.faces, self.edges, self.nodes, self.surface_points):
            for entity in items:
                entity.mesh = None
                entity.index = -1
            items.clear()

    # --- Builders ---

    def new_node(self, x, n=(0.0, 0.0, 0.0)):
        node = Node(x, n)
        self.add_node(node)
        return node

    def new_surface_point(self, uv, node=None):
        vert = SurfacePoint(uv)
        self.add_surface_point(vert)
        if node is not None:
            connect(vert, node)
        return vert

    def new_face(self, v0, v1, v2):
        face = Face(v0, v1, v2)
        self.add_face(face)
        return face

    def add_polygon(self, points):
        ''' Triangulates a loop of connected SurfacePoints and adds the faces. '''
        faces = triangulate(points)
        for face in faces:
            self.add_face(face)
        return faces

    # --- Queries ---

    def boundary_edges(self):
        return [e for e in self.edges if e.is_boundary]

    def seam_edges(self):
        ''' Edges with two faces that disagree on a SurfacePoint. '''
        return [e for e in self.edges
                if not e.is_boundary and e.is_on_seam_or_boundary()]

    def stats(self):
        return {
            "surface_points": len(self.surface_points),
            "nodes": len(self.nodes),
            "edges": len(self.edges),
            "faces": len(self.faces),
            "boundary_edges": len(self.boundary_edges()),
            "seam_edges": len(self.seam_edges()),
        }

    # --- Transformation ---

    def set_transform(self, pos=None, scale=None):
        ''' Sets the position offset and non-uniform scale. Zero scale
        components are rejected since the transform must be invertible. '''
        if pos is not None:
            self.pos = as_vec3(pos)
        if scale is not None:
            scale = as_vec3(scale)
            if np.any(scale == 0.0):
                raise ValueError(f"Scale components must be non-zero, got {scale}.")
            self.scale = scale

    @property
    def is_identity_transform(self):
        return bool(np.all(self.pos == 0.0) and np.all(self.scale == 1.0))

    def to_world(self, x):
        return self.pos + self.scale * x

    def apply_transformation(self):
        ''' Bakes pos/scale into every Node position. '''
        if self.is_identity_transform:
            return
        for node in self.nodes:
            node.x = self.to_world(node.x)

    def unapply_transformation(self):
        if self.is_identity_transform:
            return
        for node in self.nodes:
            node.x = (node.x - self.pos) / self.scale

    # --- Normals ---

    def update_face_normals(self):
        normals.update_face_normals(self)

    def shade_smooth(self):
        normals.shade_smooth(self)

    def shade_flat(self):
        normals.shade_flat(self)

    # --- Draw data ---

    def _world_normal(self, n):
        # Inverse-transpose of a diagonal scale
        return normalized(n / self.scale)

    def vertex_stream(self):
        stream = np.zeros((3 * len(self.faces), 8))
        row = 0
        for face in self.faces:
            for vert in face.v:
                stream[row, 0:3] = self.to_world(vert.node.x)
                stream[row, 3:6] = self._world_normal(vert.node.n)
                stream[row, 6:8] = vert.uv
                row += 1
        return stream

    def face_records(self):
        ''' (F, 6, 3) array of (p0, n0, p1, n1, p2, n2) per face. '''
        records = np.zeros((len(self.faces), 6, 3))
        for i, face in enumerate(self.faces):
            for j, vert in enumerate(face.v):
                records[i, 2 * j] = self.to_world(vert.node.x)
                records[i, 2 * j + 1] = self._world_normal(vert.node.n)
        return records

    def wireframe_segments(self):
        segments = np.zeros((len(self.edges), 2, 3))
        for i, edge in enumerate(self.edges):
            segments[i, 0] = self.to_world(edge.n[0].x)
            segments[i, 1] = self.to_world(edge.n[1].x)
        return segments

    def uv_segments(self):
        ''' The three UV space sides of every face, (3F, 2, 2). '''
        segments = np.zeros((3 * len(self.faces), 2, 2))
        for i, face in enumerate(self.faces):
            for j in range(3):
                segments[3 * i + j, 0] = face.v[j].uv
                segments[3 * i + j, 1] = face.v[(j + 1) % 3].uv
        return segments

    def face_normal_segments(self, length=DEFAULT_NORMAL_LENGTH):
        ''' Segments from each face centroid along its cached normal. '''
        segments = np.zeros((len(self.faces), 2, 3))
        for i, face in enumerate(self.faces):
            start = face.center
            segments[i, 0] = self.to_world(start)
            segments[i, 1] = self.to_world(start + length * face.n)
        return segments

    # --- File I/O ---

    @classmethod
    def from_file(cls, filename, pos=(0.0, 0.0, 0.0), scale=(1.0, 1.0, 1.0)):
        """ Reads a surface file into a new instance of this class with the
        given transform. """
        from .surface_io import read_surface
        return read_surface(filename, factory=lambda: cls(pos, scale))

    def save(self, filename):
        from .surface_io import write_surface
        write_surface(self, filename)

    def __repr__(self):
        return (f"Mesh(nodes={len(self.nodes)}, surface_points={len(self.surface_points)}, "
                f"edges={len(self.edges)}, faces={len(self.faces)})")
