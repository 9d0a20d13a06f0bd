import numpy as np

from .geometry import vec2, vec3, as_vec3, triangle_area, triangle_normal, angle


class TopologyError(RuntimeError):
    ''' Raised when a mesh mutation would break an adjacency invariant.

    This is a programming error in the caller (for example removing a Node
    that still has edges). The mutation is refused before anything changes.
    '''


def include(item, items):
    ''' Appends item to the list unless it is already present. '''
    if not any(x is item for x in items):
        items.append(item)


def exclude(item, items):
    ''' Removes item from the list if present (identity comparison). '''
    for i, x in enumerate(items):
        if x is item:
            del items[i]
            return


class SurfacePoint:
    ''' A UV space vertex.

    Several SurfacePoints can share one world space Node when the mesh is cut
    by a UV seam. The faces listed in `adj_f` are the faces that use this UV
    identity, not every face touching the Node.

    Attributes:
        index (int): Position in Mesh.surface_points (-1 while unregistered).
        uv (np.ndarray): The (u, v) texture coordinates.
        node (Node): The world space Node this point belongs to (or None).
        adj_f (list of Face): Faces that reference this SurfacePoint.
    '''
    __slots__ = ['index', 'uv', 'node', 'adj_f', 'mesh']

    def __init__(self, uv=(0.0, 0.0)):
        self.index = -1
        self.uv = vec2(uv[0], uv[1])
        self.node = None
        self.adj_f = []
        self.mesh = None

    def is_on_seam_or_boundary(self):
        if self.node is None:
            return False
        return self.node.is_on_seam_or_boundary()

    def __repr__(self):
        node_idx = self.node.index if self.node is not None else None
        return (f'SurfacePoint(index = {self.index:4d}: u = {self.uv[0]:10.4f}, '
                f'v = {self.uv[1]:10.4f}, node = {node_idx})')


class Node:
    ''' A world space vertex.

    Attributes:
        index (int): Position in Mesh.nodes (-1 while unregistered).
        x (np.ndarray): World space position.
        n (np.ndarray): Smoothed world space normal.
        verts (list of SurfacePoint): UV copies of this Node (more than one
            only across a seam).
        adj_e (list of Edge): Edges that have this Node as an endpoint.
    '''
    __slots__ = ['index', 'x', 'n', 'verts', 'adj_e', 'mesh']

    def __init__(self, x=(0.0, 0.0, 0.0), n=(0.0, 0.0, 0.0)):
        self.index = -1
        self.x = as_vec3(x)
        self.n = as_vec3(n)
        self.verts = []
        self.adj_e = []
        self.mesh = None

    def adjacent(self, other):
        ''' Returns the SurfacePoint on the opposite side of the edge
        (self, other.node) that sits at this Node, or None.

        `other` is a SurfacePoint of a neighbouring Node. The first face side
        of the shared edge that presents `other` is located, and the
        SurfacePoint that same face uses for this Node is returned. Across a
        seam this picks the UV copy of this Node that is connected to `other`.
        '''
        edge = get_edge(self, other.node)
        if edge is None:
            return None
        for i in range(2):
            for j in range(2):
                if edge.get_vert(j, i) is other:
                    return edge.get_vert(j, 1 - i)
        return None

    def is_on_seam_or_boundary(self):
        return any(e.is_on_seam_or_boundary() for e in self.adj_e)

    def to_array(self):
        ''' Returns a copy of the position for calculation. '''
        return self.x.copy()

    def update_from_array(self, arr):
        self.x = as_vec3(arr)

    def __repr__(self):
        return (f'Node(index = {self.index:4d}: x = {self.x[0]:10.4f}, '
                f'y = {self.x[1]:10.4f}, z = {self.x[2]:10.4f})')


class Edge:
    ''' An unordered pair of Nodes with up to two adjacent faces.

    The endpoints are fixed at construction, edges are never re-pointed.
    `adj_f[side]` is None on the open side of a boundary edge.

    Attributes:
        index (int): Position in Mesh.edges (-1 while unregistered).
        n (list of Node): The two endpoint Nodes.
        adj_f (list of Face or None): The faces on side 0 and side 1.
    '''
    __slots__ = ['index', 'n', 'adj_f', 'mesh']

    def __init__(self, n0, n1):
        if n0 is n1:
            raise ValueError("Edge endpoints must be two distinct Nodes.")
        self.index = -1
        self.n = [n0, n1]
        self.adj_f = [None, None]
        self.mesh = None

    def get_vert(self, face_side, edge_node):
        ''' SurfacePoint of adj_f[face_side] whose Node is n[edge_node]. '''
        face = self.adj_f[face_side]
        if face is None:
            return None
        for v in face.v:
            if v.node is self.n[edge_node]:
                return v
        return None

    def get_other_vert_of_face(self, face_side):
        ''' SurfacePoint of adj_f[face_side] opposite this edge. '''
        face = self.adj_f[face_side]
        if face is None:
            return None
        for v in face.v:
            if v.node is not self.n[0] and v.node is not self.n[1]:
                return v
        return None

    def other_node(self, node):
        if node is self.n[0]:
            return self.n[1]
        if node is self.n[1]:
            return self.n[0]
        raise ValueError(f"{node!r} is not an endpoint of {self!r}.")

    def face_side(self, face):
        ''' Returns 0 or 1 for the side face occupies, None if not adjacent. '''
        for side in range(2):
            if self.adj_f[side] is face:
                return side
        return None

    @property
    def is_boundary(self):
        return self.adj_f[0] is None or self.adj_f[1] is None

    def is_on_seam_or_boundary(self):
        return (self.adj_f[0] is None or self.adj_f[1] is None
                or self.get_vert(0, 0) is not self.get_vert(1, 0)
                or self.get_vert(0, 1) is not self.get_vert(1, 1))

    @property
    def length(self):
        return float(np.linalg.norm(self.vector))

    @property
    def midpoint(self):
        return 0.5 * (self.n[0].x + self.n[1].x)

    @property
    def vector(self):
        ''' Returns the vector n[1] - n[0]. '''
        return self.n[1].x - self.n[0].x

    def __repr__(self):
        return (f'Edge(index = {self.index:4d}: nodes = '
                f'({self.n[0].index}, {self.n[1].index}))')


class Face:
    ''' A triangle of three SurfacePoints.

    The order of `v` defines the winding. `adj_e[i]` is the edge opposite
    corner i, joining the Nodes of v[(i + 1) % 3] and v[(i + 2) % 3].

    Attributes:
        index (int): Position in Mesh.faces (-1 while unregistered).
        v (list of SurfacePoint): The three corners.
        adj_e (list of Edge or None): The three edges, filled in by Mesh.add.
        n (np.ndarray): Cached unit face normal.
    '''
    __slots__ = ['index', 'v', 'adj_e', 'n', 'mesh']

    def __init__(self, v0, v1, v2):
        self.index = -1
        self.v = [v0, v1, v2]
        self.adj_e = [None, None, None]
        self.n = vec3(0.0, 0.0, 0.0)
        self.mesh = None

    def is_on_seam_or_boundary(self):
        return any(e.is_on_seam_or_boundary() for e in self.adj_e)

    @property
    def nodes(self):
        return [v.node for v in self.v]

    @property
    def positions(self):
        return [v.node.x for v in self.v]

    @property
    def area(self):
        return triangle_area(*self.positions)

    @property
    def center(self):
        x0, x1, x2 = self.positions
        return (x0 + x1 + x2) / 3.0

    @property
    def angles(self):
        ''' Interior angles (radians) at v[0], v[1], v[2]. '''
        x0, x1, x2 = self.positions
        return (angle(x0, x1, x2), angle(x1, x2, x0), angle(x2, x0, x1))

    def geometric_normal(self):
        return triangle_normal(*self.positions)

    def corner(self, vert):
        ''' Index of vert among the three corners. '''
        for i, v in enumerate(self.v):
            if v is vert:
                return i
        raise ValueError(f"{vert!r} is not a corner of {self!r}.")

    def __repr__(self):
        return (f'Face(index = {self.index}, verts = '
                f'({self.v[0].index}, {self.v[1].index}, {self.v[2].index}))')


def get_edge(n0, n1):
    ''' Returns the Edge joining n0 and n1, or None. '''
    for edge in n0.adj_e:
        if edge.n[0] is n1 or edge.n[1] is n1:
            return edge
    return None
