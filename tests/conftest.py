import pytest

from snapsurf.mesh import Mesh


def add_points(mesh, positions):
    ''' Adds one Node and one connected SurfacePoint per position. '''
    points = []
    for x in positions:
        node = mesh.new_node(x)
        points.append(mesh.new_surface_point(node.x[:2], node))
    return points


@pytest.fixture
def square():
    """
    Unit square in the z = 0 plane split along the a-c diagonal.

        d ---- c
        |    / |
        |  /   |
        a ---- b
    """
    mesh = Mesh()
    pa, pb, pc, pd = add_points(mesh, [(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)])
    f1 = mesh.new_face(pa, pb, pc)
    f2 = mesh.new_face(pa, pc, pd)
    return mesh, (pa, pb, pc, pd), (f1, f2)


@pytest.fixture
def grid():
    ''' 3 x 3 planar grid of nodes, 8 counter-clockwise triangles. '''
    mesh = Mesh()
    pts = add_points(mesh, [(i, j, 0.0) for j in range(3) for i in range(3)])
    for j in range(2):
        for i in range(2):
            a = pts[j * 3 + i]
            b = pts[j * 3 + i + 1]
            c = pts[(j + 1) * 3 + i + 1]
            d = pts[(j + 1) * 3 + i]
            mesh.new_face(a, b, c)
            mesh.new_face(a, c, d)
    return mesh
