import numpy as np
import pytest

from snapsurf.mesh import Mesh
from snapsurf.surface_io import (SurfaceFormatError, build_mesh, parse_records,
                                 read_surface, write_surface)
from snapsurf.topology import get_edge


def mesh_from_text(text):
    return build_mesh(parse_records(text.splitlines()))


QUAD = """\
# a unit square given as one polygon
v 0 0 0
v 1 0 0
v 1 1 0
v 0 1 0

f 1 2 3 4
"""


def test_polygon_without_uvs_synthesizes_points():
    mesh = mesh_from_text(QUAD)
    assert len(mesh.nodes) == 4
    assert len(mesh.faces) == 2
    assert len(mesh.surface_points) == 4
    for vert in mesh.surface_points:
        np.testing.assert_array_equal(vert.uv, vert.node.x[:2])
        assert vert.node.verts == [vert]


def test_faces_reuse_first_point_of_a_node():
    mesh = mesh_from_text("""\
v 0 0 0
v 1 0 0
v 1 1 0
v 0 1 0
f 1 2 3
f 1 3 4
""")
    assert len(mesh.surface_points) == 4
    diag = get_edge(mesh.nodes[0], mesh.nodes[2])
    assert not diag.is_on_seam_or_boundary()


def test_explicit_uvs_and_seam():
    mesh = mesh_from_text("""\
v 0 0 0
v 1 0 0
v 1 1 0
v 0 1 0
vt 0 0
vt 1 0
vt 1 1
vt 0 1
vt 0.5 0.5
f 1/1 2/2 3/3
f 1/5 3/3 4/4
""")
    assert len(mesh.surface_points) == 5
    assert len(mesh.nodes[0].verts) == 2
    assert len(mesh.seam_edges()) == 1


def test_normals_may_be_referenced_before_they_appear():
    mesh = mesh_from_text("""\
v 0 0 0
v 1 0 0
v 0 1 0
f 1//1 2//1 3//2
vn 0 0 1
vn 0 1 0
""")
    np.testing.assert_array_equal(mesh.nodes[0].n, [0, 0, 1])
    np.testing.assert_array_equal(mesh.nodes[2].n, [0, 1, 0])


def test_explicit_edges():
    mesh = mesh_from_text("""\
v 0 0 0
v 1 0 0
v 0 1 0
v 5 5 5
e 1 4
e 1 2
f 1 2 3
e 2 1
""")
    assert len(mesh.edges) == 4
    assert get_edge(mesh.nodes[0], mesh.nodes[3]).adj_f == [None, None]


def test_unknown_records_are_ignored():
    mesh = mesh_from_text("o thing\ns off\n" + QUAD)
    assert len(mesh.faces) == 2


@pytest.mark.parametrize("text, line_no", [
    ("v 1 2\n", 1),
    ("v 0 0 0\nvt a b\n", 2),
    ("v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1/x 2 3\n", 4),
    ("v 0 0 0\nv 1 0 0\nf 1 2\n", 3),
    ("v 0 0 0\ne 1\n", 2),
    ("v 0 0 0\ne 0 1\n", 2),
])
def test_malformed_lines_fault(text, line_no):
    with pytest.raises(SurfaceFormatError) as err:
        parse_records(text.splitlines())
    assert err.value.line_no == line_no


@pytest.mark.parametrize("text", [
    "v 0 0 0\nv 1 0 0\nf 1 2 3\n",
    "v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1/2 2 3\n",
    "v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1//9 2 3\n",
    "v 0 0 0\nv 1 0 0\nv 2 0 0\nf 1 2 3\n",
])
def test_unresolvable_faces_fault(text):
    with pytest.raises(SurfaceFormatError):
        mesh_from_text(text)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_surface(str(tmp_path / "missing.obj"))


def test_write_format(tmp_path):
    mesh = mesh_from_text("v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 3\n")
    path = tmp_path / "tri.obj"
    write_surface(mesh, str(path))
    lines = path.read_text().splitlines()
    assert lines[0] == "v 0 0 0"
    assert [l.split()[0] for l in lines] == ["v"] * 3 + ["vt"] * 3 + ["vn"] * 3 + ["f"]
    assert lines[-1] == "f 1/1/1 2/2/1 3/3/1"


def test_round_trip(tmp_path):
    mesh = Mesh()
    xs = [(0.1, 0.2, 0.3), (1.0 / 3.0, 0.0, 0.0), (1.0, 1.0, 0.5), (0.0, 1.0, 1e-7), (-0.5, 0.5, 0.25)]
    nodes = [mesh.new_node(x) for x in xs]
    pts = [mesh.new_surface_point((i * 0.1, 1.0 - i * 0.1), n) for i, n in enumerate(nodes)]
    mesh.add_polygon(pts)
    mesh.shade_smooth()

    path = tmp_path / "poly.obj"
    mesh.save(str(path))
    again = Mesh.from_file(str(path))

    assert len(again.nodes) == len(mesh.nodes)
    assert len(again.faces) == len(mesh.faces)
    assert len(again.surface_points) == len(mesh.surface_points)
    for f0, f1 in zip(mesh.faces, again.faces):
        for p0, p1 in zip(f0.positions, f1.positions):
            np.testing.assert_allclose(p0, p1, atol=1e-9)
        for v0, v1 in zip(f0.v, f1.v):
            np.testing.assert_allclose(v0.uv, v1.uv, atol=1e-9)


SHARED_UVS = """\
v 0 0 0
v 1 0 0
v 0 1 0
v 5 0 0
v 6 0 0
v 5 1 0
vt 0 0
vt 1 0
vt 0 1
f 1/1 2/2 3/3
f 4/1 5/2 6/3
"""


def test_uv_reused_by_another_node_is_copied():
    mesh = mesh_from_text(SHARED_UVS)
    first, second = mesh.faces

    for face in (first, second):
        for edge in face.adj_e:
            assert all(any(n is m for m in face.nodes) for n in edge.n)
    assert [v.node for v in first.v] == mesh.nodes[:3]
    assert [v.node for v in second.v] == mesh.nodes[3:]

    assert len(mesh.surface_points) == 6
    for v0, v1 in zip(first.v, second.v):
        assert v0 is not v1
        np.testing.assert_array_equal(v0.uv, v1.uv)
    for node in mesh.nodes:
        assert len(node.verts) == 1


def test_uv_copy_is_shared_by_later_faces():
    mesh = mesh_from_text(SHARED_UVS + "v 6 1 0\nf 5/2 7/3 6/3\n")
    assert len(mesh.faces) == 3
    # Copies made for nodes 5 and 6 are reused; node 7 needs one more
    assert len(mesh.surface_points) == 7
    assert mesh.faces[2].v[0] is mesh.faces[1].v[1]
    assert mesh.faces[2].v[2] is mesh.faces[1].v[2]
    assert not get_edge(mesh.nodes[4], mesh.nodes[5]).is_on_seam_or_boundary()


def test_from_file_keeps_class_and_transform(tmp_path):
    class TaggedMesh(Mesh):
        pass

    path = tmp_path / "tri.obj"
    path.write_text("v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 3\n")
    mesh = TaggedMesh.from_file(str(path), pos=(1, 2, 3), scale=(2, 2, 2))

    assert type(mesh) is TaggedMesh
    np.testing.assert_array_equal(mesh.pos, [1, 2, 3])
    np.testing.assert_array_equal(mesh.scale, [2, 2, 2])
    np.testing.assert_array_equal(mesh.nodes[1].x, [1, 0, 0])
    np.testing.assert_array_equal(mesh.to_world(mesh.nodes[1].x), [3, 2, 3])
