"""
ex01_manual_topology.py
-----------------------
Goal: Build two triangles by hand and inspect the adjacency the Mesh keeps.
"""
from snapsurf.mesh import Mesh
from snapsurf.topology import get_edge


def run_topology_demo():
    mesh = Mesh()

    print("--- 1. Creating Nodes and Surface Points ---")
    nodes = [mesh.new_node(x) for x in [(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)]]
    pts = [mesh.new_surface_point(n.x[:2], n) for n in nodes]
    for p in pts:
        print(f"Created: {p}")

    print("\n--- 2. Creating Faces ---")
    f1 = mesh.new_face(pts[0], pts[1], pts[2])
    f2 = mesh.new_face(pts[0], pts[2], pts[3])
    print(f"Created: {f1}")
    print(f"Created: {f2}")
    print(f"Edges created on the fly: {len(mesh.edges)}")

    print("\n--- 3. Seams and Boundaries ---")
    diag = get_edge(nodes[0], nodes[2])
    print(f"Diagonal {diag} on seam/boundary: {diag.is_on_seam_or_boundary()}")
    print(f"Boundary edges: {len(mesh.boundary_edges())}")

    print("\n--- 4. Cutting a UV seam ---")
    mesh.remove(f2)
    seam_pt = mesh.new_surface_point((0.5, 0.5), nodes[0])
    mesh.new_face(seam_pt, pts[2], pts[3])
    print(f"Diagonal on seam/boundary: {diag.is_on_seam_or_boundary()}")
    print(mesh.stats())


if __name__ == "__main__":
    run_topology_demo()
