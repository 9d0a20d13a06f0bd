"""
ex02_polygon_triangulation.py
-----------------------------
Goal: Compare the fan quality of every root of a skewed quad and let the
triangulator pick the best one.
"""
import math

from snapsurf.mesh import Mesh
from snapsurf.triangulate import best_fan_root, fan_min_angle


def run():
    mesh = Mesh()
    corners = [(0, 0, 0), (10, 0, 0), (10.5, 2, 0), (0, 1, 0)]
    pts = [mesh.new_surface_point(x[:2], mesh.new_node(x)) for x in corners]
    positions = [p.node.x for p in pts]

    for root in range(len(pts)):
        score = math.degrees(fan_min_angle(positions, root))
        print(f"Root {root}: min angle = {score:6.2f} deg")

    root, score = best_fan_root(positions)
    print(f"\nChosen root: {root} ({math.degrees(score):.2f} deg)")

    faces = mesh.add_polygon(pts)
    for f in faces:
        print(f"  {f}  area = {f.area:.4f}")


if __name__ == "__main__":
    run()
