"""
ex03_smooth_and_save.py
-----------------------
Goal: Build a low-poly dome, smooth its normals, check quality, write it out
and read it back.
"""
import math
import os
import tempfile

from snapsurf.logging_config import setup_logging
from snapsurf.mesh import Mesh
from snapsurf.quality import MeshQuality


def create_dome(n_sides=8, height=0.5):
    mesh = Mesh()
    rim = []
    for i in range(n_sides):
        theta = 2.0 * math.pi * i / n_sides
        node = mesh.new_node((math.cos(theta), math.sin(theta), 0.0))
        rim.append(mesh.new_surface_point((0.5 + 0.5 * math.cos(theta),
                                           0.5 + 0.5 * math.sin(theta)), node))
    top = mesh.new_surface_point((0.5, 0.5), mesh.new_node((0.0, 0.0, height)))

    for i in range(n_sides):
        mesh.new_face(rim[i], rim[(i + 1) % n_sides], top)
    return mesh


def run():
    setup_logging()

    mesh = create_dome()
    mesh.update_face_normals()
    mesh.shade_smooth()
    print(f"Apex normal: {mesh.nodes[-1].n}")

    MeshQuality(mesh).print_report()

    path = os.path.join(tempfile.gettempdir(), "snapsurf_dome.obj")
    mesh.save(path)
    again = Mesh.from_file(path)
    print(f"Re-read: {again}")


if __name__ == "__main__":
    run()
