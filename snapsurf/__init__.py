# snapsurf/__init__.py

__version__ = "1.0"

# Import Primitives
from .topology import SurfacePoint, Node, Edge, Face, TopologyError, get_edge

# Import the Mesh class
from .mesh import Mesh, connect
from .drawable import Drawable

# Import Algorithms
from .triangulate import triangulate, best_fan_root
from .normals import update_face_normals, shade_smooth, shade_flat
from .surface_io import read_surface, write_surface, SurfaceFormatError
