"""
snapsurf/surface_io.py
----------------------
Reader and writer for the plain-text surface format.

    v  x y z          world space Node
    vt u v            SurfacePoint (UV)
    vn x y z          normal, referenced by face corners
    e  n0 n1          explicit edge between two Nodes
    f  n/v/vn ...     polygon; n is mandatory, v and vn are optional

Indices are 1-based. Blank lines and lines starting with '#' are ignored.

Reading happens in two passes. `parse_records` turns text into records and
faults on the first malformed line. `build_mesh` then resolves the records
into a brand new Mesh, so forward references to normals are allowed and a
failed read never leaves a half-built mesh behind.
"""
import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Tuple

from .config import COMMENT_PREFIX, FLOAT_FORMAT
from .geometry import as_vec3
from .mesh import Mesh, connect
from .topology import Edge, TopologyError, get_edge

logger = logging.getLogger(__name__)

# (node, uv, normal) 1-based indices of one face corner
Corner = Tuple[int, Optional[int], Optional[int]]


class SurfaceFormatError(ValueError):
    ''' A malformed or unresolvable record in a surface file. '''

    def __init__(self, line_no: int, message: str, source: str = "<input>") -> None:
        self.line_no = line_no
        self.source = source
        super().__init__(f"{source}:{line_no}: {message}")


@dataclass
class Record:
    keyword: str
    line_no: int
    values: list = field(default_factory=list)


# --- Pass 1: text -> records ---

def _floats(tokens: List[str], count: int, line_no: int, source: str) -> List[float]:
    if len(tokens) < count:
        raise SurfaceFormatError(line_no, f"expected {count} numbers, got {len(tokens)}", source)
    try:
        return [float(t) for t in tokens[:count]]
    except ValueError:
        raise SurfaceFormatError(line_no, f"invalid number in {' '.join(tokens)!r}", source) from None


def _index(token: str, line_no: int, source: str) -> int:
    try:
        idx = int(token)
    except ValueError:
        raise SurfaceFormatError(line_no, f"invalid index {token!r}", source) from None
    if idx < 1:
        raise SurfaceFormatError(line_no, f"indices are 1-based, got {idx}", source)
    return idx


def _corner(token: str, line_no: int, source: str) -> Corner:
    parts = token.split('/')
    if len(parts) > 3 or not parts[0]:
        raise SurfaceFormatError(line_no, f"malformed face corner {token!r}", source)
    node = _index(parts[0], line_no, source)
    uv = _index(parts[1], line_no, source) if len(parts) > 1 and parts[1] else None
    normal = _index(parts[2], line_no, source) if len(parts) > 2 and parts[2] else None
    return node, uv, normal


def parse_records(lines: Iterable[str], source: str = "<input>") -> List[Record]:
    """
    Tokenises surface text into records.

    Raises:
        SurfaceFormatError: On the first malformed line.
    """
    records = []
    for line_no, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith(COMMENT_PREFIX):
            continue
        keyword, *tokens = line.split()

        if keyword == "v":
            values = _floats(tokens, 3, line_no, source)
        elif keyword == "vt":
            values = _floats(tokens, 2, line_no, source)
        elif keyword == "vn":
            values = _floats(tokens, 3, line_no, source)
        elif keyword == "e":
            if len(tokens) != 2:
                raise SurfaceFormatError(line_no, "an edge needs exactly 2 node indices", source)
            values = [_index(t, line_no, source) for t in tokens]
        elif keyword == "f":
            if len(tokens) < 3:
                raise SurfaceFormatError(line_no, "a face needs at least 3 corners", source)
            values = [_corner(t, line_no, source) for t in tokens]
        else:
            logger.debug("%s:%d: ignoring '%s' record", source, line_no, keyword)
            continue

        records.append(Record(keyword, line_no, values))
    return records


# --- Pass 2: records -> mesh ---

def _lookup(items, idx, what, record, source):
    if idx > len(items):
        raise SurfaceFormatError(record.line_no,
                                 f"{what} index {idx} out of range (have {len(items)})", source)
    return items[idx - 1]


def build_mesh(records: List[Record], source: str = "<input>",
               factory: Callable[[], Mesh] = Mesh) -> Mesh:
    """
    Resolves parsed records into a new Mesh made by `factory`.

    Nodes and SurfacePoints are created first, then edges and faces in file
    order. A face corner without a UV index reuses the first SurfacePoint
    already attached to its Node, or gets a new one with uv = (x, y).

    A `vt` bound to one Node and referenced again with another Node is
    copied: the second Node gets its own SurfacePoint with the same UV, shared
    by every later corner that pairs the two.
    """
    mesh = factory()

    # --- 1. Plain entities ---
    nodes = [mesh.new_node(r.values) for r in records if r.keyword == "v"]
    verts = [mesh.new_surface_point(r.values) for r in records if r.keyword == "vt"]
    normals = [r.values for r in records if r.keyword == "vn"]
    uv_copies = {}

    # --- 2. Connectivity ---
    for record in records:
        if record.keyword == "e":
            n0 = _lookup(nodes, record.values[0], "node", record, source)
            n1 = _lookup(nodes, record.values[1], "node", record, source)
            if n0 is n1:
                raise SurfaceFormatError(record.line_no, "edge joins a node to itself", source)
            if get_edge(n0, n1) is not None:
                logger.debug("%s:%d: edge already exists, skipped", source, record.line_no)
                continue
            mesh.add_edge(Edge(n0, n1))

        elif record.keyword == "f":
            corner_verts = []
            for node_idx, uv_idx, normal_idx in record.values:
                node = _lookup(nodes, node_idx, "node", record, source)
                if normal_idx is not None:
                    node.n = as_vec3(_lookup(normals, normal_idx, "normal", record, source))

                if uv_idx is not None:
                    vert = _lookup(verts, uv_idx, "uv", record, source)
                    if vert.node is None:
                        connect(vert, node)
                    elif vert.node is not node:
                        key = (uv_idx, node_idx)
                        if key not in uv_copies:
                            uv_copies[key] = mesh.new_surface_point(vert.uv, node)
                        vert = uv_copies[key]
                elif node.verts:
                    vert = node.verts[0]
                else:
                    vert = mesh.new_surface_point(node.x[:2], node)
                corner_verts.append(vert)

            try:
                mesh.add_polygon(corner_verts)
            except (TopologyError, ValueError) as err:
                raise SurfaceFormatError(record.line_no, str(err), source) from err

    return mesh


def read_surface(filename: str, factory: Callable[[], Mesh] = Mesh) -> Mesh:
    """
    Loads a surface file into a new Mesh made by `factory`.

    Raises:
        FileNotFoundError: If the file does not exist (logged first).
        SurfaceFormatError: On malformed or unresolvable content.
    """
    logger.info("Loading surface from: %s", filename)
    try:
        with open(filename, 'r', encoding='utf-8') as f:
            records = parse_records(f, source=str(filename))
    except FileNotFoundError:
        logger.error("No file found at %s", filename)
        raise

    mesh = build_mesh(records, source=str(filename), factory=factory)
    logger.info("Loaded %s", mesh)
    return mesh


def _fmt(*values) -> str:
    return " ".join(FLOAT_FORMAT % float(v) for v in values)


def write_surface(mesh: Mesh, filename: str) -> None:
    """
    Writes v, vt, vn and f records for the whole mesh.

    Every corner of a face references the normal of the face's first Node,
    which is how the format has always been written.
    """
    mesh.set_indices()
    logger.info("Saving surface to: %s", filename)
    with open(filename, 'w', encoding='utf-8') as f:
        for node in mesh.nodes:
            f.write(f"v {_fmt(*node.x)}\n")
        for vert in mesh.surface_points:
            f.write(f"vt {_fmt(*vert.uv)}\n")
        for node in mesh.nodes:
            f.write(f"vn {_fmt(*node.n)}\n")
        for face in mesh.faces:
            normal_idx = face.v[0].node.index + 1
            corners = " ".join(f"{v.node.index + 1}/{v.index + 1}/{normal_idx}" for v in face.v)
            f.write(f"f {corners}\n")
