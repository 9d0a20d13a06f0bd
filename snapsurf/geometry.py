''' geometry.py
    -----------
    Small vector helpers shared by the topology, triangulation and normal
    code. Every vector is a float64 numpy array of shape (2,) or (3,).
'''
import math

import numpy as np


def vec2(u, v):
    ''' Returns a 2D (UV space) vector. '''
    return np.array([u, v], dtype=np.float64)


def vec3(x, y, z):
    ''' Returns a 3D (world space) vector. '''
    return np.array([x, y, z], dtype=np.float64)


def as_vec3(value):
    ''' Coerces any 3-sequence into a float64 vector, validating the shape. '''
    arr = np.array(value, dtype=np.float64).reshape(-1)
    if arr.shape != (3,):
        raise ValueError(f"Expected 3 components, got {arr.shape[0]}.")
    return arr


def norm2(v):
    ''' Squared Euclidean length. '''
    return float(np.dot(v, v))


def normalized(v):
    ''' Unit vector along v. A zero-length vector comes back as zeros. '''
    length = np.linalg.norm(v)
    if length == 0.0:
        return np.zeros_like(v, dtype=np.float64)
    return v / length


def triangle_normal(x0, x1, x2):
    ''' Un-normalized normal of the triangle (x0, x1, x2), right-hand winding.

    The magnitude is twice the triangle area.
    '''
    return np.cross(x1 - x0, x2 - x0)


def triangle_area(x0, x1, x2):
    return 0.5 * float(np.linalg.norm(triangle_normal(x0, x1, x2)))


def angle(x0, x1, x2):
    ''' Interior angle (radians) at corner x0 of the triangle (x0, x1, x2).

    The dot product is clamped to [-1, 1] so that nearly parallel edges
    cannot push acos outside its domain.
    '''
    e1 = normalized(x1 - x0)
    e2 = normalized(x2 - x0)
    return math.acos(float(np.clip(np.dot(e1, e2), -1.0, 1.0)))


def min_angle(x0, x1, x2):
    ''' Smallest of the three interior angles of a triangle. '''
    return min(angle(x0, x1, x2), angle(x1, x2, x0), angle(x2, x0, x1))
