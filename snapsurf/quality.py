"""
snapsurf/quality.py
-------------------
Tools for inspecting triangle quality on a surface mesh.
Calculates metrics like Aspect Ratio, Minimum Angle, and Area.
"""
import numpy as np
import matplotlib.pyplot as plt

from .config import (ASPECT_RATIO_TARGET, MAX_ASPECT_RATIO, MIN_ANGLE_TARGET,
                     SLIVER_ANGLE)
from .geometry import triangle_area


class MeshQuality:
    """
    Inspector class for a Mesh object.

    Usage:
        inspector = MeshQuality(mesh)
        inspector.analyze()
        inspector.print_report()
        inspector.plot_histograms()
    """
    def __init__(self, mesh):
        self.mesh = mesh
        self.areas = np.zeros(0)
        self.min_angles = np.zeros(0)
        self.aspect_ratios = np.zeros(0)
        self.ids = np.zeros(0, dtype=int)

        self._analyzed = False

    def analyze(self):
        """
        Iterates through all faces and computes metrics.
        """
        areas, min_angles, aspect_ratios, ids = [], [], [], []

        self.mesh.set_indices()
        for face in self.mesh.faces:
            area, min_ang, ar = self._compute_single_face(face)
            ids.append(face.index)
            areas.append(area)
            min_angles.append(min_ang)
            aspect_ratios.append(ar)

        self.areas = np.array(areas)
        self.min_angles = np.array(min_angles)
        self.aspect_ratios = np.array(aspect_ratios)
        self.ids = np.array(ids, dtype=int)

        self._analyzed = True

    @staticmethod
    def _compute_single_face(face):
        """ Helper: Returns (area, min_angle_deg, aspect_ratio) for one face. """
        p1, p2, p3 = face.positions

        a = np.linalg.norm(p2 - p1)
        b = np.linalg.norm(p3 - p2)
        c = np.linalg.norm(p1 - p3)

        area = triangle_area(p1, p2, p3)

        # Aspect Ratio: circumradius over twice the inradius (1.0 = equilateral)
        s = (a + b + c) / 2.0
        if area > 1e-15:
            r_in = area / s
            r_circ = (a * b * c) / (4 * area)
            ar = r_circ / (2 * r_in)
        else:
            ar = 999.0  # Degenerate

        min_ang = float(np.degrees(min(face.angles)))
        return area, min_ang, ar

    def summary(self):
        if not self._analyzed:
            self.analyze()
        if len(self.ids) == 0:
            return {"faces": 0}
        return {
            "faces": len(self.ids),
            "area_min": float(self.areas.min()),
            "area_max": float(self.areas.max()),
            "area_total": float(self.areas.sum()),
            "min_angle": float(self.min_angles.min()),
            "max_aspect_ratio": float(self.aspect_ratios.max()),
        }

    def print_report(self):
        """ Prints a summary to stdout. """
        stats = self.summary()

        print(f"--- Mesh Quality Report ({stats['faces']} Faces) ---")
        if stats["faces"] == 0:
            return

        print("Area:")
        print(f"  Min:   {stats['area_min']:.2e}")
        print(f"  Max:   {stats['area_max']:.2e}")
        print(f"  Total: {stats['area_total']:.4e}")

        min_ang = stats["min_angle"]
        print(f"Min Angle: {min_ang:.2f} deg  ", end="")
        if min_ang < SLIVER_ANGLE: print("[!] WARNING: Slivers Detected")
        elif min_ang < MIN_ANGLE_TARGET: print("[~] CAUTION: Low Quality")
        else: print("[OK] Good")

        max_ar = stats["max_aspect_ratio"]
        print(f"Max Aspect Ratio: {max_ar:.2f}  ", end="")
        if max_ar > MAX_ASPECT_RATIO: print("[!] WARNING: Highly Stretched")
        elif max_ar > ASPECT_RATIO_TARGET: print("[~] CAUTION")
        else: print("[OK]")

    def plot_histograms(self, area_unit=None, show=True):
        """
        Plots one histogram per metric and returns the figure.

        Angle and aspect-ratio panels mark their quality target with a dashed
        line and count the faces on the wrong side of it in the title.
        `area_unit` (e.g. "m") labels the area axis as that unit squared.
        """
        if not self._analyzed: self.analyze()

        area_label = f"Area [{area_unit}²]" if area_unit else "Area"
        panels = [
            (self.min_angles, 'skyblue', "Minimum Angle", "Degrees",
             MIN_ANGLE_TARGET, np.count_nonzero(self.min_angles < MIN_ANGLE_TARGET)),
            (self.aspect_ratios, 'lightgreen', "Aspect Ratio", "Ratio",
             ASPECT_RATIO_TARGET, np.count_nonzero(self.aspect_ratios > ASPECT_RATIO_TARGET)),
            (self.areas, 'salmon', "Face Areas", area_label, None, 0),
        ]

        fig, axes = plt.subplots(1, len(panels), figsize=(15, 4))
        for axis, (data, color, title, xlabel, target, n_bad) in zip(axes, panels):
            axis.set_xlabel(xlabel)
            if target is not None:
                title = f"{title} (target {target:g}, {n_bad} outside)"
                axis.axvline(target, color='red', linestyle='--', label='Target')
            axis.set_title(title)
            if len(data) == 0:
                continue
            axis.hist(data, bins=_bins(data), color=color, edgecolor='black')
            if target is not None:
                axis.legend()

        plt.tight_layout()
        if show:
            plt.show()
        return fig


def _bins(data, count=20):
    # A constant metric would otherwise collapse the bin range to zero width
    lo, hi = float(data.min()), float(data.max())
    if np.isclose(lo, hi):
        pad = max(1e-6, abs(lo) * 0.1)
        lo, hi = lo - pad, hi + pad
    return np.linspace(lo, hi, count + 1)
