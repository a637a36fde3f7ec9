"""Knurled thumb-screw head.

Demonstrates: KnurledHead3D, knurl_starts, sample_levelset, benchmark_sdf
Output:       examples/knurl_example.png

The knurl is the intersection of a left and a right hand multi-start
screw, so with an even start count it is symmetric about the origin:
    Knurl(-p) == Knurl(p)
"""
import logging
import os, sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import matplotlib.pyplot as plt
import numpy as np
from mpl_toolkits.mplot3d.art3d import Poly3DCollection
from skimage import measure

from helisdf.benchmark import benchmark_sdf
from helisdf.grid import sample_levelset
from helisdf.sdf3d import KNURL_ANGLE, Knurl3D, KnurledHead3D, knurl_starts

_RES = (96, 96, 64)
_OUT = os.path.join(os.path.dirname(__file__), "knurl_example.png")


def _render_png(phi, bb, out_path, title=""):
    if phi.min() >= 0 or phi.max() <= 0:
        print("  No zero crossing, cannot render isosurface.")
        return

    spacing = tuple(bb.size()[::-1] / np.array(_RES[::-1]))
    verts, faces, _, _ = measure.marching_cubes(phi, level=0, spacing=spacing)
    verts = verts[:, ::-1] + bb.min + 0.5 * bb.size() / np.array(_RES)

    tris  = verts[faces]
    norms = np.cross(tris[:, 1] - tris[:, 0], tris[:, 2] - tris[:, 0])
    nlen  = np.linalg.norm(norms, axis=1, keepdims=True)
    norms = norms / np.where(nlen > 0, nlen, 1.0)
    shade = 0.3 + 0.7 * np.clip(norms @ np.array([0.577, 0.577, 0.577]), 0, 1)
    fc    = np.column_stack([shade * 0.8, shade * 0.8, shade * 0.85, np.ones_like(shade)])

    fig = plt.figure(figsize=(5, 5), facecolor="#111")
    ax  = fig.add_subplot(111, projection="3d")
    ax.set_facecolor("#111"); ax.set_axis_off(); ax.set_box_aspect([1, 1, 1])
    ax.add_collection3d(Poly3DCollection(tris, facecolors=fc, edgecolors="none"))
    half = 0.5 * float(bb.size().max())
    c = bb.center()
    ax.set_xlim(c[0] - half, c[0] + half)
    ax.set_ylim(c[1] - half, c[1] + half)
    ax.set_zlim(c[2] - half, c[2] + half)
    ax.set_title(title, color="white", fontsize=10)
    plt.savefig(out_path, dpi=150, bbox_inches="tight", facecolor="#111")
    plt.close()
    print(f"  Saved: {out_path}")


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    radius, height, pitch = 8.0, 6.0, 1.0
    print("=" * 60)
    print(f"KNURLED HEAD: radius {radius}  height {height}  pitch {pitch}")
    print(f"  starts at 45 degrees: {knurl_starts(radius, pitch, KNURL_ANGLE)}")
    print("=" * 60)

    # --- mathematical verification ---
    knurl = Knurl3D(4.0, 1.0, 1.0, 0.3, KNURL_ANGLE)   # 6 starts
    rng = np.random.default_rng(0)
    p = rng.uniform(-1.5, 1.5, size=(100_000, 3))
    max_diff = np.abs(knurl.sdf(p) - knurl.sdf(-p)).max()
    print(f"\nmax |Knurl(-p) - Knurl(p)| = {max_diff:.2e}  (should be ~0)")

    head = KnurledHead3D(radius, height, pitch)
    benchmark_sdf("knurled head", head, n_evals=200_000)

    bb = head.bounding_box().enlarge(0.5)
    phi = sample_levelset(head, _RES, list(zip(bb.min, bb.max)))
    print(f"SDF range : [{phi.min():.4f}, {phi.max():.4f}]")

    ok = max_diff < 1e-9 and phi.min() < 0 and phi.max() > 0
    print("\n" + ("PASSED" if ok else "FAILED"))

    _render_png(phi, bb, _OUT, "KnurledHead3D")


if __name__ == "__main__":
    main()
