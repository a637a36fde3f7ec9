"""Render the helisdf parts catalogue as isosurfaces on one page.

Each part is sampled over its own bounding box, the SDF=0 surface is
extracted with marching cubes (scikit-image) and drawn with matplotlib's
3-D axes.

Usage::

    python scripts/gallery_3d.py                   # saves gallery_3d.png
    python scripts/gallery_3d.py --out my_file.png
    python scripts/gallery_3d.py --res 48          # faster, lower quality

Requirements: numpy, matplotlib, scikit-image
    pip install helisdf[plot]
"""
from __future__ import annotations

import argparse
import logging
import os
import sys

# Ensure the repo root (parent of scripts/) is importable regardless of cwd
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import matplotlib.pyplot as plt
import numpy as np
from mpl_toolkits.mplot3d.art3d import Poly3DCollection
from skimage import measure

from helisdf.grid import sample_levelset
from helisdf.sdf2d import Circle2D
from helisdf.sdf3d import (
    KNURL_ANGLE,
    Box3D,
    Cone3D,
    CounterBoredHole3D,
    ChamferedHole3D,
    Cylinder3D,
    HexHead3D,
    Knurl3D,
    KnurledHead3D,
    Revolve3D,
    Screw3D,
    StandoffParams,
    Standoff3D,
    Washer3D,
)
from helisdf.threads import (
    AcmeThread,
    ANSIButtressThread,
    ISOThread,
    ThreadMode,
    default_thread_database,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Part catalogue  (label, geometry)
# ---------------------------------------------------------------------------

def _bolt(name: str, length: float):
    t = default_thread_database().lookup(name)
    shaft = Screw3D(ISOThread(t.radius, t.pitch, ThreadMode.EXTERNAL), length, t.pitch)
    head_h = t.hex_height()
    head = HexHead3D(t.hex_radius(), head_h, "b").translate(0.0, 0.0, 0.5 * (length + head_h))
    return shaft.union(head)


def _nut(name: str):
    t = default_thread_database().lookup(name)
    h = t.hex_height()
    nut = HexHead3D(t.hex_radius(), h, "tb")
    thread = Screw3D(ISOThread(t.radius, t.pitch, ThreadMode.INTERNAL), h, t.pitch)
    return nut.subtract(thread)


def _make_parts() -> list[tuple[str, object]]:
    return [
        # --- primitives ---
        ("Box3D", Box3D((1.0, 0.7, 0.5), round=0.15)),
        ("Cylinder3D", Cylinder3D(2.0, 0.8, round=0.2)),
        ("Cone3D", Cone3D(2.0, 1.0, 0.4, round=0.1)),
        ("Revolve3D", Revolve3D(Circle2D(0.3).translate(1.0, 0.0))),
        # --- threads ---
        ("ISO M10x1.5", Screw3D(ISOThread(5.0, 1.5), 12.0, 1.5)),
        ("Acme 3 start", Screw3D(AcmeThread(5.0, 2.0), 12.0, 2.0, 3)),
        ("ANSI buttress", Screw3D(ANSIButtressThread(5.0, 1.5), 12.0, 1.5)),
        ("M8 bolt", _bolt("M8x1.25", 16.0)),
        ("M10 nut", _nut("M10x1.5")),
        # --- parts ---
        ("Washer3D", Washer3D(1.0, 3.0, 6.0)),
        ("HexHead3D", HexHead3D(5.0, 4.0, "tb")),
        ("CounterBoredHole3D", CounterBoredHole3D(8.0, 1.5, 3.0, 2.0)),
        ("ChamferedHole3D", ChamferedHole3D(8.0, 1.5, 1.5)),
        ("Knurl3D", Knurl3D(8.0, 4.0, 1.0, 0.3, KNURL_ANGLE)),
        ("KnurledHead3D", KnurledHead3D(6.0, 5.0, 1.0)),
        ("Standoff3D", Standoff3D(StandoffParams(
            pillar_height=10.0, pillar_radius=3.0, hole_depth=6.0, hole_radius=1.2,
            number_webs=4, web_height=5.0, web_radius=6.0, web_width=1.5,
        ))),
    ]


# ---------------------------------------------------------------------------
# Evaluation + marching cubes
# ---------------------------------------------------------------------------

def _eval_surface(geom, res: int):
    """Return (verts, faces, box) of the zero isosurface, or None if there is none."""
    bb = geom.bounding_box().enlarge(0.05 * float(geom.bounding_box().size().max()))
    bounds = list(zip(bb.min, bb.max))
    vals = sample_levelset(geom, (res, res, res), bounds)
    # marching cubes needs at least one pos and neg value
    if vals.max() <= 0 or vals.min() >= 0:
        return None
    spacing = tuple(bb.size()[::-1] / res)
    verts, faces, _, _ = measure.marching_cubes(vals, level=0.0, spacing=spacing)
    # volume axes are (z, y, x); map back to world (x, y, z)
    verts = verts[:, ::-1] + bb.min + 0.5 * bb.size() / res
    return verts, faces, bb


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def render_gallery(parts, out_path: str, ncols: int = 4, res: int = 64) -> None:
    nrows = (len(parts) + ncols - 1) // ncols
    fig = plt.figure(figsize=(ncols * 3.0, nrows * 3.0), facecolor="#111111")

    _FACE_COLOR = np.array([0.75, 0.78, 0.82])   # steel
    _VIEW_ELEV = 25
    _VIEW_AZIM = 35

    for idx, (label, geom) in enumerate(parts):
        ax = fig.add_subplot(nrows, ncols, idx + 1, projection="3d")
        ax.set_facecolor("#111111")
        ax.set_axis_off()
        ax.set_title(label, color="white", fontsize=7, pad=1)

        result = _eval_surface(geom, res)
        if result is None:
            logger.warning("%s has no surface at resolution %d", label, res)
            ax.text2D(0.5, 0.5, "no surface", ha="center", va="center",
                      color="gray", transform=ax.transAxes, fontsize=7)
            continue

        verts, faces, bb = result
        # Compute face normals for diffuse shading
        tris = verts[faces]
        norms = np.cross(tris[:, 1] - tris[:, 0], tris[:, 2] - tris[:, 0])
        nlen = np.linalg.norm(norms, axis=1, keepdims=True)
        norms = norms / np.where(nlen > 0, nlen, 1.0)
        light = np.array([0.577, 0.577, 0.577])
        shade = 0.3 + 0.7 * np.clip(norms @ light, 0.0, 1.0)
        mesh = Poly3DCollection(tris, facecolors=np.outer(shade, _FACE_COLOR),
                                edgecolors="none", alpha=1.0)
        ax.add_collection3d(mesh)

        c = bb.center()
        half = 0.5 * float(bb.size().max())
        ax.set_xlim(c[0] - half, c[0] + half)
        ax.set_ylim(c[1] - half, c[1] + half)
        ax.set_zlim(c[2] - half, c[2] + half)
        ax.set_box_aspect([1, 1, 1])
        ax.view_init(elev=_VIEW_ELEV, azim=_VIEW_AZIM)

    for idx in range(len(parts), nrows * ncols):
        ax = fig.add_subplot(nrows, ncols, idx + 1, projection="3d")
        ax.set_visible(False)

    fig.suptitle("helisdf parts gallery", color="white", fontsize=13, y=1.002)
    plt.tight_layout(pad=0.3)
    fig.savefig(out_path, dpi=180, bbox_inches="tight", facecolor=fig.get_facecolor())
    plt.close(fig)
    print(f"Saved: {out_path}")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Render the helisdf threaded parts to a single PNG gallery."
    )
    parser.add_argument("--out", default="gallery_3d.png", help="Output PNG path")
    parser.add_argument("--cols", type=int, default=4, help="Number of columns (default 4)")
    parser.add_argument("--res", type=int, default=64,
                        help="Grid resolution per axis (default 64, use 128+ to resolve fine threads)")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    render_gallery(_make_parts(), args.out, ncols=args.cols, res=args.res)


if __name__ == "__main__":
    main()
