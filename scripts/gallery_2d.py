"""Render the thread profiles and 2-D shapes as signed-distance heatmaps on one page.

Usage::

    python scripts/gallery_2d.py                   # saves gallery_2d.png
    python scripts/gallery_2d.py --out my_file.png # custom output path

Requirements: numpy, matplotlib
"""
from __future__ import annotations

import argparse
import os
import sys

# Ensure the repo root (parent of scripts/) is importable regardless of cwd
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import matplotlib.pyplot as plt
import numpy as np

from helisdf.grid import sample_levelset
from helisdf.sdf2d import Box2D, FingerButton2D, Polygon, Polygon2D, nagon
from helisdf.sdf3d import KnurlProfile
from helisdf.threads import (
    AcmeThread,
    ANSIButtressThread,
    ISOThread,
    PlasticButtressThread,
    ThreadMode,
)

_RES = (384, 384)


# ---------------------------------------------------------------------------
# Shape catalogue  (label, geometry)
# ---------------------------------------------------------------------------

def _make_shapes() -> list[tuple[str, object]]:
    filleted = Polygon()
    filleted.add(-1.0, -1.0).smooth(0.3, 6)
    filleted.add(1.0, -1.0).smooth(0.3, 6)
    filleted.add(1.0, 0.2).smooth(0.6, 8)
    filleted.add(0.0, 1.0)
    filleted.add(-1.0, 0.2).smooth(0.1, 3)

    return [
        ("ISO external",        ISOThread(3.0, 1.0, ThreadMode.EXTERNAL)),
        ("ISO internal",        ISOThread(3.0, 1.0, ThreadMode.INTERNAL)),
        ("Acme",                AcmeThread(3.0, 1.0)),
        ("ANSI buttress",       ANSIButtressThread(3.0, 1.0)),
        ("Plastic buttress",    PlasticButtressThread(3.0, 1.0)),
        ("Knurl profile",       KnurlProfile(3.0, 1.0, 0.3)),
        ("Filleted polygon",    Polygon2D(filleted)),
        ("Hexagon",             Polygon2D(nagon(6, 1.0))),
        ("Rounded box",         Box2D((1.0, 0.6), round=0.3)),
        ("Finger button",       FingerButton2D((10.0, 8.0), 1.0, 20.0)),
    ]


def _extent(geom) -> list[float]:
    """Square window around the bounding box, with a margin."""
    bb = geom.bounding_box()
    c = bb.center()
    half = 0.6 * float(bb.size().max())
    return [c[0] - half, c[0] + half, c[1] - half, c[1] + half]


def render_gallery(shapes: list[tuple[str, object]], out_path: str, ncols: int = 5) -> None:
    nrows = (len(shapes) + ncols - 1) // ncols
    fig, axes = plt.subplots(
        nrows, ncols,
        figsize=(ncols * 3.2, nrows * 3.2),
        facecolor="#111111",
    )
    axes = np.asarray(axes).ravel()

    for ax, (label, geom) in zip(axes, shapes):
        extent = _extent(geom)
        phi = sample_levelset(geom, _RES, [(extent[0], extent[1]), (extent[2], extent[3])])
        ax.set_facecolor("#111111")
        ax.set_xticks([])
        ax.set_yticks([])
        ax.set_title(label, color="white", fontsize=7, pad=3)
        for spine in ax.spines.values():
            spine.set_edgecolor("#444444")

        lim = max(np.nanmax(np.abs(phi)), 1e-6)
        ax.imshow(phi, origin="lower", extent=extent,
                  cmap="seismic", vmin=-lim, vmax=lim, interpolation="bilinear")
        ax.contour(phi, levels=[0.0], colors="white", linewidths=1.0, extent=extent)

    # Hide unused axes
    for ax in axes[len(shapes):]:
        ax.set_visible(False)

    fig.suptitle("helisdf profile gallery", color="white", fontsize=13, y=1.002)
    plt.tight_layout(pad=0.4)
    fig.savefig(out_path, dpi=200, bbox_inches="tight", facecolor=fig.get_facecolor())
    plt.close(fig)
    print(f"Saved: {out_path}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Render the thread profiles to a single PNG gallery.")
    parser.add_argument("--out", default="gallery_2d.png", help="Output PNG path")
    parser.add_argument("--cols", type=int, default=5, help="Number of columns (default 5)")
    args = parser.parse_args()

    render_gallery(_make_shapes(), args.out, ncols=args.cols)


if __name__ == "__main__":
    main()
