"""M6x1 bolt shaft from the standard thread database.

Demonstrates: default_thread_database, ISOThread, Screw3D, cell_centers
Output:       examples/screw_example.png

Identity verified:
    Screw(p + lead * ez) == Screw(p)    away from the cut ends
"""
import os, sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import matplotlib.pyplot as plt
import numpy as np

from helisdf.grid import cell_centers
from helisdf.sdf3d import Screw3D
from helisdf.threads import ISOThread, ThreadMode, default_thread_database

_LENGTH = 20.0
_RES    = (200, 400)
_OUT    = os.path.join(os.path.dirname(__file__), "screw_example.png")


def _xz_slice(geom, bounds):
    """Sample *geom* on the y = 0 plane; returns phi of shape (nz, nx)."""
    xz = cell_centers(bounds, _RES)
    p = np.stack([xz[..., 0], np.zeros(xz.shape[:-1]), xz[..., 1]], axis=-1)
    return geom.sdf(p)


def _render_png(phi, extent, out_path, title=""):
    lim = max(np.abs(phi).max(), 1e-6)
    fig, ax = plt.subplots(figsize=(4, 7), facecolor="#111")
    ax.imshow(phi, origin="lower", extent=extent, cmap="seismic",
              vmin=-lim, vmax=lim, interpolation="bilinear")
    ax.contour(phi, levels=[0.0], colors="white", linewidths=0.8, extent=extent)
    ax.set_title(title, color="white", fontsize=10)
    ax.set_xlabel("x", color="white"); ax.set_ylabel("z", color="white")
    ax.tick_params(colors="white")
    plt.savefig(out_path, dpi=150, bbox_inches="tight", facecolor="#111")
    plt.close(fig)
    print(f"  Saved: {out_path}")


def main():
    t = default_thread_database().lookup("M6x1")
    print("=" * 60)
    print(f"SCREW: {t.name}  radius {t.radius}  pitch {t.pitch}  length {_LENGTH}")
    print("=" * 60)

    geom = Screw3D(ISOThread(t.radius, t.pitch, ThreadMode.EXTERNAL), _LENGTH, t.pitch)
    bb = geom.bounding_box()
    print(f"\nBounding box: {bb}")

    # --- mathematical verification ---
    rng = np.random.default_rng(0)
    p = rng.uniform((-4.0, -4.0, -5.0), (4.0, 4.0, 5.0), size=(100_000, 3))
    shifted = p + np.array([0.0, 0.0, geom.lead])
    max_diff = np.abs(geom.sdf(shifted) - geom.sdf(p)).max()
    print(f"max |Screw(p + lead) - Screw(p)| = {max_diff:.2e}  (should be ~0)")

    # --- spot checks ---
    crest = geom.evaluate((t.radius, 0.0, 0.0))
    core = geom.evaluate((2.0, 0.0, 0.0))
    print(f"\nAt crest (r={t.radius}): {crest:.4f}  (expected 0)")
    print(f"In core  (r=2.0): {core:.4f}  (expected < 0)")

    ok = max_diff < 1e-9 and abs(crest) < 1e-9 and core < 0
    print("\n" + ("PASSED" if ok else "FAILED"))

    bounds = [(-4.0, 4.0), (-0.5 * _LENGTH - 1.0, 0.5 * _LENGTH + 1.0)]
    phi = _xz_slice(geom, bounds)
    _render_png(phi, [*bounds[0], *bounds[1]], _OUT, f"{t.name}: y = 0 section")


if __name__ == "__main__":
    main()
