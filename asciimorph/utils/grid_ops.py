from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

BLANK = " "


def clamp01(x: np.ndarray | float) -> np.ndarray | float:
    return np.clip(x, 0.0, 1.0)


def clamp_size(width, height) -> Tuple[int, int]:
    return max(1, int(width)), max(1, int(height))


def blank_grid(width: int, height: int) -> List[List[str]]:
    return [[BLANK] * width for _ in range(height)]


def grid_to_frame(grid: Sequence[Sequence[str]]) -> str:
    return "\n".join("".join(row) for row in grid)


def frame_rows(frame: str) -> List[str]:
    return frame.split("\n")


def cell_coords(width: int, height: int) -> Tuple[np.ndarray, np.ndarray]:
    """Integer (yy, xx) coordinate planes for a width x height grid."""
    yy, xx = np.mgrid[0:height, 0:width].astype(np.float64)
    return yy, xx


def values_to_frame(values: np.ndarray, mask: np.ndarray, ramp: Sequence[str]) -> str:
    """Map intensities to ramp glyphs where ``mask`` is set, blank elsewhere.

    Uses the ``floor(v * (n - 1))`` indexing the palette interpolation uses.
    """
    n = len(ramp) - 1
    v = np.nan_to_num(np.asarray(values, dtype=np.float64), nan=0.0)
    indices = np.clip(np.floor(clamp01(v) * n).astype(int), 0, n)
    rows, cols = v.shape
    lines = []
    for row in range(rows):
        lines.append(
            "".join(ramp[indices[row, col]] if mask[row, col] else BLANK for col in range(cols))
        )
    return "\n".join(lines)


def indices_to_frame(indices: np.ndarray, ramp: Sequence[str]) -> str:
    n = len(ramp) - 1
    idx = np.clip(np.asarray(indices, dtype=int), 0, n)
    return "\n".join("".join(ramp[i] for i in row) for row in idx)
