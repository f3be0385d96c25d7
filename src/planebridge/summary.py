"""Tabular plane listings for inspection and export."""

from __future__ import annotations

from typing import List

import numpy as np
import pandas as pd

from planebridge.adapter import PlaneAccessAdapter
from planebridge.shape_math import plane_index_table

__all__ = ["planes_to_dataframe"]


def planes_to_dataframe(adapter: PlaneAccessAdapter) -> pd.DataFrame:
    """List every plane with its raster index and extra-axis coordinate.

    Columns are ``plane``, ``raster_index`` and one lowercase column per
    extra axis role (e.g. ``c``, ``z``, ``t``).
    """
    shape = adapter.shape
    role_cols: List[str] = [role.value.lower() for role in shape.extra_roles]
    cols = ["plane", "raster_index", *role_cols]
    n_planes = min(adapter.plane_count(), int(np.prod(shape.extra_lengths, dtype=np.int64)))
    if n_planes <= 0:
        return pd.DataFrame(columns=cols)

    table = plane_index_table(shape.extra_lengths)[:n_planes]
    multipliers = np.cumprod((1,) + tuple(shape.extra_lengths[:-1]), dtype=np.int64)[: table.shape[1]]
    raster = table @ multipliers if table.shape[1] else np.zeros(n_planes, dtype=np.int64)
    df = pd.DataFrame(table, columns=role_cols)
    df.insert(0, "raster_index", raster.astype(np.int64))
    df.insert(0, "plane", np.arange(n_planes, dtype=np.int64))
    return df
