# Copyright (c) Goodcatch.
# Licensed under the MIT license.

"""Internal pandas helpers"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional, Sequence

import pandas as pd


def records_to_dataframe(records: Iterable[Dict[str, Any]], columns: Optional[Sequence[str]] = None) -> pd.DataFrame:
    """Build a DataFrame from record dicts (outer union of keys, missing keys are NaN).

    :param records: Records as returned in :attr:`~fxk.core.results.FxkResult.data`.
    :param columns: Optional column order; also used for the empty frame when there are no records.
    """
    rows = list(records)
    if not rows:
        return pd.DataFrame(columns=list(columns) if columns else None)
    df = pd.DataFrame.from_records(rows)
    if columns:
        extra = [c for c in df.columns if c not in columns]
        df = df.reindex(columns=list(columns) + extra)
    return df
