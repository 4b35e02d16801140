"""Module to hold statistics functions for post processing of parsed data

"""

import pandas as pd
import numpy as np

from brenda_parser import parse_brenda_table


def get_triple_stats(df: pd.DataFrame) -> dict:
    """get_triple_stats.

    Args:
        df (pd.DataFrame): Table with columns ID, field, description

    Returns:
        dict: Summary counts of the parsed table
    """

    stats_summary = dict()
    stats_summary["Total triples"] = len(df)
    stats_summary["Total unique entries"] = int(df["ID"].nunique())
    stats_summary["Total unique fields"] = int(df["field"].nunique())

    # Entries with no rows at all would give a nan mean
    fields_per_entry = df.groupby("ID", sort=False)["field"].nunique()
    stats_summary["Avg fields per entry"] = (
        float(np.mean(fields_per_entry.values)) if len(fields_per_entry) else 0.0)

    is_removed = df["field"] == parse_brenda_table.TRANSFERRED_DELETED
    stats_summary["Transferred or deleted entries"] = int(
        df[is_removed]["ID"].nunique())

    empty_desc = df["description"].fillna("").astype(str).str.strip() == ""
    stats_summary["Empty descriptions"] = int(empty_desc.sum())

    stats_summary["Rows per field"] = {
        k: int(v) for k, v in df["field"].value_counts().items()
    }
    return stats_summary
