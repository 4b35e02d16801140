""" Run analysis of number of fields filled per EC entry

Currently:
- Counting number of distinct fields per entry and the fraction of the
  database that falls in each range
- Listing the most common fields


Usage:
    python analyze_entries.py --parsed-data results/out_brenda_triples.tsv

"""

import argparse
import pandas as pd
import numpy as np

def get_args(argv=None):
    parser = argparse.ArgumentParser()

    parser.add_argument("--parsed-data", action="store",
                        default="results/out_brenda_triples.tsv",
                        help="Name of triples output file from parse")
    parser.add_argument("--top-fields", action="store", type=int,
                        default=10,
                        help="Number of most common fields to report")

    return parser.parse_args(argv)

def count_fields(data : pd.DataFrame) -> dict:
    """ count_fields.

    Args:
        data (pd.DataFrame): Triples table with ID and field columns

    Returns:
        dict: Maps a range name to the fraction of entries in that range
    """
    fields_per_ec = data.groupby("ID")["field"].nunique()

    # Count distribution
    counts = fields_per_ec.values.astype(int)
    x = np.bincount(counts)
    upper_bound = len(x)

    # Ranges to compute
    check_names = ["1-5", "6-10", "11-20", ">20"]
    check_ranges = [(1, 5), (6, 10), (11, 20), (21, upper_bound)]

    fractions = dict()
    # No entries, every range is empty
    if x.sum() == 0:
        return {check_name: 0.0 for check_name in check_names}

    for check_name,  (check_start, check_end) in zip(check_names,
                                                     check_ranges):
        out_val = x[check_start: check_end +1].sum() / x.sum()
        fractions[check_name] = float(out_val)
        print(f"{check_name} Fields: {out_val}")
    return fractions

def top_fields(data : pd.DataFrame, num : int = 10) -> pd.Series:
    """ Number of entries holding each field, most common first"""
    entries_per_field = (data
                         .drop_duplicates(subset=["ID", "field"])
                         .groupby("field")
                         .size()
                         .sort_values(ascending=False))
    top = entries_per_field.head(num)
    for field, count in top.items():
        print(f"{field}: {count}")
    return top


def main(args : argparse.Namespace):
    """ Complete analysis"""

    data = pd.read_csv(args.parsed_data, delimiter="\t", dtype=str,
                       keep_default_na=False)

    print(f"Num entries: {data['ID'].nunique()}")
    count_fields(data)
    top_fields(data, args.top_fields)

if __name__=="__main__":
    args = get_args()
    main(args)
