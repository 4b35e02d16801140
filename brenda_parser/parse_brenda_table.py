""" parse_brenda_table.py

Bind the parsed triples into a pandas table and provide a few helpers to
query it.

Example:

    df = read_brenda("data/raw/brenda_download.txt")
    km = select_entries(df, ids=["1.1.1.1"], fields=["KM_VALUE"])
"""

import logging
from collections import defaultdict
from typing import Iterable, List, Optional, Tuple

import pandas as pd

from brenda_parser import parse_brenda_flatfile

TRIPLE_COLUMNS = parse_brenda_flatfile.TRIPLE_COLUMNS
TRANSFERRED_DELETED = "TRANSFERRED_DELETED"

EMPTY_COMMENT = " ()"
ID_COMMENT_RE = r"\((.*)\)$"
ID_COMMENT_STRIP_RE = r"\s?\(.*$"


def triples_to_df(triples: List[Tuple[str, str, str]]) -> pd.DataFrame:
    """triples_to_df.

    Args:
        triples (List[Tuple[str, str, str]]): Output of separate_entries

    Returns:
        pd.DataFrame: One row per triple with columns ID, field, description
    """
    columns = parse_brenda_flatfile.triples_to_columns(triples)
    return pd.DataFrame(columns, columns=TRIPLE_COLUMNS)


def clean_ec_numbers(df: pd.DataFrame) -> pd.DataFrame:
    """clean_ec_numbers.

    Transferred and deleted EC numbers carry a comment in their ID line,
    e.g. "6.3.5.8 (transferred to EC 2.6.1.85)". These entries only hold empty
    fields, so they are collapsed into a single TRANSFERRED_DELETED row with
    the comment as description and the bare EC number as ID. Those rows are
    put after the regular rows. Empty " ()" comments are removed.

    Args:
        df (pd.DataFrame): Output of triples_to_df

    Returns:
        pd.DataFrame: Same data with cleaned EC numbers
    """
    df = df.copy()
    df["ID"] = df["ID"].str.replace(EMPTY_COMMENT, "", regex=False)

    has_comment = df["ID"].str.contains("(", regex=False)
    df_standard = df[~has_comment]
    df_nonstd = df[has_comment].drop_duplicates(subset=["ID"]).copy()

    df_nonstd["field"] = TRANSFERRED_DELETED
    df_nonstd["description"] = df_nonstd["ID"].str.extract(ID_COMMENT_RE,
                                                           expand=False)
    df_nonstd["ID"] = df_nonstd["ID"].str.replace(ID_COMMENT_STRIP_RE, "",
                                                  regex=True)

    logging.info(f"Found {len(df_nonstd)} transferred or deleted EC numbers")
    return pd.concat([df_standard, df_nonstd], axis=0).reset_index(drop=True)


def read_brenda(in_file: str, clean: bool = True,
                **parse_kwargs) -> pd.DataFrame:
    """read_brenda.

    Args:
        in_file (str): Name of flat BRENDA file
        clean (bool): If true, run clean_ec_numbers on the table
        parse_kwargs: Passed on to read_brenda_file

    Returns:
        pd.DataFrame: Table with columns ID, field, description
    """
    triples = parse_brenda_flatfile.read_brenda_file(in_file, **parse_kwargs)
    df = triples_to_df(triples)
    if clean:
        df = clean_ec_numbers(df)
    return df


def select_entries(df: pd.DataFrame,
                   ids: Optional[Iterable[str]] = None,
                   fields: Optional[Iterable[str]] = None) -> pd.DataFrame:
    """select_entries.

    Args:
        df (pd.DataFrame): Table from read_brenda
        ids (Optional[Iterable[str]]): EC numbers to keep; all if None
        fields (Optional[Iterable[str]]): Fields to keep; all if None

    Returns:
        pd.DataFrame: Matching rows, in their original order
    """
    mask = pd.Series(True, index=df.index)
    if ids is not None:
        mask &= df["ID"].isin(list(ids))
    if fields is not None:
        mask &= df["field"].isin(list(fields))
    return df[mask].reset_index(drop=True)


def group_entries(df: pd.DataFrame) -> dict:
    """group_entries.

    Nest the table as {ec_num : {field : [description, ...]}}. Repeated
    fields within an entry keep one list item per occurrence.

    Args:
        df (pd.DataFrame): Table from read_brenda

    Returns:
        dict: Entries and fields in order of first appearance
    """
    entries = dict()
    for ec_num, field, desc in df[TRIPLE_COLUMNS].itertuples(index=False):
        if ec_num not in entries:
            entries[ec_num] = defaultdict(lambda: [])
        entries[ec_num][field].append(desc)
    return {k: dict(v) for k, v in entries.items()}
