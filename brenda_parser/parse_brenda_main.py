""" parse_brenda_main.py

    Helper script to parse the brenda file

    Typical usage example:

    Call to run:

    python parse_brenda.py --brenda-flat-file data/raw/brenda_download.txt --out-prefix results/out

    Sample call while debugging:

    python -m pdb parse_brenda.py --brenda-flat-file data/raw/brenda_download_short.txt --debug --out-prefix results/brenda_parsed --load-prev
"""

import os
import sys
import argparse
import logging
import multiprocessing
import time
from typing import List, Optional

import pandas as pd

from brenda_parser import utils
from brenda_parser import parse_brenda_flatfile
from brenda_parser import parse_brenda_table
from brenda_parser import parse_brenda_stats


def get_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Get arguments"""
    options = argparse.ArgumentParser()

    options.add_argument('--brenda-flat-file',
                         action="store",
                         nargs="+",
                         help="""BRENDA flat file(s) as downloaded from their
                         website""",
                         required=True)
    options.add_argument('--out-prefix',
                         action="store",
                         help="""BRENDA parsed output prefix; will store the
                         triples table, entries and stats here""",
                         required=True)
    options.add_argument('--debug',
                         action="store_true",
                         default=False,
                         help="If true, log at debug level")
    options.add_argument('--load-prev',
                         action="store_true",
                         default=False,
                         help="If true, try to load previous runs of program")
    options.add_argument('--no-clean',
                         action="store_true",
                         default=False,
                         help="""If this flag is set, do not collapse
                         transferred and deleted EC numbers""")
    options.add_argument('--extra-fields',
                         action="store",
                         default=None,
                         help="""Json list of field names to recognize on top
                         of the default brenda fields""")
    options.add_argument('--drop-dangling-continuation',
                         action="store_true",
                         default=False,
                         help="""If true, drop a wrapped line at the end of the
                         file instead of keeping it as its own line""")
    options.add_argument('--strict-terminator',
                         action="store_true",
                         default=False,
                         help="""If true, a /// on the last line of the file
                         is a format error""")
    options.add_argument('--encoding',
                         action="store",
                         default="utf-8",
                         help="Encoding of the flat file(s)")
    options.add_argument('--multiprocess-num',
                         action="store",
                         type=int,
                         default=1,
                         help="If greater than 1, parse files in parallel")
    args = options.parse_args(argv)
    return args

def setup_logs(args : argparse.Namespace, out_prefix : str):
    """ Setup the logger and create the output folder
    Args:
        args (argparse.Namespace): Arguments parsed
        out_prefix (str): Name of output prefix

    """
    # Make outfile if it doesn't exist
    utils.make_dir(out_prefix)

    level = logging.INFO if not args.debug else logging.DEBUG
    logging.basicConfig(level=level,
                        format='%(asctime)s %(levelname)s: %(message)s',
                        handlers=[logging.StreamHandler(sys.stdout),
                                  logging.FileHandler(f'{out_prefix}_{int(time.time())}.log')]
                        )

    logging.info(f"Args: {str(args)}")


def parse_one_file(in_file: str, parse_kwargs: dict) -> pd.DataFrame:
    """ Parse a single flat file into an uncleaned triples table"""
    logging.info(f"Parsing {in_file}")
    triples = parse_brenda_flatfile.read_brenda_file(in_file, **parse_kwargs)
    logging.info(f"Found {len(triples)} fields in {in_file}")
    return parse_brenda_table.triples_to_df(triples)


def parse_flat_files(triples_out_file: str, brenda_flat_files: List[str],
                     load_prev: bool, parse_kwargs: dict,
                     multiprocess_num: int = 1) -> pd.DataFrame:
    """ parse_flat_files.

    Parse the brenda flat files into a single table. If we're loading previous
    to save time, load it.

    Args:
        triples_out_file (str): Name of outfile
        brenda_flat_files (List[str]): Names of brenda flat files
        load_prev (bool) : If true, try to load from a previous parse
        parse_kwargs (dict): Passed on to read_brenda_file
        multiprocess_num (int): If greater than 1, parse files in a pool

    Return:
        pd.DataFrame: Uncleaned table with columns ID, field, description
    """

    if load_prev and os.path.exists(triples_out_file):
        logging.info(f"Loading previous parse from {triples_out_file}")
        return pd.read_csv(triples_out_file, sep="\t", dtype=str,
                           keep_default_na=False)

    if multiprocess_num > 1 and len(brenda_flat_files) > 1:
        # Each parse is independent; get() keeps the input file order
        with multiprocessing.Pool(processes=multiprocess_num) as pool:
            results = [pool.apply_async(parse_one_file,
                                        args=(in_file, parse_kwargs))
                       for in_file in brenda_flat_files]
            dfs = [result.get() for result in results]
    else:
        # Progress bar only makes sense for serial parsing
        serial_kwargs = dict(parse_kwargs, progress=True)
        dfs = [parse_one_file(in_file, serial_kwargs)
               for in_file in brenda_flat_files]

    df = pd.concat(dfs, axis=0).reset_index(drop=True)
    df.to_csv(triples_out_file, sep="\t", index=False)
    return df


def main(argv: Optional[List[str]] = None):
    """ Main method to run this parse """
    args = get_args(argv)
    setup_logs(args, args.out_prefix)

    fields = parse_brenda_flatfile.load_field_vocab(args.extra_fields)
    parse_kwargs = {
        "fields": fields,
        "keep_dangling": not args.drop_dangling_continuation,
        "allow_trailing_boundary": not args.strict_terminator,
        "encoding": args.encoding,
    }

    logging.info("Starting to parse flat file")
    triples_file = f"{args.out_prefix}_brenda_triples.tsv"
    try:
        df = parse_flat_files(triples_file, args.brenda_flat_file,
                              args.load_prev, parse_kwargs,
                              args.multiprocess_num)
    except (IOError, parse_brenda_flatfile.FormatError) as e:
        logging.error(f"Failed to parse flat file: {e}")
        raise
    logging.info("Done parsing flat file")

    if not args.no_clean:
        logging.info("Starting to clean EC numbers")
        df = parse_brenda_table.clean_ec_numbers(df)
        logging.info("Done cleaning EC numbers")

    logging.info("Beginning to export all files")
    entries_file = f"{args.out_prefix}_entries.json"
    utils.dump_json(parse_brenda_table.group_entries(df), entries_file,
                    pretty_print=False)

    # Output statistics about all the data collected
    summary_file = f"{args.out_prefix}_stats.json"
    stats_summary = parse_brenda_stats.get_triple_stats(df)
    utils.dump_json(stats_summary, summary_file)
    logging.info(f"Parsed {stats_summary['Total unique entries']} entries "
                 f"into {stats_summary['Total triples']} rows")
