"""Module containing some helper modules
"""

import os
import json
from typing import Any


def dump_json(obj: Any,
              outfile: str = "temp_dir/temp.json",
              pretty_print : bool = True) -> None:
    """dump_json.

    Helper fn to write an object as json

    Args:
        obj (Any): json serializable object
        outfile (str): outfile
        pretty_print (bool): If true, use indents

    Returns:
        None
    """
    with open(outfile, "w") as fp:
        if pretty_print:
            json.dump(obj, fp, indent=2)
        else:
            json.dump(obj, fp)

def load_json(infile: str = "temp_dir/temp.json") -> Any:
    """load_json.

    Args:
        infile (str): infile, the name of input object

    Returns:
        Any: the object loaded from the json file

    """

    with open(infile, "r") as fp:
        return json.load(fp)

def make_dir(filename: str) -> None:
    """make_dir.

    Makes the directory that should contain this file

    Args:
        filename (str): filename

    Returns:
        None
    """
    # Make outdir if it doesn't exist
    out_folder = os.path.dirname(filename)
    if out_folder:
        os.makedirs(out_folder, exist_ok=True)
