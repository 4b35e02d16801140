""" parse_brenda_flatfile.py

This script stores functions necessary to parse the brenda flatfile into a flat
list of (id, field, description) triples. Parsing happens in two passes: the
file is first reduced to clean logical lines, then the lines are walked and cut
into entries at the /// boundaries.

read_brenda_file is the main function meant to be exposed.
"""

import logging
from typing import Iterable, List, Optional, Tuple

from tqdm import tqdm

from brenda_parser import utils

COMMENT_CHAR = "*"
ENTRY_BOUNDARY = "///"
ID_PREFIX = "ID"
ID_PREFIX_LEN = 3  # "ID\t"

# Every field header used by the brenda text release
BRENDA_FIELDS = [
    "ACTIVATING_COMPOUND",
    "APPLICATION",
    "CLONED",
    "COFACTOR",
    "CRYSTALLIZATION",
    "ENGINEERING",
    "EXPRESSION",
    "GENERAL_INFORMATION",
    "GENERAL_STABILITY",
    "IC50_VALUE",
    "INHIBITORS",
    "KCAT_KM_VALUE",
    "KI_VALUE",
    "KM_VALUE",
    "LOCALIZATION",
    "METALS_IONS",
    "MOLECULAR_WEIGHT",
    "NATURAL_SUBSTRATE_PRODUCT",
    "ORGANIC_SOLVENT_STABILITY",
    "OXIDATION_STABILITY",
    "PH_OPTIMUM",
    "PH_RANGE",
    "PH_STABILITY",
    "PI_VALUE",
    "POSTTRANSLATIONAL_MODIFICATION",
    "PROTEIN",
    "PURIFICATION",
    "REACTION",
    "REACTION_TYPE",
    "RECOMMENDED_NAME",
    "REFERENCE",
    "RENATURED",
    "SOURCE_TISSUE",
    "SPECIFIC_ACTIVITY",
    "STORAGE_STABILITY",
    "SUBSTRATE_PRODUCT",
    "SUBUNITS",
    "SYNONYMS",
    "SYSTEMATIC_NAME",
    "TEMPERATURE_OPTIMUM",
    "TEMPERATURE_RANGE",
    "TEMPERATURE_STABILITY",
    "TURNOVER_NUMBER",
]

TRIPLE_COLUMNS = ["ID", "field", "description"]


class FormatError(ValueError):
    """Raised when the line sequence does not have the shape of a brenda file"""

    def __init__(self, message: str, line_index: int):
        super().__init__(f"{message} (line index {line_index})")
        self.message = message
        self.line_index = line_index

    def __reduce__(self):
        # Rebuild from both args when sent back from a worker process
        return (self.__class__, (self.message, self.line_index))


def load_field_vocab(extra_fields_file: Optional[str] = None) -> List[str]:
    """load_field_vocab.

    Args:
        extra_fields_file (str): Optional json file holding a list of extra
            field names to recognize on top of BRENDA_FIELDS

    Returns:
        List[str]: Field vocabulary, default fields first
    """
    vocab = list(BRENDA_FIELDS)
    if extra_fields_file is None:
        return vocab

    extra_fields = utils.load_json(extra_fields_file)
    if not isinstance(extra_fields, list) or not all(
            isinstance(i, str) for i in extra_fields):
        raise ValueError(
            f"Expected a json list of field names in {extra_fields_file}")

    for field in extra_fields:
        if field not in vocab:
            vocab.append(field)

    logging.info(f"Loaded {len(vocab) - len(BRENDA_FIELDS)} extra fields "
                 f"from {extra_fields_file}")
    return vocab


def read_brenda_lines(in_file: str,
                      keep_dangling: bool = True,
                      encoding: str = "utf-8") -> List[str]:
    """read_brenda_lines.

    Load the flat file and return its logical lines. Comment lines (starting
    with *) and empty lines are removed. A line ending in a carriage return was
    wrapped by the export, so the carriage return is removed and the next
    physical line is glued onto it.

    Args:
        in_file (str): Name of flat BRENDA file
        keep_dangling (bool): If true, a wrapped line at the very end of the
            file with nothing to glue onto is kept as its own line. If false
            it is dropped.
        encoding (str): Encoding of the flat file

    Returns:
        List[str]: Logical lines in file order
    """
    try:
        # newline="" keeps the carriage returns around for the repair below
        with open(in_file, "r", encoding=encoding, newline="") as fp:
            content = fp.read()
    except UnicodeDecodeError as e:
        raise IOError(f"Cannot read file: {in_file} ({e.reason})") from e
    except OSError as e:
        raise IOError(f"Cannot open file: {in_file}") from e

    raw_lines = content.split("\n")
    # Final newline does not start a new line
    if raw_lines and raw_lines[-1] == "":
        raw_lines.pop()

    lines = []
    pending = None
    for raw_line in raw_lines:
        if pending is None:
            if not raw_line or raw_line[0] == COMMENT_CHAR:
                continue
            line = raw_line
        else:
            # Continuation of a wrapped line, taken as is
            line = pending + raw_line
            pending = None

        if line.endswith("\r"):
            pending = line[:-1]
            continue

        if line:
            lines.append(line)

    if pending:
        if keep_dangling:
            lines.append(pending)
        else:
            logging.warning(f"Dropping wrapped line at end of {in_file}: "
                            f"{pending!r}")

    logging.debug(f"Read {len(lines)} lines from {in_file}")
    return lines


def _entry_id(line: str, line_index: int) -> str:
    """ Strip the ID prefix off an entry header line"""
    if not line.startswith(ID_PREFIX):
        raise FormatError(f"Expected an ID line, found {line!r}", line_index)
    return line[ID_PREFIX_LEN:]


def separate_entries(lines: List[str],
                     fields: Iterable[str] = BRENDA_FIELDS,
                     allow_trailing_boundary: bool = True,
                     progress: bool = False) -> List[Tuple[str, str, str]]:
    """separate_entries.

    Walk the logical lines and cut them into one triple per field occurrence.
    Each entry looks like:

        ID	1.1.1.1
        PROTEIN
        PR	#1# Gallus gallus   (#1# SULT1C1 <2>) <2>
        ...
        REFERENCE
        RF	<1> Smith, J. ...
        ///

    The line after a /// boundary is the next ID line and the line after that
    its first field header. Lines in the field vocabulary open a new field,
    everything else is appended to the text of the current field.

    Args:
        lines (List[str]): Logical lines from read_brenda_lines
        fields (Iterable[str]): Field headers to recognize
        allow_trailing_boundary (bool): If true, a /// on the last line simply
            ends the file. If false, it is a FormatError.
        progress (bool): If true, show a progress bar

    Returns:
        List[Tuple[str, str, str]]: (id, field, description) triples in file
            order
    """
    num_lines = len(lines)
    if num_lines < 2:
        raise FormatError(
            f"Need an ID line and a field line, found {num_lines} line(s)",
            num_lines)

    field_set = frozenset(fields)
    triples = []

    cur_id = _entry_id(lines[0], 0)
    if lines[1] == ENTRY_BOUNDARY:
        raise FormatError("Entry has an ID line but no field", 1)
    cur_field = lines[1]
    cur_text = ""
    entry_open = True

    with tqdm(total=num_lines, disable=not progress) as pbar:
        pbar.update(2)

        i = 2
        while i < num_lines:
            line = lines[i]
            if line == ENTRY_BOUNDARY:
                triples.append((cur_id, cur_field, cur_text))

                # Last line of the file
                if i + 1 == num_lines:
                    if not allow_trailing_boundary:
                        raise FormatError(
                            "Entry boundary with no following entry", i)
                    entry_open = False
                    pbar.update(1)
                    break
                if i + 2 == num_lines or lines[i + 2] == ENTRY_BOUNDARY:
                    raise FormatError("Entry has an ID line but no field",
                                      i + 1)

                cur_id = _entry_id(lines[i + 1], i + 1)
                cur_field = lines[i + 2]
                cur_text = ""
                i += 3
                pbar.update(3)
                continue

            if line in field_set:
                triples.append((cur_id, cur_field, cur_text))
                cur_field = line
                cur_text = ""
            else:
                cur_text += line + "\n"

            i += 1
            pbar.update(1)

    # Flush last field of the last entry
    if entry_open:
        triples.append((cur_id, cur_field, cur_text))

    logging.debug(f"Separated {len(triples)} fields from {num_lines} lines")
    return triples


def triples_to_columns(triples: List[Tuple[str, str, str]]) -> dict:
    """triples_to_columns.

    Args:
        triples (List[Tuple[str, str, str]]): triples

    Returns:
        dict: Maps each of TRIPLE_COLUMNS to an equal length list
    """
    columns = {col: [] for col in TRIPLE_COLUMNS}
    for triple in triples:
        for col, val in zip(TRIPLE_COLUMNS, triple):
            columns[col].append(val)
    return columns


def read_brenda_file(in_file: str,
                     fields: Optional[Iterable[str]] = None,
                     keep_dangling: bool = True,
                     allow_trailing_boundary: bool = True,
                     encoding: str = "utf-8",
                     progress: bool = False) -> List[Tuple[str, str, str]]:
    """read_brenda_file.

    Args:
        in_file (str): Name of flat BRENDA file
        fields (Optional[Iterable[str]]): Field vocabulary, defaults to
            BRENDA_FIELDS
        keep_dangling (bool): Passed to read_brenda_lines
        allow_trailing_boundary (bool): Passed to separate_entries
        encoding (str): Encoding of the flat file
        progress (bool): If true, show a progress bar

    Returns:
        List[Tuple[str, str, str]]: (id, field, description) triples
    """
    if fields is None:
        fields = BRENDA_FIELDS

    lines = read_brenda_lines(in_file,
                              keep_dangling=keep_dangling,
                              encoding=encoding)
    return separate_entries(lines,
                            fields=fields,
                            allow_trailing_boundary=allow_trailing_boundary,
                            progress=progress)
