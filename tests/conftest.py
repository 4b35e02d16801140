"""Shared test fixtures for the brenda parser test suite."""

import pytest


SAMPLE_BRENDA_TEXT = """\
*
* BRENDA - The Comprehensive Enzyme Information System
*
ID\t1.1.1.1
********************************************************************************
PROTEIN
PR\t#1# Gallus gallus   <1,2>
PR\t#2# Homo sapiens P07327 UniProt <3>

RECOMMENDED_NAME
RN\talcohol dehydrogenase

KM_VALUE
KM\t#1# 0.5 {ethanol}  <1>
KM\t#2# 1.2 {ethanol}  (#2# pH 7.5, 25°C <3>) <3>

REFERENCE
RF\t<1> Smith, J.: Alcohol dehydrogenase. J. Biol. Chem. (1990) 265, 1-10.
RF\t<2> Doe, A.: Liver enzymes. Biochemistry (1991) 30, 11-20.

///
ID\t1.1.1.2
PROTEIN
PR\t#1# Bos taurus   <1>

REFERENCE
RF\t<1> Roe, R.: NADP enzymes. FEBS Lett. (1992) 1, 1-5.

///
ID\t6.3.5.8 (transferred to EC 2.6.1.85)
RECOMMENDED_NAME
///
"""


@pytest.fixture
def write_flat_file(tmp_path):
    """Factory writing text to a flat file, byte for byte"""

    def _write(text, name="brenda_download.txt", encoding="utf-8"):
        path = tmp_path / name
        path.write_bytes(text.encode(encoding))
        return str(path)

    return _write


@pytest.fixture
def sample_flat_file(write_flat_file):
    return write_flat_file(SAMPLE_BRENDA_TEXT)


@pytest.fixture
def sample_brenda_text():
    return SAMPLE_BRENDA_TEXT
