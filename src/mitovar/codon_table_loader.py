########## LICENCE ##########
# mitovar
# Copyright (C) 2024 Genome Research Ltd
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as
# published by the Free Software Foundation, either version 3 of the
# License, or (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
#############################

import logging

from .codon_table_row import CodonTableRow
from .constants import STOP
from .errors import ConfigurationError
from .loaders.csv import load_csv
from .strings.codon import Codon

CODON_TABLE_COLUMNS = ['codon', 'aa']


def _parse_codon(codon: str) -> Codon:
    try:
        c = Codon(codon)
    except ValueError:
        raise ValueError(f"invalid codon '{codon}'")
    if not c.is_unambiguous:
        raise ValueError(f"invalid codon '{codon}'")
    return c


def _parse_aa(aa: str) -> str:
    if not (len(aa) == 1 and (aa.isalpha() or aa == STOP)):
        raise ValueError(f"invalid amino acid code '{aa}'")
    return aa


def _parse_codon_table_row(it) -> CodonTableRow:
    try:
        codon, aa = it
    except ValueError:
        raise ValueError("invalid number of columns")

    return CodonTableRow(_parse_codon(codon), _parse_aa(aa))


def load_codon_table_rows(fp: str) -> list[CodonTableRow]:
    logging.debug("Loading codon table from '%s'..." % fp)
    try:
        rows = list(map(_parse_codon_table_row, load_csv(fp, columns=CODON_TABLE_COLUMNS)))
    except OSError as ex:
        raise ConfigurationError(f"Failed to read codon table '{fp}': {ex}!")
    except ValueError as ex:
        raise ConfigurationError(f"Invalid codon table format: {ex.args[0]}!")

    # All 64 unambiguous codons are required
    if len({r.codon for r in rows}) != 64:
        raise ConfigurationError("Invalid codon table format: incomplete or duplicate codons!")

    return rows
