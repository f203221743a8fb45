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

import os
import pathlib
import re
from itertools import groupby
from typing import Callable, Iterable

from .constants import ANNOTATION_TABLE_FN, CODON_TABLE_FN, DATA_PATH

dna_re = re.compile('^[ACGT]*$')
iupac_re = re.compile('^[ACGTNRYKMSWBDHV]*$')
dna_complement_tr_table = str.maketrans('ACGTNRYKMSWBDHV', 'TGCANYRMKSWVHDB')


def is_dna(s: str) -> bool:
    return dna_re.match(s) is not None


def is_iupac(s: str) -> bool:
    return iupac_re.match(s) is not None


def reverse_complement(seq: str) -> str:
    return seq[::-1].translate(dna_complement_tr_table)


def get_end(start: int, length: int) -> int:
    return start + length - 1


def safe_group_by(a: Iterable, k: Callable):
    return groupby(sorted(a, key=k), key=k)


def get_data_file_path(fp):
    return os.path.join(pathlib.Path(__file__).parent.absolute(), DATA_PATH, fp)


def get_default_codon_table_path() -> str:
    return get_data_file_path(CODON_TABLE_FN)


def get_default_annotation_table_path() -> str:
    return get_data_file_path(ANNOTATION_TABLE_FN)


def condense_positions(start: int, end: int) -> str:
    """Format a range as its start, or as start and end joined by an underscore"""

    return str(start) if start == end else f"{start}_{end}"
