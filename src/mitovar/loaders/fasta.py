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
from contextlib import contextmanager
from typing import Generator

from pysam import FastaFile

from ..constants import MT_CONTIGS
from ..errors import ConfigurationError


def get_fasta_file(fp: str) -> FastaFile:
    try:
        return FastaFile(fp)
    except (IOError, ValueError) as ex:
        logging.critical("Failed to load reference file!")
        raise ConfigurationError(f"Failed to load reference file '{fp}': {ex}!")


@contextmanager
def open_fasta(fp: str) -> Generator[FastaFile, None, None]:
    ff = get_fasta_file(fp)
    try:
        yield ff
    finally:
        ff.close()


def load_mt_sequence(fp: str) -> tuple[str, str]:
    """Fetch the first mitochondrial sequence found in a FASTA file"""

    with open_fasta(fp) as ff:
        contig = next((r for r in ff.references if r in MT_CONTIGS), None)
        if contig is None:
            if len(ff.references) != 1:
                raise ConfigurationError(
                    f"No mitochondrial sequence found in FASTA file '{fp}'!")

            # Single-sequence FASTA files are assumed to be mitochondrial
            contig = ff.references[0]
            logging.warning(
                "Sequence '%s' assumed to be mitochondrial." % contig)

        return contig, ff.fetch(contig).upper()
