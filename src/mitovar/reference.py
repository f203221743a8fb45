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

from __future__ import annotations

from dataclasses import dataclass
import logging

from .constants import MT_CONTIGS, RCRS_LENGTH, RCRS_RSRS_MARKER_END, RCRS_RSRS_MARKER_START
from .enums import GenomeBuild
from .errors import ConfigurationError, UnsupportedReferenceError
from .strings.dna_str import DnaStr
from .uint_range import UIntRange


def is_mt_contig(contig: str) -> bool:
    return contig in MT_CONTIGS


@dataclass(slots=True, frozen=True)
class ReferenceSequence:
    """Mitochondrial reference sequence, addressed by one-based positions"""

    contig: str
    s: DnaStr

    def __post_init__(self) -> None:
        if not self.s:
            raise ConfigurationError("Empty reference sequence!")

    def __len__(self) -> int:
        return len(self.s)

    @classmethod
    def from_str(cls, s: str, contig: str = 'chrM') -> ReferenceSequence:
        try:
            return cls(contig, DnaStr.parse(s))
        except ValueError:
            raise ConfigurationError("Invalid reference sequence: unexpected characters!")

    @classmethod
    def load(cls, fp: str) -> ReferenceSequence:
        from .loaders.fasta import load_mt_sequence

        contig, s = load_mt_sequence(fp)
        ref = cls.from_str(s, contig=contig)
        logging.debug("Reference '%s': %d bases (%s)." % (contig, len(ref), ref.genome_build.value))
        return ref

    @property
    def genome_build(self) -> GenomeBuild:
        if len(self) != RCRS_LENGTH:
            return GenomeBuild.OTHER
        match self.substr(UIntRange(RCRS_RSRS_MARKER_START, RCRS_RSRS_MARKER_END)):
            case 'AC':
                return GenomeBuild.RCRS
            case 'NN':
                return GenomeBuild.RSRS
            case _:
                return GenomeBuild.OTHER

    @property
    def range(self) -> UIntRange:
        return UIntRange(1, len(self))

    def check_range(self, contig: str, r: UIntRange) -> None:
        if not is_mt_contig(contig):
            raise UnsupportedReferenceError(f"Unsupported contig '{contig}'!")
        if r not in self.range:
            raise UnsupportedReferenceError(
                f"Range {r.start}-{r.end} outside of the reference (1-{len(self)})!")

    def substr(self, r: UIntRange) -> DnaStr:
        if r not in self.range:
            raise UnsupportedReferenceError(
                f"Range {r.start}-{r.end} outside of the reference (1-{len(self)})!")
        return self.s.substr(r.offset(-1))

    def replace_substr(self, r: UIntRange, alt: str) -> DnaStr:
        return self.s.replace_substr(r.offset(-1), alt)
