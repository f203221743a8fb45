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
from functools import lru_cache

from .codon_table_row import CodonTableRow
from .constants import STOP
from .strings.codon import Codon
from .utils import get_default_codon_table_path, safe_group_by

CodonToTransl = dict[Codon, str]
TranslToCodons = dict[str, list[Codon]]


@dataclass(slots=True, frozen=True)
class CodonTable:
    codon_to_aa: CodonToTransl
    aa_to_codons: TranslToCodons

    @classmethod
    def from_list(cls, rows: list[CodonTableRow], rc: bool = False) -> CodonTable:
        rows = [r.reverse_complement() for r in rows] if rc else rows

        # Codon -> Amino acid
        codon_to_aa = {
            r.codon: r.aa
            for r in rows
        }

        # Amino acid -> Codons
        aa_to_codon = {
            aa: sorted(r.codon for r in rs)
            for aa, rs in safe_group_by(rows, lambda x: x.aa)
        }

        return cls(codon_to_aa, aa_to_codon)

    @classmethod
    def load(cls, fp: str | None = None) -> CodonTable:
        from .codon_table_loader import load_codon_table_rows

        return cls.from_list(load_codon_table_rows(fp or get_default_codon_table_path()))

    def get_codons(self, aa: str) -> list[Codon]:
        return self.aa_to_codons[aa]

    @property
    def stop_codons(self) -> list[Codon]:
        return self.get_codons(STOP)

    def translate(self, codon: str) -> str:
        try:
            return self.codon_to_aa[codon]
        except KeyError:
            raise ValueError(f"Codon not found: {codon}!")

    def translate_seq(self, seq: str) -> str:
        """Translate a sequence of complete codons into amino acid symbols"""

        if len(seq) % 3 != 0:
            raise ValueError("Sequence length not a multiple of three!")
        return ''.join(
            self.translate(seq[i:i + 3])
            for i in range(0, len(seq), 3)
        )


@lru_cache(maxsize=1)
def get_default_codon_table() -> CodonTable:
    return CodonTable.load()
