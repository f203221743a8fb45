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

from ..uint_range import UIntRange
from ..utils import is_dna, is_iupac


class DnaStr(str):
    """Nucleotide sequence, possibly including IUPAC ambiguity codes"""

    def __init__(self, s: str) -> None:
        if not is_iupac(s):
            raise ValueError(f"Invalid DNA sequence: {s}!")
        super().__init__()

    @classmethod
    def parse(cls, s: str | None):
        return cls(s.upper()) if s else cls.empty()

    @classmethod
    def empty(cls):
        return cls('')

    def __add__(self, other) -> DnaStr:
        return DnaStr(str(self) + str(other))

    @property
    def is_unambiguous(self) -> bool:
        return is_dna(self)

    def slice(self, sl: slice) -> DnaStr:
        return DnaStr(self[sl])

    def substr(self, r: UIntRange) -> DnaStr:
        return self.slice(r.to_slice())

    def replace_substr(self, r: UIntRange, alt: str) -> DnaStr:
        assert r.start < len(self) and r.end < len(self)
        return DnaStr(f"{self[:r.start]}{alt}{self[r.end + 1:]}")

    def triplets(self) -> list[DnaStr]:
        return [
            self.slice(slice(i, i + 3))
            for i in range(0, len(self), 3)
        ]
