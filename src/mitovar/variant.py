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

from dataclasses import asdict, dataclass
from typing import Any

from .enums import RegionClass, VariantType
from .errors import MalformedVariantError
from .strings.dna_str import DnaStr
from .uint_range import UIntRange
from .utils import condense_positions, get_end


def _parse_allele(s: Any, label: str) -> DnaStr:
    if not isinstance(s, str) or not s:
        raise MalformedVariantError(f"Invalid variant: missing {label} allele!")
    try:
        return DnaStr(s.upper())
    except ValueError:
        raise MalformedVariantError(f"Invalid variant: invalid {label} allele '{s}'!")


def _parse_pos(pos: Any) -> int:
    if isinstance(pos, bool):
        raise MalformedVariantError(f"Invalid variant: non-numeric position '{pos}'!")
    try:
        pos_i = int(pos)
    except (TypeError, ValueError):
        raise MalformedVariantError(f"Invalid variant: non-numeric position '{pos}'!")
    if isinstance(pos, float) and pos != pos_i:
        raise MalformedVariantError(f"Invalid variant: non-integer position '{pos}'!")
    if pos_i < 1:
        raise MalformedVariantError(f"Invalid variant: position {pos_i} not strictly positive!")
    return pos_i


@dataclass(slots=True, frozen=True)
class VariantCall:
    chrom: str
    pos: int
    ref: DnaStr
    alt: DnaStr
    depth: int | None = None
    pass_filter: bool = True

    def __str__(self) -> str:
        return self.genomic_id

    @classmethod
    def parse(
        cls,
        chrom: Any,
        pos: Any,
        ref: Any,
        alt: Any,
        depth: Any = None,
        pass_filter: bool = True
    ) -> VariantCall:
        """Validate raw field values from a variant caller"""

        if not isinstance(chrom, str) or not chrom:
            raise MalformedVariantError("Invalid variant: missing contig!")

        ref_ = _parse_allele(ref, 'REF')
        alt_ = _parse_allele(alt, 'ALT')
        if ref_ == alt_:
            raise MalformedVariantError(f"Invalid variant: identical REF and ALT '{ref_}'!")

        try:
            depth_ = int(depth) if depth is not None else None
        except (TypeError, ValueError):
            raise MalformedVariantError(f"Invalid variant: non-numeric depth '{depth}'!")

        return cls(chrom, _parse_pos(pos), ref_, alt_, depth=depth_, pass_filter=bool(pass_filter))

    @property
    def ref_len(self) -> int:
        return len(self.ref)

    @property
    def alt_len(self) -> int:
        return len(self.alt)

    @property
    def alt_ref_delta(self) -> int:
        return self.alt_len - self.ref_len

    @property
    def ref_end(self) -> int:
        return get_end(self.pos, self.ref_len)

    @property
    def ref_range(self) -> UIntRange:
        return UIntRange(self.pos, self.ref_end)

    @property
    def type(self) -> VariantType:
        return VariantType.SNV if self.ref_len == self.alt_len else VariantType.INDEL

    @property
    def is_snv(self) -> bool:
        return self.type == VariantType.SNV

    @property
    def is_frameshift(self) -> bool:
        return self.alt_ref_delta % 3 != 0

    @property
    def genomic_id(self) -> str:
        return f"{self.chrom}:{self.pos} {self.ref}>{self.alt}"

    @property
    def hgvs(self) -> str:
        return f"m.{self.pos}{self.ref}>{self.alt}"

    @property
    def positions(self) -> str:
        return condense_positions(self.pos, self.ref_end)

    def to_call(self) -> VariantCall:
        return VariantCall(
            self.chrom, self.pos, self.ref, self.alt,
            depth=self.depth, pass_filter=self.pass_filter)


@dataclass(slots=True, frozen=True)
class AnnotatedVariant(VariantCall):
    gene: str | None = None
    overlap_genes: tuple[str, ...] = ()
    region: RegionClass | None = None
    local_start: int | None = None
    local_end: int | None = None
    start_codon: int | None = None
    end_codon: int | None = None

    @classmethod
    def from_call(cls, v: VariantCall, **kwargs) -> AnnotatedVariant:
        return cls(
            v.chrom, v.pos, v.ref, v.alt,
            depth=v.depth, pass_filter=v.pass_filter,
            **kwargs)

    @property
    def overlap_genes_str(self) -> str | None:
        return ','.join(self.overlap_genes) if self.overlap_genes else None

    @property
    def has_locals(self) -> bool:
        return self.local_start is not None and self.local_end is not None

    @property
    def is_coding(self) -> bool:
        return self.region == RegionClass.CODING and self.has_locals

    def to_row(self) -> dict[str, Any]:
        d = asdict(self)
        d['ref'] = str(self.ref)
        d['alt'] = str(self.alt)
        d['type'] = self.type.value
        d['overlap_genes'] = self.overlap_genes_str
        d['region'] = self.region.value if self.region is not None else None
        return d

