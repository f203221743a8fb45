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

from .annotation_index import GenomicInterval
from .context import AnnotationContext
from .errors import MalformedVariantError
from .reference import ReferenceSequence
from .strings.codon import Codon
from .strings.dna_str import DnaStr
from .strings.strand import Strand
from .uint_range import UIntRange
from .variant import AnnotatedVariant


@dataclass(slots=True, frozen=True)
class DecomposedEdit:
    gene: str
    codon_index: int

    # Plus strand codons: consecutive triplets of the edited span, the
    #  last one taking any remaining bases (deletions may leave the
    #  trailing codons short or empty)
    ref_codon: Codon
    alt_codon: DnaStr

    strand: Strand
    frameshift: bool = False
    variant_id: str | None = None


def get_codon_range(interval: GenomicInterval, codon_index: int) -> UIntRange:
    return UIntRange.from_length(interval.start + codon_index * 3, 3)


def get_codon_span(interval: GenomicInterval, start_codon: int, end_codon: int) -> UIntRange:
    return UIntRange(
        get_codon_range(interval, start_codon).start,
        get_codon_range(interval, end_codon).end)


def get_coding_interval(variant: AnnotatedVariant, context: AnnotationContext) -> GenomicInterval | None:
    hits = context.index.coding_overlaps(variant.pos)
    return hits[0] if hits else None


def decompose(variant: AnnotatedVariant, context: AnnotationContext) -> list[DecomposedEdit]:
    """Split a coding variant into one edit per affected reference codon"""

    if not variant.is_coding:
        return []

    interval = get_coding_interval(variant, context)
    if interval is None:
        return []

    span = get_codon_span(interval, variant.start_codon, variant.end_codon)
    ref_span = context.get_reference().substr(span)

    # Validate the REF allele against the reference
    offset = variant.pos - span.start
    ref_allele = ref_span[offset:offset + variant.ref_len]
    if ref_allele != variant.ref:
        raise MalformedVariantError(
            "Invalid variant %s: REF does not match the reference sequence (%s)!" %
            (variant.genomic_id, ref_allele))

    alt_span = f"{ref_span[:offset]}{variant.alt}{ref_span[offset + variant.ref_len:]}"

    n = variant.end_codon - variant.start_codon + 1
    frameshift = variant.is_frameshift

    return [
        DecomposedEdit(
            gene=interval.gene,
            codon_index=variant.start_codon + i,
            ref_codon=Codon(ref_span[i * 3:i * 3 + 3]),
            alt_codon=DnaStr(alt_span[i * 3:i * 3 + 3] if i < n - 1 else alt_span[i * 3:]),
            strand=interval.strand,
            frameshift=frameshift,
            variant_id=variant.genomic_id)
        for i in range(n)
    ]


def apply_edits(
    reference: ReferenceSequence,
    interval: GenomicInterval,
    edits: list[DecomposedEdit]
) -> DnaStr:
    """Substitute the alternative codons into the reference sequence"""

    if not edits:
        return reference.s

    span = get_codon_span(interval, edits[0].codon_index, edits[-1].codon_index)
    return reference.replace_substr(span, ''.join(e.alt_codon for e in edits))
