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

"""
Region locator

Ambiguous positions (overlapping genes) are resolved by first match: the
first interval in index order (start ascending, then table order) provides
the gene and region, while the full list of candidate genes is preserved.
Local coordinates are derived from the first overlapping coding interval,
which is the same interval whenever the assigned region is coding.
Local coordinates are not strand-corrected.
"""

from __future__ import annotations

from typing import Iterable

from .context import AnnotationContext
from .variant import AnnotatedVariant, VariantCall


def get_codon_index(local_pos: int) -> int:
    return local_pos // 3


def locate(
    variant: VariantCall,
    context: AnnotationContext,
    filter_low_quality: bool = False
) -> AnnotatedVariant | None:
    """Annotate a variant with its region, returning None if filtered out"""

    if filter_low_quality and not variant.pass_filter:
        return None

    # Already annotated
    if isinstance(variant, AnnotatedVariant):
        return variant

    hits = context.index.overlaps(variant.pos)
    if not hits:
        return AnnotatedVariant.from_call(variant)

    first = hits[0]
    coding_hits = context.index.coding_overlaps(variant.pos)

    if not coding_hits:
        return AnnotatedVariant.from_call(
            variant,
            gene=first.gene,
            overlap_genes=tuple(r.gene for r in hits),
            region=first.region)

    coding_hit = coding_hits[0]
    local_start = variant.pos - coding_hit.start
    local_end = variant.ref_end - coding_hit.start

    return AnnotatedVariant.from_call(
        variant,
        gene=first.gene,
        overlap_genes=tuple(r.gene for r in hits),
        region=first.region,
        local_start=local_start,
        local_end=local_end,
        start_codon=get_codon_index(local_start),
        end_codon=get_codon_index(local_end))


def locate_all(
    variants: Iterable[VariantCall],
    context: AnnotationContext,
    filter_low_quality: bool = False
) -> list[AnnotatedVariant]:
    return [
        av
        for av in (
            locate(v, context, filter_low_quality=filter_low_quality)
            for v in variants
        )
        if av is not None
    ]
