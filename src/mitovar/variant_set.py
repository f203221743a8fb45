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

from dataclasses import dataclass, field
from typing import Iterable, Sized

import pandas as pd

from .context import AnnotationContext
from .enums import RegionClass
from .locator import locate_all
from .variant import AnnotatedVariant, VariantCall


@dataclass(slots=True, frozen=True)
class VariantSet(Sized):
    """Ordered variant calls of a single sample"""

    sample: str
    variants: tuple[VariantCall, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.variants)

    def __iter__(self):
        return iter(self.variants)

    @classmethod
    def from_list(cls, sample: str, variants: Iterable[VariantCall]) -> VariantSet:
        return cls(sample, tuple(variants))

    def _subset(self, variants: Iterable[VariantCall]) -> VariantSet:
        return VariantSet(self.sample, tuple(variants))

    def passing(self) -> VariantSet:
        """Variant calls passing the upstream quality filters"""

        return self._subset(v for v in self.variants if v.pass_filter)

    def snvs(self) -> VariantSet:
        return self._subset(v for v in self.variants if v.is_snv)

    def positions(self) -> list[str]:
        return [v.positions for v in self.variants]

    def locate(self, context: AnnotationContext, filter_low_quality: bool = False) -> list[AnnotatedVariant]:
        return locate_all(self.variants, context, filter_low_quality=filter_low_quality)

    def encoding(self, context: AnnotationContext, filter_low_quality: bool = False) -> list[AnnotatedVariant]:
        """Variants located in coding regions (consequence not evaluated)"""

        return [
            v
            for v in self.locate(context, filter_low_quality=filter_low_quality)
            if v.region == RegionClass.CODING
        ]

    def tally(self, context: AnnotationContext, filter_low_quality: bool = True) -> dict[str, int]:
        """Count located variants by region class"""

        regions = pd.Series([
            v.region.value
            for v in self.locate(context, filter_low_quality=filter_low_quality)
            if v.region is not None
        ], dtype=object)
        return {
            str(k): int(n)
            for k, n in regions.value_counts(sort=False).sort_index().items()
        }
