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
import logging
from typing import Iterable

import numpy as np

from .constants import ANNOTATION_TABLE_COLUMNS, MT_CONTIGS
from .enums import RegionClass
from .errors import ConfigurationError
from .loaders.csv import load_csv
from .loaders.utils import parse_int
from .strings.strand import Strand
from .uint_range import UIntRange
from .utils import get_default_annotation_table_path


@dataclass(slots=True, frozen=True)
class GenomicInterval(UIntRange):
    chrom: str
    strand: Strand
    gene: str
    region: RegionClass

    @property
    def is_coding(self) -> bool:
        return self.region == RegionClass.CODING


def _parse_annotation_row(r: list[str]) -> GenomicInterval:
    try:
        chrom, start, end, strand, gene, region = r
    except ValueError:
        raise ValueError("invalid number of columns")

    if chrom not in MT_CONTIGS:
        raise ValueError(f"unsupported contig '{chrom}'")

    if not gene:
        raise ValueError("missing gene name")

    try:
        region_class = RegionClass(region)
    except ValueError:
        raise ValueError(f"unknown region '{region}'")

    return GenomicInterval(
        start=parse_int(start, 'start'),
        end=parse_int(end, 'end'),
        chrom=chrom,
        strand=Strand(strand),
        gene=gene,
        region=region_class)


def load_annotation_table(fp: str) -> list[GenomicInterval]:
    try:
        intervals = [
            _parse_annotation_row(r)
            for r in load_csv(fp, columns=ANNOTATION_TABLE_COLUMNS, delimiter='\t')
        ]
    except OSError as ex:
        raise ConfigurationError(f"Failed to read annotation table '{fp}': {ex}!")
    except ValueError as ex:
        raise ConfigurationError(f"Invalid annotation table format: {ex.args[0]}!")

    logging.debug("Annotation table: %d intervals found." % len(intervals))
    return intervals


class GenomeAnnotationIndex:
    """
    Position-ordered index of (possibly overlapping) annotation intervals
    on a single mitochondrial contig
    """

    __slots__ = {'_intervals', '_starts', '_ends', '_coding'}

    def __init__(self, intervals: Iterable[GenomicInterval]) -> None:

        # Stable sort: duplicate starts keep the table order
        self._intervals: tuple[GenomicInterval, ...] = tuple(
            sorted(intervals, key=lambda x: x.start))

        if not self._intervals:
            raise ConfigurationError("Empty annotation table!")

        if len({r.chrom for r in self._intervals}) > 1:
            raise ConfigurationError("Annotation intervals span multiple contigs!")

        self._starts: np.ndarray = np.array([r.start for r in self._intervals], dtype=np.int64)
        self._ends: np.ndarray = np.array([r.end for r in self._intervals], dtype=np.int64)
        self._coding: np.ndarray = np.array([r.is_coding for r in self._intervals], dtype=bool)

    def __len__(self) -> int:
        return len(self._intervals)

    def __iter__(self):
        return iter(self._intervals)

    def __getstate__(self):
        return self._intervals

    def __setstate__(self, state) -> None:
        self.__init__(state)

    @property
    def chrom(self) -> str:
        return self._intervals[0].chrom

    @property
    def span(self) -> UIntRange:
        return UIntRange.span(self._intervals)

    def _get_overlap_mask(self, pos: int) -> np.ndarray:
        return (self._starts <= pos) & (self._ends >= pos)

    def _get_at(self, mask: np.ndarray) -> list[GenomicInterval]:
        return [self._intervals[i] for i in np.flatnonzero(mask)]

    def overlaps(self, pos: int) -> list[GenomicInterval]:
        """All intervals containing the position, ordered by start"""

        return self._get_at(self._get_overlap_mask(pos))

    def coding_overlaps(self, pos: int) -> list[GenomicInterval]:
        return self._get_at(self._get_overlap_mask(pos) & self._coding)

    def coding_intervals(self) -> list[GenomicInterval]:
        return self._get_at(self._coding)

    def get(self, gene: str) -> GenomicInterval | None:
        return next((r for r in self._intervals if r.gene == gene), None)

    @classmethod
    def load(cls, fp: str) -> GenomeAnnotationIndex:
        return cls(load_annotation_table(fp))


@lru_cache(maxsize=1)
def get_default_annotation_index() -> GenomeAnnotationIndex:
    """Load the packaged rCRS annotation once per process"""

    logging.debug("Loading the default rCRS annotation...")
    return GenomeAnnotationIndex.load(get_default_annotation_table_path())
