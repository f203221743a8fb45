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

from .annotation_index import GenomeAnnotationIndex, get_default_annotation_index
from .codon_table import CodonTable, get_default_codon_table
from .constants import RCRS_LENGTH
from .errors import ConfigurationError
from .reference import ReferenceSequence
from .uint_range import UIntRange


@dataclass(slots=True, frozen=True)
class AnnotationContext:
    """Read-only annotation resources shared by every variant set of a run"""

    index: GenomeAnnotationIndex
    reference: ReferenceSequence | None
    codon_table: CodonTable

    def __post_init__(self) -> None:
        if self.index is None:
            raise ConfigurationError("Missing genome annotation index!")
        if self.codon_table is None:
            raise ConfigurationError("Missing codon table!")

    @classmethod
    def build(
        cls,
        reference: ReferenceSequence | None,
        index: GenomeAnnotationIndex | None = None,
        codon_table: CodonTable | None = None
    ) -> AnnotationContext:
        if index is None:
            logging.info("Annotation table not specified, the default one will be used.")
        if codon_table is None:
            logging.info("Codon table not specified, the default one will be used.")

        return cls(
            index if index is not None else get_default_annotation_index(),
            reference,
            codon_table if codon_table is not None else get_default_codon_table())

    @classmethod
    def load(
        cls,
        ref_fasta_fp: str,
        annotation_fp: str | None = None,
        codon_table_fp: str | None = None
    ) -> AnnotationContext:
        return cls.build(
            ReferenceSequence.load(ref_fasta_fp),
            index=GenomeAnnotationIndex.load(annotation_fp) if annotation_fp else None,
            codon_table=CodonTable.load(codon_table_fp) if codon_table_fp else None)

    def get_reference(self) -> ReferenceSequence:
        if self.reference is None:
            raise ConfigurationError("Missing reference sequence!")
        return self.reference

    @property
    def genome_range(self) -> UIntRange:
        """Reference coordinates, or the rCRS ones when no reference is loaded"""

        if self.reference is not None:
            return self.reference.range
        return UIntRange(1, max(RCRS_LENGTH, self.index.span.end))

    def check_reference(self) -> None:
        """Validate the annotation against the reference sequence"""

        ref = self.get_reference()
        span = self.index.span
        if span.end > len(ref):
            raise ConfigurationError(
                "Annotation intervals (up to %d) exceed the reference length (%d)!" %
                (span.end, len(ref)))
