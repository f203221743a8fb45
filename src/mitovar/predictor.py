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
from typing import Iterable

from .codon_table import CodonTable
from .constants import STOP
from .decomposer import DecomposedEdit
from .enums import ConsequenceClass
from .utils import is_dna, reverse_complement


@dataclass(slots=True, frozen=True)
class ConsequenceAnnotation:
    gene: str
    codon_index: int
    ref_aa: str | None
    alt_aa: str | None
    consequence: ConsequenceClass
    variant_id: str | None = None

    @property
    def protein_change(self) -> str | None:
        if self.ref_aa is None or self.alt_aa is None:
            return None
        return f"p.{self.ref_aa}{self.codon_index + 1}{self.alt_aa or 'del'}"


def _to_transcript_strand(edit: DecomposedEdit, s: str) -> str:
    return reverse_complement(s) if edit.strand.is_minus else s


def _translate(codon_table: CodonTable, s: str) -> str | None:
    return codon_table.translate_seq(s) if len(s) % 3 == 0 else None


def classify(ref_aa: str, alt_aa: str) -> ConsequenceClass:
    if ref_aa == alt_aa:
        return ConsequenceClass.SYNONYMOUS
    ref_stop = STOP in ref_aa
    alt_stop = STOP in alt_aa
    if alt_stop and not ref_stop:
        return ConsequenceClass.NONSENSE
    if ref_stop and not alt_stop:
        return ConsequenceClass.READTHROUGH
    return ConsequenceClass.MISSENSE


def predict(edit: DecomposedEdit, codon_table: CodonTable) -> ConsequenceAnnotation:
    """Classify the amino acid change of a single codon edit"""

    def get_annotation(consequence: ConsequenceClass, ref_aa: str | None = None, alt_aa: str | None = None):
        return ConsequenceAnnotation(
            edit.gene, edit.codon_index, ref_aa, alt_aa, consequence,
            variant_id=edit.variant_id)

    ref_codon = _to_transcript_strand(edit, edit.ref_codon)
    alt_codon = _to_transcript_strand(edit, edit.alt_codon)

    # Ambiguous bases
    if not (is_dna(ref_codon) and is_dna(alt_codon)):
        return get_annotation(ConsequenceClass.UNKNOWN)

    ref_aa = codon_table.translate(ref_codon)
    if edit.frameshift:
        return get_annotation(ConsequenceClass.FRAMESHIFT, ref_aa=ref_aa)

    alt_aa = _translate(codon_table, alt_codon)
    if alt_aa is None:
        return get_annotation(ConsequenceClass.UNKNOWN, ref_aa=ref_aa)

    return get_annotation(classify(ref_aa, alt_aa), ref_aa=ref_aa, alt_aa=alt_aa)


def predict_all(edits: Iterable[DecomposedEdit], codon_table: CodonTable) -> list[ConsequenceAnnotation]:
    return [predict(edit, codon_table) for edit in edits]
