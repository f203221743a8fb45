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

import logging

from .enums import GenomeBuild
from .errors import UnsupportedReferenceError
from .reference import ReferenceSequence
from .strings.dna_str import DnaStr
from .variant_set import VariantSet

SUPPORTED_BUILDS = {GenomeBuild.RCRS}


def consensus(variant_set: VariantSet, reference: ReferenceSequence) -> DnaStr:
    """Apply the PASS-ing substitutions of a sample to the reference sequence"""

    if reference.genome_build not in SUPPORTED_BUILDS:
        raise UnsupportedReferenceError(
            "Consensus sequences are only supported for rCRS (found: %s)!" %
            reference.genome_build.value)

    snvs = sorted(variant_set.passing().snvs(), key=lambda v: v.pos)
    s = list(reference.s)
    for v in snvs:
        reference.check_range(v.chrom, v.ref_range)
        s[v.pos - 1:v.ref_end] = v.alt

    logging.debug("Sample '%s': %d substitutions applied to the consensus." % (variant_set.sample, len(snvs)))
    return DnaStr(''.join(s))


def to_fasta(name: str, s: str, width: int = 60) -> str:
    lines = [f">{name}"]
    lines.extend(s[i:i + width] for i in range(0, len(s), width))
    return '\n'.join(lines) + '\n'
