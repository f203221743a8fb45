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
import os
from contextlib import closing, contextmanager
from typing import Generator

from pysam import VariantFile, VariantRecord

from ..errors import ConfigurationError, MalformedVariantError
from ..pipeline import SkippedRecord
from ..variant import VariantCall
from ..variant_set import VariantSet

VCF_EXTENSIONS = ['.gz', '.bgz', '.vcf', '.bcf']


@contextmanager
def open_vcf(fp: str, **kwargs) -> Generator[VariantFile, None, None]:
    try:
        vcf = VariantFile(fp, **kwargs)
    except (OSError, ValueError) as ex:
        raise ConfigurationError(f"Failed to open VCF file '{fp}': {ex}!")
    with closing(vcf):
        yield vcf


def get_sample_name_from_path(fp: str) -> str:
    name = os.path.basename(fp)
    for ext in VCF_EXTENSIONS:
        if name.endswith(ext):
            name = name[:-len(ext)]
    return name


def is_pass(r: VariantRecord) -> bool:
    filters = list(r.filter.keys())
    return not filters or filters == ['PASS']


def get_depth(r: VariantRecord) -> int | None:
    if 'DP' in r.header.info:
        return r.info.get('DP')
    if 'DP' in r.header.formats and r.samples:
        return r.samples[0].get('DP')
    return None


def load_variant_set(fp: str, sample: str | None = None) -> tuple[VariantSet, list[SkippedRecord]]:
    """Load the variant calls of a single-sample VCF file"""

    variants: list[VariantCall] = []
    skipped: list[SkippedRecord] = []

    with open_vcf(fp) as vcf:
        samples = list(vcf.header.samples)
        if len(samples) > 1:
            logging.warning(
                "VCF file '%s': %d samples found, depth taken from the first one." %
                (fp, len(samples)))

        sample_name = sample or (samples[0] if samples else get_sample_name_from_path(fp))

        i = 0
        for r in vcf.fetch():
            for alt in r.alts or [None]:
                try:
                    variants.append(VariantCall.parse(
                        r.contig, r.pos, r.ref, alt,
                        depth=get_depth(r),
                        pass_filter=is_pass(r)))
                except MalformedVariantError as ex:
                    logging.warning("VCF file '%s': record skipped: %s" % (fp, ex))
                    skipped.append(SkippedRecord(
                        sample_name, i, f"{r.contig}:{r.pos} {r.ref}>{alt}", str(ex)))
                i += 1

    logging.debug("VCF file '%s': %d variants loaded." % (fp, len(variants)))
    return VariantSet.from_list(sample_name, variants), skipped
