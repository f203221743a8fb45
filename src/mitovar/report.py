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

from dataclasses import asdict
import logging
import os

import pandas as pd

from .constants import OUTPUT_CONSEQUENCES_SUFFIX, OUTPUT_FAILURES_FILE_NAME, OUTPUT_VARIANTS_SUFFIX
from .pipeline import AnnotatedResult, RunReport, SkippedRecord
from .predictor import ConsequenceAnnotation
from .variant import AnnotatedVariant

VARIANT_COLUMNS = [
    'chrom',
    'pos',
    'ref',
    'alt',
    'type',
    'depth',
    'pass_filter',
    'gene',
    'overlap_genes',
    'region',
    'local_start',
    'local_end',
    'start_codon',
    'end_codon'
]

CONSEQUENCE_COLUMNS = [
    'variant_id',
    'gene',
    'codon_index',
    'ref_aa',
    'alt_aa',
    'protein_change',
    'consequence'
]

FAILURE_COLUMNS = [
    'sample',
    'index',
    'level',
    'source',
    'record',
    'reason'
]


def get_variants_frame(variants: list[AnnotatedVariant]) -> pd.DataFrame:
    df = pd.DataFrame.from_records(
        [v.to_row() for v in variants],
        columns=VARIANT_COLUMNS)

    # Nullable integers for optional coordinates
    for col in ['depth', 'local_start', 'local_end', 'start_codon', 'end_codon']:
        df[col] = df[col].astype('Int64')

    return df


def _consequence_to_row(c: ConsequenceAnnotation) -> dict:
    d = asdict(c)
    d['consequence'] = c.consequence.value
    d['protein_change'] = c.protein_change
    return d


def get_consequences_frame(consequences: list[ConsequenceAnnotation]) -> pd.DataFrame:
    return pd.DataFrame.from_records(
        [_consequence_to_row(c) for c in consequences],
        columns=CONSEQUENCE_COLUMNS)


def get_failures_frame(report: RunReport, skipped: list[SkippedRecord] | None = None) -> pd.DataFrame:
    """
    Set failures and skipped records of a run

    Indices refer to the source: the set position for failed sets, the ALT
    allele ordinal in the VCF file for records skipped while loading ('vcf'),
    and the position in the variant set for records skipped while annotating
    ('pipeline').
    """

    rows = [
        *[
            (f.sample, f.index, 'set', 'pipeline', None, f.reason)
            for f in report.failures
        ],
        *[
            (s.sample, s.index, 'record', 'vcf', s.record, s.reason)
            for s in (skipped or [])
        ],
        *[
            (s.sample, s.index, 'record', 'pipeline', s.record, s.reason)
            for s in report.skipped
        ]
    ]
    return pd.DataFrame.from_records(rows, columns=FAILURE_COLUMNS)


def write_result(result: AnnotatedResult, output_dir: str) -> None:
    variants_fp = os.path.join(output_dir, result.sample + OUTPUT_VARIANTS_SUFFIX)
    consequences_fp = os.path.join(output_dir, result.sample + OUTPUT_CONSEQUENCES_SUFFIX)

    logging.debug("Writing '%s'..." % variants_fp)
    get_variants_frame(list(result.annotated_variants)).to_csv(variants_fp, sep='\t', index=False)

    logging.debug("Writing '%s'..." % consequences_fp)
    get_consequences_frame(list(result.consequences)).to_csv(consequences_fp, sep='\t', index=False)


def write_report(report: RunReport, output_dir: str, skipped: list[SkippedRecord] | None = None) -> None:
    for result in report.completed:
        write_result(result, output_dir)

    failures = get_failures_frame(report, skipped=skipped)
    if not failures.empty:
        failures_fp = os.path.join(output_dir, OUTPUT_FAILURES_FILE_NAME)
        logging.warning("%d failures reported in '%s'." % (failures.shape[0], failures_fp))
        failures.to_csv(failures_fp, sep='\t', index=False)
