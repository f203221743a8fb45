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

from mitovar.annotation_index import GenomeAnnotationIndex, GenomicInterval
from mitovar.codon_table import get_default_codon_table
from mitovar.constants import ANNOTATION_TABLE_COLUMNS
from mitovar.context import AnnotationContext
from mitovar.reference import ReferenceSequence
from mitovar.strings.strand import Strand
from mitovar.variant import VariantCall

from .constants import ANNOTATION_ROWS, CONTIG, REF_SEQ


def get_interval(chrom, start, end, strand, gene, region):
    return GenomicInterval(
        start=start, end=end, chrom=chrom, strand=Strand(strand), gene=gene, region=region)


def get_index(rows=None):
    return GenomeAnnotationIndex([
        get_interval(*r)
        for r in (rows if rows is not None else ANNOTATION_ROWS)
    ])


def get_reference(s=REF_SEQ):
    return ReferenceSequence.from_str(s, contig=CONTIG)


def get_context(with_reference=True):
    return AnnotationContext(
        get_index(),
        get_reference() if with_reference else None,
        get_default_codon_table())


def get_variant(pos, ref, alt, pass_filter=True, chrom=CONTIG, depth=100):
    return VariantCall.parse(chrom, pos, ref, alt, depth=depth, pass_filter=pass_filter)


def write_annotation_table(fp, rows=None, header=None):
    with open(fp, 'w') as fh:
        fh.write('\t'.join(header or ANNOTATION_TABLE_COLUMNS) + '\n')
        for r in (rows if rows is not None else ANNOTATION_ROWS):
            fh.write('\t'.join(
                x.value if hasattr(x, 'value') else str(x)
                for x in r
            ) + '\n')


def write_fasta(fp, s=REF_SEQ, name=CONTIG):
    with open(fp, 'w') as fh:
        fh.write(f">{name}\n")
        for i in range(0, len(s), 60):
            fh.write(s[i:i + 60] + '\n')


VCF_HEADER = """##fileformat=VCFv4.2
##contig=<ID=chrM,length=120>
##FILTER=<ID=PASS,Description="All filters passed">
##FILTER=<ID=lowq,Description="Low quality">
##INFO=<ID=DP,Number=1,Type=Integer,Description="Read depth">
#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO
"""


def write_vcf(fp, records):
    with open(fp, 'w') as fh:
        fh.write(VCF_HEADER)
        for pos, ref, alt, ft, dp in records:
            fh.write(f"{CONTIG}\t{pos}\t.\t{ref}\t{alt}\t.\t{ft}\tDP={dp}\n")
