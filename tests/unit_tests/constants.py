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

from mitovar.enums import RegionClass

CONTIG = 'chrM'

# Reference layout (one-based, closed)
#  1-10     CTRL (control)
#  11-20    TA (tRNA)
#  21-59    GA (coding, +)
#  51-80    GB (coding, +), overlapping GA
#  81-110   GM (coding, -)
#  111-115  NC (noncoding)
#  116-120  unannotated

PREFIX = 'GATCACAGGTCTATCACCCT'

GA_CODONS = [
    'ATG', 'CTT', 'AAA', 'TGG', 'GGA', 'CCC', 'TTT',
    'GAA', 'CAT', 'AGC', 'ACT', 'GTA', 'TAA'
]

GB_TAIL_CODONS = ['CGA', 'TCA', 'GCT', 'TTC', 'AAG', 'CTA', 'GAT']

GM_CODONS = ['TTA', 'CAT', 'GGC', 'ATC', 'GAT', 'TGC', 'AAC', 'CCG', 'TTG', 'GAC']

SUFFIX = 'AAAAACCCCC'

REF_SEQ = ''.join([PREFIX, *GA_CODONS, *GB_TAIL_CODONS, *GM_CODONS, SUFFIX])

ANNOTATION_ROWS = [
    (CONTIG, 1, 10, '+', 'CTRL', RegionClass.CONTROL),
    (CONTIG, 11, 20, '+', 'TA', RegionClass.TRNA),
    (CONTIG, 21, 59, '+', 'GA', RegionClass.CODING),
    (CONTIG, 51, 80, '+', 'GB', RegionClass.CODING),
    (CONTIG, 81, 110, '-', 'GM', RegionClass.CODING),
    (CONTIG, 111, 115, '+', 'NC', RegionClass.NONCODING)
]

GA_START = 21
GM_START = 81
UNANNOTATED_POS = 118
