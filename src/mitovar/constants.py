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

# Stop symbol (codon table)
STOP = '*'

# Path to the package data directory
DATA_PATH = 'data'

# Default codon table file name (vertebrate mitochondrial code)
CODON_TABLE_FN = 'vertebrate_mito_codon_table.csv'

# Default genome annotation table file name
ANNOTATION_TABLE_FN = 'rcrs_annotation.tsv'

ANNOTATION_TABLE_COLUMNS = ['chrom', 'start', 'end', 'strand', 'gene', 'region']

# Mitochondrial contig names accepted as the same molecule
MT_CONTIGS = {'chrM', 'MT', 'M', 'rCRS', 'RSRS', 'NC_012920.1'}

# Revised Cambridge Reference Sequence length
RCRS_LENGTH = 16569

# One-based positions distinguishing rCRS from RSRS
RCRS_RSRS_MARKER_START = 523
RCRS_RSRS_MARKER_END = 524

# Output configuration file name
OUTPUT_CONFIG_FILE_NAME = 'config.json'

# Output file name suffixes
OUTPUT_VARIANTS_SUFFIX = '_variants.tsv'
OUTPUT_CONSEQUENCES_SUFFIX = '_consequences.tsv'
OUTPUT_FAILURES_FILE_NAME = 'failures.tsv'

# MitImpact REST API
MITIMPACT_URL = 'http://mitimpact.css-mendel.it/api/v2.0/genomic_position'
MITIMPACT_TIMEOUT = 10
MITIMPACT_FIELDS = [
    'genomic',
    'protein',
    'change',
    'APOGEE_boost_consensus',
    'MToolBox',
    'Mitomap_Phenotype',
    'Mitomap_Status',
    'OXPHOS_complex',
    'dbSNP_150_id',
    'Codon_substitution'
]
