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

from enum import Enum


class RegionClass(str, Enum):
    CODING = 'coding'
    TRNA = 'tRNA'
    RRNA = 'rRNA'
    CONTROL = 'control'
    NONCODING = 'noncoding'


class ConsequenceClass(str, Enum):
    SYNONYMOUS = 'synonymous'
    MISSENSE = 'missense'
    NONSENSE = 'nonsense'
    READTHROUGH = 'readthrough'
    FRAMESHIFT = 'frameshift'
    UNKNOWN = 'unknown'


class VariantType(str, Enum):
    SNV = 'SNV'
    INDEL = 'indel'


class GenomeBuild(str, Enum):
    RCRS = 'rCRS'
    RSRS = 'RSRS'
    OTHER = 'other'
