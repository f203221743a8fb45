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

from contextlib import nullcontext
import pickle
import pytest
from mitovar.annotation_index import GenomeAnnotationIndex, get_default_annotation_index, load_annotation_table
from mitovar.enums import RegionClass
from mitovar.errors import ConfigurationError
from .constants import ANNOTATION_ROWS, CONTIG
from .utils import get_index, write_annotation_table


@pytest.mark.parametrize('pos,exp_genes', [
    (1, ['CTRL']),
    (21, ['GA']),
    (50, ['GA']),
    (51, ['GA', 'GB']),
    (59, ['GA', 'GB']),
    (60, ['GB']),
    (110, ['GM']),
    (118, [])
])
def test_overlaps(pos, exp_genes):
    index = get_index()
    assert [r.gene for r in index.overlaps(pos)] == exp_genes


def test_overlaps_order_duplicate_starts():
    rows = [
        (CONTIG, 30, 40, '+', 'Z', RegionClass.CODING),
        (CONTIG, 10, 50, '+', 'Y', RegionClass.TRNA),
        (CONTIG, 30, 35, '+', 'X', RegionClass.CODING)
    ]
    index = get_index(rows)

    # Start ascending, table order for equal starts
    assert [r.gene for r in index.overlaps(32)] == ['Y', 'Z', 'X']
    assert [r.gene for r in index.coding_overlaps(32)] == ['Z', 'X']


def test_coding_intervals():
    index = get_index()
    genes = [r.gene for r in index.coding_intervals()]
    assert genes == ['GA', 'GB', 'GM']
    assert all(r.region == RegionClass.CODING for r in index.coding_intervals())


def test_get():
    index = get_index()
    assert index.get('GB').start == 51
    assert index.get('missing') is None


def test_empty_index():
    with pytest.raises(ConfigurationError):
        GenomeAnnotationIndex([])


def test_index_pickle():
    index = get_index()
    index_b = pickle.loads(pickle.dumps(index))
    assert list(index_b) == list(index)
    assert [r.gene for r in index_b.overlaps(55)] == ['GA', 'GB']


def test_load_annotation_table(tmp_path):
    fp = tmp_path / 'annot.tsv'
    write_annotation_table(fp)
    intervals = load_annotation_table(str(fp))
    assert len(intervals) == len(ANNOTATION_ROWS)
    assert intervals[2].gene == 'GA'
    assert intervals[4].strand.is_minus


@pytest.mark.parametrize('row,valid', [
    ((CONTIG, '1', '10', '+', 'A', 'coding'), True),
    ((CONTIG, 'x', '10', '+', 'A', 'coding'), False),
    ((CONTIG, '1', '1.5', '+', 'A', 'coding'), False),
    ((CONTIG, '10', '1', '+', 'A', 'coding'), False),
    ((CONTIG, '1', '10', '*', 'A', 'coding'), False),
    ((CONTIG, '1', '10', '+', 'A', 'intron'), False),
    ((CONTIG, '1', '10', '+', '', 'coding'), False),
    (('chr1', '1', '10', '+', 'A', 'coding'), False),
    ((CONTIG, '1', '10', '+', 'A'), False)
])
def test_load_annotation_table_rows(tmp_path, row, valid):
    fp = tmp_path / 'annot.tsv'
    write_annotation_table(fp, rows=[row])
    with pytest.raises(ConfigurationError) if not valid else nullcontext():
        load_annotation_table(str(fp))


def test_load_annotation_table_invalid_header(tmp_path):
    fp = tmp_path / 'annot.tsv'
    write_annotation_table(fp, header=['a', 'b', 'c', 'd', 'e', 'f'])
    with pytest.raises(ConfigurationError):
        load_annotation_table(str(fp))


def test_load_annotation_table_missing(tmp_path):
    with pytest.raises(ConfigurationError):
        GenomeAnnotationIndex.load(str(tmp_path / 'missing.tsv'))


def test_default_annotation_index():
    index = get_default_annotation_index()

    # Loaded once
    assert get_default_annotation_index() is index

    nd1 = index.get('ND1')
    assert (nd1.start, nd1.end) == (3307, 4262)
    assert nd1.region == RegionClass.CODING
    assert index.get('ND6').strand.is_minus
    assert len(index.coding_intervals()) == 13

    # ATP8 and ATP6 overlap
    assert [r.gene for r in index.overlaps(8530)] == ['ATP8', 'ATP6']
