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
import pytest
from mitovar.constants import RCRS_LENGTH
from mitovar.enums import GenomeBuild
from mitovar.errors import ConfigurationError, UnsupportedReferenceError
from mitovar.loaders.fasta import load_mt_sequence
from mitovar.reference import ReferenceSequence, is_mt_contig
from mitovar.uint_range import UIntRange
from .constants import CONTIG, REF_SEQ
from .utils import get_reference, write_fasta


def get_build_sequence(marker):
    return 'A' * 522 + marker + 'G' * (RCRS_LENGTH - 524)


@pytest.mark.parametrize('contig,valid', [
    ('chrM', True),
    ('MT', True),
    ('NC_012920.1', True),
    ('chr1', False),
    ('chrm', False)
])
def test_is_mt_contig(contig, valid):
    assert is_mt_contig(contig) == valid


@pytest.mark.parametrize('s,valid', [
    ('ACGT', True),
    ('acgtn', True),
    ('ACGTX', False),
    ('', False)
])
def test_reference_from_str(s, valid):
    with pytest.raises(ConfigurationError) if not valid else nullcontext():
        ref = ReferenceSequence.from_str(s)

    if valid:
        assert ref.s == s.upper()
        assert ref.contig == 'chrM'


@pytest.mark.parametrize('marker,build', [
    ('AC', GenomeBuild.RCRS),
    ('NN', GenomeBuild.RSRS),
    ('GG', GenomeBuild.OTHER)
])
def test_reference_genome_build(marker, build):
    assert ReferenceSequence.from_str(get_build_sequence(marker)).genome_build == build


def test_reference_genome_build_length():
    assert get_reference().genome_build == GenomeBuild.OTHER


@pytest.mark.parametrize('r,exp', [
    (UIntRange(1, 4), 'GATC'),
    (UIntRange(21, 23), 'ATG'),
    (UIntRange(120, 120), 'C')
])
def test_reference_substr(r, exp):
    assert get_reference().substr(r) == exp


@pytest.mark.parametrize('contig,r,valid', [
    ('chrM', UIntRange(1, 1), True),
    ('MT', UIntRange(119, 120), True),
    ('chrM', UIntRange(120, 121), False),
    ('chr1', UIntRange(1, 1), False)
])
def test_reference_check_range(contig, r, valid):
    with pytest.raises(UnsupportedReferenceError) if not valid else nullcontext():
        get_reference().check_range(contig, r)


def test_reference_replace_substr():
    ref = get_reference()
    s = ref.replace_substr(UIntRange(21, 23), 'GG')
    assert s == 'GATCACAGGTCTATCACCCT' + 'GG' + REF_SEQ[23:]


def test_load_reference(tmp_path):
    fp = str(tmp_path / 'ref.fa')
    write_fasta(fp, s=REF_SEQ.lower())

    ref = ReferenceSequence.load(fp)
    assert ref.contig == CONTIG
    assert ref.s == REF_SEQ


def test_load_mt_sequence_multi(tmp_path):
    fp = str(tmp_path / 'ref.fa')
    with open(fp, 'w') as fh:
        fh.write(">chr1\nACGTACGT\n>MT\nGATCACAGG\n")

    assert load_mt_sequence(fp) == ('MT', 'GATCACAGG')


def test_load_mt_sequence_single(tmp_path):
    fp = str(tmp_path / 'ref.fa')
    write_fasta(fp, name='seq1')

    assert load_mt_sequence(fp) == ('seq1', REF_SEQ)


def test_load_mt_sequence_not_found(tmp_path):
    fp = str(tmp_path / 'ref.fa')
    with open(fp, 'w') as fh:
        fh.write(">chr1\nACGTACGT\n>chr2\nGATCACAGG\n")

    with pytest.raises(ConfigurationError):
        load_mt_sequence(fp)


def test_load_reference_missing(tmp_path):
    with pytest.raises(ConfigurationError):
        ReferenceSequence.load(str(tmp_path / 'missing.fa'))
