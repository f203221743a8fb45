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

import pytest
from mitovar.errors import ConfigurationError
from mitovar.loaders.vcf import get_sample_name_from_path, load_variant_set
from .utils import write_vcf


@pytest.mark.parametrize('fp,exp', [
    ('/data/sample1.vcf', 'sample1'),
    ('sample1.vcf.gz', 'sample1'),
    ('sample1.bcf', 'sample1'),
    ('sample1', 'sample1')
])
def test_get_sample_name_from_path(fp, exp):
    assert get_sample_name_from_path(fp) == exp


def test_load_variant_set(tmp_path):
    fp = str(tmp_path / 's1.vcf')
    write_vcf(fp, [
        (26, 'T', 'C', 'PASS', 100),
        (53, 'TG', 'CA', 'lowq', 20),
        (86, 'T', 'C,G', '.', 50),
        (24, 'C', '<DEL>', 'PASS', 10)
    ])

    variant_set, skipped = load_variant_set(fp)

    assert variant_set.sample == 's1'
    assert [(v.pos, v.ref, v.alt) for v in variant_set] == [
        (26, 'T', 'C'),
        (53, 'TG', 'CA'),
        (86, 'T', 'C'),
        (86, 'T', 'G')
    ]
    assert [v.pass_filter for v in variant_set] == [True, False, True, True]
    assert [v.depth for v in variant_set] == [100, 20, 50, 50]
    assert all(v.chrom == 'chrM' for v in variant_set)

    assert len(skipped) == 1
    assert skipped[0].sample == 's1'
    assert skipped[0].index == 4


def test_load_variant_set_sample(tmp_path):
    fp = str(tmp_path / 's1.vcf')
    write_vcf(fp, [(26, 'T', 'C', 'PASS', 100)])

    variant_set, _ = load_variant_set(fp, sample='sample_a')
    assert variant_set.sample == 'sample_a'
    assert len(variant_set) == 1


def test_load_variant_set_missing(tmp_path):
    with pytest.raises(ConfigurationError):
        load_variant_set(str(tmp_path / 'missing.vcf'))
