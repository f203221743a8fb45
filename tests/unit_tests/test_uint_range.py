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
from mitovar.uint_range import UIntRange


@pytest.mark.parametrize('start,end,valid', [
    (1, 1, True),
    (0, 10, True),
    (10, 9, False),
    (-1, 5, False)
])
def test_uint_range_init(start, end, valid):
    with pytest.raises(ValueError) if not valid else nullcontext():
        r = UIntRange(start, end)

    if valid:
        assert len(r) == end - start + 1


@pytest.mark.parametrize('r,x,exp', [
    (UIntRange(5, 10), 5, True),
    (UIntRange(5, 10), 11, False),
    (UIntRange(5, 10), UIntRange(6, 10), True),
    (UIntRange(5, 10), UIntRange(9, 11), False)
])
def test_uint_range_contains(r, x, exp):
    assert (x in r) == exp


def test_uint_range_span():
    assert UIntRange.span([UIntRange(10, 12), UIntRange(3, 4), UIntRange(8, 20)]) == UIntRange(3, 20)


def test_uint_range_offset():
    r = UIntRange(5, 10)
    assert r.offset(-1) == UIntRange(4, 9)
    assert r.to_slice() == slice(5, 11)
    assert UIntRange.from_length(5, 3) == UIntRange(5, 7)
