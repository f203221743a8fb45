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

from __future__ import annotations

from collections.abc import Container
from dataclasses import dataclass
from typing import Iterable, Sized, TypeVar


UIntRangeT = TypeVar('UIntRangeT', bound='UIntRange')


@dataclass(slots=True, frozen=True)
class UIntRange(Sized, Container):
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid range [{self.start}, {self.end}]!")

    def __len__(self) -> int:
        return self.end - self.start + 1

    def __contains__(self, x) -> bool:
        if isinstance(x, int):
            return self.start <= x <= self.end
        elif isinstance(x, UIntRange):
            return x.start in self and x.end in self
        raise TypeError("Operand type not supported!")

    @classmethod
    def from_length(cls, start: int, length: int) -> UIntRange:
        if length < 1:
            raise ValueError("Invalid range length: not strictly positive!")
        return cls(start, start + length - 1)

    @classmethod
    def span(cls, ranges: Iterable[UIntRangeT]) -> UIntRange:
        return cls(
            min(r.start for r in ranges),
            max(r.end for r in ranges)
        )

    def to_slice(self, offset: int = 0) -> slice:
        return slice(self.start - offset, self.end - offset + 1)

    def offset(self, offset: int) -> UIntRange:
        return UIntRange(self.start + offset, self.end + offset)
