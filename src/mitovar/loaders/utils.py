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

import logging

from charset_normalizer import detect


def detect_encoding(fp: str):
    with open(fp, 'rb') as rfh:
        encoding = detect(rfh.read(10000))['encoding']
    logging.debug("File '%s' encoding: %s." % (fp, encoding))
    return encoding


def parse_int(s: str, label: str) -> int:
    try:
        return int(s)
    except ValueError:
        raise ValueError(f"invalid {label} '{s}'")
