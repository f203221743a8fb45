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


class MitovarError(Exception):
    pass


class ConfigurationError(MitovarError):
    """Missing or malformed annotation table, reference sequence or codon table"""

    pass


class MalformedVariantError(MitovarError, ValueError):
    """Invalid variant record, skipped without affecting the rest of the set"""

    pass


class UnsupportedReferenceError(MitovarError):
    """Variant outside of the known mitochondrial contig or its coordinates"""

    pass


class EnrichmentUnavailable(MitovarError):
    pass
