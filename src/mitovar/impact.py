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

"""
Optional pathogenicity impact enrichment (MitImpact)

Lookups never fail a run: unreachable services and empty responses are
recorded as unavailable enrichment.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging

import pandas as pd
import requests

from .constants import MITIMPACT_FIELDS, MITIMPACT_TIMEOUT, MITIMPACT_URL
from .context import AnnotationContext
from .errors import EnrichmentUnavailable
from .variant import AnnotatedVariant
from .variant_set import VariantSet


@dataclass(slots=True)
class ImpactSummary:
    table: pd.DataFrame
    unavailable: dict[str, str] = field(default_factory=dict)


class ImpactClient:
    __slots__ = {'session', 'url', 'timeout'}

    def __init__(
        self,
        session: requests.Session | None = None,
        url: str = MITIMPACT_URL,
        timeout: float = MITIMPACT_TIMEOUT
    ) -> None:
        self.session = session if session is not None else requests.Session()
        self.url = url
        self.timeout = timeout

    def fetch(self, position: str) -> pd.DataFrame:
        """Retrieve the impact records at a genomic position (start or start_end)"""

        try:
            res = self.session.get(f"{self.url}/{position}", timeout=self.timeout)
            res.raise_for_status()
            records = res.json().get('variants') or []
        except (requests.RequestException, ValueError, AttributeError) as ex:
            raise EnrichmentUnavailable(f"Impact lookup failed at position {position}: {ex}")

        df = pd.DataFrame.from_records(records)
        if df.empty:
            raise EnrichmentUnavailable(f"No impact data at position {position}")

        try:
            df['genomic'] = 'm.' + df.Start.astype(str) + df.Ref + '>' + df.Alt
            df['protein'] = 'p.' + df.AA_ref + df.AA_position.astype(str) + df.AA_alt
            df['change'] = df.Gene_symbol + ' ' + df.protein
        except AttributeError as ex:
            raise EnrichmentUnavailable(f"Unexpected impact data at position {position}: {ex}")

        return df.reindex(columns=MITIMPACT_FIELDS)


def _lookup(client: ImpactClient, v: AnnotatedVariant) -> pd.DataFrame:
    df = client.fetch(v.positions)

    # Prefer exact matches
    exact = df[df.genomic == v.hgvs]
    df = exact if not exact.empty else df

    return df.assign(variant_id=v.genomic_id)


def summarize_impact(
    variant_set: VariantSet,
    context: AnnotationContext,
    client: ImpactClient | None = None
) -> ImpactSummary:
    """Look up the impact of the coding variants of a sample"""

    client = client if client is not None else ImpactClient()
    frames: list[pd.DataFrame] = []
    unavailable: dict[str, str] = {}

    for v in variant_set.encoding(context):
        try:
            frames.append(_lookup(client, v))
        except EnrichmentUnavailable as ex:
            logging.info(str(ex))
            unavailable[v.genomic_id] = str(ex)

    table = (
        pd.concat(frames, ignore_index=True) if frames else
        pd.DataFrame(columns=[*MITIMPACT_FIELDS, 'variant_id'])
    )

    return ImpactSummary(table, unavailable)
