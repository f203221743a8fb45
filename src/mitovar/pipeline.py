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

from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field, replace
from functools import partial
import logging
from typing import Any, Iterable, Mapping

from .context import AnnotationContext
from .decomposer import decompose
from .errors import ConfigurationError, MalformedVariantError, MitovarError, UnsupportedReferenceError
from .locator import locate
from .predictor import ConsequenceAnnotation, predict_all
from .reference import is_mt_contig
from .variant import AnnotatedVariant, VariantCall
from .variant_set import VariantSet


@dataclass(slots=True, frozen=True)
class SkippedRecord:
    sample: str
    index: int
    record: str
    reason: str


@dataclass(slots=True, frozen=True)
class SetFailure:
    index: int
    sample: str
    reason: str


@dataclass(slots=True, frozen=True)
class AnnotatedResult:
    sample: str
    annotated_variants: tuple[AnnotatedVariant, ...]
    consequences: tuple[ConsequenceAnnotation, ...]
    skipped: tuple[SkippedRecord, ...] = ()


@dataclass(slots=True, frozen=True)
class SetOutcome:
    result: AnnotatedResult | None
    failure: SetFailure | None


@dataclass(slots=True)
class RunReport:
    """Per-set results in input order (None where the set failed)"""

    results: list[AnnotatedResult | None] = field(default_factory=list)
    failures: list[SetFailure] = field(default_factory=list)

    @property
    def skipped(self) -> list[SkippedRecord]:
        return [
            s
            for r in self.results
            if r is not None
            for s in r.skipped
        ]

    @property
    def completed(self) -> list[AnnotatedResult]:
        return [r for r in self.results if r is not None]

    @property
    def is_complete(self) -> bool:
        return not self.failures and not self.skipped


def parse_record(record: Any) -> VariantCall:
    """Validate a variant call or build it from a raw mapping or tuple"""

    if isinstance(record, VariantCall):
        v = VariantCall.parse(
            record.chrom, record.pos, record.ref, record.alt,
            depth=record.depth, pass_filter=record.pass_filter)

        # Keep the annotation of annotated variants, normalising the call fields
        if isinstance(record, AnnotatedVariant):
            return replace(
                record,
                chrom=v.chrom, pos=v.pos, ref=v.ref, alt=v.alt,
                depth=v.depth, pass_filter=v.pass_filter)
        return v
    if isinstance(record, Mapping):
        try:
            return VariantCall.parse(**record)
        except TypeError as ex:
            raise MalformedVariantError(f"Invalid variant record: {ex}!")
    if isinstance(record, tuple):
        try:
            return VariantCall.parse(*record)
        except TypeError as ex:
            raise MalformedVariantError(f"Invalid variant record: {ex}!")
    raise MalformedVariantError(f"Invalid variant record type: {type(record).__name__}!")


def check_variant_reference(context: AnnotationContext, v: VariantCall) -> None:
    if context.reference is not None:
        context.reference.check_range(v.chrom, v.ref_range)
        return

    if not is_mt_contig(v.chrom):
        raise UnsupportedReferenceError(f"Unsupported contig '{v.chrom}'!")

    # Without a reference sequence, the genome length is inferred
    genome_range = context.genome_range
    if v.ref_range not in genome_range:
        raise UnsupportedReferenceError(
            f"Range {v.pos}-{v.ref_end} outside of the genome (1-{genome_range.end})!")


def _annotate_variant(
    context: AnnotationContext,
    filter_low_quality: bool,
    compute_aa_changes: bool,
    v: VariantCall
) -> tuple[AnnotatedVariant | None, list[ConsequenceAnnotation]]:
    av = locate(v, context, filter_low_quality=filter_low_quality)
    if av is None or not compute_aa_changes:
        return av, []
    return av, predict_all(decompose(av, context), context.codon_table)


def process_variant_set(
    context: AnnotationContext,
    filter_low_quality: bool,
    compute_aa_changes: bool,
    index: int,
    variant_set: VariantSet
) -> SetOutcome:
    sample = variant_set.sample
    skipped: list[SkippedRecord] = []
    annotated: list[AnnotatedVariant] = []
    consequences: list[ConsequenceAnnotation] = []

    def skip(i: int, record: Any, ex: Exception) -> None:
        logging.warning("Sample '%s': variant record %d skipped: %s" % (sample, i, ex))
        skipped.append(SkippedRecord(sample, i, str(record), str(ex)))

    try:

        # Validate records
        variants: list[tuple[int, VariantCall]] = []
        for i, record in enumerate(variant_set.variants):
            try:
                variants.append((i, parse_record(record)))
            except MalformedVariantError as ex:
                skip(i, record, ex)

        # Drop variants failing the upstream quality filters
        if filter_low_quality:
            variants = [(i, v) for i, v in variants if v.pass_filter]

        # Validate the reference contig and coordinates
        for _, v in variants:
            check_variant_reference(context, v)

        # Annotate
        for i, v in variants:
            try:
                av, cs = _annotate_variant(context, filter_low_quality, compute_aa_changes, v)
            except MalformedVariantError as ex:
                skip(i, v, ex)
                continue
            if av is not None:
                annotated.append(av)
                consequences.extend(cs)

    except (MitovarError, ValueError) as ex:
        logging.error("Sample '%s' (set %d) failed: %s" % (sample, index, ex))
        return SetOutcome(None, SetFailure(index, sample, str(ex)))

    logging.info(
        "Sample '%s': %d variants annotated, %d consequences, %d records skipped." %
        (sample, len(annotated), len(consequences), len(skipped)))

    return SetOutcome(
        AnnotatedResult(sample, tuple(annotated), tuple(consequences), tuple(skipped)),
        None)


class PipelineOrchestrator:
    __slots__ = {'context', 'filter_low_quality', 'compute_aa_changes'}

    def __init__(
        self,
        context: AnnotationContext,
        filter_low_quality: bool = False,
        compute_aa_changes: bool = True
    ) -> None:
        if context is None:
            raise ConfigurationError("Missing annotation context!")
        if compute_aa_changes:
            context.check_reference()

        self.context = context
        self.filter_low_quality = filter_low_quality
        self.compute_aa_changes = compute_aa_changes

    def run(
        self,
        variant_sets: Iterable[VariantSet],
        parallel: bool = False,
        workers: int | None = None
    ) -> RunReport:
        """Annotate each variant set, returning results in input order"""

        sets = list(variant_sets)
        f = partial(
            process_variant_set,
            self.context,
            self.filter_low_quality,
            self.compute_aa_changes)

        logging.info("Processing %d variant sets%s..." % (len(sets), ' in parallel' if parallel else ''))

        if parallel and len(sets) > 1:
            with ProcessPoolExecutor(max_workers=workers) as executor:
                outcomes = list(executor.map(f, range(len(sets)), sets))
        else:
            outcomes = list(map(f, range(len(sets)), sets))

        report = RunReport(
            results=[o.result for o in outcomes],
            failures=[o.failure for o in outcomes if o.failure is not None])

        if report.failures:
            logging.warning("%d of %d variant sets failed!" % (len(report.failures), len(sets)))

        return report


def run(
    context: AnnotationContext,
    variant_sets: Iterable[VariantSet],
    filter_low_quality: bool = False,
    compute_aa_changes: bool = True,
    parallel: bool = False,
    workers: int | None = None
) -> RunReport:
    return PipelineOrchestrator(
        context,
        filter_low_quality=filter_low_quality,
        compute_aa_changes=compute_aa_changes
    ).run(variant_sets, parallel=parallel, workers=workers)
