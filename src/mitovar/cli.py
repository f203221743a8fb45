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

import errno
from functools import wraps
import logging
import os
import sys
from typing import Optional

import click
import pandas as pd

from . import __version__
from .annotation_index import GenomeAnnotationIndex
from .consensus import consensus, to_fasta
from .config import RunConfig
from .constants import OUTPUT_CONFIG_FILE_NAME
from .context import AnnotationContext
from .errors import ConfigurationError, MitovarError
from .impact import summarize_impact
from .loaders.vcf import load_variant_set
from .pipeline import PipelineOrchestrator
from .reference import ReferenceSequence
from .report import write_report


existing_file = click.Path(exists=True, file_okay=True, dir_okay=False)
writable_dir = click.Path(exists=True, file_okay=False, dir_okay=True, writable=True)


def set_logger(ctx: click.Context, param: click.Parameter, value: str) -> None:
    logging.basicConfig(level=logging._nameToLevel[value.upper()])


annotation_option = click.option(
    '--annotation', 'annotation_fp', type=existing_file, help="Genome annotation table file path")


def common_params(f):
    @click.option(
        '--log',
        default='WARNING',
        type=click.Choice(list(logging._nameToLevel.keys()), case_sensitive=False),
        callback=set_logger,
        expose_value=False,
        is_eager=True,
        help="Logging level")
    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except (ConfigurationError, PermissionError, FileNotFoundError) as ex:
            logging.critical(ex)
            sys.exit(1)

    return wrapper


def run_annotate(config: RunConfig) -> None:

    # Check output directory
    if not os.path.isdir(config.output_dir):
        raise ConfigurationError("Not a directory: '%s'!" % config.output_dir)

    # Check input files
    for fp in config.input_file_paths:
        if not os.path.isfile(fp):
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), fp)

    # Load shared resources
    context = AnnotationContext.load(
        config.ref_fasta_fp,
        annotation_fp=config.annotation_fp,
        codon_table_fp=config.codon_table_fp)

    # Load variant calls
    variant_sets = []
    skipped = []
    for fp in config.vcf_fps:
        variant_set, vcf_skipped = load_variant_set(fp)
        variant_sets.append(variant_set)
        skipped.extend(vcf_skipped)

    report = PipelineOrchestrator(
        context,
        filter_low_quality=config.filter_low_quality,
        compute_aa_changes=config.compute_aa_changes
    ).run(variant_sets, parallel=config.parallel, workers=config.workers)

    write_report(report, config.output_dir, skipped=skipped)

    config_fp: str = config.get_output_file_path(OUTPUT_CONFIG_FILE_NAME)
    try:
        config.write(config_fp)
    except (PermissionError, IsADirectoryError):
        logging.error("Failed to write configuration to '%s'!" % config_fp)


@click.group(invoke_without_command=True)
@click.option('-c', '--config', 'config_fp', type=existing_file, help="Configuration file path")
@click.version_option(__version__)
@click.pass_context
def main(ctx: click.Context, config_fp: Optional[str]):
    if ctx.invoked_subcommand is None:
        if not config_fp:
            raise click.UsageError("Configuration required if no subcommand is specified!")

        try:
            config = RunConfig.load(config_fp)

            # Check application version
            if config.app_version != __version__:
                logging.warning(
                    "Application version in configuration differs (%s vs. %s)!" %
                    (config.app_version, __version__))

            run_annotate(config)

        except ConfigurationError as ex:
            logging.critical(ex)
            ctx.exit(1)

        except (PermissionError, FileNotFoundError) as ex:
            logging.critical(ex)
            ctx.exit(1)

        ctx.exit(0)


@main.command()
@click.argument('vcf_fps', nargs=-1, required=True, type=existing_file, metavar='VCF...')
@click.option('--reference', 'ref_fasta_fp', required=True, type=existing_file, help="Reference FASTA file path")
@click.option('--output', 'output_dir', required=True, type=writable_dir, help="Output directory")
@click.option('--codon-table', 'codon_table_fp', type=existing_file, help="Codon table file path")
@click.option('--filter-low-quality', is_flag=True, help="Drop variants not passing the upstream filters")
@click.option('--no-aa-changes', is_flag=True, help="Skip the amino acid consequence prediction")
@click.option('--parallel', is_flag=True, help="Process the samples in parallel")
@click.option('--workers', type=click.IntRange(min=1), help="Number of parallel workers")
@annotation_option
@common_params
def annotate(
    vcf_fps: tuple[str, ...],
    ref_fasta_fp: str,
    output_dir: str,
    annotation_fp: Optional[str],
    codon_table_fp: Optional[str],
    filter_low_quality: bool,
    no_aa_changes: bool,
    parallel: bool,
    workers: Optional[int]
):
    """Annotate the variant calls of one or more samples"""

    config = RunConfig(
        ref_fasta_fp=ref_fasta_fp,
        vcf_fps=list(vcf_fps),
        output_dir=output_dir,
        annotation_fp=annotation_fp,
        codon_table_fp=codon_table_fp,
        filter_low_quality=filter_low_quality,
        compute_aa_changes=not no_aa_changes,
        parallel=parallel,
        workers=workers)

    run_annotate(config)


@main.command()
@click.argument('vcf_fps', nargs=-1, required=True, type=existing_file, metavar='VCF...')
@click.option('--include-low-quality', is_flag=True, help="Include variants not passing the upstream filters")
@annotation_option
@common_params
def tally(vcf_fps: tuple[str, ...], annotation_fp: Optional[str], include_low_quality: bool):
    """Count variants by annotated region class"""

    context = AnnotationContext.build(
        None,
        index=GenomeAnnotationIndex.load(annotation_fp) if annotation_fp else None)

    counts = {}
    for fp in vcf_fps:
        variant_set, _ = load_variant_set(fp)
        counts[variant_set.sample] = variant_set.tally(context, filter_low_quality=not include_low_quality)

    df = pd.DataFrame.from_dict(counts, orient='index').fillna(0).astype(int)
    click.echo(df.to_csv(sep='\t', index_label='sample'), nl=False)


@main.command(name='consensus')
@click.argument('vcf_fp', type=existing_file, metavar='VCF')
@click.option('--reference', 'ref_fasta_fp', required=True, type=existing_file, help="Reference FASTA file path")
@click.option('--output', 'output_fp', required=True, type=click.Path(dir_okay=False, writable=True), help="Output FASTA file path")
@common_params
def consensus_cmd(vcf_fp: str, ref_fasta_fp: str, output_fp: str):
    """Build a sample consensus sequence from its PASS-ing substitutions"""

    reference = ReferenceSequence.load(ref_fasta_fp)
    variant_set, _ = load_variant_set(vcf_fp)

    try:
        s = consensus(variant_set, reference)
    except MitovarError as ex:
        logging.critical(ex)
        sys.exit(1)

    with open(output_fp, 'w') as fh:
        fh.write(to_fasta(variant_set.sample, s))


@main.command()
@click.argument('vcf_fp', type=existing_file, metavar='VCF')
@annotation_option
@common_params
def impact(vcf_fp: str, annotation_fp: Optional[str]):
    """Look up the MitImpact records of the coding variants of a sample"""

    context = AnnotationContext.build(
        None,
        index=GenomeAnnotationIndex.load(annotation_fp) if annotation_fp else None)

    variant_set, _ = load_variant_set(vcf_fp)
    summary = summarize_impact(variant_set, context)

    if summary.unavailable:
        logging.warning("Impact data unavailable for %d variants." % len(summary.unavailable))

    click.echo(summary.table.to_csv(sep='\t', index=False), nl=False)
