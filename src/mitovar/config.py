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

import json
import logging
import os
from typing import Any, List, Optional

from pydantic import BaseModel, Field, ValidationError

from . import __version__ as APP_VERSION
from .errors import ConfigurationError


class RunConfig(BaseModel):

    app_version: str = Field(alias='appVersion', default=APP_VERSION)

    # Paths
    ref_fasta_fp: str = Field(alias='refFASTAFilePath')
    vcf_fps: List[str] = Field(alias='vcfFilePaths')
    output_dir: str = Field(alias='outputDirPath')
    annotation_fp: Optional[str] = Field(alias='annotationFilePath', default=None)
    codon_table_fp: Optional[str] = Field(alias='codonTableFilePath', default=None)

    # Processing
    filter_low_quality: bool = Field(alias='filterLowQuality', default=False)
    compute_aa_changes: bool = Field(alias='computeAAChanges', default=True)
    parallel: bool = Field(default=False)
    workers: Optional[int] = Field(default=None)

    class Config:
        populate_by_name = True

    def __init__(__pydantic_self__, **data: Any) -> None:
        super().__init__(**data)
        if not __pydantic_self__.is_valid():
            raise ConfigurationError("Invalid configuration!")

    @classmethod
    def load(cls, fp: str) -> 'RunConfig':
        with open(fp) as fh:
            try:
                config_dict = json.load(fh)
            except json.JSONDecodeError:
                raise ConfigurationError("Invalid configuration: not a JSON!")

        if not isinstance(config_dict, dict):
            raise ConfigurationError("Invalid configuration: not a JSON object!")

        try:
            return cls(**config_dict)
        except ValidationError as ex:
            raise ConfigurationError(f"Invalid configuration: {ex}")

    @property
    def input_file_paths(self) -> List[str]:
        fps: List[str] = [self.ref_fasta_fp, *self.vcf_fps]
        if self.annotation_fp is not None:
            fps.append(self.annotation_fp)
        if self.codon_table_fp is not None:
            fps.append(self.codon_table_fp)
        return fps

    def write(self, fp: str) -> None:
        with open(fp, 'w') as fh:
            fh.write(self.model_dump_json(by_alias=True))

    def is_valid(self) -> bool:
        success: bool = True

        if not self.vcf_fps:
            logging.error("No VCF file specified!")
            success = False

        if self.workers is not None and self.workers < 1:
            logging.error("Invalid number of workers: not strictly positive!")
            success = False

        return success

    def get_output_file_path(self, fp: str) -> str:
        return os.path.join(self.output_dir, fp)
