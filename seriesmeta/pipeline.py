# Copyright (c) MONAI Consortium
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#     http://www.apache.org/licenses/LICENSE-2.0
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from seriesmeta.config import settings
from seriesmeta.datastore.dicom import create_dicomweb_client
from seriesmeta.interfaces.exception import RequiredMetadataMissing, RetrievalFailure, ScalingComputationFailure
from seriesmeta.utils.dicom.attributes import (
    ATTRB_MODALITY,
    ATTRB_SERIESINSTANCEUID,
    ATTRB_SOPINSTANCEUID,
    PET_MODALITY,
)
from seriesmeta.utils.dicom.datamodel import CalibrationRecord, PETInstanceMetadata, ScalingFactor
from seriesmeta.utils.dicom.imageid import build_image_id
from seriesmeta.utils.dicom.metadata import WADORSMetaDataManager
from seriesmeta.utils.dicom.multiframe import convert_multiframe_image_ids
from seriesmeta.utils.dicom.pet import get_pt_image_id_instance_metadata
from seriesmeta.utils.dicom.spacing import get_pixel_spacing_information, to_calibration_record
from seriesmeta.utils.dicom.suv import calculate_suv_scaling_factors
from seriesmeta.utils.dicom.util import get_value
from seriesmeta.utils.providers import CalibratedPixelSpacingMetadataProvider, ScalingMetadataProvider

logger = logging.getLogger(__name__)

SUVCalculator = Callable[[List[PETInstanceMetadata]], List[ScalingFactor]]


class PipelineState(str, Enum):
    IDLE = "Idle"
    FETCHING_INSTANCES = "FetchingInstances"
    BUILDING_IDENTIFIERS = "BuildingIdentifiers"
    EXPANDING_FRAMES = "ExpandingFrames"
    CALIBRATING_SPACING = "CalibratingSpacing"
    RESOLVING_PET = "ResolvingPET"
    COMPUTING_SCALING = "ComputingScaling"
    DONE = "Done"


class PipelineResult:
    def __init__(
        self,
        image_ids: List[str],
        calibration: CalibratedPixelSpacingMetadataProvider,
        scaling: ScalingMetadataProvider,
        metadata: WADORSMetaDataManager,
        modality: Optional[str] = None,
    ):
        self.image_ids = image_ids
        self.calibration = calibration
        self.scaling = scaling
        self.metadata = metadata
        self.modality = modality

    def __len__(self):
        return len(self.image_ids)

    def __iter__(self):
        return iter(self.image_ids)

    def to_json(self) -> List[Dict[str, Any]]:
        result = []
        for image_id in self.image_ids:
            calibration = self.calibration.get(CalibratedPixelSpacingMetadataProvider.type, image_id)
            scaling = self.scaling.get(ScalingMetadataProvider.type, image_id)
            result.append(
                {
                    "image_id": image_id,
                    "calibrated_pixel_spacing": calibration.model_dump(mode="json") if calibration else None,
                    "scaling": scaling.model_dump(exclude_none=True) if scaling else None,
                }
            )
        return result


class ImageIdPipeline:
    """
    Turns the metadata of one series, as retrieved over WADO-RS, into the list of
    per-frame image ids to display; calibrated pixel spacing and (for PET) SUV
    scaling factors are kept aside per image id.

    A batch never fails because of the metadata of a single instance; only a
    failure to retrieve the series metadata is fatal.
    """

    def __init__(
        self,
        wado_rs_root: Optional[str] = None,
        client=None,
        metadata: Optional[WADORSMetaDataManager] = None,
        calibration: Optional[CalibratedPixelSpacingMetadataProvider] = None,
        scaling: Optional[ScalingMetadataProvider] = None,
        suv_calculator: Optional[SUVCalculator] = None,
        max_workers: Optional[int] = None,
        suv_enabled: Optional[bool] = None,
    ):
        self.client = client if client is not None else create_dicomweb_client(wado_rs_root)
        self.wado_rs_root = wado_rs_root if wado_rs_root else self.client.base_url
        self.metadata = metadata if metadata is not None else WADORSMetaDataManager()
        self.calibration = calibration if calibration is not None else CalibratedPixelSpacingMetadataProvider()
        self.scaling = scaling if scaling is not None else ScalingMetadataProvider()
        self.suv_calculator = suv_calculator if suv_calculator else calculate_suv_scaling_factors
        self.max_workers = max_workers if max_workers else settings.SERIESMETA_WORKERS
        self.suv_enabled = settings.SERIESMETA_SUV_ENABLED if suv_enabled is None else suv_enabled
        self.state = PipelineState.IDLE

    def _transition(self, state: PipelineState):
        logger.debug(f"{self.state.value} => {state.value}")
        self.state = state

    def run(self, study_id: str, series_id: str, sop_instance_id: Optional[str] = None) -> PipelineResult:
        start = time.time()

        self._transition(PipelineState.FETCHING_INSTANCES)
        instances = self.fetch_instances(study_id, series_id, sop_instance_id)
        modality = get_value(instances[0], ATTRB_MODALITY) if instances else None
        logger.info(f"Series: {series_id}; Modality: {modality}; Instances: {len(instances)}")

        self._transition(PipelineState.BUILDING_IDENTIFIERS)
        image_ids = self.build_image_ids(instances, study_id, series_id, sop_instance_id)

        self._transition(PipelineState.EXPANDING_FRAMES)
        image_ids = convert_multiframe_image_ids(image_ids, self.metadata.number_of_frames)

        self._transition(PipelineState.CALIBRATING_SPACING)
        self.calibrate(image_ids)

        if modality == PET_MODALITY and self.suv_enabled:
            self._transition(PipelineState.RESOLVING_PET)
            pet_metadata = self.resolve_pet(image_ids)

            self._transition(PipelineState.COMPUTING_SCALING)
            if pet_metadata:
                try:
                    factors = self.compute_scaling(pet_metadata)
                except ScalingComputationFailure as e:
                    logger.exception(e.msg)
                else:
                    for (image_id, _), factor in zip(pet_metadata, factors):
                        self.scaling.add(image_id, factor)

        self._transition(PipelineState.DONE)
        logger.info(f"Total image ids: {len(image_ids)}; Time taken: {time.time() - start:.3f} (sec)")
        return PipelineResult(image_ids, self.calibration, self.scaling, self.metadata, modality)

    def fetch_instances(
        self, study_id: str, series_id: str, sop_instance_id: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        try:
            instances = self.client.retrieve_series_metadata(study_id, series_id)
        except Exception as e:
            raise RetrievalFailure(f"Failed to retrieve metadata of series {series_id}: {e}") from e

        instances = list(instances) if instances else []
        if sop_instance_id:
            instances = [i for i in instances if get_value(i, ATTRB_SOPINSTANCEUID) == sop_instance_id]
        return instances

    def build_image_ids(
        self,
        instances: Sequence[Dict[str, Any]],
        study_id: str,
        series_id: str,
        sop_instance_id: Optional[str] = None,
    ) -> List[str]:
        image_ids = []
        for instance in instances:
            image_id = build_image_id(
                self.wado_rs_root,
                study_id,
                get_value(instance, ATTRB_SERIESINSTANCEUID, series_id),
                sop_instance_id if sop_instance_id else get_value(instance, ATTRB_SOPINSTANCEUID),
            )
            self.metadata.add(image_id, instance)
            image_ids.append(image_id)
        return image_ids

    def _calibration_record(self, image_id: str) -> Optional[CalibrationRecord]:
        ds = self.metadata.get_dataset(image_id)
        if ds is None:
            return None

        try:
            return to_calibration_record(get_pixel_spacing_information(ds))
        except (AttributeError, TypeError, ValueError) as e:
            logger.warning(f"Unable to determine pixel spacing of {image_id}: {e}")
            return None

    def calibrate(self, image_ids: Sequence[str]) -> int:
        if self.max_workers > 1 and len(image_ids) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="Calibrate") as executor:
                records = list(executor.map(self._calibration_record, image_ids))
        else:
            records = [self._calibration_record(image_id) for image_id in image_ids]

        count = 0
        for image_id, record in zip(image_ids, records):
            if record:
                self.calibration.add(image_id, record)
                count += 1

        logger.debug(f"Calibrated pixel spacing for {count} / {len(image_ids)} image ids")
        return count

    def resolve_pet(self, image_ids: Sequence[str]) -> List[Tuple[str, PETInstanceMetadata]]:
        result = []
        for image_id in image_ids:
            try:
                result.append((image_id, get_pt_image_id_instance_metadata(image_id, self.metadata)))
            except RequiredMetadataMissing as e:
                logger.warning(e.msg)
        return result

    def compute_scaling(self, pet_metadata: Sequence[Tuple[str, PETInstanceMetadata]]) -> List[ScalingFactor]:
        try:
            factors = self.suv_calculator([m for _, m in pet_metadata])
        except Exception as e:
            raise ScalingComputationFailure(f"Failed to compute SUV scaling factors: {e}") from e

        if len(factors) != len(pet_metadata):
            raise ScalingComputationFailure(
                f"SUV scaling factors ({len(factors)}) do not match instances ({len(pet_metadata)})"
            )
        return factors


def create_image_ids_and_cache_metadata(
    study_id: str,
    series_id: str,
    wado_rs_root: Optional[str] = None,
    sop_instance_id: Optional[str] = None,
    client=None,
    metadata: Optional[WADORSMetaDataManager] = None,
    calibration: Optional[CalibratedPixelSpacingMetadataProvider] = None,
    scaling: Optional[ScalingMetadataProvider] = None,
    suv_calculator: Optional[SUVCalculator] = None,
    max_workers: Optional[int] = None,
) -> PipelineResult:
    pipeline = ImageIdPipeline(
        wado_rs_root=wado_rs_root,
        client=client,
        metadata=metadata,
        calibration=calibration,
        scaling=scaling,
        suv_calculator=suv_calculator,
        max_workers=max_workers,
    )
    return pipeline.run(study_id, series_id, sop_instance_id)
