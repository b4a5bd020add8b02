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
from typing import Any, Dict, List, Optional, Union

from seriesmeta.interfaces.exception import RequiredMetadataMissing
from seriesmeta.interfaces.provider import MetadataProvider
from seriesmeta.utils.dicom.datamodel import DicomDateValue, DicomTimeValue, PETInstanceMetadata
from seriesmeta.utils.dicom.metadata import (
    GENERAL_SERIES_MODULE,
    PATIENT_STUDY_MODULE,
    PET_IMAGE_MODULE,
    PET_ISOTOPE_MODULE,
    PET_SERIES_MODULE,
)

logger = logging.getLogger(__name__)


def convert_date_to_string(date: DicomDateValue) -> str:
    """Render a structured date as YYYYMMDD; strings are returned untouched"""
    if isinstance(date, str):
        return date
    return f"{date.year}{date.month:02d}{date.day:02d}"


def convert_time_to_string(time: DicomTimeValue) -> str:
    """Render a structured time as HHMMSS.ffffff; strings are returned untouched"""
    if isinstance(time, str):
        return time

    hours = f"{time.hours or '00'}".zfill(2)
    minutes = f"{time.minutes or '00'}".zfill(2)
    seconds = f"{time.seconds or '00'}".zfill(2)
    fractional_seconds = f"{time.fractional_seconds or '000000'}".ljust(6, "0")
    return f"{hours}{minutes}{seconds}.{fractional_seconds}"


def _split_corrected_image(corrected_image: Union[str, List[str]]) -> List[str]:
    # some servers send CorrectedImage as one 'DECY\\ATTN\\...' string instead of a list of values
    if isinstance(corrected_image, str):
        return corrected_image.split("\\")
    return list(corrected_image)


def get_pt_image_id_instance_metadata(image_id: str, metadata: MetadataProvider) -> PETInstanceMetadata:
    """
    Collect the attributes needed to compute SUV scaling factors for one PET image.

    :param image_id: the image id to resolve
    :param metadata: provider of the PET isotope, general series, patient study and PET series/image modules
    :raises RequiredMetadataMissing: when the isotope module or any required attribute is missing
    """
    pet_sequence_module: Optional[Dict[str, Any]] = metadata.get(PET_ISOTOPE_MODULE, image_id)
    if not pet_sequence_module:
        raise RequiredMetadataMissing(f"{PET_ISOTOPE_MODULE} metadata is required ({image_id})")

    general_series_module = metadata.get(GENERAL_SERIES_MODULE, image_id) or {}
    patient_study_module = metadata.get(PATIENT_STUDY_MODULE, image_id) or {}
    pt_series_module = metadata.get(PET_SERIES_MODULE, image_id) or {}
    pt_image_module = metadata.get(PET_IMAGE_MODULE, image_id) or {}

    radiopharmaceutical_info = pet_sequence_module.get("radiopharmaceutical_info") or {}

    series_date = general_series_module.get("series_date")
    series_time = general_series_module.get("series_time")
    acquisition_date = general_series_module.get("acquisition_date")
    acquisition_time = general_series_module.get("acquisition_time")
    patient_weight = patient_study_module.get("patient_weight")
    corrected_image = pt_series_module.get("corrected_image")
    units = pt_series_module.get("units")
    decay_correction = pt_series_module.get("decay_correction")
    total_dose = radiopharmaceutical_info.get("radionuclide_total_dose")
    half_life = radiopharmaceutical_info.get("radionuclide_half_life")
    start_date_time = radiopharmaceutical_info.get("radiopharmaceutical_start_date_time")
    start_time = radiopharmaceutical_info.get("radiopharmaceutical_start_time")

    required = {
        "SeriesDate": series_date,
        "SeriesTime": series_time,
        "PatientWeight": patient_weight,
        "AcquisitionDate": acquisition_date,
        "AcquisitionTime": acquisition_time,
        "CorrectedImage": corrected_image,
        "Units": units,
        "DecayCorrection": decay_correction,
        "RadionuclideTotalDose": total_dose,
        "RadionuclideHalfLife": half_life,
    }
    missing = [k for k, v in required.items() if v is None]
    # SeriesDate is accepted in place of a radiopharmaceutical start date/time
    if start_date_time is None and series_date is None and start_time is None:
        missing.append("RadiopharmaceuticalStartDateTime")
    if missing:
        raise RequiredMetadataMissing(f"required metadata are missing ({image_id}): {', '.join(missing)}")

    instance_metadata = PETInstanceMetadata(
        CorrectedImage=_split_corrected_image(corrected_image),
        Units=units,
        RadionuclideHalfLife=half_life,
        RadionuclideTotalDose=total_dose,
        DecayCorrection=decay_correction,
        PatientWeight=patient_weight,
        SeriesDate=convert_date_to_string(series_date),
        SeriesTime=convert_time_to_string(series_time),
        AcquisitionDate=convert_date_to_string(acquisition_date),
        AcquisitionTime=convert_time_to_string(acquisition_time),
    )

    if start_date_time:
        instance_metadata.RadiopharmaceuticalStartDateTime = convert_date_to_string(start_date_time)
    if start_time:
        instance_metadata.RadiopharmaceuticalStartTime = convert_time_to_string(start_time)

    if pt_image_module.get("frame_reference_time"):
        instance_metadata.FrameReferenceTime = pt_image_module["frame_reference_time"]
    if pt_image_module.get("actual_frame_duration"):
        instance_metadata.ActualFrameDuration = pt_image_module["actual_frame_duration"]
    if patient_study_module.get("patient_sex"):
        instance_metadata.PatientSex = patient_study_module["patient_sex"]
    if patient_study_module.get("patient_size"):
        instance_metadata.PatientSize = patient_study_module["patient_size"]

    return instance_metadata
