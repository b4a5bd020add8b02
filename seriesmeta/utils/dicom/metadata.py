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
import threading
from typing import Any, Callable, Dict, Optional

from pydicom.dataset import Dataset
from pydicom.valuerep import DA, TM

from seriesmeta.interfaces.provider import MetadataProvider
from seriesmeta.utils.dicom.attributes import ATTRB_NUMBEROFFRAMES
from seriesmeta.utils.dicom.datamodel import DicomDate, DicomTime
from seriesmeta.utils.dicom.imageid import get_frame_information, image_id_to_uri
from seriesmeta.utils.dicom.util import get_value, naturalize_dataset, remove_invalid_tags

logger = logging.getLogger(__name__)

MULTIFRAME_MODULE = "multiframeModule"
GENERAL_SERIES_MODULE = "generalSeriesModule"
PATIENT_STUDY_MODULE = "patientStudyModule"
PET_ISOTOPE_MODULE = "petIsotopeModule"
PET_SERIES_MODULE = "petSeriesModule"
PET_IMAGE_MODULE = "petImageModule"


def parse_da(value: Any) -> Optional[DicomDate]:
    try:
        date = DA(str(value).strip()) if value else None
    except (TypeError, ValueError):
        return None

    if date is None:
        return None
    return DicomDate(year=date.year, month=date.month, day=date.day)


def parse_tm(value: Any) -> Optional[DicomTime]:
    try:
        time = TM(str(value).strip()) if value else None
    except (TypeError, ValueError):
        return None

    if time is None:
        return None
    return DicomTime(
        hours=time.hour,
        minutes=time.minute,
        seconds=time.second,
        fractional_seconds=f"{time.microsecond:06d}" if time.microsecond else None,
    )


def _to_int(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _to_float(value: Any) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _string(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


class WADORSMetaDataManager(MetadataProvider):
    """
    Keeps the DICOM JSON metadata of every instance retrieved over WADO-RS and
    serves it back per image id, either raw or grouped into metadata modules.

    Metadata is stored under the URI form of the image id it was added with.
    Lookups for other frames of the same instance fall back to the metadata of
    frame 1.
    """

    def __init__(self):
        self._metadata: Dict[str, Dict[str, Any]] = {}
        self._datasets: Dict[str, Dataset] = {}
        self._lock = threading.Lock()

        self._modules: Dict[str, Callable[[Dataset, Dict[str, Any]], Optional[Dict[str, Any]]]] = {
            MULTIFRAME_MODULE: self._multiframe_module,
            GENERAL_SERIES_MODULE: self._general_series_module,
            PATIENT_STUDY_MODULE: self._patient_study_module,
            PET_ISOTOPE_MODULE: self._pet_isotope_module,
            PET_SERIES_MODULE: self._pet_series_module,
            PET_IMAGE_MODULE: self._pet_image_module,
        }

    def __len__(self):
        return len(self._metadata)

    def add(self, image_id: str, metadata: Dict[str, Any]) -> None:
        uri = image_id_to_uri(image_id)
        with self._lock:
            self._metadata[uri] = metadata
            self._datasets.pop(uri, None)

    def _resolve_uri(self, image_id: str) -> Optional[str]:
        uri = image_id_to_uri(image_id)
        if uri in self._metadata:
            return uri

        uri = image_id_to_uri(get_frame_information(image_id).frameless_image_id + "1")
        return uri if uri in self._metadata else None

    def get_metadata(self, image_id: str) -> Optional[Dict[str, Any]]:
        uri = self._resolve_uri(image_id)
        return self._metadata[uri] if uri else None

    def get_dataset(self, image_id: str) -> Optional[Dataset]:
        uri = self._resolve_uri(image_id)
        if uri is None:
            return None

        with self._lock:
            ds = self._datasets.get(uri)
            metadata = self._metadata.get(uri)
        if ds is not None:
            return ds
        if metadata is None:
            return None

        try:
            ds = naturalize_dataset(remove_invalid_tags(metadata))
        except (TypeError, ValueError, KeyError) as e:
            logger.warning(f"Unable to read metadata of {image_id}: {e}")
            return None

        with self._lock:
            # another thread may have naturalized the same instance meanwhile
            if self._metadata.get(uri) is metadata:
                ds = self._datasets.setdefault(uri, ds)
        return ds

    def number_of_frames(self, image_id: str) -> Optional[int]:
        return _to_int(get_value(self.get_metadata(image_id), ATTRB_NUMBEROFFRAMES))

    def get(self, type: str, image_id: str) -> Any:
        handler = self._modules.get(type)
        if handler is None:
            return None

        metadata = self.get_metadata(image_id)
        if metadata is None:
            return None

        if type == MULTIFRAME_MODULE:
            return handler(None, metadata)

        ds = self.get_dataset(image_id)
        return handler(ds, metadata) if ds is not None else None

    def _multiframe_module(self, ds, metadata):
        return {"NumberOfFrames": _to_int(get_value(metadata, ATTRB_NUMBEROFFRAMES))}

    def _general_series_module(self, ds, metadata):
        return {
            "modality": _string(ds.get("Modality")),
            "series_instance_uid": _string(ds.get("SeriesInstanceUID")),
            "series_number": _to_int(ds.get("SeriesNumber")),
            "study_instance_uid": _string(ds.get("StudyInstanceUID")),
            "series_date": parse_da(ds.get("SeriesDate")),
            "series_time": parse_tm(ds.get("SeriesTime")),
            "acquisition_date": parse_da(ds.get("AcquisitionDate")),
            "acquisition_time": parse_tm(ds.get("AcquisitionTime")),
        }

    def _patient_study_module(self, ds, metadata):
        return {
            "patient_age": _string(ds.get("PatientAge")),
            "patient_size": _to_float(ds.get("PatientSize")),
            "patient_sex": _string(ds.get("PatientSex")),
            "patient_weight": _to_float(ds.get("PatientWeight")),
        }

    def _pet_isotope_module(self, ds, metadata):
        sequence = ds.get("RadiopharmaceuticalInformationSequence")
        if not sequence:
            return None

        info = sequence[0]
        return {
            "radiopharmaceutical_info": {
                "radiopharmaceutical_start_time": parse_tm(info.get("RadiopharmaceuticalStartTime")),
                "radiopharmaceutical_start_date_time": _string(info.get("RadiopharmaceuticalStartDateTime")),
                "radionuclide_total_dose": _to_float(info.get("RadionuclideTotalDose")),
                "radionuclide_half_life": _to_float(info.get("RadionuclideHalfLife")),
            }
        }

    def _pet_series_module(self, ds, metadata):
        corrected_image = ds.get("CorrectedImage") or None
        if corrected_image is not None and not isinstance(corrected_image, str):
            corrected_image = [str(c) for c in corrected_image]

        return {
            "corrected_image": corrected_image,
            "units": _string(ds.get("Units")),
            "decay_correction": _string(ds.get("DecayCorrection")),
        }

    def _pet_image_module(self, ds, metadata):
        return {
            "frame_reference_time": _to_float(ds.get("FrameReferenceTime")),
            "actual_frame_duration": _to_float(ds.get("ActualFrameDuration")),
        }
