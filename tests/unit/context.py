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

from typing import Any, Dict, List, Optional

from dicomweb_client import DICOMwebClient

from seriesmeta.utils.dicom.attributes import CT_IMAGE_STORAGE, PET_IMAGE_STORAGE

STUDY_UID = "1.2.826.0.1.3680043.8.498.1"
SERIES_UID = "1.2.826.0.1.3680043.8.498.1.1"
WADO_RS_ROOT = "http://localhost:8042/dicom-web"


def element(vr: str, *values) -> Dict[str, Any]:
    return {"vr": vr, "Value": list(values)}


def make_instance(
    sop_instance_uid: str,
    modality: str = "CT",
    sop_class_uid: str = CT_IMAGE_STORAGE,
    series_uid: str = SERIES_UID,
    number_of_frames: Optional[int] = None,
    attributes: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    instance = {
        "0020000D": element("UI", STUDY_UID),
        "0020000E": element("UI", series_uid),
        "00080018": element("UI", sop_instance_uid),
        "00080016": element("UI", sop_class_uid),
        "00080060": element("CS", modality),
    }
    if number_of_frames is not None:
        instance["00280008"] = element("IS", number_of_frames)
    instance.update(attributes or {})
    return instance


def make_pet_instance(
    sop_instance_uid: str,
    weight: Optional[float] = 70.0,
    acquisition_time: str = "100000",
    attributes: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    pet = {
        "00080021": element("DA", "20230102"),
        "00080031": element("TM", "100000"),
        "00080022": element("DA", "20230102"),
        "00080032": element("TM", acquisition_time),
        "00100040": element("CS", "M"),
        "00101020": element("DS", 1.8),
        "00280051": element("CS", "ATTN", "DECY"),
        "00541001": element("CS", "BQML"),
        "00541102": element("CS", "START"),
        "00540016": {
            "vr": "SQ",
            "Value": [
                {
                    "00181072": element("TM", "090000"),
                    "00181074": element("DS", 370000000),
                    "00181075": element("DS", 6586.2),
                }
            ],
        },
    }
    if weight is not None:
        pet["00101030"] = element("DS", weight)
    pet.update(attributes or {})
    return make_instance(sop_instance_uid, modality="PT", sop_class_uid=PET_IMAGE_STORAGE, attributes=pet)


class MockDICOMwebClient(DICOMwebClient):
    def __init__(self, instances: Optional[List[Dict[str, Any]]] = None, error: Optional[Exception] = None):
        self.instances = instances if instances is not None else []
        self.error = error
        self.calls = []

    @property
    def base_url(self) -> str:
        return WADO_RS_ROOT

    def retrieve_series_metadata(self, study_instance_uid, series_instance_uid, *args, **kwargs):
        self.calls.append((study_instance_uid, series_instance_uid))
        if self.error:
            raise self.error
        return self.instances
