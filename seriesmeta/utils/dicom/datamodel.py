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

from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class PixelSpacingType(str, Enum):
    NOT_APPLICABLE = "NOT_APPLICABLE"
    UNKNOWN = "UNKNOWN"
    CALIBRATED = "CALIBRATED"
    DETECTOR = "DETECTOR"


class RawPixelSpacing(BaseModel):
    """PixelSpacing of a non-projection image, taken as-is"""

    kind: Literal["raw"] = "raw"
    pixel_spacing: Optional[List[float]] = None


class ProjectionPixelSpacing(BaseModel):
    kind: Literal["projection"] = "projection"
    type: PixelSpacingType
    pixel_spacing: Optional[List[float]] = None
    is_projection: bool = True


class CalibratedProjectionPixelSpacing(BaseModel):
    kind: Literal["calibrated"] = "calibrated"
    type: Literal[PixelSpacingType.CALIBRATED] = PixelSpacingType.CALIBRATED
    pixel_spacing: List[float]
    is_projection: bool = True
    calibration_type: Optional[str] = None
    calibration_description: Optional[str] = None


class ImagerPixelSpacing(BaseModel):
    """ImagerPixelSpacing, corrected by EstimatedRadiographicMagnificationFactor when it is known"""

    kind: Literal["imager"] = "imager"
    pixel_spacing: List[float]
    is_projection: bool = True
    magnification_corrected: bool = False


class UltrasoundPixelSpacing(BaseModel):
    kind: Literal["ultrasound"] = "ultrasound"
    pixel_spacing: List[float]


PixelSpacingInfo = Annotated[
    Union[
        RawPixelSpacing,
        ProjectionPixelSpacing,
        CalibratedProjectionPixelSpacing,
        ImagerPixelSpacing,
        UltrasoundPixelSpacing,
    ],
    Field(discriminator="kind"),
]


class CalibrationRecord(BaseModel):
    row_pixel_spacing: float
    column_pixel_spacing: float
    type: Optional[PixelSpacingType] = None
    is_projection: bool = False
    calibration_type: Optional[str] = None
    calibration_description: Optional[str] = None


class DicomDate(BaseModel):
    year: int
    month: int
    day: int


class DicomTime(BaseModel):
    hours: Optional[int] = None
    minutes: Optional[int] = None
    seconds: Optional[int] = None
    fractional_seconds: Optional[str] = None


DicomDateValue = Union[str, DicomDate]
DicomTimeValue = Union[str, DicomTime]


class PETInstanceMetadata(BaseModel):
    CorrectedImage: List[str]
    Units: str
    RadionuclideHalfLife: float
    RadionuclideTotalDose: float
    DecayCorrection: str
    PatientWeight: float
    SeriesDate: str
    SeriesTime: str
    AcquisitionDate: str
    AcquisitionTime: str

    RadiopharmaceuticalStartDateTime: Optional[str] = None
    RadiopharmaceuticalStartTime: Optional[str] = None
    FrameReferenceTime: Optional[float] = None
    ActualFrameDuration: Optional[float] = None
    PatientSex: Optional[str] = None
    PatientSize: Optional[float] = None


class ScalingFactor(BaseModel):
    suvbw: float
    suvlbm: Optional[float] = None
    suvbsa: Optional[float] = None
