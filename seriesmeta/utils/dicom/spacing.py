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

"""
Pixel spacing of an image, as far as it can be trusted.

See http://gdcm.sourceforge.net/wiki/index.php/Imager_Pixel_Spacing

For projection radiographs PixelSpacing and ImagerPixelSpacing may disagree;
which one is reported (and how it must be labelled to the user) depends on
the combination present in the dataset.
"""

import logging
from typing import List, Optional

from pydicom.dataset import Dataset
from pydicom.sequence import Sequence

from seriesmeta.utils.dicom.attributes import PROJECTION_RADIOGRAPH_SOPCLASSUIDS
from seriesmeta.utils.dicom.datamodel import (
    CalibratedProjectionPixelSpacing,
    CalibrationRecord,
    ImagerPixelSpacing,
    PixelSpacingInfo,
    PixelSpacingType,
    ProjectionPixelSpacing,
    RawPixelSpacing,
    UltrasoundPixelSpacing,
)

logger = logging.getLogger(__name__)


def _spacing(ds: Dataset, keyword: str) -> Optional[List[float]]:
    value = ds.get(keyword)
    if value is None or value == "":
        return None
    if isinstance(value, (str, int, float)):
        value = [value]
    return [float(v) for v in value]


def _text(ds: Dataset, keyword: str) -> Optional[str]:
    value = ds.get(keyword)
    return str(value) if value else None


def get_pixel_spacing_information(ds: Dataset) -> Optional[PixelSpacingInfo]:
    pixel_spacing = _spacing(ds, "PixelSpacing")
    imager_pixel_spacing = _spacing(ds, "ImagerPixelSpacing")
    magnification = ds.get("EstimatedRadiographicMagnificationFactor")
    ultrasound_regions = ds.get("SequenceOfUltrasoundRegions")

    is_projection = str(ds.get("SOPClassUID", "")) in PROJECTION_RADIOGRAPH_SOPCLASSUIDS

    if not is_projection:
        return RawPixelSpacing(pixel_spacing=pixel_spacing)

    if is_projection and not imager_pixel_spacing:
        # Only PixelSpacing on a projection radiograph: use it, but what it means is unknown
        return ProjectionPixelSpacing(
            type=PixelSpacingType.UNKNOWN, pixel_spacing=pixel_spacing, is_projection=is_projection
        )
    elif pixel_spacing and imager_pixel_spacing and pixel_spacing == imager_pixel_spacing:
        # Measurements are at the detector plane
        return ProjectionPixelSpacing(
            type=PixelSpacingType.DETECTOR, pixel_spacing=pixel_spacing, is_projection=is_projection
        )
    elif pixel_spacing and imager_pixel_spacing and pixel_spacing != imager_pixel_spacing:
        # Calibrated, in some unknown manner if the calibration type/description are absent
        return CalibratedProjectionPixelSpacing(
            pixel_spacing=pixel_spacing,
            is_projection=is_projection,
            calibration_type=_text(ds, "PixelSpacingCalibrationType"),
            calibration_description=_text(ds, "PixelSpacingCalibrationDescription"),
        )
    elif not pixel_spacing and imager_pixel_spacing:
        # IHE Mammo profile: ImagerPixelSpacing must be corrected by the magnification factor
        if magnification:
            return ImagerPixelSpacing(
                pixel_spacing=[s / float(magnification) for s in imager_pixel_spacing],
                is_projection=is_projection,
                magnification_corrected=True,
            )

        logger.warning(
            "EstimatedRadiographicMagnificationFactor was not present. Unable to correct ImagerPixelSpacing."
        )
        return ImagerPixelSpacing(pixel_spacing=imager_pixel_spacing, is_projection=is_projection)
    elif ultrasound_regions and (not isinstance(ultrasound_regions, Sequence) or len(ultrasound_regions) == 1):
        region = ultrasound_regions[0] if isinstance(ultrasound_regions, Sequence) else ultrasound_regions
        # PhysicalDeltaX/Y are in cm
        return UltrasoundPixelSpacing(
            pixel_spacing=[float(region.PhysicalDeltaX) * 10, float(region.PhysicalDeltaY) * 10]
        )
    elif ultrasound_regions and len(ultrasound_regions) > 1:
        logger.warning(
            "Sequence of Ultrasound Regions > one entry. This is not yet implemented, "
            "all measurements will be shown in pixels."
        )
        return None
    elif not is_projection and not imager_pixel_spacing:
        return ProjectionPixelSpacing(
            type=PixelSpacingType.NOT_APPLICABLE, pixel_spacing=pixel_spacing, is_projection=is_projection
        )

    logger.warning(
        "Unknown combination of PixelSpacing and ImagerPixelSpacing identified. Unable to determine spacing."
    )
    return None


def to_calibration_record(info: Optional[PixelSpacingInfo]) -> Optional[CalibrationRecord]:
    """Reduce pixel spacing information to the record kept per image id; None if there is no usable spacing"""
    if info is None or not info.pixel_spacing or len(info.pixel_spacing) < 2:
        return None

    return CalibrationRecord(
        row_pixel_spacing=info.pixel_spacing[0],
        column_pixel_spacing=info.pixel_spacing[1],
        type=getattr(info, "type", None),
        is_projection=getattr(info, "is_projection", False),
        calibration_type=getattr(info, "calibration_type", None),
        calibration_description=getattr(info, "calibration_description", None),
    )
