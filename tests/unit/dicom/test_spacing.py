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

import unittest

from pydicom.dataset import Dataset

from seriesmeta.utils.dicom.attributes import CR_IMAGE_STORAGE, CT_IMAGE_STORAGE
from seriesmeta.utils.dicom.datamodel import (
    CalibratedProjectionPixelSpacing,
    ImagerPixelSpacing,
    PixelSpacingType,
    ProjectionPixelSpacing,
    RawPixelSpacing,
)
from seriesmeta.utils.dicom.spacing import get_pixel_spacing_information, to_calibration_record


def dataset(sop_class_uid=CR_IMAGE_STORAGE, **attributes):
    ds = Dataset()
    ds.SOPClassUID = sop_class_uid
    for keyword, value in attributes.items():
        setattr(ds, keyword, value)
    return ds


class TestPixelSpacing(unittest.TestCase):
    def test_non_projection(self):
        info = get_pixel_spacing_information(dataset(CT_IMAGE_STORAGE, PixelSpacing=[0.5, 0.5]))

        self.assertIsInstance(info, RawPixelSpacing)
        self.assertEqual(info.pixel_spacing, [0.5, 0.5])

        record = to_calibration_record(info)
        self.assertEqual(record.row_pixel_spacing, 0.5)
        self.assertEqual(record.column_pixel_spacing, 0.5)
        self.assertIsNone(record.type)
        self.assertFalse(record.is_projection)

    def test_non_projection_ignores_imager_pixel_spacing(self):
        info = get_pixel_spacing_information(
            dataset(CT_IMAGE_STORAGE, PixelSpacing=[0.5, 0.5], ImagerPixelSpacing=[0.7, 0.7])
        )
        self.assertIsInstance(info, RawPixelSpacing)
        self.assertEqual(info.pixel_spacing, [0.5, 0.5])

    def test_non_projection_without_spacing(self):
        info = get_pixel_spacing_information(dataset(CT_IMAGE_STORAGE))

        self.assertIsInstance(info, RawPixelSpacing)
        self.assertIsNone(info.pixel_spacing)
        self.assertIsNone(to_calibration_record(info))

    def test_projection_unknown(self):
        info = get_pixel_spacing_information(dataset(PixelSpacing=[0.2, 0.3]))

        self.assertIsInstance(info, ProjectionPixelSpacing)
        self.assertEqual(info.type, PixelSpacingType.UNKNOWN)
        self.assertEqual(info.pixel_spacing, [0.2, 0.3])
        self.assertTrue(info.is_projection)

    def test_projection_detector(self):
        info = get_pixel_spacing_information(dataset(PixelSpacing=[1, 1], ImagerPixelSpacing=[1, 1]))

        self.assertIsInstance(info, ProjectionPixelSpacing)
        self.assertEqual(info.type, PixelSpacingType.DETECTOR)
        self.assertEqual(info.pixel_spacing, [1.0, 1.0])

        record = to_calibration_record(info)
        self.assertEqual(record.type, PixelSpacingType.DETECTOR)
        self.assertTrue(record.is_projection)

    def test_projection_calibrated(self):
        info = get_pixel_spacing_information(
            dataset(
                PixelSpacing=[1, 1],
                ImagerPixelSpacing=[1.2, 1.2],
                PixelSpacingCalibrationType="GEOMETRY",
                PixelSpacingCalibrationDescription="Calibrated against a reference object",
            )
        )

        self.assertIsInstance(info, CalibratedProjectionPixelSpacing)
        self.assertEqual(info.type, PixelSpacingType.CALIBRATED)
        self.assertEqual(info.pixel_spacing, [1.0, 1.0])

        record = to_calibration_record(info)
        self.assertEqual(record.type, PixelSpacingType.CALIBRATED)
        self.assertEqual(record.calibration_type, "GEOMETRY")
        self.assertEqual(record.calibration_description, "Calibrated against a reference object")

    def test_projection_calibrated_unknown_manner(self):
        info = get_pixel_spacing_information(dataset(PixelSpacing=[1, 1], ImagerPixelSpacing=[1.2, 1.2]))

        self.assertIsInstance(info, CalibratedProjectionPixelSpacing)
        self.assertIsNone(info.calibration_type)
        self.assertIsNone(info.calibration_description)

    def test_imager_pixel_spacing_magnification(self):
        info = get_pixel_spacing_information(
            dataset(ImagerPixelSpacing=[0.12, 0.12], EstimatedRadiographicMagnificationFactor=1.2)
        )

        self.assertIsInstance(info, ImagerPixelSpacing)
        self.assertTrue(info.magnification_corrected)
        self.assertAlmostEqual(info.pixel_spacing[0], 0.1)
        self.assertAlmostEqual(info.pixel_spacing[1], 0.1)

    def test_imager_pixel_spacing_without_magnification(self):
        with self.assertLogs("seriesmeta.utils.dicom.spacing", level="WARNING"):
            info = get_pixel_spacing_information(dataset(ImagerPixelSpacing=[0.12, 0.12]))

        self.assertIsInstance(info, ImagerPixelSpacing)
        self.assertFalse(info.magnification_corrected)
        self.assertEqual(info.pixel_spacing, [0.12, 0.12])

    def test_calibration_record_single_value(self):
        self.assertIsNone(to_calibration_record(RawPixelSpacing(pixel_spacing=[0.5])))
        self.assertIsNone(to_calibration_record(None))


if __name__ == "__main__":
    unittest.main()
