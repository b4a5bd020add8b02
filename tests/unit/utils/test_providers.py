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

from seriesmeta.utils.dicom.datamodel import CalibrationRecord, PixelSpacingType, ScalingFactor
from seriesmeta.utils.dicom.imageid import build_image_id
from seriesmeta.utils.providers import CalibratedPixelSpacingMetadataProvider, ScalingMetadataProvider

ROOT = "http://localhost:8042/dicom-web"


class TestProviders(unittest.TestCase):
    def test_calibrated_pixel_spacing(self):
        provider = CalibratedPixelSpacingMetadataProvider()
        image_id = build_image_id(ROOT, "1", "1.1", "1.1.1")
        record = CalibrationRecord(row_pixel_spacing=1.0, column_pixel_spacing=1.0, type=PixelSpacingType.DETECTOR)

        provider.add(image_id, record)
        self.assertEqual(len(provider), 1)
        self.assertIn(image_id, provider)
        self.assertIs(provider.get("calibratedPixelSpacing", image_id), record)
        self.assertIsNone(provider.get("scalingModule", image_id))
        self.assertIsNone(provider.get("calibratedPixelSpacing", build_image_id(ROOT, "1", "1.1", "1.1.2")))

    def test_keyed_by_uri(self):
        provider = ScalingMetadataProvider()
        image_id = build_image_id(ROOT, "1", "1.1", "1.1.1")
        factor = ScalingFactor(suvbw=0.5)

        provider.add(image_id, factor)
        self.assertIs(provider.get("scalingModule", "dicomweb:" + image_id[len("wadors:") :]), factor)

        provider.add(image_id, ScalingFactor(suvbw=0.25))
        self.assertEqual(len(provider), 1)
        self.assertEqual(provider.get("scalingModule", image_id).suvbw, 0.25)

    def test_bounded(self):
        provider = ScalingMetadataProvider(maxsize=2)
        image_ids = [build_image_id(ROOT, "1", "1.1", "1.1.1", frame=i) for i in range(1, 4)]
        for image_id in image_ids:
            provider.add(image_id, ScalingFactor(suvbw=1.0))

        self.assertEqual(len(provider), 2)
        self.assertNotIn(image_ids[0], provider)
        self.assertIn(image_ids[2], provider)

        provider.clear()
        self.assertEqual(len(provider), 0)


if __name__ == "__main__":
    unittest.main()
