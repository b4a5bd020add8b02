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

import argparse
import io
import json
import unittest

import requests

from seriesmeta.main import Main

from .context import SERIES_UID, STUDY_UID, WADO_RS_ROOT, MockDICOMwebClient, make_instance


def image_ids_args(**kwargs):
    values = dict(
        url=WADO_RS_ROOT,
        study=STUDY_UID,
        series=SERIES_UID,
        instance=None,
        wado_root=None,
        username=None,
        password=None,
        qido_prefix=None,
        wado_prefix=None,
        workers=1,
        no_suv=False,
        json=False,
        log_level="INFO",
    )
    values.update(kwargs)
    return argparse.Namespace(**values)


class MyTestCase(unittest.TestCase):
    def test_version(self):
        self.assertEqual(Main().run(["-v"]), 0)

    def test_no_action(self):
        self.assertEqual(Main().run([]), -1)

    def test_no_url(self):
        self.assertEqual(Main().run(["image_ids", "--url", "", "--study", STUDY_UID, "--series", SERIES_UID]), 1)

    def test_image_ids(self):
        client = MockDICOMwebClient([make_instance("1.1.1", number_of_frames=2), make_instance("1.1.2")])
        out = io.StringIO()

        self.assertEqual(Main().action_image_ids(image_ids_args(), client=client, out=out), 0)

        lines = out.getvalue().splitlines()
        self.assertEqual(len(lines), 3)
        self.assertTrue(lines[0].endswith("/instances/1.1.1/frames/1"))
        self.assertTrue(lines[1].endswith("/instances/1.1.1/frames/2"))
        self.assertTrue(lines[2].startswith(f"wadors:{WADO_RS_ROOT}/studies/{STUDY_UID}/series/{SERIES_UID}"))

    def test_image_ids_json(self):
        client = MockDICOMwebClient([make_instance("1.1.1")])
        out = io.StringIO()

        args = image_ids_args(json=True, wado_root="http://viewer/dicom-web")
        self.assertEqual(Main().action_image_ids(args, client=client, out=out), 0)

        output = json.loads(out.getvalue())
        self.assertEqual(len(output), 1)
        self.assertTrue(output[0]["image_id"].startswith("wadors:http://viewer/dicom-web/studies/"))
        self.assertIsNone(output[0]["calibrated_pixel_spacing"])
        self.assertIsNone(output[0]["scaling"])

    def test_retrieval_failure(self):
        client = MockDICOMwebClient(error=requests.exceptions.ConnectionError("connection refused"))
        self.assertEqual(Main().action_image_ids(image_ids_args(), client=client, out=io.StringIO()), 2)


if __name__ == "__main__":
    unittest.main()
