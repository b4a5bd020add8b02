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
Image ids identify a single frame of a DICOM instance.

Two forms are understood::

    wadors:<root>/studies/<study>/series/<series>/instances/<sop>/frames/<n>
    wadouri:<url>?...&frame=<n>

The "frameless" id is the image id with the frame number removed but the frame
marker kept, so that ``frameless + str(n)`` addresses frame ``n``.
"""

from typing import NamedTuple, Optional

WADORS_PREFIX = "wadors:"
WADORS_FRAME_MARKER = "/frames/"
WADOURI_FRAME_MARKER = "&frame="


class FrameInfo(NamedTuple):
    frame_index: int
    frameless_image_id: str


def get_frame_information(image_id: str) -> FrameInfo:
    if WADORS_PREFIX in image_id:
        frame_index = image_id.find(WADORS_FRAME_MARKER)
        frameless = image_id[: frame_index + len(WADORS_FRAME_MARKER)] if frame_index > 0 else image_id
        return FrameInfo(frame_index, frameless)

    frame_index = image_id.find(WADOURI_FRAME_MARKER)
    frameless = image_id[: frame_index + len(WADOURI_FRAME_MARKER)] if frame_index > 0 else image_id
    if WADOURI_FRAME_MARKER not in frameless:
        frameless = frameless + WADOURI_FRAME_MARKER
    return FrameInfo(frame_index, frameless)


def get_frame_number(image_id: str) -> Optional[int]:
    frame_index, frameless = get_frame_information(image_id)
    if frame_index <= 0:
        return None

    suffix = image_id[len(frameless) :]
    return int(suffix) if suffix.isdigit() else None


def build_image_id(wado_rs_root: str, study_id: str, series_id: str, instance_id: str, frame: int = 1) -> str:
    return (
        f"{WADORS_PREFIX}{wado_rs_root}"
        f"/studies/{study_id}"
        f"/series/{series_id}"
        f"/instances/{instance_id}"
        f"{WADORS_FRAME_MARKER}{frame}"
    )


def image_id_to_uri(image_id: str) -> str:
    return image_id[image_id.find(":") + 1 :]
