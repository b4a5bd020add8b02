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
from typing import Callable, List, Optional, Sequence

from seriesmeta.utils.dicom.imageid import get_frame_information

logger = logging.getLogger(__name__)


def convert_multiframe_image_ids(
    image_ids: Sequence[str], number_of_frames: Callable[[str], Optional[int]]
) -> List[str]:
    """
    Receives a list of image ids possibly referring to multiframe instances and
    returns a list where each image id refers to exactly one frame.

    An image id of an instance with n > 1 frames is replaced by n image ids,
    one per frame, numbered from 1. Any other image id is copied as is.

    :param image_ids: image ids in instance order
    :param number_of_frames: frame count lookup for an image id; None when unknown
    :return: new list of image ids, one per frame
    """
    new_image_ids: List[str] = []
    for image_id in image_ids:
        count = number_of_frames(image_id)
        if count and count > 1:
            frameless = get_frame_information(image_id).frameless_image_id
            new_image_ids.extend(f"{frameless}{i + 1}" for i in range(count))
        else:
            new_image_ids.append(image_id)

    if len(new_image_ids) != len(image_ids):
        logger.info(f"Expanded {len(image_ids)} image ids into {len(new_image_ids)} frames")
    return new_image_ids
