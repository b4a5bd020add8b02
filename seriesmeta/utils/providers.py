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
from typing import Any, Optional

from cachetools import LRUCache

from seriesmeta.config import settings
from seriesmeta.interfaces.provider import MetadataProvider
from seriesmeta.utils.dicom.datamodel import CalibrationRecord, ScalingFactor
from seriesmeta.utils.dicom.imageid import image_id_to_uri

logger = logging.getLogger(__name__)


class ImageMetadataStore(MetadataProvider):
    """
    Metadata of one type, kept per image id for the lifetime of a viewing session.

    Entries are keyed by the URI form of the image id, so that the same image
    loaded through a different scheme resolves to the same entry.
    """

    type: str = ""

    def __init__(self, maxsize: Optional[int] = None):
        maxsize = maxsize if maxsize else settings.SERIESMETA_PROVIDER_CACHE_SIZE
        self._state: LRUCache = LRUCache(maxsize=maxsize)
        self._lock = threading.Lock()
        logger.debug(f"{self.__class__.__name__} ({self.type}); max size: {maxsize}")

    def __len__(self):
        with self._lock:
            return len(self._state)

    def __contains__(self, image_id: str):
        with self._lock:
            return image_id_to_uri(image_id) in self._state

    def add(self, image_id: str, payload: Any) -> None:
        with self._lock:
            self._state[image_id_to_uri(image_id)] = payload

    def get(self, type: str, image_id: str) -> Any:
        if type != self.type:
            return None
        with self._lock:
            return self._state.get(image_id_to_uri(image_id))

    def clear(self) -> None:
        with self._lock:
            self._state.clear()


class CalibratedPixelSpacingMetadataProvider(ImageMetadataStore):
    type = "calibratedPixelSpacing"

    def get(self, type: str, image_id: str) -> Optional[CalibrationRecord]:
        return super().get(type, image_id)


class ScalingMetadataProvider(ImageMetadataStore):
    type = "scalingModule"

    def get(self, type: str, image_id: str) -> Optional[ScalingFactor]:
        return super().get(type, image_id)
