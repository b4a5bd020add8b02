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

from abc import ABCMeta, abstractmethod
from typing import Any


class MetadataProvider(metaclass=ABCMeta):
    @abstractmethod
    def add(self, image_id: str, payload: Any) -> None:
        """
        Store metadata for an image id

        :param image_id: the image id for the metadata to store
        :param payload: the metadata
        """
        pass

    @abstractmethod
    def get(self, type: str, image_id: str) -> Any:
        """
        Return the metadata of a given type for an image id

        :param type: the type of metadata to enquire about
        :param image_id: the image id to enquire about
        :return: the metadata if it exists, otherwise None
        """
        pass
