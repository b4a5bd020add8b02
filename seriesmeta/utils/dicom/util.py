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
from typing import Any, Dict, Optional

from pydicom.dataset import Dataset

logger = logging.getLogger(__name__)


def remove_invalid_tags(src_metadata: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Remove invalid tags from metadata and return a new dict.

    Only tags whose value is ``None`` are removed; those break
    :func:`naturalize_dataset`. Tag ids are not validated against the
    8-hex-digit form since doing so costs more than the whole copy.

    :param src_metadata: DICOM JSON metadata of one instance
    :return: new metadata dict without invalid tags
    """
    if not src_metadata:
        return {}
    return {tag: value for tag, value in src_metadata.items() if value is not None}


def naturalize_dataset(metadata: Dict[str, Any]) -> Dataset:
    """Convert (sanitized) DICOM JSON metadata into a keyword addressable dataset"""
    return Dataset.from_json(metadata)


def get_value(metadata: Optional[Dict[str, Any]], tag: str, default=None):
    """First value of a DICOM JSON attribute; `default` when absent or empty"""
    attribute = metadata.get(tag) if metadata else None
    if not isinstance(attribute, dict):
        return default

    values = attribute.get("Value")
    return values[0] if values else default
