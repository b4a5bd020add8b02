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
from typing import Any, Dict, List, Optional

from dicomweb_client import DICOMwebClient
from dicomweb_client.session_utils import create_session_from_user_pass

from seriesmeta.config import settings

logger = logging.getLogger(__name__)


class DICOMwebClientX(DICOMwebClient):
    # workaround for Orthanc compatibility of DICOMWeb headers where
    # Orthanc doesn't support multiple `Content-type`s
    def _http_get_application_json(
        self, url: str, params: Optional[Dict[str, Any]] = None, stream: bool = False
    ) -> List[Dict[str, dict]]:
        """Performs a HTTP GET request that accepts "applicaton/dicom+json"
        media type.

        Parameters
        ----------
        url: str
            unique resource locator
        params: Dict[str], optional
            query parameters
        stream: bool, optional
            whether data should be streamed (i.e., requested using chunked
            transfer encoding)

        Returns
        -------
        List[str, dict]
            content of HTTP message body in DICOM JSON format

        """
        content_type = "application/dicom+json"
        response = self._http_get(url, params=params, headers={"Accept": content_type}, stream=stream)
        if response.content:
            decoded_response: List[Dict[str, dict]] = response.json()
            # All metadata resources are expected to be sent as a JSON array of
            # DICOM data sets. However, some origin servers may incorrectly
            # sent an individual data set.
            if isinstance(decoded_response, dict):
                return [decoded_response]
            return decoded_response
        return []


def create_dicomweb_client(
    url: Optional[str] = None,
    username: Optional[str] = None,
    password: Optional[str] = None,
    qido_prefix: Optional[str] = None,
    wado_prefix: Optional[str] = None,
) -> DICOMwebClientX:
    url = url if url else settings.SERIESMETA_DICOMWEB_URL
    username = username if username else settings.SERIESMETA_DICOMWEB_USERNAME
    password = password if password else settings.SERIESMETA_DICOMWEB_PASSWORD
    qido_prefix = qido_prefix if qido_prefix else settings.SERIESMETA_QIDO_PREFIX
    wado_prefix = wado_prefix if wado_prefix else settings.SERIESMETA_WADO_PREFIX

    url = url.rstrip("/").strip() if url else ""
    if not url:
        raise ValueError("DICOMweb url is required (SERIESMETA_DICOMWEB_URL)")

    logger.info(f"Using DICOM WEB: {url}")
    dw_session = None
    if username and password:
        dw_session = create_session_from_user_pass(username, password)

    return DICOMwebClientX(
        url=url,
        session=dw_session,
        qido_url_prefix=qido_prefix if qido_prefix else None,
        wado_url_prefix=wado_prefix if wado_prefix else None,
    )
