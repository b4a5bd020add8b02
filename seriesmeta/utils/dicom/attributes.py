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

ATTRB_STUDYINSTANCEUID = "0020000D"
ATTRB_SERIESINSTANCEUID = "0020000E"
ATTRB_SOPINSTANCEUID = "00080018"
ATTRB_SOPCLASSUID = "00080016"
ATTRB_MODALITY = "00080060"
ATTRB_NUMBEROFFRAMES = "00280008"

PET_MODALITY = "PT"

# See http://gdcm.sourceforge.net/wiki/index.php/Imager_Pixel_Spacing
PROJECTION_RADIOGRAPH_SOPCLASSUIDS = frozenset(
    [
        "1.2.840.10008.5.1.4.1.1.1",  # CR Image Storage
        "1.2.840.10008.5.1.4.1.1.1.1",  # Digital X-Ray Image Storage - for Presentation
        "1.2.840.10008.5.1.4.1.1.1.1.1",  # Digital X-Ray Image Storage - for Processing
        "1.2.840.10008.5.1.4.1.1.1.2",  # Digital Mammography X-Ray Image Storage - for Presentation
        "1.2.840.10008.5.1.4.1.1.1.2.1",  # Digital Mammography X-Ray Image Storage - for Processing
        "1.2.840.10008.5.1.4.1.1.1.3",  # Digital Intra-oral X-Ray Image Storage - for Presentation
        "1.2.840.10008.5.1.4.1.1.1.3.1",  # Digital Intra-oral X-Ray Image Storage - for Processing
        "1.2.840.10008.5.1.4.1.1.12.1",  # X-Ray Angiographic Image Storage
        "1.2.840.10008.5.1.4.1.1.12.1.1",  # Enhanced XA Image Storage
        "1.2.840.10008.5.1.4.1.1.12.2",  # X-Ray Radiofluoroscopic Image Storage
        "1.2.840.10008.5.1.4.1.1.12.2.1",  # Enhanced XRF Image Storage
        "1.2.840.10008.5.1.4.1.1.12.3",  # X-Ray Angiographic Bi-plane Image Storage (Retired)
    ]
)

CR_IMAGE_STORAGE = "1.2.840.10008.5.1.4.1.1.1"
CT_IMAGE_STORAGE = "1.2.840.10008.5.1.4.1.1.2"
PET_IMAGE_STORAGE = "1.2.840.10008.5.1.4.1.1.128"
