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

import sys

PY_REQUIRED_MAJOR = 3
PY_REQUIRED_MINOR = 9

__version__ = "0.1.0"

__copyright__ = "(c) MONAI Consortium"

if not (sys.version_info.major == PY_REQUIRED_MAJOR and sys.version_info.minor >= PY_REQUIRED_MINOR):
    raise RuntimeError(
        "SeriesMeta requires Python {}.{} or higher. But the current Python is: {}".format(
            PY_REQUIRED_MAJOR, PY_REQUIRED_MINOR, sys.version
        ),
    )


def print_config(file=sys.stdout):
    from collections import OrderedDict

    import dicomweb_client
    import numpy as np
    import pydantic
    import pydicom

    output = OrderedDict()
    output["SeriesMeta"] = __version__
    output["Numpy"] = np.version.full_version
    output["Pydicom"] = pydicom.__version__
    output["DICOMweb Client"] = dicomweb_client.__version__
    output["Pydantic"] = pydantic.VERSION

    for k, v in output.items():
        print(f"{k} version: {v}", file=file, flush=True)
