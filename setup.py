#!/usr/bin/env python

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

from setuptools import find_packages, setup

setup(
    name="seriesmeta",
    version="0.1.0",
    description="Per-frame image ids, calibrated pixel spacing and SUV scaling for DICOMweb series",
    license="Apache License 2.0",
    python_requires=">=3.9",
    packages=find_packages(exclude=("tests", "docs")),
    zip_safe=False,
    install_requires=[
        "cachetools>=5.0",
        "dicomweb-client>=0.59",
        "numpy>=1.22",
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
        "pydicom>=2.4",
    ],
    extras_require={
        "test": ["pytest>=7.0", "requests>=2.28"],
    },
    entry_points={
        "console_scripts": [
            "seriesmeta = seriesmeta.main:main",
        ],
    },
)
