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

from enum import Enum


class SeriesMetaError(Enum):
    """
    Attributes:
        UNKNOWN_ERROR -                 Unknown Error
        INVALID_INPUT -                 Invalid Input

        RETRIEVAL_FAILURE -             Series metadata could not be retrieved
        REQUIRED_METADATA_MISSING -     Instance lacks attributes needed for SUV computation
        SCALING_COMPUTATION_FAILURE -   SUV scaling calculator failed for the batch
    """

    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    INVALID_INPUT = "INVALID_INPUT"

    RETRIEVAL_FAILURE = "RETRIEVAL_FAILURE"
    REQUIRED_METADATA_MISSING = "REQUIRED_METADATA_MISSING"
    SCALING_COMPUTATION_FAILURE = "SCALING_COMPUTATION_FAILURE"


class SeriesMetaException(Exception):
    """
    SeriesMeta Exception
    """

    __slots__ = ["error", "msg"]

    def __init__(self, error: SeriesMetaError, msg: str):
        super().__init__(msg)
        super().__setattr__("error", error)
        super().__setattr__("msg", msg)


class RetrievalFailure(SeriesMetaException):
    def __init__(self, msg: str):
        super().__init__(SeriesMetaError.RETRIEVAL_FAILURE, msg)


class RequiredMetadataMissing(SeriesMetaException):
    def __init__(self, msg: str):
        super().__init__(SeriesMetaError.REQUIRED_METADATA_MISSING, msg)


class ScalingComputationFailure(SeriesMetaException):
    def __init__(self, msg: str):
        super().__init__(SeriesMetaError.SCALING_COMPUTATION_FAILURE, msg)
