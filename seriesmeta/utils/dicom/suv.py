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
SUV scaling factors for PET images.

Multiplying a (rescaled) pixel value by a factor yields the corresponding SUV:

    SUVbw  = Activity(Bq/ml) * Weight(g) / DecayedDose(Bq)
    SUVlbm = Activity(Bq/ml) * LeanBodyMass(g) / DecayedDose(Bq)
    SUVbsa = Activity(Bq/ml) * BodySurfaceArea(cm2) / DecayedDose(Bq)

The injected dose is decayed from the radiopharmaceutical start time to the
scan time of the series, unless the images are already decay corrected to
the administration time.
"""

import logging
from datetime import datetime
from typing import List, Optional, Sequence

import numpy as np
from pydicom.valuerep import DA, DT, TM

from seriesmeta.utils.dicom.datamodel import PETInstanceMetadata, ScalingFactor

logger = logging.getLogger(__name__)

SUPPORTED_UNITS = ("BQML", "GML")
SUPPORTED_DECAY_CORRECTIONS = ("START", "ADMIN")


def _combine(date: str, time: str) -> datetime:
    return datetime.combine(DA(date), TM(time))


def _naive(value: datetime) -> datetime:
    return datetime.combine(value.date(), value.time())


def scan_date_time(instances: Sequence[PETInstanceMetadata]) -> datetime:
    """
    Series date/time, unless some acquisition started earlier than that (series
    date/time is then known to have been reset by post processing) in which case
    the earliest acquisition date/time.
    """
    series = _combine(instances[0].SeriesDate, instances[0].SeriesTime)
    earliest_acquisition = min(_combine(i.AcquisitionDate, i.AcquisitionTime) for i in instances)
    return series if series <= earliest_acquisition else earliest_acquisition


def start_date_time(instance: PETInstanceMetadata) -> datetime:
    if instance.RadiopharmaceuticalStartDateTime:
        return _naive(DT(instance.RadiopharmaceuticalStartDateTime))
    if instance.RadiopharmaceuticalStartTime:
        return _combine(instance.SeriesDate, instance.RadiopharmaceuticalStartTime)
    raise ValueError("RadiopharmaceuticalStartDateTime or RadiopharmaceuticalStartTime is required")


def decayed_dose(instance: PETInstanceMetadata, scan: datetime) -> float:
    if instance.DecayCorrection == "ADMIN":
        return instance.RadionuclideTotalDose

    decay_time = (scan - start_date_time(instance)).total_seconds()
    if decay_time < 0:
        raise ValueError(f"Scan time {scan} is earlier than radiopharmaceutical start time")
    return float(instance.RadionuclideTotalDose * np.exp(-np.log(2) * decay_time / instance.RadionuclideHalfLife))


def lean_body_mass(weight: float, height: float, sex: str) -> Optional[float]:
    """James formula; weight in kg, height in m; lean body mass in kg"""
    height_cm = height * 100
    if sex == "M":
        return 1.10 * weight - 128 * (weight / height_cm) ** 2
    if sex == "F":
        return 1.07 * weight - 148 * (weight / height_cm) ** 2
    return None


def body_surface_area(weight: float, height: float) -> float:
    """DuBois formula; weight in kg, height in m; area in m2"""
    return 0.007184 * weight**0.425 * (height * 100) ** 0.725


def calculate_suv_scaling_factors(instances: Sequence[PETInstanceMetadata]) -> List[ScalingFactor]:
    """
    Compute SUV scaling factors for all instances of one PET series.

    :param instances: metadata of every instance, in image order
    :return: one scaling factor per instance, same order
    :raises ValueError: when the series can not be converted to SUV
    """
    if not instances:
        return []

    first = instances[0]
    if "ATTN" not in first.CorrectedImage or "DECY" not in first.CorrectedImage:
        raise ValueError(f"CorrectedImage must contain 'ATTN' and 'DECY': {first.CorrectedImage}")

    units = first.Units.upper()
    if units not in SUPPORTED_UNITS:
        raise ValueError(f"Units '{first.Units}' are not supported")
    if units == "GML":
        return [ScalingFactor(suvbw=1.0) for _ in instances]

    if first.DecayCorrection not in SUPPORTED_DECAY_CORRECTIONS:
        raise ValueError(f"DecayCorrection '{first.DecayCorrection}' is not supported")
    if first.PatientWeight <= 0:
        raise ValueError(f"PatientWeight must be positive: {first.PatientWeight}")

    scan = scan_date_time(instances)
    logger.debug(f"SUV scan date/time: {scan}; instances: {len(instances)}")

    factors = []
    for instance in instances:
        dose = decayed_dose(instance, scan)
        weight = instance.PatientWeight
        factor = ScalingFactor(suvbw=weight * 1000 / dose)

        if instance.PatientSize and instance.PatientSex:
            lbm = lean_body_mass(weight, instance.PatientSize, instance.PatientSex)
            if lbm is not None:
                factor.suvlbm = lbm * 1000 / dose
            factor.suvbsa = body_surface_area(weight, instance.PatientSize) * 10000 / dose
        factors.append(factor)
    return factors
