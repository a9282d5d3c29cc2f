#Purpose: Non-routing hard eligibility filtering (rule gates).
#Builds the base candidate set before distance/ETA scoring.
#Typical responsibilities:
#available flag (unavailable hospitals are always excluded, no override)
#optional capability gate: specialties matching the emergency type
#Output: "rule-qualified hospitals" (still not ranked), in input order.

from typing import List, Sequence

from hospitals.models import EmergencyLevel, EmergencyType, Hospital


def is_suitable_for_emergency(hospital: Hospital, emergency_type: str) -> bool:
    """
    trauma  -> level 1 trauma centre with a trauma specialty
    medical -> emergency or internal medicine specialty
    other   -> always suitable
    """
    if emergency_type == EmergencyType.TRAUMA.value:
        return hospital.emergency_level == EmergencyLevel.LEVEL_1_TRAUMA and "trauma" in hospital.specialties

    if emergency_type == EmergencyType.MEDICAL.value:
        return "emergency" in hospital.specialties or "internal_medicine" in hospital.specialties

    return True


def build_base_candidates(
        hospitals: Sequence[Hospital],
        emergency_type: str,
        *,
        suitable_only: bool = False,
) -> List[Hospital]:
    candidates = []
    for hospital in hospitals:
        if not hospital.available:
            continue
        if suitable_only and not is_suitable_for_emergency(hospital, emergency_type):
            continue
        candidates.append(hospital)
    return candidates
