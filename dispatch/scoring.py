#Purpose: Ranking/selection model (the "which hospital is best" layer).
#Takes candidates (already eligible) + their route estimates.
#Produces:
#a type priority per hospital (trauma centre / free hospital preference)
#a sort key per ranked entry (ETA, optionally priority as tie-break)
#a recommendation tier for display (recommended / good / fallback)
#Output: ordering inputs for ranking.py. No distance math here.

from typing import Tuple

from hospitals.models import Capacity, CostTier, EmergencyLevel, EmergencyType, Hospital

from .policy import RankingPolicy

RECOMMENDED_MAX_ETA = 10
GOOD_MAX_ETA = 15


def type_priority(hospital: Hospital, emergency_type: str, policy: RankingPolicy) -> float:
    """
    1.0 baseline; trauma cases at level 1 trauma centres and free hospitals
    get a multiplier below 1. Unknown emergency types stay at 1.0.
    """
    priority = 1.0
    if emergency_type == EmergencyType.TRAUMA.value and hospital.emergency_level == EmergencyLevel.LEVEL_1_TRAUMA:
        priority *= policy.trauma_center_priority
    if hospital.cost == CostTier.FREE:
        priority *= policy.free_cost_priority
    return priority


def sort_key(estimated_time: int, priority: float, policy: RankingPolicy) -> Tuple[float, ...]:
    if policy.use_priority_tiebreak:
        return (estimated_time, priority)
    return (estimated_time,)


def recommendation_tier(estimated_time: int, capacity: Capacity) -> str:
    # very_high capacity is recommended regardless of ETA
    if (estimated_time <= RECOMMENDED_MAX_ETA and capacity == Capacity.HIGH) or capacity == Capacity.VERY_HIGH:
        return "recommended"
    if estimated_time <= GOOD_MAX_ETA:
        return "good"
    return "fallback"
