#Expose the high-level pipeline pieces:
#Candidate filtering (hard rules)
#Ranking engine (ETA ordering)
#Dispatcher orchestrator (the "one call" entry point for the dashboard)

from .candidate_filter import build_base_candidates, is_suitable_for_emergency
from .policy import RankingPolicy, default_ranking_policy
from .ranking import RankedHospital, estimate_hospital_route, rank_hospitals
from .dispatcher import Dispatcher, EmergencyIntake, InvalidCallUpdateError, SystemStatus, build_dispatcher

__all__ = [
    "build_base_candidates",
    "is_suitable_for_emergency",
    "RankingPolicy",
    "default_ranking_policy",
    "RankedHospital",
    "estimate_hospital_route",
    "rank_hospitals",
    "Dispatcher",
    "EmergencyIntake",
    "InvalidCallUpdateError",
    "SystemStatus",
    "build_dispatcher",
]
