import argparse
from datetime import datetime
import logging

from dispatch import config
from dispatch.dispatcher import build_dispatcher
from routing.traffic import time_of_day_multiplier

# Sample calls around the city
SAMPLE_CALLS = [
    ("T. Nagar, Pondy Bazaar", 13.0418, 80.2341, "trauma", "critical"),
    ("Anna Nagar East", 13.0850, 80.2101, "medical", "high"),
    ("Velachery Main Road", 12.9791, 80.2212, "medical", "medium"),
]


def print_ranking(intake):
    call = intake.call
    print(f"\n=== {call.location} ({call.emergency_type}, {call.priority.value}) ===")
    print(f"{'#':<3}{'Hospital':<42}{'km':>7}{'min':>6}{'traffic':>9}  tier")
    for position, entry in enumerate(intake.nearest_hospitals, start=1):
        print(
            f"{position:<3}{entry.hospital.name[:40]:<42}"
            f"{entry.distance:>7.2f}{entry.estimated_time:>6}{entry.traffic_factor:>9.1f}  {entry.recommendation}"
        )
    if intake.recommended_hospital is None:
        print("No available hospitals.")


def main():
    parser = argparse.ArgumentParser(description="Rank Chennai hospitals for a few sample emergencies")
    parser.add_argument("--data", default=config.HOSPITAL_DATA_PATH, help="hospital JSON or CSV file")
    parser.add_argument("--count", type=int, default=config.DEFAULT_RESULT_LIMIT)
    parser.add_argument("--at", default=None, help="clock override, e.g. 2024-01-10T09:00")
    args = parser.parse_args()

    logging.basicConfig(level=config.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    dispatcher = build_dispatcher(args.data)
    if args.at:
        fixed = datetime.fromisoformat(args.at)
        dispatcher.clock = lambda: fixed

    now = dispatcher.clock()
    print(f"Loaded {len(dispatcher.hospitals)} hospitals, time {now:%a %H:%M}, "
          f"multiplier {time_of_day_multiplier(now, dispatcher.policy.traffic_windows)}")

    for location, lat, lng, emergency_type, priority in SAMPLE_CALLS:
        intake = dispatcher.file_emergency(location, lat, lng, emergency_type, priority, limit=args.count)
        print_ranking(intake)

    status = dispatcher.system_status()
    print(f"\nActive emergencies: {status.active_emergencies}, "
          f"hospitals available: {status.hospitals_available}/{status.hospitals_total}")


if __name__ == "__main__":
    main()
