import argparse

import numpy as np
import pandas as pd

from hospitals.data_loader import CHENNAI_CENTER

HOSPITAL_TYPES = ["multi_specialty", "government", "private"]
EMERGENCY_LEVELS = ["level_1_trauma", "level_2", "basic"]
CAPACITIES = ["very_high", "high", "medium", "low"]
COST_TIERS = ["free", "moderate", "expensive"]
SPECIALTY_POOL = [
    "emergency",
    "trauma",
    "cardiology",
    "neurology",
    "orthopedics",
    "internal_medicine",
    "pediatrics",
    "oncology",
]


def generate_mock_hospitals(count=50, output_file="mock_hospitals.csv", seed=None):
    """
    Generates a synthetic hospital registry scattered around Chennai, in the CSV
    layout hospitals.data_loader reads (specialties separated by ';').
    Government hospitals are free; roughly one in ten is marked unavailable.
    """
    rng = np.random.default_rng(seed)
    center_lat, center_lng = CHENNAI_CENTER

    rows = []
    for index in range(count):
        # ~ +/- 11km around the center
        lat = center_lat + rng.uniform(-0.1, 0.1)
        lng = center_lng + rng.uniform(-0.1, 0.1)

        hospital_type = rng.choice(HOSPITAL_TYPES, p=[0.4, 0.3, 0.3])
        cost = "free" if hospital_type == "government" else rng.choice(COST_TIERS[1:])

        specialties = rng.choice(SPECIALTY_POOL, size=rng.integers(2, 5), replace=False)

        rows.append({
            "id": f"M{str(index + 1).zfill(3)}",
            "name": f"Mock Hospital {index + 1}",
            "lat": np.round(lat, 6),
            "lng": np.round(lng, 6),
            "type": hospital_type,
            "emergency_level": rng.choice(EMERGENCY_LEVELS, p=[0.2, 0.5, 0.3]),
            "capacity": rng.choice(CAPACITIES),
            "specialties": ";".join(sorted(specialties)),
            "cost": cost,
            "phone": f"+91-44-{rng.integers(2000, 9999)}-{rng.integers(1000, 9999)}",
            "available": bool(rng.random() >= 0.1),
        })

    df = pd.DataFrame(rows)
    df.to_csv(output_file, index=False)

    print(f"Successfully generated {count} mock hospitals into '{output_file}'.")
    print(df["type"].value_counts().to_string())
    return df


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Generate a synthetic Chennai hospital CSV")
    parser.add_argument("--count", type=int, default=50)
    parser.add_argument("--output", default="mock_hospitals.csv")
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    generate_mock_hospitals(count=args.count, output_file=args.output, seed=args.seed)
