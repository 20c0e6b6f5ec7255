"""Generate synthetic school, travel-time and site datasets for offline use."""

import pandas as pd
import random
import os
from config.defaults import SAMPLE_DISTRICTS, SAMPLE_SEED, SCHOOL_TYPES, GENDERS


def generate_schools_df(schools_per_district: int = 6) -> pd.DataFrame:
    """School capacity records: a few schools per district, some over capacity."""
    random.seed(SAMPLE_SEED)
    rows = []
    n = 1
    for district, lat, lon in SAMPLE_DISTRICTS:
        for _ in range(schools_per_district):
            school_type = random.choice(SCHOOL_TYPES)
            capacity = random.choice([400, 500, 600, 800, 1000])
            enrollment = round(capacity * random.uniform(0.6, 1.35))
            rows.append({
                "school_id": f"S{n:03d}",
                "school_name": f"{district} {school_type} School {n}",
                "district": district,
                "school_type": school_type,
                "gender": random.choice(GENDERS),
                "design_capacity": capacity,
                "current_enrollment": enrollment,
                "latitude": round(lat + random.uniform(-0.02, 0.02), 5),
                "longitude": round(lon + random.uniform(-0.02, 0.02), 5),
            })
            n += 1
    return pd.DataFrame(rows)


def generate_travel_df(samples_per_district: int = 5) -> pd.DataFrame:
    """Point travel-time observations around each district centre."""
    random.seed(SAMPLE_SEED + 1)
    rows = []
    for i, (district, lat, lon) in enumerate(SAMPLE_DISTRICTS):
        base = 6 + i * 3
        for _ in range(samples_per_district):
            rows.append({
                "from_district": district,
                "lat": round(lat + random.uniform(-0.03, 0.03), 5),
                "lng": round(lon + random.uniform(-0.03, 0.03), 5),
                "avg_travel_time_minutes": round(base + random.uniform(-3, 3), 1),
            })
    return pd.DataFrame(rows)


def generate_sites_df() -> pd.DataFrame:
    """A couple of proposed new school sites (normally computed upstream)."""
    sites = [
        ("Site A", "Al Shifa", 24.5450, 46.7100, 900, 1200, 3.2, "HIGH", ["Al Shifa", "Al Aziziyah"]),
        ("Site B", "Al Yasmin", 24.8300, 46.6600, 800, 850, 2.7, "MEDIUM", ["Al Yasmin", "Al Nakheel"]),
    ]
    return pd.DataFrame([{
        "name": name,
        "recommended_district": district,
        "latitude": lat,
        "longitude": lon,
        "recommended_capacity": capacity,
        "estimated_students_served": served,
        "avg_distance_km": km,
        "priority": priority,
        "districts_served": districts,
    } for name, district, lat, lon, capacity, served, km, priority, districts in sites])


def generate_payloads() -> dict:
    """Sample data wrapped the way the upstream workflows wrap their responses."""
    return {
        "capacity": {"overcapacity_schools": generate_schools_df().to_dict("records")},
        "travel": {"results": {"heatmap_data": generate_travel_df().to_dict("records")}},
        "sites": {"recommendations": generate_sites_df().to_dict("records")},
    }


def generate_sample_csvs(output_dir: str):
    """Write sample CSV files to the given directory."""
    os.makedirs(output_dir, exist_ok=True)
    generate_schools_df().to_csv(os.path.join(output_dir, "schools.csv"), index=False)
    generate_travel_df().to_csv(os.path.join(output_dir, "travel.csv"), index=False)


def generate_sample_excel(output_dir: str) -> str:
    """Write a single multi-tab Excel file with the school and travel datasets; returns its path."""
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, "sample_data.xlsx")
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        generate_schools_df().to_excel(writer, sheet_name="Schools", index=False)
        generate_travel_df().to_excel(writer, sheet_name="Travel", index=False)
    return path


if __name__ == "__main__":
    out = os.path.join(os.path.dirname(__file__), "..", "sample_files")
    generate_sample_csvs(out)
    generate_sample_excel(out)
    print("Sample CSV and Excel files generated in sample_files/")
