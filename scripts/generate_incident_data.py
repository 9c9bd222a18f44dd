import argparse
import os
import sys

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from trafficpulse.dashboard.infrastructure import generate_synthetic_records, records_to_frame

NUM_CENTERS = 12

def generate_data(num_centers=NUM_CENTERS, seed=None, output_file="data/incidents.csv"):
    print(f"Generating {num_centers} synthetic incident snapshots...")

    records = generate_synthetic_records(count=num_centers, seed=seed)
    df = records_to_frame(records)

    os.makedirs(os.path.dirname(output_file) or ".", exist_ok=True)
    df.to_csv(output_file, index=False)

    print(f"Data saved to {output_file}")
    print(df[["centerId", "location.zone", "violations.total", "challans.collected_amount"]].head())
    print("\nTotals per zone:")
    print(df.groupby("location.zone")[["accidents.overall", "violations.total"]].sum())

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Generate synthetic incident data")
    parser.add_argument("--centers", type=int, default=NUM_CENTERS)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--output", default="data/incidents.csv")
    args = parser.parse_args()
    generate_data(args.centers, args.seed, args.output)
