import numpy as np
import pandas as pd

# Center around Bengaluru (Koramangala)
CENTER_LAT = 12.9352
CENTER_LON = 77.6245


def generate_mock_partners(num_partners=200, output_file="mock_partners.csv", seed=None):
    """
    Generates a partner fleet scattered around the city center, mixing
    walkers close in with bikes / EVs spread wider, so every dispatch stage
    gets exercised by the simulation.
    """
    rng = np.random.default_rng(seed)

    types = rng.choice(["WALKER", "BIKE", "EV"], size=num_partners, p=[0.4, 0.45, 0.15])
    # walkers stay within ~2km, riders within ~12km (roughly 0.02 / 0.11 degrees)
    spread = np.where(types == "WALKER", 0.02, 0.11)

    total_deliveries = rng.integers(0, 500, size=num_partners)
    success_ratio = rng.uniform(0.7, 1.0, size=num_partners)

    data = {
        "partner_id": [f"P-{str(i + 1).zfill(4)}" for i in range(num_partners)],
        "name": [f"Partner {i + 1}" for i in range(num_partners)],
        "partner_type": types,
        "lat": np.round(CENTER_LAT + rng.uniform(-1, 1, size=num_partners) * spread, 6),
        "lon": np.round(CENTER_LON + rng.uniform(-1, 1, size=num_partners) * spread, 6),
        # 75% online, 90% KYC approved
        "available": rng.random(num_partners) < 0.75,
        "status": np.where(rng.random(num_partners) < 0.9, "ACTIVE", "INACTIVE"),
        "rating": np.round(rng.uniform(3.0, 5.0, size=num_partners), 1),
        "total_deliveries": total_deliveries,
        "successful_deliveries": np.floor(total_deliveries * success_ratio).astype(int),
    }

    df = pd.DataFrame(data)
    df.to_csv(output_file, index=False)
    print(f"Generated {num_partners} partners and saved to '{output_file}'")

    print("\nFleet mix:")
    for partner_type, count in df["partner_type"].value_counts().items():
        print(f"  {partner_type}: {count}")
    return df


if __name__ == "__main__":
    generate_mock_partners()
