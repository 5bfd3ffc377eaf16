import logging
import os
import sys
from collections import Counter

import numpy as np

# allow running as `python scripts/run_dispatch_simulation.py` from the repo root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from couriers import CourierPartner, InMemoryCourierRegistry
from dispatch import DispatchCascade, InMemoryDispatchLedger, summarize_dispatch
from geo import Location
from partners import InMemoryPartnerDirectory, load_partners_csv

from generate_mock_partners import CENTER_LAT, CENTER_LON, generate_mock_partners

COURIERS = [
    CourierPartner("C-DELHIVERY", "Delhivery", success_rate=0.94),
    CourierPartner("C-BLUEDART", "Blue Dart", success_rate=0.97),
    CourierPartner("C-ECOM", "Ecom Express", success_rate=0.91),
]


def random_orders(count, seed=None):
    rng = np.random.default_rng(seed)
    orders = []
    for index in range(count):
        # vendors within ~15km, customers within ~5km of the vendor
        vendor = Location(
            float(CENTER_LAT + rng.uniform(-0.14, 0.14)),
            float(CENTER_LON + rng.uniform(-0.14, 0.14)),
        )
        customer = Location(
            float(vendor.latitude + rng.uniform(-0.045, 0.045)),
            float(vendor.longitude + rng.uniform(-0.045, 0.045)),
        )
        orders.append((f"ORD-{str(index + 1).zfill(5)}", vendor, customer))
    return orders


def run_simulation(num_orders=100, partners_file="mock_partners.csv"):
    print("=== STARTING END-TO-END DISPATCH SIMULATION ===")

    if not os.path.exists(partners_file):
        generate_mock_partners(output_file=partners_file, seed=7)

    partners = load_partners_csv(partners_file)
    orders = random_orders(num_orders, seed=11)
    print(f"Loaded {len(partners)} partners and generated {len(orders)} orders.\n")

    with InMemoryPartnerDirectory(partners) as directory, \
            InMemoryCourierRegistry(COURIERS) as registry, \
            InMemoryDispatchLedger() as ledger:

        cascade = DispatchCascade(directory, registry, ledger)
        stages = Counter()
        failures = 0

        for order_id, vendor, customer in orders:
            outcome = cascade.dispatch(order_id, vendor, customer)
            if outcome.success:
                stages[outcome.final_stage.value] += 1
                print(f"[SUCCESS] {order_id} -> {outcome.partner_name} ({outcome.final_stage.value})")
            else:
                failures += 1
                print(f"[FAILED] {order_id} -> {outcome.message}")

        total_attempts = sum(summarize_dispatch(ledger, order_id).total_attempts for order_id, _, _ in orders)

    print("\n=== SIMULATION COMPLETE ===")
    for stage in ("MESH", "GIG", "COURIER"):
        print(f"{stage}: {stages[stage]} / {num_orders}")
    print(f"Failed: {failures}")
    print(f"Ledger attempts: {total_attempts}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    run_simulation()
