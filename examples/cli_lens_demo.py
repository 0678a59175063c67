#!/usr/bin/env python3
"""
Bound Lens CLI Demo

Walks through the lens layers on the Person/Address records:
- Field lenses from the derived tables
- Nested navigation through bound accessors
- Chains rooted at a nested record
- Law checks over sample values

Usage:
  python examples/cli_lens_demo.py --scenario all
  python examples/cli_lens_demo.py --scenario laws --verbose --log-json
"""

import sys
import os
import argparse

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))
sys.path.insert(0, os.path.dirname(__file__))

from bound_lens import (
    check_lens_laws, check_composition, configure_logging, log_violations,
)
from bound_lens.log import get_logger
from person_address import Person, Address, seed_person

log = get_logger("bound_lens.demo")


# ============================================================================
# DEMO SCENARIOS
# ============================================================================

def print_header(title: str):
    """Print formatted header"""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def scenario_basic():
    """Scenario 1: one field lens from the derived table"""
    print_header("SCENARIO 1: Field Lenses")
    narf = seed_person()
    renamed = Person.Lenses.name.set("Kuba", narf)

    print(f"\n   original: {narf}")
    print(f"   renamed:  {renamed}")
    print(f"   address unchanged: {renamed.address == narf.address}")


def scenario_nested():
    """Scenario 2: navigate Person → address → street"""
    print_header("SCENARIO 2: Nested Navigation")
    narf = seed_person()
    street = narf.through_lens.address.street

    print(f"\n   accessor: {street!r}")
    print(f"   get():    {street.get()}")
    moved = street.set("Baker Street")
    print(f"   set():    {moved}")
    print(f"   original untouched: {narf}")


def scenario_rooted():
    """Scenario 3: a chain rooted at the nested Address"""
    print_header("SCENARIO 3: Chains Rooted at a Part")
    narf = seed_person()
    updated = narf.address.through_lens.street.set("Baker Street")

    print(f"\n   result type: {type(updated).__name__}")
    print(f"   result:      {updated}")


def scenario_laws():
    """Scenario 4: check the lens laws over sample values"""
    print_header("SCENARIO 4: Lens Laws")
    people = [
        seed_person(),
        Person(name="Kuba", address=Address(street="Baker Street")),
    ]
    streets = ["Sesame Street", "Baker Street", ""]

    ok, violations = check_lens_laws(Person.Lenses.name, people, ["Kuba", "narf"])
    log.info("checked lens laws", lens="name", ok=ok)
    log_violations(log, violations)
    print(f"\n   Person.name laws hold: {ok}")

    ok, violations = check_composition(
        Person.Lenses.address, Address.Lenses.street, people, streets
    )
    log.info("checked composition", lens="address.street", ok=ok)
    log_violations(log, violations)
    print(f"   address.street composition holds: {ok}")
    for violation in violations:
        print(f"     - {violation.describe()}")


SCENARIOS = {
    "basic": scenario_basic,
    "nested": scenario_nested,
    "rooted": scenario_rooted,
    "laws": scenario_laws,
}


def main():
    parser = argparse.ArgumentParser(description="Bound lens demo")
    parser.add_argument(
        "--scenario",
        choices=[*SCENARIOS, "all"],
        default="all",
        help="Which scenario to run",
    )
    parser.add_argument("--verbose", action="store_true", help="Show debug logs")
    parser.add_argument("--log-json", action="store_true", help="Log as JSON lines")
    args = parser.parse_args()

    configure_logging(verbose=args.verbose, log_json=args.log_json)

    selected = SCENARIOS.values() if args.scenario == "all" else [SCENARIOS[args.scenario]]
    for scenario in selected:
        scenario()

    print("\n✓ Demo complete")


if __name__ == "__main__":
    main()
