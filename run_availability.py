"""
Main Execution Script for the Salon Availability Engine.

Loads a business snapshot (JSON export of the booking app's documents),
walks one date and prints every slot with its reason, then the day's
statistics.

    python run_availability.py snapshot.json 2024-01-02 --services svc_cut svc_colour
    python run_availability.py snapshot.json 2024-01-02 --services svc_cut --staff staff_anna
"""

import argparse
import json
import logging
from datetime import datetime

from adapters.documents import load_snapshot, parse_date
from availability.assigner import StaffAssigner
from availability.config import get_settings
from availability.engine import AvailabilityEngine
from availability.errors import AvailabilityError, SlotNoLongerAvailable

logger = logging.getLogger("Main")


def configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, get_settings().LOG_LEVEL.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()]
    )


def load_snapshot_file(filename: str):
    """Read the JSON bundle and rebuild engine models from it."""
    with open(filename, 'r') as f:
        data = json.load(f)
    logger.info(f"Loading snapshot from {filename}...")
    return load_snapshot(data)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Print bookable slots for one date")
    parser.add_argument("snapshot", help="Path to the JSON snapshot")
    parser.add_argument("date", help="Date to walk (YYYY-MM-DD)")
    parser.add_argument("--services", nargs="+", required=True, help="Service ids in the cart")
    parser.add_argument("--staff", default=None, help="Pin a staff member")
    parser.add_argument("--now", default=None, help="Override the current time (ISO format)")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    configure_logging()
    args = parse_args(argv)

    try:
        snapshot = load_snapshot_file(args.snapshot)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Could not read snapshot {args.snapshot}: {e}")
        return 1
    except AvailabilityError as e:
        logger.error(f"Snapshot is invalid: {e}")
        return 1

    engine = AvailabilityEngine(snapshot)
    now = datetime.fromisoformat(args.now) if args.now else datetime.now()

    try:
        day = parse_date(args.date)
        cart = engine.cart_for(args.services)
        result = engine.generate_slots(day, cart, now, staff_id=args.staff)
    except AvailabilityError as e:
        logger.error(f"Cannot compute availability: {e}")
        return 1

    print("\n" + "=" * 50)
    print(f"AVAILABILITY FOR {day.isoformat()} ({cart.span} min incl. buffer)")
    print("=" * 50)

    if not result.is_open:
        print(f"Day unavailable [{result.reason.value}]: {result.message}")
        return 0

    for slot in result.slots:
        if slot.available:
            names = ", ".join(m.name or m.id for m in slot.eligible_staff)
            print(f"  {slot.time:>8}  OK   {names}")
        else:
            print(f"  {slot.time:>8}  --   [{slot.reason.value}] {slot.message}")

    print("\n" + "-" * 50)
    print(result.get_statistics())

    if result.available_slots and not args.staff:
        first = result.available_slots[0]
        try:
            member = StaffAssigner().assign(first)
            print(f"\nFirst slot {first.time} would be assigned to {member.name or member.id}")
        except SlotNoLongerAvailable as e:
            logger.warning(str(e))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
