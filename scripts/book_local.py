from __future__ import annotations

#!/usr/bin/env python3
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

"""
Interactive local booking harness (no HTTP, no remote API).

Usage:
  python3 scripts/book_local.py

What it does:
- Loads the demo venue from the in-memory reservation service
- Lets you pick dates and guests, validates them the same way the API does
- Walks the Review -> Payment -> Confirmed flow and prints each stage
"""

from datetime import date

from venuebook.application.exceptions import BookingValidationError, WorkflowTransitionError
from venuebook.application.use_cases.venue_booking import VenueBookingUseCase
from venuebook.domain.entities.candidate_range import CandidateRange
from venuebook.domain.entities.workflow_state import PaymentMethod
from venuebook.infrastructure.notifications.log_notifier import CollectingNotifier
from venuebook.wiring.dependencies import DEMO_VENUES, get_mock_service


def _print_header(venue_name: str) -> None:
    print("\nLocal Booking Harness")
    print("-" * 60)
    print(f"venue: {venue_name}")
    print("Commands: /book (start), /occupied, /quit, /help")
    print("-" * 60)


def _ask_date(prompt: str) -> date | None:
    raw = input(prompt).strip()
    if not raw:
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError:
        print("  (expected YYYY-MM-DD)")
        return None


def _flush(notifier: CollectingNotifier) -> None:
    for level, text in notifier.drain():
        print(f"  [{level}] {text}")


def _run_workflow(use_case: VenueBookingUseCase, notifier: CollectingNotifier) -> None:
    date_from = _ask_date("check-in (YYYY-MM-DD): ")
    date_to = _ask_date("check-out (YYYY-MM-DD): ")
    guests = use_case.normalize_guests(input(f"guests (1-{use_case.venue.max_guests}): "))
    candidate = CandidateRange(date_from=date_from, date_to=date_to, guests=guests)

    try:
        workflow = use_case.start_workflow(candidate)
    except BookingValidationError:
        _flush(notifier)
        return

    summary = workflow.summary()
    print("\n--- Review ---")
    print(f"{summary.venue_name}: {summary.date_from} to {summary.date_to}")
    print(f"guests: {summary.guests}  total ({summary.nights} nights): {summary.total_cost:.2f}")

    while not workflow.state.is_terminal:
        actions = ", ".join(sorted(workflow.available_actions))
        cmd = input(f"[{workflow.stage.value}] action ({actions}): ").strip().lower()
        try:
            if cmd == "select_payment":
                options = list(PaymentMethod)
                for i, method in enumerate(options, 1):
                    print(f"  {i}. {method.value}")
                choice = input("  method #: ").strip()
                if choice.isdigit() and 1 <= int(choice) <= len(options):
                    workflow.select_payment(options[int(choice) - 1])
            elif cmd in ("confirm", "back", "pay", "cancel", "close"):
                getattr(workflow, cmd)()
            else:
                print("  unknown action")
        except WorkflowTransitionError as e:
            print(f"  {e}")
        _flush(notifier)

    state = workflow.state
    if state.confirmation_id:
        print("\n--- Confirmed ---")
        print(f"confirmation: {state.confirmation_id} (via {state.payment_method.value})")
    workflow.close()
    _flush(notifier)


def main() -> None:
    venue_id = DEMO_VENUES[0].id
    notifier = CollectingNotifier()
    use_case = VenueBookingUseCase(
        venue_id=venue_id,
        availability_source=get_mock_service(),
        gateway=get_mock_service(),
        notifier=notifier,
    )
    _print_header(use_case.venue.name)

    while True:
        try:
            cmd = input("\n> ").strip().lower()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if cmd in ("/quit", "/exit"):
            print("Bye!")
            return
        if cmd == "/help":
            print("Commands:")
            print("  /book -> choose dates and guests, then walk the booking flow")
            print("  /occupied -> list occupied days")
            print("  /quit -> exit")
            continue
        if cmd == "/occupied":
            days = sorted(use_case.occupied)
            print(", ".join(d.isoformat() for d in days) or "(none)")
            continue
        if cmd == "/book":
            try:
                _run_workflow(use_case, notifier)
            except (EOFError, KeyboardInterrupt):
                print("\nBye!")
                return
            continue


if __name__ == "__main__":
    main()
