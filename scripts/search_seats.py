import sys
import os
import argparse
import json
import logging
from dataclasses import asdict

# 1. Setup Paths (To allow importing from 'backend')
CURRENT_SCRIPT_PATH = os.path.abspath(__file__)
PROJECT_ROOT = os.path.dirname(os.path.dirname(CURRENT_SCRIPT_PATH))
sys.path.append(os.path.join(PROJECT_ROOT, "backend"))
sys.path.append(PROJECT_ROOT)

from josaa_api.config import settings
from josaa_api.exceptions import InvalidQuery, LoadError, NoResults
from josaa_api.models import SearchQuery
from josaa_api.domains.seat_search.services.search_service import SeatSearchService
from ingestion.csv_ingestion.csv_loader import load_seat_store

logging.basicConfig(level=logging.WARNING, format="%(message)s")
logger = logging.getLogger("SeatSearchCLI")

class SeatSearchCLI:
    def __init__(self):
        self.parser = argparse.ArgumentParser(description="JoSAA Seat Search")
        self.parser.add_argument("--csv", default=settings.CSV_PATH, help="Path to the seat dataset CSV")
        subparsers = self.parser.add_subparsers(dest="command", help="Available commands")

        # Command: stats
        subparsers.add_parser("stats", help="Print dataset statistics")

        # Command: search
        parser_search = subparsers.add_parser("search", help="Find reachable seats for a candidate")
        parser_search.add_argument("--main", type=int, required=True, help="Main-exam rank")
        parser_search.add_argument("--adv", type=int, default=0, help="Advanced-exam rank (0 = not taken)")
        parser_search.add_argument("--resver", default="O", help="Reservation code (e.g. O, E, ON, SC, ST, OP)")
        parser_search.add_argument("--female", action="store_true", help="Candidate is female")
        parser_search.add_argument("--stid", type=int, default=0, help="Home-state id")
        parser_search.add_argument("--tolerance", type=float, default=settings.DEFAULT_TOLERANCE, help="Tolerance percentage")
        parser_search.add_argument("--limit", type=int, default=settings.DEFAULT_RESULT_CAP, help="Max results per tier")

    def run(self, argv=None) -> int:
        args = self.parser.parse_args(argv)
        if args.command is None:
            self.parser.print_help()
            return 2

        try:
            store = load_seat_store(args.csv)
        except LoadError as e:
            print(f"❌ {e}", file=sys.stderr)
            return 1

        if args.command == "stats":
            print(json.dumps(asdict(store.stats), indent=2))
            return 0

        query = SearchQuery(
            main_rank=args.main,
            reservation_code=args.resver,
            is_female=args.female,
            home_state_id=args.stid,
            advanced_rank=args.adv or None,
            tolerance_pct=args.tolerance,
            result_cap=args.limit,
        )
        try:
            result = SeatSearchService().search(store, query)
        except InvalidQuery as e:
            print(f"❌ {e}", file=sys.stderr)
            return 2
        except NoResults as e:
            print(str(e))
            return 3

        output = {
            "adv": [r.as_row() for r in result.advanced],
            "mains": [r.as_row() for r in result.main],
        }
        print(json.dumps(output, indent=2, ensure_ascii=False))
        return 0

if __name__ == "__main__":
    sys.exit(SeatSearchCLI().run())
