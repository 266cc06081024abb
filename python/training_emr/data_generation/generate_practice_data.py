#!/usr/bin/env python3
"""
Training EMR - Practice Data Script

Adds synthetic practice charts to a classroom account's collection, e.g. to
prepare a sandbox before a lab session:

    python -m training_emr.data_generation.generate_practice_data \\
        --email demo@classroom.edu --count 20 --seed 7 --seed-demo
"""

import argparse
import logging
import sys
from typing import List, Optional

from training_emr.services.local_store import LocalStore
from training_emr.services.session_manager import Session, SessionManager
from training_emr.services.patient_list import PatientListController
from training_emr.utils import config

logger = logging.getLogger(__name__)

class PracticeDataOrchestrator:
    """Adds generated charts to one account in a store directory."""

    def __init__(self, data_dir: str, seed: Optional[int] = None):
        self.store = LocalStore(data_dir)
        seed_config = config.get_seed_config()
        self.session_manager = SessionManager(
            self.store,
            demo_name=seed_config['demo_name'],
            demo_email=seed_config['demo_email'],
            demo_password=seed_config['demo_password'],
        )
        self.seed = seed

    def seed_demo(self) -> bool:
        inserted = self.session_manager.seed_demo_account()
        if inserted:
            print(f"✅ Demo account created: {self.session_manager.demo_email}")
        else:
            print(f"ℹ️ Demo account already present: {self.session_manager.demo_email}")
        return inserted

    def add_patients(self, email: str, count: int) -> int:
        """
        Append ``count`` practice charts to the account's collection

        Returns:
            New collection size
        """
        user = self.session_manager.find_user(email)
        if user is None:
            raise LookupError(f"No account found for {email}")

        controller = PatientListController(self.store, Session.for_user(user))
        added = controller.add_practice_patients(count, seed=self.seed)
        for patient in added:
            print(f"   {patient['mrn']}  {patient['lastName']}, {patient['firstName']}")
        print(f"✅ Added {len(added)} practice patients for {user['email']} ({len(controller.patients)} total)")
        return len(controller.patients)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Add synthetic practice patients to a Training EMR account")
    parser.add_argument("--email", required=True, help="Account email to add patients to")
    parser.add_argument("--count", type=int, default=10, help="Number of patients to generate (default: 10)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible data")
    parser.add_argument("--data-dir", default=None, help="Store directory (default: EMR_DATA_DIR or .emr_data)")
    parser.add_argument("--seed-demo", action="store_true", help="Create the demo account first if missing")
    return parser

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.count < 1:
        print("❌ --count must be at least 1")
        return 2

    config.setup_logging()
    data_dir = args.data_dir or config.get_app_config()['data_dir']
    orchestrator = PracticeDataOrchestrator(data_dir, seed=args.seed)

    if args.seed_demo:
        orchestrator.seed_demo()

    try:
        orchestrator.add_patients(args.email, args.count)
    except LookupError as e:
        print(f"❌ {e}")
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
