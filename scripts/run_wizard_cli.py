#!/usr/bin/env python3
"""
Headless CLI Runner for the Project Creation Wizard.

Drives one wizard session from the command line: creates the draft, names
it, imports files, sets the labeling interface and commits (or cancels).

Usage:
    python scripts/run_wizard_cli.py --title "My project" [options]

    Or as a module:
    python -m scripts.run_wizard_cli --title "My project" [options]

Examples:
    # Create a project with a description and a labeling interface
    python scripts/run_wizard_cli.py --title "Reviews" --description "Sentiment" --label-config-file config.xml

    # Import CSV files as a list of tasks
    python scripts/run_wizard_cli.py --title "Reviews" --file reviews.csv --csv-handling tasks

    # Create the draft, then discard it
    python scripts/run_wizard_cli.py --cancel

    # Run against the in-memory client instead of the project service
    python scripts/run_wizard_cli.py --title "Scratch" --offline
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Add project root to path for imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from api.client import RestDraftClient
from api.memory_client import InMemoryDraftClient
from common import constants, logger as wizard_logger
from wizard import CreateProjectWizard, HistoryNavigator


def parse_arguments(argv: Optional[list] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Create a project with the Project Creation Wizard from the command line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split('Examples:')[1] if 'Examples:' in __doc__ else ""
    )

    parser.add_argument('--title', type=str, help='Project title (default: the draft title)')
    parser.add_argument('--description', type=str, default=None, help='Project description')

    config_group = parser.add_mutually_exclusive_group()
    config_group.add_argument('--label-config', type=str, help='Labeling interface XML')
    config_group.add_argument('--label-config-file', type=str, help='File containing the labeling interface XML')

    parser.add_argument(
        '--file',
        action='append',
        default=[],
        help='File to import (repeatable)'
    )
    parser.add_argument(
        '--csv-handling',
        choices=constants.CSV_HANDLING_CHOICES,
        help='How CSV/TSV files are read: as a list of tasks or as time series'
    )

    parser.add_argument('--cancel', action='store_true', help='Discard the draft instead of committing')
    parser.add_argument('--offline', action='store_true', help='Use the in-memory client')
    parser.add_argument('--api-url', type=str, default=None, help='Project service URL')

    return parser.parse_args(argv)


def load_label_config(args) -> Optional[str]:
    """Read the labeling interface from the arguments, if one was given."""
    if args.label_config is not None:
        return args.label_config
    if args.label_config_file:
        config_path = Path(args.label_config_file)
        if not config_path.is_file():
            raise FileNotFoundError(f"Label config file not found: {args.label_config_file}")
        return config_path.read_text(encoding="utf-8")
    return None


async def run_session(args, label_config: Optional[str], client,
                      navigator: HistoryNavigator) -> int:
    """
    Run one wizard session.

    Returns:
        Process exit code
    """
    wizard = CreateProjectWizard(client, navigator)
    session_logger = wizard_logger.get_wizard_logger(wizard.wizard_id, "wizard")

    if not await wizard.open():
        print("❌ Could not create a draft project")
        return 1
    print(f"📝 Draft project {wizard.state.draft.id}: {wizard.state.draft.title}")

    if args.cancel:
        await wizard.cancel()
        print(f"🗑️  Draft discarded, navigated to {navigator.location}")
        return 0

    if args.title is not None:
        wizard.set_name(args.title)
        await wizard.save_name()
        if wizard.editor.name_error:
            print(f"❌ Title rejected: {wizard.editor.name_error}")
            await wizard.cancel()
            return 1

    if args.description is not None:
        wizard.set_description(args.description)

    if label_config is not None:
        wizard.set_label_config(label_config)

    if args.file:
        wizard.select_step(constants.IMPORT_STEP)
        if not await wizard.add_files(args.file):
            print(f"❌ Upload failed: {wizard.import_phase.page_props.get('error')}")
            await wizard.cancel()
            return 1
        if args.csv_handling:
            wizard.import_phase.set_csv_handling(args.csv_handling)
        if wizard.columns:
            print(f"📊 Detected columns: {', '.join(wizard.columns)}")

    if wizard.commit_control().disabled:
        print("❌ The project cannot be saved yet (choose --csv-handling for CSV/TSV files)")
        await wizard.cancel()
        return 1

    # Same path as pressing Enter in the name form
    project = await wizard.submit_name()
    if project is None:
        session_logger.warning("Commit did not complete")
        print("❌ Project could not be saved; the draft was kept")
        return 1

    print(f"✅ Project {project.id} created, navigated to {navigator.location}")
    return 0


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    args = parse_arguments(argv)
    wizard_logger.setup_root_logger()

    try:
        label_config = load_label_config(args)
    except (OSError, UnicodeDecodeError) as e:
        print(f"❌ Cannot read label config: {e}")
        return 2

    if args.offline:
        client = InMemoryDraftClient()
    else:
        client = RestDraftClient(base_url=args.api_url)

    return asyncio.run(run_session(args, label_config, client, HistoryNavigator()))


if __name__ == "__main__":
    sys.exit(main())
