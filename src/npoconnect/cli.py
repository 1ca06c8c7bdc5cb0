"""Command-line interface for npoconnect."""

import argparse
import json
import logging
import sys
from pathlib import Path

from .assistant import (
    ChatSession,
    DonorMatchData,
    GenerationOrchestrator,
    MonthlyReportData,
    ProposalData,
)
from .config import load_settings, create_client
from .dataset import load_organizations
from .directory import DirectoryView
from .errors import ConfigurationError, GenerationFailed
from .formatting import banking_details_text, format_markdown
from .models import Organization
from .tasks import LocalStorage, TaskStore

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[logging.StreamHandler()]
    )
    # Quiet down HTTP and Google GenAI libraries
    for name in ("httpx", "httpcore", "google.genai", "google_genai"):
        logging.getLogger(name).setLevel(logging.WARNING)


def load_payload(payload_path: Path, payload_cls):
    """Load a generator form payload from a JSON file.

    Keys may be camelCase (as in the web forms) or snake_case.
    """
    if not payload_path.exists():
        raise FileNotFoundError(f"Payload file not found: {payload_path}")

    data = json.loads(payload_path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Payload file must contain a JSON object")
    return payload_cls.from_dict(data)


def _find_organization(records, org_id: int) -> Organization:
    for record in records:
        if record.id == org_id:
            return record
    raise LookupError(f"No organisation with id {org_id}")


# =============================================================================
# DIRECTORY COMMANDS
# =============================================================================

def print_cards(organizations):
    for npo in organizations:
        print(f"\n{npo.name}")
        print(f"  {npo.sector}")
        print(f"  Location: {npo.city}")
        print(f"  Contact: {npo.contact_number}")
        print(f"  Objective: {npo.primary_objective}")
        print(f"  [id {npo.id}]{'  DONATE' if npo.can_donate else ''}")


def print_table(organizations):
    print(f"\n{'ID':<5} {'Organisation Name':<35} {'Sector':<22} {'City':<15} {'Contact':<15}")
    print("-" * 95)
    for npo in organizations:
        print(f"{npo.id:<5} {npo.name[:35]:<35} {npo.sector[:22]:<22} "
              f"{npo.city[:15]:<15} {npo.contact_number:<15}")


def cmd_search(args, records) -> int:
    view = DirectoryView(records)
    for field in ("name", "city", "sector", "year"):
        value = getattr(args, field)
        if value:
            view.set_filter(field, value)
    view.settle()
    view.set_page(args.page)
    view.set_view_mode(args.view)

    print(view.summary)
    if not view.page_items:
        print("\nNo Organisations Found")
        print("Try adjusting your search filters to find what you're looking for.")
        return 0

    if view.view_mode == "card":
        print_cards(view.page_items)
    else:
        print_table(view.page_items)

    if view.total_pages > 1:
        print(f"\nPage {view.current_page} of {view.total_pages}")
    return 0


def cmd_facets(args, records) -> int:
    facets = DirectoryView(records).facets
    print(f"Cities:  {', '.join(facets.cities)}")
    print(f"Sectors: {', '.join(facets.sectors)}")
    print(f"Years:   {', '.join(str(y) for y in facets.years)}")
    return 0


def cmd_show(args, records) -> int:
    npo = _find_organization(records, args.id)

    def line(label, value):
        print(f"  {label}: {value if value not in (None, '', ()) else 'N/A'}")

    print(f"\n{'=' * 70}")
    print(npo.name)
    print(f"{'=' * 70}")
    print("\nBasic Information")
    line("Sector", npo.sector)
    line("Theme", npo.theme)
    line("Primary Objective", npo.primary_objective)
    print("\nLocation & Address")
    line("Address", npo.address)
    line("City", npo.city)
    line("Province", npo.province)
    line("Postal Address", npo.postal_address)
    line("Postal Code", npo.postal_code)
    print("\nContact Details")
    line("Contact Person", npo.contact_person)
    line("Phone", npo.contact_number)
    line("Fax", npo.fax_number)
    line("Email", npo.email)
    line("Website", npo.website)
    print("\nRegistration & Legal")
    line("Date Registered", npo.date_registered)
    line("Registration Number", npo.registration_number)
    line("Compliance Status", npo.compliance_status)
    print("\nActivity & Impact")
    line("Beneficiaries Reached", npo.beneficiaries_reached)
    line("Current Projects", ", ".join(npo.current_projects))
    line("Past Projects", ", ".join(npo.past_projects))
    line("Funding Sources", ", ".join(npo.funding_sources))
    line("Donor Engagement", npo.donor_engagement_level)
    line("Keywords", ", ".join(npo.keywords))
    for doc in npo.associated_documents:
        print(f"  Document: {doc.name} <{doc.url}>")
    return 0


def cmd_donate(args, records) -> int:
    npo = _find_organization(records, args.id)
    if not npo.can_donate:
        print(f"{npo.name} has not published banking details.", file=sys.stderr)
        return 1
    print(f"Donate to {npo.name}")
    print("Your support makes a difference! Please use the banking details below for EFT.\n")
    print(banking_details_text(npo.banking_details))
    return 0


# =============================================================================
# GENERATION COMMANDS
# =============================================================================

def _write_document(text: str, args, style: str):
    output = format_markdown(text, style) if args.html else text
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(output, encoding="utf-8")
        print(f"Saved to: {args.output}")
    else:
        print(output)


def cmd_generate(args, settings) -> int:
    payload_cls = {
        "proposal": ProposalData,
        "report": MonthlyReportData,
        "donors": DonorMatchData,
    }[args.command]
    request = load_payload(args.payload, payload_cls)

    orchestrator = GenerationOrchestrator(create_client(settings), model=settings.model)
    result = orchestrator.generate(request)

    if isinstance(request, DonorMatchData):
        _write_document(result.text, args, "donor")
        if result.sources:
            print("\nSources:")
            for source in result.sources:
                print(f"  - {source.title}: {source.uri}")
    else:
        _write_document(result, args, "document")
    return 0


def cmd_chat(args, settings) -> int:
    session = ChatSession(create_client(settings), model=settings.model)
    print(f"AI: {session.transcript[-1].text}")
    if not session.ready:
        return 1

    print("(empty line or Ctrl-D to quit)")
    while True:
        try:
            message = input("\nYou: ")
        except EOFError:
            break
        if not message.strip():
            break

        print("AI: ", end="", flush=True)
        for delta in session.stream(message):
            print(delta, end="", flush=True)
        if session.last_error:
            print(session.transcript[-1].text, end="")
        print()
    return 0


# =============================================================================
# TASK COMMANDS
# =============================================================================

def cmd_tasks(args, settings) -> int:
    store = TaskStore(LocalStorage(settings.storage_path))

    if args.tasks_command == "add":
        task = store.add(args.title, args.due, kind=args.type)
        print(f"[OK] Added {task.kind} {task.id}: {task.title} (due {task.due_date})")
    elif args.tasks_command == "remove":
        if not store.remove(args.id):
            print(f"No task with id {args.id}", file=sys.stderr)
            return 1
        print(f"[OK] Removed task {args.id}")

    if args.tasks_command == "list" or args.tasks_command is None:
        if not store.tasks:
            print("No upcoming tasks or deadlines.")
        for task in store.tasks:
            label = "Grant" if task.is_grant else "Task"
            print(f"{task.id:<15} {task.due_date:<12} {label:<6} {task.title}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="npoconnect",
        description="Browse the NPO directory and use AI tools for non-profits"
    )
    parser.add_argument(
        "--data",
        type=Path,
        help="Organisation dataset JSON (default: bundled Gauteng sample)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="Search and filter the directory")
    search.add_argument("--name", default="", help="Name contains (case-insensitive)")
    search.add_argument("--city", default="", help="Exact city")
    search.add_argument("--sector", default="", help="Exact sector")
    search.add_argument("--year", default="", help="Registration year")
    search.add_argument("--page", type=int, default=1, help="Page number (default: 1)")
    search.add_argument("--view", choices=["card", "table"], default="card",
                        help="Result layout (default: card)")

    sub.add_parser("facets", help="List available cities, sectors and years")

    show = sub.add_parser("show", help="Show an organisation's full profile")
    show.add_argument("id", type=int)

    donate = sub.add_parser("donate", help="Show an organisation's banking details")
    donate.add_argument("id", type=int)

    for name, help_text in (
        ("proposal", "Generate a business proposal"),
        ("report", "Generate a monthly report"),
        ("donors", "Find potential donors (web-grounded)"),
    ):
        gen = sub.add_parser(name, help=help_text)
        gen.add_argument("payload", type=Path, help="JSON file with the form fields")
        gen.add_argument("-o", "--output", type=Path, help="Write the document to a file")
        gen.add_argument("--html", action="store_true", help="Render Markdown to HTML")

    sub.add_parser("chat", help="Chat with the NPO assistant")

    tasks = sub.add_parser("tasks", help="Task and deadline calendar")
    tasks_sub = tasks.add_subparsers(dest="tasks_command")
    tasks_sub.add_parser("list", help="List tasks by due date")
    add = tasks_sub.add_parser("add", help="Add a task or grant deadline")
    add.add_argument("title")
    add.add_argument("due", help="Due date (YYYY-MM-DD)")
    add.add_argument("--type", choices=["task", "grant"], default="task")
    remove = tasks_sub.add_parser("remove", help="Remove a task")
    remove.add_argument("id", type=int)

    return parser


def main(argv=None):
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    settings = load_settings()

    try:
        if args.command in ("search", "facets", "show", "donate"):
            records = load_organizations(args.data or settings.dataset_path)
            handler = {
                "search": cmd_search,
                "facets": cmd_facets,
                "show": cmd_show,
                "donate": cmd_donate,
            }[args.command]
            code = handler(args, records)
        elif args.command == "chat":
            code = cmd_chat(args, settings)
        elif args.command == "tasks":
            code = cmd_tasks(args, settings)
        else:
            code = cmd_generate(args, settings)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)
    except GenerationFailed as e:
        print(f"Error: {e.cause}", file=sys.stderr)
        sys.exit(1)
    except (FileNotFoundError, json.JSONDecodeError, LookupError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
