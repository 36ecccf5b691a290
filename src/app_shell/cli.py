import argparse
import logging
import sys

from src.adapters.clock import SystemClock
from src.adapters.repos import AccountDocumentRepo, PortfolioDocumentRepo
from src.adapters.sqlite.migrator import SQLiteMigrator
from src.adapters.sqlite.store import SQLiteDocumentStore
from src.api.auth_utils import create_access_token
from src.api.deps import Settings
from src.components.publish import PortfolioDraft, PublishingResolver
from src.domain.entities import Account, ContentDocument
from src.domain.errors import ConflictError
from src.rules.loader import load_rules

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("cli")

DEMO_ACCOUNTS = (
    Account(id="demo-free", plan="free"),
    Account(id="demo-pro", plan="pro"),
    Account(id="demo-admin", plan="pro", is_admin=True),
)

DEMO_CONTENT = {
    "personal": {
        "name": "Ada Lovelace",
        "title": "Engineer",
        "bio": "Writing the first published algorithm.",
    },
    "projects": [
        {
            "id": "note-g",
            "title": "Note G",
            "short_description": "Bernoulli numbers on the Analytical Engine.",
            "techs": ["Punch cards"],
        }
    ],
    "socials": {"email": "ada@example.com"},
}


def open_store(settings: Settings) -> SQLiteDocumentStore:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    SQLiteMigrator(settings.db_path, str(settings.migrations_dir)).run_migrations()
    return SQLiteDocumentStore(settings.db_path)


def handle_migrate(settings: Settings) -> None:
    migrator = SQLiteMigrator(settings.db_path, str(settings.migrations_dir))
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    count = migrator.run_migrations()
    print(f"Applied {count} migration(s) to {settings.db_path}.")


def handle_seed(settings: Settings) -> None:
    store = open_store(settings)
    accounts = AccountDocumentRepo(store)
    for account in DEMO_ACCOUNTS:
        accounts.save(account)
        print(f"Account {account.id} ({account.plan})")

    rules = load_rules(settings.rules_path)
    resolver = PublishingResolver(
        repo=PortfolioDocumentRepo(store), clock=SystemClock(), slug_rules=rules.slugs
    )
    draft = PortfolioDraft(
        owner_id="demo-free",
        template_id="devfolio",
        slug="ada",
        data=ContentDocument.model_validate(DEMO_CONTENT),
        active_pages=("home", "about", "projects", "contact"),
    )
    try:
        portfolio = resolver.publish(draft)
    except ConflictError:
        logger.warning("Demo portfolio already published at /u/ada")
        return
    print(f"Published demo portfolio {portfolio.id} at /u/{portfolio.slug}")


def handle_token(args: argparse.Namespace) -> None:
    print(create_access_token({"sub": args.account_id, "is_admin": args.admin}))


def handle_plan(settings: Settings, args: argparse.Namespace) -> None:
    accounts = AccountDocumentRepo(open_store(settings))
    account = accounts.get_by_id(args.account_id)
    if account is None:
        logger.error("Account %s not found.", args.account_id)
        sys.exit(1)
    accounts.save(account.model_copy(update={"plan": args.plan}))
    print(f"Account {account.id}: {account.plan} -> {args.plan}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Folio CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("migrate", help="Apply pending SQLite migrations")
    subparsers.add_parser("seed", help="Create demo accounts and a published portfolio")

    token_parser = subparsers.add_parser("token", help="Mint a bearer token for an account")
    token_parser.add_argument("account_id")
    token_parser.add_argument("--admin", action="store_true", help="Add the is_admin claim")

    plan_parser = subparsers.add_parser("plan", help="Change an account's plan")
    plan_parser.add_argument("account_id")
    plan_parser.add_argument("plan", choices=["free", "pro", "grandfathered"])

    args = parser.parse_args()
    settings = Settings()

    if args.command == "migrate":
        handle_migrate(settings)
    elif args.command == "seed":
        handle_seed(settings)
    elif args.command == "token":
        handle_token(args)
    elif args.command == "plan":
        handle_plan(settings, args)


if __name__ == "__main__":
    main()
