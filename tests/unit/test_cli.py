import sys

import pytest

from src.adapters.repos import AccountDocumentRepo, PortfolioDocumentRepo
from src.adapters.sqlite.store import SQLiteDocumentStore
from src.api.auth_utils import decode_access_token
from src.app_shell import cli


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("FOLIO_DATA_DIR", str(tmp_path))
    return tmp_path


def run_cli(monkeypatch, *argv: str) -> None:
    monkeypatch.setattr(sys, "argv", ["folio", *argv])
    cli.main()


def test_migrate_creates_database(data_dir, monkeypatch, capsys):
    run_cli(monkeypatch, "migrate")
    assert (data_dir / "folio.db").exists()
    assert "Applied 2 migration(s)" in capsys.readouterr().out

    run_cli(monkeypatch, "migrate")
    assert "Applied 0 migration(s)" in capsys.readouterr().out


def test_seed_publishes_demo_portfolio_once(data_dir, monkeypatch):
    run_cli(monkeypatch, "seed")
    run_cli(monkeypatch, "seed")

    store = SQLiteDocumentStore(str(data_dir / "folio.db"))
    accounts = AccountDocumentRepo(store)
    assert accounts.get_by_id("demo-admin").is_admin
    portfolios = PortfolioDocumentRepo(store)
    demo = portfolios.get_published_by_slug("ada")
    assert demo is not None
    assert demo.owner_id == "demo-free"
    assert portfolios.count_by_owner("demo-free") == 1


def test_token_round_trips(monkeypatch, capsys):
    run_cli(monkeypatch, "token", "acct-1", "--admin")
    claims = decode_access_token(capsys.readouterr().out.strip())
    assert claims["sub"] == "acct-1"
    assert claims["is_admin"] is True


def test_plan_change(data_dir, monkeypatch):
    run_cli(monkeypatch, "seed")
    run_cli(monkeypatch, "plan", "demo-free", "grandfathered")

    store = SQLiteDocumentStore(str(data_dir / "folio.db"))
    assert AccountDocumentRepo(store).get_by_id("demo-free").plan == "grandfathered"


def test_plan_change_unknown_account_exits(data_dir, monkeypatch):
    with pytest.raises(SystemExit) as exc:
        run_cli(monkeypatch, "plan", "nobody", "pro")
    assert exc.value.code == 1
