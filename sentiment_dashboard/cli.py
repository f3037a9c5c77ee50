from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from sentiment_dashboard.config import AppConfig
from sentiment_dashboard.core.dates import default_date_range, list_title
from sentiment_dashboard.core.errors import SentimentDashboardError
from sentiment_dashboard.infra.db.repos import SentimentPostRepo, UserRepo
from sentiment_dashboard.infra.db.session import (
    generate_random_password,
    hash_password,
    init_db,
    init_default_admin,
    session_scope,
)
from sentiment_dashboard.modules.analytics import (
    calculate_controversy_list,
    calculate_negative_list,
    calculate_positive_list,
)
from sentiment_dashboard.modules.daily_data.cache import open_result_cache
from sentiment_dashboard.modules.daily_data.ingest import ingest_posts, load_post_records
from sentiment_dashboard.modules.daily_data.service import DailySentimentService
from sentiment_dashboard.services.config_store import ConfigStore
from sentiment_dashboard.settings import AppSettings

app = typer.Typer(help="Sentiment Dashboard CLI")
console = Console()

db_app = typer.Typer(help="Database commands")
auth_app = typer.Typer(help="Manage admin authentication")
app.add_typer(db_app, name="db")
app.add_typer(auth_app, name="auth")


def _store() -> ConfigStore:
    settings = AppSettings()
    return ConfigStore(config_path=settings.config_file)


def _load_config() -> AppConfig:
    store = _store()
    config = store.load()
    init_db(config.database.url)
    return config


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command("init-config")
def init_config(
    database_url: Optional[str] = typer.Option(None, help="SQLAlchemy URL of the sentiment database."),
) -> None:
    store = _store()
    config = store.load()
    if database_url:
        config = store.patch({"database": {"url": database_url}})
    else:
        store.save(config)
    init_db(config.database.url)
    console.print(f"[green]Config initialized:[/green] {store.config_path.resolve()}")


@db_app.command("init")
def db_init() -> None:
    config = _load_config()
    init_db(config.database.url)
    console.print(f"[green]Database ready:[/green] {config.database.url}")


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind host, default from settings."),
    port: Optional[int] = typer.Option(None, help="Bind port, default from settings."),
    reload: bool = typer.Option(False, help="Enable autoreload mode."),
) -> None:
    settings = AppSettings()
    uvicorn.run(
        "sentiment_dashboard.api:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
    )


@app.command("ingest")
def ingest(
    path: Path = typer.Argument(..., help="JSON array or CSV file of analysed posts."),
) -> None:
    config = _load_config()
    try:
        records = load_post_records(path)
    except (FileNotFoundError, ValueError, SentimentDashboardError) as exc:
        console.print(f"[red]Ingest failed:[/red] {exc}")
        raise typer.Exit(1)
    written = ingest_posts(config.database.url, records)
    with session_scope(config.database.url) as session:
        stored = SentimentPostRepo(session).count()
    # Cached ranges may now be missing the new posts.
    with open_result_cache(config) as cache:
        cache.clear()
    console.print(
        f"[green]Ingested {written} posts[/green] into {config.database.url} ({stored} stored)"
    )


@app.command("summary")
def summary(
    start_date: Optional[str] = typer.Option(None, "--start", help="YYYY-MM-DD, default 30 days ago."),
    end_date: Optional[str] = typer.Option(None, "--end", help="YYYY-MM-DD, default today."),
    limit: Optional[int] = typer.Option(None, help="Rows per table."),
) -> None:
    config = _load_config()
    default_start, default_end = default_date_range(days=config.dashboard.default_range_days)
    start = start_date or default_start
    end = end_date or default_end
    with open_result_cache(config) as cache:
        service = DailySentimentService(config=config, cache=cache)
        try:
            rows = service.get_daily_data(start, end)
        except SentimentDashboardError as exc:
            console.print(f"[red]{exc}[/red]")
            raise typer.Exit(1)

    top = limit or config.dashboard.leaderboard_limit
    min_count = config.dashboard.min_total_count

    for title, metric, items in (
        ("Most Positive", "avg_pos", calculate_positive_list(rows, limit=top, min_total_count=min_count)),
        ("Most Negative", "avg_neg", calculate_negative_list(rows, limit=top, min_total_count=min_count)),
    ):
        table = Table(title=list_title(title, start, end))
        table.add_column("Keyword")
        table.add_column(metric)
        table.add_column("Posts")
        for item in items:
            value = getattr(item, metric)
            table.add_row(item.keyword, f"{value:.3f}" if value is not None else "-", str(item.count))
        console.print(table)

    controversy = Table(title=list_title("Most Controversial", start, end))
    controversy.add_column("Keyword")
    controversy.add_column("Score")
    controversy.add_column("Type")
    controversy.add_column("Posts")
    for item in calculate_controversy_list(rows, limit=top, min_total_count=min_count):
        controversy.add_row(item.keyword, f"{item.score:.1f}", item.type.value, str(item.count))
    console.print(controversy)


@auth_app.command("reset-admin")
def auth_reset_admin(
    password: Optional[str] = typer.Option(
        None, help="New password (will be generated if not provided)"
    ),
) -> None:
    settings = AppSettings()
    config = _load_config()
    created = init_default_admin(
        config.database.url,
        default_username=settings.default_admin_username,
        default_password=password or settings.default_admin_password,
    )
    if created is not None:
        console.print(f"[green]Admin created:[/green] {settings.default_admin_username}")
        console.print(f"[green]Password:[/green] {created}")
        return

    new_password = password or generate_random_password(16)
    with session_scope(config.database.url) as session:
        user_repo = UserRepo(session)
        user = user_repo.get_by_username(settings.default_admin_username)
        if user is None:
            console.print(f"[red]User not found: {settings.default_admin_username}[/red]")
            raise typer.Exit(1)
        user_repo.set_password(user, hash_password(new_password))
    console.print(f"[green]Password reset for:[/green] {settings.default_admin_username}")
    console.print(f"[green]Password:[/green] {new_password}")
    console.print(
        "[yellow]Save this password securely, it won't be shown again[/yellow]"
    )


def main() -> None:
    app()
