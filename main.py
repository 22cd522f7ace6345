import click
import uvicorn

from storefront.core.logging import get_logger

logger = get_logger(__name__)


@click.group()
def cli():
    """Storefront CLI"""
    pass


@cli.command()
@click.option("--host", default="0.0.0.0")
@click.option("--port", default=8000)
@click.option("--workers", default=1)
@click.option("--production", is_flag=True, help="Run in production mode")
def serve(host, port, workers, production):
    """Start the API server"""
    reload = not production  # Auto-reload unless production mode

    uvicorn.run(
        "storefront.api.web_app:app",
        host=host,
        port=port,
        reload=reload,
        workers=workers if production else 1,
        log_level="info" if production else "debug",
    )


@cli.command("init-db")
def init_db():
    """Create all tables that do not exist yet"""
    from storefront.db.base import Base, engine
    import storefront.db.models  # noqa: F401  registers the tables

    Base.metadata.create_all(bind=engine)
    tables = ", ".join(sorted(Base.metadata.tables))
    logger.info(f"Created tables: {tables}")
    click.echo(f"Database ready ({tables})")


@cli.command("purge-orphan-reviews")
def purge_orphan_reviews():
    """Delete reviews whose product no longer exists"""
    from storefront.core.dependencies import db_session_scope
    from storefront.services.review_service import ReviewService

    try:
        with db_session_scope() as db_session:
            deleted = ReviewService(db_session).purge_orphaned_reviews()
    except Exception as e:
        logger.error(f"Review cleanup failed: {str(e)}", exc_info=True)
        raise click.ClickException(str(e))

    click.echo(f"Removed {deleted} orphaned review(s)")


if __name__ == "__main__":
    cli()
