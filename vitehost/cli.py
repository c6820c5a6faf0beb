from pathlib import Path

from click import Path as ClickPath, group, option
from pydantic import ValidationError

from vitehost.config import AppConfig
from vitehost.console import CONSOLE, ERROR_CONSOLE
from vitehost.webservice import serve


@group()
def cli():
    pass


@cli.command()
@option("--host", default=None, help="Interface to bind, overrides HOST")
@option("--port", default=None, type=int, help="Port to bind, overrides PORT")
@option(
    "--project-root",
    default=None,
    type=ClickPath(file_okay=False, path_type=Path),
    help="Directory containing web/src and web/out, overrides PROJECT_ROOT",
)
def runserver(host: str | None, port: int | None, project_root: Path | None):
    overrides = {
        key: value
        for key, value in {
            "HOST": host,
            "PORT": port,
            "PROJECT_ROOT": project_root,
        }.items()
        if value is not None
    }

    try:
        config = AppConfig(**overrides)
    except ValidationError as e:
        ERROR_CONSOLE.print(f"[red]Invalid configuration:\n{e}")
        raise SystemExit(1)

    mode = "Development" if config.is_development else "Production"
    CONSOLE.print(
        f"[bold]Server starting on http://localhost:{config.PORT} (Mode: {mode})"
    )
    if config.is_development:
        CONSOLE.print("Ensure [cyan]npm run dev[/cyan] is running in another terminal.")
    if config.tls_enabled:
        CONSOLE.print(
            f"[green]Running with TLS on https://{config.DOMAIN_NAME}"
        )

    serve(config)


if __name__ == "__main__":
    cli()
