import asyncio
from threading import Thread
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse
from uvicorn import Config
from uvicorn.server import Server

from vitehost.app import build_app
from vitehost.config import AppConfig
from vitehost.logging import LOGGER

HTTP_PORT = 80
HTTPS_PORT = 443


def build_redirect_app(domain_name: str) -> FastAPI:
    """
    Plain HTTP app that permanently redirects every request to the same path
    on the HTTPS domain.

    """
    app = FastAPI(docs_url=None, redoc_url=None, openapi_url=None)

    @app.api_route(
        "/{full_path:path}",
        methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        include_in_schema=False,
    )
    async def redirect_to_https(request: Request, full_path: str):
        # Keep the path percent-encoded so %2F and %3F keep their meaning
        raw_path = request.scope.get("raw_path") or request.url.path.encode()
        request_uri = raw_path.split(b"?", 1)[0].decode("latin-1")
        query_string = request.scope.get("query_string", b"")
        if query_string:
            request_uri += "?" + query_string.decode("latin-1")
        return RedirectResponse(
            f"https://{domain_name}{request_uri}", status_code=301
        )

    return app


class RedirectServerThread(Thread):
    """
    Background uvicorn server on the plain HTTP port, sending every request to
    the HTTPS domain while the main server runs in the foreground.

    """

    def __init__(
        self,
        *,
        domain_name: str,
        host: str,
        port: int = HTTP_PORT,
        stop_timeout: float = 1.0,
    ):
        super().__init__(daemon=True, name="https-redirect")
        self.config = Config(
            app=build_redirect_app(domain_name),
            host=host,
            port=port,
            access_log=False,
            loop="asyncio",
        )
        self.stop_timeout = stop_timeout
        self.server: Optional[Server] = None

    def run(self) -> None:
        self.server = Server(self.config)
        asyncio.run(self.server.serve())

    def stop(self) -> None:
        if self.server is not None:
            self.server.should_exit = True

        if self.is_alive():
            self.join(self.stop_timeout)
            if self.is_alive():
                raise TimeoutError(
                    f"Redirect server did not stop in {self.stop_timeout}s"
                )


def build_server_config(config: AppConfig, app: FastAPI) -> Config:
    """
    Uvicorn settings for the main webserver. With TLS configured the server
    binds 443 using the certificate pair, otherwise plain HTTP on HOST:PORT.

    """
    if config.tls_enabled:
        return Config(
            app=app,
            host=config.HOST,
            port=HTTPS_PORT,
            ssl_certfile=config.CERT_FILE,
            ssl_keyfile=config.KEY_FILE,
        )
    return Config(app=app, host=config.HOST, port=config.PORT)


def serve(config: AppConfig):
    """
    Build the application and block serving it. The manifest is loaded inside
    build_app(), so it is complete before uvicorn accepts the first connection.

    """
    app = build_app(config)

    redirect_thread: RedirectServerThread | None = None
    if config.tls_enabled:
        assert config.DOMAIN_NAME
        redirect_thread = RedirectServerThread(
            domain_name=config.DOMAIN_NAME,
            host=config.HOST,
        )
        redirect_thread.start()
    elif not config.is_development:
        LOGGER.warning("TLS not configured, running over HTTP.")

    server = Server(build_server_config(config, app))
    try:
        server.run()
    finally:
        if redirect_thread is not None:
            redirect_thread.stop()
