from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from jinja2 import (
    Environment,
    FileSystemLoader,
    TemplateError,
    select_autoescape,
)

from vitehost.config import AppConfig
from vitehost.logging import LOGGER
from vitehost.pages import BASE_TEMPLATE, DEFAULT_PAGES, Page, PageRender
from vitehost.tags import AssetMode, ViteAssets

FAVICON_PATH = "/static/assets/img/favicon.ico"


class WebController:
    """
    Main entrypoint of the webserver. Wires the configured pages, the static
    directories and the favicon redirect into one FastAPI application.

    ```python
    config = AppConfig()
    controller = WebController(config)
    controller.register(Page(url="/about", template="about.html"))
    ```

    """

    app: FastAPI
    """
    Internal FastAPI application. Exposed so it can be handed to uvicorn or
    wrapped in a TestClient.

    """

    assets: ViteAssets
    """
    Frozen asset snapshot used to build the <head> tags of every page. In production
    this holds the manifest, which is loaded before any route is mounted.

    """

    def __init__(
        self,
        config: AppConfig,
        *,
        pages: list[Page] | None = None,
        assets: ViteAssets | None = None,
        name: str = "vitehost",
    ):
        self.config = config
        self.assets = assets if assets is not None else ViteAssets.from_config(config)
        self.app = FastAPI(title=name, docs_url=None, redoc_url=None, openapi_url=None)

        self.templates = Environment(
            loader=FileSystemLoader(config.web_root / "templates"),
            autoescape=select_autoescape(),
            # Re-read templates on every request
            cache_size=0,
        )

        self._registered_urls: set[str] = set()

        self._mount_static()

        for page in pages if pages is not None else DEFAULT_PAGES:
            self.register(page)

    def _mount_static(self):
        web_root = self.config.web_root

        # Directories are created by the frontend build, so they may not
        # exist yet when the server boots
        self.app.mount(
            "/static",
            StaticFiles(directory=str(web_root / "static"), check_dir=False),
            name="static",
        )
        if self.assets.mode == AssetMode.PRODUCTION:
            # Vite emits the hashed bundle into /assets inside its outDir
            self.app.mount(
                "/assets",
                StaticFiles(directory=str(web_root / "assets"), check_dir=False),
                name="assets",
            )

        self.app.add_api_route(
            "/favicon.ico",
            self._favicon,
            methods=["GET"],
            include_in_schema=False,
        )

    async def _favicon(self):
        return RedirectResponse(FAVICON_PATH, status_code=301)

    def register(self, page: Page):
        """
        Mount a page at its url. Templates are loaded on every request, so edits
        to the HTML show up without a restart.

        """
        if page.url in self._registered_urls:
            raise ValueError(f"Page already registered at {page.url}")

        def render_page(request: Request):
            return self._render_page(request, page)

        self.app.add_api_route(
            page.url,
            render_page,
            methods=["GET"],
            response_class=HTMLResponse,
            include_in_schema=False,
        )
        self._registered_urls.add(page.url)
        LOGGER.debug(f"Registered page {page.url} -> {page.template}")

    def _render_page(self, request: Request, page: Page):
        try:
            self.templates.get_template(BASE_TEMPLATE)
            template = self.templates.get_template(page.template)
        except (TemplateError, UnicodeDecodeError) as e:
            return PlainTextResponse(
                f"Could not load templates: {e}", status_code=500
            )

        render = PageRender(
            vite_head=self.assets.tags(*page.entry_points),
            is_dev=self.config.is_development,
            page=page.url,
            protocol="https" if request.url.scheme == "https" else "http",
            host=request.headers.get("host", ""),
            title=page.title,
        )

        try:
            content = template.render(render.model_dump())
        except Exception:
            LOGGER.exception(f"Template execution error for {page.url}")
            return PlainTextResponse("Template execution error", status_code=500)

        return HTMLResponse(content)


def build_app(config: AppConfig) -> FastAPI:
    return WebController(config).app
