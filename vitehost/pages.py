from typing import Literal

from markupsafe import Markup
from pydantic import BaseModel, Field

DEFAULT_ENTRY_POINTS = ["ts/main.ts"]

# Every page template extends this layout
BASE_TEMPLATE = "base.html"


class Page(BaseModel):
    """
    A server-rendered route. The page template is expected to extend
    `base.html`, which places `vite_head` in its <head>.

    ```python
    Page(
        url="/cards",
        template="cards.html",
        entry_points=["ts/main.ts", "ts/cards/index.ts"],
    )
    ```

    """

    url: str
    template: str
    entry_points: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ENTRY_POINTS)
    )
    title: str | None = None

    model_config = {
        "frozen": True,
    }


class PageRender(BaseModel):
    """
    Values exposed to the page templates on every render.

    """

    vite_head: Markup
    is_dev: bool
    page: str
    protocol: Literal["http", "https"]
    host: str
    title: str | None = None

    model_config = {
        "frozen": True,
        "arbitrary_types_allowed": True,
    }


DEFAULT_PAGES = [
    Page(url="/", template="index.html"),
    Page(
        url="/prismanis",
        template="prismanis.html",
        entry_points=["ts/main.ts", "ts/prismanis/index.ts"],
        title="Prismanis",
    ),
    Page(
        url="/cards",
        template="cards.html",
        entry_points=["ts/main.ts", "ts/cards/index.ts"],
        title="Cards",
    ),
]
