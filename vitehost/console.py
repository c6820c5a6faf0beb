# Human-facing output for the command line. Structured server logs go
# through vitehost.logging instead.
from rich.console import Console

CONSOLE = Console()
ERROR_CONSOLE = Console(stderr=True)
