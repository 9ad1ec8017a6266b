"""Entry point for ``python -m mailgun_send`` and the ``mailgun-send`` script.

Wires production services from the composition layer before handing control
to the CLI, keeping the adapters layer free of composition imports.
"""

from __future__ import annotations

from .adapters.cli.main import main as cli_main
from .composition import build_production


def main() -> int:
    """Run the CLI with production services and return its exit code."""
    return cli_main(services_factory=build_production)


if __name__ == "__main__":
    raise SystemExit(main())
