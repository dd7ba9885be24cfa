"""Rytm FCP: File Context Protocol for the Elektron Analog Rytm.

Uses ``create_fcp_server()`` from fcp_core to wire up the MCP server
with the Rytm domain adapter.
"""

from fcp_core import create_fcp_server

from fcp_rytm.adapter import RytmAdapter
from fcp_rytm.config import RytmConfig
from fcp_rytm.logging_setup import configure_logging
from fcp_rytm.server.reference_card import EXTRA_SECTIONS
from fcp_rytm.server.verb_registry import VERBS


def _all_positional(token: str) -> bool:
    """Enum tokens look like ``key:value`` params; keep every token positional."""
    return True


def build_server(config: RytmConfig | None = None):
    adapter = RytmAdapter(config if config is not None else RytmConfig.from_env())
    return create_fcp_server(
        domain="rytm",
        adapter=adapter,
        verbs=VERBS,
        extra_sections=EXTRA_SECTIONS,
        is_positional=_all_positional,
        name="rytm-fcp",
        instructions="Analog Rytm File Context Protocol. Call rytm_help for the reference card.",
    )


def main() -> None:
    configure_logging()
    mcp = build_server()
    mcp.run()


if __name__ == "__main__":
    main()
