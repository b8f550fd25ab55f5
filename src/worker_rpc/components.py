from __future__ import annotations

from datetime import datetime
from typing import Mapping

from .models.ui import HostElement, h

ACCENT = "#fb923c"
MUTED = "#94a3b8"

PANEL_STYLE = {
    "padding": "24px",
    "border": "2px solid #f97316",
    "borderRadius": "12px",
    "background": "linear-gradient(135deg, #1e293b 0%, #0f172a 100%)",
    "color": "#fff",
}

SECTION_STYLE = {
    "background": "#0f172a",
    "padding": "16px",
    "borderRadius": "8px",
    "marginBottom": "16px",
}

SECTION_TITLE_STYLE = {"color": ACCENT, "display": "block", "marginBottom": "8px"}

FEATURES = (
    "Server-side HTTP calls the browser never sees",
    "Access to worker-only configuration",
    "Worker execution context",
    "Element tree serialization & deserialization",
)


def build_worker_panel(
    *,
    worker_ip: str,
    worker_vars: Mapping[str, str],
    timestamp: datetime,
) -> HostElement:
    """Build the panel returned by ``render-element``.

    Everything shown is only available inside the worker: its public address,
    its private vars and its clock.
    """
    return h(
        "div",
        {"style": PANEL_STYLE},
        h(
            "h2",
            {"style": {"color": ACCENT, "marginBottom": "16px", "fontSize": "24px", "fontWeight": "bold"}},
            "Generated in the worker (server-side only)",
        ),
        h(
            "p",
            {"style": {"marginBottom": "12px", "color": "#e2e8f0"}},
            "This tree was built in the worker with data fetched server-side. The browser never made these requests.",
        ),
        _address_section(worker_ip),
        _vars_section(worker_vars),
        _timestamp_section(timestamp),
        h(
            "ul",
            {"style": {"marginTop": "16px", "paddingLeft": "20px", "color": "#cbd5e1", "fontSize": "14px"}},
            [h("li", {"style": {"marginBottom": "8px"}}, feature) for feature in FEATURES],
        ),
        h(
            "p",
            {
                "style": {
                    "marginTop": "16px",
                    "fontSize": "12px",
                    "color": "#64748b",
                    "fontStyle": "italic",
                }
            },
            "Refresh the page to see new data.",
        ),
    )


def _address_section(worker_ip: str) -> HostElement:
    return h(
        "div",
        {"style": {**SECTION_STYLE, "marginTop": "16px"}},
        h("strong", {"style": SECTION_TITLE_STYLE}, "Worker's public IP address"),
        h(
            "p",
            {"style": {"color": MUTED, "fontSize": "14px", "marginBottom": "6px"}},
            "Fetched from api.ipify.org by the worker",
        ),
        h(
            "div",
            {
                "style": {
                    "fontFamily": "monospace",
                    "fontSize": "16px",
                    "background": "#1e293b",
                    "padding": "8px 12px",
                    "border": f"1px solid {ACCENT}",
                }
            },
            worker_ip,
        ),
    )


def _vars_section(worker_vars: Mapping[str, str]) -> HostElement:
    if worker_vars:
        body = h(
            "div",
            None,
            h(
                "p",
                {"style": {"color": MUTED, "fontSize": "14px", "marginBottom": "12px"}},
                f"Found {len(worker_vars)} environment variable(s):",
            ),
            h(
                "div",
                {"style": {"display": "flex", "flexDirection": "column", "gap": "8px"}},
                [
                    h(
                        "div",
                        {"style": {"background": "#1e293b", "padding": "10px", "border": f"1px solid {ACCENT}"}},
                        h("div", {"style": {"fontFamily": "monospace", "color": ACCENT}}, key),
                        h("div", {"style": {"fontFamily": "monospace", "color": "#e2e8f0"}}, value),
                    )
                    for key, value in worker_vars.items()
                ],
            ),
        )
    else:
        body = h(
            "p",
            {"style": {"color": MUTED, "fontSize": "14px"}},
            "No environment variables configured. Set WORKER_VAR_<NAME> on the worker to add some.",
        )

    return h(
        "div",
        {"style": SECTION_STYLE},
        h("strong", {"style": SECTION_TITLE_STYLE}, "Environment variables"),
        body,
    )


def _timestamp_section(timestamp: datetime) -> HostElement:
    return h(
        "div",
        {"style": SECTION_STYLE},
        h("strong", {"style": SECTION_TITLE_STYLE}, "Server-side timestamp"),
        h(
            "div",
            {"style": {"color": MUTED, "fontFamily": "monospace", "fontSize": "14px"}},
            timestamp.isoformat(),
        ),
    )


__all__ = ["build_worker_panel"]
