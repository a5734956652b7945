"""Editor-side previews: static informer boxes, domain badges, dropdown labels.

Page builders never load the external loader inside their editor canvas, so
these surfaces show a static box instead, with a badge saying whether the
informer's registered domain matches this site.
"""

from __future__ import annotations

import html
from collections.abc import Sequence

from meteoprog_informers.helpers import host_from_url, mask_string
from meteoprog_informers.models.informer import Informer

DEFAULT_OPTION_LABEL = "Default widget (from settings)"
NO_DOMAIN_LABEL = "No domain"
NO_SELECTION_TEXT = "No informer selected — default preview"
FRONTEND_ONLY_TEXT = "Preview is visible only on frontend"

_BADGE_OK = ("Domain OK", "#46b450")
_BADGE_MISMATCH = ("Domain mismatch", "#dc3232")

_CLOUD_ICON = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" width="20" height="20" '
    'fill="#007acc"><path d="M6 19a4 4 0 0 1 0-8 5.5 5.5 0 0 1 10.74-1.62A4.5 4.5 0 1 1 '
    '18 19H6z"/></svg>'
)


def domain_matches(informer: Informer | None, site_host: str) -> tuple[str, bool]:
    """(informer's domain host, whether it equals the site host)."""
    if informer is None or not informer.domain:
        return "", False
    domain_host = host_from_url(informer.domain)
    return domain_host, domain_host == site_host


def domain_badge(match: bool) -> str:
    text, color = _BADGE_OK if match else _BADGE_MISMATCH
    return (
        '<span class="meteoprog-domain-badge" style="display:inline-block;padding:4px 8px;'
        f'border-radius:3px;font-size:12px;font-weight:600;background:{color};color:#fff;">'
        f"{html.escape(text)}</span>"
    )


def preview_box(informer_id: str, domain_host: str = "", match: bool = False) -> str:
    """Static stand-in for an informer inside an editor canvas."""
    if informer_id:
        body = (
            '<div class="meteoprog-preview-id" style="font-family:monospace;font-size:13px;'
            f'color:#555;margin-bottom:6px;">{html.escape(informer_id)}</div>'
        )
    else:
        body = (
            '<div style="margin-bottom:6px;font-weight:bold;">'
            f"{html.escape(NO_SELECTION_TEXT)}</div>"
        )
    badge = domain_badge(match) if informer_id and domain_host else ""
    return (
        '<div class="meteoprog-block-editor">'
        '<div style="border:1px solid #dcdcde;border-radius:6px;background:#fff;'
        'padding:16px;text-align:center;">'
        '<div style="display:flex;align-items:center;justify-content:center;gap:8px;'
        f'margin-bottom:10px;">{_CLOUD_ICON}<strong>Meteoprog Weather Informer</strong></div>'
        f"{body}"
        '<div style="font-size:12px;color:#666;margin-bottom:10px;">'
        f"{html.escape(FRONTEND_ONLY_TEXT)}</div>"
        f"{badge}"
        "</div></div>"
    )


def informer_options(informers: Sequence[Informer], site_host: str) -> dict[str, str]:
    """Dropdown choices: ``""`` for the default, then one label per informer."""
    options = {"": DEFAULT_OPTION_LABEL}
    for informer in informers:
        if not informer.informer_id:
            continue
        domain = informer.domain or NO_DOMAIN_LABEL
        _, match = domain_matches(informer, site_host)
        status = "OK" if match else "Domain mismatch"
        options[informer.informer_id] = (
            f"{domain} — {mask_string(informer.informer_id)} [{status}]"
        )
    return options
