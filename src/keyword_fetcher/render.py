"""HTML rendering of the persisted ``results`` tree."""

from __future__ import annotations

import json
from collections.abc import Mapping
from html import escape

EMPTY_RESULTS_HTML = "<p>No keyword results found.</p>"


def render_results_html(results: Mapping[str, object] | None) -> str:
    if not results:
        return EMPTY_RESULTS_HTML

    parts: list[str] = []
    for keyword_key, providers in results.items():
        parts.append('<article class="keyword-block">\n')
        parts.append(f"<h3>{escape(keyword_key.replace('_', ' '))}</h3>\n")

        if isinstance(providers, Mapping):
            for provider_name, data in providers.items():
                parts.append(_render_provider(str(provider_name), data))

        parts.append("</article>\n")

    return "".join(parts)


def _render_provider(provider_name: str, data: object) -> str:
    heading = provider_name[:1].upper() + provider_name[1:]
    lines = ['<section class="api-result">', f"<h4>{escape(heading)}</h4>"]

    if isinstance(data, list):
        lines.append("<ul>")
        lines.extend(_render_item(item) for item in data)
        lines.append("</ul>")
    elif isinstance(data, Mapping):
        if data.get("title") and data.get("extract"):
            lines.append(
                f"<p><strong>Title:</strong> {escape(str(data['title']))}</p>"
            )
            lines.append(f"<p>{escape(str(data['extract']))}</p>")
            if data.get("url"):
                lines.append(_link(str(data["url"]), "Read more", wrap="p"))
        else:
            lines.append(f"<pre>{escape(json.dumps(data, indent=2))}</pre>")
    else:
        lines.append(f"<p>{escape(str(data))}</p>")

    lines.append("</section>")
    return "\n".join(lines) + "\n"


def _render_item(item: object) -> str:
    if isinstance(item, Mapping) and item.get("title") and item.get("url"):
        return _link(str(item["url"]), str(item["title"]), wrap="li")
    if isinstance(item, str):
        return f"<li>{escape(item)}</li>"
    return f"<li>{escape(json.dumps(item))}</li>"


def _link(url: str, text: str, *, wrap: str) -> str:
    return (
        f'<{wrap}><a href="{escape(url)}" target="_blank" rel="noopener">'
        f"{escape(text)}</a></{wrap}>"
    )
