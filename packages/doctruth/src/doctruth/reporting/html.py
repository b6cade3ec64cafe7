from __future__ import annotations

import re

HEADER_LINE = re.compile(r"^(#{1,6}) (.*)$")
HTML_ESCAPES = {"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&quot;", "'": "&#039;"}
_ESCAPE_PATTERN = re.compile(r"[&<>\"']")

STYLE = (
    '    body { font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif; }',
    "    .container { max-width: 1200px; margin: 0 auto; padding: 20px; }",
    "    pre { background: #f6f8fa; padding: 16px; border-radius: 6px; overflow-x: auto; }",
    "    table { width: 100%; border-collapse: collapse; }",
    "    th, td { padding: 8px; text-align: left; border-bottom: 1px solid #dee2e6; }",
)


def escape_html(text: str) -> str:
    return _ESCAPE_PATTERN.sub(lambda m: HTML_ESCAPES[m.group(0)], text)


def markdown_to_html_body(markdown: str) -> list[str]:
    """Re-parse rendered markdown line by line into markup.

    Only the constructs the markdown renderer emits are recognized: fenced blocks,
    ATX headers, ``- `` list items and blank lines. Anything else becomes a paragraph.
    """
    body: list[str] = []
    in_code = False
    for line in markdown.split("\n"):
        if line.startswith("```"):
            in_code = not in_code
            body.append("<pre><code>" if in_code else "</code></pre>")
            continue
        if in_code:
            body.append(escape_html(line))
            continue
        header = HEADER_LINE.match(line)
        if header:
            level = len(header.group(1))
            body.append(f"<h{level}>{escape_html(header.group(2))}</h{level}>")
        elif line.startswith("- "):
            body.append(f"<li>{escape_html(line[2:])}</li>")
        elif line.strip() == "":
            body.append("<br>")
        else:
            body.append(f"<p>{escape_html(line)}</p>")
    if in_code:
        body.append("</code></pre>")
    return body


def render_html(markdown: str, title: str) -> str:
    html = [
        "<!DOCTYPE html>",
        '<html lang="en">',
        "<head>",
        '  <meta charset="UTF-8">',
        '  <meta name="viewport" content="width=device-width, initial-scale=1.0">',
        f"  <title>{escape_html(title)}</title>",
        "  <style>",
        *STYLE,
        "  </style>",
        "</head>",
        "<body>",
        '  <div class="container">',
        *markdown_to_html_body(markdown.rstrip("\n")),
        "  </div>",
        "</body>",
        "</html>",
    ]
    return "\n".join(html) + "\n"
