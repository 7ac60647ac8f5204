"""Markdown to HTML for AI answers.

Answers are model output and are stored with the session, so all text is
escaped (quotes included) before any markup is added, and links are only
rendered for http(s) targets.
"""

import html
import re

SAFE_URL = re.compile(r"^https?://[^\s\"'<>]+$", re.IGNORECASE)
LINK = re.compile(r"\[([^\]\n]+)\]\(([^)\s]+)\)")
PLACEHOLDER = "\x00{}\x00"


def escape_text(text: str) -> str:
    """Escape plain text for display, keeping line breaks."""
    return html.escape(text, quote=True).replace("\n", "<br>")


def markdown_to_html(text: str) -> str:
    """Convert markdown in AI answers to HTML for chat display.

    Supports: bold, italic, inline code, code blocks, links, lists.
    """
    text = html.escape(text.replace("\x00", ""), quote=True)

    links: list[str] = []

    def _link(match: re.Match[str]) -> str:
        label, url = match.group(1), html.unescape(match.group(2))
        if not SAFE_URL.match(url):
            return label
        anchor = (
            f'<a href="{html.escape(url, quote=True)}" class="text-blue-600 underline" '
            f'target="_blank" rel="noopener noreferrer">{label}</a>'
        )
        links.append(anchor)
        return PLACEHOLDER.format(len(links) - 1)

    # Links become placeholders so emphasis rules never touch the markup
    text = LINK.sub(_link, text)

    text = re.sub(
        r"```(\w*)\n?([\s\S]*?)```",
        r'<pre class="bg-gray-800 text-gray-100 rounded-lg p-3 my-2 overflow-x-auto text-xs"><code>\2</code></pre>',
        text,
    )
    text = re.sub(
        r"`([^`]+)`",
        r'<code class="bg-gray-200 text-pink-600 px-1.5 py-0.5 rounded text-xs">\1</code>',
        text,
    )

    text = re.sub(r"\*\*(.+?)\*\*", r"<strong>\1</strong>", text)
    text = re.sub(r"__(.+?)__", r"<strong>\1</strong>", text)
    text = re.sub(r"\*([^*\n]+)\*", r"<em>\1</em>", text)
    text = re.sub(r"(?<![\w-])_([^_\n]+)_(?![\w-])", r"<em>\1</em>", text)

    text = _wrap_list(text, r"^[-*]\s+", "ul", "list-disc")
    text = _wrap_list(text, r"^\d+\.\s+", "ol", "list-decimal")

    text = re.sub(r"\x00(\d+)\x00", lambda m: links[int(m.group(1))], text)
    return text.replace("\n", "<br>")


def _wrap_list(text: str, marker: str, tag: str, style: str) -> str:
    """Wrap consecutive lines starting with a list marker in a list element."""
    in_list = False
    result = []
    for line in text.split("\n"):
        stripped = line.strip()
        if re.match(marker, stripped):
            if not in_list:
                result.append(f'<{tag} class="{style} list-inside my-2 space-y-1">')
                in_list = True
            result.append(f"<li>{re.sub(marker, '', stripped)}</li>")
        else:
            if in_list:
                result.append(f"</{tag}>")
                in_list = False
            result.append(line)
    if in_list:
        result.append(f"</{tag}>")
    return "\n".join(result)
