from dataclasses import dataclass
from typing import List

from markdown_it import MarkdownIt
from markdown_it.common.utils import escapeHtml, unescapeAll

from dailyposts.services.slugs import heading_id

# Languages the client-side highlighter has grammars for, aliases included.
SUPPORTED_LANGUAGES = frozenset(
    {
        "javascript",
        "js",
        "typescript",
        "ts",
        "bash",
        "sh",
        "shell",
        "console",
        "zsh",
        "powershell",
        "yaml",
        "yml",
        "dockerfile",
        "docker",
        "python",
        "py",
        "go",
        "rust",
        "java",
        "json",
        "xml",
        "html",
        "css",
        "markdown",
        "md",
        "sql",
        "terraform",
        "hcl",
        "tf",
        "ini",
        "toml",
        "nginx",
        "makefile",
        "diff",
        "text",
        "plaintext",
    }
)


@dataclass(frozen=True)
class CodeBlock:
    language: str  # empty when the fence has no info string
    line: int  # 1-based line of the opening fence within the body


def fence_language(info: str) -> str:
    info = unescapeAll(info).strip() if info else ""
    return info.split(maxsplit=1)[0].lower() if info else ""


def _render_heading_open(self, tokens, idx, options, env):
    token = tokens[idx]
    depth = int(token.tag[1:])
    text = tokens[idx + 1].content if idx + 1 < len(tokens) else ""
    token.attrSet("id", heading_id(text, depth))
    return self.renderToken(tokens, idx, options, env)


def _render_fence(self, tokens, idx, options, env):
    token = tokens[idx]
    lang = fence_language(token.info)
    language = lang if lang in SUPPORTED_LANGUAGES else "plaintext"
    return (
        f'<pre><code class="hljs language-{language}">'
        f"{escapeHtml(token.content)}</code></pre>\n"
    )


class MarkdownRenderer:
    """GFM-flavoured Markdown to HTML with anchored headings and tagged code."""

    def __init__(self):
        self.md = (
            MarkdownIt("commonmark", {"html": True, "breaks": True})
            .enable("table")
            .enable("strikethrough")
        )
        self.md.add_render_rule("heading_open", _render_heading_open)
        self.md.add_render_rule("fence", _render_fence)

    def render(self, content: str | None) -> str:
        if not content:
            return ""
        return self.md.render(content).strip()

    def extract_code_blocks(self, content: str | None) -> List[CodeBlock]:
        if not content:
            return []
        blocks = []
        for token in self.md.parse(content):
            if token.type != "fence":
                continue
            line = token.map[0] + 1 if token.map else 0
            blocks.append(CodeBlock(language=fence_language(token.info), line=line))
        return blocks
