"""Markdown 渲染"""
import re
from typing import Optional

import markdown
from markupsafe import Markup

MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "sane_lists"]

_TAG_RE = re.compile(r"<[^>]*>")
_SPACE_RE = re.compile(r"\s+")
_MARKUP_RE = re.compile(r"[#*_`>\[\]]")


def markdown_to_html(text: str) -> Markup:
    """把 markdown 正文转换成 HTML 片段"""
    return Markup(markdown.markdown(text or "", extensions=MARKDOWN_EXTENSIONS, output_format="html"))


def plain_excerpt(text: Optional[str], max_len: int = 160) -> str:
    """去掉标记后截取纯文本摘要（用于 meta description）"""
    s = _TAG_RE.sub(" ", str(text or ""))
    s = _MARKUP_RE.sub("", s)
    s = _SPACE_RE.sub(" ", s).strip()
    if len(s) > max_len:
        s = s[: max_len - 1].rstrip() + "…"
    return s
