from __future__ import annotations

import re
from enum import Enum
from typing import Dict, Tuple

from path2url.resolvers.path_resolver import PathResolver


class ContentKind(str, Enum):
    MARKUP = "markup"
    STYLESHEET = "stylesheet"
    PASSTHROUGH = "passthrough"


# js is scanned but left untouched: script rewriting is not implemented.
EXTENSION_KINDS: Dict[str, ContentKind] = {
    "html": ContentKind.MARKUP,
    "htm": ContentKind.MARKUP,
    "css": ContentKind.STYLESHEET,
}

_MARKUP_RE = re.compile(r"""(?P<attr>src|href)=(?P<q>["'])(?P<url>\.{1,2}/[^"']+)(?P=q)""", re.IGNORECASE)
_STYLESHEET_RE = re.compile(r"""(?P<fn>url)\((?P<q>["']?)(?P<url>\.{1,2}/[^)"']+)(?P=q)\)""", re.IGNORECASE)


def kind_for_extension(extension: str) -> ContentKind:
    return EXTENSION_KINDS.get(extension.lower().lstrip("."), ContentKind.PASSTHROUGH)


class ContentRewriter:
    """
    Regex-based rewriting of relative references.

    - markup: src="..." / href='...' values starting with ./ or ../
    - stylesheet: url(...) values starting with ./ or ../, quoted or bare

    Attribute names, the url() keyword and quote characters keep their
    original form. Everything else in the content is returned as is.
    Multi-line attributes and unusual quoting are not handled.
    """

    def __init__(self, resolver: PathResolver):
        self.resolver = resolver

    def rewrite(self, content: str, base_relative_dir: str, extension: str) -> str:
        new_content, _ = self.rewrite_with_count(content, base_relative_dir, extension)
        return new_content

    def rewrite_with_count(
        self,
        content: str,
        base_relative_dir: str,
        extension: str,
    ) -> Tuple[str, int]:
        kind = kind_for_extension(extension)

        if kind == ContentKind.MARKUP:
            return self._rewrite_markup(content, base_relative_dir)
        if kind == ContentKind.STYLESHEET:
            return self._rewrite_stylesheet(content, base_relative_dir)
        return content, 0

    def _rewrite_markup(self, content: str, base_relative_dir: str) -> Tuple[str, int]:
        def _replace(m: re.Match) -> str:
            absolute_url = self.resolver.resolve(m.group("url"), base_relative_dir)
            return f"{m.group('attr')}={m.group('q')}{absolute_url}{m.group('q')}"

        return _MARKUP_RE.subn(_replace, content)

    def _rewrite_stylesheet(self, content: str, base_relative_dir: str) -> Tuple[str, int]:
        def _replace(m: re.Match) -> str:
            absolute_url = self.resolver.resolve(m.group("url"), base_relative_dir)
            return f"{m.group('fn')}({m.group('q')}{absolute_url}{m.group('q')})"

        return _STYLESHEET_RE.subn(_replace, content)
