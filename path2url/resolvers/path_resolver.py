from __future__ import annotations

import os
from typing import List


def resolve_absolute_url(relative_path: str, base_relative_dir: str, base_domain: str) -> str:
    """
    Anchor a './' or '../' style reference at base_domain.

    base_relative_dir is the referencing file's directory relative to the tree
    root ('' at the root). '..' past the top of the tree is dropped rather than
    climbing into the domain. Segments are joined verbatim, with no encoding.
    """
    path = relative_path[2:] if relative_path.startswith("./") else relative_path

    segments: List[str] = []
    if base_relative_dir:
        segments = [s for s in base_relative_dir.replace(os.sep, "/").split("/") if s]

    for segment in path.split("/"):
        if segment == "..":
            if segments:
                segments.pop()
        elif segment not in (".", ""):
            segments.append(segment)

    return base_domain + "/" + "/".join(segments)


class PathResolver:
    """Binds resolve_absolute_url to one base domain."""

    def __init__(self, base_domain: str):
        self.base_domain = base_domain.rstrip("/")

    def resolve(self, relative_path: str, base_relative_dir: str) -> str:
        return resolve_absolute_url(relative_path, base_relative_dir, self.base_domain)
