"""path2url: rewrite relative asset references into absolute URLs."""
