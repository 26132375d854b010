from gitassist.api.v1 import commits, issues, refine, releases, repositories

__all__ = [
    "commits",
    "repositories",
    "issues",
    "releases",
    "refine",
]
