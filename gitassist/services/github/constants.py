"""Constants for GitHub service."""

# Prefixes stripped from a repository URL before reading owner/repo
GITHUB_URL_PREFIXES: tuple[str, ...] = (
    "https://github.com/",
    "http://github.com/",
    "https://www.github.com/",
    "http://www.github.com/",
    "www.github.com/",
    "github.com/",
)

# Regular (non-executable) file mode for tree entries
BLOB_FILE_MODE = "100644"

# GitHub's message when a ref resolves to nothing
NO_COMMIT_FOR_REF = "No commit found for the ref"

# Release upload_url ends with this RFC 6570 template
UPLOAD_URL_TEMPLATE = "{?name,label}"
