"""Terminal note finder ranking Markdown notes by tags, frontmatter metadata and usage."""

__version__ = "0.1.0"