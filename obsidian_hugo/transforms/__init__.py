"""Link and frontmatter transforms for obsidian-hugo."""
