"""HTMX Blog: Markdown posts served as full pages or htmx fragments."""
