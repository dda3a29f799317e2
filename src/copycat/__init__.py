"""copycat: concatenate a source tree into a single labeled Markdown document."""
