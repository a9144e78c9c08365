"""Post domain: blog posts filed under a category."""
