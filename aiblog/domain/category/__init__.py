"""Category domain: blog categories with unique names."""
