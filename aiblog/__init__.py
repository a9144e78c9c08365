"""AI Blog backend: blog content management with AI-assisted writing."""
