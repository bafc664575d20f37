"""Postdeck: blog content-management backend."""
