"""Freelance Tax - Self-employment tax estimates for US freelancers."""

__version__ = "0.1.0"
