"""HTTP clients for remote marketplace APIs."""

from .paras_client import Page, ParasClient, extract_page

__all__ = ["Page", "ParasClient", "extract_page"]
