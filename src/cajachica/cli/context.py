"""Accessors for objects the root command stores on the click context."""

import click

from cajachica.ai.provider import SuggestionProvider
from cajachica.config import Settings
from cajachica.database.base import Database


def get_db(ctx: click.Context) -> Database:
    return ctx.obj["db"]


def get_user_id(ctx: click.Context) -> str:
    return ctx.obj["user_id"]


def get_provider(ctx: click.Context) -> SuggestionProvider:
    """Suggestion provider, built from settings on first use.

    A provider placed in ``ctx.obj`` beforehand is used as-is.
    """
    provider = ctx.obj.get("provider")
    if provider is None:
        from cajachica.ai.gemini import GeminiProvider

        settings: Settings = ctx.obj["settings"]
        provider = GeminiProvider(settings.google_api_key, settings.gemini_model)
        ctx.obj["provider"] = provider
    return provider
