"""Language negotiation middleware for FastAPI."""

from collections.abc import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from privacykb.i18n.language_preferences import preferred_languages


class LanguagePreferenceMiddleware(BaseHTTPMiddleware):
    """Store the client's language preferences on ``request.state.languages``.

    The ``lang`` query parameter overrides the Accept-Language header; without
    either, the configured default language is used. A ``lang`` posted in a
    form body is only known once the route reads the form, so the /kb route
    applies that one itself.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Resolve the preference list for this request."""
        config = request.app.state.config
        raw = request.query_params.get("lang") or request.headers.get("accept-language")
        request.state.languages = preferred_languages(raw, config.default_language)

        response = await call_next(request)
        return response
