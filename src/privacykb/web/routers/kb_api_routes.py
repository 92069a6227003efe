"""Knowledge base action endpoint.

``/kb?action=...`` accepts GET and POST; parameters are read from the query
string and, for POST, from the form body, which takes precedence. Successful
actions answer with JSON, everything else with an HTML message.

The ``lang`` override follows the same precedence: the middleware applies a
query string ``lang`` before routing, and a form-posted ``lang`` replaces it
here.
"""

from typing import Annotated

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, JSONResponse, Response

from privacykb.i18n.language_preferences import preferred_languages
from privacykb.i18n.messages import ErrorMessages
from privacykb.i18n.translation_manager import get_translation
from privacykb.knowledge.service import KnowledgeBaseService, first_param
from privacykb.web.core.container import Container

router = APIRouter()


async def collect_params(request: Request) -> dict[str, list[str]]:
    """Gather every value of every request parameter, form values first."""
    params: dict[str, list[str]] = {}
    if request.method == "POST":
        form = await request.form()
        for key, value in form.multi_items():
            if isinstance(value, str):
                params.setdefault(key, []).append(value)
    for key, value in request.query_params.multi_items():
        params.setdefault(key, []).append(value)
    return params


@router.api_route("/kb", methods=["GET", "POST"], response_model=None)
@inject
async def knowledge_base(
    request: Request,
    service: Annotated[
        KnowledgeBaseService, Depends(Provide[Container.knowledge_base_service])
    ],
) -> Response:
    """Run one knowledge base action.

    Actions: search, definitions, gdpr, dpa, dpv, threat, status.
    """
    params = await collect_params(request)
    action = next(iter(params.get("action", [])), None)

    lang = first_param(params, "lang")
    if lang is not None:
        default_language = request.app.state.config.default_language
        request.state.languages = preferred_languages(lang, default_language)
    translation = get_translation(request)

    result = await service.dispatch(
        action, params, request.state.languages, ErrorMessages(translation)
    )
    if result.ok:
        # Starlette serializes with ensure_ascii=False
        return JSONResponse(result.payload)
    return HTMLResponse(result.payload, status_code=result.status_code)
