from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from solver_relay.api.schemas import ErrorOut
from solver_relay.core.llm.deps import get_gemini_client
from solver_relay.core.middleware.http_logging import get_request_id
from solver_relay.core.settings import get_settings
from solver_relay.solve.schemas import SolveIn, SolveOut
from solver_relay.solve.service import SolveService, parse_contents, read_limited_body

router = APIRouter(prefix="/api", tags=["solve"])


@router.post(
    "/solve",
    response_model=SolveOut,
    summary="Solve a question with the AI service",
    description=(
        "Forwards `contents` to Gemini `generateContent` with the server-held API key "
        "and returns the first candidate's text.\n\n"
        "Failures never expose upstream details: callers receive a generic `{error}`."
    ),
    responses={
        400: {"model": ErrorOut, "description": "Missing `contents` or malformed JSON."},
        413: {"model": ErrorOut, "description": "Request body exceeds the size cap."},
        500: {"model": ErrorOut, "description": "AI service failed or returned no text."},
    },
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": SolveIn.model_json_schema()}},
        }
    },
)
async def solve(
    request: Request,
    gemini_client=Depends(get_gemini_client),
) -> SolveOut:
    """
    Relay one question to the AI service.

    IMPORTANT: the body is parsed here rather than by FastAPI so that validation
    failures return `{error}` instead of a 422 `detail` list.
    """

    settings = get_settings()
    max_bytes = settings.max_request_body_bytes
    body = await read_limited_body(request.stream(), max_bytes=max_bytes)
    contents = parse_contents(body=body, max_bytes=max_bytes)

    svc = SolveService(llm_client=gemini_client, request_id=get_request_id(request))
    text = await svc.solve(contents=contents)
    return SolveOut(text=text)
