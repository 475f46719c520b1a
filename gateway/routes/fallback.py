from fastapi import APIRouter, Depends, Request, Response, status

from gateway.core.exceptions import MethodNotAllowed
from gateway.routes.dependencies import get_submission_pipeline
from gateway.schemas.responses import SuccessResponse
from gateway.services.submission import SubmissionPipeline

router = APIRouter()

REJECTED_METHODS = ["GET", "HEAD", "PUT", "PATCH", "DELETE"]


@router.options("/{path:path}", include_in_schema=False)
async def preflight(path: str) -> Response:
    # CORS headers are attached by CORSPolicyMiddleware.
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{path:path}", response_model=SuccessResponse, include_in_schema=False)
async def submit_any_path(
    path: str,
    request: Request,
    pipeline: SubmissionPipeline = Depends(get_submission_pipeline),
) -> SuccessResponse:
    await pipeline.handle(request)
    return SuccessResponse(message="Application submitted successfully")


@router.api_route("/{path:path}", methods=REJECTED_METHODS, include_in_schema=False)
async def method_not_allowed(path: str) -> Response:
    raise MethodNotAllowed()
