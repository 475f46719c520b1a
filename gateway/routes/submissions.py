from fastapi import APIRouter, Depends, Request, status

from gateway.routes.dependencies import get_submission_pipeline
from gateway.schemas.responses import ErrorResponse, SuccessResponse
from gateway.services.submission import SubmissionPipeline

router = APIRouter()

SUBMISSION_ERRORS = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_403_FORBIDDEN: {"model": ErrorResponse},
    status.HTTP_429_TOO_MANY_REQUESTS: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ErrorResponse},
}


@router.post("/", response_model=SuccessResponse, responses=SUBMISSION_ERRORS, summary="Submit a lead")
@router.post("/submit", response_model=SuccessResponse, responses=SUBMISSION_ERRORS, summary="Submit a lead")
async def submit_application(
    request: Request,
    pipeline: SubmissionPipeline = Depends(get_submission_pipeline),
) -> SuccessResponse:
    await pipeline.handle(request)
    return SuccessResponse(message="Application submitted successfully")
