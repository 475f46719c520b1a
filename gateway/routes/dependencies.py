from __future__ import annotations

from fastapi import Request

from gateway.services.admin_auth import AdminAuthenticator
from gateway.services.submission import SubmissionPipeline


def get_submission_pipeline(request: Request) -> SubmissionPipeline:
    return SubmissionPipeline(
        request.app.state.settings,
        rate_limit_store=request.app.state.rate_limit_store,
    )


def get_admin_authenticator(request: Request) -> AdminAuthenticator:
    return AdminAuthenticator(request.app.state.settings)
