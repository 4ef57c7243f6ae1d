from __future__ import annotations

import json
from typing import Annotated, Any

from fastapi import APIRouter, BackgroundTasks, Depends, Request

from contact_intake.core.rate_limit import enforce_rate_limit
from contact_intake.schemas.contact import ContactAcceptedResponse
from contact_intake.services.contact_service import ContactService

router = APIRouter(tags=["Contact"])


def get_contact_service(request: Request) -> ContactService:
    return request.app.state.contact_service


async def read_submission_payload(request: Request) -> dict[str, Any]:
    """Read the JSON body, treating anything but a JSON object as empty.

    An empty mapping fails validation on every required field, which is the
    answer a malformed body deserves.
    """
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError):
        return {}
    return payload if isinstance(payload, dict) else {}


@router.post(
    "/contact",
    response_model=ContactAcceptedResponse,
    responses={
        400: {"description": "One or more fields failed validation"},
        429: {"description": "Too many submissions from this client"},
        500: {"description": "Submission could not be recorded"},
    },
)
async def submit_contact(
    request: Request,
    background_tasks: BackgroundTasks,
    client_id: Annotated[str, Depends(enforce_rate_limit)],
    service: Annotated[ContactService, Depends(get_contact_service)],
) -> ContactAcceptedResponse:
    """Accept a public contact form submission.

    Pipeline: client identity → rate limit → honeypot → field validation →
    sanitization → storage. The admin notification is sent after the
    response and its failure is never reported to the client.

    Submissions caught by the honeypot receive the same response as genuine
    ones and are discarded.
    """
    payload = await read_submission_payload(request)
    submission = await service.submit(payload, client_id=client_id)

    if submission is not None:
        background_tasks.add_task(service.notify, submission)

    return ContactAcceptedResponse()
