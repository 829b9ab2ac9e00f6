import json
import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from ..application.services.appointments_service import AppointmentsService
from ..exceptions import CORS_HEADERS, APIException, MalformedJSONError, StoreError
from ..schemas.appointments.appointment import Appointment, AppointmentList
from ..schemas.common.common import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Appointments"])


def get_appointments_service(request: Request) -> AppointmentsService:
    return request.app.state.appointments_service


def respond_json(status_code: int, payload: dict) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=payload, headers=CORS_HEADERS)


@router.options("/{api_path:path}", include_in_schema=False)
async def preflight(api_path: str, request: Request):
    settings = request.app.state.settings
    return Response(
        status_code=204,
        headers={
            **CORS_HEADERS,
            "Access-Control-Allow-Methods": ", ".join(settings.allowed_methods_list),
            "Access-Control-Allow-Headers": ", ".join(settings.allowed_headers_list),
        },
    )


@router.get(
    "/appointments",
    response_model=AppointmentList,
    responses={500: {"model": MessageResponse}},
)
async def list_appointments(
    appt_service: AppointmentsService = Depends(get_appointments_service),
):
    try:
        appointments = await appt_service.list_appointments()
    except StoreError:
        logger.exception("Failed to load appointments")
        raise APIException(status_code=500, detail="Failed to load appointments")
    return respond_json(200, AppointmentList(appointments=appointments).model_dump())


@router.post(
    "/appointments",
    status_code=201,
    response_model=Appointment,
    responses={400: {"model": MessageResponse}, 500: {"model": MessageResponse}},
)
async def create_appointment(
    request: Request,
    appt_service: AppointmentsService = Depends(get_appointments_service),
):
    # Read raw so malformed JSON and missing fields get their own messages
    body = await request.body()
    try:
        # Deep nesting surfaces as RecursionError rather than a decode error
        payload = json.loads(body) if body else {}
    except (ValueError, RecursionError):
        raise MalformedJSONError()

    try:
        appointment = await appt_service.create(payload)
    except StoreError:
        logger.exception("Error saving appointment")
        raise APIException(status_code=500, detail="Unable to save appointment.")
    return respond_json(201, appointment.model_dump())


@router.api_route(
    "/{api_path:path}",
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def api_route_not_found(api_path: str):
    raise APIException(status_code=404, detail="API route not found.")
