"""Census validation and history endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from quotedesk.models.census import CensusUpload, QualityHistoryEntry
from quotedesk.models.validation import ValidationResult
from quotedesk.services.census_service import CensusService
from quotedesk.validation import resolve_columns, validate

router = APIRouter(tags=["census"])


class ColumnsRequest(BaseModel):
    columns: list[str]


class CensusPayload(BaseModel):
    columns: list[str]
    rows: list[dict[str, Any]] = Field(default_factory=list)


class SaveCensusRequest(CensusPayload):
    file_name: str
    file_id: str | None = None

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class SaveCensusResponse(BaseModel):
    upload: CensusUpload
    validation: ValidationResult

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


def get_census_service(request: Request) -> CensusService:
    return request.app.state.census_service


@router.post("/census/resolve-columns")
async def post_resolve_columns(body: ColumnsRequest) -> dict[str, str | None]:
    """Show which uploaded header each canonical field resolves to."""
    return resolve_columns(body.columns)


@router.post("/census/validate", response_model=ValidationResult, response_model_by_alias=True)
def post_validate(body: CensusPayload) -> ValidationResult:
    """Validate a census without storing it."""
    return validate(body.columns, body.rows)


@router.post(
    "/clients/{client_id}/census",
    response_model=SaveCensusResponse,
    response_model_by_alias=True,
    status_code=201,
)
def post_census(
    client_id: str,
    body: SaveCensusRequest,
    service: CensusService = Depends(get_census_service),
) -> SaveCensusResponse:
    upload, validation = service.save_census(
        client_id, body.file_name, body.columns, body.rows, file_id=body.file_id,
    )
    return SaveCensusResponse(upload=upload, validation=validation)


@router.post(
    "/census/{upload_id}/validate",
    response_model=ValidationResult,
    response_model_by_alias=True,
)
def post_revalidate(
    upload_id: str, service: CensusService = Depends(get_census_service),
) -> ValidationResult:
    return service.validate_census(upload_id)


@router.get(
    "/census/{upload_id}/validation",
    response_model=ValidationResult,
    response_model_by_alias=True,
)
def get_validation(
    upload_id: str, service: CensusService = Depends(get_census_service),
) -> ValidationResult:
    result = service.get_validation(upload_id)
    if result is None:
        raise HTTPException(status_code=404, detail=f"No validation for census {upload_id}")
    return result


@router.get(
    "/clients/{client_id}/census/quality-history",
    response_model=list[QualityHistoryEntry],
    response_model_by_alias=True,
)
def get_quality_history(
    client_id: str, service: CensusService = Depends(get_census_service),
) -> list[QualityHistoryEntry]:
    return service.get_quality_history(client_id)


@router.get(
    "/clients/{client_id}/census/active",
    response_model=CensusUpload,
    response_model_by_alias=True,
)
def get_active_census(
    client_id: str, service: CensusService = Depends(get_census_service),
) -> CensusUpload:
    upload = service.get_active_census(client_id)
    if upload is None:
        raise HTTPException(status_code=404, detail=f"No census for client {client_id}")
    return upload
