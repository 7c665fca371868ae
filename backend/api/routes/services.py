"""
Services API routes.
"""
import logging
from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, HTTPException, Response
from pydantic import BaseModel, Field

from db import SessionLocal
from domain.models import Service
from repositories import ServicesRepository

router = APIRouter()
services_repo = ServicesRepository()
logger = logging.getLogger(__name__)


class ServiceCreate(BaseModel):
    garage_id: str
    name: str = Field(min_length=1, max_length=200)
    description: str = Field(default="", max_length=1000)
    price: float = Field(default=0, ge=0)


class ServiceUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=1000)
    price: Optional[float] = Field(default=None, ge=0)


class ServiceResponse(BaseModel):
    id: str
    garage_id: str
    name: str
    description: str
    price: float
    created_at: datetime


def service_to_response(service: Service) -> ServiceResponse:
    """Convert domain Service to API response."""
    return ServiceResponse(
        id=service.id,
        garage_id=service.garage_id,
        name=service.name,
        description=service.description,
        price=service.price,
        created_at=service.created_at,
    )


@router.get("", response_model=List[ServiceResponse])
async def list_services():
    logger.info("Fetching all services")
    with SessionLocal() as session:
        return [service_to_response(s) for s in services_repo.list_services(session)]


@router.get("/garage/{garage_id}", response_model=List[ServiceResponse])
async def list_services_for_garage(garage_id: str):
    logger.info("Fetching services for garage ID: %s", garage_id)
    with SessionLocal() as session:
        return [service_to_response(s) for s in services_repo.list_by_garage(session, garage_id)]


@router.get("/{service_id}", response_model=ServiceResponse)
async def get_service(service_id: str):
    logger.info("Fetching service with ID: %s", service_id)
    with SessionLocal() as session:
        service = services_repo.get_service(session, service_id)
    if not service:
        raise HTTPException(status_code=404, detail=f"Service with ID {service_id} not found")
    return service_to_response(service)


@router.post("", response_model=ServiceResponse, status_code=201)
async def create_service(payload: ServiceCreate):
    """Create a service for an existing garage."""
    logger.info("Creating new service: %s", payload.name)
    service = Service(id=Service.generate_id(), **payload.model_dump())
    try:
        with SessionLocal() as session:
            service = services_repo.create_service(session, service)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return service_to_response(service)


@router.put("/{service_id}", response_model=ServiceResponse)
async def update_service(service_id: str, payload: ServiceUpdate):
    logger.info("Updating service with ID: %s", service_id)
    with SessionLocal() as session:
        service = services_repo.update_service(
            session, service_id, payload.model_dump(exclude_none=True)
        )
    if not service:
        raise HTTPException(status_code=404, detail=f"Service with ID {service_id} not found")
    return service_to_response(service)


@router.delete("/{service_id}", status_code=204)
async def delete_service(service_id: str):
    logger.info("Deleting service with ID: %s", service_id)
    with SessionLocal() as session:
        deleted = services_repo.delete_service(session, service_id)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Service with ID {service_id} not found")
    return Response(status_code=204)
