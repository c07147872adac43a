# barbershop/routers/services_routes.py

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session, select

from barbershop.db import get_session
from barbershop.models import Booking, Service, ServiceImage
from barbershop.schemas import (
    ImageOrder,
    Message,
    ServiceCreate,
    ServiceImageCreate,
    ServiceImagePublic,
    ServicePublic,
)
from barbershop.auth import get_current_user
from barbershop.deps import require_role
from barbershop.services.catalog import get_service_or_404, ordered_images, service_to_public

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/services",
    tags=["services"],
)


@router.get("", response_model=List[ServicePublic])
def list_services(
    category: Optional[str] = None,
    include_inactive: bool = False,
    session: Session = Depends(get_session),
):
    stmt = select(Service)
    if not include_inactive:
        stmt = stmt.where(Service.is_active == True)  # noqa: E712
    if category:
        stmt = stmt.where(Service.category == category)
    stmt = stmt.order_by(Service.id.desc())

    return [service_to_public(s) for s in session.exec(stmt).all()]


@router.get("/categories", response_model=List[str])
def list_categories(session: Session = Depends(get_session)):
    categories = session.exec(
        select(Service.category)
        .where(Service.is_active == True)  # noqa: E712
        .distinct()
    ).all()
    return sorted(c for c in categories if c)


@router.get("/{service_id}", response_model=ServicePublic)
def get_service(service_id: int, session: Session = Depends(get_session)):
    return service_to_public(get_service_or_404(session, service_id))


@router.get("/{service_id}/related", response_model=List[ServicePublic])
def related_services(
    service_id: int,
    limit: int = Query(default=8, ge=1, le=50),
    session: Session = Depends(get_session),
):
    get_service_or_404(session, service_id)

    others = session.exec(
        select(Service)
        .where(Service.id != service_id)
        .where(Service.is_active == True)  # noqa: E712
        .order_by(Service.id.desc())
        .limit(limit)
    ).all()
    return [service_to_public(s) for s in others]


@router.post("", response_model=ServicePublic, status_code=201)
def create_service(
    service: ServiceCreate,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    require_role(current_user, "admin")

    db_service = Service(**service.model_dump())
    session.add(db_service)
    session.commit()
    session.refresh(db_service)
    logger.info("Created service %s (%s)", db_service.id, db_service.name)

    return service_to_public(db_service)


@router.put("/{service_id}", response_model=ServicePublic)
def update_service(
    service_id: int,
    service: ServiceCreate,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    require_role(current_user, "admin")
    db_service = get_service_or_404(session, service_id)

    for field, value in service.model_dump().items():
        setattr(db_service, field, value)

    session.add(db_service)
    session.commit()
    session.refresh(db_service)
    logger.info("Updated service %s", db_service.id)

    return service_to_public(db_service)


@router.delete("/{service_id}", response_model=Message)
def delete_service(
    service_id: int,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    require_role(current_user, "admin")
    db_service = get_service_or_404(session, service_id)

    booked = session.exec(
        select(Booking).where(Booking.service_id == service_id)
    ).first()
    if booked is not None:
        raise HTTPException(status_code=409, detail="Service has bookings; deactivate it instead")

    name = db_service.name
    session.delete(db_service)
    session.commit()
    logger.info("Deleted service %s", service_id)

    return {"success": f"Service {name} has been deleted"}


# gallery

@router.get("/{service_id}/images", response_model=List[ServiceImagePublic])
def list_images(service_id: int, session: Session = Depends(get_session)):
    return ordered_images(get_service_or_404(session, service_id))


@router.post("/{service_id}/images", response_model=ServiceImagePublic, status_code=201)
def add_image(
    service_id: int,
    image: ServiceImageCreate,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    require_role(current_user, "admin")
    db_service = get_service_or_404(session, service_id)

    next_order = max((img.order for img in db_service.images), default=-1) + 1
    db_image = ServiceImage(
        service_id=service_id,
        url=image.url,
        name=image.name,
        size=image.size,
        order=next_order,
    )

    session.add(db_image)
    session.commit()
    session.refresh(db_image)

    return db_image


@router.delete("/{service_id}/images/{image_id}", response_model=Message)
def delete_image(
    service_id: int,
    image_id: int,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    require_role(current_user, "admin")

    db_image = session.get(ServiceImage, image_id)
    if db_image is None or db_image.service_id != service_id:
        raise HTTPException(status_code=404, detail="Image not found")

    session.delete(db_image)
    session.commit()

    return {"success": "Image removed"}


@router.put("/{service_id}/images/order", response_model=List[ServiceImagePublic])
def reorder_images(
    service_id: int,
    body: ImageOrder,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    require_role(current_user, "admin")
    db_service = get_service_or_404(session, service_id)

    by_id = {img.id: img for img in db_service.images}
    if len(body.image_ids) != len(by_id) or set(body.image_ids) != set(by_id):
        raise HTTPException(status_code=422, detail="image_ids must list every image of the service exactly once")

    for position, image_id in enumerate(body.image_ids):
        by_id[image_id].order = position
        session.add(by_id[image_id])
    session.commit()
    session.refresh(db_service)

    return ordered_images(db_service)
