# barbershop/services/catalog.py

from fastapi import HTTPException
from sqlmodel import Session

from barbershop.config import settings
from barbershop.models import Service


def get_service_or_404(session: Session, service_id: int) -> Service:
    service = session.get(Service, service_id)
    if service is None:
        raise HTTPException(status_code=404, detail="Service not found")
    return service


def ordered_images(service: Service):
    return sorted(service.images, key=lambda img: (img.order, img.id))


def service_to_public(service: Service) -> dict:
    images = ordered_images(service)
    return {
        "id": service.id,
        "name": service.name,
        "description": service.description,
        "price": service.price,
        "duration": service.duration,
        "category": service.category,
        "is_active": service.is_active,
        "average_rating": service.average_rating,
        "total_ratings": service.total_ratings,
        # first gallery image, or the placeholder until one is uploaded
        "image": images[0].url if images else settings.placeholder_image_url,
        "images": [
            {"id": img.id, "url": img.url, "name": img.name, "size": img.size, "order": img.order}
            for img in images
        ],
    }
