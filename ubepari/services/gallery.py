"""Gallery photo CRUD. No invariants beyond storage."""
from typing import List

from sqlalchemy.orm import Session

from ..data.models import GalleryPhoto
from ..schemas.product_models import GalleryCreate


def list_photos(db: Session) -> List[GalleryPhoto]:
    return db.query(GalleryPhoto).order_by(GalleryPhoto.created_at.desc()).all()


def add_photo(db: Session, data: GalleryCreate) -> GalleryPhoto:
    photo = GalleryPhoto(url=data.url, caption=data.caption)
    db.add(photo)
    db.commit()
    db.refresh(photo)
    return photo


def delete_photo(db: Session, photo_id: str) -> None:
    db.query(GalleryPhoto).filter(GalleryPhoto.id == photo_id).delete()
    db.commit()
