import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from campus_portal.core.auth import get_current_user, require_permission
from campus_portal.database.deps import get_db
from campus_portal.models.material import Material
from campus_portal.models.user import User
from campus_portal.schemas.material import MaterialCreate, MaterialOut
from campus_portal.services.date_windows import utc_now
from campus_portal.services.notifications import notify

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/materials", tags=["Materials"])
get_materials_manager = require_permission("materials.manage")
RECENT_MATERIALS_LIMIT = 5


def materials_newest_first(db: Session):
    return db.query(Material).order_by(Material.created_at.desc(), Material.id.desc())


@router.get("/", response_model=list[MaterialOut])
def list_materials(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return materials_newest_first(db).all()


@router.get("/recent", response_model=list[MaterialOut])
def list_recent_materials(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return materials_newest_first(db).limit(RECENT_MATERIALS_LIMIT).all()


@router.post("/", response_model=MaterialOut, status_code=status.HTTP_201_CREATED)
def create_material(
    payload: MaterialCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_materials_manager)
):
    material = Material(
        title=payload.title.strip(),
        description=payload.description,
        file_url=payload.file_url.strip(),
        file_type=payload.file_type.strip().lower(),
        file_size=payload.file_size,
        target_group=payload.target_group,
        author_id=current_user.id,
        created_at=utc_now(),
    )
    db.add(material)
    db.flush()
    notify(
        db,
        type="material",
        title="New study material",
        message=material.title,
        link="/student/materials",
        item_id=material.id,
    )
    db.commit()
    db.refresh(material)
    logger.info("Material %s uploaded by user %s", material.id, current_user.id)
    return material


@router.delete("/{material_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_material(
    material_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_materials_manager)
):
    material = db.query(Material).filter(Material.id == material_id).first()
    if not material:
        raise HTTPException(status_code=404, detail="Material not found")
    db.delete(material)
    db.commit()
    return None
