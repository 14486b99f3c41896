from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campus_portal.core.auth import ensure_self_or_user_manager, get_current_user
from campus_portal.database.deps import get_db
from campus_portal.models.user import User
from campus_portal.routes.auth import build_user_out, is_valid_email
from campus_portal.schemas.user import ProfilePictureUpdate, UserOut, UserRoleOut, UserUpdate

router = APIRouter(prefix='/api/users', tags=['Users'])


def get_user_or_404(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail='User not found')
    return user


@router.get('/role/{user_id}', response_model=UserRoleOut)
def get_user_role(
    user_id: int,
    db: Session = Depends(get_db),
):
    user = get_user_or_404(db, user_id)
    return UserRoleOut(role=user.role)


@router.get('/{user_id}', response_model=UserOut)
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ensure_self_or_user_manager(current_user, user_id)
    return build_user_out(get_user_or_404(db, user_id))


@router.patch('/{user_id}', response_model=UserOut)
def update_user(
    user_id: int,
    payload: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ensure_self_or_user_manager(current_user, user_id)
    user = get_user_or_404(db, user_id)

    # Role and password are not part of UserUpdate, so they never change here.
    data = payload.model_dump(exclude_unset=True)
    if 'email' in data and data['email'] is not None:
        data['email'] = data['email'].strip()
        if not is_valid_email(data['email']):
            raise HTTPException(status_code=400, detail='Invalid email')
    for key, value in data.items():
        if key in {'username', 'full_name'} and value is None:
            continue
        setattr(user, key, value)

    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise HTTPException(status_code=409, detail='Username or email already registered') from exc
    db.refresh(user)
    return build_user_out(user)


@router.patch('/{user_id}/profile-picture', response_model=UserOut)
def update_profile_picture(
    user_id: int,
    payload: ProfilePictureUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ensure_self_or_user_manager(current_user, user_id)
    picture = (payload.profile_picture or '').strip()
    if not picture:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Profile picture is required')
    user = get_user_or_404(db, user_id)
    user.profile_picture = picture
    db.commit()
    db.refresh(user)
    return build_user_out(user)
