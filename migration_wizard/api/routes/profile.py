"""User profile endpoints."""

from fastapi import APIRouter, Depends

from ..models import UserProfileUpdate
from ..deps import get_tracker
from ...tracker import MigrationTracker
from ...models.project import UserProfile

router = APIRouter()


@router.get("")
async def get_profile(tracker: MigrationTracker = Depends(get_tracker)):
    return tracker.user_profile.to_dict()


@router.put("")
async def sign_in(data: UserProfileUpdate, tracker: MigrationTracker = Depends(get_tracker)):
    """Set the signed-in user's profile."""
    profile = UserProfile(**data.model_dump(), authenticated=True)
    tracker.set_user_profile(profile)
    return profile.to_dict()


@router.delete("")
async def sign_out(tracker: MigrationTracker = Depends(get_tracker)):
    """Reset the profile to the anonymous default."""
    tracker.clear_user_profile()
    return tracker.user_profile.to_dict()
