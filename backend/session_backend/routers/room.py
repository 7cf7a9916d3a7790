# session_backend/routers/room.py
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from ..dependencies import get_livekit_service
from ..exceptions import LiveKitConfigError, LiveKitServiceError
from ..services.livekit_service import LiveKitService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Rooms"])


class TokenRequest(BaseModel):
    name: Optional[str] = None
    room: Optional[str] = None
    role: Optional[str] = None  # teacher / student
    className: Optional[str] = None  # teachers only
    topic: Optional[str] = None  # teachers only


class EndRoomRequest(BaseModel):
    roomName: Optional[str] = None


@router.post("/token")
async def create_token(
    request_data: TokenRequest,
    livekit: LiveKitService = Depends(get_livekit_service),
):
    """Issue a LiveKit room-join token"""
    logger.info(f"📥 TOKEN REQUEST: name={request_data.name}, room={request_data.room}, role={request_data.role}")

    if not request_data.name or not request_data.room or not request_data.role:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing name, room, or role"
        )

    try:
        return livekit.create_room_token(
            name=request_data.name,
            room=request_data.room,
            role=request_data.role,
            class_name=request_data.className,
            topic=request_data.topic,
        )
    except LiveKitConfigError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.post("/end-room")
async def end_room(
    request_data: EndRoomRequest,
    livekit: LiveKitService = Depends(get_livekit_service),
):
    """🚪 End the meeting (delete the LiveKit room)"""
    if not request_data.roomName:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="roomName is required"
        )

    try:
        await livekit.delete_room(request_data.roomName)
    except LiveKitServiceError as e:
        logger.error(f"❌ END ROOM ERROR: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to end room"
        )

    return {"success": True, "message": f"Room {request_data.roomName} ended."}
