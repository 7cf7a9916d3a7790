# session_backend/services/livekit_service.py
import json
import logging
from datetime import timedelta
from typing import Dict, Optional

import httpx

from ..config import Settings, get_settings
from ..exceptions import LiveKitConfigError, LiveKitServiceError
from ..utils.jwt_utils import create_access_token

logger = logging.getLogger(__name__)


def livekit_http_url(url: str) -> str:
    """LiveKit URLs are usually given as ws(s)://; the server API wants http(s)://"""
    if url.startswith("wss://"):
        return "https://" + url[len("wss://"):]
    if url.startswith("ws://"):
        return "http://" + url[len("ws://"):]
    return url


class LiveKitService:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        self.transport = transport

    def _require_config(self) -> None:
        if not self.settings.livekit_configured:
            raise LiveKitConfigError("LiveKit ENV variables missing")

    def create_room_token(
        self,
        name: str,
        room: str,
        role: str,
        class_name: Optional[str] = None,
        topic: Optional[str] = None,
    ) -> Dict[str, str]:
        """
        Mint a room-join token for a participant.

        Participant metadata carries the role, plus className and topic when
        given (teachers send these).

        Returns:
            {"token": jwt, "url": LiveKit URL}
        """
        self._require_config()

        metadata = {"role": role}
        if class_name:
            metadata["className"] = class_name
        if topic:
            metadata["topic"] = topic

        token = create_access_token(
            self.settings.livekit_api_key,
            self.settings.livekit_api_secret,
            grants={
                "roomJoin": True,
                "room": room,
                "canPublish": True,
                "canSubscribe": True,
                "canUpdateOwnMetadata": True,
            },
            identity=name,
            metadata=json.dumps(metadata),
            expires_delta=timedelta(hours=self.settings.livekit_token_ttl_hours),
        )

        extra = "".join([
            f" CLASS: {class_name}" if class_name else "",
            f" TOPIC: {topic}" if topic else "",
        ])
        logger.info(f"✅ TOKEN GENERATED for: {name} ROLE: {role}{extra}")

        return {"token": token, "url": self.settings.livekit_url}

    async def delete_room(self, room_name: str) -> None:
        """Close a room and disconnect everyone in it."""
        self._require_config()

        admin_token = create_access_token(
            self.settings.livekit_api_key,
            self.settings.livekit_api_secret,
            grants={"roomCreate": True},
            expires_delta=timedelta(minutes=10),
        )

        try:
            async with httpx.AsyncClient(
                base_url=livekit_http_url(self.settings.livekit_url),
                transport=self.transport,
            ) as client:
                resp = await client.post(
                    "/twirp/livekit.RoomService/DeleteRoom",
                    headers={
                        "Authorization": f"Bearer {admin_token}",
                        "Content-Type": "application/json",
                    },
                    json={"room": room_name},
                )
        except httpx.HTTPError as e:
            raise LiveKitServiceError(f"Failed to delete LiveKit room: {e}") from e

        if resp.status_code != 200:
            raise LiveKitServiceError(f"Failed to delete LiveKit room: {resp.text}")

        logger.info(f"🗑️ Room {room_name} has been ended by teacher.")
