"""
JWT utilities for minting LiveKit access tokens
"""
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

import jwt

ALGORITHM = "HS256"


def create_access_token(
    api_key: str,
    api_secret: str,
    grants: Dict,
    identity: Optional[str] = None,
    metadata: Optional[str] = None,
    expires_delta: timedelta = timedelta(hours=6),
) -> str:
    """
    Create a LiveKit access token

    Args:
        api_key: LiveKit API key (token issuer)
        api_secret: LiveKit API secret (signing key)
        grants: Video grant claims, e.g. {"roomJoin": True, "room": "math-101"}
        identity: Participant identity (token subject)
        metadata: Participant metadata string
        expires_delta: Token lifetime

    Returns:
        Encoded JWT token string
    """
    now = datetime.now(timezone.utc)

    to_encode = {
        "iss": api_key,
        "nbf": now,
        "exp": now + expires_delta,
        "video": grants,
    }
    if identity:
        to_encode["sub"] = identity
    if metadata is not None:
        to_encode["metadata"] = metadata

    return jwt.encode(to_encode, api_secret, algorithm=ALGORITHM)
