"""
Module 06 - Verify Route

Verify an inclusion proof against a trusted root label. No tree is needed.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from api.deps import get_runtime_config, resolve_encoding
from api.models.requests import VerifyRequest
from api.models.responses import VerifyResponse
from core.config.runtime import RuntimeConfig
from core.crypto.hashing import hash_bytes
from core.merkle import decode_item, verify
from core.schemas.errors import SchemaValidationException


logger = logging.getLogger(__name__)

router = APIRouter(tags=["verification"])


@router.post("/verify", response_model=VerifyResponse)
def verify_proof(
    request: VerifyRequest,
    config: RuntimeConfig = Depends(get_runtime_config),
) -> VerifyResponse:
    """
    Verify a proof.

    Always answers 200; a malformed item, entry or root label simply
    yields valid=false.
    """
    try:
        item = decode_item(request.item, resolve_encoding(request.encoding, config))
    except SchemaValidationException as e:
        logger.debug(f"Item does not decode: {e}")
        return VerifyResponse(ok=True, valid=False, root_label=request.root_label)

    valid = verify(item, request.entries, request.root_label)
    return VerifyResponse(
        ok=True,
        valid=valid,
        leaf_label=hash_bytes(item),
        root_label=request.root_label,
    )
