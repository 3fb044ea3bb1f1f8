"""
Module 06 - Tree Routes

Build a tree from request items and return its summary or the inclusion
proof of one item. Trees are not stored between requests.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from api.deps import decode_items, get_runtime_config, resolve_encoding
from api.errors import APIError
from api.models.requests import ProofRequest, TreeRequest
from api.models.responses import ProofBody, ProofResponse, TreeResponse
from core.config.runtime import RuntimeConfig
from core.merkle import MerkleTree, build_merkle_tree, decode_item
from core.schemas.errors import CivisException


logger = logging.getLogger(__name__)

router = APIRouter(tags=["tree"])


def _build(request: TreeRequest, config: RuntimeConfig) -> tuple[MerkleTree, str]:
    encoding = resolve_encoding(request.encoding, config)
    items = decode_items(request.items, encoding)
    return build_merkle_tree(items, max_items=config.tree.max_items), encoding


@router.post("/tree", response_model=TreeResponse)
def build_tree(
    request: TreeRequest,
    config: RuntimeConfig = Depends(get_runtime_config),
) -> TreeResponse:
    """
    Build a Merkle tree and return its root label and shape.

    Errors:
        400 EMPTY_INPUT when items is empty, 400 SCHEMA_VALIDATION_ERROR
        when an item does not decode or max_items is exceeded.
    """
    try:
        tree, _ = _build(request, config)
    except CivisException as e:
        raise APIError.from_exception(e)

    logger.info(f"Built tree of {tree.leaf_count} leaves with root {tree.root_label()}")
    return TreeResponse(ok=True, **tree.summary())


@router.post("/proof", response_model=ProofResponse)
def prove_item(
    request: ProofRequest,
    config: RuntimeConfig = Depends(get_runtime_config),
) -> ProofResponse:
    """
    Build a Merkle tree and return the inclusion proof of `item`.

    Errors:
        404 LABEL_NOT_FOUND when the item is not a leaf of the tree.
    """
    try:
        tree, encoding = _build(request, config)
        proof = tree.prove(decode_item(request.item, encoding))
    except CivisException as e:
        raise APIError.from_exception(e)

    data = proof.to_dict()
    return ProofResponse(ok=True, proof=ProofBody(**data))
