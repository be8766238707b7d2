import logging
from typing import Callable

from fastapi import APIRouter, Depends, Header, HTTPException, Response

from upify.api.v1.schemas import (
    NotificationSchema,
    OrderDetailsRequestSchema,
    PickCategoryRequestSchema,
    PickServiceRequestSchema,
    SessionSnapshotSchema,
    SubmitResponseSchema,
)
from upify.application.exceptions import CatalogLoadError, SessionNotFoundError
from upify.application.ports.session_store import SessionStorePort
from upify.application.use_cases.order_session import OrderSession
from upify.infrastructure.auth.static_credentials import StaticCredentialProvider
from upify.wiring.dependencies import get_session_factory, get_session_store

router = APIRouter()
logger = logging.getLogger(__name__)


def _get_session(session_id: str, store: SessionStorePort) -> OrderSession:
    try:
        return store.get(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Session not found")


@router.post("", status_code=201, response_model=SessionSnapshotSchema)
def create_session(
    store: SessionStorePort = Depends(get_session_store),
    session_factory: Callable[[], OrderSession] = Depends(get_session_factory),
):
    try:
        session = session_factory()
    except ValueError as e:
        logger.error("Cannot create order session", extra={"reason": str(e)})
        raise HTTPException(status_code=500, detail=str(e))

    store.add(session)
    session.load_catalog()
    return SessionSnapshotSchema.from_session(session)


@router.get("/{session_id}", response_model=SessionSnapshotSchema)
def get_session(session_id: str, store: SessionStorePort = Depends(get_session_store)):
    return SessionSnapshotSchema.from_session(_get_session(session_id, store))


@router.post("/{session_id}/category", response_model=SessionSnapshotSchema)
def pick_category(
    session_id: str,
    req: PickCategoryRequestSchema,
    store: SessionStorePort = Depends(get_session_store),
):
    session = _get_session(session_id, store)
    try:
        session.pick_category(req.key)
    except CatalogLoadError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return SessionSnapshotSchema.from_session(session)


@router.post("/{session_id}/service", response_model=SessionSnapshotSchema)
def pick_service(
    session_id: str,
    req: PickServiceRequestSchema,
    store: SessionStorePort = Depends(get_session_store),
):
    session = _get_session(session_id, store)
    try:
        session.pick_service(req.service_id)
    except CatalogLoadError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return SessionSnapshotSchema.from_session(session)


@router.patch("/{session_id}/details", response_model=SessionSnapshotSchema)
def update_details(
    session_id: str,
    req: OrderDetailsRequestSchema,
    store: SessionStorePort = Depends(get_session_store),
):
    session = _get_session(session_id, store)
    try:
        if req.link is not None:
            session.set_link(req.link)
        if req.quantity is not None:
            session.set_quantity(req.quantity)
        if req.acknowledged is not None:
            session.set_acknowledged(req.acknowledged)
    except CatalogLoadError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return SessionSnapshotSchema.from_session(session)


@router.post("/{session_id}/submit", response_model=SubmitResponseSchema)
def submit_order(
    session_id: str,
    authorization: str | None = Header(None),
    store: SessionStorePort = Depends(get_session_store),
):
    session = _get_session(session_id, store)
    credentials = StaticCredentialProvider.from_authorization_header(authorization)
    try:
        outcome = session.submit(credentials)
    except CatalogLoadError as e:
        raise HTTPException(status_code=409, detail=str(e))

    logger.info("Submission finished", extra={"session_id": session_id, "status": outcome.status.value})
    return SubmitResponseSchema(
        status=outcome.status.value,
        notification=NotificationSchema.from_notification(outcome.notification),
        snapshot=SessionSnapshotSchema.from_session(session),
    )


@router.delete("/{session_id}", status_code=204)
def abandon_session(session_id: str, store: SessionStorePort = Depends(get_session_store)) -> Response:
    if store.remove(session_id) is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return Response(status_code=204)
