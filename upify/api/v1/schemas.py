from decimal import Decimal

from pydantic import BaseModel, Field

from upify.application import messages
from upify.application.use_cases.order_session import OrderSession
from upify.domain.entities.notification import Notification
from upify.domain.entities.selection import Selection
from upify.domain.entities.service_record import ServiceRecord


class CategorySchema(BaseModel):
    key: str
    label: str
    badge: str | None = None
    service_count: int = 0


class ServiceSchema(BaseModel):
    """Customer-safe view of a service: no provider rate."""

    service_id: str
    display_name: str
    description: str
    min: float | int | str | None = None
    max: float | int | str | None = None

    @classmethod
    def from_record(cls, record: ServiceRecord) -> "ServiceSchema":
        return cls(
            service_id=str(record.provider_service_id),
            display_name=record.display_name,
            description=record.description or messages.NO_DESCRIPTION,
            min=record.min,
            max=record.max,
        )


class SelectionSchema(BaseModel):
    category: str = ""
    service_id: str | None = None
    link: str = ""
    quantity: int = 0
    acknowledged: bool = False

    @classmethod
    def from_selection(cls, selection: Selection) -> "SelectionSchema":
        return cls(
            category=selection.category,
            service_id=selection.service_id,
            link=selection.link,
            quantity=selection.quantity,
            acknowledged=selection.acknowledged,
        )


class NotificationSchema(BaseModel):
    kind: str = ""
    text: str = ""

    @classmethod
    def from_notification(cls, notification: Notification) -> "NotificationSchema":
        return cls(kind=notification.kind, text=notification.text)


class SessionSnapshotSchema(BaseModel):
    session_id: str
    loading: bool = False
    load_error: str = ""
    categories: list[CategorySchema] = Field(default_factory=list)
    services: list[ServiceSchema] = Field(default_factory=list)
    selection: SelectionSchema
    active_service: ServiceSchema | None = None
    price: Decimal | None = None
    notification: NotificationSchema

    @classmethod
    def from_session(cls, session: OrderSession) -> "SessionSnapshotSchema":
        index = session.index
        active = session.active_service()
        return cls(
            session_id=session.session_id or "",
            loading=session.loading,
            load_error=session.load_error,
            categories=[
                CategorySchema(
                    key=entry.key,
                    label=entry.label,
                    badge=entry.badge,
                    service_count=index.count_for(entry.key),
                )
                for entry in index.categories
            ],
            services=[ServiceSchema.from_record(r) for r in session.services_in_selected_category()],
            selection=SelectionSchema.from_selection(session.selection),
            active_service=ServiceSchema.from_record(active) if active else None,
            price=session.price(),
            notification=NotificationSchema.from_notification(session.notifier.current),
        )


class PickCategoryRequestSchema(BaseModel):
    key: str


class PickServiceRequestSchema(BaseModel):
    service_id: str | int


class OrderDetailsRequestSchema(BaseModel):
    link: str | None = None
    quantity: float | int | str | None = None
    acknowledged: bool | None = None


class SubmitResponseSchema(BaseModel):
    status: str
    notification: NotificationSchema
    snapshot: SessionSnapshotSchema


class SignInRequestSchema(BaseModel):
    email: str
    password: str


class SignInResponseSchema(BaseModel):
    access_token: str
    token_type: str = "bearer"
