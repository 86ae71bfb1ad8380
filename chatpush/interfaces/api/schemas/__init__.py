from .device import (
    DeviceListResponse,
    DeviceRead,
    DeviceRegisterRequest,
    DeviceRegisterResponse,
)
from .notification import (
    CallSimulationRequest,
    CallSimulationResponse,
    DisplayNotificationRead,
    NotificationHistoryClearResponse,
    NotificationHistoryResponse,
    NotificationSendRequest,
    NotificationSendResponse,
    PushResponseRead,
    SentNotificationRead,
    TopicNotificationSendRequest,
    TopicNotificationSendResponse,
)
from .service import HealthRead, ServiceInfo, ServiceTestRead

__all__ = [
    "CallSimulationRequest",
    "CallSimulationResponse",
    "DeviceListResponse",
    "DeviceRead",
    "DeviceRegisterRequest",
    "DeviceRegisterResponse",
    "DisplayNotificationRead",
    "HealthRead",
    "NotificationHistoryClearResponse",
    "NotificationHistoryResponse",
    "NotificationSendRequest",
    "NotificationSendResponse",
    "PushResponseRead",
    "SentNotificationRead",
    "ServiceInfo",
    "ServiceTestRead",
    "TopicNotificationSendRequest",
    "TopicNotificationSendResponse",
]
