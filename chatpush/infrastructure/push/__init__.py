"""Adapters for the push delivery service."""

from .local_delivery import LocalPushDeliveryService
from .sender import (
    FirebasePushSender,
    PushSender,
    SimulatedPushSender,
    build_push_sender,
)

__all__ = [
    "LocalPushDeliveryService",
    "PushSender",
    "SimulatedPushSender",
    "FirebasePushSender",
    "build_push_sender",
]
