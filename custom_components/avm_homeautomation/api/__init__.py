"""Client library for the AVM Home Automation HTTP interface."""
from .auth import DEFAULT_HOST, HomeAutomationAuth, compute_response
from .base_api import (
    Command,
    HomeAutomationApiError,
    HomeAutomationAuthError,
    HomeAutomationConnectionError,
    HomeAutomationError,
    HomeAutomationInvalidCredentialsError,
    HomeAutomationNotConnectedError,
    HomeAutomationServerError,
    HomeAutomationValidationError,
    UnrecognizedValueError,
)
from .client import HomeAutomationClient
from .codec import BlindTarget, HkrSentinel, OnOff
from .models import Device, DeviceList, Functions, MetaData, MetaDataType

__all__ = [
    "BlindTarget",
    "Command",
    "DEFAULT_HOST",
    "Device",
    "DeviceList",
    "Functions",
    "HkrSentinel",
    "HomeAutomationApiError",
    "HomeAutomationAuth",
    "HomeAutomationAuthError",
    "HomeAutomationClient",
    "HomeAutomationConnectionError",
    "HomeAutomationError",
    "HomeAutomationInvalidCredentialsError",
    "HomeAutomationNotConnectedError",
    "HomeAutomationServerError",
    "HomeAutomationValidationError",
    "MetaData",
    "MetaDataType",
    "OnOff",
    "UnrecognizedValueError",
    "compute_response",
]
